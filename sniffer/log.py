#
# Copyright 2017 Sangoma Technologies Inc.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
import sys
import colorlog
import logging
import logging.config


DATEFMT = '%b %d %H:%M:%S'
FORMAT = "%(asctime)s [%(levelname)s] %(name)s %(filename)s:"\
    "%(lineno)d : %(message)s"

LEVELS = ['critical', 'error', 'warning', 'info', 'debug']


def configure(level='info', logfile=None, stream=None):
    """Configure the root logger for the ``dhcpsniff`` application.

    Messages go to ``stream`` (stderr by default), colored when it is a
    tty, and additionally to ``logfile`` when one is given.
    """
    stream = stream or sys.stderr
    isatty = hasattr(stream, 'isatty') and stream.isatty()
    handlers = {
        'stream': {
            'class': 'logging.StreamHandler',
            'formatter': 'colored' if isatty else 'default',
            'stream': stream,
        },
    }
    if logfile:
        handlers['file'] = {
            'class': 'logging.FileHandler',
            'formatter': 'default',
            'filename': str(logfile)
        }

    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'handlers': handlers,
        'formatters': {
            'default': {
                'format': FORMAT,
                'datefmt': DATEFMT
            },
            'colored': {
                '()': colorlog.ColoredFormatter,
                'format': "%(log_color)s" + FORMAT,
                'datefmt': DATEFMT,
                'log_colors': {
                    'CRITICAL': 'bold_red',
                    'ERROR': 'red',
                    'WARNING': 'purple',
                    'INFO': 'green',
                    'DEBUG': 'yellow'
                }
            }
        },
        'loggers': {
            '': {
                'handlers': list(handlers),
                'level': getattr(logging, level.upper()),
                'propagate': True
            },
            'stevedore': {
                'level': 'WARNING',
            },
        }
    })


def verbosity_to_level(verbose_level):
    """Map cliff's -q/-v count (0 quiet, 1 default) onto a level name."""
    index = min(max(verbose_level, 0) + 2, len(LEVELS) - 1)
    return LEVELS[index]

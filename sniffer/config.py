#
# Copyright 2017 Sangoma Technologies Inc.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
"""
Config file management
"""
import py.path
import yaml


CONFIG_NAME = 'dhcpsniff.yaml'

DEFAULTS = {
    'address': '0.0.0.0',
    'port': 67,
    'bufsize': 2048,
    'loglevel': 'info',
    'logfile': None,
    'dump': False,
}


def load_yaml_config():
    """Load data from the file dhcpsniff.yaml.

    Start looking in the PWD and return the first file found by successive
    upward steps in the file system.
    """
    path = py.path.local()
    for basename in path.parts(reverse=True):
        configfile = basename.join(CONFIG_NAME)
        if configfile.check():
            return yaml.safe_load(configfile.read()) or {}
    return {}


def get_settings(**overrides):
    """Merge defaults, the discovered config file and ``overrides``.

    Overrides which are ``None`` are ignored so unset command line
    options fall through to the file and then the defaults.
    """
    settings = dict(DEFAULTS)
    settings.update(load_yaml_config())
    settings.update((key, value) for key, value in overrides.items()
                    if value is not None)
    return settings

#
# Copyright 2017 Sangoma Technologies Inc.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
import sys
from cliff.app import App
from cliff.commandmanager import CommandManager
from sniffer import VERSION, log
from sniffer.config import get_settings
from sniffer.app.commands import Listen, Decode


class SnifferApp(App):
    def __init__(self, **kwargs):
        self.settings = None
        command_manager = CommandManager('dhcpsniff')
        command_manager.add_command('listen', Listen)
        command_manager.add_command('decode', Decode)
        super(SnifferApp, self).__init__(
            description='Print every DHCP request and response seen on '
                        'the server port',
            version=VERSION,
            command_manager=command_manager,
            deferred_help=True,
            **kwargs
        )

    def configure_logging(self):
        # runs ahead of initialize_app, the log settings live in the file
        self.settings = get_settings()
        if self.options.verbose_level == 1:
            level = self.settings['loglevel']
        else:
            level = log.verbosity_to_level(self.options.verbose_level)
        log.configure(level=level,
                      logfile=self.options.log_file or
                      self.settings['logfile'],
                      stream=self.stderr)


def main(argv=sys.argv[1:]):
    myapp = SnifferApp()
    return myapp.run(argv)


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))

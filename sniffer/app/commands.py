#
# Copyright 2017 Sangoma Technologies Inc.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
import binascii
import logging
from cliff.command import Command
import bootp
from bootp import dhcp4
from sniffer.listener import DHCPListener


def render(packet, dump=False):
    return packet.dump() if dump else str(packet)


class Listen(Command):
    "print every datagram received on the DHCP server port"
    log = logging.getLogger(__name__)

    def get_parser(self, prog_name):
        parser = super(Listen, self).get_parser(prog_name)
        parser.add_argument('--address', type=str,
                            help='local address to bind (default 0.0.0.0)')
        parser.add_argument('--port', type=int,
                            help='UDP port to bind (default 67)')
        parser.add_argument('--bufsize', type=int,
                            help='receive buffer size in bytes')
        parser.add_argument('--dump', action='store_true', default=None,
                            help='print every header field and option')
        return parser

    def take_action(self, parsed_args):
        settings = dict(self.app.settings)
        settings.update((key, getattr(parsed_args, key))
                        for key in ('address', 'port', 'bufsize', 'dump')
                        if getattr(parsed_args, key) is not None)

        with DHCPListener(settings['address'], settings['port'],
                          settings['bufsize']) as listener:
            try:
                for src, packet in listener.packets():
                    self.log.debug("Packet from {}:{}".format(*src))
                    self.app.stdout.write(
                        render(packet, settings['dump']) + '\n\n')
                    self.app.stdout.flush()
            except KeyboardInterrupt:
                self.log.info("Interrupted, shutting down")


class Decode(Command):
    "decode a single datagram stored in a file"
    log = logging.getLogger(__name__)

    def get_parser(self, prog_name):
        parser = super(Decode, self).get_parser(prog_name)
        parser.add_argument('path', type=str,
                            help='file holding one UDP payload')
        parser.add_argument('--hex', action='store_true',
                            help='the file holds hex text, whitespace is '
                                 'ignored')
        parser.add_argument('--dump', action='store_true',
                            help='print every header field and option')
        return parser

    def take_action(self, parsed_args):
        with open(parsed_args.path, 'rb') as f:
            payload = f.read()

        if parsed_args.hex:
            try:
                payload = binascii.unhexlify(b''.join(payload.split()))
            except (binascii.Error, TypeError) as e:
                self.log.error("{} is not valid hex: {}".format(
                    parsed_args.path, e))
                return 2

        try:
            packet = dhcp4.decode(payload)
        except bootp.ParseError as e:
            self.log.error("Failed to decode {}: {} {}".format(
                parsed_args.path, type(e).__name__, e))
            return 1

        self.app.stdout.write(render(packet, parsed_args.dump) + '\n')
        return 0

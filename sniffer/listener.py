#
# Copyright 2017 Sangoma Technologies Inc.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.
import errno
import select
import socket
import logging
import threading
import bootp
from bootp import dhcp4


logger = logging.getLogger(__name__)


class DHCPListener(object):
    """Receive and decode every datagram sent to the DHCP server port.

    Nothing is ever sent back. Datagrams which fail to decode are logged
    and dropped.
    """
    def __init__(self, address='0.0.0.0', port=67, bufsize=2048,
                 interval=1.0):
        self.bufsize = bufsize
        self.interval = interval
        self.poll = select.epoll()
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
        self.sock.setblocking(0)
        self.sock.bind((address, port))
        self.poll.register(self.sock, select.POLLIN | select.POLLPRI |
                           select.POLLHUP | select.POLLERR)
        self._stop_event = threading.Event()
        logger.info('Listening for DHCP traffic on {}:{}...'.format(
            *self.address))

    @property
    def address(self):
        return self.sock.getsockname()

    def recv_all(self):
        """Drain the socket, yielding ``(source, packet)`` pairs."""
        while True:
            try:
                payload, src = self.sock.recvfrom(self.bufsize)
            except socket.error as e:
                if e.errno not in (errno.EAGAIN, errno.EWOULDBLOCK):
                    raise e
                return

            logger.debug('Received {} bytes from {}:{}'.format(
                len(payload), *src))
            try:
                packet = dhcp4.decode(payload)
            except bootp.ParseError as e:
                logger.warning('Dropping datagram from {}:{}: {} {}'.format(
                    src[0], src[1], type(e).__name__, e))
                continue

            yield src, packet

    def packets(self):
        """Yield decoded packets until ``close()`` is called."""
        while not self._stop_event.is_set():
            for fd, _ in self.poll.poll(self.interval):
                assert fd == self.sock.fileno()
                for item in self.recv_all():
                    yield item
                    if self._stop_event.is_set():
                        return

    def stop(self):
        self._stop_event.set()

    def close(self):
        self.stop()
        if self.sock.fileno() >= 0:
            self.poll.close()
            self.sock.close()
            logger.debug('Listener closed')

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

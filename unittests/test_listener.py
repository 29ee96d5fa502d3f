import select
import socket
import contextlib
import pytest
from bootp.dhcp4 import DHCPMessage
from sniffer.listener import DHCPListener


pytestmark = pytest.mark.skipif(not hasattr(select, 'epoll'),
                                reason='epoll is linux only')


@pytest.fixture
def listener():
    with DHCPListener('127.0.0.1', 0, interval=0.1) as listener:
        yield listener


@pytest.fixture
def sender():
    with contextlib.closing(
            socket.socket(socket.AF_INET, socket.SOCK_DGRAM)) as sock:
        sock.bind(('127.0.0.1', 0))
        yield sock


def test_listener_decodes(listener, sender, discover):
    sender.sendto(discover, listener.address)
    src, packet = next(listener.packets())
    assert src == sender.getsockname()
    assert packet.message_type is DHCPMessage.Discover


def test_listener_drops_malformed(listener, sender, discover, caplog):
    sender.sendto(b'\x07' + discover[1:], listener.address)
    sender.sendto(discover, listener.address)
    src, packet = next(listener.packets())
    assert packet.hostname == u'myhost'
    assert 'InvalidOpcode' in caplog.text


def test_listener_stop(listener):
    listener.stop()
    assert list(listener.packets()) == []

import struct
import pytest
from bootp.dhcp4 import COOKIE


HEADER = struct.Struct('!BBBBIHH4s4s4s4s6s10s192x4s')

CHADDR = b'\xaa\xbb\xcc\xdd\xee\xff'
XID = 0x3903f326


def build_header(op=1, htype=1, hlen=6, hops=0, xid=XID, secs=0, flags=0,
                 ciaddr=b'\x00' * 4, yiaddr=b'\x00' * 4,
                 siaddr=b'\x00' * 4, giaddr=b'\x00' * 4, chaddr=CHADDR,
                 chaddr_pad=b'\x00' * 10, cookie=COOKIE):
    return HEADER.pack(op, htype, hlen, hops, xid, secs, flags, ciaddr,
                       yiaddr, siaddr, giaddr, chaddr, chaddr_pad, cookie)


def build_option(code, payload=b''):
    return bytes(bytearray([code, len(payload)])) + bytes(payload)


@pytest.fixture
def option():
    """Encode a single TLV option"""
    return build_option


@pytest.fixture
def make_packet():
    """Build a datagram from header field overrides followed by raw
    option bytes"""
    def make(*options, **fields):
        return build_header(**fields) + b''.join(options)
    return make


@pytest.fixture
def discover(make_packet, option):
    """A typical DHCPDISCOVER as sent by a Linux client"""
    return make_packet(
        option(53, b'\x01'),
        option(61, b'\x01' + CHADDR),
        option(57, b'\x05\xc0'),
        option(60, b'dhcpcd-9.4.1'),
        option(12, b'myhost'),
        option(55, b'\x01\x03\x06\x0f\x1a\x1c\x33\x3a\x3b\x77'),
        b'\xff',
        flags=0x8000,
    )

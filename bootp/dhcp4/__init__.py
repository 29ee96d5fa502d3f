import enum
import types
import datetime
import collections
from ..msg import (msg, Cursor, BadMagicCookie, InvalidOpcode,
                   UnsupportedHardwareType)
from .options import (DHCPOption, DHCPMessage, NonceAlgorithm, Other,
                      OptionValue, from_code, decode_option, decode_options)


COOKIE = b'c\x82Sc'  # [0x63, 0x82, 0x53, 0x63])


class DHCPOpCode(enum.IntEnum):
    BootRequest = 1
    BootReply = 2


class HardwareType(enum.IntEnum):
    Ethernet = 1


def _opcode(value):
    try:
        return DHCPOpCode(value)
    except ValueError:
        raise InvalidOpcode('unknown opcode {}'.format(value))


def _htype(value):
    try:
        return HardwareType(value)
    except ValueError:
        raise UnsupportedHardwareType(
            'unsupported hardware type {}'.format(value))


def _cookie(value):
    if value != COOKIE:
        raise BadMagicCookie('bad magic cookie {}'.format(value.hex()))
    return value


class bootphdr(msg):
    """BOOTP fixed header (RFC 951) and the DHCP magic cookie."""
    fields = (
        ('opcode', {'format': 'B', 'decode': _opcode}),  # 0
        ('htype', {'format': 'B', 'decode': _htype}),  # 1
        ('hlen', 'uint8'),  # 2
        ('hops', 'uint8'),  # 3
        ('xid', 'be32'),  # 4:8
        ('secs', {'format': '!H',
                  'decode': lambda x: datetime.timedelta(seconds=x)}),  # 8:10
        ('broadcast', 'flags'),  # 10:12
        ('ciaddr', 'ip4addr'),  # 12:16
        ('yiaddr', 'ip4addr'),  # 16:20
        ('siaddr', 'ip4addr'),  # 20:24
        ('giaddr', 'ip4addr'),  # 24:28
        ('chaddr', 'l2addr'),  # 28:34
        (None, '10x'),  # 34:44 chaddr padding
        (None, '192x'),  # 44:236 sname, file
        ('cookie', {'format': '4s', 'decode': _cookie}),  # 236:240
    )


class DHCPPacket(collections.namedtuple('DHCPPacket', [
        'opcode', 'htype', 'hlen', 'hops', 'xid', 'secs', 'broadcast',
        'ciaddr', 'yiaddr', 'siaddr', 'giaddr', 'chaddr', 'options'])):
    """A decoded DHCPv4 datagram.

    Address fields are ``None`` when zero on the wire. ``options`` is a
    read-only mapping of option identifier to ``OptionValue`` which never
    holds Pad or End.
    """
    __slots__ = ()

    @classmethod
    def parse(cls, payload):
        cursor = Cursor(payload)
        header = bootphdr.parse(cursor)
        del header['cookie']
        options = decode_options(cursor)
        return cls(options=types.MappingProxyType(options), **header)

    def get(self, option):
        value = self.options.get(option)
        return value.value if value is not None else None

    @property
    def message_type(self):
        return self.get(DHCPOption.MessageType)

    @property
    def hostname(self):
        return self.get(DHCPOption.HostName)

    @property
    def subnet_mask(self):
        return self.get(DHCPOption.SubnetMask)

    def _describe(self, option, missing):
        value = self.options.get(option)
        return str(value) if value is not None else missing

    def __str__(self):
        return '\n'.join([
            'Message Type: {}'.format(
                self._describe(DHCPOption.MessageType,
                               'Message type missing')),
            'Host name: {}'.format(
                self._describe(DHCPOption.HostName, 'No hostname')),
            'Subnet mask: {}'.format(
                self._describe(DHCPOption.SubnetMask, 'No subnet mask')),
            'xid: {:x}'.format(self.xid),
        ])

    def dump(self):
        """Render every header field and option, one per line."""
        def addr(value):
            return '-' if value is None else str(value)

        lines = [
            'op: {}'.format(self.opcode.name),
            'htype: {}'.format(self.htype.name),
            'hlen: {}'.format(self.hlen),
            'hops: {}'.format(self.hops),
            'xid: {:x}'.format(self.xid),
            'secs: {}'.format(int(self.secs.total_seconds())),
            'broadcast: {}'.format(self.broadcast),
            'ciaddr: {}'.format(addr(self.ciaddr)),
            'yiaddr: {}'.format(addr(self.yiaddr)),
            'siaddr: {}'.format(addr(self.siaddr)),
            'giaddr: {}'.format(addr(self.giaddr)),
            'chaddr: {}'.format(self.chaddr),
        ]
        for option in sorted(self.options, key=int):
            lines.append('{}: {}'.format(str(option),
                                         self.options[option]))
        return '\n'.join(lines)


def decode(payload):
    """Decode one raw UDP payload into a ``DHCPPacket``.

    Raises a ``bootp.ParseError`` subclass on the first malformed field.
    """
    return DHCPPacket.parse(payload)

import struct
from ipaddress import IPv4Address
from .utils import HWAddress


class ParseError(RuntimeError):
    """Failed to unpack structure."""

    def __init__(self, message, offset=None, option=None):
        super(ParseError, self).__init__(message)
        self.offset = offset
        self.option = option

    def __str__(self):
        msg = super(ParseError, self).__str__()
        if self.option is not None:
            msg = '{}: {}'.format(str(self.option), msg)
        if self.offset is not None:
            msg = '{} (at offset {})'.format(msg, self.offset)
        return msg


class Truncated(ParseError):
    """Buffer ended before a field or option was complete."""


class BadMagicCookie(ParseError):
    pass


class InvalidOpcode(ParseError):
    pass


class UnsupportedHardwareType(ParseError):
    pass


class InvalidFlags(ParseError):
    pass


class InvalidOptionLength(ParseError):
    pass


class InvalidMessageType(ParseError):
    pass


class InvalidOptionValue(ParseError):
    pass


class InvalidEncoding(ParseError):
    pass


class Cursor(object):
    """A read position over an immutable byte buffer.

    Every read either returns the requested value and advances, or
    raises ``Truncated`` and leaves the position untouched.
    """
    def __init__(self, buf, offset=0):
        self.buf = memoryview(buf)
        self.offset = offset

    @property
    def remaining(self):
        return len(self.buf) - self.offset

    def __bool__(self):
        return self.remaining > 0

    def take(self, size):
        if size > self.remaining:
            raise Truncated(
                'need {} bytes, {} left'.format(size, self.remaining),
                offset=self.offset)
        data = self.buf[self.offset:self.offset + size].tobytes()
        self.offset += size
        return data

    def unpack(self, fmt):
        size = struct.calcsize(fmt)
        value = struct.unpack(fmt, self.take(size))
        if len(value) == 1:
            value = value[0]
        return value

    def be_u8(self):
        return self.unpack('!B')

    def be_u16(self):
        return self.unpack('!H')

    def be_u32(self):
        return self.unpack('!I')

    def ipv4_or_absent(self):
        return ipv4_or_absent(self.take(4))

    def mac_address(self):
        return HWAddress(self.take(6))

    def flags(self):
        offset = self.offset
        return broadcast_flag(self.be_u16(), offset)


def ipv4_or_absent(data):
    if data == b'\x00' * 4:
        return None
    return IPv4Address(data)


def broadcast_flag(value, offset=None):
    if value == 0x8000:
        return True
    elif value == 0x0000:
        return False
    raise InvalidFlags('unexpected flags {:#06x}'.format(value),
                       offset=offset)


TYPES = {
    'uint8': 'B',
    'be32': '!I',
    'ip4addr': {
        'format': '4s',
        'decode': ipv4_or_absent,
    },
    'l2addr': {
        'format': '6s',
        'decode': HWAddress,
    },
    'flags': {
        'format': '!H',
        'decode': broadcast_flag,
    },
}


class msg(dict):
    """A fixed layout structure decoded field by field.

    ``fields`` is a sequence of ``(name, type)`` pairs where type is a key
    of ``TYPES``, a dict with ``format``/``decode`` entries or a plain
    struct format. Fields named ``None`` are consumed but not stored.
    """
    fields = ()

    @classmethod
    def parse(cls, cursor):
        self = cls()
        self._decode(cursor)
        return self

    @classmethod
    def size(cls):
        return sum(struct.calcsize(cls._get_routine(sfmt)[0])
                   for _, sfmt in cls.fields)

    @staticmethod
    def _get_routine(fmt):
        if not isinstance(fmt, dict):
            fmt = TYPES.get(fmt, fmt)
        if isinstance(fmt, dict):
            return (fmt['format'], fmt.get('decode', lambda x: x))
        else:
            return (fmt, lambda x: x)

    def _decode(self, cursor):
        for name, sfmt in self.fields:
            fmt, routine = self._get_routine(sfmt)
            offset = cursor.offset
            value = cursor.unpack(fmt)
            if name is None:
                continue
            try:
                self[name] = routine(value)
            except ParseError as e:
                if e.offset is None:
                    e.offset = offset
                raise

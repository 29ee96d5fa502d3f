import enum
import struct
import datetime
import collections
from ipaddress import IPv4Address
from ..msg import (ParseError, InvalidOptionLength, InvalidMessageType,
                   InvalidOptionValue, InvalidEncoding)


# RFC 2132 9.10: smallest datagram every host must be able to reassemble
MIN_MAX_MESSAGE_SIZE = 576


class DHCPOption(enum.IntEnum):
    Pad = 0
    SubnetMask = 1
    Router = 3
    DNSServer = 6
    HostName = 12
    DomainName = 15
    InterfaceMTU = 26
    BroadcastAddress = 28
    LeaseTime = 51
    MessageType = 53
    ServerIdentifier = 54
    ParameterRequestList = 55
    MaximumMessageSize = 57
    RenewalInterval = 58
    RebindingInterval = 59
    VendorClassIdentifier = 60
    ClientIdentifier = 61
    RapidCommit = 80
    DomainSearch = 119
    ForceRenewNonceCapable = 145
    End = 255

    @property
    def code(self):
        return int(self)

    def __str__(self):
        return _option_names.get(self, self.name)


_option_names = {
    DHCPOption.SubnetMask: 'Subnet Mask',
    DHCPOption.DNSServer: 'DNS Server',
    DHCPOption.HostName: 'Host Name',
    DHCPOption.DomainName: 'Domain Name',
    DHCPOption.InterfaceMTU: 'Interface MTU',
    DHCPOption.BroadcastAddress: 'Broadcast Address',
    DHCPOption.LeaseTime: 'Lease Time',
    DHCPOption.MessageType: 'Message Type',
    DHCPOption.ServerIdentifier: 'Server ID',
    DHCPOption.ParameterRequestList: 'Parameter Request List',
    DHCPOption.MaximumMessageSize: 'Maximum Message Size',
    DHCPOption.RenewalInterval: 'Renewal Interval',
    DHCPOption.RebindingInterval: 'Rebinding Interval',
    DHCPOption.VendorClassIdentifier: 'Vendor Class ID',
    DHCPOption.ClientIdentifier: 'Client Identifier',
    DHCPOption.RapidCommit: 'Rapid Commit',
    DHCPOption.DomainSearch: 'Domain Search',
    DHCPOption.ForceRenewNonceCapable: 'Force Renew Nonce Capable',
}


class Other(int):
    """An option code without a registered meaning.

    Compares and hashes as its numeric code, so distinct unknown codes
    stay distinct keys.
    """
    name = 'Other'

    def __new__(cls, code):
        if not 0 <= code <= 0xff:
            raise ValueError('option code out of range: {}'.format(code))
        return super(Other, cls).__new__(cls, code)

    @property
    def code(self):
        return int(self)

    def __str__(self):
        return 'Unknown Option ({})'.format(int(self))

    def __repr__(self):
        return 'Other({})'.format(int(self))


def from_code(code):
    """Map a raw option code to its identifier. Never fails."""
    try:
        return DHCPOption(code)
    except ValueError:
        return Other(code)


class DHCPMessage(enum.IntEnum):
    Discover = 1
    Offer = 2
    Request = 3
    Decline = 4
    Ack = 5
    Nak = 6
    Release = 7
    Inform = 8
    ForceRenew = 9

    def __str__(self):
        if self is DHCPMessage.ForceRenew:
            return 'Force Renew'
        return self.name


class NonceAlgorithm(collections.namedtuple('NonceAlgorithm', 'code')):
    """Algorithm advertised in the Forcerenew Nonce Capable option."""
    __slots__ = ()

    HMAC_MD5 = 1

    def __str__(self):
        if self.code == self.HMAC_MD5:
            return 'HMAC-MD5'
        return 'Other({})'.format(self.code)


def _hexbytes(data):
    return ' '.join(format(x, '02x') for x in data)


def _join(values):
    return ', '.join(str(x) for x in values)


def _seconds(value):
    return '{}s'.format(int(value.total_seconds()))


_formatters = {
    DHCPOption.SubnetMask: '{:#010x}'.format,
    DHCPOption.Router: _join,
    DHCPOption.DNSServer: _join,
    DHCPOption.ClientIdentifier: _hexbytes,
    DHCPOption.DomainSearch: _hexbytes,
    DHCPOption.LeaseTime: _seconds,
    DHCPOption.RenewalInterval: _seconds,
    DHCPOption.RebindingInterval: _seconds,
    DHCPOption.ParameterRequestList: _join,
    DHCPOption.ForceRenewNonceCapable: _join,
    DHCPOption.RapidCommit: lambda value: 'Rapid Commit',
}


class OptionValue(collections.namedtuple('OptionValue', 'option value')):
    """A decoded option: its identifier plus the typed payload.

    ``value`` depends on ``option``: a ``DHCPMessage``, ``bytes``, ``str``,
    ``int``, ``IPv4Address``, ``datetime.timedelta`` or a tuple of
    addresses, identifiers or ``NonceAlgorithm``. Unknown options carry
    the raw payload bytes, tagged with their code through ``option``.
    """
    __slots__ = ()

    def __str__(self):
        if isinstance(self.option, Other):
            return '({:02x}) {}'.format(self.option.code,
                                        _hexbytes(self.value))
        return _formatters.get(self.option, str)(self.value)


Rule = collections.namedtuple('Rule', 'expect check decode')


def _exactly(size):
    return ('exactly {}'.format(size), lambda length: length == size)


def _more_than(size):
    return ('more than {}'.format(size), lambda length: length > size)


_any_length = ('any', lambda length: True)
_address_list = ('a non-zero multiple of 4',
                 lambda length: length >= 4 and length % 4 == 0)


def _unpack(fmt):
    return lambda data: struct.unpack(fmt, data)[0]


def _seconds_value(data):
    return datetime.timedelta(seconds=struct.unpack('!I', data)[0])


def _addresses(data):
    return tuple(IPv4Address(data[i:i + 4]) for i in range(0, len(data), 4))


def _text(data):
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise InvalidEncoding('invalid UTF-8: {}'.format(e.reason),
                              offset=e.start)


def _message_type(data):
    try:
        return DHCPMessage(data[0])
    except ValueError:
        raise InvalidMessageType(
            'unknown message type {}'.format(data[0]))


def _max_message_size(data):
    size = struct.unpack('!H', data)[0]
    if size < MIN_MAX_MESSAGE_SIZE:
        raise InvalidOptionValue('maximum message size {} is below {}'
                                 .format(size, MIN_MAX_MESSAGE_SIZE))
    return size


def _rule(length, decode):
    return Rule(length[0], length[1], decode)


RULES = {
    DHCPOption.SubnetMask: _rule(_exactly(4), _unpack('!I')),
    DHCPOption.Router: _rule(_address_list, _addresses),
    DHCPOption.DNSServer: _rule(_address_list, _addresses),
    DHCPOption.HostName: _rule(_more_than(0), _text),
    DHCPOption.DomainName: _rule(_more_than(0), _text),
    DHCPOption.InterfaceMTU: _rule(_exactly(2), _unpack('!H')),
    DHCPOption.BroadcastAddress: _rule(_exactly(4), IPv4Address),
    DHCPOption.LeaseTime: _rule(_exactly(4), _seconds_value),
    DHCPOption.MessageType: _rule(_exactly(1), _message_type),
    DHCPOption.ServerIdentifier: _rule(_exactly(4), IPv4Address),
    DHCPOption.ParameterRequestList: _rule(
        _any_length, lambda data: tuple(from_code(x) for x in data)),
    DHCPOption.MaximumMessageSize: _rule(_exactly(2), _max_message_size),
    DHCPOption.RenewalInterval: _rule(_exactly(4), _seconds_value),
    DHCPOption.RebindingInterval: _rule(_exactly(4), _seconds_value),
    DHCPOption.VendorClassIdentifier: _rule(_more_than(0), _text),
    DHCPOption.ClientIdentifier: _rule(_more_than(2), bytes),
    DHCPOption.RapidCommit: _rule(_exactly(0), lambda data: None),
    DHCPOption.DomainSearch: _rule(_any_length, bytes),
    DHCPOption.ForceRenewNonceCapable: _rule(
        _more_than(0), lambda data: tuple(NonceAlgorithm(x) for x in data)),
}

_unknown = _rule(_any_length, bytes)


def decode_option(option, cursor):
    """Decode the length and value of ``option`` at ``cursor``.

    The cursor sits just past the code byte. Pad and End carry neither a
    length nor a value; for them nothing is consumed and ``None`` is
    returned.
    """
    if option in (DHCPOption.Pad, DHCPOption.End):
        return None

    rule = RULES.get(option, _unknown)
    length_offset = cursor.offset
    length = cursor.be_u8()
    if not rule.check(length):
        raise InvalidOptionLength(
            'length {} where {} is required'.format(length, rule.expect),
            offset=length_offset, option=option)

    start = cursor.offset
    data = cursor.take(length)
    try:
        value = rule.decode(data)
    except ParseError as e:
        # offsets raised by the decoders are relative to the value
        e.offset = start + (e.offset or 0)
        e.option = option
        raise
    return OptionValue(option, value)


def decode_options(cursor):
    """Fold the option stream at ``cursor`` into a dict.

    Decoding stops at End or when the buffer runs out; a missing End is
    accepted and bytes trailing End are never examined. A repeated option
    replaces the earlier occurrence.
    """
    options = {}
    while cursor:
        option = from_code(cursor.be_u8())
        if option == DHCPOption.End:
            break
        elif option == DHCPOption.Pad:
            continue
        options[option] = decode_option(option, cursor)
    return options

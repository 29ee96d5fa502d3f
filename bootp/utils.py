from binascii import unhexlify


class HWAddress(object):
    """Represent a 6 byte Ethernet hardware address."""
    __slots__ = ('packed',)

    def __init__(self, address):
        """
        Args:
            address: 6 raw bytes, another HWAddress, or a string in
                     ``aa:bb:cc:dd:ee:ff`` notation
        """
        if isinstance(address, (bytes, bytearray)) and len(address) == 6:
            packed = bytes(address)
        elif isinstance(address, HWAddress):
            packed = address.packed
        else:
            packed = unhexlify(address.replace(':', ''))
            if len(packed) != 6:
                raise ValueError(
                    'invalid hardware address {!r}'.format(address))
        object.__setattr__(self, 'packed', packed)

    def __setattr__(self, name, value):
        raise AttributeError('HWAddress is immutable')

    def __eq__(self, other):
        if not isinstance(other, HWAddress):
            return NotImplemented
        return self.packed == other.packed

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self.packed)

    def __str__(self):
        return ':'.join(format(x, '02x') for x in self.packed)

    def __repr__(self):
        return "HWAddress('{}')".format(self)

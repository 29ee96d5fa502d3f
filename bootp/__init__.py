"""
Decoding of BOOTP/DHCPv4 datagrams.
"""
from .utils import HWAddress
from .msg import (
    ParseError, Truncated, BadMagicCookie, InvalidOpcode,
    UnsupportedHardwareType, InvalidFlags, InvalidOptionLength,
    InvalidMessageType, InvalidOptionValue, InvalidEncoding, Cursor)

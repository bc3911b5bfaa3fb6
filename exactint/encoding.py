"""
Byte and text encodings of exact integers.

Fixed-length encoding writes the magnitude big-endian into exactly
byte_length(x) bytes. The byte count is derived from the magnitude alone,
so the sign cannot live in the buffer; it travels next to it in
EncodedInteger.negative.
"""

import re
import secrets
import string
from typing import NamedTuple

from .exceptions import InvalidArgument
from .integer import byte_length


ALPHANUMERIC = (string.ascii_letters + string.digits).encode('ascii')
HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")


class EncodedInteger(NamedTuple):
    """Magnitude bytes of a signed integer plus its sign."""
    magnitude: bytes
    negative: bool = False


def I2OSP(n, length):
    """Convert a non-negative integer to an octet string."""
    if n < 0 or n >= 256**length:
        raise InvalidArgument("Integer too large for length")
    return n.to_bytes(length, 'big')


def OS2IP(octets):
    """Convert an octet string to a non-negative integer."""
    return int.from_bytes(octets, 'big')


def encode_big_integer(value, length=None):
    """
    Encode `value` into a buffer of exactly `length` bytes.

    `length` defaults to byte_length(value) and must be at least that.
    """
    if length is None:
        length = byte_length(value)
    if length < byte_length(value):
        raise InvalidArgument(
            f"{length} bytes cannot hold a {byte_length(value)}-byte value")
    return EncodedInteger(I2OSP(abs(value), length), value < 0)


def decode_big_integer(data, length=None, negative=None):
    """
    Inverse of encode_big_integer.

    `data` is either an EncodedInteger or raw magnitude bytes; in the latter
    case the sign comes from `negative`. When `length` is given only the
    first `length` bytes are read.
    """
    if isinstance(data, EncodedInteger):
        magnitude, sign = data
        if negative is not None and negative != sign:
            raise InvalidArgument("conflicting sign information")
    else:
        magnitude, sign = data, bool(negative)
    if length is not None:
        if length > len(magnitude):
            raise InvalidArgument("buffer shorter than the requested length")
        magnitude = magnitude[:length]
    value = OS2IP(magnitude)
    return -value if sign else value


def hex_to_integer(text):
    """Parse a hexadecimal string; case-insensitive, optional 0x prefix."""
    cleaned = "".join(text.split())
    negative = cleaned.startswith('-')
    if negative:
        cleaned = cleaned[1:]
    if cleaned[:2].lower() == '0x':
        cleaned = cleaned[2:]
    if not HEX_DIGITS.fullmatch(cleaned):
        raise InvalidArgument(f"not a hexadecimal string: {text!r}")
    value = int(cleaned, 16)
    return -value if negative else value


def integer_to_hex(value):
    """Lower-case hexadecimal digits, '-' prefixed when negative."""
    return format(value, 'x')


def decimal_to_integer(text):
    try:
        return int(text.strip(), 10)
    except ValueError as exc:
        raise InvalidArgument(f"not a decimal string: {text!r}") from exc


def integer_to_decimal(value):
    return str(value)


def random_bytes(n):
    """n random bytes drawn from the printable alphanumeric characters."""
    if n < 0:
        raise InvalidArgument("length must be non-negative")
    return bytes(secrets.choice(ALPHANUMERIC) for _ in range(n))


def copy_into_buffer(source, target, offset):
    """Copy `source` into the bytearray `target` starting at `offset`."""
    if offset < 0 or offset + len(source) > len(target):
        raise InvalidArgument("source does not fit in target at this offset")
    target[offset:offset + len(source)] = source
    return target


def copy_from_buffer(source, length, offset=0):
    """Return the bytes of `source[:length]` from `offset` on."""
    if length > len(source) or not 0 <= offset <= length:
        raise InvalidArgument("offset/length outside the source buffer")
    return bytes(source[offset:length])

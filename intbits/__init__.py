"""Provides access to individual bits and bit ranges of fixed-width unsigned
integers.

Functions:
    bit, bits - read one bit or a range of bits
    with_bit, with_bits - return a copy with one bit or a range of bits replaced

Classes:
    u8, u16, u32, u64, u128, usize - fixed-width unsigned integer types
    Bitfield - mutable wrapper around a fixed-width value
    named - helper class for making named fields of a Bitfield

Bit ranges are half-open: bits(v, slice(4, 8)) reads bits 4, 5, 6 and 7.
"""

__version__ = '1.0.0'

class AppError(Exception):
    pass

from .errors import InvalidBitIndex, InvalidBitRange, InvalidValue, InvalidWidth
from .bitops import (
    bit,
    bits,
    with_bit,
    with_bits,
    checked_bit,
    checked_bits,
    checked_with_bit,
    checked_with_bits,
)
from .uint import UInt, u8, u16, u32, u64, u128, usize, uint_type, WIDTHS
from .bitfield import Bitfield, named, make, join

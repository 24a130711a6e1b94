"""Fixed-width unsigned integer types.

Classes:
    UInt - base class, parameterized by the N_BITS class attribute
    u8, u16, u32, u64, u128 - the sized types
    usize - platform pointer width

Functions:
    uint_type - returns the sized type for a width
"""

import struct

from . import bitops as _bits
from .errors import InvalidWidth

__all__ = ('UInt', 'u8', 'u16', 'u32', 'u64', 'u128', 'usize', 'uint_type', 'WIDTHS')

class UInt(int):
    """Unsigned integer of N_BITS bits with bit access methods.

    Values are checked on construction: u8(256) raises InvalidValue.
    Arithmetic is inherited from int and returns plain ints.

        u8(2).bit(1)               -> True
        u32(0b1011).bits(slice(2, 4)) -> u32(0x2)
        u8(0xFF)[4:]               -> u8(0xf)
        u8(0xFF).with_bit(3, False) -> u8(0xf7)
    """
    __slots__ = ()
    N_BITS = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        _bits.check_width(cls.N_BITS)

    def __new__(cls, value=0):
        if cls.N_BITS is None:
            raise TypeError('UInt has no width, use one of its subclasses')
        return super().__new__(cls, _bits.check_value(value, width=cls.N_BITS))

    def bit(self, index):
        return _bits.bit(int(self), index, width=self.N_BITS)

    def bits(self, key):
        return type(self)(_bits.bits(int(self), key, width=self.N_BITS))

    def with_bit(self, index, flag):
        return type(self)(_bits.with_bit(int(self), index, flag, width=self.N_BITS))

    def with_bits(self, key, field):
        return type(self)(_bits.with_bits(int(self), key, field, width=self.N_BITS))

    def checked_bit(self, index):
        return _bits.checked_bit(int(self), index, width=self.N_BITS)

    def checked_bits(self, key):
        result = _bits.checked_bits(int(self), key, width=self.N_BITS)
        return None if result is None else type(self)(result)

    def checked_with_bit(self, index, flag):
        result = _bits.checked_with_bit(int(self), index, flag, width=self.N_BITS)
        return None if result is None else type(self)(result)

    def checked_with_bits(self, key, field):
        result = _bits.checked_with_bits(int(self), key, field, width=self.N_BITS)
        return None if result is None else type(self)(result)

    def __getitem__(self, key):
        if isinstance(key, int):
            return self.bit(key)
        return self.bits(key)

    def __repr__(self):
        return f'{type(self).__name__}({int(self):#x})'

    __str__ = int.__repr__

class u8(UInt):
    __slots__ = ()
    N_BITS = 8

class u16(UInt):
    __slots__ = ()
    N_BITS = 16

class u32(UInt):
    __slots__ = ()
    N_BITS = 32

class u64(UInt):
    __slots__ = ()
    N_BITS = 64

class u128(UInt):
    __slots__ = ()
    N_BITS = 128

class usize(UInt):
    __slots__ = ()
    N_BITS = struct.calcsize('P') * 8

_SIZED = {T.N_BITS: T for T in (u8, u16, u32, u64, u128)}
WIDTHS = tuple(_SIZED)

def uint_type(width):
    """Returns the sized UInt subclass of the given width."""
    try:
        return _SIZED[width]
    except (KeyError, TypeError):
        raise InvalidWidth(width) from None

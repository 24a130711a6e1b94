"""Mutable wrapper for accessing bits of a fixed-width register value.

Classes:
    Bitfield - base class for bitfields
    named - helper class for making named fields

Functions:
    make - helper function to type less
    join - packs octets into a bitfield
"""

import itertools
import warnings

from .bitops import (bit, bits, with_bit, with_bits, bit_range, check_index,
    check_value, check_width, field_mask, _get_field, _set_field)
from .errors import InvalidWidth
from .uint import WIDTHS

__all__ = ('Bitfield', 'named', 'make', 'join')

class Bitfield:
    """Holds one WIDTH bit unsigned value, gives access to its bits.

    bf[3] - read bit 3 as bool
    bf[4:8] - read bits 4 to 7 (ranges are half-open)
    bf[3] = True, bf[4:8] = 0xA - replace bits in place
    """
    WIDTH = 32

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        check_width(cls.WIDTH)
        for klass in cls.__mro__:
            for attr in vars(klass).values():
                if isinstance(attr, named):
                    attr.layout(cls.WIDTH)

    def __init__(self, initial=0):
        self.all = initial

    @classmethod
    def of(cls, width):
        """Returns subclass of this bitfield with given width."""
        if width == cls.WIDTH:
            return cls
        return type(f'{cls.__name__}{width}', (cls,), {'WIDTH': width})

    @property
    def all(self):
        return self.value
    @all.setter
    def all(self, value):
        self.value = check_value(value, width=self.WIDTH)

    def __getitem__(self, key):
        if isinstance(key, int):
            return bit(self.value, key, width=self.WIDTH)
        return bits(self.value, key, width=self.WIDTH)
    def __setitem__(self, key, value):
        if isinstance(key, int):
            self.set_bit(key, value)
        else:
            self.set_bits(key, value)

    def set_bit(self, index, flag):
        self.value = with_bit(self.value, index, flag, width=self.WIDTH)
    def set_bits(self, key, field):
        self.value = with_bits(self.value, key, field, width=self.WIDTH)
    def with_bit(self, index, flag):
        return type(self)(with_bit(self.value, index, flag, width=self.WIDTH))
    def with_bits(self, key, field):
        return type(self)(with_bits(self.value, key, field, width=self.WIDTH))

    def __eq__(self, other):
        match other:
            case Bitfield():
                return self.WIDTH == other.WIDTH and self.value == other.value
            case int():
                return self.value == other
            case _:
                return NotImplemented
    def __hash__(self):
        return hash(self.value)
    def __int__(self):
        return self.value
    def __index__(self):
        return self.value
    def copy(self):
        return type(self)(self.value)
    def __repr__(self):
        return f'{type(self).__name__}({self.value:#0{self.WIDTH // 4 + 2}x})'

class named:
    """Provides a way to add named bitfields.

    Usage is as follows:
        class YourBitfield(intbits.Bitfield):
            WIDTH = 8
            foo = intbits.named[0:4]
            bar = intbits.named[4:7]
            baz = intbits.named[7]

        ybf = YourBitfield(0x9A)
        ybf.foo  # same as ybf[0:4], 0xA
        ybf.bar  # same as ybf[4:7], 0x1
        ybf.baz  # same as ybf[7], True

    Fields are checked against WIDTH when the class is created.
    """
    def __init__(self, key, /):
        self.key = key
        self.single = isinstance(key, int)
        self._layouts = {}
    def __class_getitem__(cls, key):
        return cls(key)
    def __set_name__(self, owner, name):
        self.name = name

    def layout(self, width):
        """Returns shift and mask of this field within a `width` bit value."""
        try:
            return self._layouts[width]
        except KeyError:
            pass
        if self.single:
            lower = check_index(self.key, width=width)
            upper = lower + 1
        else:
            lower, upper = bit_range(self.key, width=width)
        layout = self._layouts[width] = (lower, field_mask(upper - lower, width=width))
        return layout

    def __get__(self, instance, owner):
        if instance is None:
            return self
        shift, mask = self.layout(instance.WIDTH)
        field = _get_field(instance.value, mask, shift)
        return field != 0 if self.single else field
    def __set__(self, instance, value):
        shift, mask = self.layout(instance.WIDTH)
        if self.single:
            value = 1 if value else 0
        else:
            check_value(value, width=instance.WIDTH)
        instance.value = _set_field(instance.value, mask, shift, value)

def make(value, width=Bitfield.WIDTH):
    """Helper function to create bitfield objects."""
    return Bitfield.of(width)(value)

def join(*octets, width=None):
    """Packs octets into a bitfield, first octet being least significant.

    Without `width` the narrowest supported width that holds all octets is
    used.
    """
    n = 0
    for shift, octet in zip(itertools.count(0, 8), octets):
        if octet & ~0xFF:
            warnings.warn(f'octet {octet:#x} truncated to {octet & 0xFF:#04x}', stacklevel=2)
        n |= (octet & 0xFF) << shift
    if width is None:
        width = _fit_width(8 * len(octets))
    return make(n, width)

def _fit_width(nbits):
    for width in WIDTHS:
        if nbits <= width:
            return width
    raise InvalidWidth(nbits)

"""Pure functions for reading and writing bits of fixed-width unsigned
integers.

Every function takes the integer width as keyword argument `width` and
validates its arguments against it:

    0 <= value < 2**width
    0 <= index < width            (single bit)
    0 <= lower <= upper <= width  (half-open bit range)

Violations raise InvalidValue, InvalidBitIndex or InvalidBitRange. The
checked_* variants return None instead of raising on a bad index or range.

Bit ranges can be given as:
    slice(lower, upper)  - either bound may be None (0 and width respectively),
                           step must be None or 1
    range(lower, upper)  - step must be 1
    (lower, upper)       - a pair of integers

Functions:
    bit, bits, with_bit, with_bits - bit accessors
    checked_bit, checked_bits, checked_with_bit, checked_with_bits
        - same as above, returning None on bad index or range
    bit_range, check_index, check_value, check_width - argument validation
    mask, field_mask, full_mask - mask construction
"""

from .errors import InvalidBitIndex, InvalidBitRange, InvalidValue, InvalidWidth

__all__ = (
    'bit', 'bits', 'with_bit', 'with_bits',
    'checked_bit', 'checked_bits', 'checked_with_bit', 'checked_with_bits',
    'bit_range', 'check_index', 'check_value', 'check_width',
    'mask', 'field_mask', 'full_mask',
)

def bit(value: int, index: int, *, width: int) -> bool:
    """Returns True if bit `index` of `value` is 1.

    Raises InvalidBitIndex unless 0 <= index < width.
    """
    check_value(value, width=width)
    check_index(index, width=width)
    return (value >> index) & 1 != 0

def bits(value: int, key, *, width: int) -> int:
    """Returns bits [lower, upper) of `value`.

    The bits are returned in the least significant bits of the result, the
    other bits are 0. Empty ranges are allowed and result in 0.

        bits(0x45, slice(0, 4), width=8)   -> 0x5
        bits(0xF1, slice(1, None), width=8) -> 0x78

    Raises InvalidBitRange unless 0 <= lower <= upper <= width.
    """
    check_value(value, width=width)
    lower, upper = bit_range(key, width=width)
    return _get_field(value, field_mask(upper - lower, width=width), lower)

def with_bit(value: int, index: int, flag, *, width: int) -> int:
    """Returns `value` with bit `index` set to 1 if `flag` is true, else 0.

    Raises InvalidBitIndex unless 0 <= index < width.
    """
    check_value(value, width=width)
    check_index(index, width=width)
    bitmask = 1 << index
    return (value & ~bitmask) | (bitmask if flag else 0)

def with_bits(value: int, key, field: int, *, width: int) -> int:
    """Returns `value` with bits [lower, upper) replaced by `field`.

    Only the low (upper - lower) bits of `field` are used, the rest are
    ignored. `field` itself must fit in `width` bits.

        with_bits(0xFF, slice(4, 8), 3, width=8) -> 0x3F

    Raises InvalidBitRange unless 0 <= lower <= upper <= width.
    """
    check_value(value, width=width)
    check_value(field, width=width)
    lower, upper = bit_range(key, width=width)
    return _set_field(value, field_mask(upper - lower, width=width), lower, field)

def checked_bit(value: int, index: int, *, width: int) -> bool | None:
    """Same as bit(), but returns None if the index is out of range."""
    try:
        return bit(value, index, width=width)
    except InvalidBitIndex:
        return None

def checked_bits(value: int, key, *, width: int) -> int | None:
    """Same as bits(), but returns None if the range is out of range."""
    try:
        return bits(value, key, width=width)
    except InvalidBitRange:
        return None

def checked_with_bit(value: int, index: int, flag, *, width: int) -> int | None:
    """Same as with_bit(), but returns None if the index is out of range."""
    try:
        return with_bit(value, index, flag, width=width)
    except InvalidBitIndex:
        return None

def checked_with_bits(value: int, key, field: int, *, width: int) -> int | None:
    """Same as with_bits(), but returns None if the range is out of range."""
    try:
        return with_bits(value, key, field, width=width)
    except InvalidBitRange:
        return None

###############################################################################
# VALIDATION
###############################################################################

def _is_integer(x) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)

def check_width(width: int) -> int:
    """Verifies that `width` is a positive number of bits, returns it."""
    if not _is_integer(width) or width <= 0:
        raise InvalidWidth(width)
    return width

def check_value(value: int, *, width: int) -> int:
    """Verifies that `value` is an unsigned integer of `width` bits, returns it."""
    check_width(width)
    if not _is_integer(value) or not 0 <= value <= full_mask(width):
        raise InvalidValue(value, width)
    return value

def check_index(index: int, *, width: int) -> int:
    """Verifies bit index, returns it."""
    check_width(width)
    if not _is_integer(index) or not 0 <= index < width:
        raise InvalidBitIndex(index, width)
    return index

def bit_range(key, *, width: int) -> tuple[int, int]:
    """Verifies bit range key, returns lower and upper bound of bit range.

    Missing bounds of a slice default to 0 and `width`.
    """
    check_width(width)
    match key:
        case slice(start=lower, stop=upper, step=None | 1):
            pass
        case range(start=lower, stop=upper, step=1):
            pass
        case (lower, upper):
            pass
        case _:
            raise InvalidBitRange(key, width)
    if lower is None:
        lower = 0
    if upper is None:
        upper = width
    if not (_is_integer(lower) and _is_integer(upper)):
        raise InvalidBitRange(key, width)
    if not 0 <= lower <= upper <= width:
        raise InvalidBitRange(key, width)
    return lower, upper

###############################################################################
# MASKS
###############################################################################

def full_mask(width: int) -> int:
    """Returns mask with all `width` bits set."""
    return (1 << width) - 1

def field_mask(length: int, *, width: int) -> int:
    """Returns mask of `length` low bits, all bits when `length` == `width`."""
    if length == width:
        return full_mask(width)
    return (1 << length) - 1

def mask(lower: int, upper: int, *, width: int) -> int:
    """Returns mask selecting bits [lower, upper) of a `width` bit value."""
    return field_mask(upper - lower, width=width) << lower

def _get_field(value: int, mask: int, shift: int) -> int:
    return (value >> shift) & mask

def _set_field(value: int, mask: int, shift: int, field: int) -> int:
    """Replaces bits in a value.

    Suppose we want to replace value
        VVVVVVVVVVVVV (bit representation)
    with value
        VVVVVFFFFFVVV

    That can be done with specified arguments
        value: VVVVVVVVVVVVV
        mask:  0000000011111
        shift: 3
        field: ________FFFFF

    Bits of `field` outside of `mask` are dropped.
    """
    value &= ~(mask << shift)
    value |= (field & mask) << shift
    return value

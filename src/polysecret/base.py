"""Arbitrary-base digit strings to exact integers.

Digit alphabet is ``0-9a-z`` (case-insensitive), giving values 0..35, so
bases 2..36 are supported. Decoding is exact: Python ints have no width,
and the declared base is always the one used.
"""

from polysecret.errors import EmptyInput, InvalidBase, InvalidDigit, brief

ALPHABET = '0123456789abcdefghijklmnopqrstuvwxyz'
MIN_BASE = 2
MAX_BASE = len(ALPHABET)  # 36

_VALUES = {c: v for v, c in enumerate(ALPHABET)}
_VALUES.update({c.upper(): v for v, c in enumerate(ALPHABET) if c.isalpha()})


def check_base(base, key=None) -> int:
    """Return ``base`` if it is an int in [2, 36], else raise InvalidBase."""
    if isinstance(base, bool) or not isinstance(base, int):
        raise InvalidBase(base, key)
    if not MIN_BASE <= base <= MAX_BASE:
        raise InvalidBase(base, key)
    return base


def digit_value(char: str):
    """Value of a single alphabet character, or None if it is not one."""
    return _VALUES.get(char)


def decode(digits: str, base: int, key=None) -> int:
    """Decode an unsigned digit string in ``base`` to an exact int.

    Args:
        digits: Non-empty string over the alphabet, each digit < base.
        base: Radix in [2, 36].
        key: Optional share key, attached to any raised error.

    Returns:
        The integer value of ``digits``.

    Raises:
        InvalidBase, EmptyInput, InvalidDigit.
    """
    check_base(base, key)
    if not digits:
        raise EmptyInput(key)

    # Horner accumulation rather than int(digits, base): int() also accepts
    # signs, underscores, whitespace and 0x/0o/0b prefixes, and caps
    # non power-of-two conversions at sys.get_int_max_str_digits().
    value = 0
    for pos, c in enumerate(digits):
        v = _VALUES.get(c)
        if v is None or v >= base:
            raise InvalidDigit(c, pos, base, key)
        value = value * base + v
    return value


def encode(value: int, base: int) -> str:
    """Render a non-negative int in ``base`` using the lowercase alphabet."""
    check_base(base)
    if value < 0:
        raise ValueError(f"Cannot encode negative value {brief(value)}")
    if value == 0:
        return '0'

    out = []
    while value:
        value, r = divmod(value, base)
        out.append(ALPHABET[r])
    return ''.join(reversed(out))


def decode_signed(text: str, key=None) -> int:
    """Base-10 integer with an optional leading '-', e.g. a share key.

    Same strictness and no length limit as decode().
    """
    negative = text.startswith('-')
    value = decode(text[1:] if negative else text, 10, key)
    return -value if negative else value

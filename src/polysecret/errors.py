"""Structured error taxonomy for share decoding and reconstruction.

Every error carries a ``kind`` naming its taxonomy entry plus the offending
key, index or value as attributes, so callers can react without parsing
messages. Two families split the exit behaviour of the command line:

``InputError``
    The share document or its values are malformed.
``NumericError``
    The values decode but are mathematically inconsistent.
"""

# Kept under CPython's int <-> decimal string limit
# (sys.get_int_max_str_digits, 4300 digits by default).
_BRIEF_BITS = 12000


def brief(value) -> str:
    """repr() of a value, with huge ints summarised by their bit length."""
    if isinstance(value, int) and abs(value).bit_length() > _BRIEF_BITS:
        sign = "-" if value < 0 else ""
        return f"<{sign}{abs(value).bit_length()}-bit integer>"
    return repr(value)


class ShareError(ValueError):
    """Base class for all polysecret errors."""

    kind = 'ShareError'

    def __init__(self, message: str, **details):
        super().__init__(message)
        self.details = details
        for name, value in details.items():
            setattr(self, name, value)

    def to_dict(self) -> dict:
        """Return ``{'kind': ..., 'message': ..., **details}``."""
        out = {'kind': self.kind, 'message': str(self)}
        out.update(self.details)
        return out


class InputError(ShareError):
    kind = 'InputError'


class NumericError(ShareError):
    kind = 'NumericError'


# Decoder

class InvalidBase(InputError):
    kind = 'InvalidBase'

    def __init__(self, base, key=None):
        super().__init__(f"Unsupported base {brief(base)}, expected 2..36",
                         base=base, key=key)


class InvalidDigit(InputError):
    kind = 'InvalidDigit'

    def __init__(self, char: str, position: int, base: int, key=None):
        super().__init__(
            f"Invalid digit {char!r} at position {position} for base {base}",
            char=char, position=position, base=base, key=key,
        )


class EmptyInput(InputError):
    kind = 'EmptyInput'

    def __init__(self, key=None):
        super().__init__("Empty digit string", key=key)


# Document / collaborator

class MissingField(InputError):
    kind = 'MissingField'

    def __init__(self, field: str, key=None):
        where = f" in share {key!r}" if key is not None else ""
        super().__init__(f"Missing field {field!r}{where}",
                         field=field, key=key)


class InvalidKey(InputError):
    kind = 'InvalidKey'

    def __init__(self, key: str):
        super().__init__(f"Share key {key!r} is not an integer index", key=key)


class InvalidThreshold(InputError):
    kind = 'InvalidThreshold'

    def __init__(self, n, k, reason: str):
        super().__init__(
            f"Invalid threshold n={brief(n)}, k={brief(k)}: {reason}",
            n=n, k=k,
        )


class MalformedDocument(InputError):
    kind = 'MalformedDocument'

    def __init__(self, reason: str):
        super().__init__(f"Malformed share document: {reason}")


# Interpolator

class InsufficientPoints(InputError):
    kind = 'InsufficientPoints'

    def __init__(self, needed: int, available: int):
        super().__init__(f"Need at least {needed} points, got {available}",
                         needed=needed, available=available)


class DuplicateX(NumericError):
    kind = 'DuplicateX'

    def __init__(self, x: int, first: int, second: int):
        super().__init__(
            f"Duplicate x={brief(x)} at positions {first} and {second}",
            x=x, index=second, first=first,
        )


class NonIntegralResult(NumericError):
    kind = 'NonIntegralResult'

    def __init__(self, numerator: int, denominator: int):
        super().__init__(
            f"Interpolated constant {brief(numerator)}/{brief(denominator)} is not an integer; "
            f"points are not on one integer polynomial of the given degree",
            numerator=numerator, denominator=denominator,
        )


class InconsistentShares(NumericError):
    kind = 'InconsistentShares'

    def __init__(self, windows: dict):
        # windows: {window_start: secret}
        distinct = sorted(set(windows.values()))
        super().__init__(
            f"Share windows disagree: {len(distinct)} distinct secrets "
            f"across {len(windows)} windows",
            windows=windows, distinct=distinct,
        )

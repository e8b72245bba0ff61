"""Share document parsing.

Input documents look like::

    {
        "keys": {"n": 4, "k": 3},
        "1": {"base": "10", "value": "4"},
        "2": {"base": "2", "value": "111"},
        ...
    }

Each non-``keys`` entry is one share: its key is the x-coordinate, ``value``
the y-coordinate encoded in ``base``. Everything is validated eagerly into a
``ShareSet``; shares come out ordered by numeric key so that taking the first
k is deterministic.
"""

import json
import logging

from polysecret.base import check_base, decode_signed
from polysecret.errors import (
    InputError, InvalidBase, InvalidDigit, InvalidThreshold, MalformedDocument,
    MissingField, brief,
)
from polysecret.shares import EncodedShare, ShareSet, Threshold

logger = logging.getLogger(__name__)

THRESHOLD_KEY = 'keys'


def _as_int(value):
    """int or base-10 int string -> int; anything else -> None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return decode_signed(value.strip())
        except InputError:
            return None
    return None


def parse_threshold(section) -> Threshold:
    if not isinstance(section, dict):
        raise MissingField(THRESHOLD_KEY)
    for name in ('n', 'k'):
        if section.get(name) is None:
            raise MissingField(name, THRESHOLD_KEY)

    n, k = _as_int(section['n']), _as_int(section['k'])
    if n is None or k is None:
        raise InvalidThreshold(section['n'], section['k'],
                               "n and k must be integers")
    return Threshold(n, k)


def parse_share(key: str, entry) -> EncodedShare:
    if not isinstance(entry, dict):
        raise MissingField('base', key)
    for name in ('base', 'value'):
        if entry.get(name) is None:
            raise MissingField(name, key)

    base = _as_int(entry['base'])
    if base is None:
        raise InvalidBase(entry['base'], key)
    check_base(base, key)

    digits = entry['value']
    if isinstance(digits, int) and not isinstance(digits, bool) and base == 10:
        # JSON numbers are only unambiguous in base 10.
        digits = str(digits)
    if not isinstance(digits, str):
        raise InvalidDigit(str(digits), 0, base, key)

    return EncodedShare(key=key, base=base, digits=digits)


def _order(share: EncodedShare):
    n = _as_int(share.key)
    return (0, n, share.key) if n is not None else (1, 0, share.key)


def parse_document(data) -> ShareSet:
    """Validate a decoded JSON object into a ShareSet.

    Raises:
        MalformedDocument: data is not an object.
        MissingField: keys/n/k/base/value absent.
        InvalidThreshold, InvalidBase, InvalidDigit: malformed values.
    """
    if not isinstance(data, dict):
        raise MalformedDocument(f"expected an object, got {type(data).__name__}")
    if THRESHOLD_KEY not in data:
        raise MissingField(THRESHOLD_KEY)

    threshold = parse_threshold(data[THRESHOLD_KEY])
    shares = [parse_share(key, entry) for key, entry in data.items()
              if key != THRESHOLD_KEY]
    shares.sort(key=_order)

    logger.debug("Parsed %d shares, n=%s k=%s",
                 len(shares), brief(threshold.n), brief(threshold.k))
    return ShareSet(threshold=threshold, shares=tuple(shares))


def loads(text: str) -> ShareSet:
    """Parse a JSON share document from a string."""
    try:
        data = json.loads(text)
    except RecursionError:
        raise MalformedDocument("nesting too deep") from None
    except ValueError as exc:
        # JSONDecodeError, or a number literal past the int digit limit.
        raise MalformedDocument(str(exc)) from exc
    return parse_document(data)


def _not_utf8(exc: UnicodeDecodeError) -> MalformedDocument:
    return MalformedDocument(f"not valid UTF-8: {exc.reason} at byte {exc.start}")


def load_bytes(raw: bytes) -> ShareSet:
    """Parse a UTF-8 encoded JSON share document."""
    try:
        text = raw.decode('utf-8')
    except UnicodeDecodeError as exc:
        raise _not_utf8(exc) from exc
    return loads(text)


def load_path(path) -> ShareSet:
    """Read and parse the share document at ``path``."""
    try:
        with open(path, 'rb') as f:
            raw = f.read()
    except OSError as exc:
        raise MalformedDocument(f"cannot read {path}: {exc.strerror}") from exc
    return load_bytes(raw)


def load(fp) -> ShareSet:
    """Parse a JSON share document from a text file object."""
    try:
        text = fp.read()
    except UnicodeDecodeError as exc:
        raise _not_utf8(exc) from exc
    return loads(text)

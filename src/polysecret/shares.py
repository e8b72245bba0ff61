"""Typed share structures: encoded shares, decoded points, thresholds."""

from dataclasses import dataclass

from polysecret.base import decode, decode_signed
from polysecret.errors import InputError, InvalidKey, InvalidThreshold


@dataclass(frozen=True)
class Point:
    """One decoded share: x is the share index, y its value."""
    x: int
    y: int


@dataclass(frozen=True)
class EncodedShare:
    """A share as supplied: raw key, declared base, encoded digits."""
    key: str
    base: int
    digits: str

    @property
    def index(self) -> int:
        """The key as an integer share index (optional leading '-')."""
        if not isinstance(self.key, str):
            raise InvalidKey(self.key)
        try:
            return decode_signed(self.key)
        except InputError:
            raise InvalidKey(self.key) from None

    def decode(self) -> Point:
        return Point(self.index, decode(self.digits, self.base, key=self.key))


@dataclass(frozen=True)
class Threshold:
    """(n, k): n shares issued, any k reconstruct. Requires 1 <= k <= n."""
    n: int
    k: int

    def __post_init__(self):
        for v in (self.n, self.k):
            if isinstance(v, bool) or not isinstance(v, int):
                raise InvalidThreshold(self.n, self.k, "n and k must be integers")
        if self.k < 1:
            raise InvalidThreshold(self.n, self.k, "k must be >= 1")
        if self.k > self.n:
            raise InvalidThreshold(self.n, self.k, "k must be <= n")

    @property
    def degree(self) -> int:
        return self.k - 1


@dataclass(frozen=True)
class ShareSet:
    """Validated input to reconstruction, shares in selection order."""
    threshold: Threshold
    shares: tuple

    def __len__(self):
        return len(self.shares)

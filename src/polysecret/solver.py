"""Secret reconstruction: decode shares, select k points, interpolate at 0."""

import logging
from dataclasses import dataclass

from polysecret.errors import brief
from polysecret.interpolate import cross_check, interpolate_at_zero
from polysecret.shares import ShareSet, Threshold

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reconstruction:
    secret: int
    threshold: Threshold
    used: tuple  # Points that determined the secret
    verified: bool = False


def decode_points(shares) -> list:
    """Decode every EncodedShare into a Point, preserving order."""
    points = []
    for share in shares:
        point = share.decode()
        logger.debug("Share %s: base %d, %d digits, y is %d bits",
                     share.key, share.base, len(share.digits), point.y.bit_length())
        points.append(point)
    return points


def solve(share_set: ShareSet, verify: bool = False) -> Reconstruction:
    """Reconstruct the secret from a validated share set.

    All shares are decoded, so a malformed share is reported even when it
    would not be among the first k. The first k points (in share-set order)
    determine the secret; with ``verify`` every window of k consecutive
    points must agree on it.
    """
    threshold = share_set.threshold
    if threshold.n != len(share_set):
        logger.warning("Document declares n=%s but carries %d shares",
                       brief(threshold.n), len(share_set))

    points = decode_points(share_set.shares)
    k = threshold.k

    if verify:
        secret = cross_check(points, k)
        used = tuple(points)
    else:
        secret = interpolate_at_zero(points, k)
        used = tuple(points[:k])

    logger.info("Reconstructed secret from %d points (k=%d, verified=%s)",
                len(used), k, verify)
    return Reconstruction(secret=secret, threshold=threshold,
                          used=used, verified=verify)


"""Deduplication of discovered assets.

The canonical set is ordered by content identifier. When several files share
an identifier, the one discovered first wins, so provenance follows the fixed
search precedence: world mods, then game mods, then extra paths, depth-first
within each root.
"""

from collections.abc import Iterable
from operator import attrgetter

from .types import Asset, CanonicalSet


def deduplicate(assets: Iterable[Asset]) -> CanonicalSet:
    """Collapse an asset collection to its canonical set.

    Args:
        assets: Assets in discovery order

    Returns:
        Tuple of assets in strictly ascending content identifier order,
        keeping the earliest discovered asset for each identifier
    """
    # sorted() is stable, so equal identifiers keep discovery order
    ordered = sorted(assets, key=attrgetter("content_id"))

    canonical: list[Asset] = []
    for asset in ordered:
        if canonical and canonical[-1].content_id == asset.content_id:
            continue
        canonical.append(asset)
    return tuple(canonical)


def is_canonical(assets: Iterable[Asset]) -> bool:
    """Check that identifiers are strictly ascending (and therefore unique)."""
    previous = None
    for asset in assets:
        if previous is not None and asset.content_id <= previous:
            return False
        previous = asset.content_id
    return True

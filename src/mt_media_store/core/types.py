"""Type definitions shared across the media store build.

Assets compare, hash and sort by content identifier only. Two files with
identical bytes are the same asset no matter where they were found.
"""

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from pathlib import Path

# 160-bit SHA-1 digest
ContentId = bytes

CONTENT_ID_SIZE = 20

EnabledModSet = frozenset[str]


@total_ordering
@dataclass(frozen=True, eq=False)
class Asset:
    """A media file and the identifier of its bytes."""

    path: Path  # Where the bytes were discovered (provenance)
    content_id: ContentId  # Raw 20-byte digest

    @property
    def hex_id(self) -> str:
        """Lowercase hex form of the content identifier, used as the store name."""
        return self.content_id.hex()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Asset):
            return NotImplemented
        return self.content_id == other.content_id

    def __lt__(self, other: "Asset") -> bool:
        if not isinstance(other, Asset):
            return NotImplemented
        return self.content_id < other.content_id

    def __hash__(self) -> int:
        return hash(self.content_id)


# Sorted by content identifier, no duplicates
CanonicalSet = tuple[Asset, ...]


class RootKind(str, Enum):
    """Which search root a mod was discovered under.

    Informational only; precedence comes from the order the pipeline
    creates its sources in.
    """

    WORLD = "world"
    GAME = "game"
    EXTRA = "extra"


@dataclass(frozen=True)
class ModDirectory:
    """A leaf mod found while walking a mod tree."""

    name: str
    path: Path
    root_kind: RootKind = RootKind.EXTRA

"""
Plain representations of group elements for moving them between parties.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ZpElementSendableData:
    x: int


@dataclass(frozen=True)
class ECElementSendableData:
    """Affine coordinates; both None for the point at infinity."""
    x: Optional[int]
    y: Optional[int]

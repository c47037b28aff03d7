"""Incremental grouping of sprite captures."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from PIL import Image

from .sampling import SampledSimilarity, SimilarityTest
from ..logging import get_logger

logger = get_logger(__name__)


@dataclass
class SpriteGroup:
    """Captures believed to depict the same sprite, in insertion order."""
    group_id: int
    images: List[Image.Image] = field(default_factory=list)
    sources: List[Optional[str]] = field(default_factory=list)

    @property
    def representative(self) -> Image.Image:
        """First image added; comparison anchor and repair master."""
        return self.images[0]

    @property
    def donors(self) -> List[Image.Image]:
        return self.images[1:]

    def __len__(self) -> int:
        return len(self.images)


class GroupClassifier:
    """
    Assigns incoming images to groups of near-duplicates.

    Each image is compared against the representative of every existing
    group in creation order and joins the first one judged similar. When
    none matches a new group is opened with the next free id.

    Calls to ``add`` must be serialized: each assignment depends on the
    groups built so far.
    """

    def __init__(self, similarity: Optional[SimilarityTest] = None) -> None:
        self._similarity = similarity if similarity is not None else SampledSimilarity()
        self._groups: Dict[int, SpriteGroup] = {}
        self._next_group_id = 0

    def add(self, image: Image.Image, source: Optional[str] = None) -> int:
        """Place ``image`` in its group and return that group's id."""
        group_id = self._find_group_id(image)
        group = self._groups.get(group_id)
        if group is None:
            group = SpriteGroup(group_id=group_id)
            self._groups[group_id] = group
            logger.info(f"Created group {group_id} for {source or 'image'} ({image.width}x{image.height})")

        group.images.append(image)
        group.sources.append(source)
        logger.debug(f"Assigned {source or 'image'} to group {group_id} (size {len(group)})")
        return group_id

    def groups(self) -> List[SpriteGroup]:
        """Groups in id order."""
        return list(self._groups.values())

    def __len__(self) -> int:
        return len(self._groups)

    def _find_group_id(self, image: Image.Image) -> int:
        for group_id, group in self._groups.items():
            if self._similarity(image, group.representative):
                return group_id

        group_id = self._next_group_id
        self._next_group_id += 1
        return group_id

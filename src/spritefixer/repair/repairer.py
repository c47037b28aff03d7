"""Fill highlighted pixels of a group's master from its duplicates."""

from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np
from PIL import Image

from ..config import BACKGROUND_COLOR, HIGHLIGHT_COLOR, Color
from ..dedup.cluster import SpriteGroup
from ..dedup.sampling import as_rgba
from ..logging import get_logger

logger = get_logger(__name__)


class RepairError(Exception):
    """Raised when a group cannot be repaired."""


class EmptyGroupError(RepairError):
    """Raised when a group without images reaches the repairer."""


class DonorMismatchError(RepairError):
    """Raised when a donor's dimensions differ from the master's."""


@dataclass
class RepairedSprite:
    group_id: int
    image: Image.Image
    replaced: int = 0
    unresolved: List[Tuple[int, int]] = field(default_factory=list)


def _pixels(image: Image.Image) -> np.ndarray:
    return np.array(as_rgba(image), dtype=np.uint8)


class SpriteRepairer:
    """
    Produces one final sprite per group.

    The group's first image is the master and the rest are donors, consulted
    in order. Each highlighted master pixel takes the value of the first
    donor that is not highlighted at the same coordinate, or the background
    colour when every donor is. Stored images are never modified.
    """

    def __init__(
        self,
        highlight_color: Color = HIGHLIGHT_COLOR,
        background_color: Color = BACKGROUND_COLOR,
    ) -> None:
        self.highlight_color = tuple(highlight_color)
        self.background_color = tuple(background_color)

    def repair(self, group: SpriteGroup) -> Image.Image:
        return self.repair_group(group).image

    def repair_group(self, group: SpriteGroup) -> RepairedSprite:
        if not group.images:
            raise EmptyGroupError(f"Group {group.group_id} has no images")

        master_image = group.representative
        for index, donor in enumerate(group.donors, start=1):
            if donor.size != master_image.size:
                raise DonorMismatchError(
                    f"Group {group.group_id}: image {index} is {donor.width}x{donor.height}, "
                    f"master is {master_image.width}x{master_image.height}"
                )

        master = _pixels(master_image)
        highlight = np.array(self.highlight_color, dtype=np.uint8)
        pending = np.all(master == highlight, axis=-1)
        highlighted = int(pending.sum())

        if highlighted == 0:
            logger.debug(f"Group {group.group_id}: no highlighted pixels")
            return RepairedSprite(group_id=group.group_id, image=master_image.copy())

        for donor in group.donors:
            donor_pixels = _pixels(donor)
            usable = pending & ~np.all(donor_pixels == highlight, axis=-1)
            master[usable] = donor_pixels[usable]
            pending &= ~usable
            if not pending.any():
                break

        # argwhere yields (row, column) pairs in row-major order
        unresolved = [(int(x), int(y)) for y, x in np.argwhere(pending)]
        for x, y in unresolved:
            logger.warning(f"Group {group.group_id}: no replacement found for pixel at {x}, {y}")
        master[pending] = np.array(self.background_color, dtype=np.uint8)

        replaced = highlighted - len(unresolved)
        logger.info(
            f"Group {group.group_id}: {highlighted} highlighted pixels, "
            f"{replaced} filled from {len(group.donors)} donors, {len(unresolved)} set to background"
        )
        return RepairedSprite(
            group_id=group.group_id,
            image=Image.fromarray(master),
            replaced=replaced,
            unresolved=unresolved,
        )

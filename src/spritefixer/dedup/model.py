"""Public API for grouping sprite captures."""

from typing import Iterable, List, Optional, Tuple, Union

from PIL import Image

from .cluster import GroupClassifier, SpriteGroup
from .sampling import SimilarityTest
from ..logging import get_logger

logger = get_logger(__name__)

LabelledImage = Tuple[Image.Image, Optional[str]]


def classify_images(
    images: Iterable[Union[Image.Image, LabelledImage]],
    similarity: Optional[SimilarityTest] = None,
) -> List[SpriteGroup]:
    """
    Group images with a fresh classifier.

    Args:
        images: Images, or (image, source) pairs, in processing order
        similarity: Pairwise test; randomized sampling by default

    Returns:
        Groups in id order
    """
    classifier = GroupClassifier(similarity)
    count = 0
    for entry in images:
        if isinstance(entry, tuple):
            image, source = entry
        else:
            image, source = entry, None
        classifier.add(image, source)
        count += 1

    groups = classifier.groups()
    logger.info(f"Classified {count} images into {len(groups)} groups")
    return groups

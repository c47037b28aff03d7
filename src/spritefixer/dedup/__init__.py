"""Grouping of near-identical sprite captures."""

from .model import classify_images
from .cluster import GroupClassifier, SpriteGroup
from .sampling import (
    FixedPixelSampler,
    RandomPixelSampler,
    SampledSimilarity,
    are_similar,
    exact_match,
)

__all__ = [
    "classify_images",
    "GroupClassifier",
    "SpriteGroup",
    "FixedPixelSampler",
    "RandomPixelSampler",
    "SampledSimilarity",
    "are_similar",
    "exact_match",
]

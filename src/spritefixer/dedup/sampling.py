"""Randomized pixel sampling for comparing sprite captures."""

import itertools
import random
from typing import Callable, Iterator, Optional, Sequence, Tuple

from PIL import Image

from ..config import MIN_MATCHED_SAMPLES, SAMPLE_COUNT

Point = Tuple[int, int]

# (candidate, representative) -> similar?
SimilarityTest = Callable[[Image.Image, Image.Image], bool]


def as_rgba(image: Image.Image) -> Image.Image:
    """Pixel values as RGBA tuples, whatever mode the image was decoded in."""
    if image.mode == "RGBA":
        return image
    return image.convert("RGBA")


class RandomPixelSampler:
    """Draws coordinates uniformly at random, independently per sample."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def sample(self, width: int, height: int, count: int) -> Iterator[Point]:
        for _ in range(count):
            yield self._rng.randrange(width), self._rng.randrange(height)


class FixedPixelSampler:
    """Cycles through a fixed list of coordinates, clipped to the image bounds."""

    def __init__(self, points: Sequence[Point]) -> None:
        if not points:
            raise ValueError("FixedPixelSampler needs at least one point")
        self._points = list(points)

    def sample(self, width: int, height: int, count: int) -> Iterator[Point]:
        for x, y in itertools.islice(itertools.cycle(self._points), count):
            yield x % width, y % height


def count_matching_samples(
    image_a: Image.Image,
    image_b: Image.Image,
    sampler,
    sample_count: int,
) -> int:
    """Count sampled coordinates where both images hold the exact same pixel."""
    width, height = image_a.size
    pixels_a = as_rgba(image_a).load()
    pixels_b = as_rgba(image_b).load()
    return sum(
        1
        for x, y in sampler.sample(width, height, sample_count)
        if pixels_a[x, y] == pixels_b[x, y]
    )


def are_similar(
    image_a: Image.Image,
    image_b: Image.Image,
    sampler=None,
    sample_count: int = SAMPLE_COUNT,
    min_matched_samples: int = MIN_MATCHED_SAMPLES,
) -> bool:
    """
    Decide whether two images are captures of the same sprite.

    Images of different dimensions are never similar. Otherwise
    ``sample_count`` random coordinates are compared and the images are
    similar when at least ``min_matched_samples`` of them match exactly.

    Args:
        image_a: First image
        image_b: Second image
        sampler: Coordinate source; a fresh RandomPixelSampler by default
        sample_count: Number of coordinates to compare
        min_matched_samples: Matches required to call the images similar

    Returns:
        True if the images should share a group
    """
    if image_a.size != image_b.size:
        return False

    width, height = image_a.size
    if width == 0 or height == 0:
        # Nothing to sample; two empty images are the same empty sprite
        return True

    if sampler is None:
        sampler = RandomPixelSampler()

    matched = count_matching_samples(image_a, image_b, sampler, sample_count)
    return matched >= min_matched_samples


def exact_match(image_a: Image.Image, image_b: Image.Image) -> bool:
    """Exhaustive comparator: same size and every pixel identical."""
    if image_a.size != image_b.size:
        return False
    return list(as_rgba(image_a).getdata()) == list(as_rgba(image_b).getdata())


class SampledSimilarity:
    """Default similarity test binding a sampler to the match thresholds."""

    def __init__(
        self,
        sampler=None,
        sample_count: int = SAMPLE_COUNT,
        min_matched_samples: int = MIN_MATCHED_SAMPLES,
    ) -> None:
        self.sampler = sampler if sampler is not None else RandomPixelSampler()
        self.sample_count = sample_count
        self.min_matched_samples = min_matched_samples

    def __call__(self, candidate: Image.Image, representative: Image.Image) -> bool:
        return are_similar(
            candidate,
            representative,
            sampler=self.sampler,
            sample_count=self.sample_count,
            min_matched_samples=self.min_matched_samples,
        )

"""Tests for sampled pixel comparison."""

import random

import pytest
from hypothesis import assume, given, strategies as st
from PIL import Image

from spritefixer.dedup.sampling import (
    FixedPixelSampler,
    RandomPixelSampler,
    SampledSimilarity,
    are_similar,
    count_matching_samples,
    exact_match,
)
from tests.helpers.sprite_factory import RED, BLUE, make_noise_sprite, make_sprite, highlight_pixels


class TestDimensionCheck:
    """
    Images of different sizes are never similar, whatever their content.
    """

    @given(
        size_a=st.tuples(st.integers(1, 12), st.integers(1, 12)),
        size_b=st.tuples(st.integers(1, 12), st.integers(1, 12)),
    )
    def test_mismatched_dimensions_never_similar(self, size_a, size_b):
        assume(size_a != size_b)
        image_a = Image.new("RGBA", size_a, RED)
        image_b = Image.new("RGBA", size_b, RED)

        assert are_similar(image_a, image_b) is False
        assert are_similar(image_b, image_a) is False

    def test_transposed_dimensions_not_similar(self):
        image_a = Image.new("RGBA", (4, 8), RED)
        image_b = Image.new("RGBA", (8, 4), RED)

        assert not are_similar(image_a, image_b)


class TestIdenticalImages:
    @given(
        width=st.integers(1, 16),
        height=st.integers(1, 16),
        seed=st.integers(0, 1000),
    )
    def test_identical_images_always_similar(self, width, height, seed):
        image = make_noise_sprite(width, height, seed)

        assert are_similar(image, image.copy())

    def test_single_pixel_images(self):
        """Tiny images are sampled with repeats rather than rejected."""
        assert are_similar(make_sprite([[RED]]), make_sprite([[RED]]))
        assert not are_similar(make_sprite([[RED]]), make_sprite([[BLUE]]))

    def test_empty_images_similar(self):
        assert are_similar(Image.new("RGBA", (0, 0)), Image.new("RGBA", (0, 0)))


class TestSampling:
    def test_unrelated_noise_not_similar(self):
        image_a = make_noise_sprite(16, 16, seed=1)
        image_b = make_noise_sprite(16, 16, seed=2)

        assert not are_similar(image_a, image_b)

    def test_threshold_boundary(self):
        """Nine of ten sampled columns match."""
        top = [RED] * 10
        image_a = make_sprite([top])
        image_b = make_sprite([top[:9] + [BLUE]])
        sampler = FixedPixelSampler([(x, 0) for x in range(10)])

        assert are_similar(image_a, image_b, sampler=sampler, sample_count=10, min_matched_samples=9)
        assert not are_similar(image_a, image_b, sampler=sampler, sample_count=10, min_matched_samples=10)

    def test_samples_only_hit_chosen_points(self):
        base = make_noise_sprite(8, 8, seed=3)
        marked = highlight_pixels(base, [(2, 2)])

        on_mark = FixedPixelSampler([(2, 2)])
        off_mark = FixedPixelSampler([(0, 0), (7, 7)])

        assert count_matching_samples(base, marked, on_mark, 50) == 0
        assert count_matching_samples(base, marked, off_mark, 50) == 50
        assert not are_similar(base, marked, sampler=on_mark)
        assert are_similar(base, marked, sampler=off_mark)

    def test_default_thresholds(self):
        image = make_noise_sprite(4, 4, seed=4)
        sampler = FixedPixelSampler([(0, 0)])
        similarity = SampledSimilarity(sampler=sampler)

        assert similarity.sample_count == 50
        assert similarity.min_matched_samples == 45
        assert similarity(image, image.copy())


class TestImageModes:
    """Pixels compare by colour, not by how the image happens to be stored."""

    def test_rgb_and_rgba_copies_similar(self):
        rgba = make_noise_sprite(8, 8, seed=6)
        rgb = rgba.convert("RGB")

        assert are_similar(rgb, rgba)
        assert are_similar(rgba, rgb)
        assert exact_match(rgb, rgba)

    def test_palette_image_compared_by_colour(self):
        rgba = make_sprite([[RED, BLUE], [BLUE, RED]])
        palette = rgba.convert("RGB").convert("P")

        assert are_similar(palette, rgba)
        assert exact_match(palette, rgba)

    def test_mixed_modes_still_detect_differences(self):
        rgba = make_sprite([[RED]])
        rgb = make_sprite([[BLUE]]).convert("RGB")

        assert not are_similar(rgb, rgba)
        assert not exact_match(rgb, rgba)


class TestRandomPixelSampler:
    @given(
        width=st.integers(1, 64),
        height=st.integers(1, 64),
        count=st.integers(0, 100),
        seed=st.integers(0, 2**32 - 1),
    )
    def test_points_within_bounds(self, width, height, count, seed):
        sampler = RandomPixelSampler(random.Random(seed))
        points = list(sampler.sample(width, height, count))

        assert len(points) == count
        for x, y in points:
            assert 0 <= x < width
            assert 0 <= y < height

    def test_seeded_sampler_is_reproducible(self):
        first = list(RandomPixelSampler(random.Random(42)).sample(32, 32, 50))
        second = list(RandomPixelSampler(random.Random(42)).sample(32, 32, 50))

        assert first == second

    def test_single_pixel_repeats_coordinate(self):
        points = list(RandomPixelSampler().sample(1, 1, 50))

        assert points == [(0, 0)] * 50


class TestFixedPixelSampler:
    def test_cycles_points(self):
        sampler = FixedPixelSampler([(0, 0), (1, 1)])

        assert list(sampler.sample(4, 4, 5)) == [(0, 0), (1, 1), (0, 0), (1, 1), (0, 0)]

    def test_points_wrapped_to_bounds(self):
        sampler = FixedPixelSampler([(5, 9)])

        assert list(sampler.sample(4, 4, 1)) == [(1, 1)]

    def test_requires_points(self):
        with pytest.raises(ValueError):
            FixedPixelSampler([])


class TestExactMatch:
    def test_exact_match(self):
        image = make_noise_sprite(6, 6, seed=5)

        assert exact_match(image, image.copy())
        assert not exact_match(image, highlight_pixels(image, [(5, 5)]))
        assert not exact_match(image, make_noise_sprite(6, 7, seed=5))

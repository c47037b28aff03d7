from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from PIL import ImageColor

Color = Tuple[int, int, int, int]

# ARGB 0xFFFF00FF: pixels the extractor could not resolve.
HIGHLIGHT_COLOR: Color = (255, 0, 255, 255)

# ARGB 0xFF80C0FF: used where no copy of a sprite knows the real value.
BACKGROUND_COLOR: Color = (128, 192, 255, 255)

SAMPLE_COUNT = 50
MIN_MATCHED_SAMPLES = 45


def parse_color(value: str) -> Color:
    """Parse ``#rrggbb``, ``#rrggbbaa`` or a colour name into an RGBA tuple."""
    return ImageColor.getcolor(value, "RGBA")


@dataclass
class Settings:
    output_dir: Path = Path("out")
    sample_count: int = SAMPLE_COUNT
    min_matched_samples: int = MIN_MATCHED_SAMPLES
    highlight_color: Color = HIGHLIGHT_COLOR
    background_color: Color = BACKGROUND_COLOR
    write_manifest: bool = False

    def validate(self) -> "Settings":
        if self.sample_count <= 0:
            raise ValueError(f"sample_count must be positive, got {self.sample_count}")
        if not 1 <= self.min_matched_samples <= self.sample_count:
            raise ValueError(
                f"min_matched_samples must be between 1 and {self.sample_count}, "
                f"got {self.min_matched_samples}"
            )
        if self.highlight_color == self.background_color:
            raise ValueError("background_color must differ from highlight_color")
        return self

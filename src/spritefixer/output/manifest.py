"""
JSON manifest for a sprite fixing run.

Records which source files were merged into each output sprite and how
many of its highlighted pixels were repaired.
"""

import json
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..dedup.cluster import SpriteGroup
from ..repair.repairer import RepairedSprite
from ..logging import get_logger

logger = get_logger(__name__)

MANIFEST_VERSION = "1.0"
MANIFEST_FILE_NAME = "manifest.json"


@dataclass(frozen=True)
class ManifestItem:
    """Single output sprite."""
    group_id: int                           # Group the sprite was built from
    file_name: Optional[str]                # Output file name, None if not saved
    dimensions: Dict[str, int]              # Sprite dimensions
    sources: List[Optional[str]]            # Source files, master first
    donor_count: int                        # Images consulted besides the master
    replaced_pixels: int                    # Highlighted pixels filled from donors
    unresolved_pixels: List[List[int]]      # Coordinates set to background

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Manifest:
    version: str
    source_dir: str
    created: str
    total_items: int
    summary: Dict[str, Any]
    items: List[ManifestItem]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "source_dir": self.source_dir,
            "created": self.created,
            "total_items": self.total_items,
            "summary": self.summary,
            "items": [item.to_dict() for item in self.items],
        }


def build_manifest(
    source_dir: Path,
    groups: Sequence[SpriteGroup],
    sprites: Sequence[RepairedSprite],
    saved_paths: Dict[int, Path],
) -> Manifest:
    """
    Build a manifest describing every repaired sprite.

    Args:
        source_dir: Directory the sprites were read from
        groups: Groups the sprites were repaired from
        sprites: Repaired sprites
        saved_paths: Output path per group id, for sprites that were written

    Returns:
        Manifest object
    """
    groups_by_id = {group.group_id: group for group in groups}
    items = []
    for sprite in sprites:
        group = groups_by_id[sprite.group_id]
        saved = saved_paths.get(sprite.group_id)
        items.append(ManifestItem(
            group_id=sprite.group_id,
            file_name=saved.name if saved else None,
            dimensions={"width": sprite.image.width, "height": sprite.image.height},
            sources=list(group.sources),
            donor_count=len(group.donors),
            replaced_pixels=sprite.replaced,
            unresolved_pixels=[[x, y] for x, y in sprite.unresolved],
        ))

    summary = {
        "groups": len(items),
        "source_images": sum(len(item.sources) for item in items),
        "replaced_pixels": sum(item.replaced_pixels for item in items),
        "unresolved_pixels": sum(len(item.unresolved_pixels) for item in items),
        "saved": sum(1 for item in items if item.file_name),
    }

    return Manifest(
        version=MANIFEST_VERSION,
        source_dir=str(source_dir),
        created=datetime.now().isoformat(timespec="seconds"),
        total_items=len(items),
        summary=summary,
        items=items,
    )


def write_manifest_json(manifest: Manifest, output_dir: Path) -> Path:
    """Write ``manifest.json`` into ``output_dir``, replacing any previous one."""
    output_dir.mkdir(parents=True, exist_ok=True)
    manifest_path = output_dir / MANIFEST_FILE_NAME
    with manifest_path.open("w", encoding="utf-8") as fh:
        json.dump(manifest.to_dict(), fh, indent=2, ensure_ascii=False)
    logger.info(f"Wrote manifest with {manifest.total_items} items to {manifest_path}")
    return manifest_path

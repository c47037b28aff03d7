"""End-to-end run: read captures, group them, repair and save one sprite per group."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import Settings
from .dedup.cluster import GroupClassifier
from .dedup.sampling import SampledSimilarity, SimilarityTest
from .logging import get_logger
from .output.manifest import build_manifest, write_manifest_json
from .repair.repairer import SpriteRepairer
from .sprites import ImageDecodeError, ImageSaveError, find_image_files, load_image, save_image

logger = get_logger(__name__)


@dataclass
class FixSummary:
    files_found: int = 0
    images_loaded: int = 0
    decode_failures: int = 0
    groups: int = 0
    saved: int = 0
    skipped_existing: int = 0
    save_failures: int = 0
    unresolved_pixels: int = 0
    manifest_path: Optional[Path] = None


def fix_sprites(
    source_dir: Path | str,
    settings: Optional[Settings] = None,
    similarity: Optional[SimilarityTest] = None,
) -> FixSummary:
    """
    Fix every sprite found in ``source_dir``.

    Raises:
        SourceDirectoryError: If the directory is invalid or holds no images
    """
    source_dir = Path(source_dir)
    settings = (settings or Settings()).validate()
    if similarity is None:
        similarity = SampledSimilarity(
            sample_count=settings.sample_count,
            min_matched_samples=settings.min_matched_samples,
        )

    summary = FixSummary()

    logger.info(f"Finding files in {source_dir}")
    files = find_image_files(source_dir)
    summary.files_found = len(files)

    classifier = GroupClassifier(similarity)
    for path in files:
        logger.info(f"Reading image: {path}")
        try:
            image = load_image(path)
        except ImageDecodeError as exc:
            logger.warning(f"Skipping {path.name}: {exc}")
            summary.decode_failures += 1
            continue
        classifier.add(image, source=path.name)
        summary.images_loaded += 1

    groups = classifier.groups()
    summary.groups = len(groups)
    logger.info(f"Grouped {summary.images_loaded} images into {summary.groups} sprites")

    repairer = SpriteRepairer(settings.highlight_color, settings.background_color)
    sprites = []
    for group in groups:
        logger.info(f"Fixing image: {group.group_id}")
        sprite = repairer.repair_group(group)
        summary.unresolved_pixels += len(sprite.unresolved)
        sprites.append(sprite)

    output_dir = settings.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    saved_paths = {}
    for index, sprite in enumerate(sprites):
        path = output_dir / f"{index}.png"
        try:
            written = save_image(sprite.image, path)
        except ImageSaveError as exc:
            logger.error(str(exc))
            summary.save_failures += 1
            continue
        if written:
            summary.saved += 1
            saved_paths[sprite.group_id] = path
        else:
            logger.info(f"Not overwriting existing {path}")
            summary.skipped_existing += 1

    if settings.write_manifest:
        manifest = build_manifest(source_dir, groups, sprites, saved_paths)
        summary.manifest_path = write_manifest_json(manifest, output_dir)

    logger.info(
        f"Saved {summary.saved}/{len(sprites)} sprites to {output_dir} "
        f"({summary.skipped_existing} existing, {summary.save_failures} failed)"
    )
    return summary

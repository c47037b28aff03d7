from pathlib import Path

import typer

from .config import BACKGROUND_COLOR, HIGHLIGHT_COLOR, MIN_MATCHED_SAMPLES, SAMPLE_COUNT, Color, Settings, parse_color
from .logging import get_logger
from .pipeline import fix_sprites
from .sprites import SourceDirectoryError

logger = get_logger(__name__)

app = typer.Typer(help="SPRITEFIXER – merge duplicate sprite captures and repair unknown pixels", no_args_is_help=True)


def _color_option(value: str) -> str:
    try:
        parse_color(value)
    except ValueError as exc:
        raise typer.BadParameter(f"not a colour: {value}") from exc
    return value


def _hex(color: Color) -> str:
    return "#" + "".join(f"{channel:02x}" for channel in color)


@app.command()
def fix(
    source_dir: Path = typer.Argument(..., exists=True, help="Folder containing the extracted sprite images"),
    out: Path = typer.Option(Path("out"), "--out", "-o", help="Output directory for repaired sprites"),
    sample_count: int = typer.Option(SAMPLE_COUNT, min=1, help="Pixels sampled when comparing two images"),
    min_matched: int = typer.Option(MIN_MATCHED_SAMPLES, min=1, help="Matching samples needed to group two images"),
    highlight: str = typer.Option(_hex(HIGHLIGHT_COLOR), callback=_color_option, help="Colour marking unknown pixels"),
    background: str = typer.Option(_hex(BACKGROUND_COLOR), callback=_color_option, help="Colour for pixels no capture knows"),
    write_manifest: bool = typer.Option(False, "--write-manifest/--no-write-manifest", help="Write JSON manifest file"),
) -> None:
    """
    Group duplicate sprite captures in SOURCE_DIR and save one repaired PNG per group.

    Existing files in the output directory are never overwritten.
    """
    settings = Settings(
        output_dir=out,
        sample_count=sample_count,
        min_matched_samples=min_matched,
        highlight_color=parse_color(highlight),
        background_color=parse_color(background),
        write_manifest=write_manifest,
    )
    try:
        settings.validate()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    try:
        summary = fix_sprites(source_dir, settings)
    except SourceDirectoryError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=1) from exc

    typer.echo("Success!")
    typer.echo(f"Images read: {summary.images_loaded}/{summary.files_found}")
    if summary.decode_failures:
        typer.echo(f"Unreadable files skipped: {summary.decode_failures}")
    typer.echo(f"Sprites: {summary.groups}")
    typer.echo(f"Saved: {summary.saved} (kept existing: {summary.skipped_existing}, failed: {summary.save_failures})")
    typer.echo(f"Pixels set to background: {summary.unresolved_pixels}")
    if summary.manifest_path:
        typer.echo(f"Manifest: {summary.manifest_path}")
    typer.echo(f"Output directory: {out}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()

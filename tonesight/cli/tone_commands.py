"""
Tone correction CLI commands for ToneSight

Provides command-line access to the Shadows/Highlights engine.
"""

import sys
import click
import json
import logging
import time
from pathlib import Path
from typing import Optional

from tqdm import tqdm

from ..config import get_config_value
from ..exceptions import ToneSightError
from ..io import load_image, save_image, find_images
from ..preview import create_comparison_mosaic
from ..processing.tone import ToneCorrectionEngine, PRESETS, list_presets
from ..processing.tone.analysis import analyze_pixels, describe_image
from ..processing.tone.presets import PRESET_LABELS
from ..utils.logging import StructuredLogger, ProcessingStats

logger = logging.getLogger(__name__)


def _build_engine(config: dict, preset: Optional[str], shadows: Optional[float],
                  highlights: Optional[float], tonal_width: Optional[float],
                  blur_radius: Optional[float]) -> ToneCorrectionEngine:
    """Engine from config or preset, with explicit options taking precedence"""
    engine = ToneCorrectionEngine.from_config(config)
    if preset:
        engine = ToneCorrectionEngine.from_preset(preset, engine.constants)

    if shadows is not None:
        engine.set_shadow_amount(shadows)
    if highlights is not None:
        engine.set_highlight_amount(highlights)
    if tonal_width is not None:
        engine.set_tonal_width(tonal_width)
    if blur_radius is not None:
        engine.set_blur_radius(blur_radius)
    return engine


def _tone_options(func):
    """Shared parameter options for commands that build an engine"""
    options = [
        click.option('--preset', '-p', type=click.Choice(list_presets()),
                     help='Start from a named preset'),
        click.option('--shadows', '-s', type=float, help='Shadow lightening amount (0.0-1.0)'),
        click.option('--highlights', type=float,
                     help='Highlight darkening amount (0.0-1.0)'),
        click.option('--tonal-width', '-w', type=float, help='Tonal width (0.0-1.0)'),
        click.option('--blur-radius', '-r', type=float, help='Mask blur radius in px (0-50)'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('output_file', type=click.Path(dir_okay=False, path_type=Path))
@_tone_options
@click.pass_context
def correct(ctx, input_file: Path, output_file: Path, preset: Optional[str],
            shadows: Optional[float], highlights: Optional[float],
            tonal_width: Optional[float], blur_radius: Optional[float]):
    """Apply Shadows/Highlights correction to a single image"""
    config = ctx.obj['config']
    quiet = ctx.obj.get('quiet', False)

    try:
        engine = _build_engine(config, preset, shadows, highlights, tonal_width, blur_radius)
        if not quiet:
            click.echo(engine.describe_settings())

        image = load_image(input_file)
        start = time.time()
        result = engine.apply(image)
        elapsed = time.time() - start

        save_image(result, output_file, get_config_value(config, 'output.jpeg_quality', 95))
    except (ToneSightError, ValueError) as e:
        click.echo(f"❌ Error correcting {input_file}: {e}", err=True)
        sys.exit(1)

    if not quiet:
        click.echo(f"\n✅ Saved {output_file} ({elapsed:.2f}s)")


@click.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('output_dir', type=click.Path(file_okay=False, path_type=Path))
@click.option('--json-report', is_flag=True, help='Also write the pixel analysis as JSON')
@click.pass_context
def compare(ctx, input_file: Path, output_dir: Path, json_report: bool):
    """Run every preset on an image and write a comparison mosaic"""
    config = ctx.obj['config']
    quiet = ctx.obj.get('quiet', False)
    quality = get_config_value(config, 'output.jpeg_quality', 95)
    points = [tuple(p) for p in get_config_value(config, 'analysis.sample_points', [])]
    tile_size = (get_config_value(config, 'mosaic.tile_width', 600),
                 get_config_value(config, 'mosaic.tile_height', 400))
    columns = get_config_value(config, 'mosaic.columns', 2)

    try:
        image = load_image(input_file)
        base_engine = ToneCorrectionEngine.from_config(config)

        if not quiet:
            summary = describe_image(image)
            click.echo(f"📸 {input_file.name}: {summary.width}x{summary.height}, "
                       f"{summary.channels} channels, {summary.size_bytes} bytes")

        labelled = [("Original", image)]
        report = {}
        for name in list_presets():
            engine = ToneCorrectionEngine.from_parameters(PRESETS[name], base_engine.constants)
            result = engine.apply(image)
            save_image(result, output_dir / f"result_{name}.jpg", quality)
            labelled.append((PRESET_LABELS.get(name, name), result))

            comparisons = analyze_pixels(image, result, points)
            report[name] = [c.to_dict() for c in comparisons]

            if not quiet:
                click.echo(f"\n--- {PRESET_LABELS.get(name, name)} ---")
                for c in comparisons:
                    click.echo(f"Pixel ({c.x}, {c.y}): B/G/R {c.original} -> {c.result}, "
                               f"brightness {c.original_brightness:.1f} -> {c.result_brightness:.1f} "
                               f"(change: {c.brightness_change:+.1f})")

        mosaic = create_comparison_mosaic(labelled, tile_size=tile_size, columns=columns)
        mosaic_path = save_image(mosaic, output_dir / "comparison.jpg", quality)

        if json_report:
            with open(output_dir / "pixel_report.json", 'w') as f:
                json.dump(report, f, indent=2)
    except (ToneSightError, ValueError, OSError) as e:
        click.echo(f"❌ Error comparing presets on {input_file}: {e}", err=True)
        sys.exit(1)

    if not quiet:
        click.echo(f"\n💾 Results saved to: {output_dir} (mosaic: {mosaic_path.name})")


@click.command()
@click.argument('input_dir', type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument('output_dir', type=click.Path(file_okay=False, path_type=Path))
@_tone_options
@click.option('--recursive/--no-recursive', default=False, help='Process subdirectories')
@click.pass_context
def batch(ctx, input_dir: Path, output_dir: Path, preset: Optional[str],
          shadows: Optional[float], highlights: Optional[float],
          tonal_width: Optional[float], blur_radius: Optional[float], recursive: bool):
    """Correct every image in a directory"""
    config = ctx.obj['config']
    quiet = ctx.obj.get('quiet', False)
    quality = get_config_value(config, 'output.jpeg_quality', 95)
    suffix = get_config_value(config, 'output.suffix', '_sh')
    extensions = get_config_value(config, 'output.extensions', ['.jpg', '.jpeg', '.png'])

    try:
        engine = _build_engine(config, preset, shadows, highlights, tonal_width, blur_radius)
        images = find_images(input_dir, extensions, recursive=recursive)
    except (ToneSightError, ValueError) as e:
        click.echo(f"❌ Error preparing batch: {e}", err=True)
        sys.exit(1)

    if not images:
        click.echo("❌ No images found in directory", err=True)
        sys.exit(1)

    slog = StructuredLogger(__name__, {'batch': str(input_dir)})
    slog.info("Starting batch correction", images=len(images), **engine.get_settings())

    stats = ProcessingStats()
    stats.set_total(len(images))

    for image_path in tqdm(images, desc="Correcting images", disable=quiet):
        relative = image_path.relative_to(input_dir)
        destination = output_dir / relative.parent / f"{relative.stem}{suffix}{relative.suffix}"

        start = time.time()
        try:
            result = engine.apply(load_image(image_path))
            save_image(result, destination, quality)
        except (ToneSightError, ValueError) as e:
            slog.error("Correction failed", file=str(image_path), error=str(e))
            stats.add_error(str(image_path), str(e))
            continue
        stats.add_result(time.time() - start)

    if not quiet:
        click.echo(stats.format_summary())

    if stats.failed_images:
        sys.exit(1)


@click.command(name='presets')
def presets_command():
    """List the built-in parameter presets"""
    for name in list_presets():
        p = PRESETS[name]
        click.echo(f"{name:16s} shadows={p.shadow_amount:.2f} highlights={p.highlight_amount:.2f} "
                   f"tonal_width={p.tonal_width:.2f} blur_radius={p.blur_radius:.1f}")

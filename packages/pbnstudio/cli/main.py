"""Command-line interface for pbnstudio."""

from __future__ import annotations

import argparse
import asyncio
import logging
import mimetypes
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from pbnstudio.core.config.loader import build_http_config, load_app_config
from pbnstudio.core.config.models import AppConfig
from pbnstudio.core.generation.client import GenerationClient
from pbnstudio.core.generation.errors import GenerationError
from pbnstudio.core.generation.models import AnalysisResult, GenerationResult
from pbnstudio.core.generation.profiles import get_profile
from pbnstudio.core.imaging.errors import ImageProcessingError
from pbnstudio.core.imaging.sampler import sample_color
from pbnstudio.core.imaging.source import SourceImage
from pbnstudio.core.palette.io import load_palette
from pbnstudio.core.palette.store import PaletteStore
from pbnstudio.core.utils.color import rgb_to_hex
from pbnstudio.core.utils.data_url import decode_data_url
from pbnstudio.core.utils.logging import configure_logging

console = Console()
logger = logging.getLogger(__name__)


def _build_client(config: AppConfig, flow: str | None) -> GenerationClient:
    return GenerationClient(
        build_http_config(config),
        profile=get_profile(flow or config.flow),
        normalize_options=config.imaging,
    )


def write_outputs(result: GenerationResult, out_dir: Path) -> list[Path]:
    """Write every image the result carries into ``out_dir``.

    Returns:
        Paths written, in preview/template/svg/color key order.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    outputs = {
        "paint-by-number-preview": result.preview,
        "paint-by-number-template": result.template,
        "paint-by-number-template-svg": result.template_svg,
        "paint-by-number-color-key": result.color_key,
    }
    for stem, payload in outputs.items():
        if not payload:
            continue
        if payload.startswith("data:"):
            mime, data = decode_data_url(payload)
        else:
            # Raw SVG markup
            mime, data = "image/svg+xml", payload.encode("utf-8")
        ext = ".svg" if mime == "image/svg+xml" else (mimetypes.guess_extension(mime) or ".bin")
        path = out_dir / f"{stem}{ext}"
        path.write_bytes(data)
        written.append(path)
    return written


async def run_generate_async(
    config: AppConfig,
    image: SourceImage,
    palette: PaletteStore,
    detail: int | None,
    flow: str | None,
    out_dir: Path,
) -> int:
    """Generate a template and write the outputs.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    async with _build_client(config, flow) as client:
        profile = client.profile
        level = detail if detail is not None else profile.default_detail
        console.print(
            f"[bold]Flow:[/bold] {profile.name} "
            f"(detail {profile.detail_min}-{profile.detail_max}, using {level})"
        )
        with Progress(
            TextColumn("[bold]Generating"), BarColumn(), TaskProgressColumn(), console=console
        ) as progress:
            task = progress.add_task("generate", total=100)
            try:
                result = await client.generate(
                    image,
                    palette.snapshot(),
                    level,
                    on_progress=lambda pct: progress.update(task, completed=pct),
                )
            except GenerationError as e:
                console.print(f"[red]ERROR: {e.message}[/red]")
                return 1

    console.print(
        f"[green]Generated[/green] {result.dimensions.width} x {result.dimensions.height} pixels, "
        f"{result.region_count} regions, {result.colors_used} colors used"
    )
    for path in write_outputs(result, out_dir):
        console.print(f"   {path}")
    return 0


async def run_analyze_async(config: AppConfig, image: SourceImage, palette: PaletteStore) -> int:
    async with _build_client(config, None) as client:
        try:
            analysis = await client.analyze(image, palette.snapshot())
        except GenerationError as e:
            console.print(f"[red]ERROR: {e.message}[/red]")
            return 1
    console.print(render_analysis(analysis, palette))
    for rec in analysis.recommendations:
        console.print(f"[{_severity_style(rec.severity)}]{rec.severity.upper()}[/] {rec.message}")
    return 0


def _severity_style(severity: str) -> str:
    return {"error": "red", "warning": "yellow"}.get(severity.lower(), "cyan")


def render_analysis(analysis: AnalysisResult, palette: PaletteStore) -> Table:
    table = Table(title="Palette coverage")
    table.add_column("ID")
    table.add_column("Color")
    table.add_column("Pixels", justify="right")
    table.add_column("Coverage", justify="right")
    table.add_column("Avg distance", justify="right")
    for color_id, coverage in analysis.coverage.items():
        color = palette.get(color_id)
        table.add_row(
            color_id,
            color.hex if color else "?",
            str(coverage.pixel_count),
            f"{coverage.percentage:.1f}%",
            f"{coverage.avg_distance:.2f}",
        )
    return table


async def run_health_async(config: AppConfig) -> int:
    async with _build_client(config, None) as client:
        status = await client.health()
    if status is None:
        console.print("[yellow]Service unavailable[/yellow]")
        return 1
    console.print(f"[green]{status.status}[/green] version={status.version or 'unknown'}")
    if status.features:
        console.print(f"   features: {status.features}")
    return 0


def run_sample(args: argparse.Namespace) -> int:
    try:
        rgb = sample_color(Path(args.image).read_bytes(), args.x, args.y)
    except (OSError, ImageProcessingError) as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1
    console.print(f"RGB({rgb[0]}, {rgb[1]}, {rgb[2]})  {rgb_to_hex(rgb)}")
    return 0


def _load_inputs(args: argparse.Namespace) -> tuple[SourceImage, PaletteStore] | None:
    image_path = Path(args.image).resolve()
    if not image_path.exists():
        console.print(f"[red]ERROR: Image not found: {image_path}[/red]")
        return None
    try:
        image = SourceImage.from_path(image_path)
    except OSError as e:
        console.print(f"[red]ERROR: Could not read image: {e}[/red]")
        return None
    try:
        palette = load_palette(args.palette)
    except (OSError, ValueError) as e:
        console.print(f"[red]ERROR: Could not load palette: {e}[/red]")
        return None
    return image, palette


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="pbnstudio",
        description="pbnstudio - paint-by-number templates from your photos and paints",
    )
    p.add_argument("--config", default=None, help="Path to app config (JSON or YAML)")
    p.add_argument("--log-level", default=None, help="Override the configured log level")
    sub = p.add_subparsers(dest="cmd", required=True)

    gen = sub.add_parser("generate", help="Generate a paint-by-number template")
    gen.add_argument("--image", required=True, help="Photo to convert (PNG/JPEG/WEBP)")
    gen.add_argument("--palette", required=True, help="Palette file (JSON or YAML)")
    gen.add_argument("--detail", type=int, default=None, help="Detail level for the flow")
    gen.add_argument("--flow", choices=["threshold", "complexity"], default=None)
    gen.add_argument("--out", default=".", help="Output directory (default: current dir)")

    sample = sub.add_parser("sample", help="Sample a paint color from a photo")
    sample.add_argument("--image", required=True)
    sample.add_argument("--x", type=int, default=None, help="Column (default: center)")
    sample.add_argument("--y", type=int, default=None, help="Row (default: center)")

    analyze = sub.add_parser("analyze", help="Report how well a palette covers a photo")
    analyze.add_argument("--image", required=True)
    analyze.add_argument("--palette", required=True)

    sub.add_parser("health", help="Check the generation service")
    return p


def run(argv: list[str] | None = None) -> int:
    """Parse arguments and run a command.

    Returns:
        Exit code
    """
    args = build_arg_parser().parse_args(argv)

    try:
        config = load_app_config(args.config)
    except (OSError, ValueError, ValidationError) as e:
        console.print(f"[red]ERROR: Could not load config: {e}[/red]")
        return 1

    configure_logging(
        level=args.log_level or config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )

    if args.cmd == "sample":
        return run_sample(args)
    if args.cmd == "health":
        return asyncio.run(run_health_async(config))

    inputs = _load_inputs(args)
    if inputs is None:
        return 1
    image, palette = inputs
    if args.cmd == "analyze":
        return asyncio.run(run_analyze_async(config, image, palette))
    return asyncio.run(
        run_generate_async(config, image, palette, args.detail, args.flow, Path(args.out))
    )


def main() -> None:
    """Main entry point for CLI."""
    sys.exit(run())

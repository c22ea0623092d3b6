#!/usr/bin/env python3
"""
Batch SVG generator

Reads the base image once, then for each sequence number builds one decorated
document, runs it through the size-reduction passes and writes it as
``{prefix}_{seq:09d}.svg``. A failing sequence number is logged and skipped;
the rest of the batch carries on.

    svgbatch 1000 name_svg
"""

import argparse
import random
import sys
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from svgbatch.core import GenerationPolicy, OptimizerCfg, get_logger, load_config
from svgbatch.decor.canvas import BaseImageError, parse_base_image
from svgbatch.decor.compose import generate_one
from svgbatch.decor.sdk import Paths
from svgbatch.optimize import optimize_svg

log = get_logger("svgbatch.generate_batch")

Optimizer = Callable[[str], str]


class BatchReport(BaseModel):
    """Outcome of one batch run."""

    requested: int = Field(..., ge=0)
    written: List[str] = Field(default_factory=list, description="Paths written, in order")
    failed: Dict[int, str] = Field(default_factory=dict, description="Sequence number -> error")


def read_base_image(path: Union[str, Path]) -> str:
    """Read the base image once; any failure is fatal for the run."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise BaseImageError(f"Error reading the original SVG file {path}: {e}")


def load_base_image(path: Union[str, Path]) -> ET.Element:
    """Read and parse the base image once; the tree backs every document."""
    return parse_base_image(read_base_image(path))


def make_optimizer(cfg: Optional[OptimizerCfg] = None) -> Optimizer:
    cfg = cfg or OptimizerCfg()
    return lambda svg: optimize_svg(svg, multipass=cfg.multipass, plugins=cfg.plugins)


def _write_output(path: Path, content: str) -> None:
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    except Exception:
        if path.is_file():
            path.unlink()
        raise


def run_batch(
    count: int,
    prefix: str,
    base_svg: Union[str, ET.Element],
    output_dir: Union[str, Path],
    policy: Optional[GenerationPolicy] = None,
    optimizer: Optional[Optimizer] = None,
) -> BatchReport:
    """
    Generate ``count`` decorated SVGs into ``output_dir``.

    Args:
        count: Number of documents to attempt (sequence numbers 1..count)
        prefix: Filename prefix
        base_svg: Base image markup or parsed tree, embedded in every document
        output_dir: Destination directory, created if missing
        policy: Generation policy, defaults to GenerationPolicy()
        optimizer: ``str -> str`` size-reduction transform

    Returns:
        BatchReport listing written files and failed sequence numbers

    Raises:
        BaseImageError: If the base image markup cannot be parsed
        ValueError: If count is negative
    """
    if count < 0:
        raise ValueError("count must be >= 0")
    base_layer = base_svg if isinstance(base_svg, ET.Element) else parse_base_image(base_svg)
    policy = policy or GenerationPolicy()
    optimizer = optimizer or make_optimizer()
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    report = BatchReport(requested=count)
    log.info(f"Starting SVG generation for {count} files")

    for seq in range(1, count + 1):
        log.info(f"Processing SVG #{seq}")
        try:
            path = Paths.output_file(out_dir, prefix, seq)
            svg_content = generate_one(base_layer, policy)
            optimized = optimizer(svg_content)
            _write_output(path, optimized)
            report.written.append(str(path))
        except Exception as e:
            log.error(f"Error processing SVG #{seq}: {e}")
            report.failed[seq] = str(e)

    log.info(
        f"Generated {len(report.written)} of {count} SVG(s) with base filename '{prefix}'"
        + (f", {len(report.failed)} failed" if report.failed else "")
    )
    return report


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid count: {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError("count must be >= 0")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate randomized, animated SVG variants of a base image"
    )
    parser.add_argument("count", type=_non_negative_int, help="Number of SVGs to generate")
    parser.add_argument("prefix", help="Output filename prefix")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible batches")
    parser.add_argument("--config", default=None, help="Path to generator YAML config")
    parser.add_argument("--base-image", default=None, help="Base SVG file (default: GCLogo.svg)")
    parser.add_argument("--output-dir", default=None, help="Output directory (default: SVGs)")
    return parser


def _cli_overrides(args: argparse.Namespace) -> Dict:
    overrides: Dict = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.base_image:
        overrides.setdefault("storage", {})["base_image"] = args.base_image
    if args.output_dir:
        overrides.setdefault("storage", {})["output_dir"] = args.output_dir
    return overrides


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config, cli_overrides=_cli_overrides(args))
    except (FileNotFoundError, ValueError, ValidationError) as e:
        log.error(f"Invalid configuration: {e}")
        return 2

    if cfg.storage.log_file:
        get_logger("svgbatch", cfg.storage.log_file)

    try:
        base_layer = load_base_image(cfg.storage.base_image)
    except BaseImageError as e:
        log.error(str(e))
        return 1

    if cfg.seed is not None:
        random.seed(cfg.seed)

    run_batch(
        args.count,
        args.prefix,
        base_layer,
        cfg.storage.output_dir,
        policy=cfg.generation,
        optimizer=make_optimizer(cfg.optimizer),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

import argparse
import logging
from typing import Optional

from mandeldive.colormaps import list_colormap_names
from mandeldive.config import load_settings, normalise_settings
from mandeldive.logging_setup import configure_logging, get_logger, parse_level


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mandeldive", description="Interactive Mandelbrot explorer with click-zoom, drag-pan and auto-dive.")
    p.add_argument("--config", type=str, default=None, help="Path to a settings JSON merged over the packaged defaults.")
    p.add_argument("--width", type=int, default=None, help="Window width in pixels.")
    p.add_argument("--height", type=int, default=None, help="Window height in pixels.")
    p.add_argument("--max-iter", type=int, default=None, help="Initial iteration cap.")
    p.add_argument("--scheme", type=str, default=None, help="Color scheme: " + ", ".join(list_colormap_names()))
    p.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Log level.")
    p.add_argument("--log-file", type=str, default=None, help="Rotating log file path. Console only when omitted.")
    return p


def resolve_settings(args: argparse.Namespace) -> dict:
    settings = load_settings(args.config)
    overrides = {
        "width": args.width,
        "height": args.height,
        "max_iterations": args.max_iter,
        "color_scheme": args.scheme,
    }
    settings.update({k: v for k, v in overrides.items() if v is not None})
    return normalise_settings(settings)


def main(argv: Optional[list] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    configure_logging(level=parse_level(args.log_level), log_file=args.log_file)
    logger = get_logger()

    try:
        settings = resolve_settings(args)
    except (OSError, ValueError) as exc:
        logger.error("Invalid settings: %s", exc)
        return 2

    logger.info("Starting explorer %sx%s iter=%s scheme=%s", settings["width"], settings["height"],
                settings["max_iterations"], settings["color_scheme"].display_name)

    # pygame is only needed for the window
    from mandeldive.app import run
    run(settings)
    return 0

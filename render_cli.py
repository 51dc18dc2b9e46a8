"""
render_cli.py

Render an elementary cellular automaton to a PNG, or to a standalone HTML
page with the image inlined.

Example (PNG)
-------
python render_cli.py --rule 30 --cells 401 --steps 200 \
       --start-type middle --outfile out/rule30.png

Example (HTML, random start)
-------
python render_cli.py --rule 110 --cells 300 --steps 300 \
       --seed 7 --format html --outfile out/rule110.html
"""

from __future__ import annotations
import argparse, pathlib
from typing import List

import yaml

from config import load_settings
from generate import StartType
from page import render_page
from params import RequestParams
from render import data_uri, log_entry, make_renderer, render_for_params
from render_logger import log_render
from rules import InvalidArgument

FORMATS = ("png", "html")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Render an elementary cellular automaton.")

    p.add_argument("--rule", type=int, default=None, help="Wolfram rule number (0-255).")
    p.add_argument("--cells", type=int, default=None, help="Number of cells per row.")
    p.add_argument("--steps", type=int, default=None, help="Number of steps after the initial row.")
    p.add_argument(
        "--start-type",
        choices=[t.value for t in StartType],
        default=StartType.RANDOM.value,
        help="Initial row: a single live cell (left/middle/right) or random/--initial.",
    )
    p.add_argument("--initial", default="", help="Binary string tiled across the initial row.")
    p.add_argument("--seed", type=int, default=None, help="RNG seed for a random initial row (0 = unseeded).")
    p.add_argument("--format", choices=FORMATS, default=None, help="Output format (default: from --outfile suffix).")
    p.add_argument("--outfile", type=pathlib.Path, required=True, help="Where to write the image or page.")
    p.add_argument("--config", type=pathlib.Path, default=None, help="YAML settings file.")
    return p


def output_format(args: argparse.Namespace) -> str:
    if args.format:
        return args.format
    return "html" if args.outfile.suffix.lower() in (".html", ".htm") else "png"


def main(argv: List[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        parser.error(f"could not load settings: {e}")

    params = RequestParams(
        rule=settings.rule if args.rule is None else args.rule,
        cells=settings.cells_bounds.clamp(settings.cells if args.cells is None else args.cells),
        steps=settings.steps_bounds.clamp(settings.steps if args.steps is None else args.steps),
        initial=args.initial,
        seed=settings.seed if args.seed is None else args.seed,
        start_type=StartType(args.start_type),
    )

    try:
        image = render_for_params(make_renderer(settings), params)
    except InvalidArgument as e:
        parser.error(str(e))

    fmt = output_format(args)
    args.outfile.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "html":
        args.outfile.write_text(render_page(params, data_uri(image)), encoding="utf-8")
    else:
        args.outfile.write_bytes(image.data)
    log_render(log_entry(params, image, "cli"), log_file=settings.log_file)

    print(f"Wrote rule {params.rule} ({image.grid.width}x{image.grid.height}) to {args.outfile}")


if __name__ == "__main__":
    main()

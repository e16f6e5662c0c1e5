#!python3
"""
Command line for the icon sprite builder.

    icons build -i other/svg-icons -o public/icons --optimize

Any option left off the command line is asked for interactively.
"""

import argparse
import json
import logging
from pathlib import Path
from typing import Callable, List, Optional

from sprite import BuildOptions, build
from utils import IconsError, setup_logging

DEFAULT_INPUT = "other/svg-icons"

Ask = Callable[[str, str], str]
Confirm = Callable[[str], bool]


def ask(message: str, default: str) -> str:
    answer = input(f"{message} [{default}] ").strip()
    return answer or default


def confirm(message: str) -> bool:
    answer = input(f"{message} [y/N] ").strip().lower()
    return answer in ("y", "yes")


def find_package_json(start: Path) -> Optional[Path]:
    start = start.resolve()
    for directory in (start, *start.parents):
        path = directory / "package.json"
        if path.is_file():
            return path
    return None


def detect_framework(cwd: Path) -> str:
    """Guess the web framework from the nearest package.json: next, vite, remix or unknown."""
    path = find_package_json(cwd)
    if path is None:
        return "unknown"
    try:
        package = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logging.debug(f"Could not read {path}: {e}")
        return "unknown"

    dependencies = package.get("dependencies") or {}
    dev_dependencies = package.get("devDependencies") or {}
    if "next" in dependencies:
        return "next"
    if "vite" in dependencies or "vite" in dev_dependencies:
        return "vite"
    if "remix" in dependencies or "@remix-run/react" in dependencies:
        return "remix"
    return "unknown"


def component_folder(cwd: Path, framework: str) -> str:
    has_src = (cwd / "src").is_dir()
    has_app = (cwd / "app").is_dir() or (cwd / "src" / "app").is_dir()

    if framework != "next" and has_app:
        return "src/app/components/ui" if has_src else "app/components/ui"
    return "src/components/ui" if has_src else "components/ui"


def default_output(cwd: Path, framework: str) -> str:
    if framework == "next":
        return "public/icons"
    return f"{component_folder(cwd, framework)}/icons"


def resolve_build_options(
    args: argparse.Namespace,
    cwd: Path,
    ask: Ask = ask,
    confirm: Confirm = confirm,
) -> BuildOptions:
    """Fill in everything the flags left out, then resolve paths against cwd."""
    prompted = False

    input_dir = args.input
    if not input_dir:
        prompted = True
        input_dir = ask("Where are the input SVGs stored?", DEFAULT_INPUT)

    output_dir = args.output
    if not output_dir:
        prompted = True
        output_dir = ask(
            "Where should the output be stored?",
            default_output(cwd, detect_framework(cwd)),
        )

    optimize = args.optimize
    if optimize is None:
        optimize = confirm("Optimize the output SVG using scour?")

    if prompted:
        hint = f"icons build -i {input_dir} -o {output_dir}"
        if optimize:
            hint += " --optimize"
        logging.info(f"You can also pass these options as flags: {hint}")

    return BuildOptions(
        input_dir=cwd / input_dir,
        output_dir=cwd / output_dir,
        sprite_dir=cwd / args.sprite_dir if args.sprite_dir else None,
        optimize=optimize,
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="icons",
        description="Build a directory of SVG icons into a sprite sheet with typed names.",
    )
    subparsers = parser.add_subparsers(dest="command")

    build_parser = subparsers.add_parser(
        "build", help="Build SVG icons into a sprite sheet"
    )
    build_parser.add_argument(
        "-i",
        "--input",
        help="The relative path where the source SVGs are stored",
    )
    build_parser.add_argument(
        "-o",
        "--output",
        help="Where the output sprite sheet and types should be stored",
    )
    build_parser.add_argument(
        "--sprite-dir",
        "--spriteDir",
        dest="sprite_dir",
        help="Where the output sprite sheet should be stored (defaults to --output)",
    )
    build_parser.add_argument(
        "--optimize",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Optimize the output SVG using scour",
    )
    build_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every icon and output file",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command != "build":
        parser.print_help()
        return 0

    setup_logging(args.verbose)

    try:
        options = resolve_build_options(args, Path.cwd())
    except (EOFError, KeyboardInterrupt):
        logging.error("Cancelled")
        return 1

    try:
        build(options)
    except IconsError as e:
        logging.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

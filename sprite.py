"""Build an SVG sprite sheet, its name.d.ts manifest and a README from a directory of icons."""

import logging
import unicodedata
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from tqdm import tqdm

from manifest import MANIFEST_NAME, README, README_NAME, quote_name, render_manifest
from svg import assemble_sprite, load_optimizer_config, normalize_symbol, optimize_sprite
from utils import (
    IconsError,
    InputNotFoundError,
    WriteFailureError,
    icon_name,
    read_output,
    write_if_changed,
)

SPRITE_NAME = "sprite.svg"


@dataclass(frozen=True)
class BuildOptions:
    input_dir: Path
    output_dir: Path
    sprite_dir: Optional[Path] = None
    optimize: bool = False

    @property
    def sprite_path(self) -> Path:
        return (self.sprite_dir or self.output_dir) / SPRITE_NAME

    @property
    def manifest_path(self) -> Path:
        return self.output_dir / MANIFEST_NAME

    @property
    def readme_path(self) -> Path:
        return self.output_dir / README_NAME


@dataclass(frozen=True)
class BuildResult:
    icon_names: List[str]
    up_to_date: bool = False
    sprite_changed: bool = False
    manifest_changed: bool = False
    readme_changed: bool = False

    @property
    def changed(self) -> bool:
        return self.sprite_changed or self.manifest_changed or self.readme_changed


# Root collation order: punctuation and symbols, then digits, then letters.
COLLATION_SYMBOLS = "_-,;:!?.'\"()[]{}@*/\\&#%`^+<=>|~$"


def primary_weight(char: str):
    if char in COLLATION_SYMBOLS:
        return 0, COLLATION_SYMBOLS.index(char)
    if char.isdigit():
        return 1, ord(char)
    return 2, ord(char)


def sort_key(file: str):
    """
    Locale-style ordering of relative paths.

    Compares accent- and case-insensitive first, then accents, then case with
    lowercase ahead of uppercase.
    """
    folded = file.casefold()
    base = "".join(
        char
        for char in unicodedata.normalize("NFD", folded)
        if not unicodedata.combining(char)
    )
    return tuple(primary_weight(char) for char in base), folded, file.swapcase()


def find_icon_files(input_dir: Path) -> List[str]:
    """
    All `**/*.svg` files under input_dir as sorted, `/`-separated relative paths.

    Hidden files and anything inside hidden directories are skipped.
    """
    if not input_dir.is_dir():
        raise InputNotFoundError(f"Input directory {input_dir} does not exist")

    files = []
    for path in input_dir.glob("**/*.svg"):
        relative = path.relative_to(input_dir)
        if not path.is_file() or any(part.startswith(".") for part in relative.parts):
            continue
        files.append(relative.as_posix())

    if not files:
        raise InputNotFoundError(f"No SVG files found in {input_dir}")

    return sorted(files, key=sort_key)


def is_up_to_date(names: Iterable[str], current_sprite: str, current_manifest: str) -> bool:
    """
    Cheap substring check against the existing outputs.

    Never notices removed icons, and can be fooled by a name that appears inside
    another identifier. Both are accepted in exchange for skipping all parsing.
    """
    names = list(names)
    sprite_up_to_date = all(f"id={name}" in current_sprite for name in names)
    manifest_up_to_date = all(quote_name(name) in current_manifest for name in names)
    return sprite_up_to_date and manifest_up_to_date


def load_symbol(input_dir: Path, file: str) -> str:
    try:
        data = (input_dir / file).read_bytes()
    except OSError as e:
        raise IconsError(f"Could not read {file}: {e}") from e
    return normalize_symbol(data, icon_name(file), file)


def generate_symbols(files: List[str], input_dir: Path) -> List[str]:
    """Normalize every file on a thread pool, keeping the order of files."""
    symbols: Dict[int, str] = {}

    with ThreadPoolExecutor() as executor:
        futures = {
            executor.submit(load_symbol, input_dir, file): index
            for index, file in enumerate(files)
        }
        for future in tqdm(
            as_completed(futures),
            total=len(futures),
            desc="Generating symbols",
            unit=" files",
            leave=False,
        ):
            symbols[futures[future]] = future.result()

    return [symbols[index] for index in range(len(files))]


def make_output_dirs(options: BuildOptions):
    for directory in {options.output_dir, options.sprite_path.parent}:
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WriteFailureError(directory, e) from e


def build(options: BuildOptions) -> BuildResult:
    files = find_icon_files(options.input_dir)
    names = [icon_name(file) for file in files]

    current_sprite = read_output(options.sprite_path)
    current_manifest = read_output(options.manifest_path)
    if is_up_to_date(names, current_sprite, current_manifest):
        logging.debug("Icons are up to date")
        return BuildResult(icon_names=names, up_to_date=True)

    logging.debug(f"Generating sprite for {options.input_dir}")
    document = assemble_sprite(generate_symbols(files, options.input_dir))
    if options.optimize:
        document = optimize_sprite(document, load_optimizer_config(Path.cwd()))

    # Nothing is touched on disk until every file has been normalized.
    make_output_dirs(options)

    sprite_changed = write_if_changed(options.sprite_path, document)
    for file in files:
        logging.debug(f"Added {file}")
    logging.debug(f"Saved to {options.sprite_path}")

    manifest_changed = write_if_changed(options.manifest_path, render_manifest(names))
    logging.debug(f"Manifest saved to {options.manifest_path}")

    readme_changed = write_if_changed(options.readme_path, README)

    result = BuildResult(
        icon_names=names,
        sprite_changed=sprite_changed,
        manifest_changed=manifest_changed,
        readme_changed=readme_changed,
    )
    if result.changed:
        logging.info(f"Generated {len(files)} icons")
    return result

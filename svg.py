import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from lxml import etree
from scour import scour

from utils import IconsError, MalformedSvgError

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

GENERATED_COMMENT = "<!-- This file is generated by icons build -->"

# Root element only; nested <svg> elements keep theirs.
STRIPPED_ATTRIBUTES = ("version", "width", "height")

OPTIMIZER_CONFIG_NAME = "scour.json"

# Every symbol sits unreferenced in <defs> and is addressed by id from outside.
DEFAULT_OPTIMIZER_OPTIONS = {
    "keep_defs": True,
    "strip_ids": False,
    "shorten_ids": False,
}


def find_svg_element(root):
    for elem in root.iter():
        if isinstance(elem.tag, str) and etree.QName(elem).localname == "svg":
            return elem
    return None


def normalize_symbol(data: Union[bytes, str], name: str, file: Optional[str] = None) -> str:
    """
    Rewrite one standalone SVG into a `<symbol id="name">` fragment.

    The first <svg> element in document order becomes the symbol. Its sizing and
    namespace attributes are dropped so the consumer controls the rendered size,
    and elements in the SVG namespace are un-prefixed so no xmlns declaration
    leaks into the shared sprite.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    try:
        root = etree.fromstring(data)
    except etree.XMLSyntaxError as e:
        raise MalformedSvgError(file or name, f"Could not parse SVG ({e})") from e

    svg = find_svg_element(root)
    if svg is None:
        raise MalformedSvgError(file or name)

    symbol = etree.Element("symbol")
    symbol.set("id", name)
    for key, value in svg.attrib.items():
        if key == "id" or key in STRIPPED_ATTRIBUTES:
            continue
        symbol.set(key, value)

    symbol.text = svg.text
    for child in list(svg):
        symbol.append(child)

    for elem in symbol.iter():
        if isinstance(elem.tag, str) and etree.QName(elem).namespace == SVG_NS:
            elem.tag = etree.QName(elem).localname
    etree.cleanup_namespaces(symbol)

    return etree.tostring(symbol, encoding="unicode").strip()


def assemble_sprite(symbols: List[str]) -> str:
    return "\n".join(
        [
            '<?xml version="1.0" encoding="UTF-8"?>',
            GENERATED_COMMENT,
            f'<svg xmlns="{SVG_NS}" xmlns:xlink="{XLINK_NS}" width="0" height="0">',
            "<defs>",
            *symbols,
            "</defs>",
            "</svg>",
            "",  # trailing newline
        ]
    )


def load_optimizer_config(start: Path) -> Optional[dict]:
    """Read the nearest scour.json, looking in start and then each parent directory."""
    start = start.resolve()
    for directory in (start, *start.parents):
        path = directory / OPTIMIZER_CONFIG_NAME
        if not path.is_file():
            continue

        logging.debug(f"Loading optimizer config from {path}")
        try:
            config = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise IconsError(f"{path}: Invalid optimizer config ({e})") from e
        if not isinstance(config, dict):
            raise IconsError(f"{path}: Optimizer config must be a JSON object")
        return config

    return None


def optimize_sprite(document: str, config: Optional[dict] = None) -> str:
    options = scour.sanitizeOptions()
    for key, value in {**DEFAULT_OPTIMIZER_OPTIONS, **(config or {})}.items():
        if not hasattr(options, key):
            logging.warning(f"Ignoring unknown optimizer option {key!r}")
            continue
        setattr(options, key, value)

    return scour.scourString(document, options)

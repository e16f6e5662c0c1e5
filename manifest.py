"""Render the generated companion files that sit next to the sprite: name.d.ts and README.md."""

import json
from typing import Iterable

MANIFEST_NAME = "name.d.ts"
README_NAME = "README.md"

README = """# Icons

This directory contains SVG icons that are used by the app.

Everything in this directory is generated by running `icons build`.
"""


def quote_name(name: str) -> str:
    return json.dumps(name, ensure_ascii=False)


def render_manifest(names: Iterable[str]) -> str:
    quoted = [quote_name(name) for name in names]

    lines = ["// This file is generated by icons build", "", "export type IconName ="]
    if quoted:
        lines.append("\t| " + "\n\t| ".join(quoted) + ";")
    else:
        lines.append("\tnever;")
    lines.append("")

    return "\n".join(lines)

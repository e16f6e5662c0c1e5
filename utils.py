import logging
import re
from pathlib import Path


COLORS = {
    "DEBUG": "\033[36m",  # cyan
    "INFO": "\033[32m",  # green
    "WARNING": "\033[33m",  # yellow
    "ERROR": "\033[31m",  # red
    "CRITICAL": "\033[1;31m",  # bold red
}
COLOR_RESET = "\033[0m"

SVG_SUFFIX_RE = re.compile(r"\.svg$")


class ColorFormatter(logging.Formatter):
    def format(self, record):
        color = COLORS.get(record.levelname, "")
        record.levelname = f"{color}{record.levelname}{COLOR_RESET}"
        return super().format(record)


def setup_logging(verbose: bool = False):
    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter("%(levelname)s %(message)s"))
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG if verbose else logging.INFO)


class IconsError(Exception):
    """Base class for every failure that aborts a build."""


class InputNotFoundError(IconsError):
    pass


class MalformedSvgError(IconsError):
    def __init__(self, file: str, reason: str = "No SVG element found"):
        super().__init__(f"{file}: {reason}")
        self.file = file
        self.reason = reason


class WriteFailureError(IconsError):
    def __init__(self, path: Path, cause: OSError):
        super().__init__(f"Could not write to {path}: {cause}")
        self.path = path
        self.cause = cause


def icon_name(file: str) -> str:
    """Icon name for a relative path: separators normalized to `/`, trailing `.svg` removed."""
    return SVG_SUFFIX_RE.sub("", file.replace("\\", "/"))


def read_output(path: Path) -> str:
    """Current content of a generated file, or "" on first run."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return ""
    except OSError as e:
        raise WriteFailureError(path, e) from e


def write_if_changed(path: Path, content: str) -> bool:
    """
    Write content to path unless the file already holds exactly its UTF-8 bytes.

    A missing file counts as empty. Returns True if the file was written.
    """
    data = content.encode("utf-8")
    try:
        if path.read_bytes() == data:
            return False
    except FileNotFoundError:
        if not data:
            return False
    except OSError as e:
        raise WriteFailureError(path, e) from e

    try:
        path.write_bytes(data)
    except OSError as e:
        raise WriteFailureError(path, e) from e
    return True

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def file_exists(path: Path | str) -> bool:
    """Return True if path exists and is not a directory."""
    return Path(path).is_file()


def safe_int(value: str | None, default: int = 0) -> int:
    """Parse a non-negative integer, falling back to default on garbage."""
    try:
        result = int(value.strip()) if value else default
    except (TypeError, ValueError):
        logger.debug(f"Failed to parse integer '{value}', using {default}")
        return default
    return result if result >= 0 else default


def split_lines(text: str) -> list[str]:
    """Split text on newlines only, dropping a trailing carriage return from each line.

    Unlike str.splitlines(), form feeds and unicode line separators stay part of the line.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]

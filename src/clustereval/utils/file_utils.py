"""File reading helpers."""

from pathlib import Path


def read_jsonl_lines(path: str | Path) -> list[str]:
    """Read the non-blank lines of a JSON Lines file, stripped.

    Decoding is left to the caller so it can report which row is malformed.
    Returns an empty list if the file does not exist.
    """
    path = Path(path)
    if not path.exists():
        return []
    lines: list[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line:
            continue
        lines.append(line)
    return lines

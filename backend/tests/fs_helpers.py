"""Temp-directory tree builders shared by the file-system tests."""

from pathlib import Path


def make_tree(root: Path, layout: dict) -> None:
    """Create ``{"dir": {"1.txt": "content", "empty": {}}}`` under root."""
    for name, value in layout.items():
        target = root / name
        if isinstance(value, dict):
            target.mkdir()
            make_tree(target, value)
        else:
            target.write_text(value, encoding="utf-8")


def snapshot(root: Path) -> dict[str, bytes | None]:
    """Relative path -> bytes (None for directories) for a whole tree."""
    return {
        p.relative_to(root).as_posix(): (None if p.is_dir() else p.read_bytes())
        for p in sorted(root.rglob("*"))
    }

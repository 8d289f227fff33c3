"""Filesystem capability used to persist the generated site."""

from __future__ import annotations

from pathlib import Path


class SiteWriter:
    """Create directories and write files, reporting each written path."""

    def __init__(self) -> None:
        self.written: list[Path] = []

    def ensure_dir(self, path: Path) -> Path:
        """Create ``path`` and its parents when missing."""
        path.mkdir(parents=True, exist_ok=True)
        return path

    def write_file(self, path: Path, data: bytes | str) -> Path:
        """Write ``data`` to ``path``; text is encoded as UTF-8."""
        if isinstance(data, str):
            if not data.endswith("\n"):
                data += "\n"
            path.write_text(data, encoding="utf-8")
        else:
            path.write_bytes(data)
        self.written.append(path)
        return path


__all__ = ["SiteWriter"]

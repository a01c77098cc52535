"""Helper utilities for writing package.xml manifests in tests."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence, Tuple
from xml.sax.saxutils import escape

NAMESPACE = "http://soap.sforce.com/2006/04/metadata"


class ManifestBuilder:
    """Utility for writing throwaway package.xml files under a temp directory."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path

    def render(
        self,
        types: Iterable[Tuple[str, Sequence[str]]],
        *,
        version: str | None = "59.0",
        namespace: str | None = NAMESPACE,
    ) -> str:
        """Return package.xml text for `(name, members)` pairs."""
        xmlns = f' xmlns="{namespace}"' if namespace else ""
        lines = ['<?xml version="1.0" encoding="UTF-8"?>', f"<Package{xmlns}>"]
        for name, members in types:
            lines.append("    <types>")
            for member in members:
                lines.append(f"        <members>{escape(member)}</members>")
            lines.append(f"        <name>{escape(name)}</name>")
            lines.append("    </types>")
        if version is not None:
            lines.append(f"    <version>{version}</version>")
        lines.append("</Package>")
        return "\n".join(lines) + "\n"

    def write(
        self,
        types: Iterable[Tuple[str, Sequence[str]]],
        *,
        filename: str = "package.xml",
        version: str | None = "59.0",
    ) -> Path:
        """Write a manifest and return its path."""
        path = self.root / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(types, version=version), encoding="utf-8")
        return path


__all__ = ["ManifestBuilder", "NAMESPACE"]

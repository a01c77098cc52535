"""Loading of package.xml manifests into :class:`Manifest` values."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List

from .logging import get_logger
from .models import Manifest, TypeGroup

_logger = get_logger("manifest")


class ManifestError(RuntimeError):
    """Raised when a manifest cannot be read or parsed."""


def load_manifest(path: Path) -> Manifest:
    """Read ``path`` and parse it as a package.xml manifest."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(str(exc)) from exc
    manifest = parse_manifest(text)
    _logger.debug(
        "Loaded %d type group(s) from %s (version=%s)",
        len(manifest.types),
        path,
        manifest.version or "unset",
    )
    return manifest


def parse_manifest(text: str) -> Manifest:
    """Parse package.xml content, keeping groups and members in document order."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise ManifestError(f"invalid XML: {exc}") from exc

    namespace = _detect_xml_namespace(root)
    types_tag = _qualify("types", namespace)
    members_tag = _qualify("members", namespace)
    name_tag = _qualify("name", namespace)
    version_tag = _qualify("version", namespace)

    groups: List[TypeGroup] = []
    for index, element in enumerate(root.findall(types_tag), start=1):
        name = (element.findtext(name_tag) or "").strip()
        if not name:
            raise ManifestError(f"<types> block #{index} is missing a <name>")
        members = tuple(
            (member.text or "").strip() for member in element.findall(members_tag)
        )
        groups.append(TypeGroup(name=name, members=members))

    version = root.findtext(version_tag)
    if version is not None:
        version = version.strip() or None

    return Manifest(types=tuple(groups), version=version)


def _detect_xml_namespace(element: ET.Element) -> str | None:
    match = re.match(r"\{(.+)}", element.tag)
    return match.group(1) if match else None


def _qualify(tag: str, namespace: str | None) -> str:
    return f"{{{namespace}}}{tag}" if namespace else tag


__all__ = ["ManifestError", "load_manifest", "parse_manifest"]

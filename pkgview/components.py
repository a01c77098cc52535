"""Flattening of manifest groups into sortable component rows."""

from __future__ import annotations

from typing import Dict, Iterable, List

from .logging import get_logger
from .models import ComponentRow, Manifest, SortOrder

_logger = get_logger("components")

# Types whose members are split on the first separator into Parent and Member.
SPLIT_SEPARATORS: Dict[str, str] = {
    "AssignmentRule": ".",
    "CustomField": ".",
    "ListView": ".",
    "RecordType": ".",
    "SharingCriteriaRule": ".",
    "SharingOwnerRule": ".",
    "SharingTerritoryRule": ".",
    "Layout": "-",
}


def split_member(metadata_type: str, member: str) -> tuple[str, str]:
    """Return ``(parent, member)`` for ``member`` according to the split policy."""
    separator = SPLIT_SEPARATORS.get(metadata_type)
    if separator is None:
        return "", member
    parent, found, rest = member.partition(separator)
    if not found:
        return "", member
    return parent, rest


def flatten_components(manifest: Manifest, split_parent: bool = True) -> List[ComponentRow]:
    """Expand every (type, member) pair into a row, preserving document order."""
    rows: List[ComponentRow] = []
    for group in manifest.types:
        for member in group.members:
            if split_parent:
                parent, leaf = split_member(group.name, member)
            else:
                parent, leaf = "", member
            rows.append(ComponentRow(metadata_type=group.name, parent=parent, member=leaf))
    return rows


def sort_components(rows: Iterable[ComponentRow], sort_order: SortOrder) -> List[ComponentRow]:
    """Apply ``sort_order`` to ``rows`` and return a new list."""
    if sort_order is SortOrder.BY_TYPE:
        return sorted(rows, key=ComponentRow.sort_key)
    return list(rows)


def build_rows(
    manifest: Manifest,
    sort_order: SortOrder = SortOrder.BY_TYPE,
    split_parent: bool = True,
) -> List[ComponentRow]:
    """Flatten ``manifest`` and order the result."""
    rows = sort_components(flatten_components(manifest, split_parent), sort_order)
    _logger.debug(
        "Flattened %d row(s) (sort=%s, split_parent=%s)",
        len(rows),
        sort_order.value,
        split_parent,
    )
    return rows


__all__ = [
    "SPLIT_SEPARATORS",
    "build_rows",
    "flatten_components",
    "sort_components",
    "split_member",
]

"""Core data models shared across pkgview components."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class OutputFormat(str, Enum):
    """Rendering mode for the flattened rows."""

    TABLE = "table"
    CSV = "csv"
    TSV = "tsv"


class SortOrder(str, Enum):
    """Ordering applied to the flattened rows before rendering."""

    BY_TYPE = "by-type"
    AS_IS = "as-is"


@dataclass(frozen=True)
class TypeGroup:
    """One ``<types>`` block: a metadata type name and its member identifiers."""

    name: str
    members: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Manifest:
    """Loaded form of a package.xml document, groups in document order."""

    types: Tuple[TypeGroup, ...] = ()
    version: Optional[str] = None


@dataclass(frozen=True)
class ComponentRow:
    """Flattened, display-ready record.

    ``parent`` is an empty string both when the type is not splittable and
    when no separator was found in the member.
    """

    metadata_type: str
    parent: str = ""
    member: str = ""

    def sort_key(self) -> Tuple[str, str, str]:
        return (self.metadata_type, self.parent, self.member)

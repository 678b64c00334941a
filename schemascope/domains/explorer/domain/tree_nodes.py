"""Explorer tree node types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .entities import Entity


class NodeKind(str, Enum):
    """Kinds of explorer rows: the connection root, folders, and leaves."""

    CONNECTION = "connection"

    # Folders
    SCHEMAS_FOLDER = "schemas"
    TABLES_FOLDER = "tables"
    VIEWS_FOLDER = "views"
    FUNCTIONS_FOLDER = "functions"
    SEQUENCES_FOLDER = "sequences"
    TYPES_FOLDER = "types"
    COLUMNS_FOLDER = "columns"
    INDEXES_FOLDER = "indexes"
    FOREIGN_KEYS_FOLDER = "foreign_keys"
    TRIGGERS_FOLDER = "triggers"
    POLICIES_FOLDER = "policies"

    # Leaves
    SCHEMA = "schema"
    TABLE = "table"
    VIEW = "view"
    MATERIALIZED_VIEW = "materialized_view"
    FUNCTION = "function"
    SEQUENCE = "sequence"
    TYPE = "type"
    COLUMN = "column"
    INDEX = "index"
    FOREIGN_KEY = "foreign_key"
    TRIGGER = "trigger"
    POLICY = "policy"

    @property
    def is_folder(self) -> bool:
        return self in FOLDER_KINDS


FOLDER_KINDS = frozenset(
    {
        NodeKind.SCHEMAS_FOLDER,
        NodeKind.TABLES_FOLDER,
        NodeKind.VIEWS_FOLDER,
        NodeKind.FUNCTIONS_FOLDER,
        NodeKind.SEQUENCES_FOLDER,
        NodeKind.TYPES_FOLDER,
        NodeKind.COLUMNS_FOLDER,
        NodeKind.INDEXES_FOLDER,
        NodeKind.FOREIGN_KEYS_FOLDER,
        NodeKind.TRIGGERS_FOLDER,
        NodeKind.POLICIES_FOLDER,
    }
)

FOLDER_LABELS = {
    NodeKind.SCHEMAS_FOLDER: "Schemas",
    NodeKind.TABLES_FOLDER: "Tables",
    NodeKind.VIEWS_FOLDER: "Views",
    NodeKind.FUNCTIONS_FOLDER: "Functions",
    NodeKind.SEQUENCES_FOLDER: "Sequences",
    NodeKind.TYPES_FOLDER: "Types",
    NodeKind.COLUMNS_FOLDER: "Columns",
    NodeKind.INDEXES_FOLDER: "Indexes",
    NodeKind.FOREIGN_KEYS_FOLDER: "Foreign Keys",
    NodeKind.TRIGGERS_FOLDER: "Triggers",
    NodeKind.POLICIES_FOLDER: "Policies",
}


@dataclass(frozen=True)
class TreeNode:
    """One explorer row.

    Nodes compare by value, so a rebuilt tree that describes the same objects
    is equal to the previous one.
    """

    id: str
    name: str
    kind: NodeKind
    display_label: str | None = None
    owning_schema: str | None = None
    badge: str | None = None
    tooltip: str | None = None
    secondary_text: str | None = None
    children: tuple[TreeNode, ...] = ()
    has_lazy_children: bool = False
    payload: Entity | None = None

    @property
    def label(self) -> str:
        return self.display_label or self.name

    @property
    def is_expandable(self) -> bool:
        return bool(self.children) or self.has_lazy_children

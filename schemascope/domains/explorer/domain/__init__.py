"""Explorer domain types: snapshot entities and tree nodes."""

from .entities import (
    CheckConstraint,
    Column,
    DbType,
    Entity,
    EntityKind,
    Extension,
    ForeignKey,
    Function,
    FunctionArgument,
    Index,
    MaterializedView,
    Policy,
    PrimaryKey,
    Role,
    Schema,
    Sequence,
    Table,
    Tablespace,
    Trigger,
    UniqueConstraint,
    View,
)
from .tree_nodes import FOLDER_KINDS, FOLDER_LABELS, NodeKind, TreeNode

__all__ = [
    "CheckConstraint",
    "Column",
    "DbType",
    "Entity",
    "EntityKind",
    "Extension",
    "FOLDER_KINDS",
    "FOLDER_LABELS",
    "ForeignKey",
    "Function",
    "FunctionArgument",
    "Index",
    "MaterializedView",
    "NodeKind",
    "Policy",
    "PrimaryKey",
    "Role",
    "Schema",
    "Sequence",
    "Table",
    "Tablespace",
    "TreeNode",
    "Trigger",
    "UniqueConstraint",
    "View",
]

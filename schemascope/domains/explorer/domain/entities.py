"""Schema snapshot entities.

Immutable records describing database objects as reported by the
introspection collaborator. They are the payload of explorer tree nodes and
the input of the DDL renderers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union


class EntityKind(str, Enum):
    """Closed set of schema object kinds."""

    SCHEMA = "schema"
    TABLE = "table"
    COLUMN = "column"
    INDEX = "index"
    FOREIGN_KEY = "foreign_key"
    VIEW = "view"
    MATERIALIZED_VIEW = "materialized_view"
    FUNCTION = "function"
    SEQUENCE = "sequence"
    TYPE = "type"
    TRIGGER = "trigger"
    POLICY = "policy"
    EXTENSION = "extension"
    ROLE = "role"
    TABLESPACE = "tablespace"


@dataclass(frozen=True)
class Column:
    """A table or view column."""

    kind: ClassVar[EntityKind] = EntityKind.COLUMN

    name: str
    data_type: str
    nullable: bool = True
    default: str | None = None
    identity: str | None = None  # "always", "by default", or a raw mode string
    generated: str | None = None  # expression of a stored generated column
    comment: str | None = None
    ordinal_position: int | None = None
    is_primary_key: bool = False


@dataclass(frozen=True)
class PrimaryKey:
    columns: tuple[str, ...]
    name: str | None = None


@dataclass(frozen=True)
class UniqueConstraint:
    columns: tuple[str, ...]
    name: str | None = None


@dataclass(frozen=True)
class CheckConstraint:
    expression: str
    name: str | None = None


@dataclass(frozen=True)
class ForeignKey:
    """A foreign key constraint owned by a table."""

    kind: ClassVar[EntityKind] = EntityKind.FOREIGN_KEY

    schema: str
    table: str
    name: str
    columns: tuple[str, ...]
    ref_table: str
    ref_columns: tuple[str, ...]
    ref_schema: str | None = None
    on_delete: str = "NO ACTION"
    on_update: str = "NO ACTION"
    deferrable: bool = False
    initially_deferred: bool = False


@dataclass(frozen=True)
class Index:
    """An index on a table or materialized view."""

    kind: ClassVar[EntityKind] = EntityKind.INDEX

    schema: str
    table: str
    name: str
    columns: tuple[str, ...]
    unique: bool = False
    is_primary: bool = False
    is_constraint: bool = False  # backs a UNIQUE/EXCLUDE constraint
    method: str = "btree"
    include: tuple[str, ...] = ()
    predicate: str | None = None
    size_bytes: int | None = None


@dataclass(frozen=True)
class Trigger:
    kind: ClassVar[EntityKind] = EntityKind.TRIGGER

    schema: str
    table: str
    name: str
    timing: str = "AFTER"
    events: tuple[str, ...] = ()
    function_name: str = ""
    for_each: str = "ROW"
    enabled: bool = True


@dataclass(frozen=True)
class Policy:
    """A row level security policy."""

    kind: ClassVar[EntityKind] = EntityKind.POLICY

    schema: str
    table: str
    name: str
    command: str = "ALL"
    permissive: bool = True
    roles: tuple[str, ...] = ()
    using: str | None = None
    with_check: str | None = None


@dataclass(frozen=True)
class Table:
    """A base table.

    ``columns`` is ``None`` when the introspection collaborator has not
    fetched the table's details yet.
    """

    kind: ClassVar[EntityKind] = EntityKind.TABLE

    schema: str
    name: str
    columns: tuple[Column, ...] | None = ()
    primary_key: PrimaryKey | None = None
    unique_constraints: tuple[UniqueConstraint, ...] = ()
    check_constraints: tuple[CheckConstraint, ...] = ()
    foreign_keys: tuple[ForeignKey, ...] = ()
    indexes: tuple[Index, ...] = ()
    triggers: tuple[Trigger, ...] = ()
    policies: tuple[Policy, ...] = ()
    estimated_rows: int | None = None
    size_bytes: int | None = None
    comment: str | None = None
    owner: str | None = None


@dataclass(frozen=True)
class View:
    kind: ClassVar[EntityKind] = EntityKind.VIEW

    schema: str
    name: str
    definition: str = ""
    columns: tuple[Column, ...] = ()
    comment: str | None = None
    owner: str | None = None


@dataclass(frozen=True)
class MaterializedView:
    kind: ClassVar[EntityKind] = EntityKind.MATERIALIZED_VIEW

    schema: str
    name: str
    definition: str = ""
    columns: tuple[Column, ...] = ()
    indexes: tuple[Index, ...] = ()
    populated: bool = True
    comment: str | None = None
    owner: str | None = None


@dataclass(frozen=True)
class FunctionArgument:
    data_type: str
    name: str | None = None
    mode: str = "IN"
    default: str | None = None


@dataclass(frozen=True)
class Function:
    """A stored function."""

    kind: ClassVar[EntityKind] = EntityKind.FUNCTION

    schema: str
    name: str
    arguments: tuple[FunctionArgument, ...] = ()
    return_type: str = "void"
    language: str = "sql"
    volatility: str = "VOLATILE"
    strict: bool = False
    security_definer: bool = False
    body: str = ""
    comment: str | None = None

    @property
    def identity_arguments(self) -> str:
        """Argument types that identify this overload, e.g. ``integer, text``."""
        return ", ".join(arg.data_type for arg in self.arguments if arg.mode.upper() != "OUT")

    @property
    def signature(self) -> str:
        return f"{self.name}({self.identity_arguments})"


@dataclass(frozen=True)
class Sequence:
    kind: ClassVar[EntityKind] = EntityKind.SEQUENCE

    schema: str
    name: str
    data_type: str = "bigint"
    start: int = 1
    increment: int = 1
    min_value: int | None = None
    max_value: int | None = None
    cache: int = 1
    cycle: bool = False
    owned_by: str | None = None  # "table.column"
    comment: str | None = None


@dataclass(frozen=True)
class DbType:
    """A user defined type (enum, composite, domain or range)."""

    kind: ClassVar[EntityKind] = EntityKind.TYPE

    schema: str
    name: str
    type_kind: str = "enum"
    enum_values: tuple[str, ...] = ()
    base_type: str | None = None
    comment: str | None = None


@dataclass(frozen=True)
class Extension:
    kind: ClassVar[EntityKind] = EntityKind.EXTENSION

    name: str
    schema: str | None = None
    version: str | None = None


@dataclass(frozen=True)
class Role:
    kind: ClassVar[EntityKind] = EntityKind.ROLE

    name: str
    can_login: bool = False
    superuser: bool = False


@dataclass(frozen=True)
class Tablespace:
    kind: ClassVar[EntityKind] = EntityKind.TABLESPACE

    name: str
    location: str | None = None
    owner: str | None = None


@dataclass(frozen=True)
class Schema:
    """A namespace and everything introspected inside it."""

    kind: ClassVar[EntityKind] = EntityKind.SCHEMA

    name: str
    owner: str | None = None
    tables: tuple[Table, ...] = ()
    views: tuple[View, ...] = ()
    materialized_views: tuple[MaterializedView, ...] = ()
    functions: tuple[Function, ...] = ()
    sequences: tuple[Sequence, ...] = ()
    types: tuple[DbType, ...] = ()
    comment: str | None = None


Entity = Union[
    Schema,
    Table,
    Column,
    Index,
    ForeignKey,
    View,
    MaterializedView,
    Function,
    Sequence,
    DbType,
    Trigger,
    Policy,
    Extension,
    Role,
    Tablespace,
]

"""Tests for explorer tree construction."""

from dataclasses import replace

from schemascope.domains.explorer.domain import Column, Function, FunctionArgument, NodeKind, Schema, Table
from schemascope.domains.explorer.tree import build_tree, find_node, iter_nodes
from schemascope.domains.explorer.tree.builder import folder_node, make_folder
from tests.fixtures.snapshots import make_public_schema, make_snapshot


def _child(node, kind):
    return next(child for child in node.children if child.kind == kind)


def _ids(root):
    return {node.id for node in iter_nodes(root)}


class TestTreeShape:
    """Tests for the overall layout of the built tree."""

    def test_root_has_single_schemas_folder(self, snapshot):
        """The connection root contains only the Schemas folder."""
        root = build_tree("conn", snapshot)
        assert root.kind == NodeKind.CONNECTION
        assert [child.kind for child in root.children] == [NodeKind.SCHEMAS_FOLDER]
        assert root.children[0].badge == "2"

    def test_schemas_folder_present_when_empty(self):
        """The Schemas folder is kept even with no schemas."""
        root = build_tree("conn", [])
        folder = root.children[0]
        assert folder.kind == NodeKind.SCHEMAS_FOLDER
        assert folder.children == ()
        assert folder.badge == "0"

    def test_schemas_keep_snapshot_order(self, snapshot):
        """Schemas are not re-sorted."""
        root = build_tree("conn", snapshot)
        assert [s.name for s in root.children[0].children] == ["public", "billing"]

    def test_schema_folder_order(self, snapshot):
        """Schema folders are tables, views, functions, sequences, types."""
        root = build_tree("conn", snapshot)
        public = root.children[0].children[0]
        assert [child.kind for child in public.children] == [
            NodeKind.TABLES_FOLDER,
            NodeKind.VIEWS_FOLDER,
            NodeKind.FUNCTIONS_FOLDER,
            NodeKind.SEQUENCES_FOLDER,
            NodeKind.TYPES_FOLDER,
        ]

    def test_table_folder_order(self, snapshot):
        """Table folders are columns, indexes, foreign keys."""
        root = build_tree("conn", snapshot)
        orders = find_node(root, "conn:schemas:schema:public:tables:table:orders")
        assert orders is not None
        assert [child.kind for child in orders.children] == [
            NodeKind.COLUMNS_FOLDER,
            NodeKind.INDEXES_FOLDER,
            NodeKind.FOREIGN_KEYS_FOLDER,
        ]

    def test_label_sets_display_label(self):
        root = build_tree("conn", [], label="prod")
        assert root.label == "prod"


class TestFolderSuppression:
    """Tests that empty folders are omitted."""

    def test_empty_folders_never_appear(self, snapshot):
        """No folder other than Schemas has zero children."""
        root = build_tree("conn", snapshot)
        for node in iter_nodes(root):
            if node.kind.is_folder and node.kind != NodeKind.SCHEMAS_FOLDER:
                assert node.children, node.id

    def test_schema_without_objects_has_no_folders(self):
        root = build_tree("conn", [Schema(name="empty")])
        assert root.children[0].children[0].children == ()

    def test_folder_badge_counts_members(self, snapshot):
        root = build_tree("conn", snapshot)
        tables = find_node(root, "conn:schemas:schema:public:tables")
        assert tables.badge == "2"

    def test_folder_helpers(self):
        assert make_folder("conn", NodeKind.TABLES_FOLDER, []) is None
        folder = folder_node("conn", NodeKind.SCHEMAS_FOLDER, [])
        assert folder.id == "conn:schemas"
        assert folder.badge == "0"


class TestNodeIds:
    """Tests for id derivation and stability."""

    def test_ids_follow_ancestor_path(self, snapshot):
        root = build_tree("conn", snapshot)
        assert find_node(root, "conn:schemas:schema:public:tables:table:users:columns:column:email") is not None

    def test_ids_are_unique(self, snapshot):
        root = build_tree("conn", snapshot)
        nodes = list(iter_nodes(root))
        assert len({node.id for node in nodes}) == len(nodes)

    def test_ids_stable_when_unrelated_objects_change(self):
        """Adding and removing unrelated objects keeps ids of common objects."""
        before = make_public_schema()
        after = replace(
            before,
            tables=(*before.tables[1:], Table("public", "audit_log", columns=(Column("id", "integer"),))),
        )
        ids_before = _ids(build_tree("conn", [before]))
        ids_after = _ids(build_tree("conn", [after]))
        kept = "conn:schemas:schema:public:tables:table:orders:columns:column:total"
        assert kept in ids_before
        assert kept in ids_after
        assert "conn:schemas:schema:public:tables:table:users" not in ids_after

    def test_overloaded_functions_get_distinct_ids(self):
        schema = Schema(
            name="public",
            functions=(
                Function("public", "area", arguments=(FunctionArgument("integer"),)),
                Function("public", "area", arguments=(FunctionArgument("numeric"), FunctionArgument("numeric"))),
            ),
        )
        root = build_tree("conn", [schema])
        functions = find_node(root, "conn:schemas:schema:public:functions")
        assert [f.id for f in functions.children] == [
            "conn:schemas:schema:public:functions:function:area(integer)",
            "conn:schemas:schema:public:functions:function:area(numeric, numeric)",
        ]
        assert functions.children[0].label == "area(integer)"

    def test_colon_in_name_is_escaped(self):
        schema = Schema(name="odd", tables=(Table("odd", "a:b", columns=()),))
        root = build_tree("conn", [schema])
        assert find_node(root, "conn:schemas:schema:odd:tables:table:a\\:b") is not None


class TestOrdering:
    """Tests for display order of collections."""

    def test_tables_sorted_by_name(self):
        schema = Schema(
            name="s",
            tables=(Table("s", "zeta"), Table("s", "Alpha"), Table("s", "beta")),
        )
        root = build_tree("conn", [schema])
        tables = find_node(root, "conn:schemas:schema:s:tables")
        assert [t.name for t in tables.children] == ["Alpha", "beta", "zeta"]

    def test_columns_follow_ordinal_position(self):
        table = Table(
            "s",
            "t",
            columns=(
                Column("b", "text", ordinal_position=2),
                Column("z", "text"),
                Column("a", "text", ordinal_position=1),
                Column("c", "text", ordinal_position=3),
            ),
        )
        root = build_tree("conn", [Schema(name="s", tables=(table,))])
        columns = find_node(root, "conn:schemas:schema:s:tables:table:t:columns")
        assert [c.name for c in columns.children] == ["a", "b", "c", "z"]

    def test_views_and_materialized_views_share_folder(self, snapshot):
        root = build_tree("conn", snapshot)
        views = find_node(root, "conn:schemas:schema:public:views")
        assert [(v.kind, v.label) for v in views.children] == [
            (NodeKind.VIEW, "active_users"),
            (NodeKind.MATERIALIZED_VIEW, "order_totals (materialized)"),
        ]


class TestRowText:
    """Tests for labels, tooltips and secondary text."""

    def test_table_tooltip_and_size(self, snapshot):
        root = build_tree("conn", snapshot)
        orders = find_node(root, "conn:schemas:schema:public:tables:table:orders")
        assert orders.tooltip == "1.5K rows, 16.0 KB"
        assert orders.secondary_text == "16.0 KB"

    def test_unknown_row_estimate_renders_question_mark(self):
        schema = Schema(name="s", tables=(Table("s", "t", estimated_rows=-1),))
        root = build_tree("conn", [schema])
        table = find_node(root, "conn:schemas:schema:s:tables:table:t")
        assert table.tooltip == "? rows"
        assert table.secondary_text is None

    def test_unknown_size_leaves_out_separator(self):
        schema = Schema(name="s", tables=(Table("s", "t", estimated_rows=1500),))
        table = find_node(build_tree("conn", [schema]), "conn:schemas:schema:s:tables:table:t")
        assert table.tooltip == "1.5K rows"

    def test_not_null_column_label_and_tooltip(self, snapshot):
        root = build_tree("conn", snapshot)
        column = find_node(root, "conn:schemas:schema:public:tables:table:orders:columns:column:id")
        assert column.label == "id *"
        assert column.tooltip == "integer NOT NULL IDENTITY always"
        assert column.secondary_text == "integer"

    def test_column_tooltip_with_default_and_comment(self, snapshot):
        root = build_tree("conn", snapshot)
        column = find_node(root, "conn:schemas:schema:public:tables:table:orders:columns:column:created_at")
        assert column.label == "created_at"
        assert column.tooltip == "timestamptz DEFAULT now() -- insert time"

    def test_index_tooltip(self, snapshot):
        root = build_tree("conn", snapshot)
        pkey = find_node(root, "conn:schemas:schema:public:tables:table:orders:indexes:index:orders_pkey")
        plain = find_node(root, "conn:schemas:schema:public:tables:table:orders:indexes:index:orders_user_id_idx")
        assert pkey.tooltip == "UNIQUE BTREE on (id)"
        assert pkey.badge == "unique"
        assert plain.tooltip == "BTREE on (user_id)"

    def test_foreign_key_tooltip(self, snapshot):
        root = build_tree("conn", snapshot)
        fk = find_node(root, "conn:schemas:schema:public:tables:table:orders:foreign_keys:foreign_key:orders_user_id_fkey")
        assert fk.tooltip == "(user_id) -> users(id)"

    def test_function_secondary_text_is_return_type(self, snapshot):
        root = build_tree("conn", snapshot)
        fn = find_node(root, "conn:schemas:schema:public:functions:function:add_order(integer, numeric)")
        assert fn.secondary_text == "integer"

    def test_sequence_and_type_secondary_text(self, snapshot):
        root = build_tree("conn", snapshot)
        seq = find_node(root, "conn:schemas:schema:public:sequences:sequence:orders_id_seq")
        enum = find_node(root, "conn:schemas:schema:public:types:type:order_status")
        assert seq.secondary_text == "bigint"
        assert enum.secondary_text == "enum"
        assert enum.tooltip == "new, paid, shipped"


class TestLazyTables:
    """Tests for tables whose details were not introspected."""

    def test_uninspected_table_is_lazy(self):
        schema = Schema(name="s", tables=(Table("s", "t", columns=None),))
        root = build_tree("conn", [schema])
        table = find_node(root, "conn:schemas:schema:s:tables:table:t")
        assert table.children == ()
        assert table.has_lazy_children
        assert table.is_expandable

    def test_inspected_table_is_not_lazy(self, snapshot):
        root = build_tree("conn", make_snapshot())
        table = find_node(root, "conn:schemas:schema:public:tables:table:users")
        assert not table.has_lazy_children

    def test_rebuild_is_equal(self, snapshot):
        """Trees compare by value."""
        assert build_tree("conn", snapshot) == build_tree("conn", make_snapshot())

"""SQL completion engine.

Provides context-aware SQL autocompletion with:
- Tables after FROM/JOIN, columns after WHERE/ON and in projections
- Alias recognition (FROM users u -> u.id suggests users columns)
- Schema-qualified names (public. suggests public's tables)
- Fuzzy matching
- SQL keywords, operators and common functions
"""

from .catalog import SchemaCatalog, TableRef
from .completion import Completion, SuggestionType, get_completions
from .context import (
    ColumnContext,
    CompletionContext,
    FunctionContext,
    GeneralContext,
    SchemaContext,
    TableContext,
    analyze,
)
from .core import (
    RESERVED_WORDS,
    SQL_FUNCTIONS,
    SQL_KEYWORDS,
    SQL_OPERATORS,
    clean_sql,
    current_statement,
    extract_aliases,
    extract_table_names,
    find_current_clause,
    get_all_functions,
    get_all_keywords,
    get_current_word,
    is_inside_comment,
    is_inside_string,
    remove_comments,
    remove_string_literals,
)

__all__ = [
    # Main API
    "analyze",
    "get_completions",
    # Types
    "ColumnContext",
    "Completion",
    "CompletionContext",
    "FunctionContext",
    "GeneralContext",
    "SchemaCatalog",
    "SchemaContext",
    "SuggestionType",
    "TableContext",
    "TableRef",
    # Constants
    "SQL_KEYWORDS",
    "SQL_FUNCTIONS",
    "SQL_OPERATORS",
    "RESERVED_WORDS",
    # Utilities
    "clean_sql",
    "current_statement",
    "extract_aliases",
    "extract_table_names",
    "find_current_clause",
    "get_all_functions",
    "get_all_keywords",
    "get_current_word",
    "is_inside_comment",
    "is_inside_string",
    "remove_comments",
    "remove_string_literals",
]

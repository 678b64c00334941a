"""Core SQL completion utilities.

Shared logic for keywords, identifier patterns, table and alias extraction,
and helpers that clean partially typed SQL before it is inspected.
"""

from __future__ import annotations

import re

from sqlparse import engine
from sqlparse import parse as sqlparse_parse
from sqlparse.exceptions import SQLParseError

# Identifier: "quoted ""name""" or a bare word
IDENT = r'(?:"(?:[^"]|"")+"|[^\W\d][\w$]*)'
# Optionally schema-qualified identifier
TABLE_REF = rf"{IDENT}(?:\s*\.\s*{IDENT})?"
# Word being typed at the cursor, possibly an unterminated quoted identifier
PARTIAL = r'(?:"[^"]*|[\w$]*)'

# SQL Comparison operators and condition keywords
SQL_OPERATORS = [
    "=",
    "!=",
    "<>",
    "<",
    ">",
    "<=",
    ">=",
    "IS NULL",
    "IS NOT NULL",
    "IN",
    "NOT IN",
    "LIKE",
    "NOT LIKE",
    "ILIKE",
    "NOT ILIKE",
    "BETWEEN",
    "NOT BETWEEN",
]

# SQL Keywords grouped by category
SQL_KEYWORDS = {
    "dml": [
        "SELECT",
        "FROM",
        "WHERE",
        "JOIN",
        "LEFT",
        "RIGHT",
        "INNER",
        "OUTER",
        "CROSS",
        "FULL",
        "LATERAL",
        "ON",
        "AND",
        "OR",
        "NOT",
        "IN",
        "EXISTS",
        "BETWEEN",
        "LIKE",
        "ILIKE",
        "IS",
        "NULL",
        "ORDER",
        "BY",
        "ASC",
        "DESC",
        "NULLS",
        "GROUP",
        "HAVING",
        "LIMIT",
        "OFFSET",
        "DISTINCT",
        "AS",
        "UNION",
        "INTERSECT",
        "EXCEPT",
        "ALL",
        "WITH",
        "INSERT",
        "INTO",
        "VALUES",
        "UPDATE",
        "SET",
        "DELETE",
        "RETURNING",
        "MERGE",
        "USING",
    ],
    "ddl": [
        "CREATE",
        "ALTER",
        "DROP",
        "TRUNCATE",
        "REINDEX",
        "REFRESH",
        "MATERIALIZED",
        "INDEX",
        "VIEW",
        "TABLE",
        "SCHEMA",
        "SEQUENCE",
        "FUNCTION",
        "TRIGGER",
        "POLICY",
        "EXTENSION",
        "CONSTRAINT",
        "PRIMARY",
        "KEY",
        "FOREIGN",
        "REFERENCES",
        "UNIQUE",
        "CHECK",
        "DEFAULT",
        "CASCADE",
        "CONCURRENTLY",
    ],
    "control": [
        "CASE",
        "WHEN",
        "THEN",
        "ELSE",
        "END",
        "BEGIN",
        "COMMIT",
        "ROLLBACK",
        "EXPLAIN",
        "ANALYZE",
        "VACUUM",
    ],
}

# Common SQL functions
SQL_FUNCTIONS = {
    "aggregate": [
        "COUNT",
        "SUM",
        "AVG",
        "MIN",
        "MAX",
        "STRING_AGG",
        "ARRAY_AGG",
        "JSON_AGG",
        "BOOL_AND",
        "BOOL_OR",
    ],
    "string": [
        "CONCAT",
        "SUBSTRING",
        "LEFT",
        "RIGHT",
        "TRIM",
        "UPPER",
        "LOWER",
        "LENGTH",
        "POSITION",
        "REPLACE",
        "SPLIT_PART",
        "REGEXP_REPLACE",
    ],
    "numeric": [
        "ABS",
        "ROUND",
        "FLOOR",
        "CEIL",
        "POWER",
        "SQRT",
        "MOD",
        "RANDOM",
    ],
    "datetime": [
        "NOW",
        "CURRENT_DATE",
        "CURRENT_TIMESTAMP",
        "DATE_TRUNC",
        "EXTRACT",
        "AGE",
        "TO_CHAR",
        "TO_DATE",
    ],
    "conversion": [
        "CAST",
        "TO_NUMBER",
        "TO_JSONB",
    ],
    "null_handling": [
        "COALESCE",
        "NULLIF",
        "GREATEST",
        "LEAST",
    ],
    "window": [
        "ROW_NUMBER",
        "RANK",
        "DENSE_RANK",
        "NTILE",
        "LAG",
        "LEAD",
        "FIRST_VALUE",
        "LAST_VALUE",
    ],
}

# Reserved words that cannot be aliases
RESERVED_WORDS = {
    "select",
    "from",
    "where",
    "join",
    "inner",
    "outer",
    "left",
    "right",
    "cross",
    "full",
    "natural",
    "lateral",
    "on",
    "and",
    "or",
    "not",
    "in",
    "as",
    "order",
    "by",
    "group",
    "having",
    "union",
    "intersect",
    "except",
    "limit",
    "offset",
    "fetch",
    "for",
    "window",
    "insert",
    "into",
    "values",
    "update",
    "set",
    "delete",
    "returning",
    "create",
    "alter",
    "drop",
    "table",
    "index",
    "view",
    "case",
    "when",
    "then",
    "else",
    "end",
    "null",
    "is",
    "like",
    "ilike",
    "between",
    "exists",
    "distinct",
    "all",
    "with",
    "asc",
    "desc",
    "using",
}

# Keywords that end a FROM clause or a JOIN target
_CLAUSE_BOUNDARY = (
    r"\b(?:WHERE|JOIN|INNER|LEFT|RIGHT|FULL|CROSS|NATURAL|ON|USING|GROUP|ORDER|HAVING|"
    r"LIMIT|OFFSET|FETCH|FOR|WINDOW|UNION|INTERSECT|EXCEPT|RETURNING|SET)\b"
)

_FROM_CLAUSE = re.compile(
    rf"\bFROM\s+(.*?)(?={_CLAUSE_BOUNDARY}|[;()]|$)",
    re.IGNORECASE | re.DOTALL,
)
_FROM_ITEM = re.compile(
    rf"^\s*(?:ONLY\s+)?({TABLE_REF})(?:\s+(?:AS\s+)?({IDENT}))?\s*$",
    re.IGNORECASE,
)
_JOIN_TARGET = re.compile(
    rf"\bJOIN\s+(?:LATERAL\s+)?({TABLE_REF})"
    rf"(?:\s+(?:AS\s+)?({IDENT}))?"
    rf"\s*(?=,|{_CLAUSE_BOUNDARY}|[;)]|$)",
    re.IGNORECASE,
)
_JOIN_TABLE = re.compile(rf"\bJOIN\s+(?:LATERAL\s+)?({TABLE_REF})", re.IGNORECASE)
_IDENT_PART = re.compile(IDENT)


def get_all_keywords() -> list[str]:
    """Get all SQL keywords as a flat list, in declaration order."""
    keywords: list[str] = []
    for category in SQL_KEYWORDS.values():
        keywords.extend(category)
    return list(dict.fromkeys(keywords))


def get_all_functions() -> list[str]:
    """Get all SQL functions as a flat list, in declaration order."""
    functions: list[str] = []
    for category in SQL_FUNCTIONS.values():
        functions.extend(category)
    return list(dict.fromkeys(functions))


def unquote_ident(ident: str) -> str:
    """Strip the quotes of a quoted identifier and undouble embedded quotes."""
    ident = ident.strip()
    if len(ident) >= 2 and ident.startswith('"') and ident.endswith('"'):
        return ident[1:-1].replace('""', '"')
    return ident


def split_table_ref(ref: str) -> list[str]:
    """Split ``schema.table`` into its parts, keeping any quotes."""
    return _IDENT_PART.findall(ref)


def normalize_table_ref(ref: str) -> str:
    """Drop whitespace around the dot of a qualified name: ``a . b`` -> ``a.b``."""
    return ".".join(split_table_ref(ref))


def is_inside_string(sql: str) -> bool:
    """Check if the cursor position is inside an unclosed string literal.

    Only single quotes count; double quotes delimit identifiers, and a
    partially typed quoted identifier is still completable.

    Args:
        sql: The SQL text up to cursor position

    Returns:
        True if inside a string literal, False otherwise
    """
    in_single_quote = False
    in_double_quote = False
    i = 0

    while i < len(sql):
        char = sql[i]

        if char == "'" and not in_double_quote:
            if in_single_quote and i + 1 < len(sql) and sql[i + 1] == "'":
                i += 2
                continue
            in_single_quote = not in_single_quote
        elif char == '"' and not in_single_quote:
            in_double_quote = not in_double_quote

        i += 1

    return in_single_quote


def is_inside_comment(sql: str) -> bool:
    """Check if the cursor sits in a ``--`` line comment or an open ``/* */`` block."""
    code = remove_string_literals(sql)
    last_open = code.rfind("/*")
    if last_open != -1 and code.find("*/", last_open) == -1:
        return True
    last_line = code.rsplit("\n", 1)[-1]
    return "--" in last_line


def remove_string_literals(sql: str) -> str:
    """Replace single-quoted literals with empty ones to avoid false matches."""
    return re.sub(r"'(?:[^']|'')*'", "''", sql)


def remove_comments(sql: str) -> str:
    """Remove SQL comments."""
    result = re.sub(r"--[^\n]*", "", sql)
    result = re.sub(r"/\*.*?\*/", "", result, flags=re.DOTALL)
    return result


def clean_sql(sql: str) -> str:
    return remove_comments(remove_string_literals(sql))


def current_statement(sql: str) -> str:
    """Return the statement the cursor is in: everything after the last ``;``.

    Uses sqlparse's statement splitter so semicolons inside literals, quoted
    identifiers and dollar-quoted bodies don't split. Trailing whitespace is kept,
    so ``"SELECT 1; SELECT * FROM "`` yields ``"SELECT * FROM "``.
    """
    try:
        statements = [str(statement) for statement in engine.FilterStack().run(sql)]
    except SQLParseError:
        return sql
    if not statements:
        return sql
    last = statements[-1]
    if last.rstrip().endswith(";"):
        return ""
    return last


def get_last_token_info(sql: str) -> tuple[str | None, str | None]:
    """Get the last meaningful token and its type using sqlparse.

    Args:
        sql: The SQL text to analyze

    Returns:
        Tuple of (token_value, token_type_string)
    """
    try:
        parsed = sqlparse_parse(sql)
    except SQLParseError:
        return None, None
    if not parsed:
        return None, None

    tokens = [t for t in parsed[0].flatten() if not t.is_whitespace]
    if not tokens:
        return None, None

    last = tokens[-1]
    ttype = str(last.ttype) if last.ttype else None
    return last.value, ttype


def find_current_clause(sql: str) -> str:
    """Determine which clause the cursor is in.

    Looks for the most recent main SQL clause keyword.
    """
    sql_upper = sql.upper()

    clauses = ["SELECT", "FROM", "WHERE", "GROUP BY", "HAVING", "ORDER BY", "ON", "SET"]
    join_pattern = r"\b(INNER\s+JOIN|LEFT\s+JOIN|RIGHT\s+JOIN|FULL\s+JOIN|CROSS\s+JOIN|JOIN)\b"

    last_clause = ""
    last_pos = -1

    for clause in clauses:
        pattern = r"\b" + clause + r"\b"
        for match in re.finditer(pattern, sql_upper):
            if match.start() > last_pos:
                last_pos = match.start()
                last_clause = clause.split()[0].lower()

    for match in re.finditer(join_pattern, sql_upper):
        if match.start() > last_pos:
            last_pos = match.start()
            last_clause = "join"

    return last_clause


def get_current_word(sql: str) -> str:
    """Get the word currently being typed at the end of ``sql``.

    A leading double quote of a partially typed quoted identifier is dropped.
    """
    if sql.count('"') % 2:
        return sql[sql.rfind('"') + 1 :]
    match = re.search(r"[\w$]*$", sql)
    return match.group(0) if match else ""


def _is_alias(word: str | None) -> bool:
    return bool(word) and unquote_ident(word).lower() not in RESERVED_WORDS


def extract_table_names(sql: str) -> list[str]:
    """Extract table references from FROM clauses and JOIN targets.

    Handles patterns like:
    - FROM users
    - FROM users u, orders o
    - FROM public.users
    - FROM "Quoted Table"
    - JOIN orders o ON ...

    Schema-qualified names stay one token (``public.users``). Duplicates are
    dropped case-insensitively and first-appearance order is kept.

    Args:
        sql: The SQL text to scan

    Returns:
        List of table references as typed, quotes kept
    """
    found: list[tuple[int, str]] = []

    for clause in _FROM_CLAUSE.finditer(sql):
        offset = clause.start(1)
        for item in clause.group(1).split(","):
            match = _FROM_ITEM.match(item)
            if match:
                found.append((offset, normalize_table_ref(match.group(1))))
            offset += len(item) + 1

    for match in _JOIN_TABLE.finditer(sql):
        found.append((match.start(1), normalize_table_ref(match.group(1))))

    found.sort(key=lambda pair: pair[0])

    seen: set[str] = set()
    names: list[str] = []
    for _, name in found:
        if not name or name.lower() in RESERVED_WORDS or name.lower() in seen:
            continue
        seen.add(name.lower())
        names.append(name)
    return names


def extract_aliases(sql: str) -> dict[str, str]:
    """Build a map of alias -> table reference.

    An alias is the identifier after ``<table-ref> [AS]`` when it is followed
    by a comma, a clause keyword, or the end of the text. Reserved words,
    ``AS`` included, are never aliases.

    Args:
        sql: The SQL text to scan

    Returns:
        Mapping of unquoted alias to normalized table reference
    """
    aliases: dict[str, str] = {}

    for clause in _FROM_CLAUSE.finditer(sql):
        for item in clause.group(1).split(","):
            match = _FROM_ITEM.match(item)
            if match and _is_alias(match.group(2)):
                aliases[unquote_ident(match.group(2))] = normalize_table_ref(match.group(1))

    for match in _JOIN_TARGET.finditer(sql):
        if _is_alias(match.group(2)):
            aliases[unquote_ident(match.group(2))] = normalize_table_ref(match.group(1))

    return aliases


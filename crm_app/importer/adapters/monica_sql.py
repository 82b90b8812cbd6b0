"""SQL dump adapter for Monica CRM exports.

Monica's exporter writes one ``INSERT [IGNORE] INTO `table` (`col`, ...) VALUES
(...),(...);`` statement per table chunk. This module recognises that narrow
shape only: the dump is split into statements once, INSERT headers are parsed,
and each VALUES clause is broken into tuples, tokens and finally Python scalars.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, Sequence, Union

SqlScalar = Union[None, int, float, str]
SqlRow = dict[str, SqlScalar]

_STATEMENT_MARKERS = re.compile(r"'|`|;|--|/\*")
_QUOTE_MARKERS = re.compile(r"[\\']")
_VALUE_MARKERS = re.compile(r"[()']")
_INTEGER_LITERAL = re.compile(r"[+-]?\d+")
_DECIMAL_LITERAL = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")
_INSERT_HEADER = re.compile(
    r"INSERT\s+(?:IGNORE\s+)?INTO\s+`?(?P<table>[A-Za-z0-9_]+)`?\s*"
    r"\((?P<columns>[^)]*)\)\s*VALUES\s*(?P<values>.*)",
    re.IGNORECASE | re.DOTALL,
)
_ESCAPES = {"'": "'", '"': '"', "\\": "\\", "n": "\n", "r": "\r", "t": "\t", "0": "\x00"}
_ESCAPE_SEQUENCE = re.compile(r"\\(.)", re.DOTALL)


def _skip_quoted(text: str, index: int) -> int:
    """
    Return the index just past the closing quote of a string literal.

    ``index`` must point at the first character after the opening quote. A
    backslash consumes the following character and ``''`` is an escaped quote.
    Unterminated strings run to the end of ``text``.
    """
    length = len(text)
    while True:
        match = _QUOTE_MARKERS.search(text, index)
        if match is None:
            return length
        position = match.start()
        if text[position] == "\\":
            index = position + 2
            continue
        if position + 1 < length and text[position + 1] == "'":
            index = position + 2
            continue
        return position + 1


def _unescape(body: str) -> str:
    def _replace(match: re.Match[str]) -> str:
        char = match.group(1)
        return _ESCAPES.get(char, match.group(0))

    return _ESCAPE_SEQUENCE.sub(_replace, body)


def parse_sql_value(raw: str) -> SqlScalar:
    """
    Convert one raw literal token into a Python scalar.

    ``NULL`` becomes ``None``, quoted tokens are unescaped strings, numeric
    literals become ``int``/``float``. Anything else is returned unchanged.
    """
    if raw == "NULL":
        return None

    if len(raw) >= 2 and raw.startswith("'") and raw.endswith("'"):
        return _unescape(raw[1:-1])

    if _INTEGER_LITERAL.fullmatch(raw):
        return int(raw)
    if _DECIMAL_LITERAL.fullmatch(raw):
        return float(raw)

    return raw


def tokenize_row(row: str) -> list[str]:
    """
    Split a ``(v1,'v2',NULL)`` tuple into raw tokens.

    Quoted tokens keep their quotes. Doubled quotes are re-encoded as ``\\'`` so
    :func:`parse_sql_value` handles both escaping conventions in one pass.
    """
    tokens: list[str] = []
    start = 1 if row.startswith("(") else 0
    end = len(row) - 1 if row.endswith(")") and len(row) > start else len(row)
    i = start

    while i < end:
        char = row[i]
        if char in " \t\r\n":
            i += 1
            continue
        if char == ",":
            i += 1
            continue

        if char == "'":
            parts = ["'"]
            i += 1
            while i < end:
                char = row[i]
                if char == "\\" and i + 1 < end:
                    parts.append(row[i : i + 2])
                    i += 2
                elif char == "'" and i + 1 < end and row[i + 1] == "'":
                    parts.append("\\'")
                    i += 2
                elif char == "'":
                    parts.append("'")
                    i += 1
                    break
                else:
                    parts.append(char)
                    i += 1
            tokens.append("".join(parts))
            continue

        token_start = i
        while i < end and row[i] not in ",)":
            i += 1
        tokens.append(row[token_start:i].strip())

    return tokens


def split_value_rows(values_clause: str) -> list[str]:
    """Split a VALUES clause into balanced ``(...)`` tuple substrings."""
    rows: list[str] = []
    length = len(values_clause)
    index = 0

    while index < length:
        start = values_clause.find("(", index)
        if start == -1:
            break

        depth = 0
        position = start
        closed = False
        while True:
            match = _VALUE_MARKERS.search(values_clause, position)
            if match is None:
                break
            marker = match.group()
            position = match.end()
            if marker == "'":
                position = _skip_quoted(values_clause, position)
            elif marker == "(":
                depth += 1
            else:
                depth -= 1
                if depth == 0:
                    rows.append(values_clause[start:position])
                    closed = True
                    break

        if not closed:
            break
        index = position

    return rows


def iter_sql_statements(sql_text: str) -> Iterator[str]:
    """
    Yield every statement in ``sql_text`` with comments removed.

    Statements end at ``;`` outside string literals and backtick identifiers.
    ``--`` line comments and ``/* */`` block comments (including MySQL
    conditional comments) are dropped.
    """
    parts: list[str] = []
    segment_start = 0
    position = 0
    length = len(sql_text)

    while position < length:
        match = _STATEMENT_MARKERS.search(sql_text, position)
        if match is None:
            break
        marker = match.group()

        if marker == "'":
            position = _skip_quoted(sql_text, match.end())
        elif marker == "`":
            closing = sql_text.find("`", match.end())
            position = length if closing == -1 else closing + 1
        elif marker == ";":
            parts.append(sql_text[segment_start : match.start()])
            statement = "".join(parts).strip()
            parts = []
            segment_start = position = match.end()
            if statement:
                yield statement
        elif marker == "--":
            parts.append(sql_text[segment_start : match.start()])
            newline = sql_text.find("\n", match.end())
            segment_start = position = length if newline == -1 else newline + 1
        else:
            parts.append(sql_text[segment_start : match.start()])
            closing = sql_text.find("*/", match.end())
            segment_start = position = length if closing == -1 else closing + 2

    parts.append(sql_text[segment_start:])
    tail = "".join(parts).strip()
    if tail:
        yield tail


@dataclass(frozen=True)
class InsertStatement:
    """One parsed ``INSERT INTO`` statement."""

    table: str
    columns: tuple[str, ...]
    values_clause: str


def parse_insert_statement(statement: str) -> InsertStatement | None:
    """Parse an INSERT header, returning ``None`` when the shape is not recognised."""
    match = _INSERT_HEADER.match(statement)
    if match is None:
        return None
    columns = tuple(column.replace("`", "").strip() for column in match.group("columns").split(","))
    return InsertStatement(
        table=match.group("table"),
        columns=tuple(column for column in columns if column),
        values_clause=match.group("values"),
    )


@dataclass
class MonicaSQLDump:
    """
    In-memory index of a Monica SQL export.

    The dump text is split into statements exactly once; INSERT statements are
    grouped by table so each table can be extracted without rescanning.
    """

    sql_text: str
    statements_by_table: dict[str, list[InsertStatement]] = field(init=False, default_factory=dict)
    warnings: list[str] = field(init=False, default_factory=list)
    statement_count: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        for statement in iter_sql_statements(self.sql_text):
            self.statement_count += 1
            if statement[:6].upper() != "INSERT":
                continue
            parsed = parse_insert_statement(statement)
            if parsed is None:
                preview = " ".join(statement[:80].split())
                self.warnings.append(f"Unrecognised INSERT statement skipped: {preview}")
                continue
            self.statements_by_table.setdefault(parsed.table, []).append(parsed)

    @property
    def tables(self) -> tuple[str, ...]:
        return tuple(self.statements_by_table)

    def extract_table(self, table: str, primary_key: Sequence[str] = ("id",)) -> list[SqlRow]:
        """
        Return column-to-value records for ``table`` across all INSERT blocks.

        Rows sharing a primary key are de-duplicated; the first one wins. Rows
        missing any key column are kept as-is.
        """
        records: list[SqlRow] = []
        seen: set[tuple[SqlScalar, ...]] = set()

        for statement in self.statements_by_table.get(table, ()):
            for row in split_value_rows(statement.values_clause):
                values = [parse_sql_value(token) for token in tokenize_row(row)]
                record: SqlRow = dict(zip(statement.columns, values))

                if primary_key and all(key in record for key in primary_key):
                    key = tuple(record[name] for name in primary_key)
                    if key in seen:
                        continue
                    seen.add(key)
                records.append(record)

        return records


def extract_table_rows(
    sql_text: str,
    table: str,
    primary_key: Sequence[str] = ("id",),
) -> list[SqlRow]:
    """Convenience wrapper extracting a single table from raw dump text."""
    return MonicaSQLDump(sql_text).extract_table(table, primary_key=primary_key)

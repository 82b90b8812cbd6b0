"""Importer adapter interfaces and concrete implementations."""

from __future__ import annotations

from .monica_sql import (
    InsertStatement,
    MonicaSQLDump,
    SqlRow,
    SqlScalar,
    extract_table_rows,
    iter_sql_statements,
    parse_insert_statement,
    parse_sql_value,
    split_value_rows,
    tokenize_row,
)

__all__ = [
    "InsertStatement",
    "MonicaSQLDump",
    "SqlRow",
    "SqlScalar",
    "extract_table_rows",
    "iter_sql_statements",
    "parse_insert_statement",
    "parse_sql_value",
    "split_value_rows",
    "tokenize_row",
]

"""Statement classification using sqlglot.

Classifies SQL text into a coarse statement type used to label metrics and
trace spans. The engine remains the only authority on whether a statement
is valid: text that sqlglot cannot parse is still classified, by its leading
keyword, and executed unchanged.

References:
    - sqlglot documentation: https://sqlglot.com/
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

import sqlglot
from sqlglot import exp
from sqlglot.errors import SqlglotError


class StatementType(Enum):
    """Types of SQL statements."""

    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    CREATE = "create"
    DROP = "drop"
    BEGIN = "begin"
    COMMIT = "commit"
    ROLLBACK = "rollback"
    PRAGMA = "pragma"
    VACUUM = "vacuum"
    OTHER = "other"

    @property
    def is_dml(self) -> bool:
        return self in (StatementType.INSERT, StatementType.UPDATE, StatementType.DELETE)


_EXPRESSION_TYPES: tuple[tuple[type[exp.Expression], StatementType], ...] = (
    (exp.Select, StatementType.SELECT),
    (exp.Union, StatementType.SELECT),
    (exp.Insert, StatementType.INSERT),
    (exp.Update, StatementType.UPDATE),
    (exp.Delete, StatementType.DELETE),
    (exp.Create, StatementType.CREATE),
    (exp.Drop, StatementType.DROP),
    (exp.Transaction, StatementType.BEGIN),
    (exp.Commit, StatementType.COMMIT),
    (exp.Rollback, StatementType.ROLLBACK),
    (exp.Pragma, StatementType.PRAGMA),
)

# Leading keywords for statements sqlglot does not model (or cannot parse)
_KEYWORD_TYPES: dict[str, StatementType] = {
    "SELECT": StatementType.SELECT,
    "WITH": StatementType.SELECT,
    "VALUES": StatementType.SELECT,
    "INSERT": StatementType.INSERT,
    "REPLACE": StatementType.INSERT,
    "UPDATE": StatementType.UPDATE,
    "DELETE": StatementType.DELETE,
    "CREATE": StatementType.CREATE,
    "DROP": StatementType.DROP,
    "BEGIN": StatementType.BEGIN,
    "COMMIT": StatementType.COMMIT,
    "END": StatementType.COMMIT,
    "ROLLBACK": StatementType.ROLLBACK,
    "PRAGMA": StatementType.PRAGMA,
    "VACUUM": StatementType.VACUUM,
}


@lru_cache(maxsize=512)
def classify_statement(sql: str, dialect: str = "sqlite") -> StatementType:
    """Classify a single SQL statement.

    Args:
        sql: The statement text.
        dialect: sqlglot dialect to parse with.

    Returns:
        The statement type, OTHER when it cannot be determined.

    Example:
        >>> classify_statement("UPDATE test SET num=10 WHERE id=2")
        <StatementType.UPDATE: 'update'>
    """
    text = sql.strip()
    if not text:
        return StatementType.OTHER

    try:
        expression = sqlglot.parse_one(text, read=dialect)
    except SqlglotError:
        expression = None

    if expression is not None:
        for expression_type, statement_type in _EXPRESSION_TYPES:
            if isinstance(expression, expression_type):
                return statement_type

    return _classify_keyword(text)


def _classify_keyword(text: str) -> StatementType:
    keyword = text.split(None, 1)[0].rstrip(";").upper()
    return _KEYWORD_TYPES.get(keyword, StatementType.OTHER)

"""
Builders for the dynamic parts of parameterized SQL statements.

Two shapes are produced here:

- the ``SET`` list of a partial ``UPDATE`` (``sql_for_partial_update``)
- the optional ``AND ...`` conditions appended to ``SELECT ... WHERE 1=1``
  (``FilterBuilder``)

Both collect typed descriptors into a ``GeneratedClause`` and only turn them
into text in one formatting pass, so the Nth placeholder always binds the Nth
value. Column names come from application code, never from request input;
values always travel as bound parameters.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from jobly.core.errors import InvalidInputError, InvalidRangeError

Placeholder = Callable[[int], str]


def dollar_placeholder(position: int) -> str:
    """PostgreSQL-native positional placeholder: ``$1``, ``$2``, ..."""
    return f"${position}"


def named_placeholder(position: int) -> str:
    """Named placeholder accepted by SQLAlchemy ``text()``: ``:p1``, ``:p2``, ..."""
    return f":p{position}"


def param_name(position: int) -> str:
    return f"p{position}"


@dataclass(frozen=True)
class Assignment:
    """``"column"=<placeholder>`` inside a SET list."""
    column: str
    value: Any

    def render(self, placeholder: str, dialect: Optional[str] = None) -> str:
        return f'"{self.column}"={placeholder}'


@dataclass(frozen=True)
class Predicate:
    """``column <operator> <placeholder>`` inside a WHERE clause."""
    column: str
    operator: str
    value: Any

    def render(self, placeholder: str, dialect: Optional[str] = None) -> str:
        operator = self.operator
        # SQLite has no ILIKE; its LIKE is already case-insensitive for ASCII
        if operator == "ILIKE" and dialect == "sqlite":
            operator = "LIKE"
        return f"{self.column} {operator} {placeholder}"


Part = Union[Assignment, Predicate]


@dataclass(frozen=True)
class GeneratedClause:
    """
    An ordered run of clause parts and the values they bind.

    ``leader`` is written before every part (``" AND "`` for filter
    conditions), ``separator`` between parts (``", "`` for SET lists).
    An empty clause renders as the empty string.
    """
    parts: Tuple[Part, ...]
    separator: str = ", "
    leader: str = ""

    @property
    def values(self) -> List[Any]:
        return [part.value for part in self.parts]

    @property
    def next_position(self) -> int:
        """Position of the first placeholder after this clause."""
        return len(self.parts) + 1

    @property
    def sql(self) -> str:
        """Canonical text with ``$n`` placeholders."""
        return self.render()

    def render(self, placeholder: Placeholder = dollar_placeholder, dialect: Optional[str] = None) -> str:
        fragments = [
            self.leader + part.render(placeholder(position), dialect)
            for position, part in enumerate(self.parts, start=1)
        ]
        return self.separator.join(fragments)

    def bind_params(self, *trailing: Any) -> Dict[str, Any]:
        """
        Values keyed by ``named_placeholder`` names.

        ``trailing`` values take the positions right after the clause, e.g.
        the key in ``WHERE handle = :p{next_position}``.
        """
        values = self.values + list(trailing)
        return {param_name(position): value for position, value in enumerate(values, start=1)}


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    field_to_column: Optional[Mapping[str, str]] = None,
) -> GeneratedClause:
    """
    Build the SET list for updating only the given fields.

    Args:
        data_to_update: Logical field name -> new value, in the order to emit
        field_to_column: Logical field name -> column name; fields not listed
            use their own name as the column

    Returns:
        GeneratedClause, e.g. for ``{"firstName": "Aliya", "age": 32}`` with
        ``{"firstName": "first_name"}``: sql ``"first_name"=$1, "age"=$2``
        and values ``["Aliya", 32]``

    Raises:
        InvalidInputError: If there is nothing to update
    """
    if not data_to_update:
        raise InvalidInputError("No data")

    field_to_column = field_to_column or {}
    parts = tuple(
        Assignment(field_to_column.get(field, field), value)
        for field, value in data_to_update.items()
    )
    return GeneratedClause(parts, separator=", ")


def check_range(low: Optional[Any], high: Optional[Any], message: str) -> None:
    """Raise InvalidRangeError when both bounds are given and low > high."""
    if low is not None and high is not None and low > high:
        raise InvalidRangeError(message)


class FilterBuilder:
    """
    Accumulates optional WHERE conditions.

    Every method ignores an absent (``None``) criterion, so callers can pass
    request values straight through::

        clause = (
            FilterBuilder()
            .contains("name", criteria.name)
            .at_least("num_employees", criteria.min_employees)
            .build()
        )
        sql = f"SELECT ... WHERE 1=1{clause.render(named_placeholder)}"
    """

    def __init__(self):
        self._predicates: List[Predicate] = []

    def _add(self, column: str, operator: str, value: Any) -> "FilterBuilder":
        self._predicates.append(Predicate(column, operator, value))
        return self

    def contains(self, column: str, value: Optional[str]) -> "FilterBuilder":
        """Case-insensitive substring match."""
        if value is None:
            return self
        return self._add(column, "ILIKE", f"%{value}%")

    def at_least(self, column: str, value: Optional[Any]) -> "FilterBuilder":
        if value is None:
            return self
        return self._add(column, ">=", value)

    def at_most(self, column: str, value: Optional[Any]) -> "FilterBuilder":
        if value is None:
            return self
        return self._add(column, "<=", value)

    def positive_if(self, column: str, flag: Optional[bool]) -> "FilterBuilder":
        """``column > 0``, only when flag is exactly True."""
        if flag is not True:
            return self
        return self._add(column, ">", 0)

    def build(self) -> GeneratedClause:
        return GeneratedClause(tuple(self._predicates), separator="", leader=" AND ")

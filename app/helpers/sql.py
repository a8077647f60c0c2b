"""
Helpers for building positionally-parameterized SQL fragments.

Identifiers are quoted by `quote_identifier`; values never enter the
statement text and are returned separately, aligned with `$1, $2, ...`
placeholders. Statements built from these fragments are executed with
`app.core.database.run_query`.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from app.core.exceptions import BadRequestError

# Quoted identifiers and string literals are matched whole so a `$1` inside
# them is never taken for a placeholder; only group 1 is a real one.
PLACEHOLDER = re.compile(r"'(?:[^']|'')*'|\"(?:[^\"]|\"\")*\"|\$(\d+)")


def placeholder_positions(sql: str) -> List[int]:
    """Positions of the `$n` placeholders in `sql`, in textual order."""
    return [int(m.group(1)) for m in PLACEHOLDER.finditer(sql) if m.group(1)]


def placeholder(position: int) -> str:
    """Return the 1-based positional placeholder, e.g. `$3`."""
    return f"${position}"


def quote_identifier(name: str) -> str:
    """Double-quote a column name, doubling any embedded quotes."""
    return '"' + name.replace('"', '""') + '"'


@dataclass(frozen=True)
class SqlFragment:
    """
    A piece of SQL text plus the values for its placeholders.

    `values[k - 1]` is the value for placeholder `$k` in `clause`.
    """
    clause: str
    values: List[Any] = field(default_factory=list)

    def __post_init__(self):
        count = len(placeholder_positions(self.clause))
        if count != len(self.values):
            raise ValueError(
                f"{count} placeholders but {len(self.values)} values in {self.clause!r}"
            )

    @property
    def next_placeholder(self) -> str:
        """Placeholder for a value appended after this fragment's values."""
        return placeholder(len(self.values) + 1)

    def __bool__(self) -> bool:
        return bool(self.clause)


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Optional[Mapping[str, str]] = None,
) -> SqlFragment:
    """
    Build the SET clause of a partial UPDATE.

    Args:
        data_to_update: Fields to change, e.g. {"firstName": "Aliya", "age": 32}.
            Iteration order decides placeholder numbering. A value of None
            sets the column to NULL.
        js_to_sql: Field name -> column name for fields whose column differs,
            e.g. {"firstName": "first_name"}. Other fields use their own name.

    Returns:
        SqlFragment('"first_name"=$1, "age"=$2', ["Aliya", 32])

    Raises:
        BadRequestError: If there is no data to update
    """
    if not data_to_update:
        raise BadRequestError("No data")

    js_to_sql = js_to_sql or {}
    cols = [
        f"{quote_identifier(js_to_sql.get(name, name))}={placeholder(idx)}"
        for idx, name in enumerate(data_to_update, start=1)
    ]

    return SqlFragment(", ".join(cols), list(data_to_update.values()))


def _identity(value: Any) -> Any:
    return value


def contains_pattern(value: Any) -> str:
    """Wrap a raw string as a substring match for LIKE/ILIKE."""
    return f"%{value}%"


@dataclass(frozen=True)
class FilterCondition:
    """
    One recognized filter key.

    `template` holds `{}` where the placeholder goes. A `flag` condition
    binds nothing and applies only when the supplied value is truthy.
    """
    key: str
    template: str
    transform: Callable[[Any], Any] = _identity
    flag: bool = False


def parameterize_filter_query(
    criteria: Mapping[str, Any],
    conditions: Sequence[FilterCondition],
) -> SqlFragment:
    """
    Build the WHERE conditions for the recognized keys present in `criteria`.

    Conditions are emitted in the order of `conditions`, not the order of
    `criteria`; unrecognized keys are ignored. With no recognized keys the
    clause is empty and callers must leave out the WHERE keyword.

    e.g. {"maxEmployees": 3, "minEmployees": 2} with COMPANY_FILTERS =>
        SqlFragment("num_employees >= $1 AND num_employees <= $2", [2, 3])
    """
    conds: List[str] = []
    values: List[Any] = []

    for cond in conditions:
        if cond.key not in criteria:
            continue
        value = criteria[cond.key]

        if cond.flag:
            if value:
                conds.append(cond.template)
            continue

        conds.append(cond.template.format(placeholder(len(values) + 1)))
        values.append(cond.transform(value))

    return SqlFragment(" AND ".join(conds), values)


COMPANY_FILTERS = (
    FilterCondition("minEmployees", "num_employees >= {}"),
    FilterCondition("maxEmployees", "num_employees <= {}"),
    FilterCondition("nameLike", "name ILIKE {}", contains_pattern),
)

JOB_FILTERS = (
    FilterCondition("title", "title ILIKE {}", contains_pattern),
    FilterCondition("minSalary", "salary >= {}"),
    FilterCondition("hasEquity", "equity > 0", flag=True),
)


def where(fragment: SqlFragment) -> str:
    """`WHERE <clause>` for a non-empty fragment, otherwise an empty string."""
    return f"WHERE {fragment.clause}" if fragment else ""


def select_list(columns: Dict[str, str]) -> str:
    """
    Render `column AS "field"` pairs for a SELECT or RETURNING list.

    Args:
        columns: field name -> column name, in output order
    """
    parts = []
    for name, column in columns.items():
        if name == column:
            parts.append(column)
        else:
            parts.append(f"{column} AS {quote_identifier(name)}")
    return ",\n       ".join(parts)

"""SQL fragment builders for partial updates and filtered listing.

Both builders return a clause meant to be spliced into a larger query template
together with the values for its ``$n`` positional placeholders. Client values
only ever travel in ``values``; the clause text is assembled from
developer-authored column names and predicate templates.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .errors import EmptyUpdateError, InvalidRangeError


@dataclass(frozen=True)
class SqlFragment:
    """A partial query string and the values bound to its placeholders.

    Placeholder ``$i`` (counting from the ``start`` the builder was given)
    binds ``values[i - start]``.
    """

    clause: str
    values: tuple[Any, ...] = ()


def quote_identifier(name: str) -> str:
    """Double-quote a column name, doubling any embedded quote."""
    return '"' + name.replace('"', '""') + '"'


def resolve_column(key: str, column_map: Mapping[str, str]) -> str:
    """Map an external field name through the allow-list, falling back to the key."""
    return quote_identifier(column_map.get(key) or key)


def build_update_fragment(
    updates: Mapping[str, Any],
    column_map: Mapping[str, str],
    *,
    start: int = 1,
) -> SqlFragment:
    """Build the SET clause for a partial update.

    Keys must come from a closed, developer-known field set: quoting keeps
    reserved words unambiguous but is not a defence against hostile keys.

    >>> build_update_fragment({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
    SqlFragment(clause='"first_name"=$1, "age"=$2', values=('Aliya', 32))
    """
    if not updates:
        raise EmptyUpdateError()

    terms = [
        f"{resolve_column(key, column_map)}=${n}"
        for n, key in enumerate(updates, start)
    ]
    return SqlFragment(", ".join(terms), tuple(updates.values()))


def _identity(value: Any) -> Any:
    return value


def _is_true(value: Any) -> bool:
    return value is True


def _is_false(value: Any) -> bool:
    return value is False


def contains_pattern(term: str) -> str:
    """LIKE pattern matching ``term`` anywhere, case-folded, wildcards escaped."""
    escaped = term.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


@dataclass(frozen=True)
class FilterPredicate:
    """One recognized filter key and the predicate it contributes.

    ``template`` holds ``{}`` where the placeholder for the (transformed)
    value goes; a template without ``{}`` binds nothing. ``applies`` decides
    from the raw value whether the predicate is emitted at all.
    """

    key: str
    template: str
    applies: Callable[[Any], bool] = bool
    transform: Callable[[Any], Any] = _identity

    @property
    def binds_value(self) -> bool:
        return "{}" in self.template


@dataclass(frozen=True)
class EntityFilters:
    """Ordered filter schema for one listable entity."""

    predicates: tuple[FilterPredicate, ...]
    validate: Callable[[Mapping[str, Any]], None] | None = None

    @property
    def keys(self) -> frozenset[str]:
        return frozenset(p.key for p in self.predicates)

    def build(
        self, filters: Mapping[str, Any] | None = None, *, start: int = 1
    ) -> SqlFragment:
        if not filters:
            return SqlFragment("")
        if self.validate is not None:
            self.validate(filters)

        terms: list[str] = []
        values: list[Any] = []
        for predicate in self.predicates:
            value = filters.get(predicate.key)
            if not predicate.applies(value):
                continue
            if predicate.binds_value:
                terms.append(predicate.template.format(f"${start + len(values)}"))
                values.append(predicate.transform(value))
            else:
                terms.append(predicate.template)

        if not terms:
            return SqlFragment("")
        return SqlFragment(f" WHERE {' AND '.join(terms)} ", tuple(values))


def _check_employee_range(filters: Mapping[str, Any]) -> None:
    low = filters.get("minEmployees")
    high = filters.get("maxEmployees")
    if low and high and low > high:
        raise InvalidRangeError("minEmployees cannot be greater than maxEmployees")


COMPANY_FILTERS = EntityFilters(
    predicates=(
        FilterPredicate("nameLike", "lower(name) LIKE {} ESCAPE '\\'", transform=contains_pattern),
        FilterPredicate("maxEmployees", "num_employees <= {}"),
        FilterPredicate("minEmployees", "num_employees >= {}"),
    ),
    validate=_check_employee_range,
)

JOB_FILTERS = EntityFilters(
    predicates=(
        FilterPredicate("title", "lower(title) LIKE {} ESCAPE '\\'", transform=contains_pattern),
        FilterPredicate("minSalary", "salary >= {}"),
        FilterPredicate("hasEquity", "equity > 0", applies=_is_true),
        FilterPredicate("hasEquity", "equity = 0", applies=_is_false),
    ),
)


def build_filter_fragment_companies(
    filters: Mapping[str, Any] | None = None, *, start: int = 1
) -> SqlFragment:
    """WHERE clause for ``nameLike`` / ``minEmployees`` / ``maxEmployees``.

    Raises InvalidRangeError when minEmployees exceeds maxEmployees.
    """
    return COMPANY_FILTERS.build(filters, start=start)


def build_filter_fragment_jobs(
    filters: Mapping[str, Any] | None = None, *, start: int = 1
) -> SqlFragment:
    """WHERE clause for ``title`` / ``minSalary`` / ``hasEquity``.

    ``hasEquity`` is three-valued: True keeps jobs with equity, False keeps
    jobs without, None adds no predicate.
    """
    return JOB_FILTERS.build(filters, start=start)

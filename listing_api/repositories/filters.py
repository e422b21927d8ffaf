"""
Translation of filter documents into SQLAlchemy conditions.

Filter documents use a small Mongo-style vocabulary: a field maps either to a
value (equality) or to an operator dict. Supported operators are ``$eq``,
``$ne``, ``$gt``, ``$gte``, ``$lt``, ``$lte``, ``$in``, ``$regex`` (with
``$options``) and, on set-valued fields, ``$all``.
"""

from sqlalchemy import and_, func
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql.elements import ColumnElement
from typing import Any, Dict, List, Mapping, Optional, Tuple

REGEX_METACHARACTERS = set(".^$*+?{}[]|()")

COMPARISONS = {
    "$eq": lambda column, value: column == value,
    "$ne": lambda column, value: column != value,
    "$gt": lambda column, value: column > value,
    "$gte": lambda column, value: column >= value,
    "$lt": lambda column, value: column < value,
    "$lte": lambda column, value: column <= value,
    "$in": lambda column, value: column.in_(list(value)),
}


class FilterCompileError(ValueError):
    """The filter document uses a field or operator this model does not support."""


def literal_from_pattern(pattern: str) -> Optional[str]:
    """
    Recover the literal text from a pattern produced by ``re.escape``.
    Returns None when the pattern uses real regex syntax.
    """
    chars = []
    escaped = False
    for char in pattern:
        if escaped:
            chars.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in REGEX_METACHARACTERS:
            return None
        else:
            chars.append(char)
    if escaped:
        return None
    return "".join(chars)


def _regex_condition(column: InstrumentedAttribute, pattern: str, options: str) -> ColumnElement:
    ignore_case = "i" in options
    literal = literal_from_pattern(pattern)

    # Escaped literals become LIKE substring matches, which every backend supports
    if literal is not None:
        if ignore_case:
            return func.lower(column).contains(literal.lower(), autoescape=True)
        return column.contains(literal, autoescape=True)

    return column.regexp_match(pattern, flags="i" if ignore_case else None)


class FilterCompiler:
    """
    Compiles filter documents for one mapped model.

    Args:
        columns: filter field name -> scalar column
        sets: filter field name -> (relationship attribute, target id column)
    """

    def __init__(
        self,
        columns: Mapping[str, InstrumentedAttribute],
        sets: Optional[Mapping[str, Tuple[InstrumentedAttribute, InstrumentedAttribute]]] = None
    ):
        self.columns = dict(columns)
        self.sets = dict(sets or {})

    def compile(self, filter_doc: Dict[str, Any]) -> List[ColumnElement]:
        conditions: List[ColumnElement] = []
        for field, spec in filter_doc.items():
            if field in self.sets:
                conditions.extend(self._set_conditions(field, spec))
            elif field in self.columns:
                conditions.extend(self._column_conditions(field, spec))
            else:
                raise FilterCompileError(f"Unknown filter field: {field}")
        return conditions

    def _column_conditions(self, field: str, spec: Any) -> List[ColumnElement]:
        column = self.columns[field]
        if not isinstance(spec, dict):
            return [column == spec]

        conditions = []
        for operator, value in spec.items():
            if operator == "$options":
                continue
            if operator == "$regex":
                conditions.append(_regex_condition(column, value, spec.get("$options", "")))
            elif operator in COMPARISONS:
                conditions.append(COMPARISONS[operator](column, value))
            else:
                raise FilterCompileError(f"Unsupported operator {operator} on {field}")
        return conditions

    def _set_conditions(self, field: str, spec: Any) -> List[ColumnElement]:
        relationship, target_id = self.sets[field]

        if not isinstance(spec, dict):
            return [relationship.any(target_id == spec)]

        conditions = []
        for operator, values in spec.items():
            if operator == "$all":
                if not values:
                    continue
                # Superset match: the set must contain every listed member
                conditions.append(and_(*[relationship.any(target_id == value) for value in values]))
            elif operator == "$in":
                conditions.append(relationship.any(target_id.in_(list(values))))
            else:
                raise FilterCompileError(f"Unsupported operator {operator} on {field}")
        return conditions

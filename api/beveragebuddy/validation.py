"""
Explicit field validation for the table models.

Table models skip pydantic validation on construction, so the constraints
declared on ReviewBase / CategoryBase are checked here, before anything is
written to the database. Every broken field is reported, not just the first.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Type, Union

from pydantic import ValidationError as PydanticValidationError
from sqlmodel import SQLModel

from .errors import ValidationError
from .models import Category, CategoryBase, Review, ReviewBase


# pydantic error types -> constraint names
_RULES = {
    "missing": "not_null",
    "greater_than_equal": "min",
    "less_than_equal": "max",
    "string_too_short": "min_size",
    "not_blank": "not_blank",
    "past_or_present": "past_or_present",
}

# Fields declared with a not-blank check on both ReviewBase and CategoryBase
_NOT_BLANK_FIELDS = ("name",)


@dataclass(frozen=True)
class Violation:
    field: str
    rule: str
    message: str


def _to_violation(error: Dict[str, Any]) -> Violation:
    field = ".".join(str(part) for part in error["loc"])
    if "input" in error and error["input"] is None:
        rule = "not_null"
    else:
        rule = _RULES.get(error["type"], error["type"])
    return Violation(field=field, rule=rule, message=error["msg"])


def _check(schema: Type[SQLModel], entity: SQLModel) -> List[Violation]:
    data = {name: getattr(entity, name, None) for name in schema.model_fields}
    try:
        schema.model_validate(data)
        violations = []
    except PydanticValidationError as e:
        violations = [_to_violation(error) for error in e.errors()]

    # pydantic stops at the first failure of a field, so a blank name that is
    # also too short would only report min_size
    reported = {(v.field, v.rule) for v in violations}
    for field in _NOT_BLANK_FIELDS:
        value = data.get(field)
        if isinstance(value, str) and not value.strip() and (field, "not_blank") not in reported:
            violations.append(Violation(field=field, rule="not_blank", message="must not be blank"))
    return violations


def validate_review(review: Review) -> List[Violation]:
    """Return the broken field constraints of `review`; empty when valid."""
    return _check(ReviewBase, review)


def validate_category(category: Category) -> List[Violation]:
    return _check(CategoryBase, category)


def ensure_valid(entity: Union[Review, Category]) -> None:
    """
    Raise ValidationError listing every violation of `entity`.

    Raises:
        ValidationError: if at least one field constraint is broken.
        TypeError: for entities without declared constraints.
    """
    if isinstance(entity, Review):
        violations = validate_review(entity)
    elif isinstance(entity, Category):
        violations = validate_category(entity)
    else:
        raise TypeError(f"Cannot validate {type(entity).__name__}")
    if violations:
        raise ValidationError(violations)

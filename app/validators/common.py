from decimal import Decimal, InvalidOperation
from typing import Any, Callable, List, NamedTuple, Optional


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def lookup(payload: Any, path: str) -> Any:
    """Resolve a dotted path like ``dimensions.length``; MISSING when absent."""
    current = payload
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return MISSING
        current = current[key]
    return current


def to_number(value: Any) -> Optional[Decimal]:
    """JSON numbers and numeric strings become a Decimal, anything else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = Decimal(str(value))
    elif isinstance(value, str) and value.strip():
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None
    if not number.is_finite():
        return None
    return number


def is_non_negative_number(value: Any) -> bool:
    number = to_number(value)
    return number is not None and number >= 0


def is_non_negative_integer(value: Any) -> bool:
    number = to_number(value)
    return number is not None and number >= 0 and number == number.to_integral_value()


def is_below(limit) -> Callable[[Any], bool]:
    """Upper bound for numeric fields; non-numbers are left to the type rule."""
    def check(value: Any) -> bool:
        number = to_number(value)
        return number is None or number < limit
    return check


def is_non_blank_string(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


class FieldRule(NamedTuple):
    """
    One validation step: ``check`` runs only when the field is present.
    ``required`` is the message used when a mandatory field is absent.
    """

    path: str
    check: Callable[[Any], bool]
    message: str
    required: Optional[str] = None


def run_rules(payload: dict, rules: List[FieldRule], partial: bool = False) -> List[str]:
    errors: List[str] = []
    for rule in rules:
        value = lookup(payload, rule.path)
        # null counts as absent for mandatory fields, except in partial updates
        absent = value is MISSING or (value is None and rule.required is not None and not partial)
        if absent:
            if rule.required is not None and not partial:
                errors.append(rule.required)
            continue
        if not rule.check(value):
            errors.append(rule.message)
    return errors

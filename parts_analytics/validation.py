"""
Input Validation Module
Checks parts and usage events against the input contract before any
analytics are computed.

find_input_issues() flags every problem (for reports); validate_inputs()
rejects the batch on the first one.
"""

from datetime import date
from numbers import Integral
from typing import Any, Dict, Iterable, List

import pandas as pd

from .exceptions import InvalidInputError, get_error_description
from .models import Part, UsageEvent


def _is_integer(value: Any) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def _issue(code: str, part_id: Any, field: str, value: Any) -> Dict[str, Any]:
    return {
        "code": code,
        "part_id": part_id,
        "field": field,
        "value": value,
        "issue": get_error_description(code),
    }


def check_part(part: Part) -> List[Dict[str, Any]]:
    """Return the contract violations of a single part."""
    issues = []

    if part.id is None or part.id == "":
        issues.append(_issue("INP005", part.id, "id", part.id))

    for field_name, negative_code in (("current_stock", "INP001"), ("minimum_stock", "INP002")):
        value = getattr(part, field_name)
        if not _is_integer(value):
            issues.append(_issue("INP006", part.id, field_name, value))
        elif value < 0:
            issues.append(_issue(negative_code, part.id, field_name, value))

    return issues


def check_event(event: UsageEvent) -> List[Dict[str, Any]]:
    """Return the contract violations of a single usage event."""
    issues = []

    if event.part_id is None or event.part_id == "":
        issues.append(_issue("INP005", event.part_id, "part_id", event.part_id))

    if not _is_integer(event.quantity):
        issues.append(_issue("INP006", event.part_id, "quantity", event.quantity))
    elif event.quantity <= 0:
        issues.append(_issue("INP003", event.part_id, "quantity", event.quantity))

    # datetime and pd.Timestamp are date subclasses; NaT counts as missing
    if event.timestamp is None or (isinstance(event.timestamp, date) and pd.isna(event.timestamp)):
        issues.append(_issue("INP004", event.part_id, "timestamp", event.timestamp))
    elif not isinstance(event.timestamp, date):
        issues.append(_issue("INP007", event.part_id, "timestamp", event.timestamp))

    return issues


def find_input_issues(parts: Iterable[Part], history: Iterable[UsageEvent]) -> List[Dict[str, Any]]:
    """
    Flag every contract violation in a batch.

    Usage events for parts outside the batch are still checked; they are
    ignored by the pipeline but malformed rows usually mean a bad extract.

    Returns:
        List of issue dicts (code, part_id, field, value, issue) in input order
    """
    issues = []
    for part in parts:
        issues.extend(check_part(part))
    for event in history:
        issues.extend(check_event(event))
    return issues


def validate_part(part: Part) -> None:
    issues = check_part(part)
    if issues:
        _raise(issues[0])


def validate_event(event: UsageEvent) -> None:
    issues = check_event(event)
    if issues:
        _raise(issues[0])


def validate_inputs(parts: Iterable[Part], history: Iterable[UsageEvent]) -> None:
    """Raise InvalidInputError naming the first offending part and field."""
    issues = find_input_issues(parts, history)
    if issues:
        _raise(issues[0])


def _raise(issue: Dict[str, Any]):
    raise InvalidInputError(
        part_id=issue["part_id"],
        field=issue["field"],
        value=issue["value"],
        code=issue["code"],
    )

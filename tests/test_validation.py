"""Tests for input contract checks."""

from datetime import date, datetime

import pandas as pd
import pytest

from parts_analytics.exceptions import InvalidInputError, get_error_description
from parts_analytics.models import Part, UsageEvent
from parts_analytics.validation import (
    check_event,
    check_part,
    find_input_issues,
    validate_event,
    validate_inputs,
    validate_part,
)


def _part(**kwargs):
    base = dict(id=1, code="P1", description="Part", current_stock=5, minimum_stock=2)
    base.update(kwargs)
    return Part(**base)


def _event(**kwargs):
    base = dict(part_id=1, quantity=3, timestamp=date(2025, 1, 1))
    base.update(kwargs)
    return UsageEvent(**base)


class TestChecks:

    def test_valid_inputs_have_no_issues(self):
        assert check_part(_part()) == []
        assert check_event(_event()) == []
        assert check_event(_event(timestamp=datetime(2025, 1, 1, 9, 30))) == []
        assert check_event(_event(timestamp=pd.Timestamp("2025-01-01"))) == []
        assert find_input_issues([_part()], [_event()]) == []

    @pytest.mark.parametrize("kwargs,code,field", [
        ({"current_stock": -1}, "INP001", "current_stock"),
        ({"minimum_stock": -5}, "INP002", "minimum_stock"),
        ({"current_stock": 2.5}, "INP006", "current_stock"),
        ({"minimum_stock": True}, "INP006", "minimum_stock"),
        ({"id": None}, "INP005", "id"),
    ])
    def test_part_issues(self, kwargs, code, field):
        [issue] = check_part(_part(**kwargs))
        assert (issue["code"], issue["field"]) == (code, field)
        assert issue["issue"] == get_error_description(code)

    @pytest.mark.parametrize("kwargs,code,field", [
        ({"quantity": 0}, "INP003", "quantity"),
        ({"quantity": -2}, "INP003", "quantity"),
        ({"quantity": "3"}, "INP006", "quantity"),
        ({"timestamp": None}, "INP004", "timestamp"),
        ({"timestamp": pd.NaT}, "INP004", "timestamp"),
        ({"timestamp": "not a date"}, "INP007", "timestamp"),
        ({"timestamp": 20250101}, "INP007", "timestamp"),
        ({"timestamp": "2025-01-01"}, "INP007", "timestamp"),
        ({"part_id": ""}, "INP005", "part_id"),
    ])
    def test_event_issues(self, kwargs, code, field):
        [issue] = check_event(_event(**kwargs))
        assert (issue["code"], issue["field"]) == (code, field)

    def test_all_issues_in_input_order(self):
        issues = find_input_issues(
            [_part(current_stock=-1), _part(id=2, minimum_stock=-1)],
            [_event(quantity=0)],
        )
        assert [i["code"] for i in issues] == ["INP001", "INP002", "INP003"]


class TestValidate:

    def test_raises_on_first_issue(self):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_inputs([_part(id=9, current_stock=-3)], [_event(quantity=0)])

        err = exc_info.value
        assert (err.part_id, err.field, err.value, err.code) == (9, "current_stock", -3, "INP001")
        assert "INP001" in str(err)
        assert "Negative current stock" in str(err)

    def test_single_item_validators(self):
        validate_part(_part())
        validate_event(_event())
        with pytest.raises(InvalidInputError):
            validate_part(_part(minimum_stock=-1))
        with pytest.raises(InvalidInputError):
            validate_event(_event(quantity=-1))

    def test_message_without_code(self):
        err = InvalidInputError(part_id="X", field="quantity", value=0)
        assert str(err) == "Invalid input for part 'X': field 'quantity' = 0 (invalid value)"

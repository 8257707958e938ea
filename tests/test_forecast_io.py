from datetime import date
from decimal import Decimal

import pytest
from jsonschema import ValidationError

from finforecast.forecast_io import (
    error_to_string,
    load_schema,
    parse_event_date,
    parse_as_of,
    parse_events,
    parse_forecast_request,
    validate_forecast_request,
)


def test_load_schema_reads_bundled_request_schema():
    schema = load_schema("forecast_request.schema.json")
    assert isinstance(schema, dict)
    assert schema.get("title") == "ForecastRequest"
    assert load_schema("schemas/forecast_output.schema.json")["title"] == "ForecastOutput"


def test_load_schema_missing():
    with pytest.raises(FileNotFoundError):
        load_schema("nope.schema.json")


def test_validate_request_accepts_minimal():
    validate_forecast_request({"events": []})
    validate_forecast_request({
        "events": [{"date": "2025-01-01T10:00:00Z", "type": "income", "amount": 10.5}],
        "horizon": 60,
        "scenario": "pessimistic",
        "as_of": "2025-01-31",
    })


@pytest.mark.parametrize("bad", [
    {},
    {"events": [{"date": "2025-01-01", "type": "refund", "amount": 5}]},
    {"events": [{"date": "2025-01-01", "type": "income", "amount": -5}]},
    {"events": [{"date": "yesterday", "type": "income", "amount": 5}]},
    {"events": [], "horizon": 45},
    {"events": [], "scenario": "doom"},
    {"events": [{"date": "2025-01-01", "type": "income", "amount": 1e200}]},
])
def test_validate_request_rejects_invalid(bad):
    with pytest.raises(ValidationError):
        validate_forecast_request(bad)


def test_parse_event_date_variants():
    assert parse_event_date("2025-03-01") == date(2025, 3, 1)
    assert parse_event_date("2025-03-01T10:00:00Z") == date(2025, 3, 1)
    assert parse_event_date("2025-03-01T23:30:00-02:00") == date(2025, 3, 2)
    assert parse_event_date("2025-03-01T23:59:59") == date(2025, 3, 1)


def test_parse_events():
    events = parse_events([
        {"date": "2025-03-01", "type": "income", "amount": 10.1, "category_name": "Sales"},
        {"date": "2025-03-02", "type": "expense", "amount": 3},
    ])
    assert events[0].amount == Decimal("10.1")
    assert events[0].kind == "income" and events[0].category_name == "Sales"
    assert events[1].occurred_on == date(2025, 3, 2) and events[1].category_id is None


def test_error_to_string_validationerror_path():
    with pytest.raises(ValidationError) as e:
        validate_forecast_request({"events": [{"date": "2025-01-01", "type": "income", "amount": -1}]})
    msg = error_to_string(e.value)
    assert "at $.events[0].amount" in msg


def test_error_to_string_generic():
    assert error_to_string(ValueError("boom")) == "ValueError: boom"


def test_parse_events_rejects_impossible_date_with_path():
    with pytest.raises(ValidationError) as e:
        parse_events([
            {"date": "2025-03-01", "type": "income", "amount": 1},
            {"date": "2025-02-30", "type": "income", "amount": 1},
        ])
    assert "at $.events[1].date" in error_to_string(e.value)


def test_parse_as_of():
    assert parse_as_of(None) is None
    assert parse_as_of("2025-03-10") == date(2025, 3, 10)
    with pytest.raises(ValidationError) as e:
        parse_as_of("2025-13-01")
    assert error_to_string(e.value).endswith("at $.as_of")


def test_parse_forecast_request():
    events, as_of = parse_forecast_request({
        "events": [{"date": "2025-03-01", "type": "expense", "amount": 20}],
        "as_of": "2025-03-05",
    })
    assert events[0].amount == Decimal("20") and as_of == date(2025, 3, 5)
    assert parse_forecast_request({"events": []}) == ([], None)

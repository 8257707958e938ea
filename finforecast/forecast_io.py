"""
I/O helpers for schemas, request parsing and error strings.

PURPOSE: Central place for JSON schema validation of forecast requests/results,
         conversion of raw request events into domain Events, and readable
         error strings for error bodies.
CONTEXT: Used by the pipeline, the Lambda handler and the CLI so every surface
         accepts and emits the same shapes.
"""

from __future__ import annotations

import json
import pathlib
from datetime import date, datetime, timezone
from decimal import Decimal
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Optional, Tuple

from jsonschema import Draft7Validator, ValidationError

from finforecast.model_interface.types import Event

SCHEMA_DIR = pathlib.Path(__file__).resolve().parent / "schemas"


# -------------------- Schema loading utilities -------------------- #

@lru_cache(maxsize=64)
def _load_schema_cached(abs_path: str) -> Dict[str, Any]:
    """
    Read and parse a JSON schema file, caching it to avoid repeated disk I/O.

    parameters:
    - abs_path: str – full absolute path to the schema file.

    returns:
    - dict – parsed JSON schema content.
    """
    p = pathlib.Path(abs_path)
    text = p.read_text(encoding="utf-8")
    return json.loads(text)


def load_schema(path: str) -> Dict[str, Any]:
    """
    Load a JSON schema by file name or path (with caching).

    parameters:
    - path: str – a bare name like 'forecast_request.schema.json' (resolved in the
      bundled schemas directory) or a relative/absolute path.

    returns:
    - dict – schema as a Python dictionary.

    raises:
    - FileNotFoundError – if the file cannot be located.
    - json.JSONDecodeError – if the file is not valid JSON.
    """
    p = pathlib.Path(path)
    if not p.exists():
        # Fallback: the schemas shipped inside the package.
        alt = SCHEMA_DIR / p.name
        if not alt.exists():
            raise FileNotFoundError(f"Schema not found at: {path}")
        p = alt
    return _load_schema_cached(str(p.resolve()))


# -------------------- Validation helpers -------------------- #

def validate_with_schema(instance: Dict[str, Any], schema: Dict[str, Any]) -> None:
    """
    Validate a given instance against a provided schema.

    raises:
    - ValidationError – if instance fails to meet schema requirements.
    """
    Draft7Validator(schema).validate(instance)


def validate_forecast_request(payload: Dict[str, Any]) -> None:
    """
    Validate an incoming forecast request (events, horizon, scenario, as_of).
    """
    validate_with_schema(payload, load_schema("forecast_request.schema.json"))


def validate_forecast_output(output: Dict[str, Any]) -> None:
    """
    Validate the pipeline output before it leaves the service.
    """
    validate_with_schema(output, load_schema("forecast_output.schema.json"))


# -------------------- Parsing helpers -------------------- #

def parse_event_date(raw: str) -> date:
    """
    Turn an ISO date or datetime string into a calendar date.

    notes:
    - Datetimes carrying an offset (or a trailing 'Z') are converted to UTC first,
      so '2025-03-01T23:30:00-02:00' lands on 2025-03-02.
    - Naive datetimes keep their own calendar date.
    """
    text = raw.strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.date()


def parse_events(raw_events: Iterable[Dict[str, Any]]) -> List[Event]:
    """
    Convert request events into domain Events.

    parameters:
    - raw_events: iterable of dict – {"date", "type", "amount", "category_id"?, "category_name"?}
      already validated against the request schema.

    returns:
    - list[Event]

    raises:
    - ValidationError – a date that matches the pattern but is not a real day
      (e.g. '2025-02-30'), with the path of the offending event.
    """
    events: List[Event] = []
    for i, e in enumerate(raw_events):
        try:
            occurred_on = parse_event_date(e["date"])
        except ValueError as err:
            raise ValidationError(f"{e['date']!r} is not a valid date ({err})", path=("events", i, "date"))
        events.append(Event(
            occurred_on=occurred_on,
            kind=e["type"],
            amount=Decimal(str(e["amount"])),
            category_id=e.get("category_id"),
            category_name=e.get("category_name"),
        ))
    return events


def parse_as_of(raw: Optional[str]) -> Optional[date]:
    """
    Parse the optional as_of day; None when the request leaves it to the clock.

    raises:
    - ValidationError – calendar-impossible day such as '2025-13-01'.
    """
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError as err:
        raise ValidationError(f"{raw!r} is not a valid date ({err})", path=("as_of",))


def parse_forecast_request(payload: Dict[str, Any]) -> Tuple[List[Event], Optional[date]]:
    """
    Validate a forecast request and convert its events and as_of.

    Schema checks only see the shape of a date string, so a request is not
    accepted until every date has also parsed.

    returns:
    - (events, as_of): as_of is None when the payload omits it.

    raises:
    - ValidationError – schema violation or impossible date.
    """
    validate_forecast_request(payload)
    return parse_events(payload["events"]), parse_as_of(payload.get("as_of"))


# -------------------- Error formatting -------------------- #

def error_to_string(err: Exception) -> str:
    """
    Convert exceptions into readable strings for user-facing error messages.

    returns:
    - str – descriptive message with a JSON path when err is a ValidationError.
    """
    if isinstance(err, ValidationError):
        # Include JSON path context (e.g. $.events[0].amount)
        path = "$" + "".join(f"[{repr(p)}]" if isinstance(p, int) else f".{p}" for p in err.path)
        return f"{err.message} at {path}"
    return f"{type(err).__name__}: {err}"


# -------------------- Public exports -------------------- #

__all__ = [
    "load_schema",
    "validate_with_schema",
    "validate_forecast_request",
    "validate_forecast_output",
    "parse_event_date",
    "parse_events",
    "parse_as_of",
    "parse_forecast_request",
    "error_to_string",
]

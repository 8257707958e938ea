"""
AWS Lambda handler: validates input, runs the forecast pipeline, returns schema-valid output.
Adds structured, JSON CloudWatch-friendly logs with correlation IDs.

PURPOSE:
- Entry point for AWS Lambda behind API Gateway.
- Normalises the incoming event, delegates to run_pipeline, and returns an
  HTTP-style response body.

CONTEXT:
- Logging includes request_id and correlation_id so traces are easy to follow.
- The transaction store and authentication live upstream; the body already
  carries one account's events.
"""

from __future__ import annotations
import json
import time
import traceback
import uuid
from typing import Any, Dict

from jsonschema import ValidationError

from finforecast.logging_setup import configure_logging
from finforecast.forecast_io import error_to_string, parse_forecast_request
from finforecast.pipeline import run_pipeline


log = configure_logging()


def _response(body: Dict[str, Any], status_code: int = 200) -> Dict[str, Any]:
    """
    Wrap a Python dict into an API Gateway compatible response.

    returns:
    - dict – {"statusCode": int, "headers": {...}, "body": "<json-string>"}.
    """
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def _error_body(message: str, latency_ms: float) -> Dict[str, Any]:
    return {
        "status": "error",
        "error": message,
        "latency_ms": latency_ms,
    }


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """
    Lambda entry point.

    flow:
    1) Bind request/correlation IDs for traceability.
    2) Normalise body (handles API Gateway proxy format if present).
    3) Validate the request and parse its dates; an invalid body or an
       impossible calendar date returns HTTP 400.
    4) Run the pipeline. Output schema violations and unexpected failures return
       a schema-valid "error" payload with HTTP 200 to avoid API GW retries.

    returns:
    - dict – API Gateway compatible response with JSON body.
    """
    t0 = time.time()

    request_id = getattr(context, "aws_request_id", None) or str(uuid.uuid4())
    correlation_id = (event.get("headers", {}) or {}).get("x-correlation-id") or str(uuid.uuid4())
    req_log = log.bind(request_id=request_id, correlation_id=correlation_id)
    req_log.info("request.received", event_type=type(event).__name__)

    # If event["body"] is a JSON string, parse it; otherwise fall back to {} on error.
    body = event
    if isinstance(event, dict) and "body" in event:
        try:
            body = json.loads(event["body"]) if isinstance(event["body"], str) else (event["body"] or {})
        except json.JSONDecodeError:
            body = {}
            req_log.warning("request.body_parse_failed")

    try:
        parse_forecast_request(body)
    except ValidationError as e:
        latency_ms = round((time.time() - t0) * 1000, 1)
        req_log.warning("response.invalid_request", error=error_to_string(e), latency_ms=latency_ms)
        return _response(_error_body(f"Invalid request: {error_to_string(e)}", latency_ms), 400)

    try:
        result = run_pipeline(body)
    except ValidationError as e:
        # The request already passed, so this is the output schema.
        latency_ms = round((time.time() - t0) * 1000, 1)
        req_log.error("response.schema_invalid", error=str(e), latency_ms=latency_ms)
        return _response(_error_body(f"ForecastOutput schema violation: {error_to_string(e)}", latency_ms), 200)
    except Exception as e:
        latency_ms = round((time.time() - t0) * 1000, 1)
        req_log.error(
            "response.error",
            error=str(e),
            traceback=traceback.format_exc(limit=2),
            latency_ms=latency_ms,
        )
        return _response(_error_body(error_to_string(e), latency_ms), 200)

    latency_ms = round((time.time() - t0) * 1000, 1)
    req_log.info("response.success", latency_ms=latency_ms, quality=result["forecast"]["quality"])
    return _response(result, 200)

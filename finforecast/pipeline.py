# PURPOSE: Request-level pipeline around the forecast engine: validates input, resolves
#          defaults and the clock, runs the forecast, attaches a summary and P&L block,
#          and validates the final output against its schema.
# CONTEXT: Shared by the Lambda handler and the CLI. The engine itself stays pure;
#          the only clock read in the package happens here.

from __future__ import annotations
import json, os, time, uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict
from zoneinfo import ZoneInfo

import structlog

from finforecast.forecast_io import parse_forecast_request, validate_forecast_output
from finforecast.model_impl.engine import generate_forecast, summarize
from finforecast.tools import pnl

log = structlog.get_logger(__name__)

TZ = ZoneInfo(os.getenv("FORECAST_TZ", "UTC"))
DEFAULT_HORIZON = int(os.getenv("FORECAST_DEFAULT_HORIZON", "30"))
DEFAULT_SCENARIO = os.getenv("FORECAST_DEFAULT_SCENARIO", "base")


def _run_id() -> str:
    """
    Readable run ID: short random prefix plus a timestamp suffix.
    Example: 'a1b2c3d4-20251021130000'
    """
    return uuid.uuid4().hex[:8] + "-" + datetime.now(TZ).strftime("%Y%m%d%H%M%S")


def today() -> date:
    """Current calendar date in the configured FORECAST_TZ."""
    return datetime.now(TZ).date()


def _money(x: Decimal) -> float:
    return float(x)


def _period_total_dict(p: pnl.PeriodTotal) -> Dict[str, Any]:
    return {"period": p.period, "income": _money(p.income), "expense": _money(p.expense), "profit": _money(p.profit)}


def _period_summary_dict(s: pnl.PeriodSummary) -> Dict[str, Any]:
    return {
        "income": _money(s.income),
        "expense": _money(s.expense),
        "profit": _money(s.profit),
        "transaction_count": s.transaction_count,
        "avg_transaction": _money(s.avg_transaction),
        "start": s.start.isoformat(),
        "end": s.end.isoformat(),
    }


def run_pipeline(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    End-to-end forecast request.

    steps:
    1) Validate input against the request schema and parse every date.
    2) Resolve horizon/scenario defaults and as_of (payload or clock).
    3) Run the forecast engine and summarise its series.
    4) Build the P&L block (monthly history + current month).
    5) Assemble output with run_id and latency; validate against the output schema.

    returns:
    - dict – JSON-serialisable response for the handler/CLI.

    raises:
    - jsonschema.ValidationError – invalid request (schema or impossible date) or
      (unexpectedly) invalid output.
    """
    t0 = time.time()

    # 1) Validate input; impossible calendar dates are rejected here too
    events, as_of = parse_forecast_request(payload)

    # 2) Resolve inputs
    horizon = int(payload.get("horizon") or DEFAULT_HORIZON)
    scenario = payload.get("scenario") or DEFAULT_SCENARIO
    as_of = as_of or today()

    # 3) Forecast
    result = generate_forecast(events, horizon, scenario, as_of)
    summary = summarize(result)
    log.info(
        "forecast.generated",
        horizon=result.horizon,
        scenario=result.scenario.value,
        trend=result.trend.value,
        quality=result.quality,
        events=len(events),
        as_of=as_of.isoformat(),
    )

    # 4) P&L
    pnl_block = {
        "monthly": [_period_total_dict(p) for p in pnl.monthly_pnl(events)],
        "current_month": _period_summary_dict(pnl.current_month(events, as_of)),
    }

    # 5) Assemble + validate
    out = {
        "status": "ok",
        "run_id": _run_id(),
        "forecast": result.to_dict(),
        "summary": summary.to_dict(),
        "pnl": pnl_block,
        "latency_ms": int((time.time() - t0) * 1000),
    }
    validate_forecast_output(out)
    return out


if __name__ == "__main__":
    # Quick manual run to see a formatted result in the console.
    demo = {
        "events": [
            {"date": "2025-10-01", "type": "income", "amount": 1200},
            {"date": "2025-10-03", "type": "expense", "amount": 450, "category_name": "Rent"},
            {"date": "2025-10-08", "type": "income", "amount": 900},
        ],
        "horizon": 30,
        "scenario": "base",
        "as_of": "2025-10-10",
    }
    print(json.dumps(run_pipeline(demo), indent=2))

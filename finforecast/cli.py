#!/usr/bin/env python3
# PURPOSE: Command-line interface to run forecasts over a local JSON file of events.
# CONTEXT: Lets you try horizons and scenarios without deploying the Lambda handler.
#          Usage: finforecast events.json [--as-of YYYY-MM-DD]
#          then type "<horizon> [scenario]" at the prompt, e.g. "60 optimistic".

from __future__ import annotations
import argparse
import json
import pathlib
import sys
from typing import Any, Dict, List, Optional

from jsonschema import ValidationError

from finforecast.constants.scenarios import Scenario
from finforecast.forecast_io import error_to_string
from finforecast.logging_setup import configure_logging
from finforecast.pipeline import run_pipeline

EXIT_WORDS = {"quit", "exit", "q"}


def load_events(path: str) -> List[Dict[str, Any]]:
    """
    Read events from a JSON file: either a bare list or {"events": [...]}.
    """
    data = json.loads(pathlib.Path(path).read_text(encoding="utf-8"))
    return data["events"] if isinstance(data, dict) else data


def parse_command(line: str) -> Dict[str, Any]:
    """
    Turn '60 optimistic' into {"horizon": 60, "scenario": "optimistic"}.

    raises:
    - ValueError – horizon not an integer or unknown scenario name.
    """
    parts = line.split()
    out: Dict[str, Any] = {"horizon": int(parts[0])}
    if len(parts) > 1:
        out["scenario"] = Scenario(parts[1].lower()).value
    return out


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="finforecast", description="Cash-flow forecast CLI")
    parser.add_argument("events_file", help="JSON file with a list of events")
    parser.add_argument("--as-of", dest="as_of", default=None, help="last historical day, YYYY-MM-DD")
    args = parser.parse_args(argv)
    # stdout carries forecast JSON; log lines go to stderr
    configure_logging(service="finforecast-cli", stream=sys.stderr, default_level="WARNING")

    events = load_events(args.events_file)
    print("finforecast: type '<horizon> [scenario]' (e.g. '30 base') and press Enter. 'quit' to exit.")

    while True:
        try:
            line = input("> ").strip()
            if not line:
                continue
            if line.lower() in EXIT_WORDS:
                return 0

            try:
                payload: Dict[str, Any] = {"events": events, **parse_command(line)}
            except ValueError as e:
                print(f"Could not parse '{line}': {e}")
                continue
            if args.as_of:
                payload["as_of"] = args.as_of

            try:
                out = run_pipeline(payload)
            except (ValidationError, ValueError) as e:
                print(f"Invalid request: {error_to_string(e)}")
                continue
            print(json.dumps(out, indent=2))

        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return 0


if __name__ == "__main__":
    sys.exit(main())

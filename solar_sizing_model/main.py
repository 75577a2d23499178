"""CLI entrypoint for the solar sizing calculator.

Commands
--------
quote  – Size a single system from command-line values.
batch  – Size every quote in a JSON/CSV file and write a results CSV.
serve  – Run the HTTP service (calculator + lead endpoints).

Usage
-----
    python -m solar_sizing_model.main quote --location residential \\
        --bill 3000 --system single-phase --day-ratio 60
    python -m solar_sizing_model.main quote ... --json
    python -m solar_sizing_model.main batch --input quotes.csv --output out/
    python -m solar_sizing_model.main batch --input quotes.json --dry-run
    python -m solar_sizing_model.main -v serve --port 8000
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from solar_sizing_model.api.routes import handle_calculator_post
from solar_sizing_model.api.server import serve
from solar_sizing_model.config.defaults import (
    DEFAULT_HTTP_HOST,
    DEFAULT_HTTP_PORT,
    DEFAULT_OUTPUT_DIR,
    FIELD_DAY_NIGHT_RATIO,
    FIELD_ELECTRIC_SYSTEM,
    FIELD_LOCATION_TYPE,
    FIELD_MONTHLY_BILL,
    QUOTES_CSV_FILENAME,
)
from solar_sizing_model.config.loader import load_quote_requests
from solar_sizing_model.output.csv_writer import write_quotes_csv
from solar_sizing_model.output.formatting import (
    format_capacity,
    format_currency,
    format_payback_period,
)
from solar_sizing_model.sizing.batch import run_batch
from solar_sizing_model.sizing.calculator import calculate_solar_system
from solar_sizing_model.sizing.models import (
    CalculatorInput,
    CalculatorResult,
    ElectricSystem,
    LocationType,
)
from solar_sizing_model.sizing.validator import validate_calculator_input

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# CLI argument parsing
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    p = argparse.ArgumentParser(
        prog="python -m solar_sizing_model.main",
        description="Solar system sizing and quote calculator",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable DEBUG logging.",
    )
    sub = p.add_subparsers(dest="command", required=True)

    q = sub.add_parser("quote", help="Size a single system.")
    q.add_argument(
        "--location",
        required=True,
        help=f"Location type ({', '.join(m.value for m in LocationType)}).",
    )
    q.add_argument(
        "--bill",
        required=True,
        type=float,
        metavar="THB",
        help="Average monthly electricity bill in THB.",
    )
    q.add_argument(
        "--system",
        default=ElectricSystem.SINGLE_PHASE.value,
        help=f"Electric system ({', '.join(m.value for m in ElectricSystem)}).",
    )
    q.add_argument(
        "--day-ratio",
        required=True,
        type=float,
        metavar="PCT",
        help="Share of consumption during daylight hours (0-100).",
    )
    q.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print the API JSON response instead of a text summary.",
    )

    b = sub.add_parser("batch", help="Size every quote in a JSON or CSV file.")
    b.add_argument(
        "--input",
        required=True,
        metavar="PATH",
        help="Path to a .json or .csv batch file.",
    )
    b.add_argument(
        "--output",
        metavar="DIR",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR}).",
    )
    b.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        help="Validate the quotes, then exit without writing results.",
    )

    s = sub.add_parser("serve", help="Run the HTTP service.")
    s.add_argument("--host", default=DEFAULT_HTTP_HOST, help="Bind address.")
    s.add_argument("--port", type=int, default=DEFAULT_HTTP_PORT, help="Bind port.")
    return p


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _quote_body(args: argparse.Namespace) -> dict:
    return {
        FIELD_LOCATION_TYPE: args.location,
        FIELD_MONTHLY_BILL: args.bill,
        FIELD_ELECTRIC_SYSTEM: args.system,
        FIELD_DAY_NIGHT_RATIO: args.day_ratio,
    }


def run_quote(args: argparse.Namespace) -> int:
    """Size one system and print the result.

    Returns
    -------
    int
        Exit code (0 = success, 1 = invalid input).
    """
    body = _quote_body(args)

    if args.json:
        status, payload = handle_calculator_post(body)
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0 if status == 200 else 1

    calc_input = CalculatorInput.from_dict(body)
    errors = validate_calculator_input(calc_input)
    if errors:
        for error in errors:
            print(f"{error.field}: {error.message}", file=sys.stderr)
        return 1

    _print_summary(calc_input, calculate_solar_system(calc_input))
    return 0


def run_batch_command(args: argparse.Namespace) -> int:
    """Size every quote in a batch file and write the results CSV.

    Returns
    -------
    int
        Exit code (0 = success, 1 = unreadable input file).
    """
    logger.info("Loading batch: %s", args.input)
    try:
        quote_requests = load_quote_requests(args.input)
    except Exception as exc:
        logger.error("Failed to load batch: %s", exc)
        return 1

    outcomes = run_batch(quote_requests)
    n_invalid = sum(1 for o in outcomes if not o.ok)

    if args.dry_run:
        print(
            f"Dry run: {len(outcomes)} quote(s) checked, "
            f"{n_invalid} invalid."
        )
        for outcome in outcomes:
            for error in outcome.errors:
                print(f"  {outcome.label}: {error.field}: {error.message}")
        return 0

    output_path = Path(args.output) / QUOTES_CSV_FILENAME
    write_quotes_csv(output_path, outcomes)
    print(
        f"Wrote {len(outcomes)} quote(s) to {output_path} "
        f"({n_invalid} invalid)."
    )
    return 0


def run_serve(args: argparse.Namespace) -> int:
    serve(host=args.host, port=args.port)
    return 0


def run(args: argparse.Namespace) -> int:
    """Dispatch to the selected command and return its exit code."""
    commands = {
        "quote": run_quote,
        "batch": run_batch_command,
        "serve": run_serve,
    }
    return commands[args.command](args)


def _print_summary(calc_input: CalculatorInput, result: CalculatorResult) -> None:
    """Print a concise quote summary to stdout."""
    print()
    print("=" * 60)
    print(f"  Location type:         {calc_input.location_type.value}")
    print(f"  Electric system:       {calc_input.electric_system.value}")
    print(f"  Monthly bill:          {format_currency(calc_input.monthly_bill)}")
    print(f"  Daytime usage:         {calc_input.day_night_ratio:.0f} %")
    print("=" * 60)
    print(f"  Recommended capacity:  {format_capacity(result.recommended_capacity)}")
    print(f"  Estimated cost:        {format_currency(result.estimated_cost)}")
    print(f"  Monthly savings:       {format_currency(result.monthly_savings)}")
    print(f"  Payback period:        {format_payback_period(result.payback_period)}")
    print("=" * 60)
    print()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the selected command."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    sys.exit(run(args))


if __name__ == "__main__":
    main()

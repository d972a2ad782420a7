"""Command-line frontend for the Shelfscan core engine."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

import pandas as pd
from dotenv import load_dotenv

from shelfscan.core import detect_platform, plan_export, supported_platforms
from shelfscan.core.orchestrator import MAX_SAMPLE_ROWS, SUPPORTED_LANGUAGES

load_dotenv(Path(__file__).resolve().parents[2] / ".env")


def _json_dump(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def read_csv_sample(path: str | Path, *, rows: int = MAX_SAMPLE_ROWS) -> tuple[list[str], list[list[str]]]:
    """Return the header row and up to ``rows`` leading data rows as strings.

    The header row is read as plain data so duplicate and blank headers reach
    the engine exactly as written in the file.
    """
    frame = pd.read_csv(path, header=None, dtype=str, keep_default_na=False, nrows=max(0, rows) + 1)
    values = frame.fillna("").values.tolist()
    headers = [str(cell) for cell in values[0]]
    return headers, [[str(cell) for cell in row] for row in values[1:]]


def _cmd_detect(args: argparse.Namespace) -> int:
    headers, sample = read_csv_sample(args.input, rows=args.rows)
    response = detect_platform(headers, sample, language=args.language)
    _json_dump(response.to_dict())
    return 0


def _cmd_plan(args: argparse.Namespace) -> int:
    headers, _ = read_csv_sample(args.input, rows=0)
    structure = plan_export(headers, args.platform, row_count=args.row_count)
    _json_dump(structure.to_dict())
    return 0


def _cmd_platforms(args: argparse.Namespace) -> int:
    _json_dump([platform.__dict__ for platform in supported_platforms()])
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shelfscan", description="Shelfscan platform detection CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    detect = subparsers.add_parser("detect", help="Detect the source platform of a product CSV")
    detect.add_argument("input", help="CSV file path")
    detect.add_argument("--language", default="en", choices=list(SUPPORTED_LANGUAGES))
    detect.add_argument("--rows", type=int, default=10, help=f"Sample rows to analyze (max {MAX_SAMPLE_ROWS})")
    detect.set_defaults(func=_cmd_detect)

    plan = subparsers.add_parser("plan", help="Plan the enhanced export columns for a CSV")
    plan.add_argument("input", help="CSV file path")
    plan.add_argument("--platform", required=True)
    plan.add_argument("--row-count", type=int, default=1000)
    plan.set_defaults(func=_cmd_plan)

    platforms = subparsers.add_parser("platforms", help="List supported platforms")
    platforms.set_defaults(func=_cmd_platforms)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args) or 0)
    except Exception as exc:
        parser.exit(status=2, message=f"error: {exc}\n")


if __name__ == "__main__":
    raise SystemExit(main())

"""
CLI to turn MT4 HTML reports into one Pine Script overlay per instrument.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from config import Config
from mt4_report_parser import parse_report_file
from pine_script_generator import generate_pine_script, script_filename
from report_errors import ReportError
from trade_classifier import classify_and_group, clamp_tolerance
from trade_export import build_payload, save_payload

DEFAULT_FILE_GLOB = "*.htm*"
JSON_FILENAME = "grouped_trades.json"


def parse_args(argv: Optional[Iterable[str]] = None, config: Optional[Config] = None) -> argparse.Namespace:
    config = config or Config()
    parser = argparse.ArgumentParser(
        description="Export Pine Script trade overlays from MT4 HTML reports."
    )
    parser.add_argument(
        "-i",
        "--input",
        dest="inputs",
        action="append",
        type=Path,
        help="Path to an MT4 report or a directory of reports (repeatable).",
    )
    parser.add_argument(
        "--file-glob",
        type=str,
        default=DEFAULT_FILE_GLOB,
        help=f"Glob pattern for reports inside directories (default: {DEFAULT_FILE_GLOB}).",
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        default=config.be_tolerance,
        help="Break-even tolerance; |profit| <= tolerance counts as break even (default from config).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path(config.output_dir),
        help=f"Output directory for generated scripts (default: {config.output_dir}).",
    )
    parser.add_argument(
        "--instrument",
        dest="instruments",
        action="append",
        help="Only export this instrument (repeatable, case-insensitive).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help=f"Also write the grouped trades as {JSON_FILENAME} next to the scripts.",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print scripts to stdout instead of writing files.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and report counts without writing output.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args(argv)


def resolve_reports(inputs: List[Path], glob_pattern: str) -> List[Path]:
    reports: List[Path] = []
    for path in inputs:
        path = path.expanduser()
        if path.is_file():
            reports.append(path)
        elif path.is_dir():
            reports.extend(p for p in sorted(path.glob(glob_pattern)) if p.is_file())
    return sorted(set(reports))


def write_script(path: Path, script: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as file:
        file.write(script)


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    tolerance = clamp_tolerance(args.tolerance)
    wanted = {name.lower() for name in args.instruments} if args.instruments else None
    output_dir = args.output.expanduser()

    reports = resolve_reports(args.inputs or [], args.file_glob)
    if not reports:
        print("[error] no report files found", file=sys.stderr)
        return 2

    metrics: Dict[str, int] = {
        "processed_reports": 0,
        "failed_reports": 0,
        "instruments": 0,
        "scripts_written": 0,
        "winners": 0,
        "breakeven": 0,
        "losers": 0,
    }

    for report in reports:
        try:
            trades = parse_report_file(report)
        except ReportError as exc:
            print(f"[error] {report}: {exc}", file=sys.stderr)
            metrics["failed_reports"] += 1
            continue

        metrics["processed_reports"] += 1
        grouped = classify_and_group(trades, tolerance)
        if wanted is not None:
            grouped = {name: buckets for name, buckets in grouped.items() if name in wanted}

        report_dir = output_dir / report.stem
        for instrument in sorted(grouped):
            buckets = grouped[instrument]
            metrics["instruments"] += 1
            metrics["winners"] += len(buckets.winners)
            metrics["breakeven"] += len(buckets.breakeven)
            metrics["losers"] += len(buckets.losers)

            if args.dry_run:
                continue

            script = generate_pine_script(instrument, buckets)
            if args.stdout:
                print(f"// ===== {report.name}: {instrument.upper()} =====")
                print(script)
            else:
                write_script(report_dir / script_filename(instrument), script)
                metrics["scripts_written"] += 1

        if args.json and not args.dry_run and not args.stdout:
            save_payload(report_dir / JSON_FILENAME, build_payload(grouped, tolerance, source=report.name))

    summary = dict(metrics)
    summary.update(
        {
            "be_tolerance": tolerance,
            "output": str(output_dir),
            "dry_run": args.dry_run,
            "stdout": args.stdout,
        }
    )
    # keep stdout clean for piping scripts
    print(json.dumps(summary), file=sys.stderr if args.stdout else sys.stdout)
    return 1 if metrics["failed_reports"] else 0


if __name__ == "__main__":
    sys.exit(main())

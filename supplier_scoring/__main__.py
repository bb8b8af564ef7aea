"""CLI entry point for the supplier scoring engine."""

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from supplier_scoring.core.config import settings
from supplier_scoring.core.rules import ScoringRules, get_rules
from supplier_scoring.core.schemas import ColumnMapping
from supplier_scoring.reporting.table import ScoreTableReport
from supplier_scoring.scoring.engine import score_line_items
from supplier_scoring.scoring.importer import ImportLimitError, import_rows

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="supplier_scoring",
        description="Rank suppliers from decoded line-item rows",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Score rows exported as JSON, print a console table
  python -m supplier_scoring score rows.json --mapping mapping.json

  # Full JSON output with a custom rule table
  python -m supplier_scoring score rows.json --mapping mapping.json --format json --rules config/scoring.yaml

  # Show the active rule table
  python -m supplier_scoring rules
        """
    )
    sub = parser.add_subparsers(dest="command", required=True)

    score = sub.add_parser("score", help="Score a JSON array of decoded rows")
    score.add_argument("rows", type=Path, help="JSON file with a list of row objects")
    score.add_argument("--mapping", type=Path, required=True, help="JSON file mapping fields to column names")
    score.add_argument("--format", choices=["table", "json"], default="table", help="Output format (default: table)")
    score.add_argument("--rules", type=Path, help="Scoring rule YAML (default: config fallback chain)")
    score.add_argument("--limit", type=int, help="Max suppliers in the table view")

    sub.add_parser("rules", help="Print the active rule table")

    parser.add_argument("--log-level", default=settings.log_level, help=f"Logging level (default: {settings.log_level})")
    return parser


def _load_json(path: Path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def run_score(args) -> int:
    active = ScoringRules.from_yaml(args.rules) if args.rules else get_rules()
    mapping = ColumnMapping(**_load_json(args.mapping))
    rows = _load_json(args.rows)
    if not isinstance(rows, list):
        raise ValueError(f"{args.rows} must contain a JSON array of row objects")

    imported = import_rows(rows, mapping)
    run = score_line_items(imported.items, scoring_rules=active)

    if args.format == "json":
        print(json.dumps(run.to_dict(), indent=2, ensure_ascii=False))
    else:
        ScoreTableReport().generate(run.suppliers, limit=args.limit)
    return 0


def main(argv=None) -> int:
    """Main CLI function."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    try:
        if args.command == "rules":
            print(json.dumps(get_rules().to_summary(), indent=2))
            return 0
        return run_score(args)
    except (FileNotFoundError, json.JSONDecodeError, yaml.YAMLError, ValidationError, ImportLimitError, ValueError) as e:
        logger.error(f"Scoring failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

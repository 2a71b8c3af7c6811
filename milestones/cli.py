"""
milestones.cli
==============

Command‑line front end.

Examples
--------
$ milestones calc 2024-01-01                   # against the current time
$ milestones calc 2024-01-01 --now 2024-06-01T12:00
$ milestones catalog
$ milestones circle-next 2001-05-04
"""

from __future__ import annotations

import argparse
import sys
from datetime import date, datetime
from typing import List, Optional

from .calculator import calculate_milestones
from .catalog import MILESTONES
from .circle import get_next_milestone
from .settings import configure_logging


def _format_date(moment: datetime) -> str:
    return f"{moment:%B} {moment.day}, {moment.year}"


def _parse_date(parser: argparse.ArgumentParser, value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        parser.error(f"invalid date (expected YYYY-MM-DD): {value}")


def _parse_now(parser: argparse.ArgumentParser, value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        parser.error(f"invalid --now timestamp: {value}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="milestones",
        description="Recovery milestone calculator.",
    )
    parser.add_argument("--log-level", default=None, help="logging level (default from MILESTONES_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    calc = sub.add_parser("calc", help="milestones for a sobriety date")
    calc.add_argument("sobriety_date", help="YYYY-MM-DD")
    calc.add_argument("--now", help="evaluate at this ISO timestamp instead of the current time")

    sub.add_parser("catalog", help="list every milestone")

    circle = sub.add_parser("circle-next", help="next recovery-circle milestone for a clean date")
    circle.add_argument("clean_date", help="YYYY-MM-DD")
    circle.add_argument("--now", help="evaluate at this ISO timestamp instead of the current time")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "catalog":
        for m in MILESTONES:
            shop = f"  [{m.shop_link.label}]" if m.shop_link else ""
            print(f"{m.emoji} {m.label:<10} {m.days:>5} days{shop}")
        return 0

    if args.command == "circle-next":
        clean = _parse_date(parser, args.clean_date)
        nxt = get_next_milestone(clean, now=_parse_now(parser, args.now))
        print(f"{nxt.days_until}d to {nxt.label}")
        return 0

    start = _parse_date(parser, args.sobriety_date)
    result = calculate_milestones(start, now=_parse_now(parser, args.now))

    noun = "day" if result.total_days == 1 else "days"
    print(f"{result.total_days:,} {noun} sober ({result.duration_text()})")
    if result.achieved:
        print("\nMilestones achieved:")
        for a in result.achieved:
            print(f"  {a.milestone.emoji} {a.milestone.label} — achieved {_format_date(a.date_achieved)}")
    if result.next is not None:
        n = result.next
        unit = "day" if n.days_remaining == 1 else "days"
        print(f"\nNext: {n.milestone.emoji} {n.milestone.label} — "
              f"{n.days_remaining} {unit} away — {_format_date(n.target_date)}")
    print(f"\n{result.share_text()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""CLI entry point for running the tutorial steps and checking the README.

Usage::

    ditutorial steps
    ditutorial run container --phone +70000000000
    ditutorial check-docs README.md
"""

import argparse
import logging
import sqlite3
import sys
from dataclasses import replace
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Sequence

import ditutorial
from ditutorial.config import TutorialConfig
from ditutorial.domain import Order
from ditutorial.snippets import check_document, collect_regions
from ditutorial.steps import STEPS

logger = logging.getLogger(__name__)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ditutorial")
    parser.add_argument("-v", "--verbose", action="store_true", help="log at DEBUG level")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("steps", help="list the tutorial steps")

    run = commands.add_parser("run", help="process a demo order with one step")
    run.add_argument("step", choices=tuple(STEPS))
    run.add_argument("--database", help="sqlite database path")
    run.add_argument("--phone", default="+70000000000")
    run.add_argument("--total", default="990.00")

    check = commands.add_parser("check-docs", help="verify README code fences")
    check.add_argument("readme", nargs="?", type=Path, default=Path("README.md"))
    return parser


def _run(arguments: argparse.Namespace, config: TutorialConfig) -> int:
    if arguments.database is not None:
        config = replace(config, database_path=arguments.database)
    try:
        total = Decimal(arguments.total)
    except InvalidOperation as e:
        raise ValueError(f"Not a number: {arguments.total!r}") from e
    order = Order(customer_phone=arguments.phone, total=total)
    saved = STEPS[arguments.step].run(config, order)
    print(f"order {saved.id}: {saved.customer_phone} {saved.total}")
    return 0


def _check_docs(arguments: argparse.Namespace) -> int:
    package_directory = Path(ditutorial.__file__).parent
    regions = collect_regions(sorted(package_directory.rglob("*.py")))
    problems = check_document(arguments.readme.read_text(encoding="utf-8"), regions)
    for problem in problems:
        print(f"{arguments.readme}: {problem}")
    logger.debug("Checked %s against %d regions", arguments.readme, len(regions))
    return 1 if problems else 0


def main(argv: Sequence[str] | None = None) -> int:
    arguments = _parser().parse_args(argv)
    try:
        config = TutorialConfig.from_environment()
    except ValueError as e:
        raise SystemExit(f"ditutorial: {e}") from e
    logging.basicConfig(
        level=logging.DEBUG if arguments.verbose else config.numeric_log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        match arguments.command:
            case "steps":
                for number, (name, module) in enumerate(STEPS.items(), start=1):
                    print(f"{number}. {name}: {module.TITLE}")
                return 0
            case "run":
                return _run(arguments, config)
            case "check-docs":
                return _check_docs(arguments)
            case command:
                raise AssertionError(command)
    except (KeyError, ValueError, OSError, sqlite3.Error) as e:
        raise SystemExit(f"ditutorial: {e}") from e


if __name__ == "__main__":
    sys.exit(main())

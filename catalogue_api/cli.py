"""
Pattern Catalogue CLI.

List the built-in catalogue, verify entries against their contracts and run
example scripts from the command line.

Usage:
    pattern-catalogue categories
    pattern-catalogue list object-pool
    pattern-catalogue verify singleton
    pattern-catalogue verify iterator collection --json
    pattern-catalogue run observer stock-market script.json

Script files hold a JSON list of steps, or an object {"steps": [...]}. A step is an
operation name, a list [operation, *args] or {"operation": ..., "args": [...]}.

Exit Codes:
    0 - Success: every check passed / every script step ran
    1 - Failure: a check failed, construction failed or a script step raised
    2 - Error: unknown category, entry or operation; unreadable or invalid script
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from catalogue_api.schemas import RunRequest, jsonable, run_payload
from pattern_catalogue.categories import PatternCategory
from pattern_catalogue.errors import CatalogueError, CatalogueErrorTaxonomy
from pattern_catalogue.implementations import default_registry
from pattern_catalogue.registry import PatternRegistry
from pattern_catalogue.runner import ExampleRunner
from pattern_catalogue.settings import settings
from pattern_catalogue.verifier import VerificationReport, Verifier

logger = logging.getLogger(__name__)

# JSON output indentation (spaces)
JSON_INDENT_SPACES = 2

EXIT_OK = 0
EXIT_FAILED = 1


def load_script(path: Path) -> List[Any]:
    """Read and validate a script file.

    Raises:
        OSError: If the file cannot be read
        ValueError: If it is not JSON or not a list of steps
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, list):
        data = {"steps": data}
    return RunRequest.model_validate(data).steps


def _format_report(report: VerificationReport) -> List[str]:
    verdict = "PASS" if report.passed else "FAIL"
    lines = [
        f"{report.category}/{report.entry_name}: {verdict} "
        f"({report.total_checks - report.failed_checks}/{report.total_checks} checks)"
    ]
    for result in report.results:
        mark = "ok  " if result.passed else "FAIL"
        line = f"  [{mark}] {result.description}"
        if result.detail and not result.passed:
            line += f": {result.detail}"
        lines.append(line)
    return lines


def _cmd_categories(registry: PatternRegistry, as_json: bool) -> int:
    rows = [
        {
            "name": category.value,
            "family": category.family,
            "capabilities": list(category.capabilities),
            "entries": len(registry.list(category)),
        }
        for category in PatternCategory
    ]
    if as_json:
        print(json.dumps({"categories": rows}, indent=JSON_INDENT_SPACES))
    else:
        for row in rows:
            print(f"{row['name']:18} {row['family']:14} {row['entries']} entries")
    return EXIT_OK


def _cmd_list(registry: PatternRegistry, category: str, as_json: bool) -> int:
    parsed = PatternCategory.parse(category)
    entries = registry.entries(parsed)
    if as_json:
        print(
            json.dumps(
                {
                    "category": parsed.value,
                    "entries": [
                        {
                            "name": entry.name,
                            "description": entry.description,
                            "checks": list(entry.contract.descriptions),
                        }
                        for entry in entries
                    ],
                },
                indent=JSON_INDENT_SPACES,
            )
        )
    elif not entries:
        print(f"{parsed}: (no entries)")
    else:
        for entry in entries:
            print(f"{entry.name:28} {entry.description}".rstrip())
    return EXIT_OK


def _cmd_verify(registry: PatternRegistry, category: str, name: Optional[str], as_json: bool) -> int:
    verifier = Verifier(registry)
    if name is None:
        reports = verifier.verify_all(category)
    else:
        reports = [verifier.verify(category, name)]
    passed = all(report.passed for report in reports)

    if as_json:
        print(
            json.dumps(
                {
                    "category": PatternCategory.parse(category).value,
                    "passed": passed,
                    "reports": [report.to_dict() for report in reports],
                },
                indent=JSON_INDENT_SPACES,
            )
        )
    else:
        for report in reports:
            print("\n".join(_format_report(report)))
        print(f"\nSummary: {sum(r.passed for r in reports)}/{len(reports)} entries passed")

    return EXIT_OK if passed else EXIT_FAILED


def _cmd_run(registry: PatternRegistry, category: str, name: str, script_file: Path, as_json: bool) -> int:
    try:
        steps = load_script(script_file)
    except (OSError, ValueError) as e:
        return _report_error(f"Invalid script file {script_file}: {e}", "invalid_script", as_json)

    try:
        run = ExampleRunner(registry).run(category, name, steps)
    except ValueError as e:
        return _report_error(str(e), "invalid_script", as_json)

    payload = run_payload(run)
    if as_json:
        print(json.dumps(payload, indent=JSON_INDENT_SPACES))
    else:
        for index, output in enumerate(run.outputs):
            print(f"[{index}] {json.dumps(jsonable(output))}")
        if not run.ok:
            error = payload["error"]
            print(f"Step {run.failed_step} failed [{error['code']}]: {error['message']}", file=sys.stderr)

    if run.ok:
        return EXIT_OK
    return CatalogueErrorTaxonomy.classify(payload["error"]["code"])["exit_code"]


def _report_error(message: str, code: str, as_json: bool) -> int:
    if as_json:
        print(json.dumps({"status": "error", "error": {"code": code, "message": message}}, indent=JSON_INDENT_SPACES))
    else:
        print(f"Error: {message}", file=sys.stderr)
    return CatalogueErrorTaxonomy.classify(code)["exit_code"]


def build_parser() -> argparse.ArgumentParser:
    # accepted before or after the subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--json",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Output in JSON format for CI integration",
    )
    common.add_argument(
        "--log-level",
        default=argparse.SUPPRESS,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        metavar="LEVEL",
        help=f"Logging level (default: CATALOGUE_LOG_LEVEL or {settings.log_level})",
    )

    parser = argparse.ArgumentParser(
        parents=[common],
        prog="pattern-catalogue",
        description="Design-pattern catalogue - list, verify and run pattern implementations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s categories                          # Every category and its entry count
  %(prog)s list strategy                       # Entries of one category
  %(prog)s verify object-pool                  # Verify every entry of a category
  %(prog)s verify singleton logger --json      # JSON report for CI
  %(prog)s run iterator collection steps.json  # Run a script against a fresh instance
""",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("categories", parents=[common], help="List pattern categories")

    list_parser = sub.add_parser("list", parents=[common], help="List the entries of a category")
    list_parser.add_argument("category")

    verify_parser = sub.add_parser("verify", parents=[common], help="Verify entries against their contracts")
    verify_parser.add_argument("category")
    verify_parser.add_argument("name", nargs="?", default=None, help="Entry name (default: every entry)")

    run_parser = sub.add_parser("run", parents=[common], help="Run a JSON script against a fresh instance")
    run_parser.add_argument("category")
    run_parser.add_argument("name")
    run_parser.add_argument("script_file", type=Path, metavar="script-file")
    return parser


def main(argv: Optional[List[str]] = None, registry: Optional[PatternRegistry] = None) -> int:
    """CLI entry point.

    Args:
        argv: Command line arguments (uses sys.argv if None)
        registry: Registry to operate on (default: the built-in catalogue)

    Returns:
        Exit code 0, 1 or 2 (see module docstring)
    """
    args = build_parser().parse_args(argv)
    as_json = getattr(args, "json", False)

    logging.basicConfig(
        level=getattr(args, "log_level", None) or settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if registry is None:
        registry = default_registry()

    try:
        if args.command == "categories":
            return _cmd_categories(registry, as_json)
        if args.command == "list":
            return _cmd_list(registry, args.category, as_json)
        if args.command == "verify":
            return _cmd_verify(registry, args.category, args.name, as_json)
        return _cmd_run(registry, args.category, args.name, args.script_file, as_json)

    except CatalogueError as e:
        logger.debug("Command %s failed: %s", args.command, e)
        return _report_error(str(e), e.code, as_json)


if __name__ == "__main__":
    raise SystemExit(main())

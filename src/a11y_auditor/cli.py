# src/a11y_auditor/cli.py
import argparse
import json
import logging
import sys
from typing import List, Optional

from tqdm.auto import tqdm

from a11y_auditor.controllers.audit_controller import AuditController
from a11y_auditor.controllers.report_controller import ReportController
from a11y_auditor.dom.registry import RuleRegistry
from a11y_auditor.managers.config_manager import config_manager
from a11y_auditor.model import Category, Severity
from a11y_auditor.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)

SUBCOMMANDS = ("run", "codes", "config")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="a11y-audit", description="Accessibility audit for HTML documents.")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default from settings.json).")
    subparsers = parser.add_subparsers(dest="subcommand", help="Audit subcommands")

    # 1. Subcommand: RUN
    run_parser = subparsers.add_parser("run", help="Audit one or more HTML files")
    run_parser.add_argument("files", nargs="+", help="HTML files to audit.")
    run_parser.add_argument("--category", choices=[c.value for c in Category], default=None,
                            help="Only run one category of checks.")
    run_parser.add_argument("--format", choices=["text", "json"], default="text", help="Console output format.")
    run_parser.add_argument("--export", type=str, default=None, help="Save results to .csv, .json or .xlsx.")
    run_parser.add_argument("--panel", type=str, default=None,
                            help="CSS selector of the audit panel to exclude from checks.")
    run_parser.add_argument("--image-alt-severity", choices=[s.value for s in Severity], default=None,
                            help="Severity for images without alt text.")
    run_parser.add_argument("--ignore", type=str, default=None, help="Comma-separated issue codes to drop.")
    run_parser.add_argument("--snippets", action="store_true", help="Show offending markup in text output.")
    run_parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar.")

    # 2. Subcommand: CODES
    subparsers.add_parser("codes", help="List every issue code per category")

    # 3. Subcommand: CONFIG
    config_parser = subparsers.add_parser("config", help="Show or change the configuration")
    config_sub = config_parser.add_subparsers(dest="config_command")
    config_sub.add_parser("list", help="Show the active configuration as JSON (default)")
    set_parser = config_sub.add_parser("set", help="Store a value in the user settings (e.g. audit.image_alt_severity warning)")
    set_parser.add_argument("key", help="Dotted key path.")
    set_parser.add_argument("value", nargs="+", help="New value.")
    config_sub.add_parser("reset", help="Remove the user settings and return to the packaged defaults")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entrypoint for the a11y-audit command."""
    args = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()

    if not args:
        parser.print_help()
        return 0

    # Bare file arguments default to 'run'
    if not args[0].startswith("-") and args[0] not in SUBCOMMANDS:
        args.insert(0, "run")

    try:
        parsed_args = parser.parse_args(args)
    except SystemExit as e:
        return int(e.code or 0)

    configure_logger(parsed_args.log_level or config_manager.get_nested("debug.level", "WARNING"))

    if parsed_args.subcommand == "codes":
        return _handle_codes()
    if parsed_args.subcommand == "config":
        return _handle_config(parsed_args)
    if parsed_args.subcommand == "run":
        return _handle_run(parsed_args)

    parser.print_help()
    return 0


def _handle_codes() -> int:
    for cat, codes in RuleRegistry.get_codes_by_category().items():
        print(f"\n📋 {cat.value}")
        print("-" * 40)
        if not codes:
            print("  (no rules registered)")
        for code in codes:
            print(f"  - {code}")
    return 0


def _handle_config(parsed_args: argparse.Namespace) -> int:
    command = parsed_args.config_command or "list"

    if command == "list":
        print(json.dumps(config_manager.get_all(), indent=2))
        return 0

    if command == "set":
        key_path = parsed_args.key
        value = " ".join(parsed_args.value)
        if value.startswith('"') and value.endswith('"'):
            value = value[1:-1]

        if not config_manager.set_nested(key_path, value):
            print(f"❌ Error: Failed to set config value for key '{key_path}'.", file=sys.stderr)
            return 1
        try:
            target = config_manager.save_user_setting(key_path)
        except (ValueError, OSError) as e:
            print(f"❌ Error: Could not save '{key_path}': {e}", file=sys.stderr)
            return 1

        new_value = config_manager.get_nested(key_path)
        print(f"✅ Config updated: {key_path} = {new_value} (type: {type(new_value).__name__}), saved to {target}")
        return 0

    if command == "reset":
        if config_manager.clear_user_settings():
            print("✅ User settings removed; using the packaged settings.json.")
        else:
            print("No user settings found; nothing to reset.")
        return 0

    return 1


def _handle_run(parsed_args: argparse.Namespace) -> int:
    settings = config_manager.audit_settings(
        panel_selector=parsed_args.panel,
        image_alt_severity=parsed_args.image_alt_severity,
        ignored_codes=parsed_args.ignore,
    )
    controller = AuditController(settings)

    pbar = None
    progress = None
    if not parsed_args.no_progress and len(parsed_args.files) > 1:
        pbar = tqdm(total=len(parsed_args.files), desc="Auditing", unit="file")

        def progress(current, total):
            pbar.n = current
            pbar.refresh()

    try:
        summary = controller.run_audit(parsed_args.files, category=parsed_args.category, progress_callback=progress)
    finally:
        if pbar is not None:
            pbar.close()

    reports = ReportController(summary["reports"])
    if parsed_args.format == "json":
        print(reports.to_json())
    else:
        print(reports.render_text(show_snippets=parsed_args.snippets))
        print(f"🔎 {len(summary['reports'])} file(s) audited, {summary['total_issues']} issue(s) found.")

    for failure in summary["failed"]:
        print(f"❌ Could not audit {failure['path']}: {failure['error']}", file=sys.stderr)

    if parsed_args.export:
        try:
            target = reports.export(parsed_args.export)
            print(f"✅ Results exported to {target}")
        except (ValueError, OSError) as e:
            print(f"❌ Export failed: {e}", file=sys.stderr)
            return 1

    return 1 if summary["failed"] else 0


if __name__ == "__main__":
    sys.exit(main())

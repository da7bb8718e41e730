"""
Restormel CLI

Command-line interface for running security audits.

Commands:
    restormel audit [PATH]          - Audit a project tree
    restormel init                  - Create default config and register the audit script
    restormel-audit                 - Audit the current directory with its configuration
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from restormel import __version__
from restormel.core.audit import run_audit, should_fail
from restormel.core.config import (
    CONFIG_FILENAME,
    FAIL_ON_CHOICES,
    FORMAT_CHOICES,
    RestormelConfig,
    generate_default_config,
)
from restormel.core.errors import RestormelError
from restormel.core.scanner import FileScanner
from restormel.integrations.github import (
    emit_annotations,
    is_github_actions,
    write_step_summary,
)
from restormel.reporting.console import ConsoleReporter, _safe_echo
from restormel.reporting.json_reporter import JSONReporter

AUDIT_SCRIPT = "restormel-audit"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@click.group()
@click.version_option(version=__version__, prog_name="Restormel")
def cli() -> None:
    """
    Restormel - Security audit for web projects

    Detect hardcoded secrets and dangerous APIs such as eval(),
    innerHTML and document.write in JavaScript and TypeScript code.
    """
    pass


# ═══════════════════════════════════════════════════════
#  restormel audit
# ═══════════════════════════════════════════════════════
@cli.command()
@click.argument("path", type=click.Path(file_okay=False), default=".")
@click.option("--format", "-f", "output_format", type=click.Choice(FORMAT_CHOICES),
              default=None, help="Output format (default: console).")
@click.option("--output", "-o", "output_file", type=click.Path(), default=None,
              help="Write a JSON report to a file.")
@click.option("--fail-on", type=click.Choice(FAIL_ON_CHOICES, case_sensitive=False),
              default=None, help="Findings that cause a non-zero exit code.")
@click.option("--ext", "extensions", multiple=True,
              help="File suffix to scan (repeatable, replaces the defaults).")
@click.option("--ignore", multiple=True,
              help="Extra directory or file name to skip (repeatable).")
@click.option("--ci", is_flag=True, help="Emit GitHub Actions annotations.")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Path to .restormel.yaml configuration file.")
@click.option("--verbose", "-v", is_flag=True, help="Log progress to stderr.")
def audit(
    path: str,
    output_format: Optional[str],
    output_file: Optional[str],
    fail_on: Optional[str],
    extensions: tuple,
    ignore: tuple,
    ci: bool,
    config_path: Optional[str],
    verbose: bool,
) -> None:
    """Audit a directory for secrets and dangerous patterns.

    Findings are advisory unless --fail-on is given.

    Examples:

        restormel audit

        restormel audit ./app --format json --output audit.json

        restormel audit --fail-on dangerous --ci
    """
    _configure_logging(verbose)
    target = Path(path).resolve()

    # ── Load configuration ──
    cfg_path = Path(config_path) if config_path else target / CONFIG_FILENAME
    try:
        config = RestormelConfig.load(cfg_path, required=config_path is not None)
        catalog = config.catalog()
    except RestormelError as exc:
        _safe_echo(click.style(f"  [X] {exc}", fg="red"), err=True)
        sys.exit(2)

    # CLI flags override config
    if extensions:
        config.extensions = list(extensions)
    config.ignore = config.ignore + list(ignore)
    fmt = output_format or config.output.format
    out_file = output_file or config.output.file
    policy = (fail_on or config.fail_on).lower()

    # ── Scan ──
    report = run_audit(config.walk_config(target), FileScanner(catalog))
    failed = should_fail(report, policy)

    # ── Report ──
    if fmt == "json":
        json_str = JSONReporter().report(report, output_file=out_file)
        if not out_file:
            _safe_echo(json_str)
    else:
        ConsoleReporter().report(report)
        if out_file:
            JSONReporter().report(report, output_file=out_file)

    # ── CI integrations ──
    if ci or is_github_actions():
        emit_annotations(report, force=ci)
        write_step_summary(report, should_fail=failed)

    # ── Exit code ──
    if failed:
        sys.exit(1)


# ═══════════════════════════════════════════════════════
#  restormel init
# ═══════════════════════════════════════════════════════
@cli.command()
@click.option("--path", "-p", "target_path", type=click.Path(file_okay=False), default=".",
              help="Project directory to set up.")
def init(target_path: str) -> None:
    """Create a default .restormel.yaml and register the audit script."""
    target = Path(target_path).resolve()
    target.mkdir(parents=True, exist_ok=True)

    config_file = target / CONFIG_FILENAME
    if config_file.exists():
        _safe_echo(click.style(f"  [!] {config_file} already exists, skipping.", fg="yellow"))
    else:
        config_file.write_text(generate_default_config(), encoding="utf-8")
        _safe_echo(click.style(f"  [+] Created {config_file}", fg="green"))

    pkg_file = target / "package.json"
    if pkg_file.exists():
        try:
            added = _register_audit_script(pkg_file)
        except ValueError as exc:
            _safe_echo(click.style(f"  [!] Could not update package.json: {exc}", fg="yellow"))
        else:
            if added:
                _safe_echo(click.style('  [+] Added "audit" script to package.json', fg="green"))
            else:
                _safe_echo(click.style(
                    '  [!] package.json already has an "audit" script, skipping.', fg="yellow"
                ))

    _safe_echo("")
    _safe_echo("  Edit .restormel.yaml to customize the audit.")
    _safe_echo("  Run 'restormel audit' to start scanning.")


def _register_audit_script(pkg_file: Path) -> bool:
    """
    Add an "audit" npm script unless one exists.

    Returns:
        True if package.json was rewritten.

    Raises:
        ValueError: If package.json is not a JSON object.
    """
    pkg = json.loads(pkg_file.read_text(encoding="utf-8").strip() or "{}")
    if not isinstance(pkg, dict):
        raise ValueError("top level is not an object")

    scripts = pkg.setdefault("scripts", {})
    if not isinstance(scripts, dict):
        raise ValueError('"scripts" is not an object')
    if "audit" in scripts:
        return False
    scripts["audit"] = AUDIT_SCRIPT
    pkg_file.write_text(json.dumps(pkg, indent=2) + "\n", encoding="utf-8")
    return True


def main() -> None:
    cli()


def audit_main() -> None:
    """Zero-argument entry point: audit the current directory."""
    audit.main(args=[], prog_name=AUDIT_SCRIPT)


if __name__ == "__main__":
    main()

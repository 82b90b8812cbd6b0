"""
CLI commands for the importer.

``flask importer monica --account <id|slug> --file export.sql`` replaces the
account's data with the contents of a Monica SQL export.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click
from flask.cli import ScriptInfo, with_appcontext

from crm_app.importer.pipeline import (
    MonicaImportError,
    MonicaImportSummary,
    list_recent_runs,
    run_monica_import,
)
from crm_app.models import Account
from crm_app.models.importer.schema import ImportRun
from crm_app.utils.importer import get_importer_adapters, get_max_upload_bytes, is_importer_enabled


@click.group(name="importer", invoke_without_command=True)
@click.pass_context
def importer_cli(ctx):
    """
    Importer management commands.

    Displays configured adapters when invoked without a subcommand.
    """
    info = ctx.ensure_object(ScriptInfo)
    app = info.load_app()
    if not is_importer_enabled(app):
        raise click.ClickException(
            "Importer is disabled via IMPORTER_ENABLED=false. " "Enable it to run importer CLI commands."
        )
    if ctx.invoked_subcommand is None:
        adapters = get_importer_adapters(app)
        if not adapters:
            click.echo("No importer adapters configured.")
        else:
            click.echo("Enabled importer adapters:")
            for adapter in adapters:
                click.echo(f"  - {adapter}")


def get_disabled_importer_group() -> click.Group:
    """
    Return a minimal command group that informs the operator the importer is disabled.
    """

    @click.group(name="importer", invoke_without_command=True)
    def disabled_group():
        raise click.ClickException("Importer commands are unavailable because IMPORTER_ENABLED=false.")

    return disabled_group


def _resolve_account(identifier: str) -> Account:
    account = Account.resolve(identifier)
    if account is None:
        raise click.ClickException(f"Account '{identifier}' not found.")
    return account


def _read_export(file_path: Path) -> str:
    limit = get_max_upload_bytes()
    size = file_path.stat().st_size
    if size > limit:
        raise click.ClickException(
            f"{file_path.name} is {size} bytes; IMPORTER_MAX_UPLOAD_MB allows at most {limit} bytes."
        )
    try:
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise click.ClickException(f"{file_path.name} is not valid UTF-8: {exc}") from exc


def _format_summary(run: ImportRun, summary: MonicaImportSummary) -> str:
    status_value = run.status.value if hasattr(run.status, "value") else str(run.status)
    counts = summary.counts()
    width = max(len(name) for name in counts)
    skipped_display = (
        ", ".join(f"{bucket}={count}" for bucket, count in sorted(summary.skipped.items()))
        if summary.skipped
        else "none"
    )
    lines = [f"Run {run.id} completed with status {status_value}."]
    lines.extend(f"  {name.ljust(width)} : {count}" for name, count in counts.items())
    lines.append(f"  {'skipped'.ljust(width)} : {skipped_display}")
    lines.append(f"  {'errors'.ljust(width)} : {len(summary.errors)}")
    lines.append(f"  {'warnings'.ljust(width)} : {len(summary.warnings)}")
    for error in summary.errors:
        lines.append(f"  ! {error}")
    return "\n".join(lines)


def _build_summary_payload(run: ImportRun, summary: MonicaImportSummary) -> dict[str, object]:
    return {
        "run_id": run.id,
        "account_id": run.account_id,
        "status": run.status.value,
        "mapping_checksum": run.mapping_checksum,
        **summary.as_dict(),
    }


@importer_cli.command("monica")
@click.option("--account", "account_ref", required=True, help="Target account id or slug.")
@click.option(
    "--file",
    "file_path",
    required=True,
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
    help="Path to the Monica SQL export.",
)
@click.option("--label", help="Free-form label stored on the import run (defaults to the file name).")
@click.option(
    "--summary-json",
    is_flag=True,
    help="Emit a machine-readable summary payload instead of the text report.",
)
@with_appcontext
def importer_monica(account_ref: str, file_path: Path, label: Optional[str], summary_json: bool):
    """Replace an account's data with a Monica CRM SQL export."""
    account = _resolve_account(account_ref)
    sql_text = _read_export(file_path)

    try:
        run, summary = run_monica_import(
            account.id,
            sql_text,
            source_label=label or file_path.name,
        )
    except MonicaImportError as exc:
        raise click.ClickException(str(exc)) from exc
    except Exception as exc:
        raise click.ClickException(f"Monica import failed and was rolled back: {exc}") from exc

    if summary_json:
        click.echo(json.dumps(_build_summary_payload(run, summary), indent=2, sort_keys=True))
    else:
        click.echo(_format_summary(run, summary))


@importer_cli.command("runs")
@click.option("--account", "account_ref", help="Only show runs for this account id or slug.")
@click.option("--limit", default=20, show_default=True, type=click.IntRange(min=1))
@with_appcontext
def importer_runs(account_ref: Optional[str], limit: int):
    """List recent Monica import runs."""
    account_id = _resolve_account(account_ref).id if account_ref else None
    runs = list_recent_runs(account_id=account_id, limit=limit)
    if not runs:
        click.echo("No import runs recorded.")
        return
    for run in runs:
        counts = run.counts_json or {}
        finished = run.finished_at.isoformat() if run.finished_at else "-"
        click.echo(
            f"{run.id:>5}  {run.status.value:<16}  account={run.account_id}  "
            f"contacts={counts.get('contacts', 0)}  errors={len(counts.get('errors', []))}  "
            f"finished={finished}  {run.source_label or ''}".rstrip()
        )

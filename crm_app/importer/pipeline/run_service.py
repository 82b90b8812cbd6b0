"""
Run tracking for Monica imports.

``run_monica_import`` wraps the loader with an ``ImportRun`` row so every
execution leaves an audit trail: status transitions, per-entity counts, and
the first few row errors.
"""

from __future__ import annotations

from datetime import datetime, timezone
from time import perf_counter

from flask import current_app
from sqlalchemy import select
from sqlalchemy.orm import Session

from crm_app.importer.mapping import get_active_monica_mapping
from crm_app.importer.metrics import record_monica_run
from crm_app.importer.pipeline.monica_loader import (
    AccountNotFoundError,
    MonicaImportSummary,
    import_monica_export,
)
from crm_app.models import Account, db
from crm_app.models.importer.schema import ImportRun, ImportRunStatus

MONICA_SOURCE = "monica"
MONICA_ADAPTER = "monica_sql"
MAX_ERROR_SUMMARY_LINES = 50


def _summarize_errors(errors: list[str]) -> str | None:
    if not errors:
        return None
    lines = errors[:MAX_ERROR_SUMMARY_LINES]
    if len(errors) > MAX_ERROR_SUMMARY_LINES:
        lines.append(f"... {len(errors) - MAX_ERROR_SUMMARY_LINES} more")
    return "\n".join(lines)


def run_monica_import(
    account_id: int,
    sql_text: str,
    *,
    source_label: str | None = None,
    session: Session | None = None,
) -> tuple[ImportRun, MonicaImportSummary]:
    """
    Import a Monica export for ``account_id`` and record it as an ``ImportRun``.

    The run moves ``pending -> running -> succeeded | partially_failed``. When
    the import transaction fails the run is marked ``failed`` in a fresh
    transaction and the exception propagates.
    """
    session = session or db.session
    if session.get(Account, account_id) is None:
        raise AccountNotFoundError(f"Account {account_id} does not exist.")

    mapping = get_active_monica_mapping()
    run = ImportRun(
        account_id=account_id,
        source=MONICA_SOURCE,
        adapter=MONICA_ADAPTER,
        source_label=source_label,
        status=ImportRunStatus.PENDING,
        counts_json={},
        mapping_checksum=mapping.checksum,
    )
    session.add(run)
    session.commit()
    run_id = run.id

    run.status = ImportRunStatus.RUNNING
    run.started_at = datetime.now(timezone.utc)
    session.commit()
    started = perf_counter()

    try:
        summary = import_monica_export(account_id, sql_text, session=session, mapping=mapping)
    except Exception as exc:
        session.rollback()
        record_monica_run(status="failed", duration_seconds=perf_counter() - started)
        current_app.logger.error(
            "Monica import run %s failed: %s",
            run_id,
            exc,
            extra={"importer_run_id": run_id, "account_id": account_id},
        )
        recovery_run = session.get(ImportRun, run_id)
        if recovery_run is not None:
            recovery_run.status = ImportRunStatus.FAILED
            recovery_run.error_summary = str(exc)
            recovery_run.finished_at = datetime.now(timezone.utc)
            session.commit()
        raise

    run = session.get(ImportRun, run_id)
    run.status = ImportRunStatus.PARTIALLY_FAILED if summary.errors else ImportRunStatus.SUCCEEDED
    run.finished_at = datetime.now(timezone.utc)
    run.counts_json = summary.as_dict()
    run.error_summary = _summarize_errors(summary.errors)
    session.commit()

    record_monica_run(status=run.status.value, duration_seconds=perf_counter() - started)
    current_app.logger.info(
        "Monica import run %s finished with status %s",
        run_id,
        run.status.value,
        extra={
            "importer_run_id": run_id,
            "account_id": account_id,
            "importer_status": run.status.value,
            "importer_errors": len(summary.errors),
        },
    )
    return run, summary


def list_recent_runs(
    *,
    account_id: int | None = None,
    limit: int = 20,
    session: Session | None = None,
) -> list[ImportRun]:
    """Return the most recent Monica runs, newest first."""
    session = session or db.session
    stmt = select(ImportRun).where(ImportRun.source == MONICA_SOURCE)
    if account_id is not None:
        stmt = stmt.where(ImportRun.account_id == account_id)
    stmt = stmt.order_by(ImportRun.id.desc()).limit(limit)
    return list(session.scalars(stmt))

import json
from pathlib import Path

from sqlalchemy import func, select

from crm_app.models import Contact, ImportRun, ImportRunStatus, db

EXPORT_SQL = """-- Monica export
INSERT INTO `contacts` (`id`,`first_name`,`last_name`,`is_partial`) VALUES (1,'Sarah','Chen',0),(2,'Ghost',NULL,1),(3,'Ana','Lima',0);
INSERT INTO `tags` (`id`,`name`) VALUES (1,'friends');
INSERT INTO `contact_tag` (`contact_id`,`tag_id`) VALUES (1,1),(3,1);
INSERT INTO `notes` (`id`,`contact_id`,`body`,`is_favorited`) VALUES (1,1,'Met at the conference',0);
"""


def _write_export(tmp_path: Path, content: str = EXPORT_SQL) -> Path:
    export_file = tmp_path / "monica.sql"
    export_file.write_text(content, encoding="utf-8")
    return export_file


def test_importer_group_lists_adapters(runner):
    result = runner.invoke(args=["importer"])

    assert result.exit_code == 0, result.output
    assert "Enabled importer adapters:" in result.output
    assert "- monica" in result.output


def test_monica_command_prints_text_summary(runner, account, tmp_path):
    export_file = _write_export(tmp_path)

    result = runner.invoke(args=["importer", "monica", "--account", account.slug, "--file", str(export_file)])

    assert result.exit_code == 0, result.output
    assert "completed with status succeeded" in result.output
    assert "contacts" in result.output
    assert "contacts=1" in result.output

    run = db.session.scalar(select(ImportRun))
    assert run.status == ImportRunStatus.SUCCEEDED
    assert run.source_label == "monica.sql"
    contact_count = db.session.scalar(
        select(func.count()).select_from(Contact).where(Contact.account_id == account.id)
    )
    assert contact_count == 2


def test_monica_command_emits_json_summary(runner, account, tmp_path):
    export_file = _write_export(tmp_path)

    result = runner.invoke(
        args=[
            "importer",
            "monica",
            "--account",
            str(account.id),
            "--file",
            str(export_file),
            "--label",
            "October backup",
            "--summary-json",
        ]
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output.strip())
    assert payload["status"] == "succeeded"
    assert payload["account_id"] == account.id
    assert payload["contacts"] == 2
    assert payload["tags"] == 1
    assert payload["notes"] == 1
    assert payload["errors"] == []
    assert payload["skipped"] == {"contacts": 1}
    assert "Contact 2 skipped: partial contact" in payload["warnings"]

    run = db.session.get(ImportRun, payload["run_id"])
    assert run.source_label == "October backup"


def test_monica_command_reports_row_errors(runner, account, tmp_path):
    export_file = _write_export(
        tmp_path,
        "INSERT INTO `contacts` (`id`,`first_name`) VALUES (1,'Sarah');\n"
        "INSERT INTO `tags` (`id`,`name`) VALUES (1,'family'),(2,'family');\n",
    )

    result = runner.invoke(args=["importer", "monica", "--account", account.slug, "--file", str(export_file)])

    assert result.exit_code == 0, result.output
    assert "completed with status partially_failed" in result.output
    assert "! Tag 2:" in result.output


def test_monica_command_unknown_account(runner, app, tmp_path):
    export_file = _write_export(tmp_path)

    result = runner.invoke(args=["importer", "monica", "--account", "nobody", "--file", str(export_file)])

    assert result.exit_code != 0
    assert "Account 'nobody' not found." in result.output
    assert db.session.scalar(select(func.count()).select_from(ImportRun)) == 0


def test_monica_command_rejects_oversized_file(runner, account, tmp_path, monkeypatch):
    export_file = _write_export(tmp_path)
    monkeypatch.setattr("crm_app.importer.cli.get_max_upload_bytes", lambda: 10)

    result = runner.invoke(args=["importer", "monica", "--account", account.slug, "--file", str(export_file)])

    assert result.exit_code != 0
    assert "IMPORTER_MAX_UPLOAD_MB" in result.output


def test_monica_command_rejects_non_utf8_file(runner, account, tmp_path):
    export_file = tmp_path / "latin1.sql"
    export_file.write_bytes("INSERT INTO `contacts` (`id`,`first_name`) VALUES (1,'Jos\xe9');".encode("latin-1"))

    result = runner.invoke(args=["importer", "monica", "--account", account.slug, "--file", str(export_file)])

    assert result.exit_code != 0
    assert "not valid UTF-8" in result.output


def test_monica_command_requires_existing_file(runner, account, tmp_path):
    result = runner.invoke(
        args=["importer", "monica", "--account", account.slug, "--file", str(tmp_path / "missing.sql")]
    )

    assert result.exit_code != 0
    assert "does not exist" in result.output


def test_monica_command_reports_fatal_failure(runner, account, tmp_path, monkeypatch):
    export_file = _write_export(tmp_path)

    def _explode(*args, **kwargs):
        raise RuntimeError("database went away")

    monkeypatch.setattr("crm_app.importer.pipeline.run_service.import_monica_export", _explode)

    result = runner.invoke(args=["importer", "monica", "--account", account.slug, "--file", str(export_file)])

    assert result.exit_code != 0
    assert "rolled back: database went away" in result.output
    run = db.session.scalar(select(ImportRun))
    assert run.status == ImportRunStatus.FAILED


def test_runs_command_lists_recent_runs(runner, account, tmp_path):
    export_file = _write_export(tmp_path)
    runner.invoke(args=["importer", "monica", "--account", account.slug, "--file", str(export_file)])

    result = runner.invoke(args=["importer", "runs", "--account", account.slug])

    assert result.exit_code == 0, result.output
    assert "succeeded" in result.output
    assert "contacts=2" in result.output
    assert "monica.sql" in result.output


def test_runs_command_without_runs(runner, app):
    result = runner.invoke(args=["importer", "runs"])

    assert result.exit_code == 0, result.output
    assert "No import runs recorded." in result.output

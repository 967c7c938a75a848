from __future__ import annotations

from pathlib import Path

from ledger_db.client import session_scope
from ledger_db.models import Category
from typer.testing import CliRunner

from ledger.cli import app
from tests.helpers.db import count_rows

runner = CliRunner()


def test_init_db_then_seed_categories(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    url = f"sqlite+pysqlite:///{tmp_path / 'cli.db'}"

    result = runner.invoke(app, ["init-db", "--database-url", url])
    assert result.exit_code == 0, result.output
    assert "transactions" in result.output

    result = runner.invoke(app, ["seed-categories", "--tier", "all", "--database-url", url])
    assert result.exit_code == 0, result.output
    assert "Inserted 38 categories" in result.output

    result = runner.invoke(app, ["seed-categories", "--tier", "default", "--database-url", url])
    assert "Inserted 0 categories" in result.output

    with session_scope(database_url=url) as s:
        assert count_rows(s, Category) == 38


def test_seed_unknown_tier_fails(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    url = f"sqlite+pysqlite:///{tmp_path / 'cli.db'}"
    runner.invoke(app, ["init-db", "--database-url", url])
    result = runner.invoke(app, ["seed-categories", "--tier", "premium", "--database-url", url])
    assert result.exit_code == 1
    assert "Unknown seed tier" in result.output


def test_init_db_without_database_url_fails(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["init-db"])
    assert result.exit_code == 1
    assert "DATABASE_URL is not set" in result.output


def test_providers_lists_catalog(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["providers", "--type", "bank"])
    assert result.exit_code == 0, result.output
    assert "Wells Fargo" in result.output
    assert "American Express" not in result.output


def test_providers_rejects_unknown_type(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["providers", "--type", "crypto"])
    assert result.exit_code == 1

"""Tests for the table bootstrap script."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import inspect

from taskvault import migrate
from taskvault.database.database import build_engine


def test_creates_missing_tables(tmp_path: Path) -> None:
    engine = build_engine(f"sqlite:///{tmp_path / 'tasks.db'}")

    created = migrate.migrate(engine)

    assert set(created) >= {"user", "task"}
    assert {"user", "task"} <= set(inspect(engine).get_table_names())
    engine.dispose()


def test_second_run_creates_nothing(tmp_path: Path) -> None:
    engine = build_engine(f"sqlite:///{tmp_path / 'tasks.db'}")
    migrate.migrate(engine)

    assert migrate.migrate(engine) == []
    engine.dispose()


def test_main_uses_database_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    db_path = tmp_path / "from-env.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_path}")

    assert migrate.main() == 0
    assert db_path.exists()
    assert "Migration completed!" in capsys.readouterr().out


def test_main_reports_bad_configuration(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setenv("JWT_SECRET", "short")

    assert migrate.main() == 1
    assert "ERROR" in capsys.readouterr().out

"""Tests for the change-feed trigger migration."""

import importlib.util
from pathlib import Path

import pytest

MIGRATION = Path(__file__).resolve().parents[1] / "alembic" / "versions" / "0001_change_feed_triggers.py"


class RecordingOp:
    def __init__(self):
        self.statements = []

    def execute(self, statement):
        self.statements.append(statement)


@pytest.fixture
def migration(monkeypatch):
    spec = importlib.util.spec_from_file_location("change_feed_triggers", MIGRATION)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    op = RecordingOp()
    monkeypatch.setattr(module, "op", op)
    return module, op


def test_upgrade_installs_one_trigger_per_table(migration):
    module, op = migration
    module.upgrade()

    assert op.statements[0] == module.NOTIFY_FUNCTION
    created = [s for s in op.statements if s.startswith("CREATE TRIGGER")]
    assert [s.split()[2] for s in created] == [
        "sarees_changes", "transactions_changes", "stations_changes", "through_put_changes"
    ]


def test_oversized_rows_fall_back_to_key_only_payload(migration):
    module, _ = migration

    assert "octet_length(payload) >= 8000" in module.NOTIFY_FUNCTION
    assert "json_build_object('id', NEW.id)" in module.NOTIFY_FUNCTION
    assert "json_build_object('id', OLD.id)" in module.NOTIFY_FUNCTION
    assert module.NOTIFY_FUNCTION.count("pg_notify(") == 1


def test_downgrade_drops_triggers_and_function(migration):
    module, op = migration
    module.downgrade()

    assert len([s for s in op.statements if s.startswith("DROP TRIGGER")]) == 4
    assert op.statements[-1] == "DROP FUNCTION IF EXISTS tracker_notify_change()"

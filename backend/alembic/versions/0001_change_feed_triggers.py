"""Publish row changes of the tracked tables on <table>_changes channels.

Revision ID: 0001_change_feed_triggers
Revises:
"""
from alembic import op

revision = "0001_change_feed_triggers"
down_revision = None
branch_labels = None
depends_on = None

TABLES = ("sarees", "transactions", "stations", "through_put")

NOTIFY_FUNCTION = """
CREATE OR REPLACE FUNCTION tracker_notify_change() RETURNS trigger AS $$
DECLARE
    payload text;
BEGIN
    payload := json_build_object(
        'type', TG_OP,
        'table', TG_TABLE_NAME,
        'record', CASE WHEN TG_OP = 'DELETE' THEN NULL ELSE row_to_json(NEW) END,
        'old_record', CASE WHEN TG_OP = 'INSERT' THEN NULL ELSE row_to_json(OLD) END
    )::text;
    -- pg_notify rejects payloads of 8000 bytes or more, which would abort the write
    IF octet_length(payload) >= 8000 THEN
        payload := json_build_object(
            'type', TG_OP,
            'table', TG_TABLE_NAME,
            'record', CASE WHEN TG_OP = 'DELETE' THEN NULL ELSE json_build_object('id', NEW.id) END,
            'old_record', CASE WHEN TG_OP = 'INSERT' THEN NULL ELSE json_build_object('id', OLD.id) END
        )::text;
    END IF;
    PERFORM pg_notify(TG_TABLE_NAME || '_changes', payload);
    RETURN NULL;
END;
$$ LANGUAGE plpgsql;
"""


def upgrade():
    op.execute(NOTIFY_FUNCTION)
    for table in TABLES:
        op.execute(f"DROP TRIGGER IF EXISTS {table}_changes ON {table}")
        op.execute(
            f"CREATE TRIGGER {table}_changes AFTER INSERT OR UPDATE OR DELETE ON {table} "
            "FOR EACH ROW EXECUTE FUNCTION tracker_notify_change()"
        )


def downgrade():
    for table in TABLES:
        op.execute(f"DROP TRIGGER IF EXISTS {table}_changes ON {table}")
    op.execute("DROP FUNCTION IF EXISTS tracker_notify_change()")

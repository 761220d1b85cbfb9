"""
Tests that the Alembic migration builds the same tables as the models.
"""
from sqlalchemy import create_engine, inspect

from assessdesk.db.migrate import run_migrations


def test_upgrade_head_creates_tables(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"

    run_migrations(url)

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names())
        assert {"rubrics", "candidates", "evaluations"} <= tables

        columns = {c["name"] for c in inspector.get_columns("evaluations")}
        assert {"candidate_id", "rubric_id", "scores", "overall_score", "status", "updated_at"} <= columns

        foreign_tables = {fk["referred_table"] for fk in inspector.get_foreign_keys("evaluations")}
        assert foreign_tables == {"candidates", "rubrics"}
    finally:
        engine.dispose()


def test_upgrade_is_repeatable(tmp_path):
    url = f"sqlite:///{tmp_path / 'twice.db'}"
    run_migrations(url)
    run_migrations(url)

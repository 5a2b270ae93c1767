from pathlib import Path

from models import Property, Vote

MIGRATION = Path(__file__).resolve().parents[1] / "alembic" / "versions" / "0001_initial_schema.py"


def test_vote_and_property_index_names():
    assert {index.name for index in Vote.__table__.indexes} == {
        "idx_votes_property_id",
        "idx_votes_user_id",
        "idx_votes_vote_option_id",
    }
    assert {index.name for index in Property.__table__.indexes} == {
        "idx_properties_category_id",
        "idx_properties_user_id",
    }


def test_migration_creates_model_indexes():
    migration = MIGRATION.read_text(encoding="utf-8")
    for table in (Vote.__table__, Property.__table__):
        for index in table.indexes:
            assert f"op.create_index('{index.name}'" in migration

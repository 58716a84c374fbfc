"""Tests for the superadmin seed."""

from app.db.seed import seed_admin
from app.models.admin import Admin
from app.models.enums import AdminRole


def test_seed_creates_superadmin(database, settings, db_session):
    created = seed_admin(database, settings, "root", "Root@Example.com", "seed-pass-1")

    assert created is True
    admin = db_session.query(Admin).one()
    assert admin.email == "root@example.com"
    assert admin.role == AdminRole.SUPERADMIN
    assert admin.password_hash != "seed-pass-1"


def test_seed_is_idempotent(database, settings, db_session):
    assert seed_admin(database, settings, "root", "root@example.com", "seed-pass-1") is True
    assert seed_admin(database, settings, "root", "root@example.com", "other-pass") is False

    assert db_session.query(Admin).count() == 1

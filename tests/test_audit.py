"""
Tests for the audit trail.

Tests cover:
- log_change serialization
- serialize_model
- Audit and mutation commit or roll back together
- AuditLogRepository filters
"""

import json
from datetime import datetime, timezone

import pytest
from sqlalchemy import select

from rest_api.models import AuditLog, Province
from rest_api.repositories import AuditLogRepository
from rest_api.services import log_change, serialize_model
from rest_api.services.domain import ProvinceService
from shared.utils.schemas import ProvinceInput


class TestLogChange:

    def test_values_stored_as_json(self, db_session):
        entry = log_change(
            db_session,
            table_name="provinces",
            record_id=1,
            user_id=7,
            user_email="tester@indostore.local",
            action="UPDATE",
            old_value={"name": "Bali", "id": 1},
            new_value={"name": "Bali Utara", "id": 1},
        )
        db_session.commit()

        assert json.loads(entry.old_value) == {"id": 1, "name": "Bali"}
        assert json.loads(entry.new_value)["name"] == "Bali Utara"
        assert entry.timestamp is not None

    def test_none_values_stay_null(self, db_session):
        entry = log_change(
            db_session,
            table_name="whitelist_stores",
            record_id=3,
            user_id=None,
            user_email=None,
            action="DELETE",
        )
        db_session.commit()
        assert entry.old_value is None
        assert entry.new_value is None

    def test_not_committed_by_itself(self, db_session):
        log_change(
            db_session,
            table_name="provinces",
            record_id=1,
            user_id=7,
            user_email=None,
            action="CREATE",
        )
        db_session.rollback()
        assert db_session.scalars(select(AuditLog)).all() == []


class TestSerializeModel:

    def test_columns_and_datetimes(self, db_session):
        province = Province(name="Bali")
        province.deleted_at = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

        data = serialize_model(province)
        assert data["name"] == "Bali"
        assert data["deleted_at"] == "2024-01-02T03:04:05+00:00"
        assert "branches" not in data

    def test_exclude(self, db_session):
        data = serialize_model(Province(name="Bali"), exclude=["name"])
        assert "name" not in data


class TestAuditAtomicity:

    def test_failed_audit_rolls_back_create(self, db_session, user_ctx, monkeypatch):
        def broken_log_create(*args, **kwargs):
            raise RuntimeError("audit store unavailable")

        monkeypatch.setattr("rest_api.services.base_service.log_create", broken_log_create)

        with pytest.raises(RuntimeError):
            ProvinceService(db_session).create(ProvinceInput(name="Bali"), user_ctx)

        assert db_session.scalars(select(Province)).all() == []
        assert db_session.scalars(select(AuditLog)).all() == []

    def test_failed_audit_rolls_back_update(self, db_session, user_ctx, seed_province, monkeypatch):
        def broken_log_update(*args, **kwargs):
            raise RuntimeError("audit store unavailable")

        monkeypatch.setattr("rest_api.services.base_service.log_update", broken_log_update)

        with pytest.raises(RuntimeError):
            ProvinceService(db_session).update(
                seed_province.id, ProvinceInput(name="Renamed"), user_ctx
            )

        db_session.expire_all()
        assert db_session.get(Province, seed_province.id).name == "Bali"


class TestAuditLogRepository:

    @pytest.fixture
    def rows(self, db_session):
        for table, record_id, action in [
            ("provinces", 1, "CREATE"),
            ("provinces", 1, "UPDATE"),
            ("provinces", 2, "CREATE"),
            ("stores", 1, "CREATE"),
        ]:
            log_change(
                db_session,
                table_name=table,
                record_id=record_id,
                user_id=7,
                user_email=None,
                action=action,
            )
        db_session.commit()

    def test_filter_by_table_and_record(self, db_session, rows):
        found = AuditLogRepository(db_session).find(table_name="provinces", record_id=1)
        assert sorted(r.action for r in found) == ["CREATE", "UPDATE"]

    def test_filter_by_action_ignores_case(self, db_session, rows):
        found = AuditLogRepository(db_session).find(action="create")
        assert len(found) == 3

    def test_newest_first(self, db_session, rows):
        found = AuditLogRepository(db_session).find()
        ids = [r.id for r in found]
        assert ids == sorted(ids, reverse=True)

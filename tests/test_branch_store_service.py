"""
Tests for BranchService and StoreService.

Both hang off a parent reference, so they share the same rules:
the reference is required on create, must exist, and re-parents on update.
"""

import json

import pytest
from sqlalchemy import select

from rest_api.models import AuditLog, Branch, Province
from rest_api.services.domain import BranchService, StoreService
from shared.utils.exceptions import NotFoundError, ValidationError
from shared.utils.schemas import BranchInput, EntityRef, StoreInput


class TestBranchService:
    """Branch CRUD under a province."""

    @pytest.fixture
    def service(self, db_session):
        return BranchService(db_session)

    def test_create_under_province(self, service, db_session, user_ctx, seed_province):
        branch = service.create(
            BranchInput(name="Denpasar", province=EntityRef(id=seed_province.id)),
            user_ctx,
        )
        assert branch.province_id == seed_province.id
        assert branch.stores == []

        row = db_session.scalars(select(AuditLog).where(AuditLog.table_name == "branches")).one()
        assert row.action == "CREATE"
        assert row.record_id == branch.id
        assert json.loads(row.new_value)["province_id"] == seed_province.id

    @pytest.mark.parametrize("province", [None, EntityRef(id=None)])
    def test_create_requires_province(self, service, user_ctx, province):
        with pytest.raises(ValidationError) as exc:
            service.create(BranchInput(name="Denpasar", province=province), user_ctx)
        assert exc.value.detail == "Province must be provided"

    def test_missing_province_checked_before_name(self, service, user_ctx):
        with pytest.raises(ValidationError) as exc:
            service.create(BranchInput(name=""), user_ctx)
        assert exc.value.detail == "Province must be provided"

    def test_create_unknown_province(self, service, db_session, user_ctx):
        with pytest.raises(NotFoundError) as exc:
            service.create(BranchInput(name="Denpasar", province=EntityRef(id=999)), user_ctx)
        assert exc.value.detail == "Province not found"
        assert db_session.scalars(select(Branch)).all() == []
        assert db_session.scalars(select(AuditLog)).all() == []

    def test_create_under_inactive_province(self, service, db_session, user_ctx):
        """Parent flags are not checked when resolving the reference."""
        province = Province(name="Closed", is_active=False)
        db_session.add(province)
        db_session.commit()

        branch = service.create(
            BranchInput(name="Branch", province=EntityRef(id=province.id)), user_ctx
        )
        assert branch.province_id == province.id

    def test_create_blank_name(self, service, user_ctx, seed_province):
        with pytest.raises(ValidationError) as exc:
            service.create(
                BranchInput(name="  ", province=EntityRef(id=seed_province.id)), user_ctx
            )
        assert exc.value.detail == "Name must not be blank"

    def test_update_reparents(self, service, db_session, user_ctx, seed_branch):
        other = Province(name="Jawa Barat")
        db_session.add(other)
        db_session.commit()

        updated = service.update(
            seed_branch.id,
            BranchInput(name="Bandung", province=EntityRef(id=other.id)),
            user_ctx,
        )
        assert updated.name == "Bandung"
        assert updated.province_id == other.id

    def test_update_without_province_keeps_parent(self, service, user_ctx, seed_branch):
        updated = service.update(seed_branch.id, BranchInput(name="Denpasar Kota"), user_ctx)
        assert updated.province_id == seed_branch.province_id

    def test_update_unknown_province(self, service, user_ctx, seed_branch):
        with pytest.raises(NotFoundError):
            service.update(
                seed_branch.id,
                BranchInput(name="Denpasar", province=EntityRef(id=999)),
                user_ctx,
            )

    def test_update_unknown_branch(self, service, user_ctx):
        with pytest.raises(NotFoundError) as exc:
            service.update(999, BranchInput(name="X"), user_ctx)
        assert exc.value.detail == "Branch not found"

    def test_list_excludes_deleted(self, service, user_ctx, seed_branch):
        assert [b.name for b in service.list_all(0, 50)] == ["Denpasar"]
        service.delete(seed_branch.id, user_ctx)
        assert service.list_all(0, 50) == []
        assert service.get(seed_branch.id).is_deleted is True


class TestStoreService:
    """Store CRUD under a branch."""

    @pytest.fixture
    def service(self, db_session):
        return StoreService(db_session)

    def test_create_under_branch(self, service, db_session, user_ctx, seed_branch):
        store = service.create(
            StoreInput(
                name="Store A",
                address="Jl. Sunset Road No. 1",
                branch=EntityRef(id=seed_branch.id),
            ),
            user_ctx,
        )
        assert store.branch_id == seed_branch.id
        assert store.address == "Jl. Sunset Road No. 1"
        assert store.whitelist_store is None

        row = db_session.scalars(select(AuditLog).where(AuditLog.table_name == "stores")).one()
        assert row.record_id == store.id

    def test_create_requires_branch(self, service, user_ctx):
        with pytest.raises(ValidationError) as exc:
            service.create(StoreInput(name="Store A", address="Jl. 1"), user_ctx)
        assert exc.value.detail == "Branch must be provided"

    def test_create_unknown_branch(self, service, user_ctx):
        with pytest.raises(NotFoundError) as exc:
            service.create(
                StoreInput(name="Store A", address="Jl. 1", branch=EntityRef(id=999)), user_ctx
            )
        assert exc.value.detail == "Branch not found"

    @pytest.mark.parametrize(
        "name,address,message",
        [
            ("", "Jl. 1", "Name must not be blank"),
            ("Store A", None, "Address must not be blank"),
            ("Store A", " ", "Address must not be blank"),
        ],
    )
    def test_create_blank_fields(self, service, user_ctx, seed_branch, name, address, message):
        with pytest.raises(ValidationError) as exc:
            service.create(
                StoreInput(name=name, address=address, branch=EntityRef(id=seed_branch.id)),
                user_ctx,
            )
        assert exc.value.detail == message

    def test_update_reparents(self, service, db_session, user_ctx, seed_store, seed_province):
        other = Branch(name="Ubud", province_id=seed_province.id)
        db_session.add(other)
        db_session.commit()

        updated = service.update(
            seed_store.id,
            StoreInput(name="Store A", address="Jl. Raya Ubud", branch=EntityRef(id=other.id)),
            user_ctx,
        )
        assert updated.branch_id == other.id
        assert updated.address == "Jl. Raya Ubud"

    def test_update_logs_before_and_after(self, service, db_session, user_ctx, seed_store):
        service.update(
            seed_store.id,
            StoreInput(name="Store A2", address=seed_store.address, is_active=False),
            user_ctx,
        )
        row = db_session.scalars(
            select(AuditLog).where(AuditLog.action == "UPDATE")
        ).one()
        assert json.loads(row.old_value)["is_active"] is True
        assert json.loads(row.new_value)["is_active"] is False
        assert json.loads(row.new_value)["name"] == "Store A2"

    def test_delete_keeps_is_active(self, service, user_ctx, seed_store):
        service.delete(seed_store.id, user_ctx)
        fetched = service.get(seed_store.id)
        assert fetched.is_deleted is True
        assert fetched.is_active is True

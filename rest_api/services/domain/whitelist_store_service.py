"""
WhitelistStore Service.

A whitelist entry makes one store visible in every province search.
Entries are unique per store and are hard-deleted.

Usage:
    from rest_api.services.domain import WhitelistStoreService

    service = WhitelistStoreService(db)
    entry = service.create(WhitelistStoreInput(store=EntityRef(id=12)), user)
    stores = service.list_all(page=0, size=50)
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import WhitelistStore
from rest_api.repositories import get_store_repository, get_whitelist_store_repository
from rest_api.services.audit import log_delete
from rest_api.services.base_service import BaseCRUDService, require_ref, resolve_ref
from shared.config.constants import AuditTable
from shared.config.logging import get_logger
from shared.infrastructure.db import transaction
from shared.utils.exceptions import AlreadyWhitelistedError, AppException
from shared.utils.pagination import paginate
from shared.utils.schemas import StoreOutput, WhitelistStoreInput, WhitelistStoreOutput

logger = get_logger(__name__)


class WhitelistStoreService(BaseCRUDService[WhitelistStore, WhitelistStoreOutput]):
    """
    Service for whitelist management.

    Business rules:
    - At most one entry per store (checked first, enforced by a unique constraint)
    - The CREATE audit row is keyed by the store id
    - Listing returns the whitelisted stores, not the entries
    - Delete removes the row and logs DELETE without snapshots
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            repo=get_whitelist_store_repository(db),
            output_schema=WhitelistStoreOutput,
            entity_name="Whitelist store",
            table_name=AuditTable.WHITELIST_STORES,
        )
        self._stores = get_store_repository(db)

    # =========================================================================
    # Overridden Operations
    # =========================================================================

    def list_all(self, page: int, size: int) -> list[StoreOutput]:
        """One page of the active, non-deleted whitelisted stores, in entry order."""
        stores = self._repo.find_visible_stores()
        return [StoreOutput.model_validate(s) for s in paginate(stores, page, size)]

    def delete(self, entity_id: int, user: dict[str, Any]) -> None:
        """
        Hard delete by id without loading the entry first.

        A missing id is not an error: nothing is removed and DELETE is still logged.
        """
        user_id, _ = self._actor(user)

        with transaction(self._db):
            removed = self._repo.delete_by_id(entity_id)
            log_delete(self._db, user, self._table_name, entity_id)

        logger.info("Whitelist store deleted", id=entity_id, removed=removed, user_id=user_id)

    # =========================================================================
    # Hooks
    # =========================================================================

    def _validate_create(self, data: WhitelistStoreInput) -> None:
        require_ref(data.store, "Store")

    def _validate_update(self, entity: WhitelistStore, data: WhitelistStoreInput) -> None:
        require_ref(data.store, "Store")

    def _build(self, data: WhitelistStoreInput) -> WhitelistStore:
        store = resolve_ref(self._stores, data.store.id, "Store")
        if self._repo.exists_for_store(store.id):
            raise AlreadyWhitelistedError(store.id)
        return WhitelistStore(store=store)

    def _apply_update(self, entity: WhitelistStore, data: WhitelistStoreInput) -> None:
        store = resolve_ref(self._stores, data.store.id, "Store")
        if self._repo.exists_for_store(store.id, exclude_id=entity.id):
            raise AlreadyWhitelistedError(store.id)
        entity.store = store

    def _audit_record_id(self, entity: WhitelistStore) -> int:
        return entity.store_id

    def _integrity_error(self, error: IntegrityError) -> AppException:
        return AlreadyWhitelistedError(reason=str(error.orig))

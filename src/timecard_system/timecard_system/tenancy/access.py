from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import EntityType
from ..core.logging import get_logger

log = get_logger(__name__)


class TenantScopedCollection(Protocol):
    def list_for_tenant(self, organization_id: str) -> Sequence[Any]:
        raise NotImplementedError

    def get_by_id(self, organization_id: str, record_id: str) -> Optional[Any]:
        raise NotImplementedError


class DataAccessGate:
    """Tenant-filtered reads over every tenant-owned collection.

    Repositories filter on the tenant column already; the gate re-checks
    ``organization_id`` on every row so a faulty query cannot leak records.
    Storage failures arrive as ``StorageUnavailable`` from the repositories
    and are passed through untouched.
    """

    def __init__(self, collections: Mapping[EntityType, TenantScopedCollection]):
        self._collections = dict(collections)

    def _collection(self, entity_type: EntityType) -> TenantScopedCollection:
        collection = self._collections.get(EntityType(entity_type))
        if collection is None:
            raise ValueError(f"No collection registered for {entity_type!r}")
        return collection

    def list(self, entity_type: EntityType, tenant_id: str) -> list:
        rows = self._collection(entity_type).list_for_tenant(tenant_id)

        scoped = [r for r in rows if getattr(r, "organization_id", None) == tenant_id]
        if len(scoped) != len(rows):
            log.error(
                "cross_tenant_rows_dropped",
                entity=EntityType(entity_type).value,
                tenant=tenant_id,
                dropped=len(rows) - len(scoped),
            )
        return scoped

    def get(self, entity_type: EntityType, tenant_id: str, record_id: str):
        row = self._collection(entity_type).get_by_id(tenant_id, record_id)
        if row is None or getattr(row, "organization_id", None) != tenant_id:
            return None
        return row

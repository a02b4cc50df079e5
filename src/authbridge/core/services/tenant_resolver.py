"""Tenant and organization context resolution."""

from loguru import logger

from src.authbridge.core.errors import StoreError
from src.authbridge.core.models import (
    OrganizationProfile,
    ResolutionContext,
    TenantContext,
    TenantInfo,
)
from src.authbridge.core.services.tenant_key import extract_tenant
from src.authbridge.core.store import EntityStore


class TenantResolver:
    """Resolves tenant metadata, optionally enriched with an organization profile."""

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    def resolve_tenant(
        self,
        context: ResolutionContext | None = None,
        tenant_id: str | None = None,
        party_id: str | None = None,
    ) -> TenantInfo:
        """Resolve a tenant context and, for ``party_id``, its organization profile.

        A supplied ``tenant_id`` is trusted as-is; otherwise it is derived from
        the namespace key, so calling without arguments always succeeds with
        at least the default tenant.

        Raises:
            StoreError: If the entity store fails while reading the organization
        """
        if context is None:
            context = ResolutionContext.from_store(self._store)

        tenant = self._tenant_context(context, tenant_id)
        if not party_id:
            return TenantInfo(**tenant.model_dump())

        try:
            organization = self._load_organization(party_id)
            attributes = self._load_attributes(party_id)
        except StoreError as e:
            logger.error("Store error resolving tenant information: {}", e.message)
            raise StoreError(f"Error retrieving tenant information: {e.message}") from e

        return self._merge(tenant, organization, attributes)

    @staticmethod
    def _tenant_context(context: ResolutionContext, tenant_id: str | None) -> TenantContext:
        if tenant_id:
            logger.debug("Using provided tenant {}", tenant_id)
            return TenantContext(tenant_id=tenant_id, namespace_key=context.namespace_key)

        derived = extract_tenant(context.namespace_key)
        logger.debug(
            "Derived tenant {} from namespace key {}", derived, context.namespace_key
        )
        return TenantContext(tenant_id=derived, namespace_key=context.namespace_key)

    def _load_organization(self, party_id: str) -> OrganizationProfile | None:
        group = self._store.query_one("PartyGroup", party_id=party_id)
        if group is None:
            logger.debug("No party group found for {}", party_id)
            return None

        # The category lives on the generic party record, not the group.
        party = self._store.query_one("Party", party_id=party_id)
        return OrganizationProfile(
            party_id=party_id,
            organization_name=group.get("group_name"),
            party_type_id=party.get("party_type_id") if party else None,
        )

    def _load_attributes(self, party_id: str) -> dict[str, str | None]:
        attributes: dict[str, str | None] = {}
        for record in self._store.query_list("PartyAttribute", party_id=party_id):
            attributes[record["attr_name"]] = record.get("attr_value")
        return attributes

    @staticmethod
    def _merge(
        tenant: TenantContext,
        organization: OrganizationProfile | None,
        attributes: dict[str, str | None],
    ) -> TenantInfo:
        return TenantInfo(
            tenant_id=tenant.tenant_id,
            namespace_key=tenant.namespace_key,
            organization_party_id=organization.party_id if organization else None,
            organization_name=organization.organization_name if organization else None,
            party_type_id=organization.party_type_id if organization else None,
            attributes=attributes or None,
        )

"""Identity, tenant and organization views assembled by the resolvers.

All models are immutable snapshots produced fresh on every resolution. They
serialize with camelCase keys and omit absent values, so the same input shape
always produces the same output shape.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from src.authbridge.core.store import EntityStore


class _Snapshot(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_mapping(self) -> dict[str, Any]:
        """Serialize to a plain mapping, dropping absent values."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ResolutionContext(_Snapshot):
    """Environment values threaded through one resolution call."""

    namespace_key: str | None = Field(
        default=None, description="Composite namespace key of the active partition"
    )

    @classmethod
    def from_store(cls, store: EntityStore) -> ResolutionContext:
        return cls(namespace_key=store.current_namespace_key())


class LoginIdentity(_Snapshot):
    login_id: str
    party_id: str | None = None
    enabled: bool = False
    has_logged_out: bool = False


class PersonProfile(_Snapshot):
    party_id: str
    first_name: str | None = None
    last_name: str | None = None


class OrganizationProfile(_Snapshot):
    party_id: str
    organization_name: str | None = None
    party_type_id: str | None = None
    attributes: dict[str, str | None] = Field(default_factory=dict)


class TenantContext(_Snapshot):
    tenant_id: str
    namespace_key: str | None = Field(
        default=None, description="Raw namespace key the tenant was derived from"
    )


class TenantInfo(TenantContext):
    """Tenant context optionally enriched with an organization profile."""

    organization_party_id: str | None = None
    organization_name: str | None = None
    party_type_id: str | None = None
    attributes: dict[str, str | None] | None = None


class CombinedIdentity(_Snapshot):
    """Flat identity fields plus nested tenant and organization views."""

    login_id: str
    party_id: str | None = None
    tenant_id: str
    enabled: bool = False
    has_logged_out: bool = False
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    organization_party_id: str | None = None
    organization_name: str | None = None
    tenant: TenantInfo | None = None
    organization: TenantInfo | None = None


class CredentialValidation(_Snapshot):
    """Outcome of a credential check; never an error."""

    valid: bool
    identity: CombinedIdentity | None = None
    tenant_id: str | None = None
    error_message: str | None = None

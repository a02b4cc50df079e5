"""Identity and tenant lookup endpoints for identity provider integrations."""

from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from src.authbridge.api.http.deps import (
    get_identity_aggregator,
    get_identity_resolver,
    get_tenant_resolver,
)
from src.authbridge.core.errors import ErrorKind, ResolutionError
from src.authbridge.core.models import CombinedIdentity, CredentialValidation, TenantInfo
from src.authbridge.core.services import (
    IdentityAggregator,
    IdentityResolver,
    TenantResolver,
)

router = APIRouter(prefix="/identity", tags=["identity"])

_STATUS_BY_KIND = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORE_ERROR: 503,
}


class CredentialRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    login_id: str | None = None
    password: str | None = None


async def read_credential_request(request: Request) -> CredentialRequest:
    """Parse the credential body leniently; anything unreadable counts as empty."""
    try:
        data = await request.json()
        if isinstance(data, dict):
            return CredentialRequest.model_validate(data)
    except (ValueError, ValidationError) as e:
        logger.debug("Unreadable credential request body: {}", type(e).__name__)
    return CredentialRequest()


def _raise_http(error: ResolutionError) -> NoReturn:
    raise HTTPException(status_code=_STATUS_BY_KIND[error.kind], detail=error.message) from error


@router.get(
    "/users/{login_id}",
    response_model=CombinedIdentity,
    response_model_exclude_none=True,
)
def get_user_info(
    login_id: str,
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> CombinedIdentity:
    """Resolve a login into its identity, person, email and employer fields."""
    try:
        return resolver.resolve(login_id)
    except ResolutionError as e:
        _raise_http(e)


@router.get(
    "/users/{login_id}/tenant",
    response_model=CombinedIdentity,
    response_model_exclude_none=True,
)
def get_user_with_tenant(
    login_id: str,
    include_organization: bool = Query(default=True, alias="includeOrganization"),
    aggregator: IdentityAggregator = Depends(get_identity_aggregator),
) -> CombinedIdentity:
    """Resolve a login with its tenant and, optionally, its employer organization."""
    try:
        return aggregator.get_user_with_tenant(
            login_id, include_organization=include_organization
        )
    except ResolutionError as e:
        _raise_http(e)


@router.get("/tenant", response_model=TenantInfo, response_model_exclude_none=True)
def get_tenant_info(
    tenant_id: str | None = Query(default=None, alias="tenantId"),
    party_id: str | None = Query(default=None, alias="partyId"),
    resolver: TenantResolver = Depends(get_tenant_resolver),
) -> TenantInfo:
    """Resolve tenant metadata and, for a party, its organization profile."""
    try:
        return resolver.resolve_tenant(tenant_id=tenant_id, party_id=party_id)
    except ResolutionError as e:
        _raise_http(e)


@router.post(
    "/credentials/validate",
    response_model=CredentialValidation,
    response_model_exclude_none=True,
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": CredentialRequest.model_json_schema()}}
        }
    },
)
def validate_credentials(
    payload: CredentialRequest = Depends(read_credential_request),
    aggregator: IdentityAggregator = Depends(get_identity_aggregator),
) -> CredentialValidation:
    """Validate a login and password; failures are reported in the body."""
    return aggregator.validate_credentials(payload.login_id, payload.password)

"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.authbridge.api.http.app_data import ApplicationDependencies
from src.authbridge.core.services import (
    CredentialVerifier,
    IdentityAggregator,
    IdentityResolver,
    StoreCredentialVerifier,
    TenantResolver,
)
from src.authbridge.core.store import EntityStore, SqlEntityStore
from src.authbridge.runtime.context import get_config


def get_db_session(request: Request) -> Iterator[Session]:
    """Get a database session scoped to the request."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    with app_deps.database_service.session_scope() as session:
        yield session


def get_entity_store(session: Session = Depends(get_db_session)) -> EntityStore:
    """Get the entity store reading the configured namespace."""
    return SqlEntityStore(session, get_config().tenancy.namespace_key)


def get_credential_verifier(
    store: EntityStore = Depends(get_entity_store),
) -> CredentialVerifier:
    return StoreCredentialVerifier(
        store, require_enabled=get_config().credentials.require_enabled
    )


def get_identity_resolver(store: EntityStore = Depends(get_entity_store)) -> IdentityResolver:
    return IdentityResolver(store)


def get_tenant_resolver(store: EntityStore = Depends(get_entity_store)) -> TenantResolver:
    return TenantResolver(store)


def get_identity_aggregator(
    store: EntityStore = Depends(get_entity_store),
    verifier: CredentialVerifier = Depends(get_credential_verifier),
) -> IdentityAggregator:
    return IdentityAggregator(store, verifier)

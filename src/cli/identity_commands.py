"""Identity resolution CLI commands."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import NoReturn

import typer
from rich.console import Console

from src.authbridge.core.errors import ResolutionError
from src.authbridge.core.services import (
    DbSessionService,
    IdentityAggregator,
    IdentityResolver,
    StoreCredentialVerifier,
    TenantResolver,
)
from src.authbridge.core.store import SqlEntityStore
from src.authbridge.runtime.context import get_config

console = Console()

identity_app = typer.Typer(help="Resolve identities and tenants from the configured store")


@contextmanager
def open_store() -> Iterator[SqlEntityStore]:
    """Open an entity store over the configured database and namespace."""
    database_service = DbSessionService()
    with database_service.session_scope() as session:
        yield SqlEntityStore(session, get_config().tenancy.namespace_key)


def _aggregator(store: SqlEntityStore) -> IdentityAggregator:
    verifier = StoreCredentialVerifier(
        store, require_enabled=get_config().credentials.require_enabled
    )
    return IdentityAggregator(store, verifier)


def _fail(error: ResolutionError) -> NoReturn:
    console.print(f"[red]❌ {error.kind.value}: {error.message}[/red]")
    raise typer.Exit(code=1) from error


@identity_app.command("resolve")
def resolve(
    login_id: str = typer.Argument(..., help="Login identifier to resolve"),
    with_tenant: bool = typer.Option(
        False, "--with-tenant/--identity-only", help="Attach tenant and organization context"
    ),
    include_organization: bool = typer.Option(
        True,
        "--include-organization/--exclude-organization",
        help="Attach the employer organization (with --with-tenant)",
    ),
) -> None:
    """Resolve a login into its combined identity."""
    with open_store() as store:
        try:
            if with_tenant:
                identity = _aggregator(store).get_user_with_tenant(
                    login_id, include_organization=include_organization
                )
            else:
                identity = IdentityResolver(store).resolve(login_id)
        except ResolutionError as e:
            _fail(e)

    console.print_json(data=identity.to_mapping())


@identity_app.command("tenant")
def tenant(
    tenant_id: str | None = typer.Option(None, "--tenant-id", "-t", help="Tenant identifier"),
    party_id: str | None = typer.Option(
        None, "--party-id", "-p", help="Organization party identifier"
    ),
) -> None:
    """Resolve tenant metadata, optionally with an organization profile."""
    with open_store() as store:
        try:
            info = TenantResolver(store).resolve_tenant(tenant_id=tenant_id, party_id=party_id)
        except ResolutionError as e:
            _fail(e)

    console.print_json(data=info.to_mapping())


@identity_app.command("validate")
def validate(
    login_id: str = typer.Argument(..., help="Login identifier"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Password"
    ),
) -> None:
    """Validate credentials and show the resolved identity."""
    with open_store() as store:
        result = _aggregator(store).validate_credentials(login_id, password)

    console.print_json(data=result.to_mapping())
    if not result.valid:
        raise typer.Exit(code=1)

"""Top-level identity operations for identity provider integrations.

The primary identity lookup is strict: its errors reach the caller. Tenant and
organization enrichment is best-effort and degrades to absent keys. Credential
validation never raises; every failure collapses into a structured result.
"""

from loguru import logger

from src.authbridge.core.models import (
    CombinedIdentity,
    CredentialValidation,
    ResolutionContext,
)
from src.authbridge.core.services.credentials import CredentialVerifier
from src.authbridge.core.services.identity_resolver import IdentityResolver
from src.authbridge.core.services.policies import best_effort, required
from src.authbridge.core.services.tenant_resolver import TenantResolver
from src.authbridge.core.store import EntityStore


class IdentityAggregator:
    def __init__(
        self,
        store: EntityStore,
        verifier: CredentialVerifier,
        identity_resolver: IdentityResolver | None = None,
        tenant_resolver: TenantResolver | None = None,
    ) -> None:
        self._store = store
        self._verifier = verifier
        self._identity_resolver = identity_resolver or IdentityResolver(store)
        self._tenant_resolver = tenant_resolver or TenantResolver(store)

    def get_user_with_tenant(
        self, login_id: str | None, include_organization: bool = True
    ) -> CombinedIdentity:
        """Resolve ``login_id`` and attach its tenant and employer organization.

        Args:
            login_id: Login identifier to resolve
            include_organization: Attach the employer organization under
                ``organization`` when an employment link exists

        Raises:
            InvalidInputError: If ``login_id`` is empty
            NotFoundError: If the login does not exist
            StoreError: If the store fails during the identity lookup
        """
        context = ResolutionContext.from_store(self._store)
        identity = required(lambda: self._identity_resolver.resolve(login_id, context))

        tenant = None
        if identity.tenant_id:
            tenant = best_effort(
                lambda: self._tenant_resolver.resolve_tenant(
                    context, tenant_id=identity.tenant_id
                ),
                f"tenant enrichment for {login_id}",
            )

        organization = None
        organization_party_id = identity.organization_party_id
        if include_organization and organization_party_id:
            organization = best_effort(
                lambda: self._tenant_resolver.resolve_tenant(
                    context, party_id=organization_party_id
                ),
                f"organization enrichment for {login_id}",
            )

        logger.info(
            "Resolved login {} with tenant={} organization={}",
            login_id,
            tenant is not None,
            organization is not None,
        )
        return identity.model_copy(update={"tenant": tenant, "organization": organization})

    def validate_credentials(
        self, login_id: str | None, secret: str | None
    ) -> CredentialValidation:
        """Verify credentials and, on success, attach the resolved identity.

        Identity resolution failing after a successful verification still
        yields ``valid=True``, with no identity attached.
        """
        if not login_id or not secret:
            logger.warning("Credential validation called with empty login id or secret")
            return CredentialValidation(
                valid=False, error_message="Username and password are required"
            )

        try:
            outcome = self._verifier.verify(login_id, secret)
            if not outcome.success:
                logger.warning(
                    "Authentication failed for login {}: {}",
                    login_id,
                    outcome.error_message,
                )
                return CredentialValidation(valid=False, error_message=outcome.error_message)

            logger.info("Authentication succeeded for login {}", login_id)
            identity = best_effort(
                lambda: self._identity_resolver.resolve(login_id),
                f"identity lookup after authenticating {login_id}",
            )
        except Exception as e:
            logger.exception("Credential validation failed for login {}", login_id)
            return CredentialValidation(
                valid=False, error_message=f"Authentication error: {e}"
            )

        return CredentialValidation(
            valid=True,
            identity=identity,
            tenant_id=identity.tenant_id if identity else None,
        )

from src.authbridge.core.services.credentials import (
    CredentialVerifier,
    StoreCredentialVerifier,
    VerificationResult,
    hash_password,
    verify_password,
)
from src.authbridge.core.services.database.db_session import DbSessionService
from src.authbridge.core.services.identity_aggregator import IdentityAggregator
from src.authbridge.core.services.identity_resolver import IdentityResolver
from src.authbridge.core.services.tenant_key import DEFAULT_TENANT, extract_tenant
from src.authbridge.core.services.tenant_resolver import TenantResolver

__all__ = [
    "DEFAULT_TENANT",
    "CredentialVerifier",
    "DbSessionService",
    "IdentityAggregator",
    "IdentityResolver",
    "StoreCredentialVerifier",
    "TenantResolver",
    "VerificationResult",
    "extract_tenant",
    "hash_password",
    "verify_password",
]

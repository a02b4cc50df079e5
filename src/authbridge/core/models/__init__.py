from .identity import (
    CombinedIdentity,
    CredentialValidation,
    LoginIdentity,
    OrganizationProfile,
    PersonProfile,
    ResolutionContext,
    TenantContext,
    TenantInfo,
)

__all__ = [
    "CombinedIdentity",
    "CredentialValidation",
    "LoginIdentity",
    "OrganizationProfile",
    "PersonProfile",
    "ResolutionContext",
    "TenantContext",
    "TenantInfo",
]

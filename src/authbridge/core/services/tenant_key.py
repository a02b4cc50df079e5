"""Tenant identifier extraction from composite namespace keys.

Namespace keys have the shape ``<base>#<tenant>``; a key without a usable
tenant suffix belongs to the default tenant.
"""

DEFAULT_TENANT = "default"
TENANT_SEPARATOR = "#"


def extract_tenant(namespace_key: str | None) -> str:
    """Return the tenant id encoded in ``namespace_key``.

    The tenant is the text after the first separator, provided both the base
    and the suffix are non-empty. Every other input yields ``"default"``.
    """
    if not namespace_key:
        return DEFAULT_TENANT

    index = namespace_key.find(TENANT_SEPARATOR)
    if 0 < index < len(namespace_key) - 1:
        return namespace_key[index + 1:]

    return DEFAULT_TENANT

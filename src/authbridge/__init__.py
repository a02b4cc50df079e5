"""Identity and tenant resolution bridge.

Resolves login identities into a consolidated person, tenant and organization
view for external identity provider integrations.
"""

__version__ = "0.1.0"

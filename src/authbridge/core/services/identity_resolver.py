"""Login identity resolution.

Resolves a login id into a flat identity record through an ordered series of
exact-match lookups. Later lookups depend on identifiers returned by earlier
ones, so they are issued serially:

1. ``UserLogin`` by login id (required)
2. ``Person`` by party id (optional)
3. ``PartyContactMechPurpose`` then ``ContactMech`` for the primary email (optional)
4. ``PartyRelationship`` of type EMPLOYMENT, then the employer's ``PartyGroup`` (optional)

Absent optional records are omitted from the result. A store fault at any step
aborts the resolution and discards whatever was already read.
"""

from loguru import logger

from src.authbridge.core.errors import InvalidInputError, NotFoundError, StoreError
from src.authbridge.core.models import (
    CombinedIdentity,
    LoginIdentity,
    PersonProfile,
    ResolutionContext,
)
from src.authbridge.core.services.tenant_key import extract_tenant
from src.authbridge.core.store import EntityStore, Record

PRIMARY_EMAIL_PURPOSE = "PRIMARY_EMAIL"
EMAIL_ADDRESS_TYPE = "EMAIL_ADDRESS"
EMPLOYMENT_RELATIONSHIP = "EMPLOYMENT"


def _indicator(value: str | None) -> bool:
    return value == "Y"


def login_identity_from_record(record: Record) -> LoginIdentity:
    """Build a LoginIdentity from a ``UserLogin`` record."""
    return LoginIdentity(
        login_id=record["user_login_id"],
        party_id=record.get("party_id") or None,
        enabled=_indicator(record.get("enabled")),
        has_logged_out=_indicator(record.get("has_logged_out")),
    )


class IdentityResolver:
    """Resolves login ids into :class:`CombinedIdentity` records."""

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    def resolve(
        self, login_id: str | None, context: ResolutionContext | None = None
    ) -> CombinedIdentity:
        """Resolve ``login_id`` into identity, person, email, tenant and employer fields.

        Args:
            login_id: Login identifier to resolve
            context: Environment snapshot; read from the store when omitted

        Returns:
            The combined identity. Person, email and organization fields are
            absent when the login has no party or the records do not exist.

        Raises:
            InvalidInputError: If ``login_id`` is empty
            NotFoundError: If no login record exists for ``login_id``
            StoreError: If the entity store fails at any step
        """
        if not login_id:
            logger.warning("Identity resolution called with empty login id")
            raise InvalidInputError("User Login ID is required")

        if context is None:
            context = ResolutionContext.from_store(self._store)

        logger.info("Resolving identity for login {}", login_id)
        try:
            identity = self._resolve(login_id, context)
        except StoreError as e:
            logger.error("Store error resolving identity for {}: {}", login_id, e.message)
            raise StoreError(f"Error retrieving user information: {e.message}") from e

        logger.debug("Resolved identity for login {}", login_id)
        return identity

    def _resolve(self, login_id: str, context: ResolutionContext) -> CombinedIdentity:
        login = self._load_login(login_id)
        tenant_id = extract_tenant(context.namespace_key)
        logger.debug(
            "Derived tenant {} from namespace key {}", tenant_id, context.namespace_key
        )

        if login.party_id is None:
            logger.debug("No party associated with login {}", login_id)
            return self._merge(login, tenant_id)

        party_id = login.party_id
        person = self._load_person(party_id)
        email = self._load_primary_email(party_id)
        employer_id = self._load_employer_id(party_id)
        organization_name = (
            self._load_organization_name(employer_id) if employer_id else None
        )
        return self._merge(
            login,
            tenant_id,
            person=person,
            email=email,
            organization_party_id=employer_id,
            organization_name=organization_name,
        )

    def _load_login(self, login_id: str) -> LoginIdentity:
        record = self._store.query_one("UserLogin", user_login_id=login_id)
        if record is None:
            logger.warning("Login not found: {}", login_id)
            raise NotFoundError(f"User not found: {login_id}")
        return login_identity_from_record(record)

    def _load_person(self, party_id: str) -> PersonProfile | None:
        record = self._store.query_one("Person", party_id=party_id)
        if record is None:
            logger.debug("No person found for party {}", party_id)
            return None
        return PersonProfile(
            party_id=party_id,
            first_name=record.get("first_name"),
            last_name=record.get("last_name"),
        )

    def _load_primary_email(self, party_id: str) -> str | None:
        purposes = self._store.query_list(
            "PartyContactMechPurpose",
            party_id=party_id,
            contact_mech_purpose_type_id=PRIMARY_EMAIL_PURPOSE,
        )
        if not purposes:
            logger.debug("No primary email purpose for party {}", party_id)
            return None

        contact_mech_id = purposes[0]["contact_mech_id"]
        contact_mech = self._store.query_one(
            "ContactMech",
            contact_mech_id=contact_mech_id,
            contact_mech_type_id=EMAIL_ADDRESS_TYPE,
        )
        if contact_mech is None:
            logger.debug("No email address for contact mechanism {}", contact_mech_id)
            return None
        return contact_mech.get("info_string")

    def _load_employer_id(self, party_id: str) -> str | None:
        # First match in store order; multiple employers have no defined precedence.
        relationships = self._store.query_list(
            "PartyRelationship",
            party_id_to=party_id,
            party_relationship_type_id=EMPLOYMENT_RELATIONSHIP,
        )
        if not relationships:
            logger.debug("No employment relationship for party {}", party_id)
            return None
        return relationships[0]["party_id_from"]

    def _load_organization_name(self, organization_party_id: str) -> str | None:
        group = self._store.query_one("PartyGroup", party_id=organization_party_id)
        if group is None:
            logger.debug("No party group for organization {}", organization_party_id)
            return None
        return group.get("group_name")

    @staticmethod
    def _merge(
        login: LoginIdentity,
        tenant_id: str,
        person: PersonProfile | None = None,
        email: str | None = None,
        organization_party_id: str | None = None,
        organization_name: str | None = None,
    ) -> CombinedIdentity:
        return CombinedIdentity(
            login_id=login.login_id,
            party_id=login.party_id,
            tenant_id=tenant_id,
            enabled=login.enabled,
            has_logged_out=login.has_logged_out,
            first_name=person.first_name if person else None,
            last_name=person.last_name if person else None,
            email=email,
            organization_party_id=organization_party_id,
            organization_name=organization_name,
        )

"""Persistence models for the party data model.

Rows mirror the records the resolvers read: logins, parties with their person
or group detail, contact mechanisms, relationships and attributes. Flags use
the ``"Y"``/``"N"`` indicator convention of the source data.
"""

from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


def utc_now():
    """Return current UTC datetime."""
    return datetime.now(UTC)


class UserLoginRow(SQLModel, table=True):
    """Authentication credential record, optionally bound to a party."""

    __tablename__ = "user_login"

    user_login_id: str = Field(primary_key=True)
    party_id: str | None = Field(default=None, index=True)
    current_password: str | None = None
    enabled: str | None = Field(default="Y", max_length=1)
    has_logged_out: str | None = Field(default="N", max_length=1)


class PartyRow(SQLModel, table=True):
    __tablename__ = "party"

    party_id: str = Field(primary_key=True)
    party_type_id: str | None = None


class PersonRow(SQLModel, table=True):
    __tablename__ = "person"

    party_id: str = Field(primary_key=True)
    first_name: str | None = None
    last_name: str | None = None


class PartyGroupRow(SQLModel, table=True):
    __tablename__ = "party_group"

    party_id: str = Field(primary_key=True)
    group_name: str | None = None


class PartyContactMechPurposeRow(SQLModel, table=True):
    """Links a party's contact mechanism to a purpose such as ``PRIMARY_EMAIL``."""

    __tablename__ = "party_contact_mech_purpose"

    party_id: str = Field(primary_key=True)
    contact_mech_id: str = Field(primary_key=True)
    contact_mech_purpose_type_id: str = Field(primary_key=True)
    from_date: datetime = Field(default_factory=utc_now, primary_key=True)


class ContactMechRow(SQLModel, table=True):
    __tablename__ = "contact_mech"

    contact_mech_id: str = Field(primary_key=True)
    contact_mech_type_id: str
    info_string: str | None = None


class PartyRelationshipRow(SQLModel, table=True):
    """Directed relationship from ``party_id_from`` to ``party_id_to``."""

    __tablename__ = "party_relationship"

    party_id_from: str = Field(primary_key=True)
    party_id_to: str = Field(primary_key=True)
    role_type_id_from: str = Field(default="_NA_", primary_key=True)
    role_type_id_to: str = Field(default="_NA_", primary_key=True)
    from_date: datetime = Field(default_factory=utc_now, primary_key=True)
    party_relationship_type_id: str | None = Field(default=None, index=True)


class PartyAttributeRow(SQLModel, table=True):
    __tablename__ = "party_attribute"

    party_id: str = Field(primary_key=True)
    attr_name: str = Field(primary_key=True)
    attr_value: str | None = None

"""Persistence rows keyed by the entity names the store is queried with."""

from sqlmodel import SQLModel

from .party_rows import (
    ContactMechRow,
    PartyAttributeRow,
    PartyContactMechPurposeRow,
    PartyGroupRow,
    PartyRelationshipRow,
    PartyRow,
    PersonRow,
    UserLoginRow,
)

ENTITY_ROWS: dict[str, type[SQLModel]] = {
    "UserLogin": UserLoginRow,
    "Party": PartyRow,
    "Person": PersonRow,
    "PartyGroup": PartyGroupRow,
    "PartyContactMechPurpose": PartyContactMechPurposeRow,
    "ContactMech": ContactMechRow,
    "PartyRelationship": PartyRelationshipRow,
    "PartyAttribute": PartyAttributeRow,
}

__all__ = [
    "ENTITY_ROWS",
    "ContactMechRow",
    "PartyAttributeRow",
    "PartyContactMechPurposeRow",
    "PartyGroupRow",
    "PartyRelationshipRow",
    "PartyRow",
    "PersonRow",
    "UserLoginRow",
]

from typing import Any, Dict, List, Optional
from pydantic import BaseModel


class ExternalId(BaseModel):
    Issuer: Optional[str] = None
    Id: Optional[str] = None


class Group(BaseModel):
    GroupId: Optional[str] = None
    DisplayName: Optional[str] = None
    Description: Optional[str] = None
    IdentityStoreId: Optional[str] = None
    ExternalIds: Optional[List[ExternalId]] = None


class NameObject(BaseModel):
    Formatted: Optional[str] = None
    FamilyName: Optional[str] = None
    GivenName: Optional[str] = None


class Email(BaseModel):
    Value: Optional[str] = None
    Type: Optional[str] = None
    Primary: Optional[bool] = None


class User(BaseModel):
    UserName: Optional[str] = None
    UserId: Optional[str] = None
    ExternalIds: Optional[List[ExternalId]] = []
    Name: Optional[NameObject] = None
    DisplayName: Optional[str] = None
    Emails: Optional[List[Email]] = []
    Active: Optional[bool] = None
    IdentityStoreId: Optional[str] = None

    @property
    def primary_email(self) -> Optional[str]:
        for email in self.Emails or []:
            if email.Primary:
                return email.Value
        return self.Emails[0].Value if self.Emails else None


def to_group(record: Dict[str, Any]) -> Optional[Group]:
    """Convert an Identity Store group record, skipping records without an ID."""
    if not record.get("GroupId"):
        return None
    return Group.model_validate(record)


def to_user(record: Dict[str, Any]) -> Optional[User]:
    """Convert an Identity Store user record, skipping records without an ID."""
    if not record.get("UserId"):
        return None
    return User.model_validate(record)


# AWS SSO SCIM resources (wire field names)

SCIM_SCHEMA_USER = "urn:ietf:params:scim:schemas:core:2.0:User"
SCIM_SCHEMA_GROUP = "urn:ietf:params:scim:schemas:core:2.0:Group"


class ScimName(BaseModel):
    familyName: str = ""
    givenName: str = ""


class ScimEmail(BaseModel):
    value: str
    type: str = "work"
    primary: bool = False


class ScimUser(BaseModel):
    id: Optional[str] = None
    schemas: List[str] = [SCIM_SCHEMA_USER]
    externalId: Optional[str] = None
    userName: str
    name: ScimName = ScimName()
    displayName: str = ""
    active: bool = True
    emails: List[ScimEmail] = []


class ScimGroup(BaseModel):
    id: Optional[str] = None
    schemas: List[str] = [SCIM_SCHEMA_GROUP]
    displayName: str
    externalId: Optional[str] = None
    members: List[Any] = []

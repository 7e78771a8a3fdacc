"""Identity Store member identifiers.

The SDK returns a membership's member as a tagged union mapping such as
``{"UserId": "..."}``. Members of kinds this module does not know about come
back under another key (botocore uses ``SDK_UNKNOWN_MEMBER``). Only the user
variant can be resolved to a principal.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from infrastructure.diagnostics.errors import ContractViolationError


@dataclass(frozen=True)
class UserMemberId:
    user_id: str


@dataclass(frozen=True)
class UnknownMemberId:
    tag: str
    payload: Dict[str, Any] = field(default_factory=dict, compare=False)


MemberId = Union[UserMemberId, UnknownMemberId]


def parse_member_id(raw: Optional[Dict[str, Any]]) -> MemberId:
    """Parse the SDK's MemberId mapping into a MemberId variant."""
    if raw and isinstance(raw.get("UserId"), str):
        return UserMemberId(user_id=raw["UserId"])
    tag = next(iter(raw), "") if isinstance(raw, dict) and raw else ""
    return UnknownMemberId(tag=tag, payload=dict(raw) if isinstance(raw, dict) else {})


def resolve_member_id(member_id: MemberId) -> str:
    """Return the user ID wrapped by a member identifier.

    Raises:
        ContractViolationError: The member is not a user
    """
    if isinstance(member_id, UserMemberId):
        return member_id.user_id
    raise ContractViolationError(
        "expected a user id, got unknown type id", value=member_id
    )

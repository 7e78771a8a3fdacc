"""Directory capability contracts.

Small protocols describing what callers need from an Identity Store
adapter. IdentityStoreAdapter implements both; DryRunIdentityStore implements
the writer side with synthetic responses and forwards the reader side.
"""

from typing import Any, Callable, Dict, List, Optional, Protocol, TypeVar

from integrations.aws.pagination import Paginator
from integrations.aws.schemas import Group, User

T = TypeVar("T")


class DirectoryReader(Protocol):
    """Read-only directory operations."""

    identity_store_id: str

    def is_member_in_groups(self, group_ids: List[str], user_id: str) -> bool: ...

    def get_group_membership_id(self, group_id: str, user_id: str) -> str: ...

    def list_paged(
        self,
        paginator: Paginator,
        records_key: str,
        convert: Callable[[Dict[str, Any]], Optional[T]],
        operation: str = ...,
    ) -> List[T]: ...

    def list_groups(
        self, convert: Callable[[Dict[str, Any]], Optional[Any]] = ...
    ) -> List[Group]: ...

    def list_users(
        self, convert: Callable[[Dict[str, Any]], Optional[Any]] = ...
    ) -> List[User]: ...

    def list_group_members(self, group_id: str) -> List[str]: ...


class DirectoryWriter(Protocol):
    """Mutating directory operations."""

    def create_group(
        self, display_name: str, description: Optional[str] = None
    ) -> Dict[str, Any]: ...

    def create_user(
        self,
        user_name: str,
        display_name: str,
        given_name: str,
        family_name: str,
        email: Optional[str] = None,
    ) -> Dict[str, Any]: ...

    def create_group_membership(self, group_id: str, user_id: str) -> Dict[str, Any]: ...

    def delete_group(self, group_id: str) -> Dict[str, Any]: ...

    def delete_group_membership(self, membership_id: str) -> Dict[str, Any]: ...

    def delete_user(self, user_id: str) -> Dict[str, Any]: ...


class Directory(DirectoryReader, DirectoryWriter, Protocol):
    """Full directory capability set."""

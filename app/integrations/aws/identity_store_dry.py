"""Dry-run Identity Store adapter.

Reads go to the wrapped adapter. Writes are logged and answered with a
synthetic response built from the request, so callers chaining on returned
IDs keep working without touching the directory.
"""

from typing import Any, Callable, Dict, List, Optional, TypeVar

from core.logging import get_module_logger
from integrations.aws.contracts import DirectoryReader
from integrations.aws.pagination import Paginator
from integrations.aws.schemas import to_group, to_user

logger = get_module_logger()

T = TypeVar("T")

VIRTUAL_SUFFIX = "-virtual"


class DryRunIdentityStore:
    """Identity Store adapter that never mutates the directory.

    Args:
        reader (DirectoryReader): Adapter that serves the read operations
    """

    def __init__(self, reader: DirectoryReader):
        self._reader = reader
        self.identity_store_id = reader.identity_store_id

    # Mutating operations (synthetic)

    def create_group(
        self, display_name: str, description: Optional[str] = None
    ) -> Dict[str, Any]:
        logger.info("dry_run_create_group", display_name=display_name)
        return {
            "GroupId": f"{display_name}{VIRTUAL_SUFFIX}",
            "IdentityStoreId": self.identity_store_id,
            "DisplayName": display_name,
            "Description": description,
        }

    def create_user(
        self,
        user_name: str,
        display_name: str,
        given_name: str,
        family_name: str,
        email: Optional[str] = None,
    ) -> Dict[str, Any]:
        logger.info("dry_run_create_user", user_name=user_name)
        user: Dict[str, Any] = {
            "UserId": f"{user_name}{VIRTUAL_SUFFIX}",
            "IdentityStoreId": self.identity_store_id,
            "UserName": user_name,
            "DisplayName": display_name,
            "Name": {"GivenName": given_name, "FamilyName": family_name},
        }
        if email:
            user["Emails"] = [{"Value": email, "Type": "work", "Primary": True}]
        return user

    def create_group_membership(self, group_id: str, user_id: str) -> Dict[str, Any]:
        logger.info("dry_run_create_group_membership", group_id=group_id, user_id=user_id)
        return {
            "MembershipId": f"{group_id}-{user_id}{VIRTUAL_SUFFIX}",
            "IdentityStoreId": self.identity_store_id,
            "GroupId": group_id,
            "MemberId": {"UserId": user_id},
        }

    def delete_group(self, group_id: str) -> Dict[str, Any]:
        logger.info("dry_run_delete_group", group_id=group_id)
        return {"IdentityStoreId": self.identity_store_id, "GroupId": group_id}

    def delete_group_membership(self, membership_id: str) -> Dict[str, Any]:
        logger.info("dry_run_delete_group_membership", membership_id=membership_id)
        return {
            "IdentityStoreId": self.identity_store_id,
            "MembershipId": membership_id,
        }

    def delete_user(self, user_id: str) -> Dict[str, Any]:
        logger.info("dry_run_delete_user", user_id=user_id)
        return {"IdentityStoreId": self.identity_store_id, "UserId": user_id}

    # Read operations (delegated)

    def is_member_in_groups(self, group_ids: List[str], user_id: str) -> bool:
        return self._reader.is_member_in_groups(group_ids, user_id)

    def get_group_membership_id(self, group_id: str, user_id: str) -> str:
        return self._reader.get_group_membership_id(group_id, user_id)

    def list_paged(
        self,
        paginator: Paginator,
        records_key: str,
        convert: Callable[[Dict[str, Any]], Optional[T]],
        operation: str = "ListPaged",
    ) -> List[T]:
        return self._reader.list_paged(paginator, records_key, convert, operation)

    def list_groups(self, convert: Callable[[Dict[str, Any]], Optional[Any]] = to_group):
        return self._reader.list_groups(convert)

    def list_users(self, convert: Callable[[Dict[str, Any]], Optional[Any]] = to_user):
        return self._reader.list_users(convert)

    def list_group_members(self, group_id: str) -> List[str]:
        return self._reader.list_group_members(group_id)

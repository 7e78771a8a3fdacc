"""
AWS Identity Store adapter.

Wraps an identitystore boto3 client behind a small set of typed operations.
Every failed call is classified into an APIError (and logged according to
the error logging policy) before being raised to the caller.

Functions focused on group and membership provisioning:
- Group management: create_group, delete_group, list_groups
- User management: create_user, delete_user, list_users
- Membership management: create_group_membership, delete_group_membership,
  get_group_membership_id, is_member_in_groups, list_group_members
"""

from typing import Any, Callable, Dict, List, Optional, TypeVar

import boto3  # type: ignore
from botocore.client import BaseClient  # type: ignore

from core.config import settings
from core.logging import get_module_logger
from infrastructure.diagnostics.errors import APIError
from infrastructure.diagnostics.policy import ErrorLoggingPolicy, default_policy
from integrations.aws.contracts import Directory
from integrations.aws.identity_store_dry import DryRunIdentityStore
from integrations.aws.members import parse_member_id, resolve_member_id
from integrations.aws.pagination import IdentityStorePaginator, Paginator
from integrations.aws.schemas import Group, User, to_group, to_user

logger = get_module_logger()

T = TypeVar("T")

LIST_PAGE_SIZE = 100


def get_identity_store_client(region_name: Optional[str] = None) -> BaseClient:
    """Create an identitystore boto3 client for the configured region."""
    return boto3.client(
        "identitystore", region_name=region_name or settings.aws.AWS_REGION
    )


class IdentityStoreAdapter:
    """Typed operations over an AWS Identity Store.

    Args:
        client (BaseClient): identitystore client (or a compatible fake)
        identity_store_id (str): ID of the identity store to operate on
        policy (ErrorLoggingPolicy, optional): Policy used to log classified
            errors. Defaults to the process-wide policy.
    """

    def __init__(
        self,
        client: BaseClient,
        identity_store_id: str,
        policy: Optional[ErrorLoggingPolicy] = None,
    ):
        self._client = client
        self.identity_store_id = identity_store_id
        self._policy = policy or default_policy

    def _handle_error(self, operation: str, error: Exception) -> APIError:
        return self._policy.handle_identity_store_error(operation, error)

    def _call(self, operation: str, method: str, **params) -> Dict[str, Any]:
        logger.debug("identity_store_call_start", operation=operation)
        try:
            return getattr(self._client, method)(
                IdentityStoreId=self.identity_store_id, **params
            )
        except Exception as e:  # pylint: disable=broad-except
            raise self._handle_error(operation, e) from e

    # Mutating operations

    def create_group(
        self, display_name: str, description: Optional[str] = None
    ) -> Dict[str, Any]:
        """Create a group.

        Returns:
            dict: The CreateGroup response (GroupId, IdentityStoreId)
        """
        params: Dict[str, Any] = {"DisplayName": display_name}
        if description:
            params["Description"] = description
        return self._call("CreateGroup", "create_group", **params)

    def create_user(
        self,
        user_name: str,
        display_name: str,
        given_name: str,
        family_name: str,
        email: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create a user.

        Returns:
            dict: The CreateUser response (UserId, IdentityStoreId)
        """
        params: Dict[str, Any] = {
            "UserName": user_name,
            "DisplayName": display_name,
            "Name": {"GivenName": given_name, "FamilyName": family_name},
        }
        if email:
            params["Emails"] = [{"Value": email, "Type": "work", "Primary": True}]
        return self._call("CreateUser", "create_user", **params)

    def create_group_membership(self, group_id: str, user_id: str) -> Dict[str, Any]:
        return self._call(
            "CreateGroupMembership",
            "create_group_membership",
            GroupId=group_id,
            MemberId={"UserId": user_id},
        )

    def delete_group(self, group_id: str) -> Dict[str, Any]:
        return self._call("DeleteGroup", "delete_group", GroupId=group_id)

    def delete_group_membership(self, membership_id: str) -> Dict[str, Any]:
        return self._call(
            "DeleteGroupMembership",
            "delete_group_membership",
            MembershipId=membership_id,
        )

    def delete_user(self, user_id: str) -> Dict[str, Any]:
        return self._call("DeleteUser", "delete_user", UserId=user_id)

    # Read operations

    def is_member_in_groups(self, group_ids: List[str], user_id: str) -> bool:
        """Check whether a user belongs to at least one of the given groups.

        An empty group list is answered without calling the service.

        Args:
            group_ids (List[str]): Group IDs to check
            user_id (str): The user ID

        Returns:
            bool: True if any group reports the membership
        """
        if not group_ids:
            return False

        response = self._call(
            "IsMemberInGroups",
            "is_member_in_groups",
            GroupIds=list(group_ids),
            MemberId={"UserId": user_id},
        )
        return any(
            result.get("MembershipExists", False)
            for result in response.get("Results", [])
        )

    def get_group_membership_id(self, group_id: str, user_id: str) -> str:
        response = self._call(
            "GetGroupMembershipId",
            "get_group_membership_id",
            GroupId=group_id,
            MemberId={"UserId": user_id},
        )
        return response["MembershipId"]

    def list_paged(
        self,
        paginator: Paginator,
        records_key: str,
        convert: Callable[[Dict[str, Any]], Optional[T]],
        operation: str = "ListPaged",
    ) -> List[T]:
        """Drain a paginator, converting each record.

        Pages are fetched strictly one after another. A failed page raises the
        classified error and nothing collected so far is returned. Records for
        which ``convert`` returns None are skipped.

        Args:
            paginator (Paginator): Source of pages
            records_key (str): Key of the record list in each page
            convert (Callable): Record converter; None means skip
            operation (str): Operation name used when classifying failures

        Returns:
            list: Converted records across all pages
        """
        results: List[T] = []
        while paginator.has_more_pages():
            try:
                page = paginator.next_page()
            except Exception as e:  # pylint: disable=broad-except
                raise self._handle_error(operation, e) from e

            for record in page.get(records_key, []):
                converted = convert(record)
                if converted is not None:
                    results.append(converted)

            logger.debug(
                "identity_store_page_processed",
                operation=operation,
                total=len(results),
            )
        return results

    def _paginator(self, method: str, **params) -> IdentityStorePaginator:
        return IdentityStorePaginator(
            self._client,
            method,
            IdentityStoreId=self.identity_store_id,
            PaginationConfig={"PageSize": LIST_PAGE_SIZE},
            **params,
        )

    def list_groups(
        self, convert: Callable[[Dict[str, Any]], Optional[Any]] = to_group
    ) -> List[Group]:
        return self.list_paged(
            self._paginator("list_groups"), "Groups", convert, "ListGroups"
        )

    def list_users(
        self, convert: Callable[[Dict[str, Any]], Optional[Any]] = to_user
    ) -> List[User]:
        return self.list_paged(
            self._paginator("list_users"), "Users", convert, "ListUsers"
        )

    def list_group_members(self, group_id: str) -> List[str]:
        """List the user IDs of a group's members.

        Raises:
            APIError: A page could not be fetched
            ContractViolationError: A member is not a user
        """
        return self.list_paged(
            self._paginator("list_group_memberships", GroupId=group_id),
            "GroupMemberships",
            lambda membership: resolve_member_id(
                parse_member_id(membership.get("MemberId"))
            ),
            "ListGroupMemberships",
        )


def get_identity_store(
    client: Optional[BaseClient] = None,
    identity_store_id: Optional[str] = None,
    dry_run: Optional[bool] = None,
    policy: Optional[ErrorLoggingPolicy] = None,
) -> Directory:
    """Build the Identity Store adapter described by the settings.

    Returns a DryRunIdentityStore wrapping the real adapter when dry run is
    enabled.
    """
    adapter = IdentityStoreAdapter(
        client if client is not None else get_identity_store_client(),
        identity_store_id or settings.aws.IDENTITY_STORE_ID,
        policy=policy,
    )
    if dry_run is None:
        dry_run = settings.aws.DRY_RUN
    if dry_run:
        logger.info("identity_store_dry_run_enabled")
        return DryRunIdentityStore(adapter)
    return adapter

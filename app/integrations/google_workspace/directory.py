"""Google Workspace directory reader.

Reads users, groups and group members from the Admin SDK Directory API.
Queries are comma separated lists of Directory API search clauses, each
listed separately and concatenated. An empty query selects nothing and "*"
selects everything in the customer.

Reference: https://developers.google.com/admin-sdk/directory/v1/guides/search-users
"""

import json
from json import JSONDecodeError
from typing import Any, Dict, List, Optional

from google.oauth2 import service_account
from googleapiclient.discovery import Resource, build

from core.config import settings
from core.logging import get_module_logger
from infrastructure.diagnostics.policy import ErrorLoggingPolicy, default_policy

logger = get_module_logger()

DIRECTORY_READONLY_SCOPES = [
    "https://www.googleapis.com/auth/admin.directory.group.readonly",
    "https://www.googleapis.com/auth/admin.directory.group.member.readonly",
    "https://www.googleapis.com/auth/admin.directory.user.readonly",
]

ZERO_WIDTH_SPACE = "\u200b"


class EmptyDirectoryResultError(LookupError):
    """A non-empty query matched nothing in the directory."""


def get_directory_service(
    credentials_json: Optional[str] = None,
    admin_email: Optional[str] = None,
) -> Resource:
    """Build an authenticated Admin SDK Directory resource.

    Args:
        credentials_json (str, optional): Service account key as JSON. Defaults
            to GOOGLE_CREDENTIALS.
        admin_email (str, optional): Admin impersonated through domain-wide
            delegation. Defaults to GOOGLE_ADMIN_EMAIL.

    Returns:
        Resource: The admin directory_v1 resource.
    """
    creds_json = credentials_json or settings.google_workspace.GOOGLE_CREDENTIALS
    subject = admin_email or settings.google_workspace.GOOGLE_ADMIN_EMAIL

    if not creds_json:
        logger.error("credentials_json_missing")
        raise ValueError("Credentials JSON not set")

    try:
        creds_info = json.loads(creds_json)
    except JSONDecodeError as json_decode_exception:
        logger.error("invalid_credentials_json", error=str(json_decode_exception))
        raise JSONDecodeError(
            msg="Invalid credentials JSON", doc="Credentials JSON", pos=0
        ) from json_decode_exception

    creds = service_account.Credentials.from_service_account_info(
        creds_info, scopes=DIRECTORY_READONLY_SCOPES
    )
    if subject:
        creds = creds.with_subject(subject)

    return build(
        "admin",
        "directory_v1",
        credentials=creds,
        cache_discovery=False,
        static_discovery=False,
    )


class GoogleDirectory:
    """Read-only access to a Google Workspace directory.

    Args:
        service (Resource): admin directory_v1 resource (or a compatible fake)
        customer_id (str, optional): Workspace customer ID
        policy (ErrorLoggingPolicy, optional): Policy used to log classified
            errors. Defaults to the process-wide policy.
    """

    def __init__(
        self,
        service: Resource,
        customer_id: Optional[str] = None,
        policy: Optional[ErrorLoggingPolicy] = None,
    ):
        self._service = service
        self.customer_id = customer_id or settings.google_workspace.GOOGLE_CUSTOMER_ID
        self._policy = policy or default_policy

    def _paginate(
        self, operation: str, list_resource: Any, resource_key: str, **params
    ) -> List[Dict[str, Any]]:
        all_results: List[Dict[str, Any]] = []
        page_number = 0
        try:
            current_request = list_resource.list(**params)
            while current_request is not None:
                page_number += 1
                response = current_request.execute() or {}
                all_results.extend(response.get(resource_key, []))

                logger.debug(
                    "pagination_page_processed",
                    operation=operation,
                    page_number=page_number,
                    total_items=len(all_results),
                    has_next_page=bool(response.get("nextPageToken")),
                )
                current_request = list_resource.list_next(current_request, response)
        except Exception as e:  # pylint: disable=broad-except
            raise self._policy.handle_google_api_error(operation, e) from e

        logger.debug(
            "pagination_completed",
            operation=operation,
            total_results=len(all_results),
            total_pages=page_number,
        )
        return all_results

    def _query(
        self, operation: str, list_resource: Any, resource_key: str, query: str, **params
    ) -> List[Dict[str, Any]]:
        if query == "*":
            return self._paginate(
                operation, list_resource, resource_key, customer=self.customer_id, **params
            )

        results: List[Dict[str, Any]] = []
        for sub_query in query.split(","):
            results.extend(
                self._paginate(
                    operation,
                    list_resource,
                    resource_key,
                    customer=self.customer_id,
                    query=sub_query,
                    **params,
                )
            )
        return results

    def get_users(self, query: str) -> List[Dict[str, Any]]:
        """Get the users matching a query.

        Zero-width spaces in given and family names are replaced by spaces.

        Raises:
            EmptyDirectoryResultError: A non-empty query matched no users
            APIError: The Directory API call failed
        """
        if query == "":
            return []

        users = self._query("ListUsers", self._service.users(), "users", query)
        for user in users:
            name = user.get("name")
            if not name:
                continue
            for part in ("givenName", "familyName"):
                if part in name:
                    name[part] = name[part].replace(ZERO_WIDTH_SPACE, " ")

        if not users:
            logger.warning("google_directory_empty_result", resource="users", query=query)
            raise EmptyDirectoryResultError("google api returned 0 users")
        return users

    def get_deleted_users(self) -> List[Dict[str, Any]]:
        return self._paginate(
            "ListDeletedUsers",
            self._service.users(),
            "users",
            customer=self.customer_id,
            showDeleted="true",
        )

    def get_groups(self, query: str) -> List[Dict[str, Any]]:
        """Get the groups matching a query.

        "*" lists every group and may come back empty.

        Raises:
            EmptyDirectoryResultError: Explicit queries matched no groups
            APIError: The Directory API call failed
        """
        if query == "":
            return []

        groups = self._query("ListGroups", self._service.groups(), "groups", query)
        if query == "*":
            return groups
        if not groups:
            logger.warning(
                "google_directory_empty_result", resource="groups", query=query
            )
            raise EmptyDirectoryResultError("google api returned 0 groups")
        return groups

    def get_group_members(self, group_key: str) -> List[Dict[str, Any]]:
        return self._paginate(
            "ListMembers", self._service.members(), "members", groupKey=group_key
        )


def get_google_directory(**kwargs) -> GoogleDirectory:
    """Build a GoogleDirectory from the configured credentials."""
    return GoogleDirectory(get_directory_service(), **kwargs)

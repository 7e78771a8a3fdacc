"""AWS SSO SCIM client.

Talks to the AWS SSO SCIM endpoint with the bearer token generated in the
AWS SSO console. Any non-2xx response is classified into an APIError for the
SCIM service (and logged according to the error logging policy). Transport
failures raised by requests propagate unchanged.

Reference: https://docs.aws.amazon.com/singlesignon/latest/developerguide/what-is-scim.html
"""

from typing import Any, Dict, List, Optional, Union

import requests
from core.config import settings
from core.logging import get_module_logger
from infrastructure.diagnostics.policy import ErrorLoggingPolicy, default_policy
from integrations.aws.schemas import ScimGroup, ScimUser
from integrations.aws.scim_dry import DryRunScimClient

logger = get_module_logger()

SCIM_SCHEMA_PATCH_OP = "urn:ietf:params:scim:api:messages:2.0:PatchOp"
CONTENT_TYPE_SCIM = "application/scim+json"
PAGE_SIZE = 10
DEFAULT_TIMEOUT = 60


class ScimUserNotFoundError(LookupError):
    """The SCIM endpoint holds no user for the given email."""


class ScimGroupNotFoundError(LookupError):
    """The SCIM endpoint holds no group with the given display name."""


class ScimClient:
    """Client for the AWS SSO SCIM endpoint.

    Args:
        endpoint (str): SCIM endpoint URL
        token (str): SCIM bearer token
        session (requests.Session, optional): HTTP session to send requests with
        policy (ErrorLoggingPolicy, optional): Policy used to log classified errors
        timeout (float, optional): Per-request timeout passed to requests
    """

    def __init__(
        self,
        endpoint: str,
        token: str,
        session: Optional[requests.Session] = None,
        policy: Optional[ErrorLoggingPolicy] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ):
        if not endpoint:
            logger.error("scim_client_creation_failed", error="Missing SCIM endpoint")
            raise ValueError("Missing SCIM endpoint")
        if not token:
            logger.error("scim_client_creation_failed", error="Missing SCIM token")
            raise ValueError("Missing SCIM token")
        self._endpoint = endpoint.rstrip("/")
        self._token = token
        self._session = session or requests.Session()
        self._policy = policy or default_policy
        self._timeout = timeout

    def _send(
        self,
        operation: str,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        headers = {"Authorization": f"Bearer {self._token}"}
        if body is not None:
            headers["Content-Type"] = CONTENT_TYPE_SCIM

        url = f"{self._endpoint}/{path.lstrip('/')}"
        logger.debug("scim_request", operation=operation, method=method, url=url)
        response = self._session.request(
            method,
            url,
            params=params,
            json=body,
            headers=headers,
            timeout=self._timeout,
        )

        if response.status_code < 200 or response.status_code > 204:
            error = requests.HTTPError(
                f"status of http response was {response.status_code}",
                response=response,
            )
            raise self._policy.handle_scim_error(
                operation, response.status_code, error
            ) from error

        if not response.content:
            return {}
        return response.json()

    def _get_pages(self, operation: str, path: str) -> List[Dict[str, Any]]:
        resources: List[Dict[str, Any]] = []
        start_index = 1
        while True:
            logger.debug("scim_get_page", operation=operation, start_index=start_index)
            page = self._send(
                operation,
                "GET",
                path,
                params={"count": PAGE_SIZE, "startIndex": start_index},
            )
            resources.extend(page.get("Resources", []))

            start_index += PAGE_SIZE
            if start_index > page.get("totalResults", 0):
                logger.debug(
                    "scim_last_page", operation=operation, total=page.get("totalResults")
                )
                return resources

    def get_users(self) -> Dict[str, ScimUser]:
        """Get all users, keyed by userName."""
        users = [ScimUser.model_validate(u) for u in self._get_pages("GetUsers", "/Users")]
        return {user.userName: user for user in users}

    def get_groups(self) -> Dict[str, ScimGroup]:
        """Get all groups, keyed by displayName."""
        groups = [
            ScimGroup.model_validate(g) for g in self._get_pages("GetGroups", "/Groups")
        ]
        return {group.displayName: group for group in groups}

    def is_user_in_group(self, user: ScimUser, group: ScimGroup) -> bool:
        result = self._send(
            "IsUserInGroup",
            "GET",
            "/Groups",
            params={"filter": f'id eq "{group.id}" and members eq "{user.id}"'},
        )
        return result.get("totalResults", 0) > 0

    def find_user_by_email(self, email: str) -> ScimUser:
        result = self._send(
            "FindUserByEmail",
            "GET",
            "/Users",
            params={"filter": f'userName eq "{email}"'},
        )
        if result.get("totalResults") != 1:
            raise ScimUserNotFoundError(f"{email} not found in AWS SSO")
        return ScimUser.model_validate(result["Resources"][0])

    def find_group_by_display_name(self, name: str) -> ScimGroup:
        result = self._send(
            "FindGroupByDisplayName",
            "GET",
            "/Groups",
            params={"filter": f'displayName eq "{name}"'},
        )
        if result.get("totalResults") != 1:
            raise ScimGroupNotFoundError(f"{name} not found in AWS SSO")
        return ScimGroup.model_validate(result["Resources"][0])

    def create_user(self, user: ScimUser) -> ScimUser:
        """Create a user.

        Some endpoints answer without the new ID; the user is then looked up
        by userName.
        """
        created = self._send(
            "CreateUser",
            "POST",
            "/Users",
            body=user.model_dump(exclude_none=True),
        )
        if not created.get("id"):
            return self.find_user_by_email(user.userName)
        return ScimUser.model_validate(created)

    def update_user(self, user: ScimUser) -> ScimUser:
        updated = self._send(
            "UpdateUser",
            "PUT",
            f"/Users/{user.id}",
            body=user.model_dump(exclude_none=True),
        )
        if not updated.get("id"):
            return self.find_user_by_email(user.userName)
        return ScimUser.model_validate(updated)

    def delete_user(self, user: ScimUser) -> None:
        self._send("DeleteUser", "DELETE", f"/Users/{user.id}")

    def create_group(self, group: ScimGroup) -> ScimGroup:
        created = self._send(
            "CreateGroup",
            "POST",
            "/Groups",
            body=group.model_dump(exclude_none=True),
        )
        return ScimGroup.model_validate(created)

    def delete_group(self, group: ScimGroup) -> None:
        self._send("DeleteGroup", "DELETE", f"/Groups/{group.id}")

    def _change_members(
        self, operation: str, op: str, user: ScimUser, group: ScimGroup
    ) -> None:
        logger.debug(
            "scim_group_change",
            operation=op,
            user=user.userName,
            group=group.displayName,
        )
        self._send(
            operation,
            "PATCH",
            f"/Groups/{group.id}",
            body={
                "schemas": [SCIM_SCHEMA_PATCH_OP],
                "Operations": [
                    {"op": op, "path": "members", "value": [{"value": user.id}]}
                ],
            },
        )

    def add_user_to_group(self, user: ScimUser, group: ScimGroup) -> None:
        self._change_members("AddUserToGroup", "add", user, group)

    def remove_user_from_group(self, user: ScimUser, group: ScimGroup) -> None:
        self._change_members("RemoveUserFromGroup", "remove", user, group)


def get_scim_client(
    dry_run: Optional[bool] = None, **kwargs
) -> Union[ScimClient, DryRunScimClient]:
    """Build a SCIM client from the configured endpoint and token.

    Args:
        dry_run (bool, optional): Wrap the client so that no change is sent.
            Defaults to the DRY_RUN setting.
    """
    client = ScimClient(
        settings.aws.SCIM_ENDPOINT, settings.aws.SCIM_ACCESS_TOKEN, **kwargs
    )
    if dry_run is None:
        dry_run = settings.aws.DRY_RUN
    if dry_run:
        logger.info("scim_dry_run_enabled")
        return DryRunScimClient(client)
    return client

"""Dry-run AWS SSO SCIM client.

Lookups go to the real endpoint; changes are logged and echoed back.
"""

from typing import TYPE_CHECKING, Dict

from core.logging import get_module_logger
from integrations.aws.schemas import ScimGroup, ScimUser

if TYPE_CHECKING:
    from integrations.aws.scim import ScimClient

logger = get_module_logger()


class DryRunScimClient:
    """SCIM client that never changes the directory."""

    def __init__(self, client: "ScimClient"):
        self._client = client

    def get_users(self) -> Dict[str, ScimUser]:
        return self._client.get_users()

    def get_groups(self) -> Dict[str, ScimGroup]:
        return self._client.get_groups()

    def is_user_in_group(self, user: ScimUser, group: ScimGroup) -> bool:
        return self._client.is_user_in_group(user, group)

    def find_user_by_email(self, email: str) -> ScimUser:
        return self._client.find_user_by_email(email)

    def find_group_by_display_name(self, name: str) -> ScimGroup:
        return self._client.find_group_by_display_name(name)

    def create_user(self, user: ScimUser) -> ScimUser:
        logger.info("dry_run_create_user", user_name=user.userName)
        return user

    def update_user(self, user: ScimUser) -> ScimUser:
        logger.info("dry_run_update_user", user_name=user.userName)
        return user

    def delete_user(self, user: ScimUser) -> None:
        logger.info("dry_run_delete_user", user_name=user.userName)

    def create_group(self, group: ScimGroup) -> ScimGroup:
        logger.info("dry_run_create_group", display_name=group.displayName)
        return group.model_copy(
            update={"id": group.id or f"{group.displayName}-virtual"}
        )

    def delete_group(self, group: ScimGroup) -> None:
        logger.info("dry_run_delete_group", display_name=group.displayName)

    def add_user_to_group(self, user: ScimUser, group: ScimGroup) -> None:
        logger.info(
            "dry_run_add_user_to_group",
            user_name=user.userName,
            group=group.displayName,
        )

    def remove_user_from_group(self, user: ScimUser, group: ScimGroup) -> None:
        logger.info(
            "dry_run_remove_user_from_group",
            user_name=user.userName,
            group=group.displayName,
        )

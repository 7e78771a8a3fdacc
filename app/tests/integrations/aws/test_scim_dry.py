from unittest.mock import MagicMock

import pytest
import requests

from integrations.aws import scim
from integrations.aws.scim import ScimClient, ScimGroup, ScimUser
from integrations.aws.scim_dry import DryRunScimClient


@pytest.fixture
def scim_client():
    return MagicMock(spec=ScimClient)


class TestDryRunScimClient:
    def test_reads_delegate(self, scim_client):
        scim_client.get_users.return_value = {"a@x.com": "user"}
        scim_client.find_group_by_display_name.return_value = "group"
        dry = DryRunScimClient(scim_client)

        assert dry.get_users() == {"a@x.com": "user"}
        assert dry.find_group_by_display_name("Admins") == "group"
        scim_client.find_group_by_display_name.assert_called_once_with("Admins")

    def test_create_user_echoes_input(self, scim_client):
        user = ScimUser(userName="a@x.com")

        assert DryRunScimClient(scim_client).create_user(user) is user
        scim_client.create_user.assert_not_called()

    def test_create_group_gets_virtual_id(self, scim_client):
        group = DryRunScimClient(scim_client).create_group(
            ScimGroup(displayName="Admins")
        )

        assert group.id == "Admins-virtual"
        assert group.displayName == "Admins"
        scim_client.create_group.assert_not_called()

    def test_changes_are_not_sent(self, scim_client):
        dry = DryRunScimClient(scim_client)
        user = ScimUser(id="u-1", userName="a@x.com")
        group = ScimGroup(id="g-1", displayName="Admins")

        dry.update_user(user)
        dry.delete_user(user)
        dry.delete_group(group)
        dry.add_user_to_group(user, group)
        dry.remove_user_from_group(user, group)

        scim_client.update_user.assert_not_called()
        scim_client.delete_user.assert_not_called()
        scim_client.delete_group.assert_not_called()
        scim_client.add_user_to_group.assert_not_called()
        scim_client.remove_user_from_group.assert_not_called()


class TestGetScimClientDryRun:
    @pytest.fixture(autouse=True)
    def scim_settings(self, monkeypatch):
        monkeypatch.setattr(scim.settings.aws, "SCIM_ENDPOINT", "https://scim.example/v2")
        monkeypatch.setattr(scim.settings.aws, "SCIM_ACCESS_TOKEN", "token-123")

    def test_dry_run_setting_wraps_client(self, monkeypatch):
        monkeypatch.setattr(scim.settings.aws, "DRY_RUN", True)
        session = MagicMock(spec=requests.Session)

        client = scim.get_scim_client(session=session)

        assert isinstance(client, DryRunScimClient)
        created = client.create_user(ScimUser(userName="a@x.com"))
        client.add_user_to_group(
            ScimUser(id="u-1", userName="a@x.com"), ScimGroup(id="g-1", displayName="Admins")
        )
        assert created.userName == "a@x.com"
        session.request.assert_not_called()

    def test_explicit_dry_run_overrides_setting(self, monkeypatch):
        monkeypatch.setattr(scim.settings.aws, "DRY_RUN", True)

        assert isinstance(scim.get_scim_client(dry_run=False), ScimClient)

    def test_explicit_dry_run_without_setting(self, monkeypatch):
        monkeypatch.setattr(scim.settings.aws, "DRY_RUN", False)

        assert isinstance(scim.get_scim_client(dry_run=True), DryRunScimClient)

from unittest.mock import MagicMock

import pytest

from integrations.aws.identity_store_dry import DryRunIdentityStore

STORE_ID = "d-1234567890"


@pytest.fixture
def reader():
    reader = MagicMock()
    reader.identity_store_id = STORE_ID
    return reader


class TestDryRunWrites:
    def test_create_group_echoes_request(self, reader):
        store = DryRunIdentityStore(reader)

        response = store.create_group("Admins", "Administrators")

        assert response == {
            "GroupId": "Admins-virtual",
            "IdentityStoreId": STORE_ID,
            "DisplayName": "Admins",
            "Description": "Administrators",
        }
        reader.create_group.assert_not_called()

    def test_create_user_echoes_request(self, reader):
        store = DryRunIdentityStore(reader)

        response = store.create_user("jane@example.com", "Jane Doe", "Jane", "Doe")

        assert response["UserId"] == "jane@example.com-virtual"
        assert response["UserName"] == "jane@example.com"
        assert response["Name"] == {"GivenName": "Jane", "FamilyName": "Doe"}
        assert "Emails" not in response
        assert response["IdentityStoreId"] == STORE_ID
        reader.create_user.assert_not_called()

    def test_create_user_echoes_email(self, reader):
        store = DryRunIdentityStore(reader)

        response = store.create_user(
            "jane@example.com", "Jane Doe", "Jane", "Doe", email="jane@example.com"
        )

        assert response["Emails"] == [
            {"Value": "jane@example.com", "Type": "work", "Primary": True}
        ]
        assert response["DisplayName"] == "Jane Doe"

    def test_create_group_membership_echoes_request(self, reader):
        store = DryRunIdentityStore(reader)

        response = store.create_group_membership("g-1", "u-1")

        assert response == {
            "MembershipId": "g-1-u-1-virtual",
            "IdentityStoreId": STORE_ID,
            "GroupId": "g-1",
            "MemberId": {"UserId": "u-1"},
        }

    @pytest.mark.parametrize(
        "method,key",
        [
            ("delete_group", "GroupId"),
            ("delete_group_membership", "MembershipId"),
            ("delete_user", "UserId"),
        ],
    )
    def test_deletes_echo_identifier(self, reader, method, key):
        store = DryRunIdentityStore(reader)

        response = getattr(store, method)("id-1")

        assert response == {"IdentityStoreId": STORE_ID, key: "id-1"}
        getattr(reader, method).assert_not_called()


class TestDryRunReads:
    def test_is_member_in_groups_delegates(self, reader):
        reader.is_member_in_groups.return_value = True
        store = DryRunIdentityStore(reader)

        assert store.is_member_in_groups(["g-1"], "u-1") is True
        reader.is_member_in_groups.assert_called_once_with(["g-1"], "u-1")

    def test_get_group_membership_id_delegates(self, reader):
        reader.get_group_membership_id.return_value = "m-1"
        store = DryRunIdentityStore(reader)

        assert store.get_group_membership_id("g-1", "u-1") == "m-1"

    def test_list_operations_delegate(self, reader):
        reader.list_groups.return_value = ["g"]
        reader.list_users.return_value = ["u"]
        reader.list_group_members.return_value = ["u-1"]
        reader.list_paged.return_value = [1]
        store = DryRunIdentityStore(reader)
        convert = lambda r: r  # noqa: E731

        assert store.list_groups(convert) == ["g"]
        assert store.list_users(convert) == ["u"]
        assert store.list_group_members("g-1") == ["u-1"]
        assert store.list_paged("paginator", "Items", convert, "ListThings") == [1]
        reader.list_groups.assert_called_once_with(convert)
        reader.list_paged.assert_called_once_with(
            "paginator", "Items", convert, "ListThings"
        )

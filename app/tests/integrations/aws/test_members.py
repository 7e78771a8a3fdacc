import pytest

from infrastructure.diagnostics.errors import APIError, ContractViolationError, ErrorKind
from integrations.aws.members import (
    UnknownMemberId,
    UserMemberId,
    parse_member_id,
    resolve_member_id,
)


class TestParseMemberId:
    def test_user_variant(self):
        assert parse_member_id({"UserId": "u-1"}) == UserMemberId(user_id="u-1")

    def test_unknown_variant(self):
        member_id = parse_member_id({"SDK_UNKNOWN_MEMBER": {"name": "GroupId"}})

        assert isinstance(member_id, UnknownMemberId)
        assert member_id.tag == "SDK_UNKNOWN_MEMBER"

    @pytest.mark.parametrize("raw", [None, {}, {"UserId": None}])
    def test_missing_user_id(self, raw):
        assert isinstance(parse_member_id(raw), UnknownMemberId)


class TestResolveMemberId:
    def test_user_variant(self):
        assert resolve_member_id(UserMemberId("u-42")) == "u-42"

    def test_unknown_variant_is_a_contract_violation(self):
        member_id = UnknownMemberId(tag="GroupId")

        with pytest.raises(ContractViolationError) as exc_info:
            resolve_member_id(member_id)

        assert str(exc_info.value) == "expected a user id, got unknown type id"
        assert exc_info.value.kind == ErrorKind.CONTRACT_VIOLATION
        assert exc_info.value.value is member_id
        assert not isinstance(exc_info.value, APIError)

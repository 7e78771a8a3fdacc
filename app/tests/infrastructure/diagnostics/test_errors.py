from infrastructure.diagnostics.errors import (
    APIError,
    ContractViolationError,
    ErrorKind,
    Service,
)


class TestAPIError:
    def test_string_with_user_message(self):
        err = APIError(
            Service.IDENTITY_STORE,
            "CreateGroup",
            user_message="Identity Store resource not found",
        )

        assert (
            str(err)
            == "AWS Identity Store CreateGroup failed: Identity Store resource not found"
        )

    def test_string_without_user_message(self):
        err = APIError(
            Service.SCIM,
            "GetUsers",
            status_code=418,
            original_error=ValueError("teapot"),
        )

        assert str(err) == "AWS SSO SCIM GetUsers failed with status 418: teapot"

    def test_defaults(self):
        err = APIError(Service.WORKSPACE_DIRECTORY, "ListUsers")

        assert err.status_code == 0
        assert err.original_error is None
        assert err.suggestions == []
        assert err.kind == ErrorKind.UNKNOWN_CLIENT_ERROR

    def test_suggestions_are_copied(self):
        suggestions = ["one", "two"]

        err = APIError(Service.SCIM, "GetUsers", suggestions=suggestions)
        suggestions.append("three")

        assert err.suggestions == ["one", "two"]

    def test_is_an_exception(self):
        assert isinstance(APIError(Service.SCIM, "GetUsers"), Exception)


class TestContractViolationError:
    def test_kind_and_value(self):
        err = ContractViolationError("expected a user id", value={"GroupId": "g-1"})

        assert err.kind == ErrorKind.CONTRACT_VIOLATION
        assert err.value == {"GroupId": "g-1"}
        assert str(err) == "expected a user id"

    def test_is_not_an_api_error(self):
        assert not isinstance(ContractViolationError("bad"), APIError)

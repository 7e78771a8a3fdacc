from unittest.mock import Mock

from botocore.exceptions import ClientError
from googleapiclient.errors import HttpError

from infrastructure.diagnostics.faults import (
    AWSServiceFault,
    GoogleAPIFault,
    iter_error_chain,
    parse_aws_service_fault,
    parse_google_api_fault,
)


class TestIterErrorChain:
    def test_follows_cause_then_context(self):
        root = ValueError("root")
        middle = KeyError("middle")
        middle.__context__ = root
        top = RuntimeError("top")
        top.__cause__ = middle

        assert list(iter_error_chain(top)) == [top, middle, root]

    def test_stops_on_cycles(self):
        first = RuntimeError("first")
        second = RuntimeError("second")
        first.__cause__ = second
        second.__cause__ = first

        assert list(iter_error_chain(first)) == [first, second]

    def test_none_yields_nothing(self):
        assert list(iter_error_chain(None)) == []


class TestParseGoogleApiFault:
    def test_http_error(self):
        mock_resp = Mock()
        mock_resp.status = "404"
        exc = Mock(spec=HttpError)
        exc.resp = mock_resp
        exc.reason = "Resource Not Found: userKey"
        exc.__cause__ = None
        exc.__context__ = None

        assert parse_google_api_fault(exc) == GoogleAPIFault(
            code=404, message="Resource Not Found: userKey"
        )

    def test_http_error_without_reason(self):
        mock_resp = Mock()
        mock_resp.status = 500
        exc = Mock(spec=HttpError)
        exc.resp = mock_resp
        exc.reason = None
        exc.__cause__ = None
        exc.__context__ = None

        assert parse_google_api_fault(exc) == GoogleAPIFault(code=500, message="")

    def test_boolean_code_is_not_a_status(self):
        class Odd(Exception):
            code = True
            message = "odd"

        assert parse_google_api_fault(Odd()) is None

    def test_plain_exception(self):
        assert parse_google_api_fault(TimeoutError("timed out")) is None


class TestParseAwsServiceFault:
    def test_client_error(self):
        exc = ClientError(
            {"Error": {"Code": "ConflictException", "Message": "exists"}},
            "CreateGroup",
        )

        assert parse_aws_service_fault(exc) == AWSServiceFault(
            error_code="ConflictException", error_message="exists"
        )

    def test_client_error_without_code(self):
        exc = ClientError({"Error": {}}, "CreateGroup")

        fault = parse_aws_service_fault(exc)

        assert fault.error_code == "Unknown"

    def test_cause_chain(self):
        cause = ClientError(
            {"Error": {"Code": "ThrottlingException", "Message": "slow"}}, "ListUsers"
        )
        wrapper = RuntimeError("listing")
        wrapper.__cause__ = cause

        assert parse_aws_service_fault(wrapper).error_code == "ThrottlingException"

    def test_plain_exception(self):
        assert parse_aws_service_fault(ValueError("nope")) is None

import asyncio
import json

import httpx
import pytest

from x_api_explorer.auth.resolver import AuthError, BearerAuth, OAuth1Auth, OAuth1Credentials
from x_api_explorer.execution.adapter import (
    UNEXPECTED_ERROR,
    ExecutionAdapter,
    Failure,
    Success,
    normalize_fault,
    pretty_body,
    transport_request,
)
from x_api_explorer.execution.transport import (
    HttpxTransport,
    TransportFault,
    TransportRequest,
    TransportResponse,
    sign_oauth1,
)
from x_api_explorer.request.compiler import RequestSpec

BEARER = BearerAuth(token="AAAA")
KEYS = OAuth1Credentials(api_key="k", api_secret="s", access_token="t", access_secret="ts")
OAUTH1 = OAuth1Auth(credentials=KEYS)

GET_SPEC = RequestSpec(
    method="GET",
    url="https://api.twitter.com/2/tweets/42",
    headers={"Authorization": "Bearer AAAA"},
)
POST_SPEC = RequestSpec(
    method="POST",
    url="https://api.twitter.com/2/tweets",
    headers={"Content-Type": "application/json"},
    body={"text": "hello"},
)


class StatusError(Exception):
    def __init__(self, status, message, body=None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.body = body


class StubTransport:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    async def execute(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


class TestPrettyBody:
    def test_json_is_indented(self):
        assert pretty_body('{"a":1}') == '{\n  "a": 1\n}'

    def test_non_ascii_kept(self):
        assert pretty_body('{"text":"héllo"}') == '{\n  "text": "héllo"\n}'

    def test_plain_text_verbatim(self):
        assert pretty_body("Not Found") == "Not Found"

    def test_empty(self):
        assert pretty_body("") == ""
        assert pretty_body(None) is None


class TestNormalizeFault:
    def test_transport_fault(self):
        failure = normalize_fault(TransportFault("Request failed: boom", status=0, body='{"e":1}'))
        assert failure == Failure(status=0, message="Request failed: boom", body='{\n  "e": 1\n}')

    def test_string(self):
        assert normalize_fault("connection reset") == Failure(status=0, message="connection reset")

    def test_mapping(self):
        failure = normalize_fault({"status": 503, "message": "down", "body": {"title": "x"}, "headers": {"a": "b"}})
        assert failure.status == 503
        assert failure.message == "down"
        assert failure.body == '{\n  "title": "x"\n}'
        assert failure.headers == {"a": "b"}

    def test_mapping_with_bad_status(self):
        failure = normalize_fault({"status": "oops"})
        assert failure.status == 0
        assert failure.message == UNEXPECTED_ERROR

    def test_unknown_shape(self):
        assert normalize_fault(RuntimeError()) == Failure(status=0, message=UNEXPECTED_ERROR)
        assert normalize_fault(None) == Failure(status=0, message=UNEXPECTED_ERROR)
        assert normalize_fault(TransportFault()) == Failure(status=0, message=UNEXPECTED_ERROR)

    def test_exception_message_is_kept(self):
        failure = normalize_fault(RuntimeError("connection reset by peer"))
        assert failure == Failure(status=0, message="connection reset by peer")

    def test_status_bearing_exception(self):
        failure = normalize_fault(StatusError(503, "Service Unavailable", body='{"title":"down"}'))
        assert failure.status == 503
        assert failure.message == "Service Unavailable"
        assert failure.body == '{\n  "title": "down"\n}'

    def test_status_without_message(self):
        failure = normalize_fault(StatusError(502, ""))
        assert failure == Failure(status=502, message=UNEXPECTED_ERROR)


class TestTransportRequest:
    def test_bearer(self):
        request = transport_request(GET_SPEC, BEARER)
        assert request.auth_type == "bearer"
        assert request.bearer_token == "AAAA"
        assert request.oauth1_keys is None

    def test_oauth1(self):
        request = transport_request(POST_SPEC, OAUTH1)
        assert request.auth_type == "oauth1a"
        assert request.oauth1_keys == KEYS
        assert request.body == {"text": "hello"}


class TestExecutionAdapter:
    def test_success(self):
        transport = StubTransport(TransportResponse(status=200, headers={"x": "1"}, body='{"data":{"id":"42"}}'))
        outcome = asyncio.run(ExecutionAdapter(transport).execute(GET_SPEC, BEARER))

        assert isinstance(outcome, Success)
        assert outcome.status == 200
        assert json.loads(outcome.body) == {"data": {"id": "42"}}
        assert outcome.body.startswith("{\n  ")
        assert transport.requests[0].url == GET_SPEC.url

    def test_no_content(self):
        transport = StubTransport(TransportResponse(status=204))
        outcome = asyncio.run(ExecutionAdapter(transport).execute(GET_SPEC, BEARER))
        assert outcome == Success(status=204, body="")

    def test_error_status_becomes_failure(self):
        transport = StubTransport(TransportResponse(status=404, body='{"title":"Not Found Error"}'))
        outcome = asyncio.run(ExecutionAdapter(transport).execute(GET_SPEC, BEARER))

        assert isinstance(outcome, Failure)
        assert outcome.status == 404
        assert outcome.message == "API request failed with status 404"
        assert outcome.body == '{\n  "title": "Not Found Error"\n}'

    def test_transport_exception_becomes_failure(self):
        transport = StubTransport(error=TransportFault("Request failed: timed out", status=0))
        outcome = asyncio.run(ExecutionAdapter(transport).execute(GET_SPEC, BEARER))
        assert outcome == Failure(status=0, message="Request failed: timed out")

    def test_unexpected_exception_becomes_failure(self):
        transport = StubTransport(error=RuntimeError())
        outcome = asyncio.run(ExecutionAdapter(transport).execute(GET_SPEC, BEARER))
        assert outcome == Failure(status=0, message=UNEXPECTED_ERROR)

    def test_status_bearing_exception_keeps_status(self):
        transport = StubTransport(error=StatusError(503, "Service Unavailable"))
        outcome = asyncio.run(ExecutionAdapter(transport).execute(GET_SPEC, BEARER))
        assert outcome == Failure(status=503, message="Service Unavailable")


class TestHttpxTransport:
    def test_bearer_request(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": []})

        transport = HttpxTransport(transport=httpx.MockTransport(handler))
        response = asyncio.run(transport.execute(transport_request(GET_SPEC, BEARER)))

        assert response.status == 200
        assert json.loads(response.body) == {"data": []}
        assert seen[0].method == "GET"
        assert str(seen[0].url) == GET_SPEC.url
        assert seen[0].headers["Authorization"] == "Bearer AAAA"

    def test_error_status_is_returned(self):
        transport = HttpxTransport(transport=httpx.MockTransport(lambda request: httpx.Response(429, text="slow down")))
        response = asyncio.run(transport.execute(transport_request(GET_SPEC, BEARER)))
        assert response.status == 429
        assert response.body == "slow down"

    def test_oauth1_request_is_signed(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"data": {"id": "1"}})

        transport = HttpxTransport(transport=httpx.MockTransport(handler))
        response = asyncio.run(transport.execute(transport_request(POST_SPEC, OAUTH1)))

        assert response.status == 201
        sent = seen[0]
        assert sent.headers["Authorization"].startswith("OAuth ")
        assert 'oauth_consumer_key="k"' in sent.headers["Authorization"]
        assert sent.headers["Content-Type"] == "application/json"
        assert json.loads(sent.content) == {"text": "hello"}

    def test_network_error_raises_fault(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = HttpxTransport(transport=httpx.MockTransport(handler))
        with pytest.raises(TransportFault) as exc_info:
            asyncio.run(transport.execute(transport_request(GET_SPEC, BEARER)))
        assert exc_info.value.status == 0
        assert exc_info.value.message.startswith("Request failed:")

    def test_network_error_through_adapter(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        adapter = ExecutionAdapter(HttpxTransport(transport=httpx.MockTransport(handler)))
        outcome = asyncio.run(adapter.execute(GET_SPEC, BEARER))
        assert outcome.status == 0
        assert outcome.message == "Request failed: connection refused"


class TestSignOAuth1:
    def test_missing_keys(self):
        request = TransportRequest(method="POST", url="https://api.twitter.com/2/tweets", auth_type="oauth1a")
        with pytest.raises(TransportFault):
            sign_oauth1(request)

    def test_keeps_existing_headers(self):
        request = transport_request(POST_SPEC, OAUTH1)
        headers = sign_oauth1(request)
        assert headers["Content-Type"] == "application/json"
        assert 'oauth_signature_method="HMAC-SHA1"' in headers["Authorization"]

    def test_error_auth_has_no_credentials(self):
        request = transport_request(POST_SPEC, AuthError(auth_type="oauth1a", error="Missing OAuth 1.0a keys"))
        assert request.oauth1_keys is None
        assert request.bearer_token is None

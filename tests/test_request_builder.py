"""
Tests for request_builder.py
Logic testing: Decision/Branch, Boundary Value, Path coverage
"""
import base64
import io
import json
from datetime import date

import pytest

from billwerk_client.core.request_builder import (
    CONTENT_TYPE_JSON,
    CONTEXT_EXTENSION,
    USER_AGENT,
    RequestBuilder,
    encode_query,
    format_param_value,
)
from billwerk_client.errors import ConstructionError
from billwerk_client.models import Plan, PlanState
from billwerk_client.types import RequestContext


@pytest.fixture
def builder():
    return RequestBuilder(RequestContext.background()).with_base_url("https://api.example.com/v1")


class TestFormatParamValue:
    """Tests for format_param_value function."""

    # Decision: booleans render lowercase
    def test_bool(self):
        assert format_param_value(True) == "true"
        assert format_param_value(False) == "false"

    # Decision: enums render their value
    def test_enum(self):
        assert format_param_value(PlanState.ACTIVE) == "active"

    # Decision: dates render ISO 8601
    def test_date(self):
        assert format_param_value(date(2024, 3, 1)) == "2024-03-01"

    # Path: everything else through str()
    def test_int(self):
        assert format_param_value(100) == "100"


class TestEncodeQuery:
    """Tests for encode_query function."""

    # Boundary: empty multimap
    def test_empty(self):
        assert encode_query({}) == ""

    # Path: keys sorted, repeated values in insertion order
    def test_sorted_keys_and_repeated_values(self):
        query = encode_query({"size": ["20"], "amount": ["200", "100"]})
        assert query == "amount=200&amount=100&size=20"

    # Path: reserved characters escaped, space as plus
    def test_escaping(self):
        assert encode_query({"name": ["gold plan&co"]}) == "name=gold+plan%26co"


class TestQueryParameters:
    """Tests for with_param / add_param."""

    # Decision: with_param overwrites
    def test_with_param_overwrites(self, builder):
        builder.with_param("amount", 100).with_param("amount", 200)
        assert builder.params == {"amount": ["200"]}

    # Decision: add_param appends
    def test_add_param_appends(self, builder):
        builder.add_param("amount", 100).add_param("amount", 200)
        assert builder.params == {"amount": ["100", "200"]}

    # Path: with_param after add_param replaces the list
    def test_with_param_after_add_param(self, builder):
        builder.add_param("amount", 100).add_param("amount", 200).with_param("amount", 300)
        assert builder.params == {"amount": ["300"]}

    # Path: multi-valued params serialize as repeated pairs
    def test_repeated_pairs_on_request(self, builder):
        request = builder.with_endpoint("/list/plan").add_param("amount", 100).add_param("amount", 200).get()
        assert request.url.query == b"amount=100&amount=200"

    # Path: params replace a query string already in the endpoint
    def test_existing_query_replaced(self, builder):
        request = builder.with_endpoint("/list/plan?size=5").with_param("size", 10).get()
        assert request.url.params.get_list("size") == ["10"]

    # Boundary: no params leaves no query string
    def test_no_params(self, builder):
        request = builder.with_endpoint("/plan").get()
        assert str(request.url) == "https://api.example.com/v1/plan"

    # State: params property returns a copy
    def test_params_copy(self, builder):
        builder.add_param("a", 1)
        builder.params["a"].append("2")
        assert builder.params == {"a": ["1"]}


class TestHeaders:
    """Tests for headers and authentication."""

    # Path: Basic auth header from API key and empty password
    def test_basic_auth(self, builder):
        builder.with_basic_auth("priv_123", "")
        expected = "Basic " + base64.b64encode(b"priv_123:").decode()
        assert builder.headers["Authorization"] == expected

    # Decision: header keys are case-insensitive, last write wins
    def test_header_overwrite(self, builder):
        builder.with_header("X-Trace", "one").with_header("x-trace", "two")
        assert builder.headers["X-Trace"] == "two"
        assert len(builder.headers.get_list("x-trace")) == 1

    # Boundary: User-Agent cannot be overridden
    def test_user_agent_fixed(self, builder):
        request = builder.with_endpoint("/plan").with_header("User-Agent", "custom/1.0").get()
        assert request.headers["User-Agent"] == USER_AGENT
        assert USER_AGENT.startswith("billwerk-client/")

    def test_content_type_json(self, builder):
        builder.with_content_type_json()
        assert builder.headers["Content-Type"] == CONTENT_TYPE_JSON


class TestUrl:
    """Tests for base URL and endpoint joining."""

    # Path: verbatim concatenation
    def test_url_join(self, builder):
        builder.with_endpoint("/plan/gold/current")
        assert builder.url == "https://api.example.com/v1/plan/gold/current"

    # Path: request target is exactly base + endpoint
    def test_request_target(self, builder):
        request = builder.with_endpoint("/plan/gold-plan").get()
        assert str(request.url) == "https://api.example.com/v1/plan/gold-plan"

    # Boundary: no slash normalization
    def test_double_slash_kept(self):
        builder = RequestBuilder(RequestContext.background())
        builder.with_base_url("https://api.example.com/v1/").with_endpoint("/plan")
        assert builder.url == "https://api.example.com/v1//plan"
        request = builder.get()
        assert "/v1//plan" in str(request.url)

    # Path: with_base_url replaces the earlier base URL
    def test_base_url_override(self, builder):
        builder.with_base_url("https://sandbox.example.com").with_endpoint("/plan")
        assert builder.url == "https://sandbox.example.com/plan"


class TestBody:
    """Tests for with_body / with_json_body."""

    # Path: JSON body from a model skips unset optional fields
    def test_json_body_model(self, builder):
        request = builder.with_endpoint("/plan").with_json_body(Plan(name="gold", handle="gold-plan", amount=100)).post()
        assert request.headers["Content-Type"] == CONTENT_TYPE_JSON
        body = json.loads(request.content)
        assert body == {"name": "gold", "handle": "gold-plan", "amount": 100, "schedule_type": None}

    # Path: JSON body from plain data
    def test_json_body_dict(self, builder):
        request = builder.with_endpoint("/plan/gold/metadata").with_json_body({"tier": 1}).put()
        assert json.loads(request.content) == {"tier": 1}

    # Error Path: unencodable value fails at materialization
    def test_json_body_unencodable(self, builder):
        builder.with_endpoint("/plan").with_json_body({"value": object()})
        with pytest.raises(ConstructionError, match="failed to encode JSON body") as exc_info:
            builder.post()
        assert isinstance(exc_info.value.__cause__, TypeError)

    # State: a later body clears an earlier encoding failure
    def test_json_body_replaced(self, builder):
        builder.with_endpoint("/plan").with_json_body(object()).with_json_body({"ok": True})
        assert json.loads(builder.post().content) == {"ok": True}

    # Decision: str body is sent as UTF-8
    def test_raw_str_body(self, builder):
        request = builder.with_endpoint("/plan").with_body("æøå").post()
        assert request.content == "æøå".encode("utf-8")

    # Decision: file-like body is read once
    def test_file_body(self, builder):
        request = builder.with_endpoint("/plan").with_body(io.BytesIO(b'{"a": 1}')).post()
        assert request.content == b'{"a": 1}'

    # Boundary: with_body leaves Content-Type unset
    def test_raw_body_no_content_type(self, builder):
        request = builder.with_endpoint("/plan").with_body(b"x").post()
        assert "Content-Type" not in builder.headers
        assert request.content == b"x"


class TestMaterialization:
    """Tests for the terminal verbs."""

    @pytest.mark.parametrize("verb,method", [
        ("get", "GET"),
        ("post", "POST"),
        ("put", "PUT"),
        ("delete", "DELETE"),
    ])
    def test_verbs(self, builder, verb, method):
        request = getattr(builder.with_endpoint("/plan/gold"), verb)()
        assert request.method == method
        assert builder.method == method

    # State: builder is consumed by its first verb
    def test_second_verb_fails(self, builder):
        builder.with_endpoint("/plan").get()
        with pytest.raises(ConstructionError, match="already been materialized"):
            builder.get()

    # Error Path: missing context
    def test_missing_context(self):
        builder = RequestBuilder(None).with_base_url("https://api.example.com").with_endpoint("/plan")
        with pytest.raises(ConstructionError, match="RequestContext is required"):
            builder.get()

    # Error Path: unsupported scheme
    def test_invalid_scheme(self):
        builder = RequestBuilder(RequestContext.background()).with_base_url("ftp://api.example.com")
        with pytest.raises(ConstructionError, match="invalid request URL"):
            builder.with_endpoint("/plan").get()

    # Error Path: no base URL
    def test_missing_base_url(self):
        builder = RequestBuilder(RequestContext.background()).with_endpoint("/plan")
        with pytest.raises(ConstructionError):
            builder.get()

    # Path: context travels on the request
    def test_context_extension(self):
        ctx = RequestContext.background()
        request = RequestBuilder(ctx).with_base_url("https://api.example.com").get()
        assert request.extensions[CONTEXT_EXTENSION] is ctx
        assert "timeout" not in request.extensions

    # Path: deadline becomes the request timeout
    def test_deadline_timeout_extension(self):
        ctx = RequestContext(timeout=5)
        request = RequestBuilder(ctx).with_base_url("https://api.example.com").get()
        timeout = request.extensions["timeout"]
        assert 0 < timeout["read"] <= 5
        assert timeout["connect"] == timeout["read"]

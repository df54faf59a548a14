# ruff: noqa: S101
import base64

from courier.auth import (
    AuthKind,
    BasicAuth,
    BearerToken,
    NoAuth,
    authorization_header,
    kind_of,
    switch_auth,
)


def test_no_auth_has_no_header():
    assert authorization_header(NoAuth()) is None


def test_bearer_header_and_empty_token():
    assert authorization_header(BearerToken("abc")) == "Bearer abc"
    assert authorization_header(BearerToken("")) is None


def test_basic_header_encodes_user_and_password():
    expected = base64.b64encode(b"alice:s3cret").decode()
    assert authorization_header(BasicAuth("alice", "s3cret")) == f"Basic {expected}"


def test_basic_header_omitted_only_when_both_empty():
    assert authorization_header(BasicAuth("", "")) is None
    assert authorization_header(BasicAuth("", "pw")) == "Basic " + base64.b64encode(b":pw").decode()
    assert authorization_header(BasicAuth("user", "")) == "Basic " + base64.b64encode(b"user:").decode()


def test_switching_kind_discards_previous_values():
    current = BearerToken("secret")
    switched = switch_auth(current, AuthKind.BASIC)
    assert switched == BasicAuth()
    assert switch_auth(switched, AuthKind.BEARER) == BearerToken()


def test_switching_to_same_kind_keeps_values():
    current = BasicAuth("u", "p")
    assert switch_auth(current, AuthKind.BASIC) is current


def test_kind_of_each_variant():
    assert kind_of(NoAuth()) is AuthKind.NONE
    assert kind_of(BearerToken("t")) is AuthKind.BEARER
    assert kind_of(BasicAuth()) is AuthKind.BASIC
    assert AuthKind.BEARER.label == "Bearer Token"

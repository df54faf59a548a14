from __future__ import annotations

import base64
from dataclasses import dataclass
from enum import Enum


class AuthKind(str, Enum):
    NONE = "none"
    BEARER = "bearer"
    BASIC = "basic"

    @property
    def label(self) -> str:
        return {
            AuthKind.NONE: "No Auth",
            AuthKind.BEARER: "Bearer Token",
            AuthKind.BASIC: "Basic Auth",
        }[self]


@dataclass(frozen=True)
class NoAuth:
    pass


@dataclass(frozen=True)
class BearerToken:
    token: str = ""


@dataclass(frozen=True)
class BasicAuth:
    user: str = ""
    password: str = ""


AuthCredential = NoAuth | BearerToken | BasicAuth


def kind_of(auth: AuthCredential) -> AuthKind:
    match auth:
        case NoAuth():
            return AuthKind.NONE
        case BearerToken():
            return AuthKind.BEARER
        case BasicAuth():
            return AuthKind.BASIC
    raise TypeError(f"Unknown credential: {auth!r}")


def blank_credential(kind: AuthKind) -> AuthCredential:
    match kind:
        case AuthKind.NONE:
            return NoAuth()
        case AuthKind.BEARER:
            return BearerToken()
        case AuthKind.BASIC:
            return BasicAuth()
    raise ValueError(f"Unknown auth kind: {kind!r}")


def switch_auth(current: AuthCredential, kind: AuthKind) -> AuthCredential:
    """Return the credential for ``kind``; values of a different kind are dropped."""
    if kind_of(current) is kind:
        return current
    return blank_credential(kind)


def authorization_header(auth: AuthCredential) -> str | None:
    """Project a credential onto an ``Authorization`` header value, if any."""
    match auth:
        case NoAuth():
            return None
        case BearerToken(token=token):
            return f"Bearer {token}" if token else None
        case BasicAuth(user=user, password=password):
            if not user and not password:
                return None
            encoded = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
            return f"Basic {encoded}"
    raise TypeError(f"Unknown credential: {auth!r}")

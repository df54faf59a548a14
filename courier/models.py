from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum

from .errors import CompositionError

Pair = tuple[str, str]


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, value: str) -> HttpMethod:
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise CompositionError(f"Unsupported HTTP method: {value!r}") from None


class ContentType(str, Enum):
    JSON = "application/json"
    TEXT = "text/plain"
    HTML = "text/html"
    XML = "application/xml"

    @property
    def label(self) -> str:
        return "Text" if self is ContentType.TEXT else self.name


@dataclass(frozen=True)
class RequestDescriptor:
    method: str
    url: str
    headers: tuple[Pair, ...] = ()
    body: str | None = None


@dataclass(frozen=True)
class ResponseRecord:
    source_url: str
    source_method: str
    status: int
    headers: tuple[Pair, ...]
    body: str
    duration: timedelta
    size: int
    network_duration: timedelta = timedelta(0)


@dataclass(frozen=True)
class RequestFailure:
    message: str


@dataclass(frozen=True)
class ResponseMetadata:
    status: int | None = None
    content_type: str | None = None
    duration: timedelta | None = None
    size: int | None = None


@dataclass
class EnvironmentBinding:
    id: int
    name: str
    variables: list[Pair] = field(default_factory=list)
    default_base_url: str | None = None

    def __str__(self) -> str:
        return self.name


@dataclass
class RequestDraft:
    """Last-used request fields restored on startup. Credentials are never stored."""

    url: str
    method: str = "GET"
    content_type: str = ContentType.JSON.value
    body: str = ""
    headers: list[Pair] = field(default_factory=list)
    params: list[Pair] = field(default_factory=list)

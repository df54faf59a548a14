"""Courier: compose, send and inspect HTTP requests from the terminal."""

from .auth import AuthCredential, AuthKind, BasicAuth, BearerToken, NoAuth
from .composer import compose
from .config import DEFAULT_DRAFT, DEFAULT_TIMEOUT, DEFAULT_URL
from .database import EnvironmentStore
from .errors import CompositionError, CourierError, PersistenceError
from .http_client import RequestExecutor
from .keyvalue import KeyValueEntry, KeyValueSet
from .lifecycle import Error, Idle, Loading, RequestLifecycle, Success
from .models import (
    ContentType,
    EnvironmentBinding,
    HttpMethod,
    RequestDescriptor,
    RequestDraft,
    RequestFailure,
    ResponseMetadata,
    ResponseRecord,
)
from .parsing import format_response
from .session import RequestSlot, Workbench

__all__ = [
    "AuthCredential",
    "AuthKind",
    "BasicAuth",
    "BearerToken",
    "NoAuth",
    "compose",
    "DEFAULT_DRAFT",
    "DEFAULT_TIMEOUT",
    "DEFAULT_URL",
    "EnvironmentStore",
    "CompositionError",
    "CourierError",
    "PersistenceError",
    "RequestExecutor",
    "KeyValueEntry",
    "KeyValueSet",
    "Error",
    "Idle",
    "Loading",
    "RequestLifecycle",
    "Success",
    "ContentType",
    "EnvironmentBinding",
    "HttpMethod",
    "RequestDescriptor",
    "RequestDraft",
    "RequestFailure",
    "ResponseMetadata",
    "ResponseRecord",
    "format_response",
    "RequestSlot",
    "Workbench",
]

__version__ = "0.1.0"

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import quote

from .auth import AuthCredential, NoAuth, authorization_header
from .environment import Substitution
from .keyvalue import KeyValueSet
from .models import ContentType, EnvironmentBinding, HttpMethod, Pair, RequestDescriptor

AUTHORIZATION = "Authorization"
CONTENT_TYPE = "Content-Type"


def encode_query(params: Iterable[Pair]) -> str:
    """Percent-encode pairs with RFC 3986 rules: a space becomes ``%20``, ``+`` becomes ``%2B``."""
    return "&".join(f"{quote(key, safe='')}={quote(value, safe='')}" for key, value in params)


def append_query(url: str, query: str) -> str:
    if not query:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"


def compose(
    url_input: str,
    method: HttpMethod | str,
    params: KeyValueSet,
    headers: KeyValueSet,
    body: str | None = None,
    content_type: ContentType | str = ContentType.JSON,
    auth: AuthCredential | None = None,
    environment: EnvironmentBinding | None = None,
) -> RequestDescriptor:
    """Build the request descriptor for the current editor state.

    Never fails: the method is passed through as given and an empty URL is left
    for the executor to reject.
    """
    substitute = Substitution(environment.variables if environment else ())

    query_pairs = params.active_pairs()
    if environment is not None:
        query_pairs = [(substitute(key), substitute(value)) for key, value in query_pairs]
    url = append_query(url_input, encode_query(query_pairs))

    header_pairs = headers.active_pairs()
    derived = authorization_header(auth or NoAuth())
    if derived is not None:
        header_pairs = [(name, value) for name, value in header_pairs if name.lower() != AUTHORIZATION.lower()]
        header_pairs.append((AUTHORIZATION, derived))

    payload = body or None
    if payload is not None:
        header_pairs.append((CONTENT_TYPE, ContentType(content_type).value))

    if environment is not None:
        url = substitute(url)
        header_pairs = [(name, substitute(value)) for name, value in header_pairs]
        if payload is not None:
            payload = substitute(payload)

    method_name = method.value if isinstance(method, HttpMethod) else method
    return RequestDescriptor(method=method_name, url=url, headers=tuple(header_pairs), body=payload)

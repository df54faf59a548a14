import json
from collections.abc import Iterable

from .models import Pair, ResponseMetadata, ResponseRecord

UNKNOWN_CONTENT_TYPE = "unknown"
TRAILER_RULE = "-" * 20


def parse_env_lines(raw: str) -> list[Pair]:
    """Parse ``KEY=VALUE`` lines; blank lines, ``#`` comments and lines without ``=`` are skipped."""
    pairs: list[Pair] = []
    for line in raw.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        pairs.append((key.strip(), value.strip()))
    return pairs


def content_type_of(headers: Iterable[Pair]) -> str:
    for name, value in headers:
        if name.lower() == "content-type":
            return value
    return UNKNOWN_CONTENT_TYPE


def pretty_body(body: str, content_type: str) -> str:
    if "application/json" not in content_type.lower():
        return body
    try:
        parsed = json.loads(body)
    except ValueError:
        return body
    return json.dumps(parsed, indent=2, ensure_ascii=False)


def format_response(record: ResponseRecord) -> str:
    body = pretty_body(record.body, content_type_of(record.headers))
    if record.headers:
        headers = "\n".join(f"  {name}: {value}" for name, value in record.headers)
    else:
        headers = "  (none)"
    return (
        f"Headers:\n{headers}\n\n"
        f"Body:\n{body}\n\n"
        f"{TRAILER_RULE}\n"
        f"URL: {record.source_url}\n"
        f"Method: {record.source_method}"
    )


def response_metadata(record: ResponseRecord) -> ResponseMetadata:
    return ResponseMetadata(
        status=record.status,
        content_type=content_type_of(record.headers),
        duration=record.duration,
        size=record.size,
    )


def describe_metadata(meta: ResponseMetadata) -> str:
    status = str(meta.status) if meta.status is not None else "N/A"
    content_type = meta.content_type or "N/A"
    elapsed = f"{int(meta.duration.total_seconds() * 1000)} ms" if meta.duration is not None else "N/A"
    size = f"{meta.size} B" if meta.size is not None else "N/A"
    return f"Status: {status} | Content-Type: {content_type} | Time: {elapsed} | Size: {size}"

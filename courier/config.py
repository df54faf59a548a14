from .models import ContentType, HttpMethod, RequestDraft

DEFAULT_URL = "https://jsonplaceholder.typicode.com/todos/1"
DEFAULT_TIMEOUT = 20.0
DEFAULT_METHOD = HttpMethod.GET

METHODS = [(method.value, method.value) for method in HttpMethod]
CONTENT_TYPES = [(content_type.label, content_type.value) for content_type in ContentType]

DEFAULT_DRAFT = RequestDraft(
    url=DEFAULT_URL,
    method=DEFAULT_METHOD.value,
    content_type=ContentType.JSON.value,
)

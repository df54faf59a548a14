from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .auth import AuthCredential, AuthKind, NoAuth, switch_auth
from .composer import compose
from .config import DEFAULT_DRAFT
from .database import EnvironmentStore
from .errors import CompositionError, PersistenceError
from .http_client import RequestExecutor
from .keyvalue import KeyValueSet
from .lifecycle import RequestLifecycle
from .models import ContentType, EnvironmentBinding, HttpMethod, RequestDescriptor, RequestDraft

logger = logging.getLogger(__name__)


def _editor_rows(pairs: list[tuple[str, str]]) -> KeyValueSet:
    rows = KeyValueSet(pairs)
    if not len(rows):
        rows.add()
    return rows


@dataclass
class RequestSlot:
    """One independent request session (a tab in the front-end)."""

    id: int
    url: str = DEFAULT_DRAFT.url
    method: str = DEFAULT_DRAFT.method
    params: KeyValueSet = field(default_factory=lambda: _editor_rows([]))
    headers: KeyValueSet = field(default_factory=lambda: _editor_rows([]))
    body: str = ""
    content_type: ContentType = ContentType.JSON
    auth: AuthCredential = field(default_factory=NoAuth)
    lifecycle: RequestLifecycle = field(default_factory=RequestLifecycle)

    @classmethod
    def from_draft(cls, slot_id: int, draft: RequestDraft) -> RequestSlot:
        try:
            content_type = ContentType(draft.content_type)
        except ValueError:
            content_type = ContentType.JSON
        try:
            method = HttpMethod.parse(draft.method).value
        except CompositionError:
            logger.debug("Ignoring unsupported method %r in saved draft", draft.method)
            method = DEFAULT_DRAFT.method
        return cls(
            id=slot_id,
            url=draft.url,
            method=method,
            params=_editor_rows(draft.params),
            headers=_editor_rows(draft.headers),
            body=draft.body,
            content_type=content_type,
        )

    def to_draft(self) -> RequestDraft:
        return RequestDraft(
            url=self.url,
            method=self.method,
            content_type=self.content_type.value,
            body=self.body,
            headers=self.headers.pairs(),
            params=self.params.pairs(),
        )

    def switch_auth(self, kind: AuthKind) -> None:
        self.auth = switch_auth(self.auth, kind)

    def compose(self, environment: EnvironmentBinding | None = None) -> RequestDescriptor:
        return compose(
            self.url,
            self.method,
            self.params,
            self.headers,
            body=self.body,
            content_type=self.content_type,
            auth=self.auth,
            environment=environment,
        )

    async def submit(self, executor: RequestExecutor, environment: EnvironmentBinding | None = None) -> bool:
        """Compose, send and record the outcome.

        Returns ``False`` when a newer submission on this slot started while
        this one was in flight; its outcome is then dropped.
        """
        descriptor = self.compose(environment)
        generation = self.lifecycle.begin()
        outcome = await executor.execute(descriptor)
        return self.lifecycle.resolve(generation, outcome)


class Workbench:
    """Request slots plus the environments they can be bound to."""

    def __init__(self, executor: RequestExecutor, store: EnvironmentStore | None = None) -> None:
        self.executor = executor
        self.store = store
        self.slots: dict[int, RequestSlot] = {}
        self.environments: list[EnvironmentBinding] = []
        self.active_environment: EnvironmentBinding | None = None
        self._next_slot_id = 0

    def open_slot(self, draft: RequestDraft | None = None) -> RequestSlot:
        slot = RequestSlot.from_draft(self._next_slot_id, draft or DEFAULT_DRAFT)
        base_url = self.active_environment.default_base_url if self.active_environment else None
        if base_url:
            slot.url = base_url
        self.slots[slot.id] = slot
        self._next_slot_id += 1
        return slot

    def close_slot(self, slot_id: int) -> None:
        if len(self.slots) > 1:
            self.slots.pop(slot_id, None)

    def slot(self, slot_id: int) -> RequestSlot:
        return self.slots[slot_id]

    async def submit(self, slot_id: int) -> bool:
        slot = self.slots.get(slot_id)
        if slot is None:
            logger.debug("Ignoring submit for closed slot %s", slot_id)
            return False
        return await slot.submit(self.executor, self.active_environment)

    def activate_environment(self, environment_id: int | None) -> EnvironmentBinding | None:
        self.active_environment = self._find(environment_id)
        return self.active_environment

    def load_environments(self) -> list[EnvironmentBinding]:
        self.environments = self._require_store().list_all()
        if self.active_environment is not None:
            self.active_environment = self._find(self.active_environment.id)
        return self.environments

    def create_environment(self, name: str) -> EnvironmentBinding:
        binding = self._require_store().create(name)
        self.environments = [*self.environments, binding]
        return binding

    def save_environment(self, binding: EnvironmentBinding) -> None:
        self._require_store().update(binding)
        self.load_environments()

    def delete_environment(self, environment_id: int) -> None:
        self._require_store().delete(environment_id)
        self.environments = [env for env in self.environments if env.id != environment_id]
        if self.active_environment is not None and self.active_environment.id == environment_id:
            self.active_environment = None

    def _find(self, environment_id: int | None) -> EnvironmentBinding | None:
        if environment_id is None:
            return None
        return next((env for env in self.environments if env.id == environment_id), None)

    def _require_store(self) -> EnvironmentStore:
        if self.store is None:
            raise PersistenceError("No environment store configured.")
        return self.store

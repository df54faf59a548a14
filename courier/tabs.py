import asyncio
import logging

from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Input, Select, Static, TabbedContent, TabPane, TextArea

from .auth import AuthKind, BasicAuth, BearerToken
from .clipboard import copy_text
from .config import CONTENT_TYPES, METHODS
from .environment import describe_environment
from .errors import CompositionError
from .lifecycle import RequestLifecycle
from .models import ContentType, HttpMethod
from .parsing import describe_metadata
from .session import RequestSlot, Workbench
from .ui_components import KeyValueEditor, SmallButton

AUTH_KINDS = [(kind.label, kind.value) for kind in AuthKind]


class RequestTab(TabPane):
    """Editor and response view for one request slot."""

    logger = logging.getLogger(__name__)

    def __init__(self, workbench: Workbench, slot: RequestSlot) -> None:
        super().__init__(title="Request", id=f"request-{slot.id}")
        self.workbench = workbench
        self.slot = slot
        self.slot.lifecycle.add_listener(self._on_lifecycle)

    def _wid(self, name: str) -> str:
        return f"{self.id}-{name}"

    def compose(self):
        with Container(classes="layout"):
            with Horizontal(classes="columns"):
                with Vertical(classes="left-panel"):
                    yield Static("Request", classes="label")
                    with Horizontal(classes="method-row"):
                        yield Select(
                            METHODS,
                            value=self.slot.method,
                            allow_blank=False,
                            id=self._wid("method"),
                            classes="method-select",
                        )
                        yield Input(
                            value=self.slot.url,
                            placeholder="https://api.example.com/resource",
                            id=self._wid("endpoint"),
                            classes="endpoint-input",
                        )
                    with TabbedContent(classes="request-parts"):
                        with TabPane("Body", id=self._wid("body-tab")):
                            yield Select(
                                CONTENT_TYPES,
                                value=self.slot.content_type.value,
                                allow_blank=False,
                                id=self._wid("content-type"),
                            )
                            yield TextArea(
                                self.slot.body,
                                language="json",
                                id=self._wid("body"),
                                classes="box body-box",
                            )
                        with TabPane("Headers", id=self._wid("headers-tab")):
                            yield KeyValueEditor(
                                self.slot.headers,
                                add_label="Add Header",
                                id=self._wid("headers"),
                            )
                        with TabPane("Params", id=self._wid("params-tab")):
                            yield KeyValueEditor(
                                self.slot.params,
                                add_label="Add Param",
                                id=self._wid("params"),
                            )
                        with TabPane("Auth", id=self._wid("auth-tab")):
                            yield Select(
                                AUTH_KINDS,
                                value=AuthKind.NONE.value,
                                allow_blank=False,
                                id=self._wid("auth-kind"),
                            )
                            yield Input(placeholder="Token", id=self._wid("auth-token"), password=True)
                            yield Input(placeholder="Username", id=self._wid("auth-user"))
                            yield Input(placeholder="Password", id=self._wid("auth-password"), password=True)
                    with Horizontal(classes="actions"):
                        yield SmallButton("Send (Ctrl+S / F5)", id=self._wid("send"), variant="primary")
                        yield SmallButton("Clear", id=self._wid("clear"), variant="ghost")
                        yield SmallButton("Copy", id=self._wid("copy-response"), variant="ghost")
                    yield Static("", id=self._wid("status"), classes="status")
                with Vertical(classes="right-panel"):
                    yield Static(describe_metadata(self.slot.lifecycle.metadata), id=self._wid("meta"), classes="meta")
                    yield TextArea(
                        self.slot.lifecycle.display_text(),
                        id=self._wid("response"),
                        read_only=True,
                        classes="box response-box",
                    )

    def on_mount(self) -> None:
        self._show_auth_fields(AuthKind.NONE)
        self._on_lifecycle(self.slot.lifecycle)

    def focus_endpoint(self) -> None:
        self._input("endpoint").focus()

    async def send(self) -> None:
        self._set_status("Sending request...")
        applied = await self.workbench.submit(self.slot.id)
        if applied:
            self._set_status(self._environment_note())
            self._persist_state()

    async def copy_response(self) -> None:
        text = self.slot.lifecycle.copy_text()
        if not self.slot.lifecycle.can_copy or text is None:
            self._set_status("Nothing to copy.")
            return
        if await copy_text(self.app, text):
            self._set_status("Response copied to clipboard.")
        else:
            self._set_status("Copy failed: no clipboard available.")

    def clear_response(self) -> None:
        self._textarea("response").load_text("")

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == self._wid("endpoint"):
            self.slot.url = event.value.strip()
        # Credential inputs only write into the variant that is currently selected.
        elif event.input.id == self._wid("auth-token") and isinstance(self.slot.auth, BearerToken):
            self.slot.auth = BearerToken(event.value)
        elif event.input.id in (self._wid("auth-user"), self._wid("auth-password")) and isinstance(
            self.slot.auth, BasicAuth
        ):
            self.slot.auth = BasicAuth(self._input("auth-user").value, self._input("auth-password").value)

    def on_select_changed(self, event: Select.Changed) -> None:
        if not isinstance(event.value, str):
            return
        if event.select.id == self._wid("method"):
            try:
                self.slot.method = HttpMethod.parse(event.value).value
            except CompositionError as exc:
                self._set_status(str(exc))
        elif event.select.id == self._wid("content-type"):
            self.slot.content_type = ContentType(event.value)
        elif event.select.id == self._wid("auth-kind"):
            kind = AuthKind(event.value)
            self.slot.switch_auth(kind)
            self._show_auth_fields(kind)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if event.text_area.id == self._wid("body"):
            self.slot.body = event.text_area.text

    def on_button_pressed(self, event: SmallButton.Pressed) -> None:
        if event.button.id == self._wid("send"):
            asyncio.create_task(self.send())
        elif event.button.id == self._wid("clear"):
            self.clear_response()
        elif event.button.id == self._wid("copy-response"):
            asyncio.create_task(self.copy_response())

    def _on_lifecycle(self, lifecycle: RequestLifecycle) -> None:
        if not self.is_mounted:
            return
        self._textarea("response").load_text(lifecycle.display_text())
        self.query_one(f"#{self._wid('meta')}", Static).update(describe_metadata(lifecycle.metadata))
        self._button("copy-response").disabled = not lifecycle.can_copy

    def _show_auth_fields(self, kind: AuthKind) -> None:
        # A kind switch discards the previous credential, so the inputs are cleared too.
        for name in ("auth-token", "auth-user", "auth-password"):
            self._input(name).value = ""
        self._input("auth-token").display = kind is AuthKind.BEARER
        self._input("auth-user").display = kind is AuthKind.BASIC
        self._input("auth-password").display = kind is AuthKind.BASIC

    def _environment_note(self) -> str:
        return describe_environment(self.workbench.active_environment)

    def _textarea(self, name: str) -> TextArea:
        return self.query_one(f"#{self._wid(name)}", TextArea)

    def _input(self, name: str) -> Input:
        return self.query_one(f"#{self._wid(name)}", Input)

    def _button(self, name: str) -> SmallButton:
        return self.query_one(f"#{self._wid(name)}", SmallButton)

    def _set_status(self, message: str) -> None:
        self.query_one(f"#{self._wid('status')}", Static).update(message)

    def _persist_state(self) -> None:
        try:
            self.app.save_draft(self.slot)  # type: ignore[attr-defined]
        except OSError:
            self._set_status("Could not save state.")

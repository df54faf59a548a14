from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Footer, Header, TabbedContent

from .config import DEFAULT_DRAFT, DEFAULT_TIMEOUT
from .database import EnvironmentStore
from .env_tab import EnvironmentTab
from .errors import PersistenceError
from .http_client import RequestExecutor
from .session import RequestSlot, Workbench
from .storage import load_draft, save_draft
from .tabs import RequestTab


class CourierApp(App[None]):
    """Terminal HTTP request composer built with Textual."""

    TITLE = "HTTP Courier"

    CSS = """
    Screen {
        background: #0b1221;
    }

    #app-header {
        background: #1f2f6b;
        color: white;
    }

    #main {
        height: 1fr;
        padding: 0 1;
    }

    TabbedContent, TabPane {
        height: 1fr;
    }

    .columns {
        height: 1fr;
        border: round #1f2d4a;
    }

    .left-panel, .right-panel {
        padding: 0 1;
        background: #0f182b;
    }

    .left-panel {
        width: 55%;
        border-right: tall #1f2d4a;
    }

    .right-panel {
        width: 45%;
        height: 1fr;
        layout: vertical;
    }

    .box {
        border: round #22345b;
        background: #0b1529;
    }

    .body-box {
        height: 12;
    }

    .request-parts {
        height: 22;
    }

    .method-row, .actions {
        height: auto;
    }

    .method-select {
        width: 16;
    }

    .response-box {
        height: 1fr;
        scrollbar-size-vertical: 1;
        scrollbar-color: #4f8dff;
        scrollbar-background: #0b1221;
    }

    .status, .meta {
        color: #87d7ff;
        padding: 0 1;
    }

    .label {
        color: #8fb2ff;
        text-style: bold;
    }

    .actions SmallButton {
        margin-right: 1;
    }

    .endpoint-input {
        width: 1fr;
        background: #0b1529;
        color: #e5edff;
        border: tall #22345b;
    }

    .endpoint-input:focus {
        border: tall #4f8dff;
    }
    """

    BINDINGS = [
        Binding("ctrl+s", "send", "Send request"),
        Binding("f5", "send", "Send request"),
        Binding("ctrl+l", "focus_endpoint", "Focus URL"),
        Binding("ctrl+shift+c", "copy_response", "Copy response"),
        Binding("meta+c", "copy_response", "Copy response"),  # macOS Command+C
        Binding("f12", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        db_path: Path | None = None,
        verify_tls: bool = True,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        super().__init__()
        self.executor = RequestExecutor(timeout=timeout, verify_tls=verify_tls)
        self.workbench = Workbench(self.executor, EnvironmentStore(db_path))
        self.slot = self.workbench.open_slot(load_draft(DEFAULT_DRAFT))
        self.request_view: RequestTab | None = None
        self.env_view: EnvironmentTab | None = None

    def compose(self) -> ComposeResult:
        yield Header(id="app-header", show_clock=True)
        with Container(id="main"):
            with TabbedContent(id="tabs"):
                self.request_view = RequestTab(self.workbench, self.slot)
                self.env_view = EnvironmentTab(self.workbench)
                yield self.request_view
                yield self.env_view
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = "No environment"
        try:
            self.workbench.store.init()  # type: ignore[union-attr]
            self.workbench.load_environments()
        except PersistenceError as exc:
            self.notify(f"Environments unavailable: {exc}", severity="warning")
        if self.env_view:
            self.env_view.refresh_environments()
        if not self.executor.verify_tls:
            self.notify("TLS verification is disabled.", severity="warning")
        if self.request_view:
            self.request_view.focus_endpoint()

    async def on_unmount(self) -> None:
        await self.executor.aclose()
        if self.workbench.store is not None:
            self.workbench.store.close()

    async def action_send(self) -> None:
        if self._active_tab() is self.request_view and self.request_view:
            await self.request_view.send()

    def action_focus_endpoint(self) -> None:
        if self.request_view:
            self.request_view.focus_endpoint()

    async def action_copy_response(self) -> None:
        if self.request_view:
            await self.request_view.copy_response()

    def save_draft(self, slot: RequestSlot) -> None:
        save_draft(slot.to_draft())

    def _active_tab(self):
        tabs = self.query_one("#tabs", TabbedContent)
        if getattr(tabs, "active", None) == "environments":
            return self.env_view
        return self.request_view

import logging

from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Input, Select, Static, TabPane

from .environment import EnvironmentEditor, load_env_file
from .errors import PersistenceError
from .session import Workbench
from .ui_components import KeyValueEditor, SmallButton


class EnvironmentTab(TabPane):
    """Create, edit, import and activate environments."""

    logger = logging.getLogger(__name__)

    def __init__(self, workbench: Workbench) -> None:
        super().__init__(title="Environments", id="environments")
        self.workbench = workbench
        self.editor = EnvironmentEditor()

    def _wid(self, name: str) -> str:
        return f"{self.id}-{name}"

    def compose(self):
        with Container(classes="layout"):
            with Vertical(classes="left-panel"):
                yield Static("Environment", classes="label")
                yield Select([], prompt="Select an environment", id=self._wid("select"))
                yield Static("Name", classes="label")
                yield Input(placeholder="Name", id=self._wid("name"))
                yield Static("Default base URL", classes="label")
                yield Input(placeholder="https://api.example.com", id=self._wid("base-url"))
                yield Static("Variables ({{key}} in URL, header values and body)", classes="label")
                yield KeyValueEditor(self.editor.variables, add_label="Add Variable", id=self._wid("variables"))
                with Horizontal(classes="actions"):
                    yield Input(placeholder="Path to .env file", id=self._wid("import-path"))
                    yield SmallButton("Import", id=self._wid("import"), variant="ghost")
                with Horizontal(classes="actions"):
                    yield SmallButton("Save", id=self._wid("save"), variant="primary")
                    yield SmallButton("Use for requests", id=self._wid("activate"), variant="ghost")
                    yield SmallButton("Stop using", id=self._wid("deactivate"), variant="ghost")
                    yield SmallButton("Delete", id=self._wid("delete"), variant="danger")
                yield Static("New environment", classes="label")
                with Horizontal(classes="actions"):
                    yield Input(placeholder="New environment name", id=self._wid("new-name"))
                    yield SmallButton("Create", id=self._wid("create"), variant="primary")
                yield Static("", id=self._wid("status"), classes="status")

    def refresh_environments(self) -> None:
        options = [(env.name, env.id) for env in self.workbench.environments]
        select = self.query_one(f"#{self._wid('select')}", Select)
        select.set_options(options)
        selected = self.editor.selected
        if selected is not None and any(env.id == selected.id for env in self.workbench.environments):
            select.value = selected.id

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id != self._wid("select"):
            return
        env_id = event.value if isinstance(event.value, int) else None
        binding = next((env for env in self.workbench.environments if env.id == env_id), None)
        if self.editor.selected is not None and binding is not None and binding.id == self.editor.selected.id:
            return
        self.editor.select(binding)
        self._load_editor()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == self._wid("name"):
            self.editor.rename(event.value)
        elif event.input.id == self._wid("base-url"):
            self.editor.set_default_base_url(event.value)
        elif event.input.id == self._wid("new-name"):
            self.editor.new_name = event.value

    def on_button_pressed(self, event: SmallButton.Pressed) -> None:
        handlers = {
            self._wid("create"): self.create,
            self._wid("save"): self.save,
            self._wid("delete"): self.delete,
            self._wid("import"): self.import_file,
            self._wid("activate"): self.activate,
            self._wid("deactivate"): self.deactivate,
        }
        handler = handlers.get(event.button.id or "")
        if handler is not None:
            handler()

    def create(self) -> None:
        try:
            binding = self.workbench.create_environment(self.editor.new_name)
        except PersistenceError as exc:
            self._set_status(str(exc))
            return
        self.editor.new_name = ""
        self.query_one(f"#{self._wid('new-name')}", Input).value = ""
        self.editor.select(binding)
        self.refresh_environments()
        self._load_editor()
        self._set_status(f"Created {binding.name}.")

    def save(self) -> None:
        binding = self.editor.to_binding()
        if binding is None:
            self._set_status("Select an environment first.")
            return
        try:
            self.workbench.save_environment(binding)
        except PersistenceError as exc:
            self._set_status(str(exc))
            return
        self.refresh_environments()
        self._set_status(f"Saved {binding.name}.")
        self._announce_active()

    def delete(self) -> None:
        if self.editor.selected is None:
            self._set_status("Select an environment first.")
            return
        name = self.editor.selected.name
        try:
            self.workbench.delete_environment(self.editor.selected.id)
        except PersistenceError as exc:
            self._set_status(str(exc))
            return
        self.editor.clear()
        self.refresh_environments()
        self._load_editor()
        self._set_status(f"Deleted {name}.")
        self._announce_active()

    def import_file(self) -> None:
        path = self.query_one(f"#{self._wid('import-path')}", Input).value.strip()
        if not path:
            self._set_status("Enter the path of a .env file.")
            return
        try:
            pairs = load_env_file(path)
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.debug("Env file import failed: %s", exc)
            self._set_status(f"Could not read {path}: {exc}")
            return
        self.editor.import_pairs(pairs)
        self.query_one(KeyValueEditor).reload()
        self._set_status(f"Imported {len(pairs)} variables; save to keep them.")

    def activate(self) -> None:
        if self.editor.selected is None:
            self._set_status("Select an environment first.")
            return
        env = self.workbench.activate_environment(self.editor.selected.id)
        if env is None:
            self._set_status("Save the environment before using it.")
            return
        self._announce_active()
        self._set_status(f"Requests use {env.name}.")

    def deactivate(self) -> None:
        self.workbench.activate_environment(None)
        self._announce_active()
        self._set_status("Requests use no environment.")

    def _load_editor(self) -> None:
        selected = self.editor.selected
        self.query_one(f"#{self._wid('name')}", Input).value = selected.name if selected else ""
        self.query_one(f"#{self._wid('base-url')}", Input).value = (selected.default_base_url or "") if selected else ""
        self.query_one(KeyValueEditor).reload()

    def _announce_active(self) -> None:
        env = self.workbench.active_environment
        self.app.sub_title = f"Environment: {env.name}" if env else "No environment"

    def _set_status(self, message: str) -> None:
        self.query_one(f"#{self._wid('status')}", Static).update(message)

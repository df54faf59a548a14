from __future__ import annotations

from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Button, Input

from ..keyvalue import KeyValueEntry, KeyValueSet
from .buttons import SmallButton


class KeyValueEditor(Vertical):
    """Editable rows bound to a KeyValueSet.

    Widget ids embed the entry id, so removing a row never shifts the
    identity of the rows after it.
    """

    DEFAULT_CSS = """
    KeyValueEditor {
        height: auto;
    }

    KeyValueEditor .kv-row {
        height: auto;
    }

    KeyValueEditor .kv-row Input {
        width: 1fr;
    }
    """

    class Changed(Message):
        def __init__(self, editor: KeyValueEditor) -> None:
            super().__init__()
            self.editor = editor

        @property
        def control(self) -> KeyValueEditor:
            return self.editor

    def __init__(
        self,
        entries: KeyValueSet,
        *,
        add_label: str = "Add Entry",
        key_placeholder: str = "Key",
        value_placeholder: str = "Value",
        id: str | None = None,  # noqa: A002 - matches Textual's widget signature
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.entries = entries
        self.add_label = add_label
        self.key_placeholder = key_placeholder
        self.value_placeholder = value_placeholder
        self._prefix = id or "kv"

    def compose(self):
        with Vertical(id=f"{self._prefix}-rows"):
            for entry in self.entries:
                yield self._row(entry)
        yield SmallButton(self.add_label, id=f"{self._prefix}-add", variant="ghost")

    def reload(self) -> None:
        """Rebuild the rows after the bound set was replaced wholesale."""
        self.refresh(recompose=True)

    def _wid(self, part: str, entry_id: int) -> str:
        return f"{self._prefix}-{part}-{entry_id}"

    def _entry_id(self, widget_id: str | None) -> int | None:
        if not widget_id:
            return None
        try:
            return int(widget_id.rsplit("-", 1)[1])
        except (IndexError, ValueError):
            return None

    def _row(self, entry: KeyValueEntry) -> Horizontal:
        return Horizontal(
            Input(entry.key, placeholder=self.key_placeholder, id=self._wid("key", entry.id), name="key"),
            Input(entry.value, placeholder=self.value_placeholder, id=self._wid("value", entry.id), name="value"),
            SmallButton("Remove", id=self._wid("remove", entry.id), name="remove", variant="ghost"),
            id=self._wid("row", entry.id),
            classes="kv-row",
        )

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        entry_id = self._entry_id(event.input.id)
        if entry_id is None:
            return
        if event.input.name == "key":
            self.entries.set_key(entry_id, event.value)
        elif event.input.name == "value":
            self.entries.set_value(entry_id, event.value)
        self.post_message(self.Changed(self))

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == f"{self._prefix}-add":
            entry = self.entries.add()
            await self.query_one(f"#{self._prefix}-rows", Vertical).mount(self._row(entry))
        elif event.button.name == "remove":
            entry_id = self._entry_id(event.button.id)
            if entry_id is None:
                return
            self.entries.remove(entry_id)
            await self.query_one(f"#{self._wid('row', entry_id)}", Horizontal).remove()
        else:
            return
        self.post_message(self.Changed(self))

from textual.widgets import Button

VARIANT_CLASSES = {
    "primary": "btn-primary",
    "ghost": "btn-ghost",
    "danger": "btn-danger",
}


class SmallButton(Button):
    """Compact button used across the workbench."""

    DEFAULT_CSS = """
    SmallButton {
        height: 3;
        min-height: 3;
        padding: 0 2;
        border: tall #3b4f7a;
        background: #1c2943;
        color: #ffffff;
        text-style: bold;
        content-align: center middle;
        min-width: 10;
    }

    SmallButton:hover, SmallButton:focus {
        border: tall #6fa6ff;
    }

    SmallButton.btn-primary {
        background: #4f8dff;
        border: tall #4f8dff;
        color: #0b1221;
    }

    SmallButton.btn-ghost {
        background: #233555;
        color: #f1f5ff;
    }

    SmallButton.btn-danger {
        background: #5a1f2b;
        border: tall #9c3548;
    }

    SmallButton:disabled {
        opacity: 50%;
    }
    """

    def __init__(self, label: str, *, variant: str = "default", **kwargs) -> None:
        super().__init__(label, **kwargs)
        self.set_variant(variant)

    def set_variant(self, variant: str) -> None:
        self.remove_class(*VARIANT_CLASSES.values())
        if variant in VARIANT_CLASSES:
            self.add_class(VARIANT_CLASSES[variant])

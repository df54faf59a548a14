from .buttons import SmallButton
from .key_value_editor import KeyValueEditor

__all__ = ["SmallButton", "KeyValueEditor"]

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from pathlib import Path

from .keyvalue import KeyValueSet
from .models import EnvironmentBinding, Pair
from .parsing import parse_env_lines


class Substitution:
    """Replace ``{{key}}`` tokens in one left-to-right pass.

    Replacement text is never scanned again, so a value that itself contains a
    token is inserted literally. When a key appears twice the first value wins.
    """

    def __init__(self, variables: Iterable[Pair]) -> None:
        self._values: dict[str, str] = {}
        for key, value in variables:
            self._values.setdefault("{{" + key + "}}", value)
        tokens = sorted(self._values, key=len, reverse=True)
        self._pattern = re.compile("|".join(re.escape(token) for token in tokens)) if tokens else None

    def __call__(self, text: str) -> str:
        if self._pattern is None or "{{" not in text:
            return text
        return self._pattern.sub(lambda match: self._values[match.group(0)], text)


def substitute(text: str, variables: Iterable[Pair]) -> str:
    return Substitution(variables)(text)


def describe_environment(binding: EnvironmentBinding | None) -> str:
    """One-line note naming the active environment and the keys it offers."""
    if binding is None:
        return ""
    keys = [key for key, _ in binding.variables if key]
    available = f"Available: {', '.join(keys)}" if keys else "This environment has no variables."
    return f"Environment: {binding.name} | {available}"


def load_env_file(path: Path | str) -> list[Pair]:
    """Read a ``.env`` style file into ordered pairs."""
    return parse_env_lines(Path(path).expanduser().read_text(encoding="utf-8"))


class EnvironmentEditor:
    """In-memory draft of the environment being edited."""

    def __init__(self) -> None:
        self.selected: EnvironmentBinding | None = None
        self.variables = KeyValueSet()
        self.new_name = ""

    def select(self, binding: EnvironmentBinding | None) -> None:
        if binding is None:
            self.clear()
            return
        self.selected = EnvironmentBinding(
            id=binding.id,
            name=binding.name,
            variables=list(binding.variables),
            default_base_url=binding.default_base_url,
        )
        self.variables.reset(binding.variables)

    def clear(self) -> None:
        self.selected = None
        self.variables.reset(())

    def rename(self, name: str) -> None:
        if self.selected is not None:
            self.selected.name = name

    def set_default_base_url(self, url: str) -> None:
        if self.selected is not None:
            self.selected.default_base_url = url.strip() or None

    def import_pairs(self, pairs: Sequence[Pair]) -> None:
        self.variables.reset(pairs)

    def to_binding(self) -> EnvironmentBinding | None:
        if self.selected is None:
            return None
        return EnvironmentBinding(
            id=self.selected.id,
            name=self.selected.name,
            variables=self.variables.active_pairs(),
            default_base_url=self.selected.default_base_url,
        )

"""
Configuration surface shared by transforms and hosts.

A transform never knows how its fields are rendered. It calls one
ConfigEditor method per field and stores whatever value comes back,
so a GUI, the CLI and the tests can all drive the same `configure`.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

Options = Sequence[Tuple[Any, str]]


class ConfigEditor(ABC):
    """Abstract settings surface a host implements."""

    @abstractmethod
    def integer(self, key: str, label: str, value: int,
                minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
        pass

    @abstractmethod
    def text(self, key: str, label: str, value: str) -> str:
        pass

    @abstractmethod
    def choice(self, key: str, label: str, value: Any, options: Options) -> Any:
        pass


class Field(NamedTuple):
    key: str
    label: str
    kind: str
    value: Any
    options: Tuple[Tuple[Any, str], ...] = ()


class FieldRecorder(ConfigEditor):
    """Records every field it is shown and leaves values untouched."""

    def __init__(self):
        self.fields: List[Field] = []

    def integer(self, key, label, value, minimum=None, maximum=None):
        self.fields.append(Field(key, label, "integer", value))
        return value

    def text(self, key, label, value):
        self.fields.append(Field(key, label, "text", value))
        return value

    def choice(self, key, label, value, options):
        self.fields.append(Field(key, label, "choice", value, tuple(options)))
        return value


class OverrideEditor(ConfigEditor):
    """
    Applies textual `key=value` overrides to the fields a transform exposes.

    Integers are parsed with int() and clamped to the declared range.
    Choices match an option's value or label, case-insensitively. Values
    that fail to parse leave the field unchanged and are kept in `errors`.
    """

    def __init__(self, overrides: Dict[str, str]):
        self.overrides = dict(overrides)
        self.consumed = set()
        self.errors: List[str] = []

    def _raw(self, key):
        if key not in self.overrides:
            return None
        self.consumed.add(key)
        return self.overrides[key]

    def integer(self, key, label, value, minimum=None, maximum=None):
        raw = self._raw(key)
        if raw is None:
            return value
        try:
            parsed = int(raw.strip())
        except ValueError:
            self.errors.append(f"{key}: '{raw}' is not an integer")
            return value
        if minimum is not None:
            parsed = max(minimum, parsed)
        if maximum is not None:
            parsed = min(maximum, parsed)
        return parsed

    def text(self, key, label, value):
        raw = self._raw(key)
        return value if raw is None else raw

    def choice(self, key, label, value, options):
        raw = self._raw(key)
        if raw is None:
            return value
        wanted = raw.strip().lower()
        for option_value, option_label in options:
            if wanted in (str(option_value).lower(), option_label.lower()):
                return option_value
        allowed = ", ".join(str(v) for v, _ in options)
        self.errors.append(f"{key}: '{raw}' is not one of {allowed}")
        return value

    def unused(self) -> List[str]:
        return sorted(set(self.overrides) - self.consumed)


def apply_overrides(transform, overrides: Dict[str, str]) -> OverrideEditor:
    editor = OverrideEditor(overrides)
    transform.configure(editor)
    return editor


def describe(transform) -> List[Field]:
    recorder = FieldRecorder()
    transform.configure(recorder)
    return recorder.fields

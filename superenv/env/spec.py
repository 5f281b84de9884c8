"""
Immutable build environment.

An EnvironmentSpec is the result of environment resolution: an ordered,
read-only mapping of variable names to values that is handed to the process
that runs the build tool. Changes produce a new spec.
"""

import shlex
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

import yaml


class EnvironmentSpec(Mapping[str, str]):
    """
    Read-only, insertion-ordered environment mapping.

    Example:
        >>> spec = EnvironmentSpec({"CC": "cc"})
        >>> spec.updated({"CXX": "c++", "CC": None})
        EnvironmentSpec({'CXX': 'c++'})
    """

    __slots__ = ("_items",)

    def __init__(self, items: Optional[Mapping[str, str]] = None):
        self._items: Dict[str, str] = {}
        for key, value in (items or {}).items():
            self._items[str(key)] = str(value)

    def __getitem__(self, key: str) -> str:
        return self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other) -> bool:
        if isinstance(other, EnvironmentSpec):
            return list(self._items.items()) == list(other._items.items())
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._items.items()))

    def __repr__(self) -> str:
        return f"EnvironmentSpec({self._items!r})"

    def updated(self, changes: Mapping[str, Optional[str]]) -> "EnvironmentSpec":
        """
        Return a copy with changes applied.

        A value of None removes the key; existing keys keep their position.
        """
        items = dict(self._items)
        for key, value in changes.items():
            if value is None:
                items.pop(key, None)
            else:
                items[key] = value
        return EnvironmentSpec(items)

    def without(self, keys: Iterable[str]) -> "EnvironmentSpec":
        """Return a copy with the given keys removed."""
        return self.updated({key: None for key in keys})

    def path_entries(self, key: str = "PATH") -> Tuple[str, ...]:
        """Split a colon-separated variable into its non-empty entries."""
        return tuple(entry for entry in self._items.get(key, "").split(":") if entry)

    def to_dict(self) -> Dict[str, str]:
        """Plain dict copy, suitable for ``subprocess.run(env=...)``."""
        return dict(self._items)

    def to_shell(self) -> str:
        """Render as POSIX shell ``export`` statements."""
        return "\n".join(
            f"export {key}={shlex.quote(value)}" for key, value in self._items.items()
        )

    def to_yaml(self) -> str:
        """Render as a YAML mapping, preserving order."""
        return yaml.safe_dump(self.to_dict(), default_flow_style=False, sort_keys=False)

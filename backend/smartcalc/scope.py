"""
Variable scope.

Holds the session's variable bindings. Name validation is the caller's job.
"""

from __future__ import annotations

from typing import Dict

from .errors import UnknownVariableError


class VariableScope:
    """Mapping of variable name to integer value for one session."""

    def __init__(self) -> None:
        self._values: Dict[str, int] = {}

    def get(self, name: str) -> int:
        """
        Look up a variable.

        Raises:
            UnknownVariableError: If the name has no binding.
        """
        try:
            return self._values[name]
        except KeyError:
            raise UnknownVariableError(name) from None

    def set(self, name: str, value: int) -> None:
        """Create or overwrite a binding."""
        self._values[name] = value

    def snapshot(self) -> Dict[str, int]:
        """Return a copy of the current bindings."""
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

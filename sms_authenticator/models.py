"""
Host Data Model
===============
Narrow views of the objects owned by the identity provider.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol


# Principal attribute holding the destination number
MOBILE_NUMBER_FIELD = "mobile_number"


@dataclass
class Principal:
    """A user as exposed by the identity store. Read-only for this step."""
    id: str
    attributes: Dict[str, Optional[str]] = field(default_factory=dict)

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)


class AuthenticationAttempt(Protocol):
    """Per-attempt session notes kept by the flow engine between requests."""

    def get_auth_note(self, name: str) -> Optional[str]:  # pragma: no cover - interface
        ...

    def set_auth_note(self, name: str, value: str) -> None:  # pragma: no cover - interface
        ...

    def remove_auth_note(self, name: str) -> None:  # pragma: no cover - interface
        ...


class InMemoryAttempt:
    """
    Dict-backed AuthenticationAttempt.

    For tests and hosts that keep attempt state in process.
    """

    def __init__(self, attempt_id: str = "attempt"):
        self.id = attempt_id
        self._notes: Dict[str, str] = {}

    def get_auth_note(self, name: str) -> Optional[str]:
        return self._notes.get(name)

    def set_auth_note(self, name: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("Auth notes only hold strings")
        self._notes[name] = value

    def remove_auth_note(self, name: str) -> None:
        self._notes.pop(name, None)

    @property
    def notes(self) -> Dict[str, str]:
        return dict(self._notes)

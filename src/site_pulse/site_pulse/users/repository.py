from __future__ import annotations

from typing import Protocol, Sequence

from .model import Employee


class EmployeeDirectory(Protocol):
    """Registered users; the authoritative side of every identity join."""

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

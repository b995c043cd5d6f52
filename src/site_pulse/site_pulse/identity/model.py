from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..core.constants import EMPLOYEE_CODE_PATTERN

logger = logging.getLogger(__name__)


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _clean_id(value: Any) -> Optional[int]:
    text = _clean(value)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        return None


@dataclass(frozen=True)
class EmployeeRef:
    """Raw employee identifiers as they appear on a single record.

    Values are trimmed on construction; blank values become None. Case is kept.
    """

    employee_code: Optional[str] = None
    username: Optional[str] = None
    user_id: Optional[int] = None

    @classmethod
    def of(cls, *, employee_code: Any = None, username: Any = None, user_id: Any = None) -> "EmployeeRef":
        code = _clean(employee_code)
        if code is not None and not EMPLOYEE_CODE_PATTERN.match(code):
            logger.warning("Ignoring malformed employee code %r", code)
            code = None
        return cls(employee_code=code, username=_clean(username), user_id=_clean_id(user_id))

    @property
    def is_empty(self) -> bool:
        return self.employee_code is None and self.username is None and self.user_id is None


@dataclass(frozen=True)
class EmployeeIdentity:
    """Canonical employee. Keys not seen on any record or directory entry stay None."""

    internal_id: Optional[int] = None
    employee_code: Optional[str] = None
    username: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.username:
            return self.username
        if self.employee_code:
            return self.employee_code
        return f"#{self.internal_id}"

    def matches(self, other: "EmployeeIdentity | EmployeeRef") -> bool:
        """True when any of the three keys coincide."""

        other_id = other.internal_id if isinstance(other, EmployeeIdentity) else other.user_id
        if self.employee_code is not None and self.employee_code == other.employee_code:
            return True
        if self.username is not None and self.username == other.username:
            return True
        return self.internal_id is not None and self.internal_id == other_id

    def sort_key(self) -> tuple:
        return (self.display_name, self.employee_code or "", self.internal_id or 0)


@dataclass(frozen=True)
class CallerContext:
    """Who is asking. Supplied by the auth layer for every request."""

    identity: EmployeeIdentity
    role: str

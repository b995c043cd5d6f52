from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..identity.model import EmployeeIdentity


@dataclass(frozen=True)
class Employee:
    """Directory entry for a registered user.

    Note: Plain data object; managers may have no employee code.
    """

    user_id: int
    username: str
    employee_code: Optional[str]
    role: str
    phone: Optional[str] = None

    def to_identity(self) -> EmployeeIdentity:
        return EmployeeIdentity(internal_id=self.user_id, employee_code=self.employee_code, username=self.username)

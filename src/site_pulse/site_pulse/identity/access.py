from __future__ import annotations

from typing import Iterable, TypeVar

from ..core.constants import FULL_ACCESS_ROLE_KEYWORDS
from ..core.enums import AccessLevel
from .model import CallerContext
from .resolver import IdentityResolver

R = TypeVar("R")


def has_full_access(role: str) -> bool:
    lowered = (role or "").lower()
    return any(keyword in lowered for keyword in FULL_ACCESS_ROLE_KEYWORDS)


def access_level(role: str) -> AccessLevel:
    return AccessLevel.FULL if has_full_access(role) else AccessLevel.RESTRICTED


class AccessFilter:
    """Restrict records to what the caller may see, before any reconciliation.

    Managers, team/group leaders and admins see everything. Everyone else sees only
    records whose resolved identity matches their own by any key.
    """

    def __init__(self, resolver: IdentityResolver):
        self._resolver = resolver

    def filter(self, records: Iterable[R], caller: CallerContext) -> tuple[R, ...]:
        records = tuple(records)
        if has_full_access(caller.role):
            return records

        own = self._resolver.resolve_identity(caller.identity)
        visible = []
        for record in records:
            identity = self._resolver.resolve(record.employee)
            if identity is None:
                continue
            if identity == own or identity.matches(caller.identity) or caller.identity.matches(record.employee):
                visible.append(record)
        return tuple(visible)

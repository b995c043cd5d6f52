from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.constants import EMPLOYEE_CODE_PATTERN
from ..core.exceptions import UnattributableRecordError
from .model import EmployeeIdentity, EmployeeRef

logger = logging.getLogger(__name__)


@dataclass
class _Cluster:
    internal_id: Optional[int] = None
    employee_code: Optional[str] = None
    username: Optional[str] = None

    def compatible_with(self, other: "_Cluster") -> bool:
        for mine, theirs in (
            (self.internal_id, other.internal_id),
            (self.employee_code, other.employee_code),
        ):
            if mine is not None and theirs is not None and mine != theirs:
                return False
        return True

    def absorb(self, internal_id: Optional[int], employee_code: Optional[str], username: Optional[str]) -> None:
        if self.internal_id is None:
            self.internal_id = internal_id
        if self.employee_code is None:
            self.employee_code = employee_code
        if self.username is None:
            self.username = username


class IdentityResolver:
    """Canonicalize the identifiers found across all record types.

    A reference matches an identity when its employee code, username or internal id
    coincides with one the identity already owns. Keys are tried in that order, so a
    code match wins over a name match when they point at different employees.

    The resolver is built once from the directory (authoritative users) and every
    reference seen in the fetched records. References are folded in input order;
    a reference whose keys point at two different identities joins them, unless the
    two carry different codes or internal ids.
    """

    def __init__(self, directory: Iterable[EmployeeIdentity] = (), refs: Iterable[EmployeeRef] = ()):
        self._parent: list[int] = []
        self._clusters: list[_Cluster] = []
        self._by_code: dict[str, int] = {}
        self._by_name: dict[str, int] = {}
        self._by_id: dict[int, int] = {}

        for identity in directory:
            self._fold(identity.internal_id, identity.employee_code, identity.username)
        for ref in refs:
            self._fold(ref.user_id, ref.employee_code, ref.username)

        self._identities: dict[int, EmployeeIdentity] = {}
        for idx, cluster in enumerate(self._clusters):
            if self._root(idx) == idx:
                self._identities[idx] = EmployeeIdentity(
                    internal_id=cluster.internal_id,
                    employee_code=cluster.employee_code,
                    username=cluster.username,
                )

    def _root(self, idx: int) -> int:
        while self._parent[idx] != idx:
            self._parent[idx] = self._parent[self._parent[idx]]
            idx = self._parent[idx]
        return idx

    def _lookup(self, user_id: Optional[int], employee_code: Optional[str], username: Optional[str]) -> list[int]:
        found: list[int] = []
        for index, key in ((self._by_code, employee_code), (self._by_name, username), (self._by_id, user_id)):
            if key is None or key not in index:
                continue
            root = self._root(index[key])
            if root not in found:
                found.append(root)
        return found

    def _fold(self, user_id: Optional[int], employee_code: Optional[str], username: Optional[str]) -> None:
        if user_id is None and employee_code is None and username is None:
            return

        candidates = self._lookup(user_id, employee_code, username)
        if not candidates:
            target = len(self._clusters)
            self._parent.append(target)
            self._clusters.append(_Cluster(internal_id=user_id, employee_code=employee_code, username=username))
        else:
            target = candidates[0]
            for other in candidates[1:]:
                if self._clusters[target].compatible_with(self._clusters[other]):
                    self._parent[other] = target
                    merged = self._clusters[other]
                    self._clusters[target].absorb(merged.internal_id, merged.employee_code, merged.username)
                else:
                    logger.debug("Not merging conflicting identities %s and %s", self._clusters[target], self._clusters[other])
            cluster = self._clusters[target]
            if (employee_code is None or cluster.employee_code in (None, employee_code)) and (
                user_id is None or cluster.internal_id in (None, user_id)
            ):
                cluster.absorb(user_id, employee_code, username)

        for index, key in ((self._by_code, employee_code), (self._by_name, username), (self._by_id, user_id)):
            if key is not None and key not in index:
                index[key] = target

    def resolve(self, ref: EmployeeRef) -> Optional[EmployeeIdentity]:
        """Return the canonical identity for ref, or None when ref is unattributable."""

        if ref.is_empty:
            return None
        candidates = self._lookup(ref.user_id, ref.employee_code, ref.username)
        if candidates:
            return self._identities[candidates[0]]
        return EmployeeIdentity(internal_id=ref.user_id, employee_code=ref.employee_code, username=ref.username)

    def resolve_identity(self, identity: EmployeeIdentity) -> Optional[EmployeeIdentity]:
        return self.resolve(
            EmployeeRef(employee_code=identity.employee_code, username=identity.username, user_id=identity.internal_id)
        )

    def require(self, ref: EmployeeRef, *, kind: str, record_id) -> EmployeeIdentity:
        identity = self.resolve(ref)
        if identity is None:
            raise UnattributableRecordError(kind, record_id)
        return identity

    def lookup(self, identifier: str) -> Optional[EmployeeIdentity]:
        """Find a known identity from a single free-form identifier (code, username or id)."""

        text = (identifier or "").strip()
        if not text:
            return None
        code = text if EMPLOYEE_CODE_PATTERN.match(text) else None
        user_id = int(text) if text.isascii() and text.isdigit() else None
        candidates = self._lookup(user_id, code, text)
        if not candidates:
            return None
        return self._identities[candidates[0]]

    @property
    def identities(self) -> list[EmployeeIdentity]:
        return list(self._identities.values())

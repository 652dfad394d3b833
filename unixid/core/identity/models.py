from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Annotated, Dict, Iterable, Iterator, List, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from unixid.core.errors import ReadOnlyIdentityError

log = logging.getLogger("unixid.identity")

UnixId = Annotated[StrictInt, Field(ge=0)]


def _check_int(name: str, value: object) -> None:
    # bool is an int subclass; True must not pass for uid 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")


@dataclass(frozen=True)
class UidPrincipal:
    uid: int

    def __post_init__(self) -> None:
        _check_int("uid", self.uid)


@dataclass(frozen=True)
class GidPrincipal:
    gid: int
    is_primary: bool = False

    def __post_init__(self) -> None:
        _check_int("gid", self.gid)
        if not isinstance(self.is_primary, bool):
            raise TypeError(f"is_primary must be bool, got {type(self.is_primary).__name__}")


Principal = Union[UidPrincipal, GidPrincipal]
PRINCIPAL_TYPES: Tuple[type, ...] = (UidPrincipal, GidPrincipal)


class Identity:
    """
    Set of principals describing one authenticated entity.

    Iteration follows insertion order of distinct principals. Once
    `set_read_only()` has been called the identity can never change again.
    """

    __slots__ = ("_principals", "_read_only")

    def __init__(self, principals: Iterable[Principal] = ()):
        self._principals: Dict[Principal, None] = {}
        self._read_only = False
        for p in principals:
            self.add(p)

    # ---- lifecycle ----
    @property
    def is_read_only(self) -> bool:
        return self._read_only

    def set_read_only(self) -> None:
        self._read_only = True

    def _check_writable(self, op: str) -> None:
        if self._read_only:
            log.warning("Refused %s on read-only identity %r", op, self)
            raise ReadOnlyIdentityError(op=op)

    # ---- mutation ----
    def add(self, principal: Principal) -> None:
        self._check_writable("add")
        if not isinstance(principal, PRINCIPAL_TYPES):
            raise TypeError(f"not a principal: {principal!r}")
        self._principals[principal] = None

    def discard(self, principal: Principal) -> None:
        self._check_writable("discard")
        self._principals.pop(principal, None)

    def remove(self, principal: Principal) -> None:
        self._check_writable("remove")
        if principal not in self._principals:
            raise KeyError(principal)
        del self._principals[principal]

    def clear(self) -> None:
        self._check_writable("clear")
        self._principals.clear()

    # ---- views ----
    def principals(self, kind: Optional[Type[Principal]] = None) -> Tuple[Principal, ...]:
        if kind is None:
            return tuple(self._principals)
        return tuple(p for p in self._principals if isinstance(p, kind))

    def copy(self) -> "Identity":
        return Identity(self._principals)

    def __iter__(self) -> Iterator[Principal]:
        return iter(tuple(self._principals))

    def __len__(self) -> int:
        return len(self._principals)

    def __contains__(self, principal: object) -> bool:
        return principal in self._principals

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Identity):
            return NotImplemented
        return self._principals.keys() == other._principals.keys()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        inner = ", ".join(repr(p) for p in self._principals)
        ro = ", read_only=True" if self._read_only else ""
        return f"Identity([{inner}]{ro})"


class UnixRecord(BaseModel):
    """Validated unix account record, as handed over by an authentication layer."""

    model_config = ConfigDict(extra="forbid")

    uid: UnixId
    gid: UnixId
    gids: List[UnixId] = Field(default_factory=list)

"""Claim contributions and the per-call claim set they build."""

import json
import threading
from collections.abc import Iterable, Iterator, Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any, NamedTuple


class Claim(NamedTuple):
    """One named payload field."""

    name: str
    value: Any


ClaimLike = Claim | tuple[str, Any] | Mapping[str, Any]


def claim(name: str, value: Any) -> Claim:
    """Build a claim with an arbitrary JSON-serializable value."""
    if not name:
        raise ValueError("claim name must not be empty")
    return Claim(name, value)


def time_claim(name: str, value: datetime) -> Claim:
    """Build a claim holding ``value`` as an integer Unix timestamp."""
    return claim(name, int(value.timestamp()))


class ClaimSet:
    """Mapping of claim name to value built from ordered contributions.

    Later contributions for a name overwrite earlier ones. Insertion is
    serialized by a mutex so contributions may arrive from several threads.
    """

    def __init__(self, contributions: Iterable[ClaimLike] = ()) -> None:
        self._lock = threading.Lock()
        self._claims: dict[str, Any] = {}
        self.extend(contributions)

    def set(self, name: str, value: Any) -> None:
        with self._lock:
            self._claims[name] = value

    def apply(self, contribution: ClaimLike) -> None:
        """Apply a Claim, a (name, value) pair or every item of a mapping."""
        if isinstance(contribution, Mapping):
            for name, value in contribution.items():
                self.set(name, value)
            return
        name, value = contribution
        self.set(name, value)

    def extend(self, contributions: Iterable[ClaimLike]) -> None:
        for contribution in contributions:
            self.apply(contribution)

    def to_dict(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._claims)

    def __getitem__(self, name: str) -> Any:
        with self._lock:
            return self._claims[name]

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._claims

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_dict())

    def __len__(self) -> int:
        with self._lock:
            return len(self._claims)


class ClaimsEncoder(json.JSONEncoder):
    """JSON encoder for payload values the stdlib encoder rejects."""

    def default(self, o: Any) -> Any:
        if isinstance(o, datetime):
            return int(o.timestamp())
        if isinstance(o, Decimal):
            return int(o) if o == o.to_integral_value() else float(o)
        return super().default(o)

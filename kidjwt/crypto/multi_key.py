"""Kid-routed signing and parsing over single-key signers and parsers.

The kid travels inside the signed payload as the ``kid`` claim. Parsing
peeks at the unverified payload to pick a parser, then verifies with it.
"""

import logging
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from kidjwt.core.errors import (
    InvalidMultiKeyParserError,
    InvalidMultiKeySignerError,
    KidNotFoundError,
    KidTypeError,
    ParserNotFoundError,
    SignerNotFoundError,
)
from kidjwt.crypto.claims import ClaimLike, claim
from kidjwt.crypto.parser import Parser, parse_claims_unverified
from kidjwt.crypto.rwlock import RWLock
from kidjwt.crypto.signer import Signer

logger = logging.getLogger(__name__)

KID_CLAIM = "kid"

T = TypeVar("T")


class _KidIndex(Generic[T]):
    _entries: dict[str, T] | None = None

    def __init__(self, entries: Mapping[str, T] | None = None) -> None:
        self._lock = RWLock()
        self._entries = dict(entries or {})

    @property
    def valid(self) -> bool:
        return self._entries is not None

    def set(self, kid: str, entry: T) -> None:
        if not kid:
            raise ValueError("kid must not be empty")
        with self._lock.write():
            self._entries[kid] = entry
        logger.debug("%s set kid=%s", type(self).__name__, kid)

    def get(self, kid: str) -> T | None:
        with self._lock.read():
            return self._entries.get(kid)

    def remove(self, kid: str) -> None:
        with self._lock.write():
            self._entries.pop(kid, None)

    def kids(self) -> list[str]:
        with self._lock.read():
            return list(self._entries)


class MultiKeySigner(_KidIndex[Signer]):
    """Signs with the Signer registered under an explicit kid."""

    def signed_string(self, kid: str, *claims: ClaimLike) -> str:
        """Sign ``claims`` with the signer for ``kid``, adding a ``kid`` claim.

        The ``kid`` claim is applied last, so it overrides any caller value.
        """
        if not self.valid:
            raise InvalidMultiKeySignerError("invalid multiple keys signer")
        signer = self.get(kid)
        if signer is None:
            raise SignerNotFoundError(f"signer not found by kid {kid!r}")
        return signer.signed_string(*claims, claim(KID_CLAIM, kid))


class MultiKeyParser(_KidIndex[Parser]):
    """Verifies tokens with the Parser selected by their ``kid`` claim."""

    def parse(self, token: str) -> dict[str, Any]:
        if not self.valid:
            raise InvalidMultiKeyParserError("invalid multiple keys parser")

        unverified = parse_claims_unverified(token)
        if KID_CLAIM not in unverified:
            raise KidNotFoundError("kid not found in claims")
        kid = unverified[KID_CLAIM]
        if not isinstance(kid, str):
            raise KidTypeError(f"invalid kid type {type(kid).__name__} (not str)")

        parser = self.get(kid)
        if parser is None:
            logger.debug("No parser for kid=%s", kid)
            raise ParserNotFoundError(f"parser not found by kid {kid!r}")
        return parser.parse(token)

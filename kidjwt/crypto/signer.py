"""Single-key JWT signing."""

import logging
from pathlib import Path
from typing import Any

import jwt

from kidjwt.core.errors import InvalidSignerError
from kidjwt.crypto.algorithms import load_signing_key, resolve_algorithm
from kidjwt.crypto.claims import ClaimLike, ClaimSet, ClaimsEncoder
from kidjwt.crypto.keys import read_key_file
from kidjwt.crypto.types import Algorithm

logger = logging.getLogger(__name__)


class Signer:
    """Signs claim sets with one algorithm and one signing key.

    Build instances with :meth:`from_key_bytes` or :meth:`from_file`; both
    raise on an unsupported algorithm or an unparsable key. A Signer is
    immutable and may be shared between threads.
    """

    __slots__ = ("_algorithm", "_key")

    def __init__(self, algorithm: Algorithm | str | None, key: Any) -> None:
        self._algorithm = (
            resolve_algorithm(algorithm) if algorithm is not None else None
        )
        self._key = key

    @classmethod
    def from_key_bytes(cls, alg: Algorithm | str, key: bytes | str) -> "Signer":
        """Create a signer from a raw HMAC secret or a PEM private key."""
        algorithm = resolve_algorithm(alg)
        if not key:
            raise InvalidSignerError("signing key is empty")
        return cls(algorithm, load_signing_key(algorithm, key))

    @classmethod
    def from_file(cls, alg: Algorithm | str, path: str | Path) -> "Signer":
        """Create a signer from a key file on disk."""
        algorithm = resolve_algorithm(alg)
        return cls.from_key_bytes(algorithm, read_key_file(path))

    @property
    def algorithm(self) -> Algorithm | None:
        return self._algorithm

    @property
    def valid(self) -> bool:
        return self._algorithm is not None and bool(self._key)

    def signed_string(
        self, *claims: ClaimLike, headers: dict[str, Any] | None = None
    ) -> str:
        """Sign the given claims and return the compact token string.

        Contributions are applied in order to a fresh claim set; a later
        value for the same name replaces an earlier one. ``headers`` adds
        fields to the JOSE header next to ``alg`` and ``typ``.
        """
        if not self.valid:
            raise InvalidSignerError("invalid signer")

        payload = ClaimSet(claims).to_dict()
        token = jwt.encode(
            payload,
            self._key,
            algorithm=str(self._algorithm),
            headers=headers,
            json_encoder=ClaimsEncoder,
        )
        logger.debug(
            "Signed token with %s (%d claims)", self._algorithm, len(payload)
        )
        return token

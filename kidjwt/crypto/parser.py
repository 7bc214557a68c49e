"""Single-key JWT parsing and unverified peeking for kid routing."""

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any

import jwt
from jwt.utils import base64url_decode

from kidjwt.core.errors import (
    InvalidParserError,
    InvalidPartCountError,
    InvalidTokenError,
)
from kidjwt.core.settings import ParserConfig
from kidjwt.crypto.algorithms import load_verifying_key, resolve_algorithm
from kidjwt.crypto.keys import read_key_file
from kidjwt.crypto.types import Algorithm

logger = logging.getLogger(__name__)

TOKEN_PART_COUNT = 3


class _PayloadDecoder(jwt.PyJWT):
    """PyJWT decoder with a configurable float type for payload numbers."""

    def __init__(self, parse_float: type = float) -> None:
        super().__init__()
        self._parse_float = parse_float

    def _decode_payload(self, decoded: dict[str, Any]) -> Any:
        try:
            payload = json.loads(decoded["payload"], parse_float=self._parse_float)
        except ValueError as e:
            raise jwt.DecodeError(f"Invalid payload string: {e}") from e
        if not isinstance(payload, dict):
            raise jwt.DecodeError("Invalid payload string: must be a json object")
        return payload


_UNVERIFIED_DECODER = _PayloadDecoder()


def _check_part_count(token: str) -> None:
    if token.count(".") != TOKEN_PART_COUNT - 1:
        raise InvalidPartCountError(
            f"token must have {TOKEN_PART_COUNT} dot-separated parts"
        )


def parse_claims_unverified(token: str) -> dict[str, Any]:
    """Decode the payload WITHOUT checking the signature.

    Only for selecting a verifying key by an embedded kid; the result is
    untrusted until a verified parse of the same token succeeds.
    """
    _check_part_count(token)
    return _UNVERIFIED_DECODER.decode(token, options={"verify_signature": False})


def parse_header_unverified(token: str) -> dict[str, Any]:
    """Decode the JOSE header WITHOUT checking the signature.

    Header fields are returned as sent, so a malformed kid reaches the caller.
    """
    _check_part_count(token)
    try:
        header = json.loads(base64url_decode(token.split(".", 1)[0]))
    except ValueError as e:
        raise jwt.DecodeError(f"Invalid header string: {e}") from e
    if not isinstance(header, dict):
        raise jwt.DecodeError("Invalid header string: must be a json object")
    return header


class Parser:
    """Verifies tokens signed with one algorithm and decodes their claims.

    Tokens whose header names any other algorithm are rejected, so a
    parser configured for RS256 never accepts an HS256 or ``none`` token.
    """

    __slots__ = ("_algorithm", "_key", "_config", "_decoder")

    def __init__(
        self,
        algorithm: Algorithm | str | None,
        key: Any,
        config: ParserConfig | None = None,
    ) -> None:
        self._algorithm = (
            resolve_algorithm(algorithm) if algorithm is not None else None
        )
        self._key = key
        self._config = config or ParserConfig()
        parse_float = Decimal if self._config.decode_numbers_as_exact_decimal else float
        self._decoder = _PayloadDecoder(parse_float)

    @classmethod
    def from_key_bytes(
        cls,
        alg: Algorithm | str,
        key: bytes | str,
        config: ParserConfig | None = None,
    ) -> "Parser":
        """Create a parser from a raw HMAC secret or a PEM public key."""
        algorithm = resolve_algorithm(alg)
        if not key:
            raise InvalidParserError("verifying key is empty")
        return cls(algorithm, load_verifying_key(algorithm, key), config)

    @classmethod
    def from_file(
        cls,
        alg: Algorithm | str,
        path: str | Path,
        config: ParserConfig | None = None,
    ) -> "Parser":
        """Create a parser from a verifying key file on disk."""
        algorithm = resolve_algorithm(alg)
        return cls.from_key_bytes(algorithm, read_key_file(path), config)

    @property
    def algorithm(self) -> Algorithm | None:
        return self._algorithm

    @property
    def config(self) -> ParserConfig:
        return self._config

    @property
    def valid(self) -> bool:
        return self._algorithm is not None and bool(self._key)

    def parse(self, token: str) -> dict[str, Any]:
        """Verify ``token`` and return its claims.

        Numbers with a fraction or exponent decode as Decimal unless the
        config asks for floats. Registered time claims are checked when
        present and enabled in the config.
        """
        if not self.valid:
            raise InvalidParserError("invalid parser")
        _check_part_count(token)

        check_times = self._config.verify_time_claims
        options = {
            "verify_exp": check_times,
            "verify_nbf": check_times,
            "verify_iat": check_times,
            "verify_aud": False,
            "verify_iss": False,
            "verify_sub": False,
            "verify_jti": False,
        }
        try:
            return self._decoder.decode(
                token,
                self._key,
                algorithms=[str(self._algorithm)],
                options=options,
                leeway=self._config.leeway_seconds,
            )
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as exc:
            logger.debug("Rejected %s token: %s", self._algorithm, exc)
            raise InvalidTokenError(str(exc)) from exc

"""Token creation and verification against a KeyRegistry, kid in the header."""

import logging

from kidjwt.core.errors import InvalidTokenError, KidNotFoundError, KidTypeError
from kidjwt.core.settings import ParserConfig
from kidjwt.crypto.claims import ClaimLike
from kidjwt.crypto.key_registry import KeyRegistry
from kidjwt.crypto.parser import Parser, parse_header_unverified
from kidjwt.crypto.signer import Signer
from kidjwt.crypto.types import DecodedToken

logger = logging.getLogger(__name__)


class JWTManager:
    """Creates and verifies tokens whose JOSE header names the signing kid."""

    def __init__(
        self, registry: KeyRegistry, config: ParserConfig | None = None
    ) -> None:
        self._registry = registry
        self._config = config or ParserConfig()

    @property
    def registry(self) -> KeyRegistry:
        return self._registry

    def create_token(self, kid: str, *claims: ClaimLike) -> str:
        """Sign ``claims`` with the key registered under ``kid``."""
        key = self._registry.get_key(kid)
        signer = Signer(key.algorithm, key.sign_key)
        return signer.signed_string(*claims, headers={"kid": kid})

    def verify_token(self, token: str) -> DecodedToken:
        """Verify a token with the key named by its header kid."""
        header = parse_header_unverified(token)
        if "kid" not in header:
            raise KidNotFoundError("kid not found in token header")
        kid = header["kid"]
        if not isinstance(kid, str):
            raise KidTypeError(f"token header kid is {type(kid).__name__}, not str")

        key = self._registry.get_key(kid)
        if header.get("alg") != key.algorithm:
            logger.debug(
                "Token alg %s does not match kid=%s alg %s",
                header.get("alg"),
                kid,
                key.algorithm,
            )
            raise InvalidTokenError("signing method mismatch")

        claims = Parser(key.algorithm, key.verify_key, self._config).parse(token)
        return DecodedToken(kid=kid, header=header, claims=claims)

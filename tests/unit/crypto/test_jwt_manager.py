"""Tests for registry-backed token creation and verification."""

import base64
import json
from pathlib import Path

import jwt
import pytest

from kidjwt.core.errors import (
    InvalidTokenError,
    KeyNotFoundError,
    KidNotFoundError,
    KidTypeError,
)
from kidjwt.core.settings import ParserConfig
from kidjwt.crypto.claims import claim
from kidjwt.crypto.jwt_manager import JWTManager
from kidjwt.crypto.key_registry import KeyRegistry
from kidjwt.crypto.signer import Signer
from kidjwt.crypto.types import KeyPairPEM


def _b64(data: object) -> str:
    return base64.urlsafe_b64encode(json.dumps(data).encode()).rstrip(b"=").decode()


@pytest.fixture
def jwt_mgr(
    hmac_key_file: Path, rsa_key_files: tuple[Path, Path]
) -> JWTManager:
    """Create a JWTManager over a registry holding an HMAC and an RSA key."""
    registry = KeyRegistry()
    registry.set_key_from_file("hmac", "HS256", hmac_key_file)
    registry.set_key_from_file("rsa", "RS256", *rsa_key_files)
    return JWTManager(registry)


class TestCreateToken:
    """Tests for token creation."""

    def test_token_has_kid_header(self, jwt_mgr: JWTManager) -> None:
        token = jwt_mgr.create_token("rsa", claim("uid", "1"))
        header = jwt.get_unverified_header(token)
        assert header["kid"] == "rsa"
        assert header["alg"] == "RS256"

    def test_kid_not_in_payload(self, jwt_mgr: JWTManager) -> None:
        token = jwt_mgr.create_token("hmac", claim("uid", "1"))
        assert "kid" not in jwt.decode(token, options={"verify_signature": False})

    def test_unknown_kid(self, jwt_mgr: JWTManager) -> None:
        with pytest.raises(KeyNotFoundError):
            jwt_mgr.create_token("missing", claim("uid", "1"))


class TestVerifyToken:
    """Tests for token verification."""

    @pytest.mark.parametrize("kid", ["hmac", "rsa"])
    def test_round_trip(self, kid: str, jwt_mgr: JWTManager) -> None:
        token = jwt_mgr.create_token(kid, claim("uid", "1"), claim("count", 100))
        decoded = jwt_mgr.verify_token(token)
        assert decoded.kid == kid
        assert decoded.claims == {"uid": "1", "count": 100}
        assert decoded.header["kid"] == kid

    def test_deleted_key_rejected(self, jwt_mgr: JWTManager) -> None:
        token = jwt_mgr.create_token("hmac", claim("uid", "1"))
        jwt_mgr.registry.delete_key("hmac")
        with pytest.raises(KeyNotFoundError):
            jwt_mgr.verify_token(token)

    def test_missing_header_kid(self, jwt_mgr: JWTManager, hmac_secret: bytes) -> None:
        token = Signer.from_key_bytes("HS256", hmac_secret).signed_string(
            claim("kid", "hmac")
        )
        with pytest.raises(KidNotFoundError):
            jwt_mgr.verify_token(token)

    def test_non_string_header_kid(self, jwt_mgr: JWTManager) -> None:
        header = _b64({"alg": "HS256", "typ": "JWT", "kid": 3})
        token = f"{header}.{_b64({'uid': '1'})}.c2ln"
        with pytest.raises(KidTypeError):
            jwt_mgr.verify_token(token)

    def test_algorithm_mismatch(self, jwt_mgr: JWTManager, hmac_secret: bytes) -> None:
        token = Signer.from_key_bytes("HS384", hmac_secret).signed_string(
            headers={"kid": "hmac"}
        )
        with pytest.raises(InvalidTokenError):
            jwt_mgr.verify_token(token)

    def test_wrong_key_rejected(
        self, jwt_mgr: JWTManager, other_rsa_keypair: KeyPairPEM
    ) -> None:
        token = Signer.from_key_bytes(
            "RS256", other_rsa_keypair.private_key_pem
        ).signed_string(claim("uid", "1"), headers={"kid": "rsa"})
        with pytest.raises(InvalidTokenError):
            jwt_mgr.verify_token(token)

    def test_config_applies(self, hmac_key_file: Path) -> None:
        registry = KeyRegistry()
        registry.set_key_from_file("hmac", "HS256", hmac_key_file)
        mgr = JWTManager(registry, ParserConfig(decode_numbers_as_exact_decimal=False))
        token = mgr.create_token("hmac", claim("ratio", 0.1))
        assert isinstance(mgr.verify_token(token).claims["ratio"], float)

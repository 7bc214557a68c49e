"""Type definitions for algorithms, key material and decoded tokens."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class Algorithm(StrEnum):
    """JWS ``alg`` header values (RFC 7518 section 3.1)."""

    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    PS256 = "PS256"
    PS384 = "PS384"
    PS512 = "PS512"
    ES256 = "ES256"
    ES384 = "ES384"
    ES512 = "ES512"
    NONE = "none"


class AlgorithmFamily(StrEnum):
    """Key format shared by a group of algorithms."""

    HMAC = "hmac"
    RSA = "rsa"
    ECDSA = "ecdsa"


class KeyMaterial(BaseModel):
    """One algorithm with its signing and verifying key.

    For HMAC algorithms ``verify_key`` is the same secret as ``sign_key``;
    for RSA, RSA-PSS and ECDSA it is the matching public key.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    algorithm: Algorithm
    sign_key: Any
    verify_key: Any

    @model_validator(mode="after")
    def check_usable(self) -> "KeyMaterial":
        if self.algorithm is Algorithm.NONE:
            raise ValueError("the 'none' algorithm cannot carry key material")
        if not self.sign_key:
            raise ValueError("signing key is empty")
        if not self.verify_key:
            raise ValueError("verifying key is empty")
        return self

    @property
    def valid(self) -> bool:
        """Report whether both keys are present."""
        return bool(self.sign_key) and bool(self.verify_key)


class KeyPairPEM(BaseModel):
    """A generated asymmetric keypair, PEM encoded."""

    kid: str
    private_key_pem: str
    public_key_pem: str


class DecodedToken(BaseModel):
    """Verified token routed through a key registry by its header kid."""

    kid: str
    header: dict[str, Any]
    claims: dict[str, Any]

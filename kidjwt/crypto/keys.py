"""Key file reading and keypair generation for JWT signing."""

import secrets
from pathlib import Path

import uuid_utils
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes

from kidjwt.crypto.types import KeyPairPEM

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537
HMAC_SECRET_BYTES = 64

EC_CURVES: dict[str, ec.EllipticCurve] = {
    "ES256": ec.SECP256R1(),
    "ES384": ec.SECP384R1(),
    "ES512": ec.SECP521R1(),
}


def read_key_file(path: str | Path) -> bytes:
    """Read raw key bytes from disk."""
    if not str(path):
        raise ValueError("key file path is empty")
    return Path(path).read_bytes()


def _to_pem_pair(private_key: PrivateKeyTypes) -> KeyPairPEM:
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = (
        private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode()
    )
    kid = str(uuid_utils.uuid7())
    return KeyPairPEM(kid=kid, private_key_pem=private_pem, public_key_pem=public_pem)


def generate_rsa_keypair(key_size: int = RSA_KEY_SIZE) -> KeyPairPEM:
    """Generate an RSA keypair usable with RS* and PS* algorithms."""
    private_key = rsa.generate_private_key(
        public_exponent=RSA_PUBLIC_EXPONENT,
        key_size=key_size,
    )
    return _to_pem_pair(private_key)


def generate_ec_keypair(alg: str = "ES256") -> KeyPairPEM:
    """Generate an EC keypair on the curve required by ``alg``."""
    try:
        curve = EC_CURVES[alg]
    except KeyError as exc:
        raise ValueError(f"no EC curve for alg {alg!r}") from exc
    return _to_pem_pair(ec.generate_private_key(curve))


def generate_hmac_secret(length: int = HMAC_SECRET_BYTES) -> bytes:
    """Generate a random HMAC secret."""
    return secrets.token_bytes(length)

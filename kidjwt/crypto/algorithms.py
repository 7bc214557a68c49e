"""Algorithm resolution and loading of signing/verifying keys by family."""

from typing import Any

import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from kidjwt.core.errors import InvalidAlgorithmError
from kidjwt.crypto.types import Algorithm, AlgorithmFamily

ALGORITHM_FAMILIES: dict[Algorithm, AlgorithmFamily] = {
    Algorithm.HS256: AlgorithmFamily.HMAC,
    Algorithm.HS384: AlgorithmFamily.HMAC,
    Algorithm.HS512: AlgorithmFamily.HMAC,
    Algorithm.RS256: AlgorithmFamily.RSA,
    Algorithm.RS384: AlgorithmFamily.RSA,
    Algorithm.RS512: AlgorithmFamily.RSA,
    Algorithm.PS256: AlgorithmFamily.RSA,
    Algorithm.PS384: AlgorithmFamily.RSA,
    Algorithm.PS512: AlgorithmFamily.RSA,
    Algorithm.ES256: AlgorithmFamily.ECDSA,
    Algorithm.ES384: AlgorithmFamily.ECDSA,
    Algorithm.ES512: AlgorithmFamily.ECDSA,
}

AVAILABLE_ALGS = ",".join(ALGORITHM_FAMILIES)

_PRIVATE_KEY_TYPES: dict[AlgorithmFamily, type] = {
    AlgorithmFamily.RSA: rsa.RSAPrivateKey,
    AlgorithmFamily.ECDSA: ec.EllipticCurvePrivateKey,
}

_PUBLIC_KEY_TYPES: dict[AlgorithmFamily, type] = {
    AlgorithmFamily.RSA: rsa.RSAPublicKey,
    AlgorithmFamily.ECDSA: ec.EllipticCurvePublicKey,
}


def resolve_algorithm(alg: str | Algorithm) -> Algorithm:
    """Return the signable Algorithm named by ``alg``.

    ``none`` is a recognized name but never signable.
    """
    try:
        algorithm = Algorithm(alg)
    except ValueError as exc:
        raise InvalidAlgorithmError(
            f"Incorrect alg: {alg}. Available algs: {AVAILABLE_ALGS}"
        ) from exc
    if algorithm not in ALGORITHM_FAMILIES:
        raise InvalidAlgorithmError(
            f"Unsigned alg {algorithm} is not supported. "
            f"Available algs: {AVAILABLE_ALGS}"
        )
    return algorithm


def algorithm_family(algorithm: Algorithm) -> AlgorithmFamily:
    """Return the key family of a signable algorithm."""
    return ALGORITHM_FAMILIES[resolve_algorithm(algorithm)]


def _as_bytes(key: bytes | str) -> bytes:
    return key.encode() if isinstance(key, str) else bytes(key)


def load_signing_key(algorithm: Algorithm, key: bytes | str) -> Any:
    """Load a signing key: raw secret for HMAC, PEM private key otherwise."""
    family = algorithm_family(algorithm)
    raw = _as_bytes(key)
    if family is AlgorithmFamily.HMAC:
        return raw
    private_key = serialization.load_pem_private_key(raw, password=None)
    if not isinstance(private_key, _PRIVATE_KEY_TYPES[family]):
        raise jwt.InvalidKeyError(
            f"{algorithm} requires a {family} private key, "
            f"got {type(private_key).__name__}"
        )
    return private_key


def load_verifying_key(algorithm: Algorithm, key: bytes | str) -> Any:
    """Load a verifying key: raw secret for HMAC, PEM public key otherwise."""
    family = algorithm_family(algorithm)
    raw = _as_bytes(key)
    if family is AlgorithmFamily.HMAC:
        return raw
    public_key = serialization.load_pem_public_key(raw)
    if not isinstance(public_key, _PUBLIC_KEY_TYPES[family]):
        raise jwt.InvalidKeyError(
            f"{algorithm} requires a {family} public key, "
            f"got {type(public_key).__name__}"
        )
    return public_key


def verifying_key_for(algorithm: Algorithm, sign_key: Any) -> Any:
    """Derive the verifying key that matches a loaded signing key."""
    if algorithm_family(algorithm) is AlgorithmFamily.HMAC:
        return sign_key
    return sign_key.public_key()

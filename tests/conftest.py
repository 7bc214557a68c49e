"""Shared test fixtures for kidjwt."""

from pathlib import Path

import pytest

from kidjwt.crypto.keys import (
    generate_ec_keypair,
    generate_hmac_secret,
    generate_rsa_keypair,
)
from kidjwt.crypto.types import KeyPairPEM

HMAC_ALGS = ["HS256", "HS384", "HS512"]
RSA_ALGS = ["RS256", "RS384", "RS512", "PS256", "PS384", "PS512"]
EC_ALGS = ["ES256", "ES384", "ES512"]


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep parser settings independent of the developer's environment."""
    for name in (
        "KIDJWT_PARSER_DECODE_NUMBERS_AS_EXACT_DECIMAL",
        "KIDJWT_PARSER_VERIFY_TIME_CLAIMS",
        "KIDJWT_PARSER_LEEWAY_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def rsa_keypair() -> KeyPairPEM:
    return generate_rsa_keypair()


@pytest.fixture(scope="session")
def other_rsa_keypair() -> KeyPairPEM:
    return generate_rsa_keypair()


@pytest.fixture(scope="session")
def ec_keypairs() -> dict[str, KeyPairPEM]:
    return {alg: generate_ec_keypair(alg) for alg in EC_ALGS}


@pytest.fixture(scope="session")
def hmac_secret() -> bytes:
    return generate_hmac_secret()


@pytest.fixture(scope="session")
def key_pairs(
    rsa_keypair: KeyPairPEM,
    ec_keypairs: dict[str, KeyPairPEM],
    hmac_secret: bytes,
) -> dict[str, tuple[bytes, bytes]]:
    """Signing and verifying key bytes for every supported algorithm."""
    pairs: dict[str, tuple[bytes, bytes]] = {}
    for alg in HMAC_ALGS:
        pairs[alg] = (hmac_secret, hmac_secret)
    for alg in RSA_ALGS:
        pairs[alg] = (
            rsa_keypair.private_key_pem.encode(),
            rsa_keypair.public_key_pem.encode(),
        )
    for alg in EC_ALGS:
        kp = ec_keypairs[alg]
        pairs[alg] = (kp.private_key_pem.encode(), kp.public_key_pem.encode())
    return pairs


@pytest.fixture
def rsa_key_files(tmp_path: Path, rsa_keypair: KeyPairPEM) -> tuple[Path, Path]:
    """Write the RSA keypair to PEM files and return (private, public)."""
    private = tmp_path / "rsa-private.pem"
    public = tmp_path / "rsa-public.pem"
    private.write_text(rsa_keypair.private_key_pem)
    public.write_text(rsa_keypair.public_key_pem)
    return private, public


@pytest.fixture
def hmac_key_file(tmp_path: Path, hmac_secret: bytes) -> Path:
    path = tmp_path / "hmac.key"
    path.write_bytes(hmac_secret)
    return path

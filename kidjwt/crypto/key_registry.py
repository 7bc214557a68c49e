"""In-memory registry of key material indexed by kid."""

import logging
from pathlib import Path

from kidjwt.core.errors import KeyNotFoundError
from kidjwt.crypto.algorithms import (
    algorithm_family,
    load_signing_key,
    load_verifying_key,
    resolve_algorithm,
    verifying_key_for,
)
from kidjwt.crypto.keys import read_key_file
from kidjwt.crypto.rwlock import RWLock
from kidjwt.crypto.types import Algorithm, AlgorithmFamily, KeyMaterial

logger = logging.getLogger(__name__)


def _require_kid(kid: str) -> None:
    if not kid:
        raise ValueError("kid must not be empty")


class KeyRegistry:
    """Maps kid to KeyMaterial behind a readers-writer lock.

    Lookups run concurrently; set and delete are exclusive with every
    other access. Entries stay until deleted or the registry is dropped.
    """

    def __init__(self) -> None:
        self._keys: dict[str, KeyMaterial] = {}
        self._lock = RWLock()

    def _install(self, kid: str, key: KeyMaterial) -> None:
        with self._lock.write():
            self._keys[kid] = key
        logger.debug("Registered key kid=%s alg=%s", kid, key.algorithm)

    def set_key(
        self,
        kid: str,
        alg: Algorithm | str,
        sign_key: bytes | str,
        verify_key: bytes | str | None = None,
    ) -> KeyMaterial:
        """Parse in-memory key bytes and install them under ``kid``.

        ``verify_key`` is ignored for HMAC algorithms. For asymmetric
        algorithms it is derived from the private key when omitted.
        Any previous entry for ``kid`` is replaced.
        """
        _require_kid(kid)
        algorithm = resolve_algorithm(alg)
        signing = load_signing_key(algorithm, sign_key)
        if algorithm_family(algorithm) is AlgorithmFamily.HMAC or verify_key is None:
            verifying = verifying_key_for(algorithm, signing)
        else:
            verifying = load_verifying_key(algorithm, verify_key)
        key = KeyMaterial(algorithm=algorithm, sign_key=signing, verify_key=verifying)
        self._install(kid, key)
        return key

    def set_key_from_file(
        self,
        kid: str,
        alg: Algorithm | str,
        sign_key_file: str | Path,
        verify_key_file: str | Path | None = None,
    ) -> KeyMaterial:
        """Read key files and install the parsed key under ``kid``.

        HMAC algorithms read only ``sign_key_file``; its secret doubles as
        the verifying key.
        """
        _require_kid(kid)
        algorithm = resolve_algorithm(alg)
        sign_key = read_key_file(sign_key_file)
        verify_key = None
        if algorithm_family(algorithm) is not AlgorithmFamily.HMAC and verify_key_file:
            verify_key = read_key_file(verify_key_file)
        return self.set_key(kid, algorithm, sign_key, verify_key)

    def set_hmac_key(
        self, kid: str, alg: Algorithm | str, key_file: str | Path
    ) -> KeyMaterial:
        self._require_family(alg, AlgorithmFamily.HMAC)
        return self.set_key_from_file(kid, alg, key_file)

    def set_rsa_key(
        self,
        kid: str,
        alg: Algorithm | str,
        private_key_file: str | Path,
        public_key_file: str | Path,
    ) -> KeyMaterial:
        self._require_family(alg, AlgorithmFamily.RSA)
        return self.set_key_from_file(kid, alg, private_key_file, public_key_file)

    def set_ecdsa_key(
        self,
        kid: str,
        alg: Algorithm | str,
        private_key_file: str | Path,
        public_key_file: str | Path,
    ) -> KeyMaterial:
        self._require_family(alg, AlgorithmFamily.ECDSA)
        return self.set_key_from_file(kid, alg, private_key_file, public_key_file)

    @staticmethod
    def _require_family(alg: Algorithm | str, family: AlgorithmFamily) -> None:
        algorithm = resolve_algorithm(alg)
        if algorithm_family(algorithm) is not family:
            raise ValueError(f"{algorithm} is not a {family} algorithm")

    def get_key(self, kid: str) -> KeyMaterial:
        """Return the key material for ``kid``."""
        _require_kid(kid)
        with self._lock.read():
            key = self._keys.get(kid)
        if key is None:
            raise KeyNotFoundError(f"no key registered for kid {kid!r}")
        return key

    def delete_key(self, kid: str) -> None:
        """Remove ``kid``; raises KeyNotFoundError if it is not registered."""
        self.get_key(kid)
        with self._lock.write():
            self._keys.pop(kid, None)
        logger.debug("Deleted key kid=%s", kid)

    def kids(self) -> list[str]:
        with self._lock.read():
            return list(self._keys)

    def __contains__(self, kid: object) -> bool:
        with self._lock.read():
            return kid in self._keys

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._keys)

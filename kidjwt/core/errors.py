"""Error taxonomy for signing, parsing and key lookup."""

import jwt


class KidJWTError(Exception):
    """Base class for every error raised by kidjwt."""


class InvalidAlgorithmError(KidJWTError, ValueError):
    """Algorithm name is not one of the signable algorithms."""


class KeyNotFoundError(KidJWTError, LookupError):
    """No key material is registered under the requested kid."""


class SignerNotFoundError(KidJWTError, LookupError):
    """No signer is registered under the requested kid."""


class ParserNotFoundError(KidJWTError, LookupError):
    """No parser is registered under the kid embedded in a token."""


class InvalidSignerError(KidJWTError):
    """Signer is missing its algorithm or signing key."""


class InvalidParserError(KidJWTError):
    """Parser is missing its algorithm or verifying key."""


class InvalidMultiKeySignerError(KidJWTError):
    """Multi-key signer has no signer mapping."""


class InvalidMultiKeyParserError(KidJWTError):
    """Multi-key parser has no parser mapping."""


class InvalidTokenError(KidJWTError, jwt.InvalidTokenError):
    """Signature did not verify or the token names an unexpected algorithm."""


class InvalidPartCountError(KidJWTError, jwt.DecodeError):
    """Token does not split into exactly three dot-separated segments."""


class KidNotFoundError(KidJWTError, jwt.InvalidTokenError):
    """Token carries no kid where one is required for routing."""


class KidTypeError(KidJWTError, jwt.InvalidTokenError):
    """Token carries a kid that is not a string."""

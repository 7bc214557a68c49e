"""Kid-indexed JWT signing and verification across multiple keys."""

from kidjwt.core.errors import (
    InvalidAlgorithmError,
    InvalidMultiKeyParserError,
    InvalidMultiKeySignerError,
    InvalidParserError,
    InvalidPartCountError,
    InvalidSignerError,
    InvalidTokenError,
    KeyNotFoundError,
    KidJWTError,
    KidNotFoundError,
    KidTypeError,
    ParserNotFoundError,
    SignerNotFoundError,
)
from kidjwt.core.settings import ParserConfig
from kidjwt.crypto.claims import Claim, ClaimSet, claim, time_claim
from kidjwt.crypto.jwt_manager import JWTManager
from kidjwt.crypto.key_registry import KeyRegistry
from kidjwt.crypto.multi_key import MultiKeyParser, MultiKeySigner
from kidjwt.crypto.parser import (
    Parser,
    parse_claims_unverified,
    parse_header_unverified,
)
from kidjwt.crypto.signer import Signer
from kidjwt.crypto.types import Algorithm, DecodedToken, KeyMaterial

__all__ = [
    "Algorithm",
    "Claim",
    "ClaimSet",
    "DecodedToken",
    "InvalidAlgorithmError",
    "InvalidMultiKeyParserError",
    "InvalidMultiKeySignerError",
    "InvalidParserError",
    "InvalidPartCountError",
    "InvalidSignerError",
    "InvalidTokenError",
    "JWTManager",
    "KeyMaterial",
    "KeyNotFoundError",
    "KeyRegistry",
    "KidJWTError",
    "KidNotFoundError",
    "KidTypeError",
    "MultiKeyParser",
    "MultiKeySigner",
    "Parser",
    "ParserConfig",
    "ParserNotFoundError",
    "Signer",
    "SignerNotFoundError",
    "claim",
    "parse_claims_unverified",
    "parse_header_unverified",
    "time_claim",
]

"""Parser configuration loaded from explicit arguments or the environment."""

from pydantic_settings import BaseSettings, SettingsConfigDict

LEEWAY_SECONDS_DEFAULT = 0


class ParserConfig(BaseSettings):
    """Options controlling how a verified token payload is decoded.

    Fields may be overridden with ``KIDJWT_PARSER_*`` environment variables;
    values passed to the constructor always take precedence.

    decode_numbers_as_exact_decimal:
        Decode JSON numbers with a fractional part or exponent as
        ``decimal.Decimal`` (default) instead of ``float``. Integers always
        decode as ``int``.
    verify_time_claims:
        Reject tokens whose ``exp``, ``nbf`` or ``iat`` claims, when present,
        place them outside their validity window.
    leeway_seconds:
        Clock skew tolerated when checking time claims.
    """

    model_config = SettingsConfigDict(env_prefix="KIDJWT_PARSER_", frozen=True)

    decode_numbers_as_exact_decimal: bool = True
    verify_time_claims: bool = True
    leeway_seconds: int = LEEWAY_SECONDS_DEFAULT

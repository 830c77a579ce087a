"""Default configuration parameters for the conversation service."""

from dataclasses import dataclass, field

DEFAULT_EXCHANGES = ("OKX", "Bybit", "Deribit", "Binance")


def _default_coin_aliases() -> dict[str, str]:
    # Checked in insertion order as substrings of the lower-cased symbol
    return {
        "btc": "bitcoin",
        "bitcoin": "bitcoin",
        "eth": "ethereum",
        "ethereum": "ethereum",
    }


@dataclass(frozen=True)
class ExchangeParams:
    """Venues a caller may choose from, in tie-break priority order."""
    names: tuple[str, ...] = DEFAULT_EXCHANGES


@dataclass(frozen=True)
class PriceGatewayParams:
    """Price lookup gateway parameters."""
    base_url: str = "https://api.coingecko.com/api/v3/simple/price"
    vs_currency: str = "usd"
    timeout_seconds: float = 5.0                 # Upper bound per lookup
    fallback_price: float = 65123.45             # Quoted when the coin is unknown upstream
    coin_aliases: dict[str, str] = field(default_factory=_default_coin_aliases)
    user_agent: str = "quantbot/0.1"


@dataclass(frozen=True)
class ServerParams:
    """HTTP server parameters."""
    host: str = "0.0.0.0"
    port: int = 8080


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class AppConfig:
    """Complete application configuration."""
    exchanges: ExchangeParams
    price_gateway: PriceGatewayParams
    server: ServerParams
    logging: LoggingParams


def get_default_config() -> AppConfig:
    """Get the default configuration instance."""
    return AppConfig(
        exchanges=ExchangeParams(),
        price_gateway=PriceGatewayParams(),
        server=ServerParams(),
        logging=LoggingParams(),
    )

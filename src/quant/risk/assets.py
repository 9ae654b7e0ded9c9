"""Per-asset risk configuration and the supported-asset registry."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from quant.exceptions import UnsupportedAssetError

_LN_10 = Decimal(10).ln()


def log10_bounds(width: str) -> tuple[Decimal, Decimal]:
    """Symmetric deviation bounds given in log10 units, as natural-log bounds."""
    half = Decimal(width) * _LN_10
    return -half, half


@dataclass(frozen=True)
class AssetRiskConfig:
    """Identifier mapping and model parameters for one supported asset.

    ``deviation_bounds`` are natural-log distances from the fitted price
    that map to risk 0 and 1. When None, the +-2 sigma band of the fitted
    channel is used instead. Prices dated before ``origin_date`` are not
    part of the fit.
    """

    asset_id: str  # Ticker symbol, e.g. "BTC"
    gecko_id: str  # CoinGecko coin id
    display_name: str
    confidence_level: int  # 1-9, grows with available history
    exchange_symbol: str | None = None  # Spot pair on the reference exchange
    origin_date: date | None = None  # First tradeable day
    deviation_bounds: tuple[Decimal, Decimal] | None = None
    min_history_points: int | None = None  # Overrides RiskSettings.min_history_points


DEFAULT_ASSET_CONFIGS: tuple[AssetRiskConfig, ...] = (
    AssetRiskConfig(
        "BTC", "bitcoin", "Bitcoin", 9, "BTCUSDT",
        origin_date=date(2009, 1, 3),
        deviation_bounds=log10_bounds("0.8"),
    ),
    AssetRiskConfig(
        "ETH", "ethereum", "Ethereum", 8, "ETHUSDT",
        origin_date=date(2015, 7, 30),
        deviation_bounds=log10_bounds("0.7"),
    ),
    AssetRiskConfig(
        "SOL", "solana", "Solana", 6, "SOLUSDT",
        origin_date=date(2020, 4, 10),
        deviation_bounds=log10_bounds("0.6"),
    ),
    AssetRiskConfig(
        "BNB", "binancecoin", "BNB", 7, "BNBUSDT",
        origin_date=date(2017, 7, 25),
        deviation_bounds=log10_bounds("0.65"),
    ),
    AssetRiskConfig(
        "SUI", "sui", "Sui", 4, "SUIUSDT",
        origin_date=date(2023, 5, 3),
        deviation_bounds=log10_bounds("0.5"),
    ),
    AssetRiskConfig(
        "UNI", "uniswap", "Uniswap", 5, "UNIUSDT",
        origin_date=date(2020, 9, 17),
        deviation_bounds=log10_bounds("0.55"),
    ),
    AssetRiskConfig(
        "ONDO", "ondo-finance", "Ondo", 3, "ONDOUSDT",
        origin_date=date(2024, 1, 18),
        deviation_bounds=log10_bounds("0.45"),
    ),
    AssetRiskConfig(
        "RENDER", "render-token", "Render", 5, "RENDERUSDT",
        origin_date=date(2020, 6, 10),
        deviation_bounds=log10_bounds("0.55"),
    ),
)



class AssetRegistry:
    """Case-insensitive lookup of asset configurations by symbol or CoinGecko id.

    Args:
        configs: Supported assets. Defaults to DEFAULT_ASSET_CONFIGS.
    """

    def __init__(self, configs: tuple[AssetRiskConfig, ...] | list[AssetRiskConfig] | None = None) -> None:
        configs = DEFAULT_ASSET_CONFIGS if configs is None else configs
        self._by_symbol = {c.asset_id.upper(): c for c in configs}
        self._by_gecko_id = {c.gecko_id.lower(): c for c in configs}

    def get(self, symbol: str) -> AssetRiskConfig:
        """Return the config for a symbol.

        Raises:
            UnsupportedAssetError: If the symbol has no configuration.
        """
        config = self._by_symbol.get(symbol.upper())
        if config is None:
            raise UnsupportedAssetError(symbol)
        return config

    def get_by_gecko_id(self, gecko_id: str) -> AssetRiskConfig:
        """Return the config for a CoinGecko id.

        Raises:
            UnsupportedAssetError: If the id has no configuration.
        """
        config = self._by_gecko_id.get(gecko_id.lower())
        if config is None:
            raise UnsupportedAssetError(gecko_id)
        return config

    def is_supported(self, symbol: str) -> bool:
        return symbol.upper() in self._by_symbol

    @property
    def symbols(self) -> list[str]:
        return list(self._by_symbol)

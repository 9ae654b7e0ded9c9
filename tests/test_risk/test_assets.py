"""Tests for the supported-asset registry."""

from decimal import Decimal

import pytest

from quant.exceptions import UnsupportedAssetError
from quant.risk.assets import DEFAULT_ASSET_CONFIGS, AssetRegistry, AssetRiskConfig, log10_bounds


class TestAssetRegistry:
    def test_default_assets(self) -> None:
        registry = AssetRegistry()
        assert registry.symbols == [c.asset_id for c in DEFAULT_ASSET_CONFIGS]
        assert "BTC" in registry.symbols

    def test_lookup_is_case_insensitive(self) -> None:
        registry = AssetRegistry()
        assert registry.get("eth").gecko_id == "ethereum"
        assert registry.get_by_gecko_id("Bitcoin").asset_id == "BTC"

    def test_unsupported_raises(self) -> None:
        with pytest.raises(UnsupportedAssetError) as exc_info:
            AssetRegistry().get("DOGE")
        assert exc_info.value.asset_id == "DOGE"

    def test_custom_registry(self) -> None:
        registry = AssetRegistry([AssetRiskConfig("XRP", "ripple", "XRP", 4)])
        assert registry.is_supported("xrp")
        assert not registry.is_supported("BTC")
        with pytest.raises(UnsupportedAssetError):
            registry.get_by_gecko_id("bitcoin")


class TestModelParameters:
    def test_defaults_carry_origin_and_bounds(self) -> None:
        for config in DEFAULT_ASSET_CONFIGS:
            assert config.origin_date is not None
            low, high = config.deviation_bounds
            assert low == -high
            assert high > 0

    def test_log10_bounds_converted_to_natural_log(self) -> None:
        low, high = log10_bounds("0.8")
        assert abs(high - Decimal("1.842068074")) < Decimal("1e-9")
        assert low == -high

    def test_longer_history_gets_wider_bounds(self) -> None:
        registry = AssetRegistry()
        assert registry.get("BTC").deviation_bounds[1] > registry.get("ONDO").deviation_bounds[1]

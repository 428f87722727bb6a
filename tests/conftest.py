"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from synthledger.config import (
    AppConfig,
    EngineConfig,
    FeedServiceConfig,
    PriceOracleConfig,
    PythConfig,
)
from synthledger.engine import SynthEngine
from synthledger.oracles import ManualPriceFeed
from synthledger.tokens import Erc20Token, StableUnit

START_TIME = 1_700_000_000

ETH_USD_PRICE = 2000 * 10**8
BTC_USD_PRICE = 1000 * 10**8

STARTING_BALANCE = 1000 * 10**18

ENGINE = "0x" + "e" * 40
USER = "0x" + "1" * 40
LIQUIDATOR = "0x" + "2" * 40


class FakeClock:
    """Callable clock that tests move forward by hand."""

    def __init__(self, now: int) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


# ---------------------------------------------------------------------------
# Feeds and tokens
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(START_TIME)


@pytest.fixture()
def eth_feed(clock: FakeClock) -> ManualPriceFeed:
    feed = ManualPriceFeed(description="ETH / USD")
    feed.update_answer(ETH_USD_PRICE, timestamp=clock.now)
    return feed


@pytest.fixture()
def btc_feed(clock: FakeClock) -> ManualPriceFeed:
    feed = ManualPriceFeed(description="BTC / USD")
    feed.update_answer(BTC_USD_PRICE, timestamp=clock.now)
    return feed


@pytest.fixture()
def weth() -> Erc20Token:
    return Erc20Token("Wrapped Ether", "WETH", address="0x" + "a" * 40)


@pytest.fixture()
def wbtc() -> Erc20Token:
    return Erc20Token("Wrapped Bitcoin", "WBTC", address="0x" + "b" * 40)


@pytest.fixture()
def stable_unit() -> StableUnit:
    return StableUnit(owner=ENGINE, address="0x" + "c" * 40)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


@pytest.fixture()
def engine(
    weth: Erc20Token,
    wbtc: Erc20Token,
    eth_feed: ManualPriceFeed,
    btc_feed: ManualPriceFeed,
    stable_unit: StableUnit,
    clock: FakeClock,
) -> SynthEngine:
    return SynthEngine(
        [weth, wbtc], [eth_feed, btc_feed], stable_unit, clock=clock, address=ENGINE
    )


@pytest.fixture()
def funded(engine: SynthEngine, weth: Erc20Token, wbtc: Erc20Token) -> SynthEngine:
    """Engine whose user and liquidator hold collateral approved for deposit."""
    for account in (USER, LIQUIDATOR):
        for token in (weth, wbtc):
            token.mint(account, STARTING_BALANCE)
            token.approve(account, ENGINE, STARTING_BALANCE)
    return engine


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_pyth_config() -> PythConfig:
    return PythConfig(
        hermes_url="https://hermes.example.com/v2/updates/price/latest",
        feeds={"ETH/USD": "aaa111", "BTC/USD": "bbb222"},
    )


@pytest.fixture()
def sample_app_config(sample_pyth_config: PythConfig) -> AppConfig:
    return AppConfig(
        engine=EngineConfig(
            collateral_assets=("WETH", "WBTC"),
            price_feeds=("ETH/USD", "BTC/USD"),
            debt_token="SUSD",
        ),
        price_oracle=PriceOracleConfig(provider="pyth", pyth=sample_pyth_config),
        feed_service=FeedServiceConfig(refresh_interval_seconds=30),
    )


SAMPLE_YAML = textwrap.dedent("""\
    engine:
      collateral_assets: [WETH, WBTC]
      price_feeds: [ETH/USD, BTC/USD]
      debt_token: SUSD
    price_oracle:
      provider: pyth
      pyth:
        hermes_url: "https://hermes.example.com"
        feeds: {ETH/USD: "aaa", BTC/USD: "bbb"}
    feed_service:
      refresh_interval_seconds: 30
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file

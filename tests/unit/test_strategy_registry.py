"""Unit tests for gcrawl.strategies.registry: StrategyRegistry, error types,
entry-point loading, and strategy construction.
"""
from __future__ import annotations

import logging
import random
from unittest.mock import MagicMock, patch

import pytest

from gcrawl.config import CrawlConfig
from gcrawl.crawler.state import CrawlState
from gcrawl.errors import ConfigError
from gcrawl.grammar import Element
from gcrawl.strategies import (
    CoverageAwareCrawl,
    CrawlStrategy,
    FullCrawl,
    RandomCrawl,
    StrategyAlreadyRegisteredError,
    StrategyConfigError,
    StrategyNotFoundError,
    StrategyRegistry,
    create_strategy,
    default_registry,
)


class NeverCrawl(CrawlStrategy):
    def should_crawl(self, element: Element) -> bool:
        return False


class NotAStrategy:
    """Does NOT subclass CrawlStrategy; used for error path testing."""


def _fresh_registry() -> StrategyRegistry:
    return StrategyRegistry()


def _make_entry_point(name: str, load_return: object = None, load_raises: Exception | None = None) -> MagicMock:
    ep = MagicMock()
    ep.name = name
    if load_raises is not None:
        ep.load.side_effect = load_raises
    else:
        ep.load.return_value = load_return
    return ep


# ===========================================================================
# Error types
# ===========================================================================


class TestErrors:
    def test_not_found_is_key_error(self) -> None:
        error = StrategyNotFoundError("nope", ["full"])
        assert isinstance(error, KeyError)
        assert error.strategy_name == "nope"
        assert "full" in str(error)

    def test_already_registered_is_value_error(self) -> None:
        error = StrategyAlreadyRegisteredError("full")
        assert isinstance(error, ValueError)
        assert "full" in str(error)

    def test_config_error_hierarchy(self) -> None:
        error = StrategyConfigError("coverage-aware", "a crawler is required")
        assert isinstance(error, ConfigError)
        assert isinstance(error, ValueError)
        assert "a crawler is required" in str(error)


# ===========================================================================
# Registration
# ===========================================================================


class TestRegistration:
    def test_decorator_returns_class_unchanged(self) -> None:
        registry = _fresh_registry()
        decorated = registry.register("never")(NeverCrawl)
        assert decorated is NeverCrawl
        assert registry.get("never") is NeverCrawl

    def test_register_duplicate_raises(self) -> None:
        registry = _fresh_registry()
        registry.register_class("never", NeverCrawl)
        with pytest.raises(StrategyAlreadyRegisteredError):
            registry.register_class("never", FullCrawl)

    def test_register_non_strategy_raises(self) -> None:
        with pytest.raises(TypeError):
            _fresh_registry().register_class("bad", NotAStrategy)  # type: ignore[arg-type]

    def test_deregister(self) -> None:
        registry = _fresh_registry()
        registry.register_class("never", NeverCrawl)
        registry.deregister("never")
        assert "never" not in registry

    def test_deregister_unknown_raises(self) -> None:
        with pytest.raises(StrategyNotFoundError):
            _fresh_registry().deregister("ghost")

    def test_len_and_repr(self) -> None:
        registry = _fresh_registry()
        registry.register_class("never", NeverCrawl)
        assert len(registry) == 1
        assert "never" in repr(registry)

    def test_registration_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="gcrawl.strategies.registry"):
            _fresh_registry().register_class("never", NeverCrawl)
        assert "Registered strategy 'never'" in caplog.text


# ===========================================================================
# Default registry and construction
# ===========================================================================


class TestDefaultRegistry:
    def test_builtins_registered(self) -> None:
        assert default_registry.list_strategies() == ["coverage-aware", "full", "random"]

    def test_get_unknown_raises(self) -> None:
        with pytest.raises(StrategyNotFoundError) as exc_info:
            default_registry.get("greedy")
        assert exc_info.value.available == ["coverage-aware", "full", "random"]

    def test_create_full(self) -> None:
        assert isinstance(create_strategy("full"), FullCrawl)

    def test_create_random_uses_config(self) -> None:
        strategy = create_strategy("random", config=CrawlConfig(strategy="random", random_threshold=0.7))
        assert isinstance(strategy, RandomCrawl)
        assert strategy.threshold == 0.7

    def test_create_coverage_aware(self, digit_state: CrawlState) -> None:
        config = CrawlConfig(fallback_probability=0.1)
        strategy = create_strategy("coverage-aware", crawler=digit_state, config=config)
        assert isinstance(strategy, CoverageAwareCrawl)
        assert strategy.fallback_probability == 0.1

    def test_coverage_aware_without_crawler_raises(self) -> None:
        with pytest.raises(StrategyConfigError) as exc_info:
            create_strategy("coverage-aware")
        assert exc_info.value.strategy_name == "coverage-aware"

    def test_seeded_config_gives_repeatable_decisions(self, digit_state: CrawlState, digit_ref: Element) -> None:
        digit_state.element_usage["0"] = 1
        config = CrawlConfig(seed=99)
        a = create_strategy("coverage-aware", crawler=digit_state, config=config)
        b = create_strategy("coverage-aware", crawler=digit_state, config=config)
        assert [a.should_crawl(digit_ref) for _ in range(100)] == [
            b.should_crawl(digit_ref) for _ in range(100)
        ]

    def test_explicit_rng_wins(self) -> None:
        rng = MagicMock(spec=random.Random)
        rng.random.return_value = 0.9
        strategy = create_strategy("random", rng=rng, config=CrawlConfig(seed=1))
        assert strategy.should_crawl(MagicMock()) is True
        rng.random.assert_called_once()


# ===========================================================================
# Entry-point loading
# ===========================================================================


class TestLoadEntrypoints:
    def test_registers_loaded_class(self) -> None:
        registry = _fresh_registry()
        ep = _make_entry_point("never", load_return=NeverCrawl)
        with patch("importlib.metadata.entry_points", return_value=[ep]) as mock_eps:
            registry.load_entrypoints()
        mock_eps.assert_called_once_with(group="gcrawl.strategies")
        assert registry.get("never") is NeverCrawl

    def test_already_registered_is_skipped(self) -> None:
        registry = _fresh_registry()
        registry.register_class("never", NeverCrawl)
        ep = _make_entry_point("never", load_return=FullCrawl)
        with patch("importlib.metadata.entry_points", return_value=[ep]):
            registry.load_entrypoints()
        ep.load.assert_not_called()
        assert registry.get("never") is NeverCrawl

    def test_load_failure_is_logged_and_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = _fresh_registry()
        ep = _make_entry_point("broken", load_raises=ImportError("no module"))
        with patch("importlib.metadata.entry_points", return_value=[ep]):
            with caplog.at_level(logging.ERROR, logger="gcrawl.strategies.registry"):
                registry.load_entrypoints()
        assert "broken" not in registry
        assert "Failed to load entry-point 'broken'" in caplog.text

    def test_wrong_type_is_warned_and_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = _fresh_registry()
        ep = _make_entry_point("bad", load_return=NotAStrategy)
        with patch("importlib.metadata.entry_points", return_value=[ep]):
            with caplog.at_level(logging.WARNING, logger="gcrawl.strategies.registry"):
                registry.load_entrypoints()
        assert "bad" not in registry
        assert "could not be registered" in caplog.text

"""Strategy registry for grammar-crawl.

Maps strategy names to :class:`~gcrawl.strategies.base.CrawlStrategy`
subclasses.  The built-in strategies are registered in
:data:`default_registry` under ``"full"``, ``"random"`` and
``"coverage-aware"``.  Third-party strategies register via the decorator
or by declaring entry-points in their own ``pyproject.toml`` under the
``gcrawl.strategies`` group.

Example
-------
Register a strategy with the decorator::

    from gcrawl.strategies import CrawlStrategy, default_registry

    @default_registry.register("never")
    class NeverCrawl(CrawlStrategy):
        def should_crawl(self, element) -> bool:
            return False

Build one by name::

    strategy = default_registry.create("coverage-aware", crawler=state)
"""
from __future__ import annotations

import importlib.metadata
import logging
import random
from collections.abc import Callable
from typing import TYPE_CHECKING

from gcrawl.errors import ConfigError
from gcrawl.strategies.base import CrawlStrategy, FullCrawl, RandomCrawl
from gcrawl.strategies.coverage import CoverageAwareCrawl

if TYPE_CHECKING:
    from gcrawl.config import CrawlConfig
    from gcrawl.crawler.state import Crawler

logger = logging.getLogger(__name__)

ENTRYPOINT_GROUP = "gcrawl.strategies"


class StrategyNotFoundError(KeyError):
    """Raised when a requested strategy name is not in the registry."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.strategy_name = name
        self.available = available
        super().__init__(
            f"Strategy {name!r} is not registered. "
            f"Available strategies: {', '.join(available) or '<none>'}."
        )


class StrategyAlreadyRegisteredError(ValueError):
    """Raised when attempting to register a name that already exists."""

    def __init__(self, name: str) -> None:
        self.strategy_name = name
        super().__init__(
            f"Strategy {name!r} is already registered. "
            "Use a unique name or deregister the existing entry first."
        )


class StrategyConfigError(ConfigError):
    """Raised when a strategy cannot be built from the given arguments."""

    def __init__(self, name: str, reason: str) -> None:
        self.strategy_name = name
        super().__init__(f"Cannot create strategy {name!r}: {reason}")


class StrategyRegistry:
    """Name -> :class:`CrawlStrategy` subclass registry."""

    def __init__(self) -> None:
        self._strategies: dict[str, type[CrawlStrategy]] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, name: str) -> Callable[[type[CrawlStrategy]], type[CrawlStrategy]]:
        """Return a class decorator that registers the decorated class.

        Raises
        ------
        StrategyAlreadyRegisteredError
            If ``name`` is already in use.
        TypeError
            If the decorated class does not subclass ``CrawlStrategy``.
        """

        def decorator(cls: type[CrawlStrategy]) -> type[CrawlStrategy]:
            self.register_class(name, cls)
            return cls

        return decorator

    def register_class(self, name: str, cls: type[CrawlStrategy]) -> None:
        """Register ``cls`` under ``name`` without decorator syntax."""
        if name in self._strategies:
            raise StrategyAlreadyRegisteredError(name)
        if not (isinstance(cls, type) and issubclass(cls, CrawlStrategy)):
            raise TypeError(
                f"Cannot register {cls!r} under {name!r}: "
                "it must be a subclass of CrawlStrategy."
            )
        self._strategies[name] = cls
        logger.debug("Registered strategy %r -> %s", name, cls.__qualname__)

    def deregister(self, name: str) -> None:
        """Remove a strategy from the registry.

        Raises
        ------
        StrategyNotFoundError
            If ``name`` is not registered.
        """
        if name not in self._strategies:
            raise StrategyNotFoundError(name, self.list_strategies())
        del self._strategies[name]
        logger.debug("Deregistered strategy %r", name)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> type[CrawlStrategy]:
        """Return the class registered under ``name``."""
        try:
            return self._strategies[name]
        except KeyError:
            raise StrategyNotFoundError(name, self.list_strategies()) from None

    def list_strategies(self) -> list[str]:
        """Return all registered names in alphabetical order."""
        return sorted(self._strategies)

    def create(
        self,
        name: str,
        crawler: Crawler | None = None,
        rng: random.Random | None = None,
        config: CrawlConfig | None = None,
    ) -> CrawlStrategy:
        """Instantiate the strategy registered under ``name``.

        Parameters
        ----------
        name:
            Registered strategy name.
        crawler:
            Crawler state, required by strategies that read usage counts.
        rng:
            Random source.  Defaults to ``config.make_rng()``.
        config:
            Strategy parameters.  Defaults to :class:`CrawlConfig`.

        Raises
        ------
        StrategyNotFoundError
            If ``name`` is not registered.
        StrategyConfigError
            If the strategy needs a crawler and none was given, or its
            parameters are invalid.
        """
        from gcrawl.config import CrawlConfig

        cls = self.get(name)
        if cls.requires_crawler and crawler is None:
            raise StrategyConfigError(name, "a crawler is required")
        config = config or CrawlConfig(strategy=name)
        rng = rng if rng is not None else config.make_rng()
        try:
            return cls.from_config(crawler, rng, config)
        except StrategyConfigError:
            raise
        except ConfigError as exc:
            raise StrategyConfigError(name, str(exc)) from exc

    def __contains__(self, name: object) -> bool:
        return name in self._strategies

    def __len__(self) -> int:
        return len(self._strategies)

    def __repr__(self) -> str:
        return f"StrategyRegistry(strategies={self.list_strategies()})"

    # ------------------------------------------------------------------
    # Entry-point loading
    # ------------------------------------------------------------------

    def load_entrypoints(self, group: str = ENTRYPOINT_GROUP) -> None:
        """Discover and register strategies declared as package entry-points.

        Names that are already registered are skipped, so repeated calls
        are idempotent.  Entry-points that fail to import or register are
        logged and skipped.

        In a downstream package's ``pyproject.toml``::

            [project.entry-points."gcrawl.strategies"]
            weighted = "my_package.strategies:WeightedCrawl"
        """
        for ep in importlib.metadata.entry_points(group=group):
            if ep.name in self._strategies:
                logger.debug("Entry-point %r already registered; skipping.", ep.name)
                continue
            try:
                cls = ep.load()
            except Exception:
                logger.exception(
                    "Failed to load entry-point %r from group %r; skipping.",
                    ep.name,
                    group,
                )
                continue
            try:
                self.register_class(ep.name, cls)
            except (StrategyAlreadyRegisteredError, TypeError):
                logger.warning(
                    "Entry-point %r loaded but could not be registered; skipping.",
                    ep.name,
                )


default_registry = StrategyRegistry()
default_registry.register_class("full", FullCrawl)
default_registry.register_class("random", RandomCrawl)
default_registry.register_class("coverage-aware", CoverageAwareCrawl)


def create_strategy(
    name: str,
    crawler: Crawler | None = None,
    rng: random.Random | None = None,
    config: CrawlConfig | None = None,
) -> CrawlStrategy:
    """Build a strategy by name from :data:`default_registry`."""
    return default_registry.create(name, crawler=crawler, rng=rng, config=config)

"""Strategy lookup.

A strategy is any module in navtile/strategies/ with a module-level
`strategy` object of type Strategy. Modules starting with an underscore are
skipped. The package is scanned once, on first lookup.
"""

import importlib
import pkgutil

import navtile.strategies
from navtile.core.types import Strategy

_strategies: dict[str, Strategy] = {}


def _scan() -> None:
    for info in pkgutil.iter_modules(navtile.strategies.__path__):
        if info.name.startswith('_'):
            continue
        module = importlib.import_module(f'{navtile.strategies.__name__}.{info.name}')
        strat = getattr(module, 'strategy', None)
        if isinstance(strat, Strategy):
            _strategies[strat.name] = strat


def all_strategies() -> dict[str, Strategy]:
    """Every registered strategy, keyed by name."""
    if not _strategies:
        _scan()
    return _strategies


def get(name: str) -> Strategy:
    """Look up one strategy. Unknown names raise KeyError listing the known ones."""
    strategies = all_strategies()
    try:
        return strategies[name]
    except KeyError:
        raise KeyError(f'Unknown strategy: {name}. Available: {", ".join(sorted(strategies))}') from None

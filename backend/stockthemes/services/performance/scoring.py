"""
Relative Strength Scoring

Composite weighted performance compared against a benchmark.
"""

from typing import Iterable

from stockthemes.schemas.performance import Performance

# Horizon weights, most recent first
WEIGHTS = {
    "perf_1m": 0.30,
    "perf_3m": 0.40,
    "perf_6m": 0.20,
    "perf_1y": 0.10,
}


def multiplier(perf: Performance) -> float:
    """1 + weighted percent return / 100."""
    weighted = sum(getattr(perf, field) * weight for field, weight in WEIGHTS.items())
    return 1 + weighted / 100


def relative_strength(perf: Performance, benchmark: Performance) -> float:
    return multiplier(perf) / multiplier(benchmark)


def rank_by_relative_strength(
    perfs: Iterable[Performance], benchmark: Performance
) -> list[tuple[Performance, float]]:
    """(performance, rs) pairs, strongest first; ties keep input order."""
    scored = [(p, relative_strength(p, benchmark)) for p in perfs]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored

"""Normalization for tornado bar widths and heatmap colors.

Only the numbers; drawing belongs to the UI. Non-finite metric values
(failed variants, non-convergent IRR) are excluded from ranges and map to
None, which the UI renders as "N/A".
"""

from decimal import Decimal

from immo_analyzer.models.sensitivity import HeatmapDataPoint, TornadoDataPoint

MIDPOINT = Decimal("0.5")
HUNDRED = Decimal("100")


def normalize(value: Decimal, lo: Decimal, hi: Decimal) -> Decimal:
    """Position of value in [lo, hi] as 0..1; the midpoint if the range is empty."""
    if hi == lo:
        return MIDPOINT
    return min(Decimal("1"), max(Decimal("0"), (value - lo) / (hi - lo)))


def finite_range(values: list[Decimal]) -> tuple[Decimal, Decimal] | None:
    finite = [v for v in values if v.is_finite()]
    if not finite:
        return None
    return min(finite), max(finite)


def tornado_bar_widths(
    points: list[TornadoDataPoint],
) -> list[tuple[Decimal | None, Decimal | None]]:
    """(min-side, max-side) widths as percent of the largest absolute delta."""
    deltas = [
        tuple(
            abs(impact - p.base_value) if impact.is_finite() and p.base_value.is_finite() else None
            for impact in (p.min_impact, p.max_impact)
        )
        for p in points
    ]
    finite = [d for pair in deltas for d in pair if d is not None]
    largest = max(finite) if finite else Decimal("0")
    return [
        tuple(
            None if d is None else normalize(d, Decimal("0"), largest) * HUNDRED
            for d in pair
        )
        for pair in deltas
    ]


def heatmap_color(value: Decimal, lo: Decimal, hi: Decimal) -> tuple[int, int, int]:
    """Red -> yellow -> green as (r, g, b); higher values are greener."""
    n = float(normalize(value, lo, hi))
    if n < 0.5:
        return 255, round(255 * n * 2), 100
    return round(255 * (1 - (n - 0.5) * 2)), 255, 100


def css_rgb(color: tuple[int, int, int]) -> str:
    return "rgb({}, {}, {})".format(*color)


def heatmap_colors(points: list[HeatmapDataPoint]) -> list[tuple[int, int, int] | None]:
    bounds = finite_range([p.value for p in points])
    if bounds is None:
        return [None] * len(points)
    lo, hi = bounds
    return [heatmap_color(p.value, lo, hi) if p.value.is_finite() else None for p in points]

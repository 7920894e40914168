from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from immo_analyzer.models.inputs import InputField


class Metric(Enum):
    IRR_10 = "irr10"
    IRR_20 = "irr20"
    IRR_40 = "irr40"
    CASHFLOW = "cashflow"  # Cumulative net cash flow at the horizon
    NETWORTH = "networth"

    @property
    def is_percent(self) -> bool:
        return self.value.startswith("irr")


@dataclass(frozen=True)
class SensitivityVariable:
    key: InputField
    name: str
    min: Decimal
    max: Decimal
    step: Decimal
    current_value: Decimal
    unit: str = "%"

    def __post_init__(self):
        if self.min >= self.max:
            raise ValueError(f"{self.name}: min must be below max")
        if self.step <= 0:
            raise ValueError(f"{self.name}: step must be positive")
        if not self.contains(self.current_value):
            raise ValueError(
                f"{self.name}: current value {self.current_value} outside [{self.min}, {self.max}]"
            )

    def clamp(self, value: Decimal) -> Decimal:
        return min(self.max, max(self.min, value))

    def contains(self, value: Decimal) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class TornadoDataPoint:
    variable: str
    key: InputField
    base_value: Decimal
    min_impact: Decimal  # Metric at variable = min (absolute, not a delta)
    max_impact: Decimal  # Metric at variable = max

    @property
    def total_impact(self) -> Decimal:
        """|min - base| + |max - base|, ignoring non-finite legs."""
        total = Decimal("0")
        if not self.base_value.is_finite():
            return total
        for impact in (self.min_impact, self.max_impact):
            if impact.is_finite():
                total += abs(impact - self.base_value)
        return total


@dataclass(frozen=True)
class HeatmapDataPoint:
    row: int  # Y index
    col: int  # X index
    x_value: Decimal
    y_value: Decimal
    value: Decimal

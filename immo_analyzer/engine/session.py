"""Analysis session: one input snapshot plus the sweeps requested for it.

Inputs can change while a sweep runs (e.g. from another thread serving the
UI). Each refresh captures a generation number and refuses to hand back
results once the inputs have moved on.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import date

from immo_analyzer.models.inputs import PropertyInputs
from immo_analyzer.models.results import ProjectionResult
from immo_analyzer.models.scenario import Scenario
from immo_analyzer.models.sensitivity import (
    HeatmapDataPoint,
    Metric,
    SensitivityVariable,
    TornadoDataPoint,
)
from immo_analyzer.engine.cache import compute_projection_cached
from immo_analyzer.engine.proforma import default_start_date
from immo_analyzer.engine.scenarios import base_scenario
from immo_analyzer.engine.sensitivity import (
    compute_heatmap,
    compute_scenarios,
    compute_tornado,
    default_sensitivity_variables,
)

logger = logging.getLogger(__name__)


class StaleSweepError(RuntimeError):
    """Inputs changed while a sweep was running; its results were dropped."""


@dataclass(frozen=True)
class SweepRequest:
    horizon: int = 40
    tornado_metric: Metric | None = None  # None = tornado not shown
    heatmap_metric: Metric | None = None
    heatmap_x: SensitivityVariable | None = None
    heatmap_y: SensitivityVariable | None = None
    compare_scenarios: bool = False


@dataclass(frozen=True)
class SessionSnapshot:
    generation: int
    base: ProjectionResult
    tornado: list[TornadoDataPoint] = field(default_factory=list)
    heatmap: list[HeatmapDataPoint] = field(default_factory=list)
    scenarios: dict[str, ProjectionResult | None] = field(default_factory=dict)


class AnalysisSession:
    def __init__(self, inputs: PropertyInputs, start_date: date | None = None):
        self._lock = threading.Lock()
        self._inputs = inputs
        self._generation = 0
        self.start_date = start_date or default_start_date()
        self.scenarios: tuple[Scenario, ...] = (base_scenario(),)

    @property
    def inputs(self) -> PropertyInputs:
        return self._inputs

    @property
    def generation(self) -> int:
        return self._generation

    def update_inputs(self, inputs: PropertyInputs) -> int:
        """Replace the input snapshot; in-flight sweeps become stale."""
        with self._lock:
            self._inputs = inputs
            self._generation += 1
            return self._generation

    def variables(self) -> list[SensitivityVariable]:
        return default_sensitivity_variables(self._inputs)

    def refresh(self, request: SweepRequest) -> SessionSnapshot:
        """Base projection plus only the sweeps the request asks for."""
        with self._lock:
            generation = self._generation
            inputs = self._inputs

        base = compute_projection_cached(inputs, self.start_date)
        tornado: list[TornadoDataPoint] = []
        heatmap: list[HeatmapDataPoint] = []
        scenarios: dict[str, ProjectionResult | None] = {}

        if request.tornado_metric is not None:
            tornado = compute_tornado(
                inputs, default_sensitivity_variables(inputs),
                request.tornado_metric, request.horizon, self.start_date,
            )
        if request.heatmap_metric is not None:
            if request.heatmap_x is None or request.heatmap_y is None:
                raise ValueError("Heatmap requires both axis variables")
            heatmap = compute_heatmap(
                inputs, request.heatmap_x, request.heatmap_y,
                request.heatmap_metric, request.horizon, self.start_date,
            )
        if request.compare_scenarios:
            scenarios = compute_scenarios(
                inputs, list(self.scenarios), request.horizon, self.start_date
            )

        with self._lock:
            if generation != self._generation:
                logger.info(
                    "Discarding sweep for generation %d (current %d)",
                    generation, self._generation,
                )
                raise StaleSweepError(f"Inputs changed during sweep (generation {generation})")

        return SessionSnapshot(
            generation=generation,
            base=base,
            tornado=tornado,
            heatmap=heatmap,
            scenarios=scenarios,
        )

"""IRR computation using scipy's Newton-Raphson.

Pure functions. No I/O.
"""

import logging
import warnings
from decimal import Decimal, ROUND_HALF_UP

import numpy as np
from scipy.optimize import newton

from immo_analyzer.models.results import IRRResult

logger = logging.getLogger(__name__)

SIX_PLACES = Decimal("0.000001")
INITIAL_GUESS = 0.10
MAX_ITERATIONS = 100
TOLERANCE = 0.0001


def npv(rate: float, cash_flows: list[float]) -> float:
    """Net present value of annual cash flows, cash_flows[0] at t=0."""
    cf = np.asarray(cash_flows, dtype=float)
    t = np.arange(len(cf))
    with np.errstate(all="ignore"):
        return float(np.sum(cf / (1 + rate) ** t))


def _npv_derivative(rate: float, cash_flows: list[float]) -> float:
    cf = np.asarray(cash_flows, dtype=float)
    t = np.arange(len(cf))
    with np.errstate(all="ignore"):
        return float(np.sum(-t * cf / (1 + rate) ** (t + 1)))


def compute_irr(cash_flows: list[Decimal]) -> IRRResult:
    """Compute IRR (as a percentage) from a vector of annual cash flows.

    cash_flows[0] should be negative (initial equity).
    cash_flows[-1] should include the liquidation equity.

    A series without a sign change has no root; the solver then stops on a
    vanishing derivative or the iteration budget. The last estimate is kept
    and the result is flagged as not converged.
    """
    if not cash_flows or len(cash_flows) < 2:
        return IRRResult(rate=Decimal("0"), converged=False)

    cf_float = [float(cf) for cf in cash_flows]

    with warnings.catch_warnings():
        # Zero derivative / non-convergence are reported via the flag
        warnings.simplefilter("ignore", RuntimeWarning)
        root, status = newton(
            npv,
            INITIAL_GUESS,
            fprime=_npv_derivative,
            args=(cf_float,),
            tol=TOLERANCE,
            maxiter=MAX_ITERATIONS,
            full_output=True,
            disp=False,
        )

    rate = float(root) * 100
    if not np.isfinite(rate):
        logger.warning("IRR estimate diverged after %d iterations", status.iterations)
        return IRRResult(rate=Decimal("NaN"), converged=False, iterations=status.iterations)

    converged = bool(status.converged)
    if not converged:
        logger.warning(
            "IRR did not converge after %d iterations (%s); keeping last estimate",
            status.iterations, status.flag,
        )

    estimate = Decimal(str(rate))
    # quantize needs the digits to fit the context precision
    if estimate.adjusted() < 15:
        estimate = estimate.quantize(SIX_PLACES, ROUND_HALF_UP)

    return IRRResult(
        rate=estimate,
        converged=converged,
        iterations=status.iterations,
    )

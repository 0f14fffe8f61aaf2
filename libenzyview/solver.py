import logging
import math
import numpy as np
from scipy.integrate import quad

from .errors import UnsupportedModelError
from .kinetics import RateModel
from .models import (
    BatchProfile,
    BatchSample,
    FeedConcentrations,
    ReactorConfig,
    ReactorTrainResult,
    SteadyStateResult,
    StoichiometricCoefficients,
)
from .settings import DEFAULT_SETTINGS, SolverSettings
from .stoichiometry import compute_concentrations

logger = logging.getLogger(__name__)

class ReactorSolver:
    """Batch, CSTR and CSTR-train performance for one rate model."""

    def __init__(self, model: RateModel, settings: SolverSettings = None):
        self.model = model
        self.settings = settings if settings is not None else DEFAULT_SETTINGS

    # ─────────────────────────────────────────────────────────
    #  BATCH
    # ─────────────────────────────────────────────────────────
    def solve_batch(self, feed: FeedConcentrations, stoich: StoichiometricCoefficients,
                    xmax: float, deactivation: bool = False, kd: float = 0.0) -> BatchProfile:
        """
        Reaction time as a function of conversion:
            t(X) = S10 * integral(0 -> X) dX' / v(S1(X'))
        by the composite trapezoidal rule on equal steps up to
        min(xmax, conversion_max).

        With deactivation, Vmax at step i is Vmax0 * exp(-kd * t) where t is
        the time accumulated up to step i-1.
        """
        x_limit = min(xmax, self.settings.conversion_max)
        n_steps = self.settings.data_points
        h = x_limit / n_steps
        s10 = feed.s10
        vmax0 = self.model.params.vmax
        decaying = deactivation and kd is not None and kd > 0

        logger.debug("Batch solve: mechanism=%s x_limit=%.4f steps=%d deactivation=%s",
                     self.model.mechanism, x_limit, n_steps, decaying)

        v0 = float(self.model.rate(s10))
        prev_integrand = s10 / v0 if v0 > 0 else 0.0
        samples = [BatchSample(t=0.0, s1=feed.s10, s2=feed.s20, p1=feed.p10, p2=feed.p20,
                               x=0.0, v=v0, degenerate=not v0 > 0)]

        t = 0.0
        for i in range(1, n_steps + 1):
            x = i * h
            conc = compute_concentrations(feed, stoich, x)
            vmax = vmax0 * math.exp(-kd * t) if decaying else None
            v = float(self.model.rate(conc.s1, vmax=vmax))

            # v <= 0: integrand taken as zero, the step adds only the previous half-trapezoid
            integrand = s10 / v if v > 0 else 0.0
            t += 0.5 * (prev_integrand + integrand) * h
            prev_integrand = integrand

            samples.append(BatchSample(t=t, s1=conc.s1, s2=conc.s2, p1=conc.p1, p2=conc.p2,
                                       x=x, v=v, degenerate=not v > 0))

        profile = BatchProfile(samples=samples)
        if profile.degenerate_count:
            logger.warning("Batch profile has %d sample(s) with non-positive rate; "
                           "elapsed time is underestimated there.", profile.degenerate_count)
        logger.debug("Batch solve done: X=%.4f t=%.6g", profile.final.x, profile.final.t)
        return profile

    def reference_batch_time(self, feed: FeedConcentrations, stoich: StoichiometricCoefficients,
                             x: float) -> float:
        """Adaptive-quadrature batch time to conversion x, without deactivation."""
        x = min(x, self.settings.conversion_max)

        def integrand(xp):
            conc = compute_concentrations(feed, stoich, xp)
            return feed.s10 / self.model.rate(conc.s1)

        value, _ = quad(integrand, 0.0, x, limit=200)
        return value

    # ─────────────────────────────────────────────────────────
    #  CSTR
    # ─────────────────────────────────────────────────────────
    def _design_function(self, feed, stoich, tau, x):
        conc = compute_concentrations(feed, stoich, x)
        v = float(self.model.rate(conc.s1))
        if v <= 0:
            return math.inf, conc, v
        return feed.s10 * x / v - tau, conc, v

    def check_monotonicity(self, feed: FeedConcentrations, stoich: StoichiometricCoefficients,
                           tau: float):
        """
        Sample f(X) = S10*X/v(S1(X)) - tau on (0, conversion_max] and fail if it
        ever decreases. Bisection is only meaningful for increasing f.
        """
        n = self.settings.monotonicity_samples
        xs = np.linspace(0.0, self.settings.conversion_max, n + 1)[1:]
        values = np.array([self._design_function(feed, stoich, tau, x)[0] for x in xs])
        with np.errstate(invalid="ignore"):
            drops = np.diff(values) < 0
        if np.any(drops):
            at = xs[1:][drops][0]
            raise UnsupportedModelError(
                f"Model/parameter combination not supported: CSTR design function "
                f"decreases near X={at:.4f} for mechanism '{self.model.mechanism}'."
            )

    def solve_cstr(self, feed: FeedConcentrations, stoich: StoichiometricCoefficients,
                   volume: float, flow_rate: float) -> SteadyStateResult:
        """
        Steady-state conversion from tau = V/F = S10*X / v(S1(X)), by bisection
        on [0, conversion_max]. f(X) is assumed to increase with X. When the
        iteration budget runs out the midpoint of the last bracket is returned
        with converged=False.
        """
        with np.errstate(divide="ignore", invalid="ignore"):
            tau = float(np.float64(volume) / flow_rate)
        tol = self.settings.bisection_tol
        max_iter = self.settings.bisection_max_iter
        if self.settings.check_monotonicity:
            self.check_monotonicity(feed, stoich, tau)

        lo, hi = 0.0, self.settings.conversion_max
        for iteration in range(1, max_iter + 1):
            mid = (lo + hi) / 2
            f, conc, v = self._design_function(feed, stoich, tau, mid)
            if v <= 0:
                hi = mid
                continue
            if abs(f) < tol:
                logger.debug("CSTR converged: X=%.6f after %d iterations", mid, iteration)
                return self._steady_state(conc, mid, v, tau, True, iteration)
            if f > 0:
                hi = mid
            else:
                lo = mid

        x_final = (lo + hi) / 2
        _, conc, v = self._design_function(feed, stoich, tau, x_final)
        logger.warning("CSTR bisection did not reach tolerance %.1e in %d iterations; "
                       "returning X=%.6f", tol, max_iter, x_final)
        return self._steady_state(conc, x_final, v, tau, False, max_iter)

    @staticmethod
    def _steady_state(conc, x, v, tau, converged, iterations):
        return SteadyStateResult(x=x, s1=conc.s1, s2=conc.s2, p1=conc.p1, p2=conc.p2,
                                 v=v, tau=tau, converged=converged, iterations=iterations)

    def solve_series(self, feed: FeedConcentrations, stoich: StoichiometricCoefficients,
                     volume: float, flow_rate: float, n_reactors: int) -> ReactorTrainResult:
        """N equal CSTRs of volume V/N; each reactor is fed the previous one's effluent."""
        with np.errstate(divide="ignore", invalid="ignore"):
            reactor_volume = float(np.float64(volume) / n_reactors)
        current = feed
        reactors = []
        for index in range(n_reactors):
            result = self.solve_cstr(current, stoich, reactor_volume, flow_rate)
            logger.debug("Reactor %d/%d: X=%.6f S1=%.6g", index + 1, n_reactors, result.x, result.s1)
            reactors.append(result)
            current = result.effluent()
        return ReactorTrainResult(reactors=reactors, feed_s10=feed.s10)

def simulate(config: ReactorConfig, settings: SolverSettings = None):
    """
    Build the rate model for a configuration and run the selected mode.
    batch -> BatchProfile; cstr -> ReactorTrainResult with one reactor;
    series -> ReactorTrainResult with n_reactors reactors.
    """
    solver = ReactorSolver(config.build_model(), settings)
    feed = config.feed()
    stoich = config.stoichiometry()

    if config.mode == "batch":
        return solver.solve_batch(feed, stoich, config.xmax, config.deactivation, config.kd)
    if config.mode == "cstr":
        result = solver.solve_cstr(feed, stoich, config.volume, config.flow_rate)
        return ReactorTrainResult(reactors=[result], feed_s10=feed.s10)
    return solver.solve_series(feed, stoich, config.volume, config.flow_rate, config.n_reactors)

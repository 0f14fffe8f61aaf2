import logging
import numpy as np

from .equations import SWEEP_PARAMETERS
from .errors import ConfigurationError
from .models import BatchProfile, ReactorConfig
from .solver import simulate

logger = logging.getLogger(__name__)

def sweep_parameter(config: ReactorConfig, name: str, values, settings=None):
    """
    Re-solve a configuration once per value of one parameter.

    Every point is an independent simulate() call on a re-validated copy of
    the configuration; nothing is shared with the baseline run.
    Returns a list of (value, result) pairs.
    """
    allowed = SWEEP_PARAMETERS.get(config.mechanism)
    if allowed is None:
        raise ConfigurationError(f"Unknown model type: {config.mechanism}")
    if name not in allowed:
        raise ConfigurationError(
            f"'{name}' cannot be swept for mechanism '{config.mechanism}'. "
            f"Choose from: {', '.join(allowed)}"
        )

    base = config.model_dump()
    results = []
    for value in values:
        point = ReactorConfig.model_validate({**base, name: float(value)})
        results.append((float(value), simulate(point, settings)))
    logger.debug("Swept %s over %d values (mode=%s)", name, len(results), config.mode)
    return results

def summarize(result) -> float:
    """
    Headline number of a run: batch time to reach the final conversion, or the
    overall conversion leaving a CSTR train.
    """
    if isinstance(result, BatchProfile):
        return result.final.t
    return result.overall_conversion

def sweep_summary(config: ReactorConfig, name: str, values, settings=None):
    """summarize() for each swept value, as (values, summaries) numpy arrays."""
    points = sweep_parameter(config, name, values, settings)
    xs = np.array([v for v, _ in points])
    summaries = np.array([summarize(r) for _, r in points])
    return xs, summaries

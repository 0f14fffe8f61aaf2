from enum import Enum
from typing import Optional, Tuple
import numpy as np
from pydantic import BaseModel, ConfigDict

from .equations import MODEL_REGISTRY, MECHANISM_FIELDS
from .errors import ConfigurationError
from .models import KineticParameters

class Mechanism(str, Enum):
    NONE = "none"
    COMPETITIVE = "competitive"
    NONCOMPETITIVE = "noncompetitive"
    UNCOMPETITIVE = "uncompetitive"
    PARTIALLY_COMPETITIVE = "partially-competitive"
    PARTIALLY_NONCOMPETITIVE = "partially-noncompetitive"
    SUBSTRATE = "substrate"

class RateModel(BaseModel):
    """
    A rate law bound to its kinetic parameters.

    The model is never mutated. Callers that need a temporarily different
    Vmax (enzyme deactivation) pass it to rate() instead, so one instance
    can serve several solves at once.
    """
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    mechanism: Mechanism
    params: KineticParameters

    @property
    def equation(self):
        return MODEL_REGISTRY[self.mechanism]

    def _call_args(self, vmax):
        args = {"vmax": self.params.vmax if vmax is None else vmax, "km": self.params.km}
        for name in MECHANISM_FIELDS[self.mechanism]:
            args[name] = getattr(self.params, name)
        # numpy scalars so zero constants give inf/nan rather than ZeroDivisionError
        return {name: np.float64(value) for name, value in args.items()}

    def rate(self, s, vmax: Optional[float] = None):
        """Reaction rate at limiting-substrate concentration s (float or array)."""
        with np.errstate(divide="ignore", invalid="ignore"):
            return self.equation(s, **self._call_args(vmax))

    def apparent_constants(self) -> Tuple[float, Optional[float]]:
        """
        Apparent (Vmax, Km) of the equivalent Michaelis-Menten law.
        Substrate inhibition has no such form; its Km(app) is None.
        """
        p = self.params
        if self.mechanism == "none":
            return p.vmax, p.km
        if self.mechanism == "substrate":
            return p.vmax, None
        alpha = 1 + p.i / p.ki
        if self.mechanism == "competitive":
            return p.vmax, p.km * alpha
        if self.mechanism == "noncompetitive":
            return p.vmax / alpha, p.km
        if self.mechanism == "uncompetitive":
            return p.vmax / alpha, p.km / alpha
        if self.mechanism == "partially-competitive":
            return p.vmax, p.km * alpha / (1 + p.i / p.ksi)
        # partially-noncompetitive
        return (p.vmax + p.k2i * p.et * p.i / p.ki) / alpha, p.km

def create_model(mechanism, params: KineticParameters) -> RateModel:
    """Build the rate model for a mechanism key. Unknown keys are rejected."""
    key = mechanism.value if isinstance(mechanism, Mechanism) else mechanism
    if key not in MODEL_REGISTRY:
        raise ConfigurationError(f"Unknown model type: {mechanism}")

    missing = [name for name in MECHANISM_FIELDS[key] if getattr(params, name) is None]
    if missing:
        raise ConfigurationError(f"Mechanism '{key}' requires parameters: {', '.join(missing)}")
    return RateModel(mechanism=key, params=params)

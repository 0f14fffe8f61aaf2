from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from typing import List, Literal, Optional
import numpy as np

from .equations import MECHANISM_FIELDS

class KineticParameters(BaseModel):
    """Rate-law constants. Fields the active mechanism does not use stay None."""
    model_config = ConfigDict(frozen=True)

    vmax: float
    km: float
    i: Optional[float] = None
    ki: Optional[float] = None
    ksi: Optional[float] = None
    k2i: Optional[float] = None
    et: Optional[float] = None

class StoichiometricCoefficients(BaseModel):
    """a S1 + b S2 -> c P1 + d P2"""
    model_config = ConfigDict(frozen=True)

    a: float = 1.0
    b: float = 0.0
    c: float = 1.0
    d: float = 0.0

class FeedConcentrations(BaseModel):
    model_config = ConfigDict(frozen=True)

    s10: float
    s20: float = 0.0
    p10: float = 0.0
    p20: float = 0.0

class Concentrations(BaseModel):
    model_config = ConfigDict(frozen=True)

    s1: float
    s2: float
    p1: float
    p2: float

    def as_feed(self) -> FeedConcentrations:
        return FeedConcentrations(s10=self.s1, s20=self.s2, p10=self.p1, p20=self.p2)

# ─────────────────────────────────────────────────────────────
#  SOLVER OUTPUTS
# ─────────────────────────────────────────────────────────────

class BatchSample(BaseModel):
    model_config = ConfigDict(frozen=True)

    t: float
    s1: float
    s2: float
    p1: float
    p2: float
    x: float
    v: float
    # True when v <= 0 and the integrand was replaced by zero
    degenerate: bool = False

class BatchProfile(BaseModel):
    """Time-ordered batch samples, starting from the unconverted feed at t = 0."""
    model_config = ConfigDict(frozen=True)

    samples: List[BatchSample]

    def __len__(self):
        return len(self.samples)

    def __getitem__(self, index):
        return self.samples[index]

    @property
    def final(self) -> BatchSample:
        return self.samples[-1]

    @property
    def degenerate_count(self) -> int:
        return sum(1 for p in self.samples if p.degenerate)

    # Helper to export columns as numpy arrays for plotting
    def to_arrays(self):
        return {
            name: np.array([getattr(p, name) for p in self.samples])
            for name in ("t", "s1", "s2", "p1", "p2", "x", "v")
        }

class SteadyStateResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    s1: float
    s2: float
    p1: float
    p2: float
    v: float
    tau: float
    converged: bool = True
    iterations: int = 0

    def effluent(self) -> FeedConcentrations:
        return FeedConcentrations(s10=self.s1, s20=self.s2, p10=self.p1, p20=self.p2)

class ReactorTrainResult(BaseModel):
    """Steady states of a CSTR train; reactor i's effluent is reactor i+1's feed."""
    model_config = ConfigDict(frozen=True)

    reactors: List[SteadyStateResult]
    feed_s10: float

    def __len__(self):
        return len(self.reactors)

    def __getitem__(self, index):
        return self.reactors[index]

    @property
    def final(self) -> SteadyStateResult:
        return self.reactors[-1]

    @property
    def overall_conversion(self) -> float:
        return 1.0 - self.final.s1 / self.feed_s10

    @property
    def converged(self) -> bool:
        return all(r.converged for r in self.reactors)

# ─────────────────────────────────────────────────────────────
#  INBOUND CONFIGURATION
# ─────────────────────────────────────────────────────────────

class ReactorConfig(BaseModel):
    """Validated numeric input for one simulation run."""
    mode: Literal["batch", "cstr", "series"] = "batch"
    mechanism: str = "none"

    # Stoichiometry
    a: float = 1.0
    b: float = 0.0
    c: float = 1.0
    d: float = 0.0

    # Initial / feed concentrations
    s10: float = 50.0
    s20: float = 0.0
    p10: float = 0.0
    p20: float = 0.0

    # Kinetics
    vmax: float = 100.0
    km: float = 10.0
    i: Optional[float] = None
    ki: Optional[float] = None
    ksi: Optional[float] = None
    k2i: Optional[float] = None
    et: Optional[float] = None

    # Batch
    xmax: float = 0.95
    deactivation: bool = False
    kd: Optional[float] = None

    # CSTR / series
    volume: Optional[float] = None
    flow_rate: Optional[float] = None
    n_reactors: int = 3

    @field_validator('a', 's10', 'vmax', 'km')
    @classmethod
    def must_be_positive(cls, v, info):
        if not v > 0:
            raise ValueError(f"{info.field_name} must be a positive number.")
        return v

    @field_validator('b', 'c', 'd', 's20', 'p10', 'p20')
    @classmethod
    def must_be_non_negative(cls, v, info):
        if not v >= 0:
            raise ValueError(f"{info.field_name} must be a non-negative number.")
        return v

    @model_validator(mode='after')
    def check_mode_fields(self):
        # Unknown mechanism keys are rejected by create_model, not here
        for name in MECHANISM_FIELDS.get(self.mechanism, ()):
            value = getattr(self, name)
            if value is None or not value > 0:
                raise ValueError(f"{name} must be a positive number for the '{self.mechanism}' mechanism.")

        if self.mode == "batch":
            if not 0 < self.xmax <= 1:
                raise ValueError("xmax must lie in (0, 1].")
            if self.deactivation and (self.kd is None or not self.kd > 0):
                raise ValueError("kd must be a positive number when deactivation is enabled.")
        else:
            for name in ("volume", "flow_rate"):
                value = getattr(self, name)
                if value is None or not value > 0:
                    raise ValueError(f"{name} must be a positive number.")
            if self.mode == "series" and self.n_reactors < 1:
                raise ValueError("n_reactors must be >= 1.")
        return self

    def kinetic_parameters(self) -> KineticParameters:
        fields = MECHANISM_FIELDS.get(self.mechanism, ())
        extra = {name: getattr(self, name) for name in fields}
        return KineticParameters(vmax=self.vmax, km=self.km, **extra)

    def stoichiometry(self) -> StoichiometricCoefficients:
        return StoichiometricCoefficients(a=self.a, b=self.b, c=self.c, d=self.d)

    def feed(self) -> FeedConcentrations:
        return FeedConcentrations(s10=self.s10, s20=self.s20, p10=self.p10, p20=self.p20)

    def build_model(self):
        from .kinetics import create_model
        return create_model(self.mechanism, self.kinetic_parameters())

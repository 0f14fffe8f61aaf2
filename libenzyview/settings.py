from pydantic import BaseModel, ConfigDict, Field, field_validator

class SolverSettings(BaseModel):
    """Numerical constants shared by the batch and CSTR solvers."""
    model_config = ConfigDict(frozen=True)

    # Number of trapezoidal steps for batch integration
    data_points: int = Field(default=200, ge=1)
    # Conversion ceiling; keeps S1 away from zero where v -> 0
    conversion_max: float = 0.9999
    # Absolute tolerance on f(X) = S10*X/v - tau (time units)
    bisection_tol: float = Field(default=1e-9, gt=0)
    bisection_max_iter: int = Field(default=200, ge=1)
    # Opt-in check that f(X) increases over the search interval
    check_monotonicity: bool = False
    monotonicity_samples: int = Field(default=50, ge=2)

    @field_validator('conversion_max')
    @classmethod
    def must_be_below_one(cls, v):
        if not 0 < v < 1:
            raise ValueError("conversion_max must lie strictly between 0 and 1.")
        return v

DEFAULT_SETTINGS = SolverSettings()

# libenzyview — Enzyme Reactor Performance Library
# Public API Exports

from .equations import MODEL_REGISTRY, MECHANISM_FIELDS, SWEEP_PARAMETERS
from .errors import EnzyViewError, ConfigurationError, UnsupportedModelError
from .kinetics import Mechanism, RateModel, create_model
from .models import (
    KineticParameters,
    StoichiometricCoefficients,
    FeedConcentrations,
    Concentrations,
    BatchSample,
    BatchProfile,
    SteadyStateResult,
    ReactorTrainResult,
    ReactorConfig,
)
from .settings import SolverSettings, DEFAULT_SETTINGS
from .stoichiometry import compute_concentrations
from .solver import ReactorSolver, simulate
from .sweep import sweep_parameter, sweep_summary, summarize
from .report import generate_batch_report, generate_cstr_report, generate_report

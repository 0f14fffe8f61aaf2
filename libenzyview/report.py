"""
libenzyview/report.py
─────────────────────────────────────────────────────────────────────────────
Plain-text report generator for reactor simulations.
Batch and continuous (single CSTR / CSTR train) reports are defined here.
Each report restates the inputs and the rate law so it can be read on its own.
"""
import datetime

from .models import BatchProfile, ReactorTrainResult
from .solver import ReactorSolver

_W  = 72        # line width
_DV = "═" * _W  # heavy divider
_DT = "·" * _W  # dot divider

def _sec(title):
    return f"\n{_DV}\n  {title}\n{_DV}\n"

def _sub(title):
    return f"\n  ── {title} {'─' * max(0, _W - len(title) - 6)}\n"


# ─────────────────────────────────────────────────────────────────────────────
#  MODEL THEORY  (rate law + effect on the apparent constants)
# ─────────────────────────────────────────────────────────────────────────────
MODEL_THEORY = {
    "none": {
        "name": "Michaelis-Menten (uninhibited)",
        "equation": "v = Vmax · [S] / (Km + [S])",
        "effect": "No inhibitor present.",
    },
    "competitive": {
        "name": "Competitive inhibition",
        "equation": "v = Vmax · [S] / (Km·(1 + [I]/KI) + [S])",
        "effect": "I competes with S for the active site: Km(app) rises, Vmax unchanged.",
    },
    "noncompetitive": {
        "name": "Non-competitive inhibition",
        "equation": "v = (Vmax / (1 + [I]/KI)) · [S] / (Km + [S])",
        "effect": "I binds E and ES equally: Vmax(app) falls, Km unchanged.",
    },
    "uncompetitive": {
        "name": "Uncompetitive inhibition",
        "equation": "v = (Vmax/(1+[I]/KI)) · [S] / (Km/(1+[I]/KI) + [S])",
        "effect": "I binds only ES: Vmax(app) and Km(app) fall by the same factor.",
    },
    "partially-competitive": {
        "name": "Partially competitive inhibition",
        "equation": "v = Vmax · [S] / (Km·(1+[I]/KI)/(1+[I]/KSI) + [S])",
        "effect": "EI still binds S (constant KSI): Km(app) rises towards a plateau.",
    },
    "partially-noncompetitive": {
        "name": "Partially non-competitive inhibition",
        "equation": "v = ((Vmax + k2I·[E]T·[I]/KI)/(1+[I]/KI)) · [S] / (Km + [S])",
        "effect": "ESI still turns over at k2I: Vmax(app) falls towards k2I·[E]T.",
    },
    "substrate": {
        "name": "Substrate inhibition (Haldane)",
        "equation": "v = Vmax · [S] / (Km + [S] + [S]²/KSI)",
        "effect": "Excess S forms an inactive SES complex: v passes through a maximum at [S] = √(Km·KSI).",
    },
}

PARAM_LABELS = {
    "vmax": "Vmax",
    "km":   "Km",
    "i":    "[I]  (inhibitor)",
    "ki":   "KI   (inhibition constant)",
    "ksi":  "KSI",
    "k2i":  "k2I  (ESI turnover)",
    "et":   "[E]T (total enzyme)",
}


def _header(lines, title):
    A = lines.append
    timestamp = datetime.datetime.now().strftime("%Y-%m-%d  %H:%M")
    A(_DV)
    A(f"  EnzyView  ·  {title}")
    A(_DV)
    A(f"  Generated  :  {timestamp}")
    A(_DT)

def _inputs(lines, config, c_unit, t_unit):
    A = lines.append
    theory = MODEL_THEORY.get(config.mechanism, {})
    model  = config.build_model()

    A(_sec("1.  REACTION AND KINETICS"))
    A(f"  Reaction          :  {config.a:g} S1 + {config.b:g} S2  →  {config.c:g} P1 + {config.d:g} P2")
    A(f"  Mechanism         :  {theory.get('name', config.mechanism)}")
    A(f"  Rate law          :  {theory.get('equation', '')}")
    if theory.get("effect"):
        A(f"  Effect            :  {theory['effect']}")

    A(_sub("Kinetic parameters"))
    for key, value in model.params.model_dump(exclude_none=True).items():
        A(f"  {PARAM_LABELS.get(key, key):<30}:  {value:.4g}")
    vmax_app, km_app = model.apparent_constants()
    A(f"  {'Vmax (apparent)':<30}:  {vmax_app:.4g} {c_unit}/{t_unit}")
    if km_app is not None:
        A(f"  {'Km (apparent)':<30}:  {km_app:.4g} {c_unit}")

    A(_sub("Initial / feed concentrations"))
    A(f"  [S1]₀ = {config.s10:.4g}   [S2]₀ = {config.s20:.4g}   "
      f"[P1]₀ = {config.p10:.4g}   [P2]₀ = {config.p20:.4g}   ({c_unit})")

def _footer(lines):
    A = lines.append
    A("")
    A(_DT)
    A("  EnzyView  ·  trapezoidal batch quadrature · bisection steady states")
    A(_DV)


# ─────────────────────────────────────────────────────────────────────────────
#  BATCH REPORT
# ─────────────────────────────────────────────────────────────────────────────
def generate_batch_report(config, profile: BatchProfile, c_unit="mM", t_unit="min",
                          table_rows=10, settings=None):
    """Batch reactor report: time course summary plus a sampled profile table."""
    lines = []
    A = lines.append
    _header(lines, "BATCH REACTOR REPORT")
    _inputs(lines, config, c_unit, t_unit)

    A(_sec("2.  OPERATING CONDITIONS"))
    A(f"  Target conversion :  {config.xmax:.2%}")
    A(f"  Reached conversion:  {profile.final.x:.2%}")
    if config.deactivation and config.kd:
        A(f"  Deactivation      :  Vmax(t) = Vmax · exp(−kd·t),  kd = {config.kd:.4g} 1/{t_unit}")
    else:
        A("  Deactivation      :  none")

    A(_sec("3.  RESULTS"))
    final = profile.final
    A(f"  Batch time        :  {final.t:.4g} {t_unit}")
    A(f"  Final [S1]        :  {final.s1:.4g} {c_unit}")
    A(f"  Final [P1]        :  {final.p1:.4g} {c_unit}")
    A(f"  Final rate        :  {final.v:.4g} {c_unit}/{t_unit}")

    A(_sub("Profile"))
    A(f"  {'t':>12} {'X':>8} {'[S1]':>10} {'[S2]':>10} {'[P1]':>10} {'[P2]':>10} {'v':>10}")
    stride = max(1, (len(profile) - 1) // max(1, table_rows))
    rows = list(range(0, len(profile), stride))
    if rows[-1] != len(profile) - 1:
        rows.append(len(profile) - 1)
    for idx in rows:
        p = profile[idx]
        flag = "  *" if p.degenerate else ""
        A(f"  {p.t:>12.4g} {p.x:>8.4f} {p.s1:>10.4g} {p.s2:>10.4g} {p.p1:>10.4g} {p.p2:>10.4g} {p.v:>10.4g}{flag}")

    A(_sec("4.  NUMERICAL QUALITY"))
    A(f"  Quadrature steps  :  {len(profile) - 1}")
    if profile.degenerate_count:
        A(f"  ⚠️ {profile.degenerate_count} sample(s) (marked *) had v ≤ 0; their time")
        A("  contribution was taken as zero, so the batch time is underestimated.")
    if not config.deactivation and not profile.degenerate_count:
        solver = ReactorSolver(config.build_model(), settings)
        reference = solver.reference_batch_time(config.feed(), config.stoichiometry(), final.x)
        rel = abs(final.t - reference) / reference if reference else 0.0
        A(f"  Adaptive quadrature check:  t = {reference:.6g} {t_unit}  (relative difference {rel:.2e})")

    _footer(lines)
    return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
#  CSTR / CSTR TRAIN REPORT
# ─────────────────────────────────────────────────────────────────────────────
def generate_cstr_report(config, result: ReactorTrainResult, c_unit="mM", t_unit="min", v_unit="L"):
    """Steady-state report for a single CSTR or a train of equal CSTRs."""
    lines = []
    A = lines.append
    title = "CSTR REPORT" if len(result) == 1 else "CSTRs IN SERIES REPORT"
    _header(lines, title)
    _inputs(lines, config, c_unit, t_unit)

    A(_sec("2.  OPERATING CONDITIONS"))
    A(f"  Total volume      :  {config.volume:.4g} {v_unit}")
    A(f"  Flow rate         :  {config.flow_rate:.4g} {v_unit}/{t_unit}")
    A(f"  Reactors          :  {len(result)}  (each {config.volume / len(result):.4g} {v_unit})")
    A(f"  Residence time    :  {result[0].tau:.4g} {t_unit} per reactor")

    A(_sec("3.  STEADY STATES"))
    A(f"  {'#':>3} {'X':>10} {'[S1]':>10} {'[S2]':>10} {'[P1]':>10} {'[P2]':>10} {'v':>10}  conv.")
    for n, r in enumerate(result.reactors, start=1):
        status = "yes" if r.converged else "NO"
        A(f"  {n:>3} {r.x:>10.6f} {r.s1:>10.4g} {r.s2:>10.4g} {r.p1:>10.4g} {r.p2:>10.4g} {r.v:>10.4g}  {status}")
    A("")
    A(f"  Overall conversion:  {result.overall_conversion:.4%}")
    if not result.converged:
        A("  ⚠️ At least one reactor exhausted the bisection budget; its conversion")
        A("  is the midpoint of the final bracket, not a converged root.")

    _footer(lines)
    return "\n".join(lines)

def generate_report(config, result, **kwargs):
    if isinstance(result, BatchProfile):
        return generate_batch_report(config, result, **kwargs)
    return generate_cstr_report(config, result, **kwargs)

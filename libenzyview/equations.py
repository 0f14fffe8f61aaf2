import numpy as np

def michaelis_menten(s, vmax, km):
    return (vmax * s) / (km + s)

def competitive_inhibition(s, vmax, km, i, ki):
    km_app = km * (1 + (i / ki))
    return (vmax * s) / (km_app + s)

def non_competitive_inhibition(s, vmax, km, i, ki):
    vmax_app = vmax / (1 + (i / ki))
    return (vmax_app * s) / (km + s)

def uncompetitive_inhibition(s, vmax, km, i, ki):
    term = (1 + (i / ki))
    return ((vmax / term) * s) / ((km / term) + s)

# --- PARTIAL (HYPERBOLIC) MODELS ---

def partially_competitive_inhibition(s, vmax, km, i, ki, ksi):
    """
    EI still binds substrate, with dissociation constant KSI.
    Km(app) = Km (1 + I/Ki) / (1 + I/Ksi)
    """
    km_app = km * (1 + (i / ki)) / (1 + (i / ksi))
    return (vmax * s) / (km_app + s)

def partially_non_competitive_inhibition(s, vmax, km, i, ki, k2i, et):
    """
    ESI still turns over, at rate constant k2I.
    Vmax(app) = (Vmax + k2I * Et * I/Ki) / (1 + I/Ki)
    """
    vmax_app = (vmax + k2i * et * (i / ki)) / (1 + (i / ki))
    return (vmax_app * s) / (km + s)

def substrate_inhibition(s, vmax, km, ksi):
    """
    Haldane substrate inhibition.
    v = (Vmax * S) / (Km + S + S^2/Ksi)
    """
    denom = km + s + (np.square(s) / ksi)
    return (vmax * s) / denom

MODEL_REGISTRY = {
    "none": michaelis_menten,
    "competitive": competitive_inhibition,
    "noncompetitive": non_competitive_inhibition,
    "uncompetitive": uncompetitive_inhibition,
    "partially-competitive": partially_competitive_inhibition,
    "partially-noncompetitive": partially_non_competitive_inhibition,
    "substrate": substrate_inhibition,
}

def _argument_names(equation):
    return equation.__code__.co_varnames[:equation.__code__.co_argcount]

# Mechanism-specific fields each rate law needs on top of (s, vmax, km)
MECHANISM_FIELDS = {
    key: tuple(a for a in _argument_names(eq) if a not in ("s", "vmax", "km"))
    for key, eq in MODEL_REGISTRY.items()
}

# Parameters an interactive sweep may vary, per mechanism
SWEEP_PARAMETERS = {
    key: ("vmax", "km", "s10") + fields
    for key, fields in MECHANISM_FIELDS.items()
}

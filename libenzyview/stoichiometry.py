from .models import Concentrations, FeedConcentrations, StoichiometricCoefficients

def compute_concentrations(feed: FeedConcentrations, stoich: StoichiometricCoefficients, x: float) -> Concentrations:
    """
    Species concentrations at conversion X of S1, for a S1 + b S2 -> c P1 + d P2.

    S1 = S10 (1 - X)
    S2 = S20 - (b/a) S10 X
    P1 = P10 + (c/a) S10 X
    P2 = P20 + (d/a) S10 X

    X is not bounded here: past the point where S2 is exhausted the result
    carries negative concentrations.
    """
    extent = feed.s10 * x
    return Concentrations(
        s1=feed.s10 * (1 - x),
        s2=feed.s20 - (stoich.b / stoich.a) * extent,
        p1=feed.p10 + (stoich.c / stoich.a) * extent,
        p2=feed.p20 + (stoich.d / stoich.a) * extent,
    )

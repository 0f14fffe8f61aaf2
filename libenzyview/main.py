import logging

from libenzyview.models import ReactorConfig
from libenzyview.solver import simulate
from libenzyview.report import generate_report

def run_demo():
    # 1. Uninhibited batch run to 95 % conversion
    batch = ReactorConfig(mode="batch", vmax=100, km=10, s10=50, xmax=0.95)

    # 2. Same kinetics in a single CSTR (tau = 5)
    cstr = ReactorConfig(mode="cstr", vmax=100, km=10, s10=50, volume=10, flow_rate=2)

    # 3. Competitive inhibitor, three CSTRs in series
    train = ReactorConfig(mode="series", mechanism="competitive", vmax=100, km=10, s10=50,
                          i=5, ki=5, volume=10, flow_rate=2, n_reactors=3)

    reports = []
    for config in (batch, cstr, train):
        result = simulate(config)
        reports.append(generate_report(config, result))
    return "\n\n".join(reports)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    print(run_demo())

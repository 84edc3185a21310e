from hwswaption.term_structures.zero_curve import ZeroCurve
from hwswaption.term_structures.scenario_curve import HullWhiteScenarioCurve
from hwswaption.term_structures.fx_rate import FxRate

from hwswaption.enums import PayerReceiver, BuySell, SettlementStyle, DayCountBasis, PeriodFrequency
from hwswaption.instruments import (SwaptionDeal,
                                    SwaptionValidationError,
                                    make_fixed_leg,
                                    make_floating_leg)
from hwswaption.pricing_engine import HullWhite1FactorModelParameters
from hwswaption.term_structures import ZeroCurve, HullWhiteScenarioCurve, FxRate
from hwswaption.valuation import SwaptionHullWhiteValuation, build_time_grid

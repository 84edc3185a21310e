from hwswaption.valuation.results import PVProfile, CashAccumulator, ValuationResults
from hwswaption.valuation.swaption_hw import SwaptionHullWhiteValuation, build_time_grid

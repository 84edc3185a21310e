from hwswaption.instruments.cashflows import (FixedCashflow,
                                              Reset,
                                              FloatingCashflow,
                                              FixedLeg,
                                              FloatingLeg,
                                              make_fixed_leg,
                                              make_floating_leg)
from hwswaption.instruments.schedule import SwapSchedule, FloatingPeriod
from hwswaption.instruments.swaption import (SwaptionDeal,
                                             SwaptionValidationError,
                                             is_vanilla_swaption,
                                             validate_swaption)
from hwswaption.instruments.leg import value_fixed_leg, value_floating_leg

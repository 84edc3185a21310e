from hwswaption.enums.daycount import DayCountBasis, PeriodFrequency
from hwswaption.enums.swaption import PayerReceiver, BuySell, SettlementStyle, CompoundingMethod

__all__ = [
    'DayCountBasis',
    'PeriodFrequency',
    'PayerReceiver',
    'BuySell',
    'SettlementStyle',
    'CompoundingMethod',
]

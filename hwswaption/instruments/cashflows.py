# -*- coding: utf-8 -*-
import numpy as np
import pandas as pd
from dataclasses import dataclass, field
from typing import List, Optional

from hwswaption.enums import DayCountBasis, PeriodFrequency, CompoundingMethod
from hwswaption.utils.daycount import year_frac


@dataclass(frozen=True)
class FixedCashflow:
    payment_date: pd.Timestamp
    accrual_start_date: pd.Timestamp
    accrual_end_date: pd.Timestamp
    accrual_year_fraction: float
    notional: float
    rate: float


@dataclass(frozen=True)
class Reset:
    rate_start_date: pd.Timestamp
    rate_end_date: pd.Timestamp
    rate_year_fraction: float


@dataclass(frozen=True)
class FloatingCashflow:
    payment_date: pd.Timestamp
    accrual_start_date: pd.Timestamp
    accrual_end_date: pd.Timestamp
    accrual_year_fraction: float
    notional: float
    resets: tuple  # of Reset. A vanilla floating cashflow has exactly one reset.


@dataclass
class FixedLeg:
    cashflows: List[FixedCashflow]
    currency: Optional[str] = None
    compounding: bool = False

    def __len__(self):
        return len(self.cashflows)

    def __iter__(self):
        return iter(self.cashflows)


@dataclass
class FloatingLeg:
    cashflows: List[FloatingCashflow]
    currency: Optional[str] = None
    compounding_method: CompoundingMethod = field(default=CompoundingMethod.NONE)

    def __post_init__(self):
        self.compounding_method = CompoundingMethod.from_value(self.compounding_method)

    def __len__(self):
        return len(self.cashflows)

    def __iter__(self):
        return iter(self.cashflows)


def generate_periods(effective_date: pd.Timestamp,
                     termination_date: pd.Timestamp,
                     frequency: PeriodFrequency):
    """
    Unadjusted accrual periods rolled forward from the effective date. A short final stub is used
    if the termination date is not on the roll schedule.
    """
    effective_date = pd.Timestamp(effective_date)
    termination_date = pd.Timestamp(termination_date)
    frequency = PeriodFrequency.from_value(frequency)
    assert termination_date > effective_date

    starts, ends = [], []
    i = 0
    start = effective_date
    while start < termination_date:
        end = min(effective_date + pd.DateOffset(months=frequency.months * (i + 1)), termination_date)
        starts.append(start)
        ends.append(end)
        start = end
        i += 1

    return pd.DatetimeIndex(starts), pd.DatetimeIndex(ends)


def make_fixed_leg(effective_date,
                   termination_date,
                   frequency: PeriodFrequency,
                   rate: float,
                   notional: float=1.0,
                   day_count_basis: DayCountBasis=DayCountBasis.default(),
                   currency: str=None) -> FixedLeg:
    """Vanilla fixed leg, paying at the end of each accrual period."""
    day_count_basis = DayCountBasis.from_value(day_count_basis)
    starts, ends = generate_periods(effective_date, termination_date, frequency)
    accrual_year_fractions = np.atleast_1d(year_frac(starts, ends, day_count_basis))

    cashflows = [FixedCashflow(payment_date=end,
                               accrual_start_date=start,
                               accrual_end_date=end,
                               accrual_year_fraction=float(yf),
                               notional=notional,
                               rate=rate)
                 for start, end, yf in zip(starts, ends, accrual_year_fractions)]
    return FixedLeg(cashflows=cashflows, currency=currency)


def make_floating_leg(effective_date,
                      termination_date,
                      frequency: PeriodFrequency,
                      notional: float=1.0,
                      day_count_basis: DayCountBasis=DayCountBasis.default(),
                      currency: str=None) -> FloatingLeg:
    """Vanilla floating leg; each period resets at its accrual start over the accrual period and pays at its end."""
    day_count_basis = DayCountBasis.from_value(day_count_basis)
    starts, ends = generate_periods(effective_date, termination_date, frequency)
    accrual_year_fractions = np.atleast_1d(year_frac(starts, ends, day_count_basis))

    cashflows = [FloatingCashflow(payment_date=end,
                                  accrual_start_date=start,
                                  accrual_end_date=end,
                                  accrual_year_fraction=float(yf),
                                  notional=notional,
                                  resets=(Reset(rate_start_date=start, rate_end_date=end, rate_year_fraction=float(yf)),))
                 for start, end, yf in zip(starts, ends, accrual_year_fractions)]
    return FloatingLeg(cashflows=cashflows, currency=currency)

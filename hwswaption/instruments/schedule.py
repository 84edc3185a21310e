# -*- coding: utf-8 -*-
import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Tuple

from hwswaption.instruments.cashflows import FixedLeg, FloatingLeg
from hwswaption.utils.settings import TINY


def year_fraction_ratio(accrual_year_fraction: float, rate_year_fraction: float) -> float:
    """Ratio of the accrual to the rate year fraction, defaulting to 1 for a (near) zero rate year fraction."""
    return 1.0 if rate_year_fraction < TINY else accrual_year_fraction / rate_year_fraction


@dataclass(frozen=True)
class FloatingPeriod:
    rate_start_date: pd.Timestamp
    rate_end_date: pd.Timestamp
    payment_date: pd.Timestamp
    year_fraction_ratio: float
    notional: float
    payment_index: int  # position of the payment date in SwapSchedule.dates


@dataclass(frozen=True)
class SwapSchedule:
    """
    The dates of the underlying swap that carry a cashflow sensitivity: every fixed payment date, and every
    floating payment and rate start date. Coupon weights are co-indexed with the dates.
    """
    dates: pd.DatetimeIndex
    fixed_coupon_weight: np.array  # Σ accrual year fraction × notional of fixed cashflows paid on the date
    fixed_coupon_rate: np.array  # fixed rate of the cashflows paid on the date
    floating_coupon_weight: np.array  # Σ notional × accrual/rate year fraction ratio of floating cashflows paid on the date
    floating_periods: Tuple[FloatingPeriod, ...]  # ordered by rate start date

    def __post_init__(self):
        n = len(self.dates)
        assert n > 0, 'schedule must contain at least one date'
        assert self.dates.is_monotonic_increasing and self.dates.is_unique, 'schedule dates must be strictly increasing'
        for arr in (self.fixed_coupon_weight, self.fixed_coupon_rate, self.floating_coupon_weight):
            assert arr.shape == (n,)
        for arr in (self.fixed_coupon_weight, self.fixed_coupon_rate, self.floating_coupon_weight):
            arr.setflags(write=False)

    def __len__(self):
        return len(self.dates)

    @classmethod
    def from_legs(cls, fixed_leg: FixedLeg, floating_leg: FloatingLeg) -> 'SwapSchedule':
        if fixed_leg is None or floating_leg is None:
            raise ValueError('Both the fixed and floating legs of the underlying swap are required')

        dates = set(cf.payment_date for cf in fixed_leg)
        for cf in floating_leg:
            dates.add(cf.payment_date)
            dates.add(cf.resets[0].rate_start_date)
        dates = pd.DatetimeIndex(sorted(dates))
        n = len(dates)

        fixed_coupon_weight = np.zeros(n)
        fixed_coupon_rate = np.zeros(n)
        for cf in fixed_leg:
            idx = dates.get_loc(cf.payment_date)
            fixed_coupon_weight[idx] += cf.accrual_year_fraction * cf.notional
            fixed_coupon_rate[idx] = cf.rate

        floating_coupon_weight = np.zeros(n)
        floating_periods = []
        for cf in sorted(floating_leg, key=lambda cf_: cf_.resets[0].rate_start_date):
            reset = cf.resets[0]
            ratio = year_fraction_ratio(cf.accrual_year_fraction, reset.rate_year_fraction)
            idx = dates.get_loc(cf.payment_date)
            floating_coupon_weight[idx] += cf.notional * ratio
            floating_periods.append(FloatingPeriod(rate_start_date=reset.rate_start_date,
                                                   rate_end_date=reset.rate_end_date,
                                                   payment_date=cf.payment_date,
                                                   year_fraction_ratio=ratio,
                                                   notional=cf.notional,
                                                   payment_index=idx))

        return cls(dates=dates,
                   fixed_coupon_weight=fixed_coupon_weight,
                   fixed_coupon_rate=fixed_coupon_rate,
                   floating_coupon_weight=floating_coupon_weight,
                   floating_periods=tuple(floating_periods))

# -*- coding: utf-8 -*-
import numpy as np
import pandas as pd
from typing import Optional

from hwswaption.instruments.cashflows import FixedLeg, FloatingLeg
from hwswaption.instruments.schedule import year_fraction_ratio
from hwswaption.utils.daycount import days_to_years

# Valuation of the underlying swap legs on and after the option expiry.
# PVs include cashflows paid on or after the valuation date; cash is realised for cashflows paid
# in (previous_date, date], or on the valuation date itself if there is no previous date.


def _is_realised(payment_date, date, previous_date) -> bool:
    if previous_date is None:
        return payment_date == date
    return previous_date < payment_date <= date


def value_fixed_leg(fixed_leg: FixedLeg,
                    base_date: pd.Timestamp,
                    date: pd.Timestamp,
                    discount_curve,
                    nb_scenarios: int,
                    previous_date: Optional[pd.Timestamp]=None,
                    swap_rate: Optional[np.array]=None):
    """
    Returns
    -------
    tuple of np.array
        (pv, cash) of the fixed leg at 'date', each batched over the scenarios.
    """
    t_value = days_to_years(base_date, date)
    pv = np.zeros(nb_scenarios)
    cash = np.zeros(nb_scenarios)

    for cf in fixed_leg:
        rate = cf.rate if swap_rate is None else swap_rate
        amount = cf.notional * cf.accrual_year_fraction * rate
        if cf.payment_date >= date:
            t_pay = days_to_years(base_date, cf.payment_date)
            pv += amount * discount_curve.get_discount_factors(t_value, t_pay)
        if _is_realised(cf.payment_date, date, previous_date):
            cash += amount

    return pv, cash


def value_floating_leg(floating_leg: FloatingLeg,
                       base_date: pd.Timestamp,
                       date: pd.Timestamp,
                       discount_curve,
                       forecast_curve,
                       nb_scenarios: int,
                       fixings: dict,
                       previous_date: Optional[pd.Timestamp]=None):
    """
    Values the floating leg at 'date'. The forecast growth factor F(start)/F(end) - 1 of a period is frozen in
    'fixings' (keyed by the rate start date) the first time the leg is valued on or after the rate start date.
    If the rate start date is not a valuation date, the factor is read at the later valuation date, where on a
    scenario curve it is a ratio of bond prices conditional on that date rather than the fixing itself;
    build_time_grid adds the rate start dates to the grid for this reason.

    Returns
    -------
    tuple of np.array
        (pv, cash) of the floating leg at 'date', each batched over the scenarios.
    """
    t_value = days_to_years(base_date, date)
    pv = np.zeros(nb_scenarios)
    cash = np.zeros(nb_scenarios)

    for cf in floating_leg:
        is_realised = _is_realised(cf.payment_date, date, previous_date)
        if cf.payment_date < date and not is_realised:
            continue

        reset = cf.resets[0]
        ratio = year_fraction_ratio(cf.accrual_year_fraction, reset.rate_year_fraction)
        t_start = days_to_years(base_date, reset.rate_start_date)
        t_end = days_to_years(base_date, reset.rate_end_date)

        if reset.rate_start_date <= date:
            if reset.rate_start_date not in fixings:
                fixings[reset.rate_start_date] = forecast_curve.get_discount_factors(t_value, t_start) \
                    / forecast_curve.get_discount_factors(t_value, t_end) - 1.0
            growth = fixings[reset.rate_start_date]
        else:
            growth = forecast_curve.get_discount_factors(t_value, t_start) \
                / forecast_curve.get_discount_factors(t_value, t_end) - 1.0

        amount = cf.notional * ratio * growth
        if cf.payment_date >= date:
            t_pay = days_to_years(base_date, cf.payment_date)
            pv += amount * discount_curve.get_discount_factors(t_value, t_pay)
        if is_realised:
            cash += amount

    return pv, cash

# -*- coding: utf-8 -*-
import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Optional

from hwswaption.instruments.schedule import SwapSchedule
from hwswaption.utils.daycount import days_to_years
from hwswaption.utils.vector_math import safe_exp_multiply

# Notation, per schedule date Tᵢ and option expiry T:
#     discount_factor <=> D(t, Tᵢ)
#     coupon          <=> Cᵢ
#     std_dev         <=> vᵢ = (B(t,Tᵢ) - B(t,T)) √Zeta(t,T)
#     coefficient     <=> fᵢ = D(t,Tᵢ) / D(t,T) · exp(-vᵢ² / 2)
# so that the underlying swap (receiving fixed) is worth Σᵢ Cᵢ fᵢ exp(-vᵢ y) at expiry, per unit D(t,T),
# where y is the standard normal factor driving the model.


@dataclass
class SwapQuantities:
    coupon: np.array  # shape (nb_dates, nb_scenarios)
    std_dev: np.array
    coefficient: np.array
    discount_factor: np.array


def _get_discount_and_forecast_factors(discount_curve, forecast_curve, t_value,
                                       t_start, t_end, t_pay, t_last_end, t_last_pay,
                                       df_t_pay, ff_t_end):
    """Gets the discount and forecast factors for a floating period, reusing the previous period's factors where possible."""
    # Only get start factors if necessary
    if t_start == t_last_pay:
        df_t_start = df_t_pay
    else:
        df_t_start = discount_curve.get_discount_factors(t_value, t_start)

    if t_start == t_last_end:
        ff_t_start = ff_t_end
    else:
        ff_t_start = forecast_curve.get_discount_factors(t_value, t_start)

    # Always have to get pay and end factors
    df_t_pay = discount_curve.get_discount_factors(t_value, t_pay)
    ff_t_end = forecast_curve.get_discount_factors(t_value, t_end)

    return df_t_start, df_t_pay, ff_t_start, ff_t_end


def get_swap_quantities(schedule: SwapSchedule,
                        discount_curve,
                        forecast_curve,
                        model_parameters,
                        t_value: float,
                        t_expiry: float,
                        base_date: pd.Timestamp,
                        df_t_expiry: np.array,
                        swap_rate: Optional[np.array]=None) -> SwapQuantities:
    """
    Fills the arrays of coupons, discount factors, standard deviations and coefficients by running through the
    schedule dates, for valuation time 't_value' (years from 'base_date').

    A floating period contributes -β × (accrual/rate year fraction ratio) × notional on its rate start date, where
    β = D(t,pay) F(t,start) / (D(t,start) F(t,end)) adjusts for the basis between the discount and forecast curves.
    The matching +ratio × notional on its payment date is carried by the schedule's floating coupon weight.
    """
    if schedule is None or model_parameters is None:
        raise ValueError('A swap schedule and model parameters are required')

    nb_dates = len(schedule)
    nb_scenarios = len(df_t_expiry)
    times = days_to_years(base_date, schedule.dates)

    coupon = np.zeros((nb_dates, nb_scenarios))
    std_dev = np.empty((nb_dates, nb_scenarios))
    coefficient = np.empty((nb_dates, nb_scenarios))
    discount_factor = np.empty((nb_dates, nb_scenarios))
    have_df = np.zeros(nb_dates, dtype=bool)

    b_t_expiry = model_parameters.calc_b(t_value, t_expiry)
    root_zeta = np.sqrt(model_parameters.calc_zeta(t_value, t_expiry))

    floating_periods = iter(schedule.floating_periods)
    period = next(floating_periods, None)
    t_last_end = -np.inf
    t_last_pay = -np.inf
    df_t_pay = ff_t_end = None

    for i, (date, t_df) in enumerate(zip(schedule.dates, times)):
        # If this date is the rate start of the current floating period, include its β contribution
        if period is not None and date == period.rate_start_date:
            t_start = t_df
            t_end = days_to_years(base_date, period.rate_end_date)
            t_pay = days_to_years(base_date, period.payment_date)

            df_t_start, df_t_pay, ff_t_start, ff_t_end = _get_discount_and_forecast_factors(
                discount_curve, forecast_curve, t_value, t_start, t_end, t_pay, t_last_end, t_last_pay, df_t_pay, ff_t_end)

            β = df_t_pay * ff_t_start / (df_t_start * ff_t_end)
            coupon[i] = -β * period.year_fraction_ratio * period.notional

            # Store new discount factors
            discount_factor[period.payment_index] = df_t_pay
            have_df[period.payment_index] = True
            if not have_df[i]:
                discount_factor[i] = df_t_start
                have_df[i] = True

            # Update for next pass
            t_last_end = t_end
            t_last_pay = t_pay
            period = next(floating_periods, None)

        coupon[i] += schedule.floating_coupon_weight[i]
        if swap_rate is None:
            coupon[i] += schedule.fixed_coupon_rate[i] * schedule.fixed_coupon_weight[i]
        else:
            coupon[i] += swap_rate * schedule.fixed_coupon_weight[i]

        std_dev[i] = (model_parameters.calc_b(t_value, t_df) - b_t_expiry) * root_zeta

        if not have_df[i]:
            discount_factor[i] = discount_curve.get_discount_factors(t_value, t_df)
            have_df[i] = True

        coefficient[i] = safe_exp_multiply(-0.5 * std_dev[i] ** 2, discount_factor[i] / df_t_expiry)

    return SwapQuantities(coupon=coupon, std_dev=std_dev, coefficient=coefficient, discount_factor=discount_factor)

# -*- coding: utf-8 -*-
import logging
import numpy as np
import pandas as pd
from dataclasses import dataclass, field
from functools import cached_property
from typing import Optional

from hwswaption.instruments import (SwaptionDeal,
                                    SwapSchedule,
                                    SwaptionValidationError,
                                    validate_swaption,
                                    value_fixed_leg,
                                    value_floating_leg)
from hwswaption.pricing_engine.hw1f import HullWhite1FactorModelParameters
from hwswaption.pricing_engine.jamshidian import solve_y_star, is_solution_unique, price_analytic
from hwswaption.pricing_engine.quadrature import GaussHermiteNormalQuadrature, price_numerical
from hwswaption.pricing_engine.swap_quantities import get_swap_quantities
from hwswaption.term_structures.fx_rate import FxRate
from hwswaption.utils.daycount import days_to_years
from hwswaption.utils.vector_math import as_batch
from hwswaption.valuation.results import PVProfile, CashAccumulator, ValuationResults

logger = logging.getLogger(__name__)


def build_time_grid(base_dates, deal: SwaptionDeal, cash_required: bool=False) -> pd.DatetimeIndex:
    """
    Valuation dates for the swaption: the requested dates plus the option expiry date and, if cash is required,
    the dates on which cash can be realised (leg payment dates for physical settlement, the settlement date for
    cash settlement). For physical settlement, the floating rate start dates after expiry and up to the last of
    these dates are added so that each period is fixed on its own rate start date.

    Dates before the first requested date are excluded. If a requested date is after the option expiry, the dates
    from the expiry date on are kept, since the exercise decision is made on the expiry date.
    """
    base_dates = pd.DatetimeIndex(base_dates)
    assert len(base_dates) > 0, 'at least one valuation date is required'

    dates = set(base_dates)
    dates.add(deal.option_expiry_date)
    if cash_required:
        if deal.is_cash_settled:
            dates.add(deal.settlement_date)
        else:
            dates.update(cf.payment_date for cf in deal.fixed_leg if cf.payment_date > deal.option_expiry_date)
            dates.update(cf.payment_date for cf in deal.floating_leg if cf.payment_date > deal.option_expiry_date)
    if deal.is_physically_settled:
        last_date = max(dates)
        dates.update(cf.resets[0].rate_start_date for cf in deal.floating_leg
                     if deal.option_expiry_date < cf.resets[0].rate_start_date <= last_date)

    dates = pd.DatetimeIndex(sorted(dates))
    first_date = base_dates.min()
    if base_dates.max() > deal.option_expiry_date:
        first_date = min(first_date, deal.option_expiry_date)
    return dates[dates >= first_date]


@dataclass
class SwaptionHullWhiteValuation:
    """
    Values a European swaption under the Hull-White 1 factor model for a batch of scenarios, on a grid of
    valuation dates.

    Before expiry, the swaption is valued by Jamshidian decomposition in the scenarios where the exercise boundary
    is known to be unique, and by Gauss-Hermite integration over the model factor otherwise.
    On and after expiry, the exercise decision is made on the expiry date from the values of the underlying legs,
    and the swaption is then worth the exercised swap (physical settlement) or the settlement amount (cash settlement).
    """
    deal: SwaptionDeal
    model_parameters: HullWhite1FactorModelParameters
    discount_curve: object
    forecast_curve: Optional[object] = None  # defaults to the discount curve
    base_date: Optional[pd.Timestamp] = None  # defaults to the discount curve date
    fx_rate: FxRate = field(default_factory=FxRate)
    nb_scenarios: Optional[int] = None
    swap_rate: Optional[np.array] = None

    # Attributes set in __post_init__
    schedule: SwapSchedule = field(init=False)

    def __post_init__(self):
        if self.deal is None or self.model_parameters is None or self.discount_curve is None:
            raise ValueError('A deal, model parameters and a discount curve are required')
        if self.forecast_curve is None:
            self.forecast_curve = self.discount_curve

        errors = validate_swaption(self.deal, self.discount_curve, self.forecast_curve)
        if errors:
            raise SwaptionValidationError(errors)

        if self.base_date is None:
            self.base_date = self.discount_curve.curve_date
        self.base_date = pd.Timestamp(self.base_date)

        if self.nb_scenarios is None:
            self.nb_scenarios = max(getattr(self.discount_curve, 'nb_scenarios', 1),
                                    getattr(self.forecast_curve, 'nb_scenarios', 1),
                                    np.size(self.model_parameters.vol))

        self.schedule = SwapSchedule.from_legs(self.deal.fixed_leg, self.deal.floating_leg)
        if self.swap_rate is not None:
            self.set_swap_rate(self.swap_rate)

    def set_swap_rate(self, swap_rate):
        """
        Sets the (scalar or per-scenario) fixed rate that replaces the deal's fixed rates, e.g. when rebootstrapping.
        Setting None reverts to the deal's fixed rates.
        """
        self.swap_rate = None if swap_rate is None else as_batch(swap_rate, self.nb_scenarios)

    @cached_property
    def quadrature(self) -> GaussHermiteNormalQuadrature:
        return GaussHermiteNormalQuadrature()

    def _discount_factor(self, t_value, t_pay):
        return as_batch(self.discount_curve.get_discount_factors(t_value, t_pay), self.nb_scenarios)

    def value(self, valuation_dates, cash_required: bool=False) -> ValuationResults:
        """
        Parameters
        ----------
        valuation_dates : pd.DatetimeIndex or list
            Strictly increasing valuation dates, on or after the base date. If any date is after the option expiry,
            the expiry date must be included (see build_time_grid).
        cash_required : bool
            If True, realised cash is collected in the results.

        Returns
        -------
        ValuationResults
            The PV profile (and realised cash), in the reporting currency, from the perspective of the option holder
            for a bought swaption and the writer for a sold swaption.
        """
        dates = pd.DatetimeIndex(valuation_dates)
        deal = self.deal

        if len(dates) > 1 and not (np.diff(dates.values) > np.timedelta64(0)).all():
            raise ValueError('Valuation dates must be strictly increasing')
        if len(dates) > 0 and dates[0] < self.base_date:
            raise ValueError(f"Valuation dates must not be before the base date {self.base_date.date()}")
        if (dates > deal.option_expiry_date).any() and deal.option_expiry_date not in dates:
            raise ValueError('The option expiry date must be a valuation date if the swaption is valued after expiry')

        pay_sign = deal.payer_receiver.multiplier
        buy_sign = deal.buy_sell.multiplier

        profile = PVProfile(nb_scenarios=self.nb_scenarios)
        cash_accumulator = CashAccumulator(nb_scenarios=self.nb_scenarios) if cash_required else None

        # State frozen on the expiry date
        exercise_weight = np.zeros(self.nb_scenarios)
        settlement_cash = np.zeros(self.nb_scenarios)
        fixings = {}

        previous_date = None
        for date in dates:
            t_value = days_to_years(self.base_date, date)
            cash = np.zeros(self.nb_scenarios)

            if date < deal.option_expiry_date:
                pv = self._value_before_expiry(t_value)
            else:
                fixed_pv, fixed_cash = value_fixed_leg(fixed_leg=deal.fixed_leg,
                                                       base_date=self.base_date,
                                                       date=date,
                                                       discount_curve=self.discount_curve,
                                                       nb_scenarios=self.nb_scenarios,
                                                       previous_date=previous_date,
                                                       swap_rate=self.swap_rate)
                float_pv, float_cash = value_floating_leg(floating_leg=deal.floating_leg,
                                                          base_date=self.base_date,
                                                          date=date,
                                                          discount_curve=self.discount_curve,
                                                          forecast_curve=self.forecast_curve,
                                                          nb_scenarios=self.nb_scenarios,
                                                          fixings=fixings,
                                                          previous_date=previous_date)
                t_settlement = days_to_years(self.base_date, deal.settlement_date)

                if date == deal.option_expiry_date:
                    pv = np.maximum(0.0, pay_sign * (float_pv - fixed_pv))

                    if deal.is_physically_settled:
                        exercise_weight = (pv > 0.0).astype(np.float64)
                        logger.debug('Swaption exercised in %d of %d scenarios', exercise_weight.sum(), self.nb_scenarios)
                    else:
                        settlement_cash = pv.copy()
                        pv = settlement_cash * self._discount_factor(t_value, t_settlement)
                        if date == deal.settlement_date:
                            cash = settlement_cash.copy()
                else:
                    if deal.is_physically_settled:
                        pv = pay_sign * (float_pv - fixed_pv) * exercise_weight
                        cash = pay_sign * (float_cash - fixed_cash) * exercise_weight
                    elif date <= deal.settlement_date:
                        pv = settlement_cash * self._discount_factor(t_value, t_settlement)
                        if date == deal.settlement_date:
                            cash = settlement_cash.copy()
                    else:
                        # Settlement amount has been paid
                        pv = np.zeros(self.nb_scenarios)

            profile.append_vector(date, buy_sign * pv * self.fx_rate.get(t_value))
            if cash_required:
                cash_accumulator.accumulate(self.fx_rate, date, t_value, buy_sign * cash)

            previous_date = date

        profile.complete()
        return ValuationResults(profile=profile, cash=cash_accumulator)

    def _value_before_expiry(self, t_value: float) -> np.array:
        deal = self.deal
        t_expiry = days_to_years(self.base_date, deal.option_expiry_date)
        df_t_expiry = self._discount_factor(t_value, t_expiry)

        quantities = get_swap_quantities(schedule=self.schedule,
                                         discount_curve=self.discount_curve,
                                         forecast_curve=self.forecast_curve,
                                         model_parameters=self.model_parameters,
                                         t_value=t_value,
                                         t_expiry=t_expiry,
                                         base_date=self.base_date,
                                         df_t_expiry=df_t_expiry,
                                         swap_rate=self.swap_rate)
        coupon, coefficient, std_dev = quantities.coupon, quantities.coefficient, quantities.std_dev

        # The value of the underlying swap is zero at y*
        y_star, is_solved = solve_y_star(coupon, coefficient, std_dev)
        is_unique = is_solution_unique(coupon, coefficient, std_dev, y_star) & is_solved

        pv = np.zeros(self.nb_scenarios)
        if is_unique.any():
            analytic_pv = price_analytic(coupon=coupon,
                                         coefficient=coefficient,
                                         std_dev=std_dev,
                                         discount_factor=quantities.discount_factor,
                                         df_expiry=df_t_expiry,
                                         y_star=y_star,
                                         payer_receiver=deal.payer_receiver)
            pv = np.where(is_unique, analytic_pv, pv)
        if not is_unique.all():
            numerical_pv = price_numerical(quadrature=self.quadrature,
                                           coupon=coupon,
                                           coefficient=coefficient,
                                           std_dev=std_dev,
                                           df_expiry=df_t_expiry,
                                           payer_receiver=deal.payer_receiver)
            pv = np.where(is_unique, pv, numerical_pv)

        logger.debug('t=%.6g: %d analytic and %d numerical scenario(s)',
                     t_value, is_unique.sum(), (~is_unique).sum())

        if deal.is_cash_settled:
            t_settlement = days_to_years(self.base_date, deal.settlement_date)
            # Settlement delay
            pv = pv * self._discount_factor(t_value, t_settlement) / df_t_expiry

        return pv

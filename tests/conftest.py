# -*- coding: utf-8 -*-
# Shared market data and deals. Dates are offset by whole multiples of 365 days from the base date so that
# model times (actual/365) are exact.

import numpy as np
import pandas as pd
import pytest

from hwswaption.instruments import (FixedCashflow,
                                    FloatingCashflow,
                                    Reset,
                                    FixedLeg,
                                    FloatingLeg,
                                    SwaptionDeal)
from hwswaption.pricing_engine import HullWhite1FactorModelParameters
from hwswaption.term_structures import ZeroCurve

BASE_DATE = pd.Timestamp('2024-04-01')
FLAT_RATE = 0.01


def add_years(years):
    return BASE_DATE + pd.Timedelta(days=int(round(365 * years)))


def flat_zero_curve(rate=FLAT_RATE, shifts=None, currency=None):
    years = np.array([1.0, 2.0, 3.0, 5.0, 7.0, 10.0])
    pillar_df = pd.DataFrame({'years': years, 'zero_rate': rate})
    return ZeroCurve(curve_date=BASE_DATE, pillar_df=pillar_df, shifts=shifts, currency=currency)


def one_period_deal(fixed_rate, payer_receiver='receiver', settlement_style='physical', settlement_date=None,
                    expiry_years=1.0, maturity_years=5.0):
    """Option, expiring at the rate start, on a swap with a single floating and a single fixed cashflow."""
    start, end = add_years(expiry_years), add_years(maturity_years)
    τ = maturity_years - expiry_years
    fixed_leg = FixedLeg(cashflows=[FixedCashflow(payment_date=end,
                                                  accrual_start_date=start,
                                                  accrual_end_date=end,
                                                  accrual_year_fraction=τ,
                                                  notional=1.0,
                                                  rate=fixed_rate)])
    floating_leg = FloatingLeg(cashflows=[FloatingCashflow(payment_date=end,
                                                           accrual_start_date=start,
                                                           accrual_end_date=end,
                                                           accrual_year_fraction=τ,
                                                           notional=1.0,
                                                           resets=(Reset(start, end, τ),))])
    return SwaptionDeal(currency='USD',
                        option_expiry_date=start,
                        fixed_leg=fixed_leg,
                        floating_leg=floating_leg,
                        payer_receiver=payer_receiver,
                        settlement_style=settlement_style,
                        settlement_date=settlement_date)


def annual_deal(fixed_rate, payer_receiver='payer', settlement_style='physical', settlement_date=None,
                notional=1.0, expiry_years=1, tenor_years=4):
    """Option on an annual fixed vs annual floating swap starting at expiry."""
    fixed_cashflows, floating_cashflows = [], []
    for i in range(tenor_years):
        start, end = add_years(expiry_years + i), add_years(expiry_years + i + 1)
        fixed_cashflows.append(FixedCashflow(end, start, end, 1.0, notional, fixed_rate))
        floating_cashflows.append(FloatingCashflow(end, start, end, 1.0, notional, (Reset(start, end, 1.0),)))
    return SwaptionDeal(currency='USD',
                        option_expiry_date=add_years(expiry_years),
                        fixed_leg=FixedLeg(fixed_cashflows),
                        floating_leg=FloatingLeg(floating_cashflows),
                        payer_receiver=payer_receiver,
                        settlement_style=settlement_style,
                        settlement_date=settlement_date)


@pytest.fixture
def zero_curve():
    return flat_zero_curve()


@pytest.fixture
def model_parameters():
    return HullWhite1FactorModelParameters(mean_rev_lvl=0.03, vol=0.02)

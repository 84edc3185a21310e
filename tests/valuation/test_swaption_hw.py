# -*- coding: utf-8 -*-
import numpy as np
import pandas as pd
import pytest

from hwswaption.instruments import FixedCashflow, FixedLeg
from hwswaption.pricing_engine import (HullWhite1FactorModelParameters,
                                       get_swap_quantities,
                                       is_solution_unique,
                                       simulate_state,
                                       solve_y_star)
from hwswaption.term_structures import FxRate, HullWhiteScenarioCurve
from hwswaption.utils import days_to_years
from hwswaption.valuation import SwaptionHullWhiteValuation, build_time_grid
from conftest import BASE_DATE, FLAT_RATE, add_years, annual_deal, flat_zero_curve, one_period_deal

# Flat 1% curve, a=3%, σ=2%. The at-the-money 1y option on a bond maturing in 5y is worth 0.02817777.
ATM_FIXED_RATE = (np.exp(4 * FLAT_RATE) - 1) / 4


def value_on(valuation, dates, cash_required=False):
    results = valuation.value(dates, cash_required=cash_required)
    return results.profile.to_frame(), results.cash


def test_receiver_benchmark(model_parameters, zero_curve):
    # A receiver swaption on a single period swap is a call on the coupon bond paying 1 + 4K at 5y
    deal = one_period_deal(ATM_FIXED_RATE, payer_receiver='receiver')
    valuation = SwaptionHullWhiteValuation(deal=deal, model_parameters=model_parameters, discount_curve=zero_curve)
    pv, _ = value_on(valuation, [BASE_DATE])

    zbc = model_parameters.price_zero_coupon_bond_option(P_t_T=np.exp(-FLAT_RATE),
                                                         P_t_S=np.exp(-5 * FLAT_RATE),
                                                         expiry_years=1.0,
                                                         maturity_years=5.0,
                                                         K=np.exp(-4 * FLAT_RATE),
                                                         cp=1)
    assert pv.shape == (1, 1)
    assert np.isclose(pv.iloc[0, 0], np.exp(4 * FLAT_RATE) * zbc, rtol=1e-10)
    np.testing.assert_almost_equal(pv.iloc[0, 0], np.exp(4 * FLAT_RATE) * 0.02817777, decimal=6)


@pytest.mark.parametrize('fixed_rate', [0.005, ATM_FIXED_RATE, 0.02])
def test_payer_is_caplet(model_parameters, zero_curve, fixed_rate):
    deal = one_period_deal(fixed_rate, payer_receiver='payer')
    valuation = SwaptionHullWhiteValuation(deal=deal, model_parameters=model_parameters, discount_curve=zero_curve)
    pv, _ = value_on(valuation, [BASE_DATE])

    caplet = model_parameters.price_optionlet(P_t_T1=np.exp(-FLAT_RATE),
                                              P_t_T2=np.exp(-5 * FLAT_RATE),
                                              effective_years=1.0,
                                              termination_years=5.0,
                                              K=fixed_rate,
                                              cp=1)
    assert np.isclose(pv.iloc[0, 0], caplet, rtol=1e-10)


@pytest.mark.parametrize('fixed_rate', [0.005, 0.01, 0.02])
def test_payer_receiver_parity(model_parameters, zero_curve, fixed_rate):
    dates = [BASE_DATE, add_years(0.5)]
    payer, _ = value_on(SwaptionHullWhiteValuation(annual_deal(fixed_rate, 'payer'), model_parameters, zero_curve), dates)
    receiver, _ = value_on(SwaptionHullWhiteValuation(annual_deal(fixed_rate, 'receiver'), model_parameters, zero_curve), dates)

    for i, date in enumerate(dates):
        t = days_to_years(BASE_DATE, date)
        df = np.exp(-FLAT_RATE * (np.arange(1, 6) - t))
        payer_swap = (df[0] - df[-1]) - fixed_rate * df[1:].sum()
        assert np.isclose(payer.iloc[i, 0] - receiver.iloc[i, 0], payer_swap, rtol=0, atol=1e-12)
        assert payer.iloc[i, 0] > 0 and receiver.iloc[i, 0] > 0


def test_pv_at_expiry(model_parameters, zero_curve):
    fixed_rate = 0.005
    dates = [BASE_DATE, add_years(1)]
    float_pv = 1 - np.exp(-4 * FLAT_RATE)
    fixed_pv = fixed_rate * np.exp(-FLAT_RATE * np.arange(1, 5)).sum()

    payer, _ = value_on(SwaptionHullWhiteValuation(annual_deal(fixed_rate, 'payer'), model_parameters, zero_curve), dates)
    receiver, _ = value_on(SwaptionHullWhiteValuation(annual_deal(fixed_rate, 'receiver'), model_parameters, zero_curve), dates)

    assert np.isclose(payer.iloc[1, 0], max(0.0, float_pv - fixed_pv), rtol=1e-12)
    assert receiver.iloc[1, 0] == 0.0

    # Time value before expiry
    assert payer.iloc[0, 0] > np.exp(-FLAT_RATE) * payer.iloc[1, 0]


def test_physical_and_cash_settlement(model_parameters, zero_curve):
    fixed_rate = 0.005
    physical_deal = annual_deal(fixed_rate, 'payer', settlement_style='physical')
    cash_deal = annual_deal(fixed_rate, 'payer', settlement_style='cash')

    base_dates = [BASE_DATE, add_years(0.5), add_years(3.5)]
    physical_grid = build_time_grid(base_dates, physical_deal, cash_required=True)
    cash_grid = build_time_grid(base_dates, cash_deal, cash_required=True)
    assert list(physical_grid) == [BASE_DATE, add_years(0.5), add_years(1), add_years(2), add_years(3),
                                   add_years(3.5), add_years(4), add_years(5)]
    assert list(cash_grid) == [BASE_DATE, add_years(0.5), add_years(1), add_years(3.5)]

    physical, physical_cash = value_on(SwaptionHullWhiteValuation(physical_deal, model_parameters, zero_curve),
                                       physical_grid, cash_required=True)
    cash, cash_cash = value_on(SwaptionHullWhiteValuation(cash_deal, model_parameters, zero_curve),
                               cash_grid, cash_required=True)

    # Identical up to and including expiry
    for date in (BASE_DATE, add_years(0.5), add_years(1)):
        assert np.isclose(physical.loc[date, 0], cash.loc[date, 0], rtol=1e-14)

    # Physical settlement: the exercised swap
    net_coupon = np.exp(FLAT_RATE) - 1 - fixed_rate
    t = days_to_years(BASE_DATE, add_years(3.5))
    expected = net_coupon * (np.exp(-FLAT_RATE * (4 - t)) + np.exp(-FLAT_RATE * (5 - t)))
    assert np.isclose(physical.loc[add_years(3.5), 0], expected, rtol=1e-12)
    physical_cash = physical_cash.to_frame()
    assert np.isclose(physical_cash.loc[add_years(2), 0], net_coupon, rtol=1e-12)
    assert np.isclose(physical_cash[0].sum(), 4 * net_coupon, rtol=1e-12)

    # Cash settlement: the settlement amount is paid on expiry, after which the swaption is worth nothing
    assert cash.loc[add_years(3.5), 0] == 0.0
    cash_cash = cash_cash.to_frame()
    assert np.isclose(cash_cash[0].sum(), cash.loc[add_years(1), 0], rtol=1e-14)
    assert np.isclose(cash_cash.loc[add_years(1), 0], cash.loc[add_years(1), 0], rtol=1e-14)


def test_cash_settlement_delay(model_parameters, zero_curve):
    settlement_date = add_years(1) + pd.Timedelta(days=30)
    physical_deal = annual_deal(0.005, 'payer')
    cash_deal = annual_deal(0.005, 'payer', settlement_style='cash', settlement_date=settlement_date)

    dates = [BASE_DATE, add_years(1), add_years(1) + pd.Timedelta(days=10), settlement_date, settlement_date + pd.Timedelta(days=1)]
    physical, _ = value_on(SwaptionHullWhiteValuation(physical_deal, model_parameters, zero_curve), dates[:2])
    cash, cash_cash = value_on(SwaptionHullWhiteValuation(cash_deal, model_parameters, zero_curve), dates, cash_required=True)

    settlement_amount = physical.iloc[1, 0]
    assert np.isclose(cash.iloc[0, 0], physical.iloc[0, 0] * np.exp(-FLAT_RATE * 30 / 365), rtol=1e-12)
    assert np.isclose(cash.iloc[1, 0], settlement_amount * np.exp(-FLAT_RATE * 30 / 365), rtol=1e-12)
    assert np.isclose(cash.iloc[2, 0], settlement_amount * np.exp(-FLAT_RATE * 20 / 365), rtol=1e-12)
    assert np.isclose(cash.iloc[3, 0], settlement_amount, rtol=1e-12)
    assert cash.iloc[4, 0] == 0.0

    cash_cash = cash_cash.to_frame()
    assert np.isclose(cash_cash.loc[settlement_date, 0], settlement_amount, rtol=1e-12)
    assert np.isclose(cash_cash[0].sum(), settlement_amount, rtol=1e-12)


def test_scenario_batch(model_parameters):
    deal = one_period_deal(ATM_FIXED_RATE, payer_receiver='receiver')
    single, _ = value_on(SwaptionHullWhiteValuation(deal, model_parameters, flat_zero_curve()), [BASE_DATE])

    shifted_curve = flat_zero_curve(shifts=[0.0, 0.005, -0.005])
    batch, _ = value_on(SwaptionHullWhiteValuation(deal, model_parameters, shifted_curve), [BASE_DATE])
    assert batch.shape == (1, 3)
    assert np.isclose(batch.iloc[0, 0], single.iloc[0, 0], rtol=1e-14)
    # Receiving fixed is worth more when rates fall
    assert batch.iloc[0, 2] > batch.iloc[0, 0] > batch.iloc[0, 1]

    # Per scenario volatility
    vol_batch = HullWhite1FactorModelParameters(mean_rev_lvl=0.03, vol=[0.02, 0.01])
    batch, _ = value_on(SwaptionHullWhiteValuation(deal, vol_batch, flat_zero_curve()), [BASE_DATE])
    assert batch.shape == (1, 2)
    assert np.isclose(batch.iloc[0, 0], single.iloc[0, 0], rtol=1e-14)
    assert batch.iloc[0, 1] < batch.iloc[0, 0]


def test_buy_sell_and_fx(model_parameters, zero_curve):
    bought = annual_deal(0.01, 'payer')
    sold = annual_deal(0.01, 'payer')
    sold.buy_sell = sold.buy_sell.from_value('sell')

    pv_bought, _ = value_on(SwaptionHullWhiteValuation(bought, model_parameters, zero_curve), [BASE_DATE])
    pv_sold, _ = value_on(SwaptionHullWhiteValuation(sold, model_parameters, zero_curve, fx_rate=FxRate(spot=1.5)), [BASE_DATE])
    assert np.isclose(pv_sold.iloc[0, 0], -1.5 * pv_bought.iloc[0, 0], rtol=1e-14)


def test_swap_rate_override(model_parameters, zero_curve):
    dates = [BASE_DATE, add_years(1), add_years(2)]
    valuation = SwaptionHullWhiteValuation(annual_deal(0.01, 'payer'), model_parameters, zero_curve, nb_scenarios=2)
    valuation.set_swap_rate([0.005, 0.015])
    pv, _ = value_on(valuation, dates)

    for i, fixed_rate in enumerate((0.005, 0.015)):
        expected, _ = value_on(SwaptionHullWhiteValuation(annual_deal(fixed_rate, 'payer'), model_parameters, zero_curve), dates)
        np.testing.assert_allclose(pv[i].values, expected[0].values, rtol=1e-12, atol=1e-15)

    valuation.set_swap_rate(None)
    pv, _ = value_on(valuation, dates)
    expected, _ = value_on(SwaptionHullWhiteValuation(annual_deal(0.01, 'payer'), model_parameters, zero_curve), dates)
    np.testing.assert_allclose(pv[1].values, expected[0].values, rtol=1e-12)


def test_monte_carlo_scenarios(model_parameters):
    valuation_dates = [BASE_DATE, add_years(0.5)]
    years_grid = days_to_years(BASE_DATE, pd.DatetimeIndex(valuation_dates[1:]))
    state = simulate_state(model_parameters, years_grid, nb_simulations=1_000, random_seed=3)
    scenario_curve = HullWhiteScenarioCurve(flat_zero_curve(), model_parameters, years_grid, state)

    deal = annual_deal(0.01, 'receiver')
    pv, _ = value_on(SwaptionHullWhiteValuation(deal, model_parameters, scenario_curve), valuation_dates)
    expected, _ = value_on(SwaptionHullWhiteValuation(deal, model_parameters, flat_zero_curve()), valuation_dates[:1])

    assert pv.shape == (2, 1_000)
    np.testing.assert_allclose(pv.iloc[0].values, expected.iloc[0, 0], rtol=1e-12)
    assert np.isfinite(pv.values).all()
    assert (pv.iloc[1] >= 0).all()
    assert pv.iloc[1].std() > 0


def test_valuation_date_errors(model_parameters, zero_curve):
    valuation = SwaptionHullWhiteValuation(annual_deal(0.01), model_parameters, zero_curve)

    with pytest.raises(ValueError):
        valuation.value([add_years(0.5), BASE_DATE])
    with pytest.raises(ValueError):
        valuation.value([BASE_DATE, add_years(2)])  # expiry is not a valuation date
    with pytest.raises(ValueError):
        valuation.value([BASE_DATE - pd.Timedelta(days=1)])


def test_quadrature_is_reused(model_parameters, zero_curve):
    valuation = SwaptionHullWhiteValuation(annual_deal(0.01), model_parameters, zero_curve)
    assert valuation.quadrature is valuation.quadrature
    assert len(valuation.quadrature.nodes) == 30


def test_build_time_grid():
    deal = annual_deal(0.01)
    grid = build_time_grid([BASE_DATE, add_years(3)], deal)
    # Physical settlement: floating periods are fixed on their rate start dates
    assert list(grid) == [BASE_DATE, add_years(1), add_years(2), add_years(3)]

    cash_deal = annual_deal(0.01, settlement_style='cash')
    grid = build_time_grid([BASE_DATE, add_years(3)], cash_deal)
    assert list(grid) == [BASE_DATE, add_years(1), add_years(3)]

    # Dates before the first requested date are excluded, but the expiry date is kept
    grid = build_time_grid([add_years(1.5)], deal, cash_required=True)
    assert list(grid) == [add_years(1), add_years(1.5), add_years(2), add_years(3), add_years(4), add_years(5)]
    grid = build_time_grid([BASE_DATE, add_years(0.5)], deal, cash_required=True)
    assert list(grid) == [BASE_DATE, add_years(0.5), add_years(1), add_years(2), add_years(3), add_years(4),
                          add_years(5)]


def test_value_after_expiry_only(model_parameters, zero_curve):
    fixed_rate = 0.005
    deal = annual_deal(fixed_rate, 'payer')
    valuation = SwaptionHullWhiteValuation(deal, model_parameters, zero_curve)

    grid = build_time_grid([add_years(1.5)], deal, cash_required=True)
    pv, cash = value_on(valuation, grid, cash_required=True)
    assert list(pv.index) == list(grid)

    net_coupon = np.exp(FLAT_RATE) - 1 - fixed_rate
    t = days_to_years(BASE_DATE, add_years(1.5))
    expected = net_coupon * np.exp(-FLAT_RATE * (np.arange(2, 6) - t)).sum()
    assert np.isclose(pv.loc[add_years(1.5), 0], expected, rtol=1e-12)
    assert np.isclose(pv.loc[add_years(5), 0], net_coupon, rtol=1e-12)
    assert np.isclose(cash.to_frame()[0].sum(), 4 * net_coupon, rtol=1e-12)


def _multi_rate_deal(fixed_rates, payer_receiver):
    # Annual swap starting in 1y whose fixed rate changes sign from period to period
    deal = annual_deal(0.0, payer_receiver, tenor_years=len(fixed_rates))
    deal.fixed_leg = FixedLeg([FixedCashflow(cf.payment_date, cf.accrual_start_date, cf.accrual_end_date,
                                             cf.accrual_year_fraction, cf.notional, rate)
                               for cf, rate in zip(deal.fixed_leg, fixed_rates)])
    return deal


def test_non_unique_exercise_boundary():
    fixed_rates = [1.5, -2.6, 0.2, 0.1]
    model_parameters = HullWhite1FactorModelParameters(mean_rev_lvl=0.0, vol=0.3)
    dates = [BASE_DATE, add_years(0.5)]

    payer_valuation = SwaptionHullWhiteValuation(_multi_rate_deal(fixed_rates, 'payer'), model_parameters,
                                                 flat_zero_curve())
    receiver_valuation = SwaptionHullWhiteValuation(_multi_rate_deal(fixed_rates, 'receiver'), model_parameters,
                                                    flat_zero_curve())

    # The coupons change sign more than once, so the analytic price does not apply
    df_t_expiry = np.full(1, np.exp(-FLAT_RATE))
    quantities = get_swap_quantities(payer_valuation.schedule, payer_valuation.discount_curve,
                                     payer_valuation.forecast_curve, model_parameters, 0.0, 1.0, BASE_DATE,
                                     df_t_expiry)
    y_star, is_solved = solve_y_star(quantities.coupon, quantities.coefficient, quantities.std_dev)
    is_unique = is_solution_unique(quantities.coupon, quantities.coefficient, quantities.std_dev, y_star)
    assert not (is_unique & is_solved).any()

    payer, _ = value_on(payer_valuation, dates)
    receiver, _ = value_on(receiver_valuation, dates)

    for i, date in enumerate(dates):
        t = days_to_years(BASE_DATE, date)
        df = np.exp(-FLAT_RATE * (np.arange(1, 6) - t))
        payer_swap = (df[0] - df[-1]) - (np.array(fixed_rates) * df[1:]).sum()
        assert np.isclose(payer.iloc[i, 0] - receiver.iloc[i, 0], payer_swap, rtol=0, atol=1e-10)
        assert payer.iloc[i, 0] > 0 and receiver.iloc[i, 0] > 0


def test_analytic_and_numerical_scenarios_in_one_batch(model_parameters, zero_curve):
    # Paying a fixed rate of -2 is always in the money: no exercise boundary, valued by numerical integration
    dates = [BASE_DATE]
    payer = SwaptionHullWhiteValuation(annual_deal(0.01, 'payer'), model_parameters, zero_curve,
                                       nb_scenarios=2, swap_rate=[0.01, -2.0])
    receiver = SwaptionHullWhiteValuation(annual_deal(0.01, 'receiver'), model_parameters, zero_curve,
                                          nb_scenarios=2, swap_rate=[0.01, -2.0])
    payer_pv, _ = value_on(payer, dates)
    receiver_pv, _ = value_on(receiver, dates)

    expected, _ = value_on(SwaptionHullWhiteValuation(annual_deal(0.01, 'payer'), model_parameters, zero_curve), dates)
    assert np.isclose(payer_pv.iloc[0, 0], expected.iloc[0, 0], rtol=1e-12)

    df = np.exp(-FLAT_RATE * np.arange(1, 6))
    payer_swap = (df[0] - df[-1]) + 2.0 * df[1:].sum()
    assert np.isclose(payer_pv.iloc[0, 1], payer_swap, rtol=0, atol=1e-10)
    assert receiver_pv.iloc[0, 1] == 0.0
    assert receiver_pv.iloc[0, 0] > 0

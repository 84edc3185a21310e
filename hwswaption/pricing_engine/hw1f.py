# -*- coding: utf-8 -*-
import numpy as np
from scipy.stats import norm
from dataclasses import dataclass
from typing import Union

# [1] Damiano Brigo, Fabio Mercurio - Interest Rate Models Theory and Practice (2001, Springer)
#     In section 3.3.2 'Bond and Option Pricing', page 75 (page 123/1007 of the pdf)
# [2] Hagan, P. (2002) Evaluating and hedging exotic swap instruments via LGM.

# Below this mean reversion level the loadings use their zero mean reversion (Ho-Lee) limits.
MIN_MEAN_REV_LVL = 1e-8


@dataclass
class HullWhite1FactorModelParameters:
    """
    Parameters of the Hull-White 1 factor model, exposed as the loadings used in the swaption engine.

    Under the model, the time-t price of a zero coupon bond maturing at T, relative to its forward value, is
    driven by a single standard normal factor y at the horizon, with standard deviation
    (B(t,T) - B(t,T_expiry)) * sqrt(Zeta(t,T_expiry)).
    """
    mean_rev_lvl: float  # Mean reversion level of the short rate
    vol: Union[float, np.ndarray]  # Volatility of the short rate. Either a scalar or one value per scenario.

    def __post_init__(self):
        if self.mean_rev_lvl is None or self.vol is None:
            raise ValueError("Both 'mean_rev_lvl' and 'vol' must be specified")
        self.vol = np.asarray(self.vol, dtype=np.float64) if np.ndim(self.vol) else float(self.vol)
        if np.any(np.asarray(self.vol) < 0):
            raise ValueError("'vol' must be non-negative")

    def calc_b(self, t1, t2):
        """
        Mean reversion loading B(t1,t2) = (1 - exp(-α(t2 - t1))) / α.

        References:
        [1] In section 3.3.2 'Bond and Option Pricing', page 75 (page 123/1007 of the pdf)
        """
        α = self.mean_rev_lvl
        τ = np.asarray(t2, dtype=np.float64) - np.asarray(t1, dtype=np.float64)
        if abs(α) < MIN_MEAN_REV_LVL:
            return τ
        return (1 / α) * (1 - np.exp(-α * τ))

    def calc_zeta(self, t1, t2):
        """
        Integrated variance Zeta(t1,t2) = σ² (exp(2α(t2 - t1)) - 1) / (2α), the variance of the
        driving state over [t1,t2] expressed in the units of the loading B(t1, ·).
        """
        α = self.mean_rev_lvl
        σ = self.vol
        τ = np.asarray(t2, dtype=np.float64) - np.asarray(t1, dtype=np.float64)
        if abs(α) < MIN_MEAN_REV_LVL:
            return σ**2 * τ
        return σ**2 * np.expm1(2 * α * τ) / (2 * α)

    def calc_bond_price_vol(self, t, expiry_years, maturity_years):
        """Total standard deviation (to option expiry) of the log price of a zero coupon bond maturing at 'maturity_years'."""
        return (self.calc_b(t, maturity_years) - self.calc_b(t, expiry_years)) \
            * np.sqrt(self.calc_zeta(t, expiry_years))

    def price_zero_coupon_bond_option(self, P_t_T, P_t_S, expiry_years, maturity_years, K, cp, t=0.0):
        """
        Price (at time t) a European option on a zero-coupon bond using the Hull-White model.

        Parameters:
        P_t_T : float or np.array
            Discount factor from t to the option expiry.
        P_t_S : float or np.array
            Discount factor from t to the bond maturity.
        expiry_years : float
            T, expiry (in years) of the option, and the start of the underlying zero-coupon bond.
        maturity_years : float
            S, maturity (in years) of the underlying zero-coupon bond.
        K : float
            Strike price of the bond option.
        cp : int
            1 for call, -1 for put

        References:
        [1] In section 3.3.2 'Bond and Option Pricing, formulae 3.40 and 3.41, page 76 (124/1007 of the pdf)
        """
        T = np.asarray(expiry_years, dtype=np.float64)
        S = np.asarray(maturity_years, dtype=np.float64)
        assert np.all(S > T)

        σP = self.calc_bond_price_vol(t=t, expiry_years=T, maturity_years=S)
        h = (1/σP) * np.log(P_t_S / (K * P_t_T)) + 0.5 * σP

        return cp * (P_t_S * norm.cdf(cp*h) - K * P_t_T * norm.cdf(cp*(h - σP)))

    def price_optionlet(self, P_t_T1, P_t_T2, effective_years, termination_years, K, cp, t=0.0):
        """
        Prices a European optionlet (caplet/floorlet) with the HW1F model, per unit notional.
        Assumes fixing at the start and payment at the end of the effective period.

        References:
        [1] In section 2.6 'The Fundamental Pricing Formulas, page 41 (124&125/1007 of the pdf)
        """
        # Cap = Put option on a zero-coupon bond, Floor = Call option on a zero-coupon bond
        cp_ = -1 * cp

        # (2.26) in [1]
        τ = termination_years - effective_years
        K_ = 1 / (1 + K * τ)
        return self.price_zero_coupon_bond_option(P_t_T=P_t_T1,
                                                  P_t_S=P_t_T2,
                                                  expiry_years=effective_years,
                                                  maturity_years=termination_years,
                                                  K=K_,
                                                  cp=cp_,
                                                  t=t) / K_

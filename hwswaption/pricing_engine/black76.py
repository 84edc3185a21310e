# -*- coding: utf-8 -*-
import numpy as np
from scipy.stats import norm
from hwswaption.utils.settings import TINY


def black76_price(
        F: [float, np.array],
        K: [float, np.array],
        std_dev: [float, np.array],
        cp: [int, np.array],
        annuity_factor: [float, np.array]=1,
        intrinsic_time_split: bool=False):
    """
    Black76 pricing in terms of the total standard deviation of the log forward to expiry, σ√τ.

    The Hull-White swaption engine supplies the total standard deviation of each zero coupon bond directly,
    so the volatility and time to expiry are not separated here.

    Parameters
    ----------
    F : float or np.array
        Forward price. Must be positive.
    K : float or np.array
        Strike price. Must be positive.
    std_dev : float or np.array
        Total standard deviation of ln(F) to expiry. Where std_dev <= TINY, the intrinsic value is returned.
    cp : int
        Option type: 1 for call option, -1 for put option.
    annuity_factor : float, optional
        Multiplier to adjust the Black76 forward price to present value (default is 1).
    intrinsic_time_split : bool, optional
        If True, splits option value into intrinsic and time value components (default is False).

    Returns
    -------
    results : dict
        - 'price' : np.array
            Option price.
        - 'intrinsic', 'time' : np.array
            Only if intrinsic_time_split is True.
    """

    # Convert to arrays. Function is vectorised.
    F, K, σ, cp, annuity_factor = np.broadcast_arrays(*map(np.atleast_1d, (F, K, std_dev, cp, annuity_factor)))

    intrinsic = np.maximum(0.0, cp * (F - K))

    has_time_value = σ > TINY
    σ_ = np.where(has_time_value, σ, 1.0)
    with np.errstate(divide='ignore', invalid='ignore'):
        d1 = (np.log(F/K) + 0.5 * σ_**2) / σ_
    d2 = d1 - σ_
    X = np.where(has_time_value, cp * (F * norm.cdf(cp * d1) - K * norm.cdf(cp * d2)), intrinsic)
    X = annuity_factor * X

    results = {'price': X}

    if intrinsic_time_split:
        results['intrinsic'] = annuity_factor * intrinsic
        results['time'] = X - results['intrinsic']

    return results

# -*- coding: utf-8 -*-
import numpy as np
from scipy.special import roots_hermitenorm
from dataclasses import dataclass, field

from hwswaption.enums import PayerReceiver
from hwswaption.utils.settings import GAUSS_HERMITE_ORDER
from hwswaption.utils.vector_math import safe_exp_multiply


@dataclass
class GaussHermiteNormalQuadrature:
    """
    Gauss-Hermite rule for expectations of a function of a standard normal variable:
        E[f(y)] ≈ Σₖ wₖ f(yₖ)
    The probabilists' Hermite nodes are used, with weights normalised to sum to 1.
    """
    order: int = GAUSS_HERMITE_ORDER

    # Attributes set in __post_init__
    nodes: np.array = field(init=False)
    weights: np.array = field(init=False)

    def __post_init__(self):
        assert isinstance(self.order, int) and self.order >= 1, self.order
        nodes, weights = roots_hermitenorm(self.order)
        self.nodes = nodes
        self.weights = weights / weights.sum()

    def integrate(self, func):
        """
        Parameters
        ----------
        func : callable
            Maps a node (float) to a batched value (np.array).

        Returns
        -------
        np.array
            The quadrature estimate of E[func(y)], batched like the function values.
        """
        total = None
        for y, w in zip(self.nodes, self.weights):
            value = w * func(y)
            total = value if total is None else total + value
        return total


def price_numerical(quadrature: GaussHermiteNormalQuadrature,
                    coupon: np.array,
                    coefficient: np.array,
                    std_dev: np.array,
                    df_expiry: np.array,
                    payer_receiver: PayerReceiver) -> np.array:
    """
    Values the swaption as the expectation, over the standard normal factor y at expiry, of
    max(-δ Σᵢ Cᵢ fᵢ exp(vᵢ y), 0), where δ = +1 for a payer and -1 for a receiver.

    The expectation is in expiry-forward units and is discounted with the expiry discount factor, so the result is
    comparable to the analytic price. Valid for every scenario, whether or not the exercise boundary is unique.
    """
    δ = payer_receiver.multiplier
    weighted_coupon = δ * coupon * coefficient

    def payoff(y):
        underlying = -safe_exp_multiply(std_dev * y, weighted_coupon).sum(axis=0)
        return np.maximum(underlying, 0.0)

    return df_expiry * quadrature.integrate(payoff)

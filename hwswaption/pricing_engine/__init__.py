from hwswaption.pricing_engine.hw1f import HullWhite1FactorModelParameters
from hwswaption.pricing_engine.black76 import black76_price
from hwswaption.pricing_engine.monte_carlo import generate_rand_nbs, simulate_state
from hwswaption.pricing_engine.quadrature import GaussHermiteNormalQuadrature, price_numerical
from hwswaption.pricing_engine.swap_quantities import SwapQuantities, get_swap_quantities
from hwswaption.pricing_engine.jamshidian import solve_y_star, is_solution_unique, price_analytic

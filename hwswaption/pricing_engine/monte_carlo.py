# -*- coding: utf-8 -*-
import numpy as np

from hwswaption.utils import MAX_SIMULATIONS_PER_LOOP, DEFAULT_NB_SIMULATIONS


def generate_rand_nbs(nb_steps: int,
                      nb_rand_vars: int=1,
                      nb_simulations: int=DEFAULT_NB_SIMULATIONS,
                      apply_antithetic_variates: bool=False,
                      random_seed: int=0):
    """
    Generate random numbers for Monte Carlo simulations with options for variance reduction.

    Parameters:
    -----------
    nb_steps : int
        The number of periods for which random numbers need to be generated.
    nb_rand_vars : int
        The number of random numbers
    nb_simulations : int, optional
        The total number of simulations.
    apply_antithetic_variates : bool, optional
        Flag to indicate whether antithetic variates should be applied. Default is False.
    random_seed : int, optional
        Seed for random number generation. Default is 0.

    Returns:
    --------
    np.array: Array of shape (nb_steps, nb_rand_vars, nb_simulations) containing random numbers.

    Raises:
    ValueError: If the number of random numbers to be generated exceeds MAX_SIMULATIONS_PER_LOOP.
    """

    rng = np.random.default_rng(random_seed)

    assert isinstance(nb_steps, int), type(nb_steps)
    assert isinstance(nb_rand_vars, int), type(nb_rand_vars)
    assert isinstance(nb_simulations, int), type(nb_simulations)
    assert isinstance(apply_antithetic_variates, bool)
    assert nb_steps >= 1, nb_steps
    assert nb_rand_vars >= 1, nb_rand_vars
    assert nb_simulations >= 1, nb_simulations

    if (nb_steps * nb_simulations) > MAX_SIMULATIONS_PER_LOOP:
        raise ValueError("Too many steps & simulations for one refresh; may lead to memory leak")

    if apply_antithetic_variates and nb_simulations == 1:
        raise ValueError("Antithetic variates requiries >=2 simulations")

    if apply_antithetic_variates:
        nb_pairs = nb_simulations // 2
        rand_nbs_normal = rng.standard_normal((nb_steps, nb_rand_vars, nb_simulations - nb_pairs))
        rand_nbs_antithetic_variate = -1 * rand_nbs_normal[:,:,:nb_pairs]
        rand_nbs = np.concatenate([rand_nbs_normal, rand_nbs_antithetic_variate], axis=2)

        # Reindex to pair normal with antithetic variates
        idx = np.column_stack((np.arange(nb_pairs), np.arange(nb_pairs) + nb_simulations - nb_pairs)).flatten()
        if nb_simulations % 2:
            idx = np.append(idx, nb_simulations - 1 - nb_pairs)
        rand_nbs = rand_nbs[:, :, idx]
    else:
        rand_nbs = rng.standard_normal((nb_steps, nb_rand_vars, nb_simulations))

    return rand_nbs


def simulate_state(model_parameters,
                   years_grid: np.array,
                   nb_simulations: int=DEFAULT_NB_SIMULATIONS,
                   apply_antithetic_variates: bool=True,
                   random_seed: int=0) -> np.array:
    """
    Exact simulation of the Gaussian state x(t) driving the Hull-White 1 factor model, in the
    parametrisation where x is a driftless martingale with variance Zeta(0,t).

    Parameters
    ----------
    model_parameters : HullWhite1FactorModelParameters
    years_grid : np.array
        Increasing simulation times (in years from the curve date). A leading 0 is not required.
    nb_simulations : int
        Number of simulation paths.

    Returns
    -------
    np.array
        Simulated state of shape (len(years_grid), nb_simulations).
    """
    assert np.ndim(model_parameters.vol) == 0, 'simulation requires a scalar volatility'
    years_grid = np.atleast_1d(np.asarray(years_grid, dtype=np.float64))
    assert np.all(years_grid >= 0), 'simulation times must be on or after the curve date'
    assert np.all(np.diff(years_grid) > 0), 'simulation times must be strictly increasing'

    rand_nbs = generate_rand_nbs(nb_steps=len(years_grid),
                                 nb_rand_vars=1,
                                 nb_simulations=nb_simulations,
                                 apply_antithetic_variates=apply_antithetic_variates,
                                 random_seed=random_seed)

    zeta = model_parameters.calc_zeta(0.0, years_grid)
    Δzeta = np.diff(np.concatenate([[0.0], zeta]))

    # Independent Gaussian increments; the state variance is Zeta(0,t) at every grid time
    increments = np.sqrt(Δzeta)[:, np.newaxis] * rand_nbs[:, 0, :]
    return np.cumsum(increments, axis=0)

# -*- coding: utf-8 -*-
import numpy as np
import pandas as pd
from dataclasses import dataclass, field
from scipy.interpolate import splrep, splev
from typing import Literal, Optional

from hwswaption.utils.daycount import days_to_years

VALID_INTERPOLATION_METHOD = Literal['linear_on_ln_discount', 'cubic_spline_on_cczr']


@dataclass
class ZeroCurve:
    """
    Zero coupon curve, returning discount factors batched over the scenarios.

    The pillars are specified in 'pillar_df' with exactly two columns:
        (i) One of: 'years' or 'date'
        (ii) One of: 'zero_rate' (continuously compounded) or 'discount_factor'

    Scenarios are represented by parallel shifts (continuously compounded) of the zero rates, one per scenario.
    Beyond the last pillar the continuously compounded zero rate is extrapolated flat.
    """
    curve_date: pd.Timestamp
    pillar_df: pd.DataFrame
    interp_method: VALID_INTERPOLATION_METHOD = 'linear_on_ln_discount'
    shifts: Optional[np.array] = None
    currency: Optional[str] = None

    # Attributes set in __post_init__
    cubic_spline_definition: tuple = field(init=False)

    def __post_init__(self):
        self.curve_date = pd.Timestamp(self.curve_date)
        self._process_pillar_df(self.pillar_df.copy())
        if self.shifts is None:
            self.shifts = np.zeros(1)
        else:
            self.shifts = np.atleast_1d(np.asarray(self.shifts, dtype=np.float64))
            assert self.shifts.ndim == 1

    @property
    def nb_scenarios(self):
        return len(self.shifts)

    def _process_pillar_df(self, pillar_df):
        only_one_of_columns_X = ['date', 'years']
        only_one_of_columns_Y = ['zero_rate', 'discount_factor']

        if len(pillar_df.columns.to_list()) != 2:
            raise ValueError('Exactly two columns must be specified: \n'
                             '(i) One of: ' + ', '.join(only_one_of_columns_X) + '\n'
                             '(ii) One of: ' + ', '.join(only_one_of_columns_Y))

        X_columns = [col for col in only_one_of_columns_X if col in pillar_df.columns]
        if len(X_columns) != 1:
            raise ValueError('Exactly one of the following columns must be specified: ' + ', '.join(only_one_of_columns_X))
        Y_columns = [col for col in only_one_of_columns_Y if col in pillar_df.columns]
        if len(Y_columns) != 1:
            raise ValueError('Exactly one of the following columns must be specified: ' + ', '.join(only_one_of_columns_Y))

        if X_columns[0] == 'date':
            pillar_df['years'] = days_to_years(self.curve_date, pillar_df['date'])
            pillar_df = pillar_df.drop(columns=['date'])

        pillar_df = pillar_df.astype(float)
        pillar_df = pillar_df[pillar_df['years'] > 0].sort_values(by='years', ascending=True).reset_index(drop=True)
        if len(pillar_df) == 0:
            raise ValueError('At least one pillar after the curve date is required')

        match Y_columns[0]:
            case 'zero_rate':
                pillar_df['cczr'] = pillar_df['zero_rate']
                pillar_df['discount_factor'] = np.exp(-pillar_df['cczr'] * pillar_df['years'])
                pillar_df = pillar_df.drop(columns=['zero_rate'])
            case 'discount_factor':
                if (pillar_df['discount_factor'] <= 0).any():
                    raise ValueError('Discount factors must be positive')
                pillar_df['cczr'] = -1 * np.log(pillar_df['discount_factor']) / pillar_df['years']

        match self.interp_method:
            case 'linear_on_ln_discount':
                self.cubic_spline_definition = None
            case 'cubic_spline_on_cczr':
                if len(pillar_df) < 4:
                    raise ValueError("At least 4 pillars are required for 'cubic_spline_on_cczr'")
                self.cubic_spline_definition = splrep(x=pillar_df['years'].values, y=pillar_df['cczr'].values, k=3)
            case _:
                raise ValueError(f"Invalid interpolation method {self.interp_method}")

        self.pillar_df = pillar_df[['years', 'cczr', 'discount_factor']]

    def get_ln_discount_factors(self, years) -> np.array:
        """Natural log of the (unshifted) discount factors from the curve date. Zero for times on or before the curve date."""
        years = np.asarray(years, dtype=np.float64)
        pillar_years = self.pillar_df['years'].values
        last_years, last_cczr = pillar_years[-1], self.pillar_df['cczr'].values[-1]

        if self.interp_method == 'linear_on_ln_discount':
            ln_df = np.interp(x=years,
                              xp=np.concatenate([[0.0], pillar_years]),
                              fp=np.concatenate([[0.0], np.log(self.pillar_df['discount_factor'].values)]))
        else:
            cczr = splev(np.clip(years, pillar_years[0], last_years), self.cubic_spline_definition, der=0)
            ln_df = -1 * cczr * years

        ln_df = np.where(years > last_years, -last_cczr * years, ln_df)
        return np.where(years > 0, ln_df, 0.0)

    def get_discount_factors(self, t_value, t_pay) -> np.array:
        """
        Forward discount factor from 't_value' to 't_pay' (years from the curve date), batched over the scenarios.
        """
        ln_df = self.get_ln_discount_factors(t_pay) - self.get_ln_discount_factors(t_value)
        return np.exp(ln_df - self.shifts * (t_pay - t_value))

    def get_zero_rates(self, years) -> np.array:
        """Continuously compounded zero rates from the curve date, per scenario."""
        years = np.asarray(years, dtype=np.float64)
        assert np.all(years > 0)
        return -1 * self.get_ln_discount_factors(years) / years + self.shifts

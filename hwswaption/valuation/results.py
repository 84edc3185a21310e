# -*- coding: utf-8 -*-
import numpy as np
import pandas as pd
from dataclasses import dataclass, field
from prettytable import PrettyTable
from typing import Optional


@dataclass
class PVProfile:
    """Present values of a deal on each valuation date, one value per scenario."""
    nb_scenarios: int
    dates: list = field(default_factory=list)
    values: list = field(default_factory=list)
    is_complete: bool = False

    def append_vector(self, date, pv):
        assert not self.is_complete, 'profile is complete'
        date = pd.Timestamp(date)
        if self.dates and date <= self.dates[-1]:
            raise ValueError(f"Profile dates must be strictly increasing: {date} after {self.dates[-1]}")
        pv = np.broadcast_to(np.asarray(pv, dtype=np.float64), (self.nb_scenarios,)).copy()
        self.dates.append(date)
        self.values.append(pv)

    def complete(self):
        self.is_complete = True

    def to_frame(self) -> pd.DataFrame:
        """PVs as a DataFrame, indexed by date with one column per scenario."""
        data = np.vstack(self.values) if self.values else np.empty((0, self.nb_scenarios))
        return pd.DataFrame(data, index=pd.DatetimeIndex(self.dates, name='date'), columns=range(self.nb_scenarios))

    def summary_table(self, percentiles=(5, 50, 95)) -> PrettyTable:
        """Table of the mean, standard deviation and percentiles of the PV over the scenarios, per date."""
        table = PrettyTable()
        table.field_names = ['Date', 'Mean', 'Std. dev.'] + [f'P{p}' for p in percentiles]
        for date, pv in zip(self.dates, self.values):
            row = [date.strftime('%Y-%m-%d'), f'{pv.mean():.6g}', f'{pv.std():.6g}']
            row += [f'{x:.6g}' for x in np.percentile(pv, percentiles)]
            table.add_row(row)
        return table


@dataclass
class CashAccumulator:
    """Realised cash, converted to the reporting currency and summed per date."""
    nb_scenarios: int
    cash: dict = field(default_factory=dict)

    def accumulate(self, fx_rate, date, t, cash):
        date = pd.Timestamp(date)
        amount = np.asarray(cash, dtype=np.float64) * fx_rate.get(t)
        amount = np.broadcast_to(amount, (self.nb_scenarios,))
        if date in self.cash:
            self.cash[date] = self.cash[date] + amount
        else:
            self.cash[date] = amount.copy()

    def to_frame(self) -> pd.DataFrame:
        dates = sorted(self.cash)
        data = np.vstack([self.cash[d] for d in dates]) if dates else np.empty((0, self.nb_scenarios))
        return pd.DataFrame(data, index=pd.DatetimeIndex(dates, name='date'), columns=range(self.nb_scenarios))


@dataclass
class ValuationResults:
    profile: PVProfile
    cash: Optional[CashAccumulator] = None

# -*- coding: utf-8 -*-
import numpy as np
from dataclasses import dataclass
from typing import Union


@dataclass
class FxRate:
    """Conversion factor from the deal currency to the reporting currency. Scalar or one value per scenario."""
    spot: Union[float, np.array] = 1.0

    def get(self, t) -> np.array:
        return np.asarray(self.spot, dtype=np.float64)

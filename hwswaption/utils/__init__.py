from hwswaption.utils.settings import *
from hwswaption.utils.daycount import day_count, year_frac, days_to_years
from hwswaption.utils.vector_math import safe_exp_multiply, as_batch

# -*- coding: utf-8 -*-
from enum import Enum
from hwswaption.enums.helper import clean_enum_value, get_enum_member


class DayCountBasis(Enum):
    _30_360 = '30/360'
    _30E_360 = '30e/360'
    ACT_360 = 'act/360'
    ACT_365 = 'act/365'

    def __init__(self, value):
        days_per_year = {
            '30/360': 360,
            '30e/360': 360,
            'act/360': 360,
            'act/365': 365,
            }
        self.days_per_year = days_per_year[self.value]

    @classmethod
    def default(cls):
        return cls.ACT_365

    @classmethod
    def is_valid(cls, value):
        value = clean_enum_value(value)
        return value in {enum_member.value for enum_member in cls}

    @classmethod
    def from_value(cls, value):
        """Create an enum member from the given value, if valid."""

        def specific_cleaning(value):
            value = value.replace('actual','act')
            if value == 'act/365fixed':
                value = 'act/365'
            return value

        return get_enum_member(cls, value, transform_fn=specific_cleaning)

    @property
    def display_name(self):
        return self.value.upper().replace('_', ' ').strip()


class PeriodFrequency(Enum):
    MONTHLY = 'monthly'
    QUARTERLY = 'quarterly'
    SEMIANNUAL = 'semiannual'
    ANNUAL = 'annual'

    @property
    def months(self):
        return {'monthly': 1, 'quarterly': 3, 'semiannual': 6, 'annual': 12}[self.value]

    @classmethod
    def default(cls):
        return cls.QUARTERLY

    @classmethod
    def from_value(cls, value):
        """Create an enum member from the given value, if valid."""

        def specific_cleaning(value):
            return value.replace('-', '').replace('_', '')

        return get_enum_member(cls, value, transform_fn=specific_cleaning)

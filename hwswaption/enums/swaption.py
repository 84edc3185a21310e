# -*- coding: utf-8 -*-
from enum import Enum
from hwswaption.enums.helper import clean_enum_value, get_enum_member


class PayerReceiver(Enum):
    PAYER = 'payer'
    RECEIVER = 'receiver'

    @property
    def multiplier(self):
        # +1 if the fixed leg is paid (payer swaption), -1 if received
        return 1 if self == PayerReceiver.PAYER else -1

    @classmethod
    def default(cls):
        return cls.PAYER

    @classmethod
    def from_value(cls, value):
        """Create an enum member from the given value, if valid."""

        def specific_cleaning(value):
            return {'pay': 'payer', 'rcv': 'receiver', 'receive': 'receiver'}.get(value, value)

        return get_enum_member(cls, value, transform_fn=specific_cleaning)

    @property
    def display_name(self):
        return self.name.title()


class BuySell(Enum):
    BUY = 'buy'
    SELL = 'sell'

    @property
    def multiplier(self):
        return -1 if self == BuySell.SELL else 1

    @classmethod
    def default(cls):
        return cls.BUY

    @classmethod
    def from_value(cls, value):
        """Create an enum member from the given value, if valid."""
        return get_enum_member(cls, value)

    @property
    def display_name(self):
        return self.name.title()


class SettlementStyle(Enum):
    PHYSICAL = 'physical'
    CASH = 'cash'

    @classmethod
    def default(cls):
        return cls.PHYSICAL

    @classmethod
    def is_valid(cls, value):
        value = clean_enum_value(value)
        return value in {enum_member.value for enum_member in cls}

    @classmethod
    def from_value(cls, value):
        """Create an enum member from the given value, if valid."""
        return get_enum_member(cls, value)

    @property
    def display_name(self):
        return self.name.title()


class CompoundingMethod(Enum):
    NONE = 'none'
    FLAT = 'flat'
    INCLUDE_MARGIN = 'include_margin'
    EXCLUDE_MARGIN = 'exclude_margin'

    @classmethod
    def default(cls):
        return cls.NONE

    @classmethod
    def from_value(cls, value):
        """Create an enum member from the given value, if valid."""
        return get_enum_member(cls, value)

# -*- coding: utf-8 -*-
import pandas as pd
from dataclasses import dataclass, field
from typing import List, Optional

from hwswaption.enums import PayerReceiver, BuySell, SettlementStyle, CompoundingMethod
from hwswaption.instruments.cashflows import FixedLeg, FloatingLeg


class SwaptionValidationError(ValueError):
    """Raised when a swaption deal cannot be valued by the Hull-White swaption model."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__('; '.join(self.errors))


@dataclass
class SwaptionDeal:
    """European swaption on a vanilla fixed/floating swap."""
    currency: str
    option_expiry_date: pd.Timestamp
    fixed_leg: FixedLeg
    floating_leg: FloatingLeg
    payer_receiver: PayerReceiver = field(default=PayerReceiver.PAYER)
    buy_sell: BuySell = field(default=BuySell.BUY)
    settlement_style: SettlementStyle = field(default=SettlementStyle.PHYSICAL)
    settlement_date: Optional[pd.Timestamp] = None  # defaults to the option expiry date for cash settlement
    model_parameters_id: Optional[str] = None

    def __post_init__(self):
        self.option_expiry_date = pd.Timestamp(self.option_expiry_date)
        self.payer_receiver = PayerReceiver.from_value(self.payer_receiver)
        self.buy_sell = BuySell.from_value(self.buy_sell)
        self.settlement_style = SettlementStyle.from_value(self.settlement_style)
        if self.settlement_date is None:
            self.settlement_date = self.option_expiry_date
        else:
            self.settlement_date = pd.Timestamp(self.settlement_date)

    @property
    def is_cash_settled(self):
        return self.settlement_style == SettlementStyle.CASH

    @property
    def is_physically_settled(self):
        return self.settlement_style == SettlementStyle.PHYSICAL


def is_vanilla_swaption(deal: SwaptionDeal) -> bool:
    """
    Checks that:
        Each floating cashflow has a single reset.
        Rate end date after rate start date.
        First rate start must be before first fixed pay date.
    """
    if deal.floating_leg is None or deal.fixed_leg is None:
        return False
    if len(deal.floating_leg) == 0 or len(deal.fixed_leg) == 0:
        return False

    for cf in deal.floating_leg:
        if len(cf.resets) != 1:
            return False
        if cf.resets[0].rate_start_date >= cf.resets[0].rate_end_date:
            return False

    first_fixed_payment = min(cf.payment_date for cf in deal.fixed_leg)
    first_rate_start = min(cf.resets[0].rate_start_date for cf in deal.floating_leg)
    if first_fixed_payment <= first_rate_start:
        return False

    return True


def validate_swaption(deal: SwaptionDeal, discount_curve=None, forecast_curve=None) -> List[str]:
    """
    Structural checks that the swaption can be valued by the Hull-White swaption model.
    Returns a list of error messages, empty if the deal is valid.
    """
    errors = []

    if deal.floating_leg is None or deal.fixed_leg is None:
        errors.append('Deal must contain exactly one floating and one fixed leg.')
        return errors

    if not is_vanilla_swaption(deal):
        errors.append('The Hull White swaption valuation model is for vanilla swaptions only.')

    # Floating periods must reset in strictly increasing order
    rate_starts = [cf.resets[0].rate_start_date for cf in deal.floating_leg if len(cf.resets) > 0]
    if any(later <= earlier for earlier, later in zip(rate_starts[:-1], rate_starts[1:])):
        errors.append('Floating rate start dates must be strictly increasing.')

    if deal.floating_leg.compounding_method != CompoundingMethod.NONE or deal.fixed_leg.compounding:
        errors.append('Underlying swap has non-standard floating cashflows.')

    for leg_name, leg in (('fixed', deal.fixed_leg), ('floating', deal.floating_leg)):
        if leg.currency is not None and leg.currency != deal.currency:
            errors.append(f'Currency of the {leg_name} leg must be the same as the settlement currency (Currency).')

    discount_currency = getattr(discount_curve, 'currency', None)
    if discount_currency and discount_currency != deal.currency:
        errors.append('Settlement currency (Currency) and currency of Discount_Rate must be the same')

    forecast_currency = getattr(forecast_curve, 'currency', None)
    if forecast_currency and forecast_currency != deal.currency:
        errors.append('Settlement currency (Currency) and currency of Forecast_Rate must be the same')

    if deal.is_cash_settled and deal.settlement_date < deal.option_expiry_date:
        errors.append('Settlement date must not be before the option expiry date.')

    return errors

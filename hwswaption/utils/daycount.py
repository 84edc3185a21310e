# -*- coding: utf-8 -*-
import datetime as dt
import numpy as np
import pandas as pd
from hwswaption.enums import DayCountBasis
from hwswaption.utils.settings import DAYS_PER_YEAR


def convert_to_same_shape_DatetimeIndex(start_date, end_date):
    start_dti = to_datetimeindex(start_date)
    end_dti = to_datetimeindex(end_date)

    scalar_output = len(start_dti) == 1 and len(end_dti) == 1

    if len(start_dti) == 1 and len(end_dti) > 1:
        start_dti = pd.DatetimeIndex([start_dti.values[0] for _ in range(len(end_dti))])
    elif len(start_dti) > 1 and len(end_dti) == 1:
        end_dti = pd.DatetimeIndex([end_dti.values[0] for _ in range(len(start_dti))])

    return start_dti, end_dti, scalar_output


def day_count(start_date,
              end_date,
              day_count_basis: DayCountBasis):

    # References
    # [1] The excel file "30-360-2006ISDADefs" sourced from https://www.isda.org/2008/12/22/30-360-day-count-conventions/

    start_dti, end_dti, scalar_output = convert_to_same_shape_DatetimeIndex(start_date, end_date)

    assert (start_dti <= end_dti).all()

    if day_count_basis in {DayCountBasis.ACT_360, DayCountBasis.ACT_365}:
        # Act = the actual number of days between the dates
        result = (end_dti - start_dti).days.values

    elif day_count_basis == DayCountBasis._30_360:
        # Logic for "30/360" / "360/360" / "Bond Basis" is defined in tab "30-360 Bond Basis" in reference [1]

        # If (DAY1=31), Set D1=30, Otherwise set D1=DAY1
        DAY1 = start_dti.day
        d1 = np.where(DAY1 == 31, 30, DAY1)

        # If (DAY2=31) and (DAY1=30 or 31), Then set D2=30, Otherwise set D2=DAY2
        DAY2 = end_dti.day
        mask = np.logical_and(d1 == 30, DAY2 == 31)
        d2 = np.where(mask, 30, DAY2)

        result = 360*(end_dti.year - start_dti.year) \
               + 30*(end_dti.month - start_dti.month) \
               + d2 - d1
        result = np.asarray(result)

    elif day_count_basis == DayCountBasis._30E_360:
        # Logic for "30/360E" / "Eurobond Basis" is defined in tab "30E-360 Eurobond" in reference [1]
        d1 = np.where(start_dti.day == 31, 30, start_dti.day)
        d2 = np.where(end_dti.day == 31, 30, end_dti.day)

        result = 360 * (end_dti.year - start_dti.year) \
               + 30 * (end_dti.month - start_dti.month) \
               + d2 - d1
        result = np.asarray(result)
    else:
        raise ValueError(f"Unsupported day count basis {day_count_basis}")

    if scalar_output:
        return result.item()
    else:
        return result


def year_frac(start_date,
              end_date,
              day_count_basis: DayCountBasis):
    return day_count(start_date, end_date, day_count_basis) / day_count_basis.days_per_year


def days_to_years(base_date, date):
    """
    Model time (in years) of 'date' measured from 'base_date' on an actual/365 basis.
    Dates before the base date give negative times.
    """
    base_date = pd.Timestamp(base_date)
    if isinstance(date, (pd.DatetimeIndex, pd.Series, list, np.ndarray)):
        return (pd.DatetimeIndex(date) - base_date).days.values / DAYS_PER_YEAR
    return (pd.Timestamp(date) - base_date).days / DAYS_PER_YEAR


def to_datetimeindex(date_object) -> 'pd.DatetimeIndex':
    """
    Converts a date-like object to a pandas DatetimeIndex.

    Supported types: pd.DatetimeIndex, pd.Timestamp, np.datetime64, dt.date, dt.datetime, pd.Series and list.
    Unsupported types raise a ValueError.
    """
    if isinstance(date_object, pd.DatetimeIndex):
        return date_object
    if isinstance(date_object, pd.Timestamp):
        return pd.DatetimeIndex([date_object])
    elif isinstance(date_object, np.datetime64):
        return pd.DatetimeIndex([pd.to_datetime(date_object)])
    elif isinstance(date_object, (dt.date, dt.datetime)):
        return pd.DatetimeIndex([dt.datetime(date_object.year,date_object.month,date_object.day)])
    elif isinstance(date_object, (pd.Series, list)):
        return pd.DatetimeIndex(date_object)
    else:
        raise ValueError("Unsupported type", type(date_object), date_object)

# -*- coding: utf-8 -*-
import pandas as pd


def clean_enum_value(value, transform_fn=None):
    if isinstance(value, str):
        value = value.lower().strip().replace(' ','_')
        if transform_fn:
            value = transform_fn(value)
    elif value is None or pd.isna(value):
        value = None
    return value


def get_enum_member(enum_class, value, transform_fn=None):
    """Look up an enum member by its (cleaned) code, also accepting codes with '/' removed."""
    if isinstance(value, enum_class):
        return value

    cleaned_value = clean_enum_value(value, transform_fn)
    if cleaned_value is None:
        return enum_class.default()
    for enum_member in enum_class:
        if enum_member.value == cleaned_value \
                or enum_member.value.replace('/', '') == cleaned_value:
            return enum_member

    # List all valid codes in case of an error
    valid_values = [enum_member.value for enum_member in enum_class]
    raise ValueError(f"Invalid value: {value}. Valid codes are: {valid_values}")

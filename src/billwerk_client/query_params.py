"""
Query parameters accepted by the list and lookup endpoints.
"""
from enum import Enum
from typing import Any, Callable, Union

from .core.request_builder import RequestBuilder


class QueryParam(str, Enum):
    RANGE = "range"
    FROM = "from"
    TO = "to"
    INTERVAL = "interval"
    SIZE = "size"
    NEXT_PAGE_TOKEN = "next_page_token"
    HANDLE = "handle"
    HANDLE_PREFIX = "handle_prefix"
    HANDLES = "handles"
    STATE = "state"
    SCHEDULE_TYPE = "schedule_type"
    PARTIAL_PERIOD_HANDLING = "partial_period_handling"
    SETUP_FEE_HANDLING = "setup_fee_handling"
    FIXED_LIFE_TIME_UNIT = "fixed_life_time_unit"
    TRIAL_INTERVAL_UNIT = "trial_interval_unit"
    DUNNING_PLAN_HANDLE = "dunning_plan_handle"
    NAME = "name"
    DESCRIPTION = "description"
    SETUP_FEE_TEXT = "setup_fee_text"
    AMOUNT = "amount"
    QUANTITY = "quantity"
    FIXED_COUNT = "fixed_count"
    FIXED_LIFE_TIME_LENGTH = "fixed_life_time_length"
    TRIAL_INTERVAL_LENGTH = "trial_interval_length"
    INTERVAL_LENGTH = "interval_length"
    SCHEDULE_FIXED_DAY = "schedule_fixed_day"
    RENEWAL_REMINDER_EMAIL_DAYS = "renewal_reminder_email_days"
    TRIAL_REMINDER_EMAIL_DAYS = "trial_reminder_email_days"
    BASE_MONTH = "base_month"
    NOTICE_PERIODS = "notice_periods"
    MINIMUM_PRORATED_AMOUNT = "minimum_prorated_amount"
    FIXATION_PERIODS = "fixation_periods"
    SETUP_FEE = "setup_fee"
    AMOUNT_INCL_VAT = "amount_incl_vat"
    NOTICE_PERIODS_AFTER_CURRENT = "notice_periods_after_current"
    FIXATION_PERIODS_FULL = "fixation_periods_full"
    INCLUDE_ZERO_AMOUNT = "include_zero_amount"
    PARTIAL_PRORATION_DAYS = "partial_proration_days"
    FIXED_TRIAL_DAYS = "fixed_trial_days"
    CURRENCY = "currency"
    TAX_RATE_FOR_COUNTRY = "tax_rate_for_country"


# Applies one query parameter to a request builder
QueryParamFunc = Callable[[RequestBuilder], None]


def _key(param: Union[QueryParam, str]) -> str:
    return param.value if isinstance(param, QueryParam) else param


def with_query_param(param: Union[QueryParam, str], value: Any) -> QueryParamFunc:
    """Set a single value for a parameter.

    Example:
        with_query_param(QueryParam.AMOUNT, 100)  # ?amount=100
    """

    def apply(builder: RequestBuilder) -> None:
        builder.with_param(_key(param), value)

    return apply


def with_query_params(param: Union[QueryParam, str], *values: Any) -> QueryParamFunc:
    """Add every value for a parameter.

    Example:
        with_query_params(QueryParam.AMOUNT, 100, 200)  # ?amount=100&amount=200
    """

    def apply(builder: RequestBuilder) -> None:
        for value in values:
            builder.add_param(_key(param), value)

    return apply


def apply_query_params(builder: RequestBuilder, *params: QueryParamFunc) -> RequestBuilder:
    for param in params:
        param(builder)
    return builder

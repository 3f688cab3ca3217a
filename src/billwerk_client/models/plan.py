"""
Subscription plan models.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from .base import JSONModel, json_field


class PlanState(str, Enum):
    """State of a subscription plan."""
    ACTIVE = "active"
    SUPERSEDED = "superseded"
    DELETED = "deleted"


class PlanScheduleType(str, Enum):
    """Scheduling type of a plan."""
    MANUAL = "manual"
    DAILY = "daily"
    WEEKLY_FIXEDDAY = "weekly_fixedday"
    MONTH_STARTDATE = "month_startdate"
    MONTH_FIXEDDAY = "month_fixedday"
    MONTH_LASTDAY = "month_lastday"


class PlanPartialPeriodHandling(str, Enum):
    """Handling of an initial partial period for fixed day scheduling."""
    BILL_FULL = "bill_full"
    BILL_PRORATED = "bill_prorated"
    BILL_ZERO_AMOUNT = "bill_zero_amount"
    NO_BILL = "no_bill"


class PlanSetupFeeHandling(str, Enum):
    """How the setup fee is billed."""
    FIRST = "first"
    SEPARATE = "separate"
    SEPARATE_CONDITIONAL = "separate_conditional"


class PlanFixedLifeTimeUnit(str, Enum):
    DAYS = "days"
    MONTHS = "months"


class PlanTrialIntervalUnit(str, Enum):
    DAYS = "days"
    MONTHS = "months"


class PlanSupersedeMode(str, Enum):
    """Whether existing subscriptions move to the superseding plan version."""
    NO_SUB_UPDATE = "no_sub_update"
    SCHEDULED_SUB_UPDATE = "scheduled_sub_update"


class PlanRange(str, Enum):
    CREATED = "created"


@dataclass
class Plan(JSONModel):
    """Subscription plan.

    ``name``, ``handle``, ``amount`` and ``schedule_type`` are always sent
    (an unset schedule type as null); every other field is sent only when
    set. Amounts are in the smallest unit of the currency.
    """

    name: str = ""
    handle: str = ""
    amount: int = 0
    schedule_type: Optional[PlanScheduleType] = json_field("schedule_type", always=True)
    description: Optional[str] = None
    vat: Optional[float] = None
    quantity: Optional[int] = None
    prepaid: Optional[bool] = None
    version: Optional[int] = None
    state: Optional[PlanState] = None
    currency: Optional[str] = None
    created: Optional[datetime] = None
    deleted: Optional[datetime] = None
    dunning_plan: Optional[str] = None
    tax_policy: Optional[str] = None
    renewal_reminder_email_days: Optional[int] = None
    trial_reminder_email_days: Optional[int] = None
    partial_period_handling: Optional[PlanPartialPeriodHandling] = None
    include_zero_amount: Optional[bool] = None
    setup_fee: Optional[int] = None
    setup_fee_text: Optional[str] = None
    setup_fee_handling: Optional[PlanSetupFeeHandling] = None
    partial_proration_days: Optional[bool] = None
    fixed_trial_days: Optional[bool] = None
    minimum_prorated_amount: Optional[int] = None
    account_funding: Optional[bool] = None
    amount_incl_vat: Optional[bool] = None
    fixed_count: Optional[int] = None
    fixed_life_time_unit: Optional[PlanFixedLifeTimeUnit] = None
    fixed_life_time_length: Optional[int] = None
    trial_interval_unit: Optional[PlanTrialIntervalUnit] = None
    trial_interval_length: Optional[int] = None
    # every N-th day/month, together with schedule_type
    interval_length: Optional[int] = None
    # 1-28 for monthly, 1-7 for weekly fixed day schedules
    schedule_fixed_day: Optional[int] = None
    base_month: Optional[int] = None
    notice_periods: Optional[int] = None
    notice_periods_after_current: Optional[bool] = None
    fixation_periods: Optional[int] = None
    fixation_periods_full: Optional[bool] = None
    entitlements: Optional[List[str]] = None


@dataclass
class PlanSupersede(Plan):
    """Plan payload for superseding an existing plan with a new version."""

    supersede_mode: Optional[PlanSupersedeMode] = None


@dataclass
class ListOfPlansResponse(JSONModel):
    """One page of plans; pass next_page_token back to fetch the next page."""

    size: int = 0
    count: int = 0
    to: Optional[str] = None
    from_: Optional[str] = json_field("from")
    content: List[Plan] = field(default_factory=list)
    range: Optional[PlanRange] = None
    next_page_token: Optional[str] = None


@dataclass
class PlanEntitlement(JSONModel):
    handle: str = ""
    name: str = ""
    description: str = ""
    created: Optional[datetime] = None

"""
API models for billwerk_client.
"""
from .base import JSONModel, json_default, json_field
from .plan import (
    ListOfPlansResponse,
    Plan,
    PlanEntitlement,
    PlanFixedLifeTimeUnit,
    PlanPartialPeriodHandling,
    PlanRange,
    PlanScheduleType,
    PlanSetupFeeHandling,
    PlanState,
    PlanSupersede,
    PlanSupersedeMode,
    PlanTrialIntervalUnit,
)

__all__ = [
    "JSONModel",
    "json_default",
    "json_field",
    "ListOfPlansResponse",
    "Plan",
    "PlanEntitlement",
    "PlanFixedLifeTimeUnit",
    "PlanPartialPeriodHandling",
    "PlanRange",
    "PlanScheduleType",
    "PlanSetupFeeHandling",
    "PlanState",
    "PlanSupersede",
    "PlanSupersedeMode",
    "PlanTrialIntervalUnit",
]

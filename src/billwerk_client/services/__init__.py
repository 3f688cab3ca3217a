"""
API resource services for billwerk_client.
"""
from .plans import AsyncPlanService, PlanRequests, PlanService

__all__ = [
    "AsyncPlanService",
    "PlanRequests",
    "PlanService",
]

"""
Client for the Billwerk (Reepay) subscription billing API.

Provides a fluent request builder, sync and async executors that decode
responses into typed models, and the plan endpoints built on them.
"""
from ._version import __version__
from .types import (
    HttpMethod,
    JSONValue,
    RequestContext,
)
from .errors import (
    BillwerkError,
    ConstructionError,
    TransportError,
    DecodeError,
    APIError,
    UnknownAPIError,
    ErrorResponse,
    ContextError,
    ContextCancelledError,
    ContextDeadlineError,
)
from .config import (
    DEFAULT_BASE_URL,
    TimeoutConfig,
    ClientConfig,
    ConfigOption,
    with_http_client,
    with_timeout,
    with_base_url,
    with_debug,
)
from .auth import encode_basic_auth
from .core.request_builder import RequestBuilder, USER_AGENT
from .core.base_client import AsyncBillwerkClient, SyncBillwerkClient
from .core.response_decoder import list_of, raw_json
from .query_params import (
    QueryParam,
    QueryParamFunc,
    with_query_param,
    with_query_params,
)
from .models import (
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
from .services.plans import AsyncPlanService, PlanService
from .factory import (
    create_client,
    create_async_client,
    create_client_from_env,
    create_async_client_from_env,
    create_plan_service,
    create_async_plan_service,
)

__all__ = [
    "__version__",
    # Types
    "HttpMethod",
    "JSONValue",
    "RequestContext",
    # Errors
    "BillwerkError",
    "ConstructionError",
    "TransportError",
    "DecodeError",
    "APIError",
    "UnknownAPIError",
    "ErrorResponse",
    "ContextError",
    "ContextCancelledError",
    "ContextDeadlineError",
    # Config
    "DEFAULT_BASE_URL",
    "TimeoutConfig",
    "ClientConfig",
    "ConfigOption",
    "with_http_client",
    "with_timeout",
    "with_base_url",
    "with_debug",
    # Core
    "encode_basic_auth",
    "RequestBuilder",
    "USER_AGENT",
    "AsyncBillwerkClient",
    "SyncBillwerkClient",
    "list_of",
    "raw_json",
    # Query parameters
    "QueryParam",
    "QueryParamFunc",
    "with_query_param",
    "with_query_params",
    # Models
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
    # Services
    "AsyncPlanService",
    "PlanService",
    # Factory
    "create_client",
    "create_async_client",
    "create_client_from_env",
    "create_async_client_from_env",
    "create_plan_service",
    "create_async_plan_service",
]

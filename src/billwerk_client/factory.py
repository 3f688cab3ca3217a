"""
Factory functions for creating billwerk clients.
"""
from typing import Optional

from .config import ClientConfig, ConfigOption, apply_options
from .core.base_client import AsyncBillwerkClient, SyncBillwerkClient
from .services.plans import AsyncPlanService, PlanService


def _build_config(api_key: str, options) -> ClientConfig:
    return apply_options(ClientConfig(api_key=api_key), *options)


def create_client(api_key: str, *options: ConfigOption) -> SyncBillwerkClient:
    """
    Create a blocking client authenticated with the private API key.

    Args:
        api_key: Private API key.
        options: Option functions applied in order (with_http_client,
            with_timeout, with_base_url, with_debug).

    Example:
        client = create_client("priv_123", with_timeout(30))
        plans = PlanService(client).get_list_of_plans()
    """
    return SyncBillwerkClient(_build_config(api_key, options))


def create_async_client(api_key: str, *options: ConfigOption) -> AsyncBillwerkClient:
    """
    Create an asyncio client authenticated with the private API key.

    Example:
        async with create_async_client("priv_123") as client:
            plan = await AsyncPlanService(client).get_plan("gold")
    """
    return AsyncBillwerkClient(_build_config(api_key, options))


def create_client_from_env(*options: ConfigOption, environ: Optional[dict] = None) -> SyncBillwerkClient:
    """Create a blocking client from BILLWERK_* environment variables."""
    return SyncBillwerkClient(apply_options(ClientConfig.from_env(environ), *options))


def create_async_client_from_env(
    *options: ConfigOption, environ: Optional[dict] = None
) -> AsyncBillwerkClient:
    """Create an asyncio client from BILLWERK_* environment variables."""
    return AsyncBillwerkClient(apply_options(ClientConfig.from_env(environ), *options))


def create_plan_service(api_key: str, *options: ConfigOption) -> PlanService:
    """Shortcut for ``PlanService(create_client(api_key, *options))``."""
    return PlanService(create_client(api_key, *options))


def create_async_plan_service(api_key: str, *options: ConfigOption) -> AsyncPlanService:
    return AsyncPlanService(create_async_client(api_key, *options))

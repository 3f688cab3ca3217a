"""
Subscription plan endpoints.

Each call builds its request from the client's pre-authenticated builder and
hands it to the client's ``execute`` together with the decode target.
"""
from typing import Any, List, Optional, Tuple, Union
from urllib.parse import quote

import httpx

from ..core.base_client import AsyncBillwerkClient, SyncBillwerkClient, _BaseBillwerkClient
from ..core.response_decoder import list_of, raw_json
from ..models.plan import ListOfPlansResponse, Plan, PlanEntitlement, PlanSupersede
from ..query_params import QueryParamFunc, apply_query_params
from ..types import JSONValue, RequestContext

# Request plus the decode target for its response (None: body ignored)
PreparedCall = Tuple[httpx.Request, Any]


def _segment(value: Union[str, int]) -> str:
    return quote(str(value), safe="@")


class PlanRequests:
    """Builds the plan requests; shared by the sync and async services."""

    def __init__(self, client: _BaseBillwerkClient):
        self._client = client

    def list_plans(self, ctx: Optional[RequestContext], params: Tuple[QueryParamFunc, ...]) -> PreparedCall:
        builder = self._client.new_request(ctx).with_endpoint("/list/plan")
        return apply_query_params(builder, *params).get(), ListOfPlansResponse

    def get_plan(self, handle: str, ctx: Optional[RequestContext], params: Tuple[QueryParamFunc, ...]) -> PreparedCall:
        builder = self._client.new_request(ctx).with_endpoint(f"/plan/{_segment(handle)}/current")
        return apply_query_params(builder, *params).get(), Plan

    def list_plan_versions(
        self, handle: str, ctx: Optional[RequestContext], params: Tuple[QueryParamFunc, ...]
    ) -> PreparedCall:
        builder = self._client.new_request(ctx).with_endpoint(f"/plan/{_segment(handle)}")
        return apply_query_params(builder, *params).get(), list_of(Plan)

    def create_plan(self, plan: Plan, ctx: Optional[RequestContext]) -> PreparedCall:
        request = self._client.new_request(ctx).with_endpoint("/plan").with_json_body(plan).post()
        return request, Plan

    def supersede_plan(self, handle: str, plan: PlanSupersede, ctx: Optional[RequestContext]) -> PreparedCall:
        request = (
            self._client.new_request(ctx)
            .with_endpoint(f"/plan/{_segment(handle)}")
            .with_json_body(plan)
            .post()
        )
        return request, Plan

    def update_plan(self, handle: str, plan: Plan, ctx: Optional[RequestContext]) -> PreparedCall:
        request = (
            self._client.new_request(ctx)
            .with_endpoint(f"/plan/{_segment(handle)}")
            .with_json_body(plan)
            .put()
        )
        return request, Plan

    def delete_plan(self, handle: str, ctx: Optional[RequestContext]) -> PreparedCall:
        request = self._client.new_request(ctx).with_endpoint(f"/plan/{_segment(handle)}").delete()
        return request, Plan

    def undelete_plan(self, handle: str, ctx: Optional[RequestContext]) -> PreparedCall:
        request = self._client.new_request(ctx).with_endpoint(f"/plan/{_segment(handle)}/undelete").post()
        return request, Plan

    def plan_entitlements(self, handle: str, version: int, ctx: Optional[RequestContext]) -> PreparedCall:
        endpoint = f"/plan/{_segment(handle)}/{_segment(version)}/entitlement"
        request = self._client.new_request(ctx).with_endpoint(endpoint).get()
        return request, list_of(PlanEntitlement)

    def get_metadata(self, handle: str, ctx: Optional[RequestContext]) -> PreparedCall:
        request = self._client.new_request(ctx).with_endpoint(f"/plan/{_segment(handle)}/metadata").get()
        return request, raw_json

    def put_metadata(self, handle: str, metadata: JSONValue, ctx: Optional[RequestContext]) -> PreparedCall:
        request = (
            self._client.new_request(ctx)
            .with_endpoint(f"/plan/{_segment(handle)}/metadata")
            .with_json_body(metadata)
            .put()
        )
        return request, raw_json

    def delete_metadata(self, handle: str, ctx: Optional[RequestContext]) -> PreparedCall:
        request = self._client.new_request(ctx).with_endpoint(f"/plan/{_segment(handle)}/metadata").delete()
        return request, None


class PlanService:
    """Plan endpoints on a SyncBillwerkClient."""

    def __init__(self, client: SyncBillwerkClient):
        self._client = client
        self._requests = PlanRequests(client)

    def get_list_of_plans(
        self, *params: QueryParamFunc, ctx: Optional[RequestContext] = None
    ) -> ListOfPlansResponse:
        """List plans, one page at a time (see QueryParam.NEXT_PAGE_TOKEN)."""
        return self._client.execute(*self._requests.list_plans(ctx, params))

    def get_plan(
        self, handle: str, *params: QueryParamFunc, ctx: Optional[RequestContext] = None
    ) -> Plan:
        """Get the current version of a plan."""
        return self._client.execute(*self._requests.get_plan(handle, ctx, params))

    def get_list_of_plan_versions(
        self, handle: str, *params: QueryParamFunc, ctx: Optional[RequestContext] = None
    ) -> List[Plan]:
        return self._client.execute(*self._requests.list_plan_versions(handle, ctx, params))

    def create_plan(self, plan: Plan, ctx: Optional[RequestContext] = None) -> Plan:
        return self._client.execute(*self._requests.create_plan(plan, ctx))

    def supersede_plan(
        self, handle: str, plan: PlanSupersede, ctx: Optional[RequestContext] = None
    ) -> Plan:
        """Replace a plan with a new version; returns the new version."""
        return self._client.execute(*self._requests.supersede_plan(handle, plan, ctx))

    def update_plan(self, handle: str, plan: Plan, ctx: Optional[RequestContext] = None) -> Plan:
        return self._client.execute(*self._requests.update_plan(handle, plan, ctx))

    def delete_plan(self, handle: str, ctx: Optional[RequestContext] = None) -> Plan:
        return self._client.execute(*self._requests.delete_plan(handle, ctx))

    def undelete_plan(self, handle: str, ctx: Optional[RequestContext] = None) -> Plan:
        return self._client.execute(*self._requests.undelete_plan(handle, ctx))

    def get_plan_entitlements(
        self, handle: str, version: int, ctx: Optional[RequestContext] = None
    ) -> List[PlanEntitlement]:
        return self._client.execute(*self._requests.plan_entitlements(handle, version, ctx))

    def get_plan_metadata(self, handle: str, ctx: Optional[RequestContext] = None) -> JSONValue:
        return self._client.execute(*self._requests.get_metadata(handle, ctx))

    def create_or_update_plan_metadata(
        self, handle: str, metadata: JSONValue, ctx: Optional[RequestContext] = None
    ) -> JSONValue:
        """Store metadata on a plan; returns the metadata as saved by the API."""
        return self._client.execute(*self._requests.put_metadata(handle, metadata, ctx))

    def delete_plan_metadata(self, handle: str, ctx: Optional[RequestContext] = None) -> None:
        self._client.execute(*self._requests.delete_metadata(handle, ctx))


class AsyncPlanService:
    """Plan endpoints on an AsyncBillwerkClient."""

    def __init__(self, client: AsyncBillwerkClient):
        self._client = client
        self._requests = PlanRequests(client)

    async def get_list_of_plans(
        self, *params: QueryParamFunc, ctx: Optional[RequestContext] = None
    ) -> ListOfPlansResponse:
        return await self._client.execute(*self._requests.list_plans(ctx, params))

    async def get_plan(
        self, handle: str, *params: QueryParamFunc, ctx: Optional[RequestContext] = None
    ) -> Plan:
        return await self._client.execute(*self._requests.get_plan(handle, ctx, params))

    async def get_list_of_plan_versions(
        self, handle: str, *params: QueryParamFunc, ctx: Optional[RequestContext] = None
    ) -> List[Plan]:
        return await self._client.execute(*self._requests.list_plan_versions(handle, ctx, params))

    async def create_plan(self, plan: Plan, ctx: Optional[RequestContext] = None) -> Plan:
        return await self._client.execute(*self._requests.create_plan(plan, ctx))

    async def supersede_plan(
        self, handle: str, plan: PlanSupersede, ctx: Optional[RequestContext] = None
    ) -> Plan:
        return await self._client.execute(*self._requests.supersede_plan(handle, plan, ctx))

    async def update_plan(self, handle: str, plan: Plan, ctx: Optional[RequestContext] = None) -> Plan:
        return await self._client.execute(*self._requests.update_plan(handle, plan, ctx))

    async def delete_plan(self, handle: str, ctx: Optional[RequestContext] = None) -> Plan:
        return await self._client.execute(*self._requests.delete_plan(handle, ctx))

    async def undelete_plan(self, handle: str, ctx: Optional[RequestContext] = None) -> Plan:
        return await self._client.execute(*self._requests.undelete_plan(handle, ctx))

    async def get_plan_entitlements(
        self, handle: str, version: int, ctx: Optional[RequestContext] = None
    ) -> List[PlanEntitlement]:
        return await self._client.execute(*self._requests.plan_entitlements(handle, version, ctx))

    async def get_plan_metadata(self, handle: str, ctx: Optional[RequestContext] = None) -> JSONValue:
        return await self._client.execute(*self._requests.get_metadata(handle, ctx))

    async def create_or_update_plan_metadata(
        self, handle: str, metadata: JSONValue, ctx: Optional[RequestContext] = None
    ) -> JSONValue:
        return await self._client.execute(*self._requests.put_metadata(handle, metadata, ctx))

    async def delete_plan_metadata(self, handle: str, ctx: Optional[RequestContext] = None) -> None:
        await self._client.execute(*self._requests.delete_metadata(handle, ctx))

"""API endpoints for the intent router."""

from functools import lru_cache

import httpx
import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from intent_router.amm.uniswap_v4 import UniswapV4FallbackAdapter
from intent_router.bridge.lifi import LifiClient
from intent_router.chain.client import Web3ChainClient
from intent_router.config import Settings
from intent_router.errors import ConfigurationError, RoutingError
from intent_router.models.commitment import CommitmentRecord
from intent_router.models.intent import IntentDomain, TradingIntent
from intent_router.models.plan import ExecutionPlan
from intent_router.models.types import Address, Bytes32
from intent_router.privacy.commitment import prepare_commitment
from intent_router.rfq.aggregator import MakerEndpoint, QuoteAggregator
from intent_router.routing.router import SettlementRouter

logger = structlog.get_logger()

router = APIRouter()


class MakerEndpointModel(BaseModel):
    maker: Address
    maker_fill: Address = Field(alias="makerFill")
    url: str

    model_config = {"populate_by_name": True}

    def to_endpoint(self) -> MakerEndpoint:
        return MakerEndpoint(maker=self.maker, maker_fill=self.maker_fill, url=self.url)


class PlanRequest(BaseModel):
    intent: TradingIntent
    domain: IntentDomain
    makers: list[MakerEndpointModel] = Field(default_factory=list)


class PlanResponse(BaseModel):
    intent_hash: Bytes32 = Field(alias="intentHash")
    plan_hash: Bytes32 = Field(alias="planHash")
    plan: ExecutionPlan

    model_config = {"populate_by_name": True}


class CommitmentRequest(BaseModel):
    intent_hash: Bytes32 = Field(alias="intentHash")
    plan_hash: Bytes32 = Field(alias="planHash")
    min_delay: int = Field(alias="minDelay", ge=0)
    batch_window: int = Field(alias="batchWindow", ge=0)
    desired_time: int | None = Field(default=None, alias="desiredTime")

    model_config = {"populate_by_name": True}


@lru_cache(maxsize=1)
def get_default_router() -> SettlementRouter:
    """Build a router from the environment (see Settings.from_env)."""
    settings = Settings.from_env()
    if not settings.rpc_url:
        raise ConfigurationError("RPC_URL must be configured")
    router_config = settings.router_config()

    http = httpx.AsyncClient()
    chain = Web3ChainClient(settings.rpc_url)
    return SettlementRouter(
        aggregator=QuoteAggregator(http, settings.rfq),
        lifi=LifiClient(http, settings.lifi),
        amm_adapter=UniswapV4FallbackAdapter(chain, router_config.uniswap_adapter, router_config.pool_manager),
    )


def get_router() -> SettlementRouter:
    """Dependency provider for the settlement router.

    Override this in tests to inject a router with fake collaborators:
        app.dependency_overrides[get_router] = lambda: fake_router
    """
    try:
        return get_default_router()
    except ConfigurationError as e:
        logger.error("router_not_configured", error=str(e))
        raise HTTPException(status_code=503, detail=str(e)) from e


@router.post("/plan", response_model_by_alias=True)
async def build_plan(
    request: PlanRequest,
    settlement_router: SettlementRouter = Depends(get_router),
) -> PlanResponse:
    """Route an intent and return its execution plan.

    Error Handling:
        - Invalid request schema: 422 Validation Error (Pydantic)
        - Routing policy rejection: 422 with the rejection kind
    """
    logger.info(
        "received_intent",
        trader=request.intent.trader,
        source_chain_id=request.intent.source_chain_id,
        dest_chain_id=request.intent.dest_chain_id,
        makers=len(request.makers),
    )
    makers = [m.to_endpoint() for m in request.makers]
    try:
        routed = await settlement_router.route_intent(request.intent, request.domain, makers)
    except RoutingError as e:
        raise HTTPException(status_code=422, detail={"kind": e.kind.value, "message": str(e)}) from e

    return PlanResponse(intent_hash=routed.intent_hash, plan_hash=routed.plan_hash, plan=routed.plan)


@router.post("/commitment", response_model_by_alias=True)
async def build_commitment(request: CommitmentRequest) -> CommitmentRecord:
    """Prepare a private commitment (notBefore, salt, commitment hash) for a plan."""
    record = prepare_commitment(
        request.intent_hash,
        request.plan_hash,
        min_delay=request.min_delay,
        batch_window=request.batch_window,
        desired_time=request.desired_time,
    )
    logger.info("commitment_built", commitment=record.commitment, not_before=record.not_before)
    return record

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ...core.rate_limit import admin_limiter, public_limiter
from ...models.admin import AdminAccount
from ...models.marquee import MarqueeType
from ...schemas.requests import MarqueeCreateRequest, MarqueeUpdateRequest
from ...schemas.responses import APIResponse, MarqueeResponse
from ...services.marquee_service import MarqueeService
from ..dependencies import get_current_admin, get_current_admin_optional, get_marquee_service

router = APIRouter()


@router.get("", response_model=APIResponse[List[MarqueeResponse]], dependencies=[Depends(public_limiter)])
async def list_marquee(
    type: Optional[MarqueeType] = Query(None, description="breaking or announcement"),
    admin: Optional[AdminAccount] = Depends(get_current_admin_optional),
    marquee_service: MarqueeService = Depends(get_marquee_service),
):
    """Active items for visitors; admins also see inactive ones"""
    items = marquee_service.list_items(include_inactive=admin is not None, item_type=type)
    return APIResponse.ok([MarqueeResponse.model_validate(item) for item in items])


@router.post(
    "",
    response_model=APIResponse[MarqueeResponse],
    status_code=201,
    dependencies=[Depends(admin_limiter)],
)
async def create_marquee(
    request: MarqueeCreateRequest,
    current_admin: AdminAccount = Depends(get_current_admin),
    marquee_service: MarqueeService = Depends(get_marquee_service),
):
    item = marquee_service.create_item(request)
    return APIResponse.ok(MarqueeResponse.model_validate(item), message="मार्की सामग्री सफलतापूर्वक बनाई गई")


@router.put("/{item_id}", response_model=APIResponse[MarqueeResponse], dependencies=[Depends(admin_limiter)])
async def update_marquee(
    item_id: str,
    request: MarqueeUpdateRequest,
    current_admin: AdminAccount = Depends(get_current_admin),
    marquee_service: MarqueeService = Depends(get_marquee_service),
):
    item = marquee_service.update_item(item_id, request)
    return APIResponse.ok(MarqueeResponse.model_validate(item), message="मार्की सामग्री सफलतापूर्वक अपडेट की गई")


@router.delete("/{item_id}", response_model=APIResponse[None], dependencies=[Depends(admin_limiter)])
async def delete_marquee(
    item_id: str,
    current_admin: AdminAccount = Depends(get_current_admin),
    marquee_service: MarqueeService = Depends(get_marquee_service),
):
    marquee_service.delete_item(item_id)
    return APIResponse.ok(message="मार्की सामग्री सफलतापूर्वक हटाई गई")

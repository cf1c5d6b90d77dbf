from fastapi import APIRouter, Depends, Query

from ...core.rate_limit import admin_limiter, public_limiter
from ...models.admin import AdminAccount
from ...schemas.requests import CategoryRequest
from ...schemas.responses import APIResponse, CategoryListResponse, CategoryResponse, Pagination
from ...services.category_service import CategoryService
from ..dependencies import get_category_service, get_current_admin

router = APIRouter()


@router.get("", response_model=APIResponse[CategoryListResponse], dependencies=[Depends(public_limiter)])
async def list_categories(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    category_service: CategoryService = Depends(get_category_service),
):
    categories, total = category_service.list_categories(page=page, limit=limit)
    return APIResponse.ok(
        CategoryListResponse(
            categories=[CategoryResponse.model_validate(category) for category in categories],
            pagination=Pagination.build(page, limit, total),
        )
    )


@router.get("/{category_id}", response_model=APIResponse[CategoryResponse], dependencies=[Depends(public_limiter)])
async def get_category(category_id: str, category_service: CategoryService = Depends(get_category_service)):
    return APIResponse.ok(CategoryResponse.model_validate(category_service.get_category(category_id)))


@router.post(
    "",
    response_model=APIResponse[CategoryResponse],
    status_code=201,
    dependencies=[Depends(admin_limiter)],
)
async def create_category(
    request: CategoryRequest,
    current_admin: AdminAccount = Depends(get_current_admin),
    category_service: CategoryService = Depends(get_category_service),
):
    category = category_service.create_category(request)
    return APIResponse.ok(CategoryResponse.model_validate(category), message="श्रेणी सफलतापूर्वक बनाई गई")


@router.put("/{category_id}", response_model=APIResponse[CategoryResponse], dependencies=[Depends(admin_limiter)])
async def update_category(
    category_id: str,
    request: CategoryRequest,
    current_admin: AdminAccount = Depends(get_current_admin),
    category_service: CategoryService = Depends(get_category_service),
):
    category = category_service.update_category(category_id, request)
    return APIResponse.ok(CategoryResponse.model_validate(category), message="श्रेणी सफलतापूर्वक अपडेट की गई")


@router.delete("/{category_id}", response_model=APIResponse[None], dependencies=[Depends(admin_limiter)])
async def delete_category(
    category_id: str,
    current_admin: AdminAccount = Depends(get_current_admin),
    category_service: CategoryService = Depends(get_category_service),
):
    category_service.delete_category(category_id)
    return APIResponse.ok(message="श्रेणी सफलतापूर्वक हटाई गई")

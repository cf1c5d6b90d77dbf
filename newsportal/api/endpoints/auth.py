import structlog
from fastapi import APIRouter, Depends

from ...core.rate_limit import auth_limiter, admin_limiter
from ...models.admin import AdminAccount
from ...schemas.requests import LoginRequest
from ...schemas.responses import AdminResponse, APIResponse, LoginResponse
from ...services.auth_service import AuthService
from ..dependencies import get_auth_service, get_current_admin

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/login", response_model=APIResponse[LoginResponse], dependencies=[Depends(auth_limiter)])
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Exchange admin credentials for a bearer token"""
    token, admin = auth_service.login(request.email, request.password)
    return APIResponse.ok(
        LoginResponse(token=token, admin=AdminResponse.model_validate(admin)),
        message="सफलतापूर्वक लॉगिन हुआ",
    )


@router.get("/profile", response_model=APIResponse[AdminResponse], dependencies=[Depends(admin_limiter)])
async def get_profile(current_admin: AdminAccount = Depends(get_current_admin)):
    return APIResponse.ok(AdminResponse.model_validate(current_admin))

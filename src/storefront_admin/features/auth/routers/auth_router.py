"""
Authentication API endpoints.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status

from ....models.base import APIResponse
from ..dependencies import get_services, get_session_token
from ..entities import ClientMeta
from ..models import LoginRequest, RegisterRequest, UserProfile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/login",
    response_model=APIResponse[UserProfile],
    status_code=status.HTTP_200_OK,
    summary="Login",
)
async def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    services=Depends(get_services),
) -> APIResponse[UserProfile]:
    """Authenticate with email and password and start a session."""
    user = await services.auth_service.login(
        body.email, body.password, ClientMeta.from_request(request), response
    )
    return APIResponse.success_response(data=UserProfile.from_user(user), message="Login successful")


@router.post(
    "/register",
    response_model=APIResponse[UserProfile],
    status_code=status.HTTP_201_CREATED,
    summary="Register",
)
async def register(
    body: RegisterRequest,
    request: Request,
    response: Response,
    services=Depends(get_services),
) -> APIResponse[UserProfile]:
    """Create a customer account and start a session."""
    user = await services.auth_service.register(
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
        client_meta=ClientMeta.from_request(request),
        response=response,
    )
    return APIResponse.success_response(data=UserProfile.from_user(user), message="Registration successful")


@router.post("/logout", response_model=APIResponse[None], summary="Logout")
async def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    services=Depends(get_services),
) -> APIResponse[None]:
    await services.auth_service.logout(token, response)
    return APIResponse.success_response(message="Logged out")


@router.get("/me", response_model=APIResponse[UserProfile], summary="Current user")
async def me(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    services=Depends(get_services),
) -> APIResponse[UserProfile]:
    user = await services.auth_service.me(token, response)
    return APIResponse.success_response(data=UserProfile.from_user(user))

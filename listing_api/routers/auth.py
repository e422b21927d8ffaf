"""
Authentication API endpoints for lister registration, login and current-user lookup.
"""

from fastapi import APIRouter, Depends, status
from listing_api.models.user import User
from listing_api.services.auth import AuthService
from listing_api.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    LoginResponse,
    UserResponse,
)
from listing_api.schemas.error import get_error_responses
from listing_api.utils.dependencies import get_auth_service, get_current_user


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register lister",
    description="Create a lister account that can publish properties",
    responses=get_error_responses(409, 422, 500)
)
async def register(
    user_data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> UserResponse:
    """
    Register a new lister.

    Raises:
        ConflictError: If the email is already registered
    """
    user = await auth_service.register(user_data)
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Authenticate with email and password, returns a JWT access token",
    responses=get_error_responses(401, 422, 500)
)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    """
    Authenticate user and return an access token.

    Raises:
        InvalidCredentialsError: If credentials are invalid
    """
    user, access_token, expires_in = await auth_service.login(
        email=login_data.email,
        password=login_data.password
    )

    return LoginResponse(
        user=UserResponse.model_validate(user),
        access_token=access_token,
        token_type="bearer",
        expires_in=expires_in
    )


@router.get(
    "/me",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current user",
    responses=get_error_responses(401, 500)
)
async def get_current_user_info(current_user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(current_user)

"""
User account endpoints.

OTP registration and login, token refresh, and the current user profile.
Workflow failures are mapped to responses by the app's exception handlers.
"""

from fastapi import APIRouter, Depends

from modules.auth.interfaces import IAuthService
from modules.auth.models import (
    EmailRequest,
    RefreshTokenRequest,
    RegisterRequest,
    TokenPair,
    VerifiedRegistration,
    VerifyOtpRequest,
)
from modules.users.models import User
from shared.exceptions import AuthenticationError
from ..dependencies import get_auth_service
from ..middleware.auth import AuthError, get_current_user
from ..models.responses import LoginSessionResponse, UserMessageResponse

router = APIRouter()


@router.post("/register", response_model=User, status_code=201)
async def register_user(
    request: RegisterRequest,
    service: IAuthService = Depends(get_auth_service),
) -> User:
    """
    Register a new user.

    The user is created unverified and a registration OTP is emailed.
    """
    return await service.register(request)


@router.post("/verifyRegistration", response_model=VerifiedRegistration)
async def verify_registration(
    request: VerifyOtpRequest,
    service: IAuthService = Depends(get_auth_service),
) -> VerifiedRegistration:
    """Redeem a registration OTP and return the verified user with tokens."""
    return await service.verify_registration(request.email, request.otp)


@router.post("/resendRegistrationOTP", response_model=UserMessageResponse)
async def resend_registration_otp(
    request: EmailRequest,
    service: IAuthService = Depends(get_auth_service),
) -> UserMessageResponse:
    user = await service.resend_registration_otp(request.email)
    return UserMessageResponse(message="OTP resent", data=user)


@router.post("/login", response_model=UserMessageResponse)
async def login_user(
    request: EmailRequest,
    service: IAuthService = Depends(get_auth_service),
) -> UserMessageResponse:
    """
    Start a login.

    Sends a login OTP; seeded accounts get no email and log in with the
    magic code instead.
    """
    user = await service.login(request.email)
    return UserMessageResponse(message="OTP sent", data=user)


@router.post("/verifyLogin", response_model=LoginSessionResponse)
async def verify_login(
    request: VerifyOtpRequest,
    service: IAuthService = Depends(get_auth_service),
) -> LoginSessionResponse:
    session = await service.verify_login(request.email, request.otp)
    return LoginSessionResponse(message="OTP verified", data=session)


@router.post("/resendLoginOTP", response_model=UserMessageResponse)
async def resend_login_otp(
    request: EmailRequest,
    service: IAuthService = Depends(get_auth_service),
) -> UserMessageResponse:
    user = await service.resend_login_otp(request.email)
    return UserMessageResponse(message="OTP resent", data=user)


@router.post("/refreshToken", response_model=TokenPair)
async def refresh_token(
    request: RefreshTokenRequest,
    service: IAuthService = Depends(get_auth_service),
) -> TokenPair:
    """
    Exchange a refresh token for a new pair.

    Accepts both locally issued and Supabase refresh tokens.
    """
    try:
        return await service.refresh_token(request.refresh_token)
    except AuthenticationError as e:
        raise AuthError(e.message)


@router.get("/me", response_model=User)
async def get_current_user_profile(
    user: User = Depends(get_current_user),
) -> User:
    """
    Get the current user's profile.

    Requires authentication.
    """
    return user

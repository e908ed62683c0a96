"""
Authentication API endpoints.

Registration, login, email verification and password reset. The session
token travels in an HTTP-only `accessToken` cookie; mail goes out as a
background task after the response is sent.
"""

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Response, status

from api.dependencies import (
    get_app_settings,
    get_auth_service,
    get_capability_service,
    get_mailer,
)
from api.middleware.auth import SESSION_COOKIE, get_current_user, require_admin
from modules.notifications.interfaces import IMailer
from modules.notifications.models import EmailMessage
from shared.config import Settings

from .interfaces import IAuthService, ICapabilityService
from .models import (
    ActivateCodeRequest,
    AuthContext,
    AuthResponse,
    EmailRequest,
    LoginRequest,
    LoginResult,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
)

router = APIRouter()

# Same reply whether or not the account exists
RESEND_MESSAGE = "If the account exists and is not yet verified, a new link has been sent"
FORGOT_MESSAGE = "If the account exists, a password reset link has been sent"


def _send_later(tasks: BackgroundTasks, mailer: IMailer, message: Optional[EmailMessage]) -> None:
    if message is not None:
        tasks.add_task(mailer.deliver, message)


def _set_session_cookie(response: Response, result: LoginResult, settings: Settings) -> None:
    response.set_cookie(
        key=SESSION_COOKIE,
        value=result.session.token,
        max_age=settings.session_cookie_max_age_seconds,
        path="/",
        httponly=True,
        samesite="strict",
        secure=settings.secure_cookies,
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@router.post("/register/{ref}", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    background_tasks: BackgroundTasks,
    ref: Optional[str] = None,
    auth: IAuthService = Depends(get_auth_service),
    mailer: IMailer = Depends(get_mailer),
) -> AuthResponse:
    """
    Create an unverified account.

    An activation link and code are mailed to the address given.
    """
    profile, message = await auth.register(request, referrer=ref)
    _send_later(background_tasks, mailer, message)
    return AuthResponse(message="Verification link sent to your email", user=profile)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    response: Response,
    auth: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> AuthResponse:
    """Log in with email and password and set the session cookie."""
    result = await auth.login(request.email, request.password)
    _set_session_cookie(response, result, settings)
    return AuthResponse(message="Logged in", user=result.profile, token=result.session.token)


@router.post("/admin", response_model=AuthResponse)
async def admin_login(
    request: LoginRequest,
    response: Response,
    auth: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> AuthResponse:
    """Admin-only login."""
    result = await auth.login(request.email, request.password, admin=True)
    _set_session_cookie(response, result, settings)
    return AuthResponse(message="Logged in", user=result.profile, token=result.session.token)


@router.get("/login/{token}", response_model=AuthResponse)
async def verify_email(
    token: str,
    capabilities: ICapabilityService = Depends(get_capability_service),
) -> AuthResponse:
    """Redeem an activation link."""
    user = await capabilities.redeem_verification(token)
    return AuthResponse(message="Account verified", user=user.to_profile())


@router.post("/activate", response_model=AuthResponse)
async def activate(
    request: ActivateCodeRequest,
    capabilities: ICapabilityService = Depends(get_capability_service),
) -> AuthResponse:
    """Activate an account with the mailed 6-digit code."""
    user = await capabilities.activate_with_code(request.email, request.code)
    return AuthResponse(message="Account verified", user=user.to_profile())


@router.post("/resendToken", response_model=MessageResponse)
async def resend_verification(
    request: EmailRequest,
    background_tasks: BackgroundTasks,
    capabilities: ICapabilityService = Depends(get_capability_service),
    mailer: IMailer = Depends(get_mailer),
) -> MessageResponse:
    """Reissue the activation link, superseding any earlier one."""
    message = await capabilities.request_verification(request.email)
    _send_later(background_tasks, mailer, message)
    return MessageResponse(message=RESEND_MESSAGE)


@router.post("/forgotPass", response_model=MessageResponse)
async def forgot_password(
    request: EmailRequest,
    background_tasks: BackgroundTasks,
    capabilities: ICapabilityService = Depends(get_capability_service),
    mailer: IMailer = Depends(get_mailer),
) -> MessageResponse:
    """Mail a password reset link."""
    message = await capabilities.request_password_reset(request.email)
    _send_later(background_tasks, mailer, message)
    return MessageResponse(message=FORGOT_MESSAGE)


@router.post("/resetPass/{token}", response_model=MessageResponse)
async def reset_password(
    token: str,
    request: ResetPasswordRequest,
    capabilities: ICapabilityService = Depends(get_capability_service),
) -> MessageResponse:
    """Redeem a reset link and set the new password."""
    await capabilities.redeem_reset(token, request.password)
    return MessageResponse(message="Password updated")


@router.get("/logOut", response_model=MessageResponse)
async def log_out(
    response: Response,
    user: AuthContext = Depends(get_current_user),
) -> MessageResponse:
    """
    Clear the session cookie.

    The token itself stays valid until it expires.
    """
    response.delete_cookie(SESSION_COOKIE, path="/")
    return MessageResponse(message="Logged out")


@router.get("/loggedInUser", response_model=AuthResponse)
async def logged_in_user(user: AuthContext = Depends(get_current_user)) -> AuthResponse:
    """Profile of the logged-in user."""
    return AuthResponse(message="Authenticated", user=user.profile)


@router.get("/loggedInAdmin", response_model=AuthResponse)
async def logged_in_admin(user: AuthContext = Depends(require_admin)) -> AuthResponse:
    return AuthResponse(message="Authenticated", user=user.profile)

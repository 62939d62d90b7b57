"""Authentication routes: login, signup, activation and password reset."""

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from sqlalchemy.orm import Session

from storefront.api.deps import current_identity, get_db, get_mailer, get_settings
from storefront.api.routing import RouteSpec, register_routes
from storefront.schemas.accounts import (
    ChangePasswordRequest,
    CheckCodeRequest,
    EmailRequest,
    LoginRequest,
    SignupRequest,
)
from storefront.services.accounts import AuthService, CodeMail
from storefront.services.mail import ACTIVATION_SUBJECT, PASSWORD_SUBJECT


def auth_service(db: Session = Depends(get_db), settings=Depends(get_settings)):
    return AuthService(db, settings)


def _queue_mail(background: BackgroundTasks, mailer, mail: CodeMail, subject: str) -> None:
    background.add_task(mailer.send_code, mail.to, subject, mail.name, mail.code)


def login(payload: LoginRequest, svc: AuthService = Depends(auth_service)):
    return svc.login(payload.username, payload.password)


def signup(
    payload: SignupRequest,
    background: BackgroundTasks,
    svc: AuthService = Depends(auth_service),
    mailer=Depends(get_mailer),
):
    user, mail = svc.signup(payload)
    _queue_mail(background, mailer, mail, ACTIVATION_SUBJECT)
    return user


def check_code(payload: CheckCodeRequest, svc: AuthService = Depends(auth_service)):
    return svc.check_code(payload)


def retry_active(
    payload: EmailRequest,
    background: BackgroundTasks,
    svc: AuthService = Depends(auth_service),
    mailer=Depends(get_mailer),
):
    result, mail = svc.retry_active(payload.email)
    _queue_mail(background, mailer, mail, ACTIVATION_SUBJECT)
    return result


def retry_password(
    payload: EmailRequest,
    background: BackgroundTasks,
    svc: AuthService = Depends(auth_service),
    mailer=Depends(get_mailer),
):
    result, mail = svc.retry_password(payload.email)
    _queue_mail(background, mailer, mail, PASSWORD_SUBJECT)
    return result


def change_password(payload: ChangePasswordRequest, svc: AuthService = Depends(auth_service)):
    return {"id": svc.change_password(payload)}


def profile(request: Request):
    return current_identity(request).to_dict()


router = register_routes(
    APIRouter(prefix="/auth", tags=["Auth"]),
    [
        RouteSpec("/login", "POST", login, "Fetch login", public=True),
        RouteSpec("/signup", "POST", signup, "User register", public=True, status_code=201),
        RouteSpec("/check-code", "POST", check_code, "Check code active account", public=True),
        RouteSpec("/retry-active", "POST", retry_active, "Retry active account", public=True),
        RouteSpec("/retry-password", "POST", retry_password, "Retry password", public=True),
        RouteSpec("/change-password", "POST", change_password, "Change password", public=True),
        RouteSpec("/profile", "GET", profile, "Fetch user profile"),
    ],
)

ROUTERS = [router]

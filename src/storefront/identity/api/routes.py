"""FastAPI routes for authentication."""

from fastapi import APIRouter, Cookie, Depends, Response
from protean.utils.globals import current_domain

from storefront.config import Settings, get_settings
from storefront.identity.api.dependencies import current_principal
from storefront.identity.api.schemas import (
    AccessTokenResponse,
    LoginRequest,
    OkResponse,
    RegisterRequest,
    SessionResponse,
    UserSchema,
)
from storefront.identity.authentication import LogIn, LogOut, load_profile, refresh_access_token
from storefront.identity.principal import Principal
from storefront.identity.registration import RegisterUser
from storefront.identity.tokens import IssuedTokens

REFRESH_COOKIE = "refresh_token"

auth_router = APIRouter(prefix="/auth", tags=["auth"])


def _set_refresh_cookie(response: Response, tokens: IssuedTokens, settings: Settings) -> None:
    response.set_cookie(
        REFRESH_COOKIE,
        tokens.refresh_token,
        max_age=settings.refresh_token_max_age,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )


# Password hashing blocks; plain ``def`` routes run in the threadpool
@auth_router.post("/register", status_code=201, response_model=SessionResponse)
def register(
    body: RegisterRequest,
    response: Response,
    settings: Settings = Depends(get_settings),
) -> SessionResponse:
    command = RegisterUser(name=body.name, email=body.email, password=body.password)
    tokens = current_domain.process(command, asynchronous=False)
    _set_refresh_cookie(response, tokens, settings)
    return SessionResponse(token=tokens.access_token, user=UserSchema(**tokens.user))


@auth_router.post("/login", response_model=SessionResponse)
def login(
    body: LoginRequest,
    response: Response,
    settings: Settings = Depends(get_settings),
) -> SessionResponse:
    tokens = current_domain.process(LogIn(email=body.email, password=body.password), asynchronous=False)
    _set_refresh_cookie(response, tokens, settings)
    return SessionResponse(token=tokens.access_token, user=UserSchema(**tokens.user))


@auth_router.post("/refresh", response_model=AccessTokenResponse)
async def refresh(refresh_token: str | None = Cookie(default=None)) -> AccessTokenResponse:
    return AccessTokenResponse(token=refresh_access_token(refresh_token))


@auth_router.post("/logout", response_model=OkResponse)
async def logout(
    response: Response,
    refresh_token: str | None = Cookie(default=None),
    settings: Settings = Depends(get_settings),
) -> OkResponse:
    current_domain.process(LogOut(refresh_token=refresh_token), asynchronous=False)
    response.delete_cookie(REFRESH_COOKIE, httponly=True, samesite="lax", secure=settings.cookie_secure)
    return OkResponse()


@auth_router.get("/me", response_model=UserSchema | None)
async def me(principal: Principal = Depends(current_principal)) -> UserSchema | None:
    profile = load_profile(principal.user_id)
    return UserSchema(**profile) if profile else None

"""FastAPI dependencies: services from app.state.container, callers from the bearer token.

Routes never construct services; create_app() attaches one Container and
these getters resolve its singletons per request.
"""
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from borsa_dashboard.catalog import ReferenceCatalog
from borsa_dashboard.container import Container
from borsa_dashboard.db import UserAccount
from borsa_dashboard.errors import AuthenticationRequired, NotAuthorized
from borsa_dashboard.services import (AuthService, MarketBoard, NewsService,
                                      PriceService, SubscriptionWorkflow,
                                      UserContentStore)
from borsa_dashboard.services.entitlements import SIGN_IN_PROMPT

_bearer = HTTPBearer(auto_error=False)


def get_container(request: Request) -> Container:
    return request.app.state.container


ContainerDep = Annotated[Container, Depends(get_container)]


def get_catalog(container: ContainerDep) -> ReferenceCatalog:
    return container.catalog()


def get_price_service(container: ContainerDep) -> PriceService:
    return container.price_service()


def get_market_board(container: ContainerDep) -> MarketBoard:
    return container.market_board()


def get_news_service(container: ContainerDep) -> NewsService:
    return container.news_service()


def get_auth_service(container: ContainerDep) -> AuthService:
    return container.auth_service()


def get_subscriptions(container: ContainerDep) -> SubscriptionWorkflow:
    return container.subscriptions()


def get_wishlist(container: ContainerDep) -> UserContentStore:
    return container.wishlist()


def get_notifications(container: ContainerDep) -> UserContentStore:
    return container.notifications()


CatalogDep = Annotated[ReferenceCatalog, Depends(get_catalog)]
PriceServiceDep = Annotated[PriceService, Depends(get_price_service)]
MarketBoardDep = Annotated[MarketBoard, Depends(get_market_board)]
NewsServiceDep = Annotated[NewsService, Depends(get_news_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
SubscriptionsDep = Annotated[SubscriptionWorkflow, Depends(get_subscriptions)]
WishlistDep = Annotated[UserContentStore, Depends(get_wishlist)]
NotificationsDep = Annotated[UserContentStore, Depends(get_notifications)]

Credentials = Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)]


def get_token(credentials: Credentials) -> str:
    if credentials is None:
        raise AuthenticationRequired("Sign in required", prompt=SIGN_IN_PROMPT)
    return credentials.credentials


def get_optional_user(credentials: Credentials, auth: AuthServiceDep) -> UserAccount | None:
    """Account behind the bearer token, or None for anonymous callers."""
    if credentials is None:
        return None
    return auth.authenticate(credentials.credentials)


def get_current_user(token: Annotated[str, Depends(get_token)], auth: AuthServiceDep) -> UserAccount:
    return auth.authenticate(token)


def get_admin(user: Annotated[UserAccount, Depends(get_current_user)]) -> UserAccount:
    if not user.is_admin:
        raise NotAuthorized("Admin role required")
    return user


TokenDep = Annotated[str, Depends(get_token)]
OptionalUser = Annotated[UserAccount | None, Depends(get_optional_user)]
CurrentUser = Annotated[UserAccount, Depends(get_current_user)]
AdminUser = Annotated[UserAccount, Depends(get_admin)]

# routers/auth_router.py

from fastapi import APIRouter, Depends, Request, Response

from ..core.config import settings
from ..schemas.auth_schemas import (
    LoginRequest,
    LoginResponse,
    PrivateItem,
    PrivateItemCreate,
    PrivateItemsResponse,
    PrivateItemUpdate,
)
from ..services.auth_service import AuthService
from ..services.private_item_service import PrivateItemService
from ..utils.dependencies import (
    get_auth_service,
    get_bearer_token,
    get_current_user,
    get_private_item_service,
)
from ..utils.exceptions import PortfolioServiceError
from ..utils.http_errors import to_http_exception
from ..utils.rate_limiting import limiter

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.rate_limit_login)
async def login(
    request: Request,
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """
    Exchange username and password for a bearer token.
    Failure answers 401 with ``{"message": "Invalid credentials"}``.
    """
    return await auth_service.login(credentials.username, credentials.password)


@router.post("/logout", status_code=204)
async def logout(
    username: str = Depends(get_current_user),
    token: str = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> Response:
    await auth_service.logout(token)
    return Response(status_code=204)


@router.get("/private", response_model=PrivateItemsResponse)
async def get_private_items(
    username: str = Depends(get_current_user),
    item_service: PrivateItemService = Depends(get_private_item_service),
) -> PrivateItemsResponse:
    return PrivateItemsResponse(items=await item_service.list_items(username))


@router.post("/private/items", response_model=PrivateItem, status_code=201)
async def create_private_item(
    data: PrivateItemCreate,
    username: str = Depends(get_current_user),
    item_service: PrivateItemService = Depends(get_private_item_service),
) -> PrivateItem:
    return await item_service.create_item(username, data)


@router.get("/private/items/{item_id}", response_model=PrivateItem)
async def get_private_item(
    item_id: str,
    username: str = Depends(get_current_user),
    item_service: PrivateItemService = Depends(get_private_item_service),
) -> PrivateItem:
    try:
        return await item_service.get_item(username, item_id)
    except PortfolioServiceError as e:
        raise to_http_exception(e)


@router.put("/private/items/{item_id}", response_model=PrivateItem)
async def update_private_item(
    item_id: str,
    data: PrivateItemUpdate,
    username: str = Depends(get_current_user),
    item_service: PrivateItemService = Depends(get_private_item_service),
) -> PrivateItem:
    try:
        return await item_service.update_item(username, item_id, data)
    except PortfolioServiceError as e:
        raise to_http_exception(e)


@router.delete("/private/items/{item_id}", status_code=204)
async def delete_private_item(
    item_id: str,
    username: str = Depends(get_current_user),
    item_service: PrivateItemService = Depends(get_private_item_service),
) -> Response:
    try:
        await item_service.delete_item(username, item_id)
    except PortfolioServiceError as e:
        raise to_http_exception(e)
    return Response(status_code=204)

# inkwell/deps/auth.py
from typing import Optional
from fastapi import Cookie, Header
from inkwell.core.config import settings
from inkwell.core.exceptions import Unauthorized
from inkwell.core.logger import bind_user_id
from inkwell.core.security import resolve_principal
from inkwell.constants.messages import AuthMessage
from inkwell.schemas.principal import Principal


def _extract_token(authorization: Optional[str], access_token: Optional[str]) -> Optional[str]:
    """Authorizationヘッダー(Bearer)を優先し、なければCookieのトークンを使う"""
    if authorization and authorization.startswith("Bearer "):
        return authorization.split(" ", 1)[1].strip()
    return access_token


async def get_current_user_optional(
    authorization: Optional[str] = Header(default=None),
    access_token: Optional[str] = Cookie(default=None, alias=settings.ACCESS_COOKIE_NAME),
) -> Optional[Principal]:
    """
    オプショナル認証 - トークンがない・不正な場合はNoneを返す

    ユーザーIDのログ紐づけはリクエストのタスク上で行う(エンドポイントのスレッドへ引き継がれる)
    """
    user = resolve_principal(_extract_token(authorization, access_token))
    bind_user_id(str(user.id) if user else None)
    return user


async def get_current_user(
    authorization: Optional[str] = Header(default=None),
    access_token: Optional[str] = Cookie(default=None, alias=settings.ACCESS_COOKIE_NAME),
) -> Principal:
    """必須認証 - 認証できない場合は401"""
    user = await get_current_user_optional(authorization, access_token)
    if user is None:
        raise Unauthorized(AuthMessage.UNAUTHORIZED)
    return user

# inkwell/core/security.py
from typing import Optional
from uuid import UUID

import jwt

from inkwell.core.config import settings
from inkwell.schemas.principal import Principal


def decode_token(token: str) -> dict:
    """
    IdPが発行したアクセストークンをデコードする

    Args:
        token (str): トークン

    Returns:
        dict: デコードされたトークン
    """
    options = {"verify_aud": settings.JWT_AUDIENCE is not None}
    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.ALGORITHM],
        audience=settings.JWT_AUDIENCE,
        options=options,
    )


def principal_from_claims(claims: dict) -> Optional[Principal]:
    """
    トークンのクレームから認証済みユーザーを組み立てる

    Args:
        claims (dict): デコード済みのクレーム

    Returns:
        Principal | None: subが不正な場合はNone
    """
    sub = claims.get("sub")
    if not sub:
        return None
    try:
        user_id = UUID(str(sub))
    except ValueError:
        return None

    metadata = claims.get("user_metadata") or {}
    return Principal(
        id=user_id,
        email=claims.get("email"),
        display_name=metadata.get("name") or claims.get("name"),
    )


def resolve_principal(token: Optional[str]) -> Optional[Principal]:
    """
    トークンからユーザーを解決する(不正なトークンはNone扱い)
    """
    if not token:
        return None
    try:
        claims = decode_token(token)
    except jwt.PyJWTError:
        return None
    return principal_from_claims(claims)

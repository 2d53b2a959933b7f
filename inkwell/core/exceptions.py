# inkwell/core/exceptions.py
from fastapi import status


class ContentError(Exception):
    """
    コンテンツ管理の業務エラー基底クラス

    kind は呼び出し側が判定に使う固定の文字列
    """
    kind: str = "ContentError"
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"detail": self.message, "kind": self.kind}


class Unauthorized(ContentError):
    kind = "Unauthorized"
    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(ContentError):
    kind = "Forbidden"
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(ContentError):
    kind = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(ContentError):
    kind = "Conflict"
    status_code = status.HTTP_409_CONFLICT


class ValidationError(ContentError):
    kind = "ValidationError"
    status_code = 422

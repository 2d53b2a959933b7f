from pydantic import BaseModel
from uuid import UUID
from typing import Optional

class Principal(BaseModel):
    """IdPで認証済みのユーザー"""
    id: UUID
    email: Optional[str] = None
    display_name: Optional[str] = None

    @property
    def author_name(self) -> str:
        """投稿に保存する著者名(表示名 → メールのローカル部 → Anonymous)"""
        if self.display_name:
            return self.display_name
        local_part = (self.email or "").split("@")[0]
        if local_part:
            return local_part
        return "Anonymous"

    @property
    def author_email(self) -> str:
        return self.email or ""

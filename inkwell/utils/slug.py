import re
import unicodedata
from typing import Optional

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_REPEATED_HYPHENS = re.compile(r"-{2,}")


def generate_slug(text: str, max_length: Optional[int] = None) -> str:
    """
    文字列からURLセーフなスラッグを生成する

    Args:
        text (str): 元の文字列(タイトル・カテゴリ名など)
        max_length (int | None): 最大文字数(超える場合は切り詰める)

    Returns:
        str: 小文字ASCIIをハイフンで区切ったスラッグ(空文字の場合あり)

    Examples:
        >>> generate_slug("Héllo,  Wörld!")
        'hello-world'
    """
    normalized = unicodedata.normalize("NFKD", str(text))
    # 結合文字(ダイアクリティカルマーク)を除去
    stripped = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    slug = _NON_ALNUM.sub("-", stripped.lower())
    slug = slug.strip("-")
    slug = _REPEATED_HYPHENS.sub("-", slug)

    if max_length is not None and len(slug) > max_length:
        slug = slug[:max_length].rstrip("-")
    return slug

import math
import re
from typing import Optional

from inkwell.constants.number import ReadingSpeed

_WORD = re.compile(r"\S+")
ELLIPSIS = "…"


def calculate_reading_time(text: Optional[str], words_per_minute: int = ReadingSpeed.WORDS_PER_MINUTE) -> int:
    """
    読了時間(分)を計算する

    Args:
        text (str): 本文
        words_per_minute (int): 1分あたりの単語数

    Returns:
        int: 読了時間(最低1分)
    """
    words = len(_WORD.findall((text or "").strip()))
    minutes = math.ceil(words / max(1, words_per_minute))
    return max(1, minutes)


def truncate_text(text: Optional[str], max_length: int, add_ellipsis: bool = True) -> str:
    """
    文字列を指定文字数で切り詰める

    Args:
        text (str): 対象の文字列
        max_length (int): 最大文字数
        add_ellipsis (bool): 末尾に省略記号を付けるか

    Returns:
        str: 切り詰めた文字列
    """
    text = text or ""
    if max_length <= 0:
        return ""
    if len(text) <= max_length:
        return text
    if not add_ellipsis:
        return text[:max_length]
    slice_length = max(0, max_length - len(ELLIPSIS))
    return text[:slice_length].rstrip() + ELLIPSIS

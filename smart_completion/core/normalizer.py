"""输入预处理：去掉中文标点，压缩空白，去掉首尾空白。"""

import re

# 全角逗号、句号、叹号、问号、分号、冒号
_CHINESE_PUNCTUATION = re.compile(r"[，。！？；：]")
_WHITESPACE = re.compile(r"\s+")


def normalize(raw: str) -> str:
    text = _CHINESE_PUNCTUATION.sub("", raw)
    # 先删标点再压缩空白，避免 "1+1 。" 这种输入留下尾随空格
    return _WHITESPACE.sub(" ", text).strip()

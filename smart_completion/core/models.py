"""续写引擎的数据模型

- Category: 规则类别
- ResultType: 结果类型 (tagged union 的标签)
- CompletionResult: 处理器返回的结果，不可变，可以安全地放进缓存
- Rule: 一条识别规则 = 类别 + 有序的正则列表 + 处理器
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, Tuple, Union


class Category(str, Enum):
    MATH = "math"
    DATE = "date"
    TIMEZONE = "timezone"
    UNIT = "unit"
    CURRENCY = "currency"
    FORMULA = "formula"


class ResultType(str, Enum):
    CALCULATION = "calculation"
    DATE = "date"
    TIMEZONE = "timezone"
    CONVERSION = "conversion"
    CURRENCY = "currency"
    FORMULA = "formula"
    ERROR = "error"


@dataclass(frozen=True)
class CompletionResult:
    type: ResultType
    result: str


HandlerReturn = Union[Optional[CompletionResult], Awaitable[Optional[CompletionResult]]]
Handler = Callable[..., HandlerReturn]


@dataclass(frozen=True)
class Rule:
    """
    [规则] 规则表中的一项

    - priority: 越小越先尝试，必须与规则表中的顺序一致
    - patterns: 按声明顺序尝试，整串匹配 (fullmatch)
    - handler: handler(match, text) -> CompletionResult | None
      返回 None 表示"语法上匹配但语义上无法解析"，引擎会继续尝试后续规则
    - cacheable: 结果只依赖输入本身时为 True；依赖当前时间的规则不进缓存
    """
    category: Category
    priority: int
    patterns: Tuple[re.Pattern, ...]
    handler: Handler
    cacheable: bool = True

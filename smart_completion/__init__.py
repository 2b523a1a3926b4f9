"""中文智能续写 (Smart Completion)

输入一小段中文，识别意图并计算结果，返回可直接拼接在原文后面的续写后缀。
例如 "1+1" -> "= 2"。
"""

from smart_completion.core.engine import CompletionEngine
from smart_completion.core.models import CompletionResult, ResultType

__version__ = "1.0.0"

__all__ = ["CompletionEngine", "CompletionResult", "ResultType", "__version__"]

"""
续写引擎 数学计算服务 (Math Service)

职责：
- 两个数之间的加减乘除 (符号写法 1+1，中文写法 1加1)
- 平方根 / 立方根 ("25的平方根")

特点：
- **Reportable Outcome**: 除数为 0、负数开平方不是异常，而是一条文字结果
- **No Eval**: 只做两数运算，不解析任意表达式
"""

import math
import operator

from smart_completion.core.models import CompletionResult, ResultType
from smart_completion.services.numbers import format_number, to_fixed

NUMBER = r"([0-9]+(?:\.[0-9]+)?)"

SYMBOL_PATTERN = rf"{NUMBER}\s*([+\-*/])\s*{NUMBER}"
WORD_PATTERN = rf"{NUMBER}\s*(加|减|乘|除)\s*{NUMBER}"
ROOT_PATTERN = rf"{NUMBER}\s*的\s*(平方根|立方根)"

DIVISION_BY_ZERO = "除数不能为0"
NEGATIVE_SQRT = "负数不能开平方根"
CALCULATION_ERROR = "计算错误"

# 中文运算符 -> 符号
WORD_OPERATORS = {"加": "+", "减": "-", "乘": "*", "除": "/"}

OPERATORS = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
}


def _calculation(text: str) -> CompletionResult:
    return CompletionResult(ResultType.CALCULATION, text)


def binary_operation(a: float, symbol: str, b: float) -> CompletionResult:
    if symbol == "/" and b == 0:
        return _calculation(DIVISION_BY_ZERO)
    return _calculation(f"= {format_number(OPERATORS[symbol](a, b))}")


def root(value: float, kind: str) -> CompletionResult:
    if kind == "平方根":
        if value < 0:
            return _calculation(NEGATIVE_SQRT)
        return _calculation(f"= {format_number(math.sqrt(value))}")
    return _calculation(f"= {to_fixed(math.cbrt(value), 4)}")


def handle_math(match, text):
    """
    [处理器] 数学计算
    match 来自 SYMBOL_PATTERN / WORD_PATTERN (3 组) 或 ROOT_PATTERN (2 组)。
    计算中的任何算术/数值错误都转成 "计算错误"，不向上抛出。
    """
    groups = match.groups()
    try:
        if len(groups) == 2:
            return root(float(groups[0]), groups[1])
        left, op, right = groups
        symbol = WORD_OPERATORS.get(op, op)
        return binary_operation(float(left), symbol, float(right))
    except (ArithmeticError, ValueError):
        return CompletionResult(ResultType.ERROR, CALCULATION_ERROR)

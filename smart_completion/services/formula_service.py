"""续写引擎 公式查询服务：整句精确匹配公式表，不做模糊匹配。"""

import re

from smart_completion.core.models import CompletionResult, ResultType


def formula_pattern(fixtures) -> str:
    """由公式表的键生成正则，保证能匹配上的输入一定查得到。"""
    names = sorted(fixtures.formulas, key=len, reverse=True)
    return "(" + "|".join(re.escape(name) for name in names) + ")"


def handle_formula(match, text, fixtures):
    formula = fixtures.formulas.get(text)
    if formula is None:
        return None
    return CompletionResult(ResultType.FORMULA, formula)

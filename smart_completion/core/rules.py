"""
续写引擎 规则表 (Rule Table)

职责：
- 按优先级声明六类识别规则：数学 -> 日期 -> 时区 -> 单位 -> 汇率 -> 公式
- 把各服务的处理器与静态数据、时钟绑定在一起

特点：
- **Ordered**: 规则表是有序元组，顺序即优先级，first-match-wins
- **Checked**: 构建时校验 priority 与顺序一致，不一致直接抛 ValueError
"""

import re
from functools import partial

from smart_completion.core.models import Category, Rule
from smart_completion.services import (
    currency_service,
    date_service,
    formula_service,
    math_service,
    timezone_service,
    unit_service,
)


def _compile(*patterns):
    return tuple(re.compile(p) for p in patterns)


def validate_rules(rules):
    """[校验] priority 必须沿规则表严格递增。"""
    priorities = [rule.priority for rule in rules]
    for previous, current in zip(priorities, priorities[1:]):
        if current <= previous:
            raise ValueError(f"规则优先级与声明顺序不一致：{priorities}")
    return tuple(rules)


def build_rules(fixtures, clock, home_timezone="Asia/Shanghai", home_label="北京时间"):
    """构建默认规则表。clock() 返回当前时间，供日期/时区规则使用。"""
    rules = [
        Rule(
            category=Category.MATH,
            priority=1,
            patterns=_compile(
                math_service.SYMBOL_PATTERN,
                math_service.WORD_PATTERN,
                math_service.ROOT_PATTERN,
            ),
            handler=math_service.handle_math,
        ),
        Rule(
            category=Category.DATE,
            priority=2,
            patterns=_compile(date_service.RELATIVE_PATTERN, date_service.DEICTIC_PATTERN),
            handler=partial(date_service.handle_date, clock=clock),
            cacheable=False,
        ),
        Rule(
            category=Category.TIMEZONE,
            priority=3,
            patterns=_compile(timezone_service.CITY_PATTERN, timezone_service.CLOCK_PATTERN),
            handler=partial(
                timezone_service.handle_timezone,
                fixtures=fixtures,
                clock=clock,
                home_timezone=home_timezone,
                home_label=home_label,
            ),
            cacheable=False,
        ),
        Rule(
            category=Category.UNIT,
            priority=4,
            patterns=_compile(unit_service.TEMPERATURE_PATTERN, unit_service.LENGTH_PATTERN),
            handler=partial(unit_service.handle_unit, fixtures=fixtures),
        ),
        Rule(
            category=Category.CURRENCY,
            priority=5,
            patterns=_compile(currency_service.CURRENCY_PATTERN, currency_service.CONVERT_PATTERN),
            handler=partial(currency_service.handle_currency, fixtures=fixtures),
        ),
        Rule(
            category=Category.FORMULA,
            priority=6,
            patterns=_compile(formula_service.formula_pattern(fixtures)),
            handler=partial(formula_service.handle_formula, fixtures=fixtures),
        ),
    ]
    return validate_rules(rules)

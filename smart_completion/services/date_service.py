"""
续写引擎 日期计算服务 (Date Service)

职责：
- 相对日期："3天后"、"2周前"、"1个月后"
- 常用指示词：今天/明天/后天/昨天/前天/下周/上周

输出格式 "（M月D日）"，不带年份，不补零。
月/年加减由 relativedelta 完成，日子溢出时截到当月最后一天 (1月31日 + 1月 -> 2月28/29日)。
"""

import datetime

from dateutil.relativedelta import relativedelta

from smart_completion.core.models import CompletionResult, ResultType

RELATIVE_PATTERN = r"([0-9]+)\s*个?\s*(天|日|周|月|年)\s*(后|前)"
DEICTIC_PATTERN = r"(今天|明天|后天|昨天|前天|下周|上周)"

DEICTIC_OFFSETS = {
    "今天": 0,
    "明天": 1,
    "后天": 2,
    "昨天": -1,
    "前天": -2,
    "下周": 7,
    "上周": -7,
}


def format_month_day(day: datetime.date) -> str:
    return f"（{day.month}月{day.day}日）"


def shift_date(start: datetime.date, amount: int, unit: str) -> datetime.date:
    """按单位平移日期，amount 可以为负。"""
    if unit in ("天", "日"):
        return start + datetime.timedelta(days=amount)
    if unit == "周":
        return start + datetime.timedelta(weeks=amount)
    if unit == "月":
        return start + relativedelta(months=amount)
    if unit == "年":
        return start + relativedelta(years=amount)
    raise ValueError(f"未知的日期单位：{unit}")


def handle_date(match, text, clock):
    """
    [处理器] 日期计算
    clock() 返回当前时间 (datetime)，只取其日期部分。
    """
    today = clock().date()
    groups = match.groups()

    if len(groups) == 3:
        amount, unit, direction = groups
        offset = int(amount) if direction == "后" else -int(amount)
        return CompletionResult(ResultType.DATE, format_month_day(shift_date(today, offset, unit)))

    days = DEICTIC_OFFSETS.get(groups[0])
    if days is None:
        return None
    return CompletionResult(ResultType.DATE, format_month_day(today + datetime.timedelta(days=days)))

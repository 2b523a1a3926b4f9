"""
续写引擎 时区查询服务 (Timezone Service)

职责：
- "纽约时间" -> 纽约当前时间 "（HH:MM）"
- "8点纽约时间" / "20:30时伦敦" -> 该城市当天这个时刻折合成本地时区的时间

特点：
- **Time Dependent**: 结果取决于调用时刻，对应规则不进缓存
- **Injectable Clock**: 当前时间由 clock() 提供，测试时可以固定
"""

import datetime
from zoneinfo import ZoneInfo

from smart_completion.core.models import CompletionResult, ResultType

CITY_PATTERN = r"([\u4e00-\u9fa5]+|[A-Za-z]+)\s*时间"
CLOCK_PATTERN = r"([0-9]{1,2})(?:[:.]([0-9]{2}))?\s*(?:点|时)\s*([\u4e00-\u9fa5]+?|[A-Za-z]+)\s*(?:时间)?"


def handle_timezone(match, text, fixtures, clock, home_timezone="Asia/Shanghai", home_label="北京时间"):
    """
    [处理器] 时区查询
    城市不在数据表里时返回 None，交给后续规则。
    """
    groups = match.groups()
    if len(groups) == 1:
        return current_time_in(groups[0], fixtures, clock)
    hour, minute, city = groups
    return convert_wall_time(int(hour), int(minute or 0), city, fixtures, clock, home_timezone, home_label)


def current_time_in(city, fixtures, clock):
    zone_name = fixtures.find_timezone(city)
    if not zone_name:
        return None
    local = clock().astimezone(ZoneInfo(zone_name))
    return CompletionResult(ResultType.TIMEZONE, f"（{local:%H:%M}）")


def convert_wall_time(hour, minute, city, fixtures, clock, home_timezone, home_label):
    """把城市当天的 hour:minute 换算成本地时区时间。"""
    if hour > 23 or minute > 59:
        return None
    zone_name = fixtures.find_timezone(city)
    if not zone_name:
        return None

    city_zone = ZoneInfo(zone_name)
    city_today = clock().astimezone(city_zone).date()
    moment = datetime.datetime.combine(city_today, datetime.time(hour, minute), tzinfo=city_zone)
    local = moment.astimezone(ZoneInfo(home_timezone))
    return CompletionResult(ResultType.TIMEZONE, f"（{home_label} {local:%H:%M}）")

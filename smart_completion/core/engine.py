"""续写引擎 (Completion Engine) - 规则分发 + 结果缓存

职责：
- 统一入口 process()：预处理 -> 查缓存 -> 按顺序尝试规则 -> 缓存并返回
- format_output()：把结果转换成拼接在原文后面的后缀

特点：
- **First Match Wins**: 先按规则顺序、再按规则内正则顺序，第一个返回非空结果的处理器胜出
- **Fault Isolation**: 单个处理器出错只记日志并视为不匹配，不会中断整个解析
- **Selective Cache**: 只缓存结果只依赖输入的规则；日期/时区随时间变化，永远现算
"""

import configparser
import datetime
import inspect
import logging
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from smart_completion.core.normalizer import normalize
from smart_completion.core.rules import build_rules, validate_rules
from smart_completion.services.fixtures import FixtureStore

logger = logging.getLogger(__name__)


def _system_clock():
    return datetime.datetime.now().astimezone()


class CompletionEngine:
    """
    [核心类] 中文智能续写引擎
    规则表和静态数据在初始化时构建一次，之后不再修改；
    缓存是进程内的普通字典，不设上限也不过期。
    """

    def __init__(self, config_path="config/config.ini", rules=None, clock=None):
        self.config = configparser.ConfigParser()
        self.config_path = Path(config_path)
        if self.config_path.exists():
            try:
                self.config.read(self.config_path, encoding="utf-8")
            except configparser.Error as e:
                logger.warning("配置文件 %s 格式错误，将使用默认配置：%s", self.config_path, e)
                self.config = configparser.ConfigParser()

        try:
            self.cache_enabled = self.config.getboolean("engine", "cache_enabled", fallback=True)
        except ValueError:
            logger.warning("cache_enabled 不是合法的布尔值，将默认开启缓存")
            self.cache_enabled = True
        self.home_timezone = self.config.get("engine", "home_timezone", fallback="Asia/Shanghai")
        self.home_label = self.config.get("engine", "home_label", fallback="北京时间")
        try:
            ZoneInfo(self.home_timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"home_timezone 不是有效的时区：{self.home_timezone}") from e

        self.clock = clock or _system_clock
        self.fixtures = FixtureStore()
        if rules is None:
            self.rules = build_rules(self.fixtures, self.clock, self.home_timezone, self.home_label)
        else:
            self.rules = validate_rules(rules)
        self.cache = {}

    @property
    def cache_size(self) -> int:
        return len(self.cache)

    def clear_cache(self):
        self.cache.clear()

    # ==================== 统一入口 ====================

    async def process(self, text: str):
        """
        [核心入口] 处理一段输入，返回 CompletionResult；不支持的输入返回 None。
        处理器可以是普通函数也可以是协程函数。
        """
        clean = normalize(text)

        cached = self.cache.get(clean)
        if cached is not None:
            logger.debug("缓存命中：%s", clean)
            return cached

        for rule in self.rules:
            for pattern in rule.patterns:
                match = pattern.fullmatch(clean)
                if not match:
                    continue
                try:
                    result = rule.handler(match, clean)
                    if inspect.isawaitable(result):
                        result = await result
                except Exception:
                    logger.exception("处理规则 %s 时出错", rule.category.value)
                    continue

                if result is not None:
                    logger.debug("规则 %s 命中：%s", rule.category.value, clean)
                    if rule.cacheable and self.cache_enabled:
                        self.cache[clean] = result
                    return result

        logger.debug("没有规则能处理：%s", clean)
        return None

    @staticmethod
    def format_output(result) -> str:
        """[工具] 结果 -> 续写后缀；None 或空结果返回空字符串。"""
        if result is None:
            return ""
        return result.result or ""

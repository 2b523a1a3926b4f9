"""日志配置：Rich 格式输出到 stderr，只在命令行入口调用。"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level="WARNING", debug=False):
    """
    [工具] 配置根日志器
    debug=True 时强制 DEBUG；level 不认识时退回 WARNING。
    """
    if debug:
        resolved = logging.DEBUG
    else:
        resolved = logging.getLevelName(str(level).upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING

    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    logging.basicConfig(
        level=resolved,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )

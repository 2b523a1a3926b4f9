"""
智能续写 CLI 交互界面

职责：
- 与用户交互（接收输入）
- 调用续写引擎 process() / format_output()
- 展示结果、帮助和示例

特点：
- 纯UI层，不包含识别与计算逻辑
- 命令：help / clear / examples / exit
"""

import asyncio
import json
import random
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from smart_completion.core.engine import CompletionEngine

console = Console()
engine = CompletionEngine()

EXAMPLES = [
    ("📊 数学计算", ["1+1", "25*4", "100的平方根"]),
    ("📅 日期时间", ["3天后", "明天", "下周"]),
    ("🌍 时区查询", ["纽约时间", "东京时间", "8点伦敦时间"]),
    ("🔄 单位转换", ["37摄氏度等于", "100米", "50英尺"]),
    ("💰 汇率换算", ["1美元", "100人民币", "50欧元换算成英镑"]),
    ("📚 公式查询", ["牛顿第二定律", "勾股定理", "欧姆定律"]),
]

HELP_COMMANDS = ("help", "h")
CLEAR_COMMANDS = ("clear", "cls")
EXAMPLE_COMMANDS = ("examples", "example")
EXIT_COMMANDS = ("exit", "quit", "q", "退出")

# ==================== UI 工具函数 ====================


def load_ui_templates(path="config/ui_templates.json"):
    """加载UI话术模板"""
    templates = {}
    templates_path = Path(path)
    if templates_path.exists():
        try:
            with open(templates_path, "r", encoding="utf-8") as f:
                templates = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            console.print(f"[yellow]警告：UI语料库加载失败({e})，将使用默认提示。[/yellow]")
    return templates


ui_templates = load_ui_templates()


def get_random_ui(key: str, **kwargs) -> str:
    """获取随机的UI话术"""
    if key in ui_templates and isinstance(ui_templates[key], list) and ui_templates[key]:
        text = random.choice(ui_templates[key])
        return text.format(**kwargs) if kwargs else text

    defaults = {
        "unsupported": "暂不支持此类型的内容",
        "goodbye": "谢谢使用，再见！",
    }
    return defaults.get(key, key)


def complete(text: str):
    """
    [桥接] 同步调用引擎
    返回 (完整续写文本, 耗时毫秒)；不支持的输入返回 (None, 耗时毫秒)。
    """
    start = time.perf_counter()
    result = asyncio.run(engine.process(text))
    elapsed_ms = (time.perf_counter() - start) * 1000
    if result is None:
        return None, elapsed_ms
    return text + engine.format_output(result), elapsed_ms


# ==================== 展示函数 ====================


def show_welcome():
    console.print(Panel(
        "[bold cyan]🧠 中文智能续写工具[/bold cyan]\n"
        "[dim]输入一句话，自动补全计算结果；输入 'help' 查看帮助，输入 'exit' 退出[/dim]",
        style="cyan"
    ))


def show_help():
    table = Table(title="📖 帮助信息", show_header=False, box=None, padding=(0, 2))
    table.add_column("命令", style="bold cyan")
    table.add_column("说明")
    table.add_row("help", "显示此帮助信息")
    table.add_row("clear", "清屏")
    table.add_row("examples", "显示示例")
    table.add_row("exit", "退出程序")
    console.print(table)


def show_examples():
    table = Table(title="🎯 示例输入", show_header=True, header_style="bold magenta")
    table.add_column("类别", style="green")
    table.add_column("示例")
    for category, items in EXAMPLES:
        table.add_row(category, "、".join(items))
    console.print(table)


def show_result(full_text, elapsed_ms):
    if full_text is None:
        console.print(f"[red]❌ {get_random_ui('unsupported')}[/red]")
        console.print("[yellow]💡 输入 \"examples\" 查看支持的示例[/yellow]")
        return
    console.print(f"[green]✅ 结果：[/green][bold]{escape(full_text)}[/bold]")
    console.print(f"[magenta]⚡ 处理耗时：{elapsed_ms:.0f}ms[/magenta]")


# ==================== 主交互循环 ====================


def handle_line(line: str) -> bool:
    """
    处理一行输入。返回 False 表示用户要求退出。
    """
    text = line.strip()
    command = text.lower()
    if not text:
        return True
    if command in HELP_COMMANDS:
        show_help()
    elif command in CLEAR_COMMANDS:
        console.clear()
        show_welcome()
    elif command in EXAMPLE_COMMANDS:
        show_examples()
    elif command in EXIT_COMMANDS:
        console.print(f"[cyan]👋 {get_random_ui('goodbye')}[/cyan]")
        return False
    else:
        show_result(*complete(text))
    return True


def run_shell():
    """交互模式主循环"""
    show_welcome()
    while True:
        try:
            line = typer.prompt("🤖 请输入", default="", show_default=False)
            if not handle_line(line):
                break
            console.print("")
        except (KeyboardInterrupt, typer.Abort):
            console.print("\n[dim]👋 程序已终止，再见！[/dim]")
            break

"""exporter.py
导出编排

把一个或多个屏幕的控件树生成为 Arduino/LVGL 源文件：
一个声明文件（ui.h）加上每个屏幕一个定义文件（<screen>.cpp）。"""

import logging
import re
from pathlib import Path
from typing import Any, List, Tuple

from .config import ExportOptions
from .formatters import CodeGenerator, ConciseStrategy, VerboseStrategy
from .models import (
    ExportResult, GeneratedFile, GenerationIssue, ParsedFile, Screen, Widget,
)

logger = logging.getLogger(__name__)


def screen_symbol(name: str) -> str:
    """屏幕名 -> 合法的 C 函数名前缀/文件名"""
    symbol = re.sub(r"\W", "_", name.strip()) or "screen"
    if symbol[0].isdigit():
        symbol = f"_{symbol}"
    return symbol


def coerce_screens(data: Any, options: ExportOptions = None) -> List[Screen]:
    """
    把各种输入统一为屏幕列表
    支持: Screen、ParsedFile、Widget，以及它们的列表；裸控件放入默认屏幕
    """
    options = options or ExportOptions()
    items = data if isinstance(data, list) else [data]

    screens: List[Screen] = []
    loose_widgets: List[Widget] = []
    for item in items:
        if isinstance(item, Screen):
            screens.append(item)
        elif isinstance(item, ParsedFile):
            screens.append(item.to_screen())
        elif isinstance(item, Widget):
            loose_widgets.append(item)
        else:
            raise TypeError(f"无法导出类型 {type(item).__name__}")

    if loose_widgets:
        screens.append(Screen(name=options.default_screen_name, widgets=loose_widgets))
    return screens


class ProjectRenderer:
    """
    项目渲染器
    职责：在内存中生成全部输出文件，不做任何 I/O
    """

    def __init__(self, options: ExportOptions = None):
        self.options = options or ExportOptions()
        strategy = VerboseStrategy() if self.options.verbose else ConciseStrategy()
        self.indent = strategy.get_indent_string()
        self.generator = CodeGenerator(strategy, parent_name=self.options.parent_name)

    def render(self, screens: List[Screen]) -> Tuple[List[GeneratedFile], List[GenerationIssue]]:
        issues: List[GenerationIssue] = []
        definitions: List[GeneratedFile] = []
        all_identifiers: List[str] = []
        owners = {}
        function_names = []
        used_symbols = set()

        for screen in screens:
            symbol = self._unique_symbol(screen_symbol(screen.name), used_symbols)
            function_name = f"{symbol}{self.options.function_suffix}"
            body = self.generator.format(Screen(name=symbol, widgets=screen.widgets))
            issues.extend(self.generator.issues)

            identifiers = _unique(self.generator.generated_identifiers)
            for identifier in identifiers:
                if identifier in owners and owners[identifier] != symbol:
                    logger.warning("标识符 %s 同时定义在屏幕 %s 和 %s 中", identifier, owners[identifier], symbol)
                owners.setdefault(identifier, symbol)
            all_identifiers.extend(identifiers)
            function_names.append(function_name)

            definitions.append(GeneratedFile(
                file_name=f"{symbol}.cpp",
                code=self._render_definitions(identifiers, function_name, body),
            ))

        header = GeneratedFile(
            file_name=self.options.header_name,
            code=self._render_header(_unique(all_identifiers), function_names),
        )
        return [header] + definitions, issues

    @staticmethod
    def _unique_symbol(symbol: str, used_symbols: set) -> str:
        """不同屏幕名映射到同一符号时追加 _2、_3 后缀"""
        candidate = symbol
        suffix = 2
        while candidate in used_symbols:
            candidate = f"{symbol}_{suffix}"
            suffix += 1
        if candidate != symbol:
            logger.warning("屏幕符号 %s 已被占用，改用 %s", symbol, candidate)
        used_symbols.add(candidate)
        return candidate

    def _render_header(self, identifiers: List[str], function_names: List[str]) -> str:
        lines = ["#pragma once", self.options.lvgl_include, "", "// Global widget variables"]
        lines.extend(f"extern lv_obj_t * {identifier};" for identifier in identifiers)
        lines.append("")
        lines.extend(f"void {name}(lv_obj_t * {self.options.parent_name});" for name in function_names)
        lines.append("")
        return "\n".join(lines)

    def _render_definitions(self, identifiers: List[str], function_name: str, body: str) -> str:
        parent = self.options.parent_name
        lines = [f'#include "{self.options.header_name}"', ""]
        lines.extend(f"lv_obj_t * {identifier} = NULL;" for identifier in identifiers)
        lines.append("")
        lines.append(f"void {function_name}(lv_obj_t * {parent}) {{")
        lines.append(f"{self.indent}lv_obj_clean({parent});")
        lines.append(f"{self.indent}lv_obj_set_size({parent}, LV_PCT(100), LV_PCT(100));")
        lines.append("")
        if body:
            lines.extend(f"{self.indent}{line}" if line else "" for line in body.split("\n"))
        lines.append("}")
        lines.append("")
        return "\n".join(lines)


def _unique(items: List[str]) -> List[str]:
    return list(dict.fromkeys(items))


def render_project(data: Any, options: ExportOptions = None) -> Tuple[List[GeneratedFile], List[GenerationIssue]]:
    """在内存中生成声明文件和各屏幕定义文件"""
    screens = coerce_screens(data, options)
    return ProjectRenderer(options).render(screens)


def generate(data: Any, output_dir: str, options: ExportOptions = None) -> ExportResult:
    """
    生成并写出全部文件，覆盖同名文件

    :param data: 控件树或屏幕列表
    :param output_dir: 输出目录
    :return: ExportResult，I/O 失败时 success 为 False 并携带错误信息
    """
    options = options or ExportOptions()
    try:
        files, issues = render_project(data, options)

        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)
        for generated in files:
            with open(output_path / generated.file_name, 'w', encoding=options.encoding) as f:
                f.write(generated.code)
            logger.info("已写出 %s", output_path / generated.file_name)

        return ExportResult(success=True, generated_files=files, issues=issues)

    except (OSError, TypeError) as e:
        logger.error("导出到 %s 失败: %s", output_dir, e)
        return ExportResult(success=False, error_message=f"导出失败: {e}")


__all__ = [
    "coerce_screens",
    "render_project",
    "generate",
]

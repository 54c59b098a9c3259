"""
Widget树格式化器模块

该模块实现了用于格式化 Widget 树的格式化器，支持递归层级展示和属性输出
"""

from pathlib import PurePath
from typing import Any, List, Optional, Tuple

from .base import Formatter, FormattingStrategy, ConciseStrategy
from ..models import AUTO, Widget, ParsedFile, Screen


# ============================================================================
# Widget树格式化器
# ============================================================================

class WidgetTreeFormatter(Formatter):
    """
    Widget树格式化器
    使用递归遍历生成带层级缩进的 Markdown 控件树
    """

    def __init__(self, strategy: FormattingStrategy = None, show_properties: bool = False):
        """
        初始化Widget树格式化器

        :param strategy: 格式化策略，默认使用ConciseStrategy
        :param show_properties: 是否显示控件属性和样式
        """
        self.strategy = strategy or ConciseStrategy()
        self.show_properties = show_properties
        self.output_lines = []

    def format(self, data: Any) -> str:
        """
        实现Formatter接口：格式化控件树为Markdown字符串

        :param data: Widget、Widget列表、ParsedFile 或 Screen
        :return: 格式化后的Markdown字符串
        """
        # 重置输出缓冲区
        self.output_lines = []

        title = None
        if isinstance(data, ParsedFile):
            title = PurePath(data.file_name).name
            widgets = data.widgets
        elif isinstance(data, Screen):
            title = data.name
            widgets = data.widgets
        elif isinstance(data, list):
            widgets = data
        elif isinstance(data, Widget):
            widgets = [data]
        else:
            raise ValueError(f"WidgetTreeFormatter只能格式化Widget、ParsedFile或Screen，收到: {type(data)}")

        return self._format_widget_hierarchy(widgets, title)

    def _format_widget_hierarchy(self, widgets: List[Widget], title: Optional[str] = None) -> str:
        self._add_line(f"# {title} Hierarchy" if title else "# Widget Hierarchy")
        self._add_line("")  # 空行分隔

        for root in widgets:
            self._format_node_recursive(root, 0)

        return '\n'.join(self.output_lines)

    def _format_node_recursive(self, node: Widget, depth: int):
        indent = self.strategy.get_indent_string() * depth

        node_line = f"{indent}- **{node.identifier or '?'}** ({node.kind})" + self.strategy.source_range(node)
        self._add_line(node_line)

        if self.show_properties:
            prop_indent = self.strategy.get_indent_string() * (depth + 1)
            for key, value in self._collect_properties(node):
                self._add_line(f"{prop_indent}- {key}: `{value}`")

        for child in node.children:
            self._format_node_recursive(child, depth + 1)

    def _collect_properties(self, node: Widget) -> List[Tuple[str, str]]:
        """按固定顺序收集需要显示的属性"""
        props = node.properties
        shown = []
        if props.text is not None:
            shown.append(("text", props.text))
        if props.value is not None:
            shown.append(("value", str(props.value)))
        if props.range_min is not None and props.range_max is not None:
            shown.append(("range", f"{props.range_min}..{props.range_max}"))
        if props.align is not None:
            shown.append(("align", props.align))
        if node.position != (0, 0):
            shown.append(("position", f"({node.position[0]}, {node.position[1]})"))
        if node.width != AUTO or node.height != AUTO:
            shown.append(("size", f"{node.width} x {node.height}"))
        for key, value in node.styles.items():
            shown.append((f"style.{key}", value))
        return shown

    def _add_line(self, content: str):
        self.output_lines.append(content)

"""
LVGL 代码生成器模块

遍历控件树，按固定顺序为每个控件输出 C 语句：
创建 -> 尺寸 -> 位置/对齐 -> 类型相关属性 -> 样式 -> 空行 -> 子控件。
输出只取决于控件树内容和 children 的文档顺序。
"""

import logging
import re
from typing import Any, List

from .base import Formatter, FormattingStrategy, VerboseStrategy
from ..common.call_parser import format_size, wrap_color, encode_string
from ..mappings import (
    ALIGN_CENTER, TEXT_KINDS, VALUE_KINDS, RANGE_KINDS, ANIMATED_VALUE_KINDS,
    COLOR_STYLES, FONT_STYLES, source_from_kind, setter_for_style_attribute,
)
from ..models import AUTO, GenerationError, GenerationIssue, Widget, Screen

logger = logging.getLogger(__name__)

C_IDENTIFIER_RE = re.compile(r"^[A-Za-z_]\w*$")


class CodeGenerator(Formatter):
    """
    LVGL 代码生成器
    单个控件生成失败（如缺少标识符）时跳过该控件及其子树并记录到 issues，不影响其它控件
    """

    def __init__(self, strategy: FormattingStrategy = None, parent_name: str = "parent"):
        """
        :param strategy: 格式化策略，默认使用VerboseStrategy
        :param parent_name: 根控件的父引用名
        """
        self.strategy = strategy or VerboseStrategy()
        self.parent_name = parent_name
        self.output_lines: List[str] = []
        self.issues: List[GenerationIssue] = []
        self.generated_identifiers: List[str] = []

    def format(self, data: Any) -> str:
        """
        实现Formatter接口：生成控件树的语句块（不含函数包装）

        :param data: Widget、Widget列表或Screen
        :return: 语句文本
        """
        self.reset()
        if isinstance(data, Screen):
            self.generate_widgets(data.widgets, self.parent_name, data.name)
        elif isinstance(data, list):
            self.generate_widgets(data, self.parent_name, "")
        elif isinstance(data, Widget):
            self.generate_widgets([data], self.parent_name, "")
        else:
            raise ValueError(f"CodeGenerator只能格式化Widget、Widget列表或Screen，收到: {type(data)}")
        return '\n'.join(self.output_lines)

    def reset(self):
        self.output_lines = []
        self.issues = []
        self.generated_identifiers = []

    def generate_widgets(self, widgets: List[Widget], parent_ref: str, path_prefix: str):
        for index, widget in enumerate(widgets):
            path = f"{path_prefix}/{index}"
            try:
                self.generate_widget(widget, parent_ref, path)
            except GenerationError as e:
                logger.warning("跳过控件 %s: %s", e.path, e)
                self.issues.append(GenerationIssue(path=e.path, message=str(e)))

    def generate_widget(self, widget: Widget, parent_ref: str, path: str):
        """
        生成单个控件及其子树的语句

        :param widget: 控件
        :param parent_ref: 父引用名
        :param path: 控件在树中的路径，用于错误定位
        """
        identifier = widget.identifier
        if not identifier:
            raise GenerationError("控件缺少标识符，已跳过该控件及其子控件", path)
        if not C_IDENTIFIER_RE.match(identifier):
            raise GenerationError(f"标识符 {identifier!r} 不是合法的 C 标识符", path)

        source_name = source_from_kind(widget.kind)
        lines = []

        comment = self.strategy.widget_comment(widget)
        if comment:
            lines.append(comment)

        # 1. 创建
        lines.append(f"{identifier} = lv_{source_name}_create({parent_ref});")

        # 2. 尺寸
        if widget.width != AUTO and widget.height != AUTO:
            lines.append(f"lv_obj_set_size({identifier}, {format_size(widget.width)}, {format_size(widget.height)});")

        # 3. 位置/对齐
        lines.append(self._position_statement(widget))

        # 4. 类型相关属性
        lines.extend(self._property_statements(widget, source_name))

        # 5. 样式
        for key, value in widget.styles.items():
            lines.append(f"lv_obj_set_style_{setter_for_style_attribute(key)}({identifier}, {self._style_token(key, value)}, 0);")

        # 6. 空行分隔
        lines.append("")

        self.output_lines.extend(lines)
        self.generated_identifiers.append(identifier)

        # 7. 子控件
        self.generate_widgets(widget.children, identifier, path)

    def _position_statement(self, widget: Widget) -> str:
        identifier = widget.identifier
        align = widget.properties.align
        x, y = widget.position
        if align is None:
            return f"lv_obj_set_pos({identifier}, {x}, {y});"
        if align == ALIGN_CENTER and x == 0 and y == 0:
            return f"lv_obj_center({identifier});"
        return f"lv_obj_align({identifier}, {align}, {x}, {y});"

    def _property_statements(self, widget: Widget, source_name: str) -> List[str]:
        identifier = widget.identifier
        props = widget.properties
        lines = []

        if props.text is not None:
            if widget.kind in TEXT_KINDS:
                lines.append(f"lv_{source_name}_set_text({identifier}, {encode_string(props.text)});")
            else:
                logger.warning("%s (%s) 没有文本设置函数，已忽略 text", identifier, widget.kind)

        if props.range_min is not None and props.range_max is not None:
            if widget.kind in RANGE_KINDS:
                lines.append(f"lv_{source_name}_set_range({identifier}, {props.range_min}, {props.range_max});")
            else:
                logger.warning("%s (%s) 没有范围设置函数，已忽略 range", identifier, widget.kind)

        if props.value is not None:
            if widget.kind in VALUE_KINDS:
                anim = ", LV_ANIM_OFF" if widget.kind in ANIMATED_VALUE_KINDS else ""
                lines.append(f"lv_{source_name}_set_value({identifier}, {props.value}{anim});")
            else:
                logger.warning("%s (%s) 没有数值设置函数，已忽略 value", identifier, widget.kind)

        return lines

    @staticmethod
    def _style_token(key: str, value: str) -> str:
        if key in COLOR_STYLES:
            return wrap_color(value)
        if key in FONT_STYLES and not value.startswith("&"):
            return f"&{value}"
        return value

"""widget_builder.py
控件树构建器

该模块使用 FactExtractor 提取源码中的事实，
然后将扁平的事实列表构建为 Widget 树。
采用两阶段算法：第一阶段按标识符收集并配置所有控件，第二阶段连接父子关系，
因此同一文件中控件创建的先后顺序不影响最终的树形结构。"""

# ================================================================
# 依赖导入
# ================================================================

import logging
from typing import Callable, Dict, List, Optional, Tuple

from .common.builder_utils import collect_all_widgets, tree_depth
from .config import ImportOptions
from .facts import (
    Fact, Declared, Created, SetText, SetSize, SetValue, SetRange,
    SetStyle, SetAlign, SetCenter, SetPos,
)
from .fact_extractor import FactExtractor
from .mappings import ALIGN_CENTER
from .models import Widget, ParsedFile, SourceLocation

logger = logging.getLogger(__name__)


# ================================================================
# 层级构建器类
# ================================================================

class HierarchyBuilder:
    """
    层级构建器
    职责：将事实列表构建为 Widget 树
    每次 build 都使用全新的状态，不在文件之间共享
    """

    def __init__(self, options: ImportOptions = None):
        self.options = options or ImportOptions()
        self._appliers: Dict[type, Callable[[Widget, Fact], None]] = {
            SetText: self._apply_text,
            SetSize: self._apply_size,
            SetValue: self._apply_value,
            SetRange: self._apply_range,
            SetStyle: self._apply_style,
            SetAlign: self._apply_align,
            SetCenter: self._apply_center,
            SetPos: self._apply_pos,
        }

    def build(self, file_name: str, facts: List[Fact]) -> ParsedFile:
        """
        从事实列表构建 ParsedFile

        :param file_name: 源文件名，记录在每个控件的源位置中
        :param facts: 按行号顺序排列的事实列表
        :return: 只包含根控件的 ParsedFile
        """
        # 第一阶段：按标识符收集控件并应用事实
        widgets: Dict[str, Widget] = {}
        parent_arguments: Dict[str, str] = {}
        declarations: Dict[str, str] = {}

        for fact in facts:
            if isinstance(fact, Declared):
                if fact.identifier not in widgets:
                    declarations[fact.identifier] = fact.declared_type
            elif isinstance(fact, Created):
                self._apply_creation(file_name, fact, widgets, parent_arguments)
            else:
                widget = widgets.get(fact.identifier)
                if widget is None:
                    continue
                self._appliers[type(fact)](widget, fact)
                widget.source_location.line_end = fact.line

        # 后续的创建语句覆盖占位声明
        for identifier, widget in widgets.items():
            if identifier in declarations:
                declarations[identifier] = widget.kind

        # 第二阶段：建立父子关系
        roots = self._establish_relationships(widgets, parent_arguments)
        return ParsedFile(file_name=file_name, widgets=roots, declarations=declarations)

    def _apply_creation(self, file_name: str, fact: Created,
                        widgets: Dict[str, Widget], parent_arguments: Dict[str, str]):
        """重复的创建语句只覆盖类型和父参数，保留第一次创建的起始行"""
        widget = widgets.get(fact.identifier)
        if widget is None:
            widgets[fact.identifier] = Widget(
                kind=fact.kind,
                identifier=fact.identifier,
                source_location=SourceLocation(file_path=file_name, line_start=fact.line, line_end=fact.line),
            )
        else:
            logger.debug("%s:%d: 重复创建 %s", file_name, fact.line, fact.identifier)
            widget.kind = fact.kind
            widget.source_location.line_end = fact.line
        parent_arguments[fact.identifier] = fact.parent_argument

    def _establish_relationships(self, widgets: Dict[str, Widget],
                                 parent_arguments: Dict[str, str]) -> List[Widget]:
        """按创建顺序把控件挂到父控件下，无法解析的父引用降级为根控件"""
        resolved_parents: Dict[str, str] = {}
        roots: List[Widget] = []

        for identifier, widget in widgets.items():
            argument = parent_arguments.get(identifier, "")

            # 同一文件中创建的控件优先于占位参数
            if argument in widgets and not self._creates_cycle(identifier, argument, resolved_parents):
                widget.parent_identifier = argument
                resolved_parents[identifier] = argument
                widgets[argument].add_child(widget)
                continue

            if not argument or argument in self.options.root_placeholders:
                widget.parent_identifier = None
            else:
                logger.debug("无法解析 %s 的父引用 %s，作为根控件处理", identifier, argument)
                widget.parent_identifier = argument
            roots.append(widget)

        return roots

    @staticmethod
    def _creates_cycle(child: str, parent: str, resolved_parents: Dict[str, str]) -> bool:
        current: Optional[str] = parent
        while current is not None:
            if current == child:
                return True
            current = resolved_parents.get(current)
        return False

    # ================================================================
    # 事实应用
    # ================================================================

    def _apply_text(self, widget: Widget, fact: SetText):
        widget.properties.text = fact.text

    def _apply_size(self, widget: Widget, fact: SetSize):
        widget.size = (fact.width, fact.height)

    def _apply_value(self, widget: Widget, fact: SetValue):
        widget.properties.value = fact.value

    def _apply_range(self, widget: Widget, fact: SetRange):
        widget.properties.range_min = fact.range_min
        widget.properties.range_max = fact.range_max

    def _apply_style(self, widget: Widget, fact: SetStyle):
        widget.styles.set(fact.style_key, fact.value)

    def _apply_align(self, widget: Widget, fact: SetAlign):
        widget.properties.align = fact.align
        widget.position = (fact.x, fact.y)

    def _apply_center(self, widget: Widget, fact: SetCenter):
        widget.properties.align = ALIGN_CENTER
        widget.position = (0, 0)

    def _apply_pos(self, widget: Widget, fact: SetPos):
        widget.properties.align = None
        widget.position = (fact.x, fact.y)


# ================================================================
# 主解析函数
# ================================================================

def parse(file_name: str, source_text: str, options: ImportOptions = None) -> ParsedFile:
    """解析单个 LVGL 源文件为 ParsedFile。

    :param file_name: 文件名
    :param source_text: 源文件文本
    :param options: 导入选项
    :return: ParsedFile，没有识别到控件时 widgets 为空
    """
    facts = FactExtractor().extract(source_text)
    return HierarchyBuilder(options).build(file_name, facts)


def parse_files(files: List[Tuple[str, str]], options: ImportOptions = None) -> List[ParsedFile]:
    """
    批量解析，跳过没有任何控件的文件

    :param files: (文件名, 文本) 列表
    :return: 至少包含一个控件的 ParsedFile 列表
    """
    results = []
    for file_name, source_text in files:
        try:
            parsed = parse(file_name, source_text, options)
        except Exception as e:
            # 单个文件出错不影响批量中的其它文件
            logger.error("Error parsing %s: %s", file_name, e)
            continue
        if parsed.widgets:
            logger.info("%s: %d 个控件, 层级深度 %d", file_name,
                        len(collect_all_widgets(parsed.widgets)), tree_depth(parsed.widgets))
            results.append(parsed)
        else:
            logger.info("%s 中没有识别到控件，已跳过", file_name)
    return results


__all__ = [
    "HierarchyBuilder",
    "parse",
    "parse_files",
]

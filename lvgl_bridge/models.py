from dataclasses import dataclass, field
from pathlib import PurePath
from typing import List, Dict, Any, Optional, Tuple, Union

from .mappings import CONTAINER, anchor_for_align, align_for_anchor, STYLE_ORDER


# ============================================================================
# 异常
# ============================================================================

class LvglBridgeError(Exception):
    """lvgl_bridge 所有异常的基类"""


class GenerationError(LvglBridgeError):
    """
    单个控件的代码生成失败（例如缺少标识符）
    只影响该控件及其子树，不中断整个导出
    """

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


# ============================================================================
# 尺寸
# ============================================================================

AUTO = "auto"


@dataclass(frozen=True)
class Percent:
    """
    相对父控件的百分比尺寸
    源码形式: LV_PCT(100)
    """
    value: int

    def __str__(self) -> str:
        return f"{self.value}%"


SizeSpec = Union[int, Percent, str]


def size_to_json(size: SizeSpec) -> Union[int, str]:
    if isinstance(size, Percent):
        return str(size)
    return size


def size_from_json(raw: Any) -> SizeSpec:
    """反序列化尺寸："50%" -> Percent(50)，整数保持整数，其它原样保留"""
    if raw is None:
        return AUTO
    if isinstance(raw, bool):
        return AUTO
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if text.endswith("%"):
        try:
            return Percent(int(text[:-1]))
        except ValueError:
            return text
    try:
        return int(text)
    except ValueError:
        return text


# ============================================================================
# 控件属性与样式
# ============================================================================

@dataclass
class SourceLocation:
    """
    追踪控件的源位置信息
    仅用于诊断，不参与任何语义
    """
    file_path: Optional[str] = None
    line_start: int = 0
    line_end: int = 0


@dataclass
class WidgetProperties:
    """控件的语义属性（文本、数值、范围、对齐关键字）"""
    text: Optional[str] = None
    value: Optional[Union[int, str]] = None
    range_min: Optional[Union[int, str]] = None
    range_max: Optional[Union[int, str]] = None
    align: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if v is not None}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WidgetProperties':
        return cls(
            text=data.get("text"),
            value=data.get("value"),
            range_min=data.get("range_min"),
            range_max=data.get("range_max"),
            align=data.get("align"),
        )


@dataclass
class WidgetStyles:
    """
    控件的本地样式
    值保存为源码中的字面 token（十六进制颜色、符号常量或数字），从不求值
    未登记的样式键进入 extra
    """
    bg_color: Optional[str] = None
    text_color: Optional[str] = None
    text_font: Optional[str] = None
    radius: Optional[str] = None
    border_opa: Optional[str] = None
    extra: Dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> Optional[str]:
        if key in STYLE_ORDER:
            return getattr(self, key)
        return self.extra.get(key)

    def set(self, key: str, value: str) -> None:
        if key in STYLE_ORDER:
            setattr(self, key, value)
        else:
            self.extra[key] = value

    def items(self) -> List[Tuple[str, str]]:
        """按固定顺序返回所有已设置的样式：已知样式在前，extra 按插入顺序在后"""
        result = [(key, getattr(self, key)) for key in STYLE_ORDER if getattr(self, key) is not None]
        result.extend(self.extra.items())
        return result

    def to_dict(self) -> Dict[str, str]:
        return dict(self.items())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WidgetStyles':
        styles = cls()
        for key, value in data.items():
            if value is not None:
                styles.set(key, str(value))
        return styles


# ============================================================================
# 控件树
# ============================================================================

@dataclass
class Widget:
    """
    代表一个LVGL控件实例
    kind 为结构化类型标签；导入时无法识别的源码类型名原样保留
    """
    kind: str
    identifier: str
    parent_identifier: Optional[str] = None
    properties: WidgetProperties = field(default_factory=WidgetProperties)
    styles: WidgetStyles = field(default_factory=WidgetStyles)
    position: Tuple[int, int] = (0, 0)
    size: Tuple[SizeSpec, SizeSpec] = (AUTO, AUTO)
    children: List['Widget'] = field(default_factory=list)
    source_location: SourceLocation = field(default_factory=SourceLocation)

    @property
    def width(self) -> SizeSpec:
        return self.size[0]

    @property
    def height(self) -> SizeSpec:
        return self.size[1]

    @property
    def anchor(self) -> Optional[Tuple[str, str]]:
        """(水平锚点, 垂直锚点)，未记录对齐时为 None"""
        if self.properties.align is None:
            return None
        return anchor_for_align(self.properties.align)

    def set_anchor(self, horizontal: str, vertical: str) -> None:
        self.properties.align = align_for_anchor(horizontal, vertical)

    def add_child(self, child: 'Widget') -> None:
        self.children.append(child)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "kind": self.kind,
            "identifier": self.identifier,
            "parent_identifier": self.parent_identifier,
            "properties": self.properties.to_dict(),
            "styles": self.styles.to_dict(),
            "position": {"x": self.position[0], "y": self.position[1]},
            "size": {"width": size_to_json(self.width), "height": size_to_json(self.height)},
            "children": [child.to_dict() for child in self.children],
        }
        if self.anchor is not None:
            data["anchor"] = list(self.anchor)
        if self.source_location.line_start:
            data["source_lines"] = [self.source_location.line_start, self.source_location.line_end]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Widget':
        """
        从字典构建控件（外部编辑器交换格式）
        若未给出 align 但给出了 anchor，则由锚点推导对齐关键字
        """
        position = data.get("position") or {}
        size = data.get("size") or {}
        widget = cls(
            kind=data.get("kind") or CONTAINER,
            identifier=data.get("identifier") or "",
            parent_identifier=data.get("parent_identifier"),
            properties=WidgetProperties.from_dict(data.get("properties") or {}),
            styles=WidgetStyles.from_dict(data.get("styles") or {}),
            position=(int(position.get("x", 0) or 0), int(position.get("y", 0) or 0)),
            size=(size_from_json(size.get("width")), size_from_json(size.get("height"))),
        )
        anchor = data.get("anchor")
        if widget.properties.align is None and anchor:
            widget.set_anchor(anchor[0], anchor[1])
        for child_data in data.get("children") or []:
            widget.add_child(cls.from_dict(child_data))
        return widget


@dataclass
class Screen:
    """一个屏幕（页面），导出时对应一个定义文件和一个创建函数"""
    name: str
    widgets: List[Widget] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "widgets": [w.to_dict() for w in self.widgets]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Screen':
        return cls(
            name=data.get("name") or "main_screen",
            widgets=[Widget.from_dict(w) for w in data.get("widgets") or []],
        )


@dataclass
class ParsedFile:
    """
    单个源文件的解析结果
    widgets 只包含根控件，子控件挂在各自父控件的 children 下
    declarations 记录所有声明过的标识符（包括从未配置过的）
    """
    file_name: str
    widgets: List[Widget] = field(default_factory=list)
    declarations: Dict[str, str] = field(default_factory=dict)

    @property
    def unused_declarations(self) -> List[str]:
        """声明了但从未创建的标识符"""
        from .common.builder_utils import collect_all_widgets
        created = {w.identifier for w in collect_all_widgets(self.widgets)}
        return [name for name in self.declarations if name not in created]

    def to_screen(self) -> Screen:
        stem = PurePath(self.file_name).stem
        return Screen(name=stem or "main_screen", widgets=self.widgets)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_name": self.file_name,
            "widgets": [w.to_dict() for w in self.widgets],
            "declarations": dict(self.declarations),
        }


# ============================================================================
# 结果类型
# ============================================================================

@dataclass
class GeneratedFile:
    file_name: str
    code: str


@dataclass
class GenerationIssue:
    """单个控件生成失败的记录，path 形如 main_screen/0/1"""
    path: str
    message: str


@dataclass
class ImportResult:
    """导入的统一结果，失败时携带可读的错误信息"""
    success: bool
    files: List[ParsedFile] = field(default_factory=list)
    error_message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "files": [f.to_dict() for f in self.files],
            "error": self.error_message,
        }


@dataclass
class ExportResult:
    """导出的统一结果"""
    success: bool
    generated_files: List[GeneratedFile] = field(default_factory=list)
    issues: List[GenerationIssue] = field(default_factory=list)
    error_message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "generated_files": [{"file_name": f.file_name, "code": f.code} for f in self.generated_files],
            "issues": [{"path": i.path, "message": i.message} for i in self.issues],
            "error": self.error_message,
        }

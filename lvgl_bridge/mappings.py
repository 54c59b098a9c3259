"""
映射表模块

静态双向字典：
- LVGL 源码中的控件名（lv_<name>_create 里的 <name>）<-> 结构化控件类型标签
- 结构化控件类型标签 <-> 展示层控件类型名（LVGLLabelWidget 等）
- 对齐关键字 <-> (水平锚点, 垂直锚点)
- 样式设置函数后缀 <-> 样式属性名
纯数据，无状态，可被多个调用方安全共享。
"""

from typing import Dict, Optional, Tuple


# ============================================================================
# 控件类型
# ============================================================================

CONTAINER = "container"
GENERIC_SOURCE_NAME = "obj"
GENERIC_WIDGET_LABEL = "LVGLContainerWidget"

# 源码控件名 -> 结构化类型标签
SOURCE_TO_KIND: Dict[str, str] = {
    "obj": "container",
    "label": "label",
    "btn": "button",
    "arc": "arc",
    "slider": "slider",
    "bar": "bar",
    "checkbox": "checkbox",
    "switch": "switch",
    "dropdown": "dropdown",
    "img": "image",
    "textarea": "textarea",
    "keyboard": "keyboard",
    "chart": "chart",
    "table": "table",
    "spinner": "spinner",
    "roller": "roller",
    "meter": "meter",
}

KIND_TO_SOURCE: Dict[str, str] = {kind: name for name, kind in SOURCE_TO_KIND.items()}

# 结构化类型标签 -> 展示层控件类型名
KIND_TO_LABEL: Dict[str, str] = {
    "container": "LVGLContainerWidget",
    "label": "LVGLLabelWidget",
    "button": "LVGLButtonWidget",
    "arc": "LVGLArcWidget",
    "slider": "LVGLSliderWidget",
    "bar": "LVGLBarWidget",
    "checkbox": "LVGLCheckboxWidget",
    "switch": "LVGLSwitchWidget",
    "dropdown": "LVGLDropdownWidget",
    "image": "LVGLImageWidget",
    "textarea": "LVGLTextareaWidget",
    "keyboard": "LVGLKeyboardWidget",
    "chart": "LVGLChartWidget",
    "table": "LVGLTableWidget",
    "spinner": "LVGLSpinnerWidget",
    "roller": "LVGLRollerWidget",
    "meter": "LVGLMeterWidget",
}

LABEL_TO_KIND: Dict[str, str] = {label: kind for kind, label in KIND_TO_LABEL.items()}

WIDGET_KINDS = tuple(KIND_TO_LABEL.keys())

# 控件能力：哪些类型拥有对应的属性设置函数
TEXT_KINDS = frozenset({"label", "checkbox", "textarea", "dropdown"})
VALUE_KINDS = frozenset({"arc", "slider", "bar"})
RANGE_KINDS = frozenset({"arc", "slider", "bar"})
ANIMATED_VALUE_KINDS = frozenset({"slider", "bar"})


def kind_from_source(source_name: str) -> str:
    """源码控件名 -> 类型标签，未知名称回退为 container"""
    return SOURCE_TO_KIND.get(source_name, CONTAINER)


def source_from_kind(kind: str) -> str:
    """类型标签 -> 源码控件名，未知标签回退为 obj"""
    return KIND_TO_SOURCE.get(kind, GENERIC_SOURCE_NAME)


def label_from_kind(kind: str) -> str:
    return KIND_TO_LABEL.get(kind, GENERIC_WIDGET_LABEL)


def kind_from_label(label: str) -> str:
    return LABEL_TO_KIND.get(label, CONTAINER)


def source_from_label(label: str) -> str:
    """展示层类型名 -> 源码控件名（生成代码时使用），未知类型回退为 obj"""
    kind = LABEL_TO_KIND.get(label)
    if kind is None:
        return GENERIC_SOURCE_NAME
    return source_from_kind(kind)


def is_known_kind(kind: str) -> bool:
    return kind in KIND_TO_SOURCE


# ============================================================================
# 对齐
# ============================================================================

HORIZONTAL_ANCHORS = ("left", "center", "right")
VERTICAL_ANCHORS = ("top", "center", "bottom")

ALIGN_CENTER = "LV_ALIGN_CENTER"
ALIGN_TOP_LEFT = "LV_ALIGN_TOP_LEFT"

# 对齐关键字 -> (水平锚点, 垂直锚点)
ALIGN_TO_ANCHOR: Dict[str, Tuple[str, str]] = {
    "LV_ALIGN_TOP_LEFT": ("left", "top"),
    "LV_ALIGN_TOP_MID": ("center", "top"),
    "LV_ALIGN_TOP_RIGHT": ("right", "top"),
    "LV_ALIGN_LEFT_MID": ("left", "center"),
    "LV_ALIGN_CENTER": ("center", "center"),
    "LV_ALIGN_RIGHT_MID": ("right", "center"),
    "LV_ALIGN_BOTTOM_LEFT": ("left", "bottom"),
    "LV_ALIGN_BOTTOM_MID": ("center", "bottom"),
    "LV_ALIGN_BOTTOM_RIGHT": ("right", "bottom"),
}

ANCHOR_TO_ALIGN: Dict[Tuple[str, str], str] = {anchor: align for align, anchor in ALIGN_TO_ANCHOR.items()}


def anchor_for_align(align: str) -> Optional[Tuple[str, str]]:
    """对齐关键字 -> 锚点对；非标准关键字（如 LV_ALIGN_OUT_*）返回 None"""
    return ALIGN_TO_ANCHOR.get(align)


def align_for_anchor(horizontal: str, vertical: str) -> str:
    """锚点对 -> 对齐关键字，无法识别时回退为 LV_ALIGN_TOP_LEFT"""
    return ANCHOR_TO_ALIGN.get((horizontal, vertical), ALIGN_TOP_LEFT)


# ============================================================================
# 样式
# ============================================================================

# 样式设置函数后缀（lv_obj_set_style_<suffix>）-> 样式属性名，顺序即生成顺序
STYLE_SETTERS: Dict[str, str] = {
    "bg_color": "bg_color",
    "text_color": "text_color",
    "text_font": "text_font",
    "radius": "radius",
    "border_opa": "border_opa",
}

STYLE_ATTRIBUTES: Dict[str, str] = {attr: suffix for suffix, attr in STYLE_SETTERS.items()}

STYLE_ORDER = tuple(STYLE_ATTRIBUTES.keys())

COLOR_STYLES = frozenset({"bg_color", "text_color"})
FONT_STYLES = frozenset({"text_font"})


def style_attribute_for_setter(suffix: str) -> Optional[str]:
    return STYLE_SETTERS.get(suffix)


def setter_for_style_attribute(attribute: str) -> str:
    """样式属性名 -> 设置函数后缀；未登记的属性原样作为后缀"""
    return STYLE_ATTRIBUTES.get(attribute, attribute)

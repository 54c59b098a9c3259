"""
lvgl_bridge

LVGL 源码与结构化控件树之间的双向转换：
import 从源码中提取控件树，export 从控件树重新生成源码。
"""

from .models import (
    AUTO, Percent, Widget, WidgetProperties, WidgetStyles, SourceLocation,
    ParsedFile, Screen, GeneratedFile, GenerationIssue, ImportResult, ExportResult,
    LvglBridgeError, GenerationError,
)
from .config import ImportOptions, ExportOptions
from .fact_extractor import FactExtractor, extract_facts
from .widget_builder import HierarchyBuilder, parse, parse_files
from .formatters import WidgetTreeFormatter, CodeGenerator
from .exporter import render_project, generate
from .importer import scan_project, import_sources, import_files, import_project

__all__ = [
    # 数据模型
    'AUTO', 'Percent', 'Widget', 'WidgetProperties', 'WidgetStyles', 'SourceLocation',
    'ParsedFile', 'Screen', 'GeneratedFile', 'GenerationIssue', 'ImportResult', 'ExportResult',
    'LvglBridgeError', 'GenerationError',
    # 配置
    'ImportOptions', 'ExportOptions',
    # 导入
    'FactExtractor', 'extract_facts', 'HierarchyBuilder', 'parse', 'parse_files',
    'scan_project', 'import_sources', 'import_files', 'import_project',
    # 导出
    'WidgetTreeFormatter', 'CodeGenerator', 'render_project', 'generate',
]

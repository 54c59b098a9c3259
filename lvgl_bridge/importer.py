"""importer.py
导入编排

扫描 Arduino/LVGL 工程目录，读取候选源文件并逐个解析。
文件之间互不共享状态；所有 I/O 错误在这一层被捕获并转换为结构化结果。"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from .config import ImportOptions
from .models import ImportResult
from .widget_builder import parse_files

logger = logging.getLogger(__name__)

NO_LVGL_MESSAGE = "No LVGL code found in the project"
NO_WIDGETS_MESSAGE = "Could not parse any LVGL widgets from the files"


@dataclass
class ProjectScan:
    """工程扫描结果"""
    project_path: str
    files: List[str] = field(default_factory=list)
    main_files: List[str] = field(default_factory=list)
    has_lvgl: bool = False


def scan_project(project_path: str, options: ImportOptions = None) -> ProjectScan:
    """
    递归扫描工程目录

    :param project_path: 工程根目录
    :param options: 导入选项（扩展名、跳过的目录、LVGL 标记）
    :return: ProjectScan，无法访问的目录和文件被记录并跳过
    """
    options = options or ImportOptions()
    scan = ProjectScan(project_path=project_path)

    def scan_dir(directory: str):
        try:
            entries = sorted(os.listdir(directory))
        except OSError as e:
            logger.error("Error scanning directory %s: %s", directory, e)
            return

        for entry in entries:
            full_path = os.path.join(directory, entry)
            if os.path.isdir(full_path):
                if entry not in options.skip_dirs:
                    scan_dir(full_path)
                continue

            extension = os.path.splitext(entry)[1].lower()
            if extension not in options.source_extensions:
                continue
            scan.files.append(full_path)

            try:
                with open(full_path, 'r', encoding=options.encoding) as f:
                    content = f.read()
            except (OSError, UnicodeDecodeError) as e:
                logger.error("无法读取 %s: %s", full_path, e)
                continue

            if any(marker in content for marker in options.lvgl_markers):
                scan.has_lvgl = True
                if extension in options.main_extensions:
                    scan.main_files.append(full_path)

    scan_dir(project_path)
    return scan


def read_sources(paths: List[str], options: ImportOptions = None) -> List[Tuple[str, str]]:
    """读取源文件，读取失败的文件被记录并跳过"""
    options = options or ImportOptions()
    sources = []
    for path in paths:
        try:
            with open(path, 'r', encoding=options.encoding) as f:
                sources.append((path, f.read()))
        except (OSError, UnicodeDecodeError) as e:
            logger.error("无法读取 %s: %s", path, e)
    return sources


def import_sources(sources: List[Tuple[str, str]], options: ImportOptions = None) -> ImportResult:
    """解析已读入内存的 (文件名, 文本) 列表"""
    parsed_files = parse_files(sources, options)
    if not parsed_files:
        return ImportResult(success=False, error_message=NO_WIDGETS_MESSAGE)
    return ImportResult(success=True, files=parsed_files)


def import_files(paths: List[str], options: ImportOptions = None) -> ImportResult:
    return import_sources(read_sources(paths, options), options)


def import_project(project_path: str, options: ImportOptions = None) -> ImportResult:
    """
    导入整个工程：扫描、优先解析主文件、构建控件树

    :param project_path: 工程根目录
    :return: ImportResult，从不抛出异常
    """
    try:
        scan = scan_project(project_path, options)
        if not scan.has_lvgl:
            return ImportResult(success=False, error_message=NO_LVGL_MESSAGE)

        paths = scan.main_files or scan.files
        logger.info("从 %s 导入 %d 个文件", Path(project_path).name, len(paths))
        return import_files(paths, options)

    except Exception as e:
        logger.error("导入 %s 失败: %s", project_path, e)
        return ImportResult(success=False, error_message=f"导入失败: {e}")


__all__ = [
    "ProjectScan",
    "scan_project",
    "read_sources",
    "import_sources",
    "import_files",
    "import_project",
]

"""
快照逻辑模块
包含快照生成和验证的核心逻辑
每个快照由两部分组成：导入得到的 Markdown 控件树，以及由该控件树重新生成的定义文件
"""

import sys
from pathlib import Path
from typing import List, Tuple

# 添加项目根目录到Python路径，以便正确导入lvgl_bridge模块
current_dir = Path(__file__).parent
project_root = current_dir.parent
sys.path.insert(0, str(project_root))

# 导入解析器模块
from lvgl_bridge.widget_builder import parse
from lvgl_bridge.formatters import WidgetTreeFormatter
from lvgl_bridge.exporter import render_project


class SnapshotTester:
    """快照测试器类"""

    def __init__(self):
        # 基于当前文件位置构建绝对路径，以确保路径的健壮性
        base_dir = Path(__file__).parent
        self.fixtures_dir = base_dir / "fixtures"
        self.snapshots_dir = base_dir / "snapshots"
        self.widget_formatter = WidgetTreeFormatter(show_properties=True)

        # 确保快照目录存在
        self.snapshots_dir.mkdir(exist_ok=True)

    def get_fixture_files(self) -> List[Path]:
        """获取所有测试文件"""
        return sorted(p for p in self.fixtures_dir.iterdir() if p.suffix in (".cpp", ".ino", ".h"))

    def process_source_file(self, file_path: Path) -> str:
        """处理单个源文件，返回控件树和重新生成的代码"""
        with open(file_path, 'r', encoding='utf-8') as f:
            source_text = f.read()

        parsed_file = parse(file_path.name, source_text)
        if not parsed_file.widgets:
            return "# 解析失败\n没有识别到任何控件"

        tree = self.widget_formatter.format(parsed_file)

        files, _ = render_project(parsed_file)
        # files[0] 是声明文件，files[1] 是该屏幕的定义文件
        return "\n\n".join([tree, files[1].code])

    def generate_snapshots(self):
        """生成所有测试文件的快照"""
        for fixture_file in self.get_fixture_files():
            print(f"正在生成快照: {fixture_file.name}")

            snapshot_file = self.snapshots_dir / f"{fixture_file.stem}.snap"
            try:
                output = self.process_source_file(fixture_file)
            except Exception as e:
                print(f"处理文件 {fixture_file.name} 时出错: {e}")
                output = f"# 处理错误\n错误信息: {str(e)}"

            with open(snapshot_file, 'w', encoding='utf-8') as f:
                f.write(output)
            print(f"快照已保存: {snapshot_file}")

    def verify_snapshots(self) -> List[Tuple[str, str, str]]:
        """验证当前输出与快照的一致性，返回不一致的文件列表"""
        mismatches = []

        for fixture_file in self.get_fixture_files():
            snapshot_file = self.snapshots_dir / f"{fixture_file.stem}.snap"

            if not snapshot_file.exists():
                mismatches.append((fixture_file.name, "快照文件不存在", ""))
                continue

            try:
                current_output = self.process_source_file(fixture_file)

                with open(snapshot_file, 'r', encoding='utf-8') as f:
                    expected_output = f.read()

                if current_output != expected_output:
                    mismatches.append((fixture_file.name, expected_output, current_output))

            except Exception as e:
                mismatches.append((fixture_file.name, f"处理错误: {str(e)}", ""))

        return mismatches

from flask import Flask, request, render_template, jsonify
from lvgl_bridge.config import ExportOptions
from lvgl_bridge.exporter import render_project, generate
from lvgl_bridge.formatters import WidgetTreeFormatter, VerboseStrategy
from lvgl_bridge.importer import import_sources
from lvgl_bridge.models import Screen, ImportResult
from lvgl_bridge.widget_builder import parse
import logging
from typing import List, Optional, Tuple

# 初始化Flask应用
app = Flask(__name__)
app.config.setdefault("EXPORT_VERBOSE", True)
app.config.setdefault("ALLOW_DISK_EXPORT", False)
# 例如 LVGL_BRIDGE_ALLOW_DISK_EXPORT=true
app.config.from_prefixed_env("LVGL_BRIDGE")

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def export_options() -> ExportOptions:
    return ExportOptions(verbose=bool(app.config["EXPORT_VERBOSE"]))


def format_widget_content(parsed_file) -> str:
    """格式化控件树为Markdown"""
    if not parsed_file or not parsed_file.widgets:
        return "无法生成Widget树"

    formatter = WidgetTreeFormatter(VerboseStrategy(), show_properties=True)  # 硬编码显示属性
    result = formatter.format(parsed_file)

    return result if result else "无法生成Widget树状结构"


def format_generated_code(parsed_file) -> Tuple[str, List[str]]:
    """把解析出的控件树重新生成为代码，返回 (代码文本, 问题列表)"""
    files, issues = render_project(parsed_file.to_screen(), export_options())
    code = "\n\n".join(f"// ===== {f.file_name} =====\n{f.code}" for f in files)
    return code, [f"{issue.path}: {issue.message}" for issue in issues]


@app.route('/', methods=['GET', 'POST'])
def unified_parser():
    """统一页面 - 粘贴源码，查看控件树和重新生成的代码"""
    if request.method == 'GET':
        return render_template('unified.html')

    # 获取用户输入
    source_text = request.form.get('source_text', '')
    file_name = request.form.get('file_name', '').strip() or "main_screen.cpp"

    widget_result: Optional[str] = None
    generated_code: Optional[str] = None
    issues: List[str] = []
    error: Optional[str] = None

    if source_text.strip():
        parsed_file = parse(file_name, source_text)
        if parsed_file.widgets:
            widget_result = format_widget_content(parsed_file)
            generated_code, issues = format_generated_code(parsed_file)
        else:
            error = "没有识别到任何LVGL控件"
    else:
        error = "输入文本为空"

    return render_template('unified.html',
                           file_name=file_name,
                           source_text=source_text,
                           widget_result=widget_result,
                           generated_code=generated_code,
                           issues=issues,
                           error=error)


@app.route('/api/import', methods=['POST'])
def api_import():
    """JSON 导入接口: {"files": [{"file_name": ..., "content": ...}]}"""
    payload = request.get_json(silent=True) or {}
    files = payload.get('files')
    if not isinstance(files, list):
        return jsonify(ImportResult(success=False, error_message="缺少 files 列表").to_dict()), 400

    sources = [(str(f.get('file_name') or 'main_screen.cpp'), str(f.get('content') or ''))
               for f in files if isinstance(f, dict)]
    result = import_sources(sources)
    return jsonify(result.to_dict())


@app.route('/api/export', methods=['POST'])
def api_export():
    """JSON 导出接口: {"screens": [...], "output_dir": 可选}"""
    payload = request.get_json(silent=True) or {}
    screens_data = payload.get('screens')
    if not isinstance(screens_data, list):
        return jsonify({"success": False, "error": "缺少 screens 列表"}), 400

    try:
        screens = [Screen.from_dict(s) for s in screens_data]
    except (TypeError, ValueError, AttributeError) as e:
        return jsonify({"success": False, "error": f"无效的控件树: {e}"}), 400

    output_dir = payload.get('output_dir')
    if output_dir:
        if not app.config["ALLOW_DISK_EXPORT"]:
            return jsonify({"success": False, "error": "服务器未开启写盘导出"}), 403
        return jsonify(generate(screens, output_dir, export_options()).to_dict())

    files, issues = render_project(screens, export_options())
    return jsonify({
        "success": True,
        "generated_files": [{"file_name": f.file_name, "code": f.code} for f in files],
        "issues": [{"path": i.path, "message": i.message} for i in issues],
        "error": None,
    })


# 启动Web服务器
if __name__ == '__main__':
    app.run(host='0.0.0.0', port=8080, debug=True)

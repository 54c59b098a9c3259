"""
数据模型测试
"""

from lvgl_bridge.models import (
    AUTO, Percent, Screen, Widget, WidgetProperties, WidgetStyles, ExportResult, GenerationIssue,
    size_from_json, size_to_json,
)
from lvgl_bridge.formatters import WidgetTreeFormatter, VerboseStrategy
from lvgl_bridge.widget_builder import parse


class TestSizes:

    def test_percent_text(self):
        assert str(Percent(50)) == "50%"
        assert size_to_json(Percent(50)) == "50%"

    def test_size_from_json(self):
        assert size_from_json("50%") == Percent(50)
        assert size_from_json(120) == 120
        assert size_from_json("120") == 120
        assert size_from_json(None) == AUTO
        assert size_from_json("LV_SIZE_CONTENT") == "LV_SIZE_CONTENT"


class TestWidgetDict:

    def test_to_dict(self):
        widget = Widget(kind="button", identifier="ok", position=(4, 8), size=(Percent(25), 40),
                        properties=WidgetProperties(align="LV_ALIGN_BOTTOM_RIGHT"))
        widget.styles.set("radius", "4")

        data = widget.to_dict()

        assert data["size"] == {"width": "25%", "height": 40}
        assert data["position"] == {"x": 4, "y": 8}
        assert data["anchor"] == ["right", "bottom"]
        assert data["properties"] == {"align": "LV_ALIGN_BOTTOM_RIGHT"}
        assert data["styles"] == {"radius": "4"}
        assert "source_lines" not in data

    def test_from_dict_round_trip(self):
        widget = Widget(kind="arc", identifier="gauge", size=(200, 200),
                        properties=WidgetProperties(value=3, range_min=0, range_max=10))
        widget.add_child(Widget(kind="label", identifier="value_label", parent_identifier="gauge"))
        assert Widget.from_dict(widget.to_dict()).to_dict() == widget.to_dict()

    def test_anchor_derives_align(self):
        widget = Widget.from_dict({"kind": "label", "identifier": "a", "anchor": ["center", "top"]})
        assert widget.properties.align == "LV_ALIGN_TOP_MID"

    def test_explicit_align_wins_over_anchor(self):
        widget = Widget.from_dict({
            "kind": "label", "identifier": "a",
            "properties": {"align": "LV_ALIGN_CENTER"}, "anchor": ["left", "top"],
        })
        assert widget.properties.align == "LV_ALIGN_CENTER"

    def test_from_dict_defaults(self):
        widget = Widget.from_dict({"identifier": "a"})
        assert widget.kind == "container"
        assert widget.size == (AUTO, AUTO)
        assert widget.position == (0, 0)

    def test_screen_from_dict(self):
        screen = Screen.from_dict({"widgets": [{"kind": "label", "identifier": "a"}]})
        assert screen.name == "main_screen"
        assert screen.widgets[0].identifier == "a"


class TestStyles:

    def test_canonical_order(self):
        styles = WidgetStyles()
        styles.set("pad_all", "8")
        styles.set("radius", "4")
        styles.set("bg_color", "0x000000")
        assert [key for key, _ in styles.items()] == ["bg_color", "radius", "pad_all"]

    def test_from_dict_routes_unknown_keys(self):
        styles = WidgetStyles.from_dict({"text_color": "0xFFFFFF", "shadow_width": 3})
        assert styles.text_color == "0xFFFFFF"
        assert styles.extra == {"shadow_width": "3"}
        assert styles.get("shadow_width") == "3"


class TestResults:

    def test_export_result_dict(self):
        result = ExportResult(success=True, issues=[GenerationIssue(path="home/0", message="bad")])
        assert result.to_dict() == {
            "success": True,
            "generated_files": [],
            "issues": [{"path": "home/0", "message": "bad"}],
            "error": None,
        }


class TestTreeFormatter:

    def test_verbose_tree_shows_source_lines(self):
        parsed = parse("demo.cpp", "panel = lv_obj_create(parent);\nlv_obj_center(panel);\n"
                                   "caption = lv_label_create(panel);")
        output = WidgetTreeFormatter(VerboseStrategy()).format(parsed)
        assert output.split("\n") == [
            "# demo.cpp Hierarchy",
            "",
            "- **panel** (container) [L1-2]",
            "    - **caption** (label) [L3-3]",
        ]

    def test_bare_widget_title(self):
        output = WidgetTreeFormatter().format(Widget(kind="label", identifier="a"))
        assert output.split("\n") == ["# Widget Hierarchy", "", "- **a** (label)"]

"""
代码生成器测试
"""

import pytest

from lvgl_bridge.formatters import CodeGenerator, ConciseStrategy, VerboseStrategy
from lvgl_bridge.models import Percent, Screen, Widget, WidgetProperties


def concise(data):
    generator = CodeGenerator(ConciseStrategy())
    return generator.format(data).split("\n"), generator


class TestStatementOrder:

    def test_full_widget(self):
        widget = Widget(
            kind="slider",
            identifier="volume",
            properties=WidgetProperties(text=None, value=30, range_min=0, range_max=100,
                                        align="LV_ALIGN_TOP_LEFT"),
            position=(10, 10),
            size=(200, 20),
        )
        widget.styles.set("radius", "4")
        widget.styles.set("bg_color", "0x112233")
        widget.styles.set("pad_all", "8")

        lines, _ = concise(widget)
        assert lines == [
            "volume = lv_slider_create(parent);",
            "lv_obj_set_size(volume, 200, 20);",
            "lv_obj_align(volume, LV_ALIGN_TOP_LEFT, 10, 10);",
            "lv_slider_set_range(volume, 0, 100);",
            "lv_slider_set_value(volume, 30, LV_ANIM_OFF);",
            "lv_obj_set_style_bg_color(volume, lv_color_hex(0x112233), 0);",
            "lv_obj_set_style_radius(volume, 4, 0);",
            "lv_obj_set_style_pad_all(volume, 8, 0);",
            "",
        ]

    def test_children_follow_parent_block(self):
        panel = Widget(kind="container", identifier="panel")
        panel.add_child(Widget(kind="label", identifier="caption", properties=WidgetProperties(text="Hi")))

        lines, generator = concise([panel])
        assert lines == [
            "panel = lv_obj_create(parent);",
            "lv_obj_set_pos(panel, 0, 0);",
            "",
            "caption = lv_label_create(panel);",
            "lv_obj_set_pos(caption, 0, 0);",
            'lv_label_set_text(caption, "Hi");',
            "",
        ]
        assert generator.generated_identifiers == ["panel", "caption"]

    def test_verbose_adds_comment_line(self):
        generator = CodeGenerator(VerboseStrategy())
        output = generator.format(Widget(kind="button", identifier="ok_btn"))
        assert output.split("\n")[:2] == ["// ok_btn (button)", "ok_btn = lv_btn_create(parent);"]

    def test_custom_comment_strategy(self):
        class BannerStrategy(ConciseStrategy):
            def widget_comment(self, widget):
                return f"/* {widget.kind}: {widget.identifier} */"

        output = CodeGenerator(BannerStrategy()).format(Widget(kind="label", identifier="caption"))
        assert output.split("\n")[0] == "/* label: caption */"

    def test_concise_strategy_has_no_comment(self):
        assert ConciseStrategy().widget_comment(Widget(kind="label", identifier="a")) is None

    def test_default_strategy_is_verbose(self):
        assert isinstance(CodeGenerator().strategy, VerboseStrategy)


class TestGeometry:

    @pytest.mark.parametrize("align, position, expected", [
        (None, (3, 4), "lv_obj_set_pos(w, 3, 4);"),
        ("LV_ALIGN_CENTER", (0, 0), "lv_obj_center(w);"),
        ("LV_ALIGN_CENTER", (0, 5), "lv_obj_align(w, LV_ALIGN_CENTER, 0, 5);"),
        ("LV_ALIGN_BOTTOM_RIGHT", (-5, -5), "lv_obj_align(w, LV_ALIGN_BOTTOM_RIGHT, -5, -5);"),
    ])
    def test_position_statement(self, align, position, expected):
        widget = Widget(kind="container", identifier="w", properties=WidgetProperties(align=align),
                        position=position)
        lines, _ = concise(widget)
        assert lines[1] == expected

    def test_percent_size_rewrapped(self):
        widget = Widget(kind="bar", identifier="w", size=(Percent(100), 10))
        lines, _ = concise(widget)
        assert lines[1] == "lv_obj_set_size(w, LV_PCT(100), 10);"

    def test_auto_size_omits_statement(self):
        widget = Widget(kind="container", identifier="w", size=(100, "auto"))
        lines, _ = concise(widget)
        assert not any("lv_obj_set_size" in line for line in lines)


class TestCapabilities:

    def test_unknown_kind_falls_back_to_generic_object(self):
        lines, _ = concise(Widget(kind="led", identifier="w"))
        assert lines[0] == "w = lv_obj_create(parent);"

    def test_text_ignored_on_kind_without_text_setter(self):
        widget = Widget(kind="button", identifier="w", properties=WidgetProperties(text="OK"))
        lines, _ = concise(widget)
        assert not any("set_text" in line for line in lines)

    def test_arc_value_has_no_animation_argument(self):
        widget = Widget(kind="arc", identifier="w", properties=WidgetProperties(value=7))
        lines, _ = concise(widget)
        assert "lv_arc_set_value(w, 7);" in lines

    def test_range_requires_both_bounds(self):
        widget = Widget(kind="arc", identifier="w", properties=WidgetProperties(range_min=0))
        lines, _ = concise(widget)
        assert not any("set_range" in line for line in lines)

    def test_text_is_escaped(self):
        widget = Widget(kind="label", identifier="w", properties=WidgetProperties(text='Say "hi"\n'))
        lines, _ = concise(widget)
        assert r'lv_label_set_text(w, "Say \"hi\"\n");' in lines

    def test_font_reference(self):
        widget = Widget(kind="label", identifier="w")
        widget.styles.set("text_font", "lv_font_montserrat_24")
        lines, _ = concise(widget)
        assert "lv_obj_set_style_text_font(w, &lv_font_montserrat_24, 0);" in lines


class TestFailures:

    def test_missing_identifier_skips_subtree(self):
        broken = Widget(kind="container", identifier="")
        broken.add_child(Widget(kind="label", identifier="orphan"))
        screen = Screen(name="main_screen", widgets=[
            Widget(kind="container", identifier="first"),
            broken,
            Widget(kind="container", identifier="third"),
        ])

        generator = CodeGenerator(ConciseStrategy())
        output = generator.format(screen)

        assert generator.generated_identifiers == ["first", "third"]
        assert "orphan" not in output
        assert len(generator.issues) == 1
        assert generator.issues[0].path == "main_screen/1"

    def test_nested_issue_path(self):
        root = Widget(kind="container", identifier="root")
        root.add_child(Widget(kind="label", identifier="ok"))
        root.add_child(Widget(kind="label", identifier="bad name"))
        generator = CodeGenerator(ConciseStrategy())
        generator.format(Screen(name="s", widgets=[root]))
        assert [issue.path for issue in generator.issues] == ["s/0/1"]

    def test_state_reset_between_calls(self):
        generator = CodeGenerator(ConciseStrategy())
        generator.format(Widget(kind="container", identifier=""))
        generator.format(Widget(kind="container", identifier="w"))
        assert generator.issues == []
        assert generator.generated_identifiers == ["w"]

    def test_unsupported_input(self):
        with pytest.raises(ValueError):
            CodeGenerator().format("not a widget")

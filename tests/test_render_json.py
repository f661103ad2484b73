import json
import re

from wintree.config import InspectorOptions, SizeWH
from wintree.inspector import TreeSnapshot
from wintree.render_json import build_document, dumps_document, node_to_dict, options_to_dict, write_document
from wintree.services import ProcInfo
from wintree.tree_builder import ClientInfo, RectInfo, WindowNode


def _tree():
    child = WindowNode(hwnd=0x12, pid=100, tid=8, visible=True, class_name="Edit", title="é", match=True)
    child.measured_width, child.measured_height = 300, 300
    return WindowNode(
        hwnd=0x10,
        pid=100,
        tid=8,
        visible=True,
        class_name="Main",
        title="Root",
        style=0x16CF0000,
        rect=RectInfo(0, 0, 80, 80),
        client=ClientInfo(70, 60),
        children=[child],
    )


def _snapshot():
    return TreeSnapshot(
        generated_at="2026-01-01T00:00:00+00:00",
        processes=[ProcInfo("app.exe", 100)],
        roots=[_tree()],
        matched_top_count=1,
    )


def _all_nodes(obj):
    yield obj
    for child in obj["children"]:
        yield from _all_nodes(child)


def test_node_keys_without_optional_groups():
    out = node_to_dict(_tree(), InspectorOptions())

    assert list(out) == ["hwnd", "hwndDec", "pid", "tid", "visible", "className", "title", "match", "children"]
    assert out["hwnd"] == "0x10"
    assert out["hwndDec"] == 16


def test_field_presence_follows_display_options_for_every_node():
    for show_style in (False, True):
        for show_rect in (False, True):
            doc = build_document(_snapshot(), InspectorOptions(show_style=show_style, show_rect=show_rect))
            for node in _all_nodes(doc["roots"][0]):
                assert ("style" in node) is show_style
                assert ("exStyle" in node) is show_style
                assert ("rect" in node) is show_rect
                assert ("client" in node) is show_rect


def test_optional_groups_serialize_values_and_nulls():
    out = node_to_dict(_tree(), InspectorOptions(show_style=True, show_rect=True))

    assert out["style"] == "0x16CF0000"
    assert out["exStyle"] is None
    assert out["rect"] == {"left": 0, "top": 0, "right": 80, "bottom": 80, "width": 80, "height": 80}
    assert out["client"] == {"width": 70, "height": 60}
    assert out["children"][0]["rect"] is None
    assert out["children"][0]["client"] is None
    assert list(out)[-2:] == ["match", "children"]


def test_filter_scratch_fields_are_never_emitted():
    text = dumps_document(build_document(_snapshot(), InspectorOptions(show_rect=True, min_rect=SizeWH(1, 1))))

    assert "measured" not in text
    assert "rect_known" not in text


def test_options_echo_uses_explicit_nulls():
    out = options_to_dict(InspectorOptions(target_pid=100))

    assert out["TargetPid"] == 100
    assert out["MaxDepth"] == -1
    for key in ("TargetName", "MinRect", "MaxRect", "ClassContains", "TitleContains", "ClassRegex", "TitleRegex", "JsonFile"):
        assert key in out and out[key] is None
    assert len(out) == 16


def test_options_echo_formats_values():
    options = InspectorOptions(
        target_name="notepad",
        max_depth=3,
        min_rect=SizeWH(800, 600),
        class_regex=re.compile("^Edit$", re.IGNORECASE),
        json_output=True,
        json_file="out.json",
    )

    out = options_to_dict(options)

    assert out["MaxDepth"] == 3
    assert out["MinRect"] == "800x600"
    assert out["ClassRegex"] == "^Edit$"
    assert out["Json"] is True
    assert out["JsonFile"] == "out.json"


def test_document_shape():
    doc = build_document(_snapshot(), InspectorOptions())

    assert list(doc) == ["generatedAt", "processes", "options", "roots"]
    assert doc["processes"] == [{"name": "app.exe", "pid": 100}]
    assert doc["roots"][0]["children"][0]["match"] is True


def test_write_document_is_utf8_without_bom(tmp_path):
    path = tmp_path / "nested" / "tree.json"

    write_document(build_document(_snapshot(), InspectorOptions()), str(path))

    raw = path.read_bytes()
    assert not raw.startswith(b"\xef\xbb\xbf")
    assert "é".encode("utf-8") in raw
    assert json.loads(raw.decode("utf-8"))["roots"][0]["hwnd"] == "0x10"

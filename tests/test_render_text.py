from wintree.render_text import TextTreeRenderer, escape_title, format_style
from wintree.tree_builder import ClientInfo, RectInfo, WindowNode


def _node(hwnd, children=None, **kwargs):
    return WindowNode(
        hwnd=hwnd,
        pid=kwargs.pop("pid", 100),
        tid=kwargs.pop("tid", 7),
        visible=kwargs.pop("visible", True),
        class_name=kwargs.pop("class_name", "C"),
        title=kwargs.pop("title", ""),
        children=list(children or []),
        **kwargs,
    )


def _tree():
    return _node(1, [_node(2, [_node(4)]), _node(3, [_node(5), _node(6)])])


def _prefixes(lines):
    return [line.split("0x", 1)[0] for line in lines]


def test_unicode_glyphs_layout():
    lines = TextTreeRenderer().render(_tree())

    assert _prefixes(lines) == [
        "",
        "├─ ",
        "│  └─ ",
        "└─ ",
        "   ├─ ",
        "   └─ ",
    ]


def test_ascii_glyphs_layout():
    lines = TextTreeRenderer(ascii_tree=True).render(_tree())

    assert _prefixes(lines) == [
        "",
        "+- ",
        "|  \\- ",
        "\\- ",
        "   +- ",
        "   \\- ",
    ]


def test_describe_default_fields():
    node = _node(0x1A2B, pid=100, tid=7, visible=False, class_name="Main", title="a\tb\r\nc")

    line = TextTreeRenderer().describe(node)

    assert line == "0x1A2B (6699) | PID 100 TID 7 | Visible N | Class 'Main' | Title \"a\\tb\\r\\nc\""


def test_describe_with_style_and_rect():
    node = _node(
        0x10,
        style=0x16CF0000,
        ex_style=0x100,
        rect=RectInfo(10, 20, 310, 220),
        client=ClientInfo(300, 180),
    )

    line = TextTreeRenderer(show_style=True, show_rect=True).describe(node)

    assert "| Style 0x16CF0000 ExStyle 0x00000100 |" in line
    assert "| Rect [10,20,310,220] (300x200) | Client (300x180) |" in line


def test_describe_unknown_optional_fields_use_question_mark():
    line = TextTreeRenderer(show_style=True, show_rect=True).describe(_node(0x10))

    assert "Style ? ExStyle ?" in line
    assert "| Rect ? | Client ? |" in line


def test_optional_fields_hidden_when_not_requested():
    node = _node(0x10, style=1, rect=RectInfo(0, 0, 1, 1))

    line = TextTreeRenderer().describe(node)

    assert "Style" not in line
    assert "Rect" not in line


def test_helpers():
    assert escape_title("x\ny") == "x\\ny"
    assert escape_title("") == ""
    assert format_style(None) == "?"
    assert format_style(0x80000000) == "0x80000000"

from __future__ import annotations

import json
import os
from typing import Any, Dict

from .config import InspectorOptions
from .inspector import TreeSnapshot
from .render_text import format_style
from .tree_builder import WindowNode


def options_to_dict(options: InspectorOptions) -> Dict[str, Any]:
    return {
        "TargetPid": options.target_pid,
        "TargetName": options.target_name,
        "AsciiTree": options.ascii_tree,
        "MaxDepth": -1 if options.max_depth is None else options.max_depth,
        "ChildPidOnly": options.child_pid_only,
        "VisibleOnly": options.visible_only,
        "MinRect": str(options.min_rect) if options.min_rect is not None else None,
        "MaxRect": str(options.max_rect) if options.max_rect is not None else None,
        "ShowStyle": options.show_style,
        "ShowRect": options.show_rect,
        "ClassContains": options.class_contains,
        "TitleContains": options.title_contains,
        "ClassRegex": options.class_regex.pattern if options.class_regex is not None else None,
        "TitleRegex": options.title_regex.pattern if options.title_regex is not None else None,
        "Json": options.json_output,
        "JsonFile": options.json_file,
    }


def node_to_dict(node: WindowNode, options: InspectorOptions) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "hwnd": node.hwnd_hex,
        "hwndDec": node.hwnd,
        "pid": node.pid,
        "tid": node.tid,
        "visible": node.visible,
        "className": node.class_name,
        "title": node.title,
    }
    if options.show_style:
        out["style"] = None if node.style is None else format_style(node.style)
        out["exStyle"] = None if node.ex_style is None else format_style(node.ex_style)
    if options.show_rect:
        rect = node.rect
        out["rect"] = (
            None
            if rect is None
            else {
                "left": rect.left,
                "top": rect.top,
                "right": rect.right,
                "bottom": rect.bottom,
                "width": rect.width,
                "height": rect.height,
            }
        )
        client = node.client
        out["client"] = None if client is None else {"width": client.width, "height": client.height}
    out["match"] = node.match
    out["children"] = [node_to_dict(child, options) for child in node.children]
    return out


def build_document(snapshot: TreeSnapshot, options: InspectorOptions) -> Dict[str, Any]:
    return {
        "generatedAt": snapshot.generated_at,
        "processes": [{"name": proc.name, "pid": proc.pid} for proc in snapshot.processes],
        "options": options_to_dict(options),
        "roots": [node_to_dict(root, options) for root in snapshot.roots],
    }


def dumps_document(document: Dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def write_document(document: Dict[str, Any], path: str) -> None:
    """Write to ``path`` as UTF-8 without BOM."""
    text = dumps_document(document)
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


__all__ = ["options_to_dict", "node_to_dict", "build_document", "dumps_document", "write_document"]

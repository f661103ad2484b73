from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .tree_builder import WindowNode


@dataclass(frozen=True)
class TreeGlyphs:
    tee: str
    corner: str
    pipe: str
    blank: str = "   "


UNICODE_GLYPHS = TreeGlyphs(tee="├─ ", corner="└─ ", pipe="│  ")
ASCII_GLYPHS = TreeGlyphs(tee="+- ", corner="\\- ", pipe="|  ")


def escape_title(text: str) -> str:
    return (text or "").replace("\r", "\\r").replace("\n", "\\n").replace("\t", "\\t")


def format_style(value: Optional[int]) -> str:
    return "?" if value is None else f"0x{value:08X}"


class TextTreeRenderer:
    def __init__(self, ascii_tree: bool = False, show_style: bool = False, show_rect: bool = False) -> None:
        self.glyphs = ASCII_GLYPHS if ascii_tree else UNICODE_GLYPHS
        self.show_style = show_style
        self.show_rect = show_rect

    def render(self, root: WindowNode) -> List[str]:
        lines: List[str] = [self.describe(root)]
        self._render_children(root, "", lines)
        return lines

    def _render_children(self, node: WindowNode, indent: str, lines: List[str]) -> None:
        last_index = len(node.children) - 1
        for index, child in enumerate(node.children):
            is_last = index == last_index
            branch = self.glyphs.corner if is_last else self.glyphs.tee
            lines.append(indent + branch + self.describe(child))
            self._render_children(child, indent + (self.glyphs.blank if is_last else self.glyphs.pipe), lines)

    def describe(self, node: WindowNode) -> str:
        parts = [
            f"{node.hwnd_hex} ({node.hwnd}) | PID {node.pid} TID {node.tid} | Visible {'Y' if node.visible else 'N'}"
        ]
        if self.show_style:
            parts.append(f"Style {format_style(node.style)} ExStyle {format_style(node.ex_style)}")
        if self.show_rect:
            rect = node.rect
            if rect is not None:
                parts.append(
                    f"Rect [{rect.left},{rect.top},{rect.right},{rect.bottom}] ({rect.width}x{rect.height})"
                )
            else:
                parts.append("Rect ?")
            client = node.client
            parts.append(f"Client ({client.width}x{client.height})" if client is not None else "Client ?")
        parts.append(f"Class '{node.class_name or ''}'")
        parts.append(f'Title "{escape_title(node.title)}"')
        return " | ".join(parts)


__all__ = ["TextTreeRenderer", "TreeGlyphs", "UNICODE_GLYPHS", "ASCII_GLYPHS", "escape_title", "format_style"]

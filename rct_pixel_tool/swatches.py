"""
色块 HTML 片段
供 Streamlit 页面以 unsafe_allow_html 方式渲染；名称来自用户上传的调色板，输出前统一转义
"""

import html

from .build_guide import RowSummary


def swatch_html(hex_color: str, label: str) -> str:
    """单个色块 + 标签"""
    return (
        f"<div style='display:flex;align-items:center;gap:8px'>"
        f"<span style='display:inline-block;width:24px;height:24px;border:1px solid #ccc;"
        f"background-color:{html.escape(hex_color)}'></span>"
        f"<code>{html.escape(label)}</code>"
        f"</div>"
    )


def row_strip_html(row) -> str:
    """一行的大尺寸色块，便于对照摆放"""
    cells = "".join(
        f"<span title='Position {x + 1}: {html.escape(color)}' "
        f"style='display:inline-block;width:24px;height:24px;border:1px solid #555;"
        f"background-color:{html.escape(color)}'></span>"
        for x, color in enumerate(row)
    )
    return (
        "<div style='display:flex;flex-wrap:wrap;gap:2px;padding:8px;background:#1f2937;border-radius:6px'>"
        f"{cells}</div>"
    )


def breakdown_html(summary: RowSummary) -> str:
    """一行内各颜色的数量"""
    items = "".join(
        f"<div style='display:flex;align-items:center;gap:6px;background:#374151;border-radius:4px;padding:4px 8px'>"
        f"<span style='display:inline-block;width:16px;height:16px;border:1px solid #9ca3af;"
        f"background-color:{html.escape(e.color)}'></span>"
        f"<code>{html.escape(e.name)}</code><b>×{e.count}</b>"
        f"</div>"
        for e in summary.entries
    )
    return f"<div style='display:flex;flex-wrap:wrap;gap:6px;margin-top:6px'>{items}</div>"

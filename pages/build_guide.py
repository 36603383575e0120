"""
搭建指南页面
按行展示像素画中每个位置的花卉颜色，并统计每行各颜色的数量
"""

import streamlit as st

from rct_pixel_tool import PatternExporter, ResultSlot, summarize
from rct_pixel_tool.swatches import breakdown_html, row_strip_html

BUILD_TIPS = [
    "使用 RCT 景观菜单中的花卉工具",
    "从上到下、从左到右逐行摆放",
    "每个方块代表一格花卉",
    "将鼠标悬停在色块上可查看颜色代码",
]


def main():
    st.title("🎮 RCT 搭建指南 - 逐行")

    slot = st.session_state.get('result_slot')
    result = slot.result if isinstance(slot, ResultSlot) else None
    if result is None or result.is_empty:
        st.info("还没有像素画。请先在「生成像素画」页面转换一张图片。")
        st.page_link("pages/converter.py", label="➡️ 前往：生成像素画", icon="🎨")
        return

    st.markdown("在 RollerCoaster Tycoon 中从上到下逐行摆放花卉，拼出你的像素画！")

    summaries = summarize(result.color_grid, result.palette)
    exporter = PatternExporter(result.palette)

    col1, col2, col3 = st.columns(3)
    with col1:
        st.download_button(
            label="📥 下载指南 (JSON)",
            data=exporter.export_build_guide(summaries, format="json"),
            file_name="build_guide.json",
            mime="application/json",
        )
    with col2:
        st.download_button(
            label="📥 下载指南 (CSV)",
            data=exporter.export_build_guide(summaries, format="csv"),
            file_name="build_guide.csv",
            mime="text/csv",
        )
    with col3:
        st.download_button(
            label="📥 下载指南 (TXT)",
            data=exporter.export_build_guide(summaries, format="txt"),
            file_name="build_guide.txt",
            mime="text/plain",
        )

    total_rows = len(summaries)
    for summary, row in zip(summaries, result.color_grid):
        st.subheader(f"Row {summary.row_number} of {total_rows}")
        st.caption(f"{summary.width} 朵花宽")
        st.markdown(row_strip_html(row), unsafe_allow_html=True)
        with st.expander("显示本行颜色详情"):
            st.markdown(breakdown_html(summary), unsafe_allow_html=True)

    st.subheader("💡 搭建提示")
    st.markdown("\n".join(f"- {tip}" for tip in BUILD_TIPS))


if __name__ == "__main__":
    main()

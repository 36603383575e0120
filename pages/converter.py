"""
生成像素画页面 - 多页面应用
上传图片，转换为 RCT 花卉颜色像素画并导出结果
"""

import logging

import streamlit as st

from rct_pixel_tool import (
    PatternExporter,
    PixelArtError,
    ResultSlot,
    color_statistics,
    convert,
    decode_image,
    get_palette,
    get_palette_names,
    load_palette_file,
)
from rct_pixel_tool.swatches import swatch_html
from rct_pixel_tool.settings import (
    DEFAULT_CELL_SIZE,
    DEFAULT_PALETTE,
    MAX_CELL_SIZE,
    MAX_DIMENSION,
    MIN_CELL_SIZE,
    UPLOAD_TYPES,
)

logger = logging.getLogger(__name__)

# 初始化会话状态（本页使用到的键）
if 'result_slot' not in st.session_state:
    st.session_state.result_slot = ResultSlot()
if 'palette' not in st.session_state:
    st.session_state.palette = get_palette(DEFAULT_PALETTE)


def render_palette_settings() -> None:
    """侧边栏：调色板选择与自定义调色板上传"""
    palette_names = get_palette_names()
    selected = st.selectbox(
        "调色板",
        palette_names,
        index=palette_names.index(DEFAULT_PALETTE) if DEFAULT_PALETTE in palette_names else 0,
        key="palette_select",
    )
    palette = get_palette(selected)

    with st.expander("自定义调色板"):
        palette_file = st.file_uploader(
            "上传调色板 (JSON / CSV)",
            type=['json', 'csv'],
            help="JSON：颜色列表或 {color, name} 对象列表；CSV：color 列必填，name 列可选",
            key="palette_file",
        )
        if palette_file is not None:
            try:
                palette = load_palette_file(palette_file)
                st.success(f"已加载 {len(palette)} 种颜色")
            except PixelArtError as e:
                st.error(f"调色板无效: {e}")

    if palette.rejected:
        with st.expander(f"⚠️ 已拒绝 {len(palette.rejected)} 个无效颜色"):
            st.caption("以下条目不是有效的 6 位十六进制颜色，转换时不会使用：")
            st.code("\n".join(f"#{i}: {value}" for i, value in palette.rejected))

    st.session_state.palette = palette


def render_color_statistics(result, palette) -> None:
    """整图颜色统计（前10种颜色）"""
    color_stats = color_statistics(result.color_grid)
    if not color_stats:
        return

    total = sum(color_stats.values())
    stats_rows = []
    for color, count in list(color_stats.items())[:10]:
        percent = f"{count / total * 100:.1f}%"
        stats_rows.append(
            f"<tr><td>{swatch_html(color, palette.display_name(color))}</td><td>{count}</td><td>{percent}</td></tr>"
        )
    table_html = (
        "<table style='width:100%;border-collapse:collapse'>"
        "<thead><tr>"
        "<th style='text-align:left;padding:6px;border-bottom:1px solid #ddd'>颜色</th>"
        "<th style='text-align:left;padding:6px;border-bottom:1px solid #ddd'>数量</th>"
        "<th style='text-align:left;padding:6px;border-bottom:1px solid #ddd'>百分比</th>"
        "</tr></thead>"
        f"<tbody>{''.join(stats_rows)}</tbody>"
        "</table>"
    )
    st.markdown(table_html, unsafe_allow_html=True)

    exporter = PatternExporter(palette)
    col1, col2, col3 = st.columns(3)
    with col1:
        st.download_button(
            label="📥 下载统计 (JSON)",
            data=exporter.export_color_statistics(color_stats, format="json"),
            file_name="color_statistics.json",
            mime="application/json",
        )
    with col2:
        st.download_button(
            label="📥 下载统计 (CSV)",
            data=exporter.export_color_statistics(color_stats, format="csv"),
            file_name="color_statistics.csv",
            mime="text/csv",
        )
    with col3:
        st.download_button(
            label="📥 下载统计 (TXT)",
            data=exporter.export_color_statistics(color_stats, format="txt"),
            file_name="color_statistics.txt",
            mime="text/plain",
        )


def main():
    st.title("🎨 生成像素画")
    st.markdown("上传照片，用 RollerCoaster Tycoon 的花卉颜色把它变成像素画！")

    slot: ResultSlot = st.session_state.result_slot

    with st.sidebar:
        st.header("全局设置")
        render_palette_settings()

        st.divider()
        st.header("像素画设置")
        cell_size = st.slider(
            "像素尺寸 (px)", MIN_CELL_SIZE, MAX_CELL_SIZE, DEFAULT_CELL_SIZE,
            help="每个花卉单元的像素边长。值越小细节越丰富（Fine Detail），值越大像素越粗（Chunky Pixels）。",
            key="cell_size_slider",
        )

    palette = st.session_state.palette

    col1, col2 = st.columns([1, 1])

    with col1:
        st.header("📤 上传图片")
        uploaded_file = st.file_uploader(
            "选择图片文件",
            type=UPLOAD_TYPES,
            help="支持 PNG, JPG, JPEG, GIF, BMP, WebP 格式",
        )

        if uploaded_file is not None:
            st.image(uploaded_file, caption="原始图片", use_container_width=True)

            if st.button("🔄 转换为 RCT 像素画", type="primary"):
                token = slot.begin()
                with st.spinner("正在生成像素画..."):
                    try:
                        source = decode_image(uploaded_file.getvalue())
                        result = convert(source, cell_size, palette, max_dimension=MAX_DIMENSION)
                    except PixelArtError as e:
                        slot.fail(token, e)
                        logger.warning("Conversion failed: %s", e)
                        st.error(f"处理图片时出错: {e}")
                    else:
                        if slot.publish(token, result):
                            if result.is_empty:
                                st.warning("像素尺寸大于渲染图尺寸，结果为空。请减小像素尺寸。")
                            else:
                                st.success("像素画生成完成！")

    result = slot.result

    with col2:
        st.header("📥 处理结果")
        if result is not None and not result.is_empty:
            st.image(result.image, caption="RCT 花卉像素画", use_container_width=True)
            exporter = PatternExporter(result.palette)
            st.download_button(
                label="📥 下载 PNG",
                data=exporter.to_png_bytes(result),
                file_name=exporter.file_name,
                mime="image/png",
            )
            st.page_link("pages/build_guide.py", label="查看搭建指南", icon="🎮")
        else:
            st.info("请先上传并处理图片")

    if result is not None and not result.is_empty:
        st.header("📊 图案信息")
        grid = result.grid
        m1, m2, m3 = st.columns(3)
        with m1:
            st.metric("渲染尺寸", f"{grid.render_width} × {grid.render_height}")
        with m2:
            st.metric("花卉网格", f"{grid.grid_width} × {grid.grid_height}")
        with m3:
            st.metric("花卉总数", grid.grid_width * grid.grid_height)

        st.subheader("🎨 颜色统计")
        render_color_statistics(result, result.palette)


if __name__ == "__main__":
    main()

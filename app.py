"""
RCT Flower Pixel Art Tool - Streamlit Web Interface
RCT 花卉像素画工具 - 欢迎页（多页面入口）
"""

import logging

import streamlit as st

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# 页面配置集中于主入口，子页面不重复设置
st.set_page_config(
    page_title="RCT 花卉像素画",
    page_icon="🌺",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.title("🌺 RCT 花卉像素画工具")
st.markdown("用 RollerCoaster Tycoon 的花卉颜色把照片变成像素画！请选择左侧页面开始使用。")

st.markdown(
    """
    - 生成像素画：上传图片，调整像素尺寸并转换
    - 搭建指南：按行查看每个位置需要放置的花卉颜色
    """
)

# 快速链接（Streamlit >=1.25 支持）
try:
    st.page_link("pages/converter.py", label="➡️ 前往：生成像素画", icon="🎨")
    st.page_link("pages/build_guide.py", label="➡️ 前往：搭建指南", icon="🎮")
except Exception:
    st.info("如果未显示页面链接，请使用左侧页面导航进入对应页面。")

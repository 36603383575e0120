"""
全局配置常量
"""

# 渲染（像素化之前）图像的最长边
MAX_DIMENSION = 400

# 单元尺寸滑块范围（像素）
MIN_CELL_SIZE = 4
MAX_CELL_SIZE = 20
DEFAULT_CELL_SIZE = 8

# 采样点越界时使用的颜色
FALLBACK_COLOR = "#000000"

DEFAULT_PALETTE = "rct_flower"

DOWNLOAD_FILE_NAME = "rct-flower-pixel-art.png"

# 支持上传的图片格式
UPLOAD_TYPES = ["png", "jpg", "jpeg", "gif", "bmp", "webp"]

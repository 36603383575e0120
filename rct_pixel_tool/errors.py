"""
异常定义
像素画转换流程中使用的错误类型
"""


class PixelArtError(Exception):
    """像素画工具的基础异常"""


class InvalidInput(PixelArtError, ValueError):
    """调用方传入的参数或图像无效（单元尺寸非正数、无法解码的文件等）"""


class DegenerateGrid(PixelArtError):
    """计算出的网格面积为 0；仅在调用方要求非空结果时抛出"""

    def __init__(self, render_size, grid_size):
        self.render_size = render_size
        self.grid_size = grid_size
        super().__init__(
            f"Grid is empty: render size {render_size[0]}x{render_size[1]}, "
            f"grid size {grid_size[0]}x{grid_size[1]}"
        )


class MalformedPaletteEntry(PixelArtError, ValueError):
    """调色板中的颜色无法规范化为 6 位十六进制"""

    def __init__(self, index, value, reason: str = "not a 6-digit hex color"):
        self.index = index
        self.value = value
        self.reason = reason
        if index is None:
            message = f"Palette {value!r}: {reason}"
        else:
            message = f"Palette entry #{index} {value!r}: {reason}"
        super().__init__(message)

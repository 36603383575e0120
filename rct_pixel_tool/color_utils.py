"""
颜色工具类
提供颜色转换、距离计算和调色板匹配功能
"""

import math
import re
from typing import Dict, Tuple, Union

import numpy as np

RGB = Tuple[int, int, int]
ColorLike = Union[str, RGB]

_HEX_RE = re.compile(r"^[0-9a-fA-F]{6}$")


class ColorUtils:
    """颜色处理工具类"""

    def __init__(self):
        self._color_cache: Dict[tuple, object] = {}  # 颜色匹配缓存

    @staticmethod
    def normalize_hex(hex_color: str) -> str:
        """
        规范化十六进制颜色为小写 '#rrggbb'

        只接受恰好 6 位十六进制数字（'#' 可选），简写或多余位数均视为无效。
        """
        if not isinstance(hex_color, str):
            raise ValueError(f"Invalid hex color: {hex_color!r}")
        digits = hex_color.strip().lstrip('#')
        if not _HEX_RE.match(digits):
            raise ValueError(f"Invalid hex color: {hex_color!r}")
        return f"#{digits.lower()}"

    @staticmethod
    def hex_to_rgb(hex_color: str) -> RGB:
        """将十六进制颜色转换为RGB"""
        digits = ColorUtils.normalize_hex(hex_color)[1:]
        return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))

    @staticmethod
    def rgb_to_hex(r: int, g: int, b: int) -> str:
        """将RGB转换为 '#rrggbb'"""
        for v in (r, g, b):
            if not 0 <= int(v) <= 255:
                raise ValueError(f"RGB component out of range: {v}")
        return f"#{int(r):02x}{int(g):02x}{int(b):02x}"

    @staticmethod
    def to_rgb(color: ColorLike) -> RGB:
        if isinstance(color, str):
            return ColorUtils.hex_to_rgb(color)
        r, g, b = color[:3]
        return int(r), int(g), int(b)

    @staticmethod
    def color_distance(color1: ColorLike, color2: ColorLike) -> float:
        """
        计算两个颜色在RGB空间中的欧几里得距离

        不做任何感知加权。分量先转换为 Python int，避免 uint8 溢出。
        """
        r1, g1, b1 = ColorUtils.to_rgb(color1)
        r2, g2, b2 = ColorUtils.to_rgb(color2)
        return math.sqrt((r1 - r2) ** 2 + (g1 - g2) ** 2 + (b1 - b2) ** 2)

    def find_closest_palette_color(self, target: ColorLike, palette=None):
        """
        在调色板中找到最接近的颜色

        按调色板顺序扫描，距离相同时保留最先出现的条目。

        Args:
            target: 目标颜色（十六进制字符串或RGB元组）
            palette: Palette 对象或调色板名称，默认为内置调色板

        Returns:
            最接近的 PaletteEntry
        """
        palette = as_palette(palette)
        target_rgb = self.to_rgb(target)

        # 检查缓存
        cache_key = (target_rgb, palette)
        if cache_key in self._color_cache:
            return self._color_cache[cache_key]

        closest = self.scan_palette(target_rgb, palette)

        # 缓存结果
        self._color_cache[cache_key] = closest
        return closest

    @staticmethod
    def scan_palette(target_rgb: RGB, palette):
        """逐个扫描调色板条目（不使用缓存），距离相同时保留最先出现的条目"""
        closest = palette.entries[0]
        min_distance = ColorUtils.color_distance(target_rgb, closest.rgb)
        for entry in palette.entries[1:]:
            distance = ColorUtils.color_distance(target_rgb, entry.rgb)
            if distance < min_distance:
                min_distance = distance
                closest = entry
        return closest

    @staticmethod
    def closest_indices(rgb_array: np.ndarray, palette=None) -> np.ndarray:
        """
        批量查找最接近的调色板颜色

        Args:
            rgb_array: 形状为 (..., 3) 或 (..., 4) 的颜色数组，多余通道被忽略
            palette: Palette 对象或调色板名称

        Returns:
            与输入前缀形状相同的调色板索引数组
        """
        palette = as_palette(palette)
        samples = np.asarray(rgb_array)[..., :3].astype(np.int32)
        diff = samples[..., np.newaxis, :] - palette.rgb_array
        # 比较平方距离即可；argmin 返回第一个最小值，与逐个扫描的平局规则一致
        squared = np.einsum('...k,...k->...', diff, diff)
        return np.argmin(squared, axis=-1)

    def clear_cache(self):
        """清空颜色匹配缓存"""
        self._color_cache.clear()


def as_palette(palette):
    from .palettes import Palette, get_palette

    if palette is None:
        return get_palette()
    if isinstance(palette, Palette):
        return palette
    return get_palette(palette)


def distance(a: ColorLike, b: ColorLike) -> float:
    """两个颜色之间的欧几里得RGB距离"""
    return ColorUtils.color_distance(a, b)


def resolve(color: ColorLike, palette=None) -> str:
    """返回调色板中与 color 最接近的颜色（'#rrggbb'）"""
    return ColorUtils.scan_palette(ColorUtils.to_rgb(color), as_palette(palette)).color


def resolve_many(rgb_array: np.ndarray, palette=None) -> np.ndarray:
    """批量版本的 resolve，返回由 '#rrggbb' 字符串组成的对象数组"""
    palette = as_palette(palette)
    indices = ColorUtils.closest_indices(rgb_array, palette)
    return np.asarray(palette.colors, dtype=object)[indices]

"""
Export utilities for RCT Flower Pixel Art Tool
像素画导出功能
"""

import csv
import io
import json
from typing import Dict, Sequence

from .build_guide import RowSummary
from .color_utils import as_palette
from .errors import DegenerateGrid
from .image_processor import ConversionResult
from .settings import DOWNLOAD_FILE_NAME

EXPORT_FORMATS = ("json", "csv", "txt")


class PatternExporter:
    """图案导出器"""

    file_name = DOWNLOAD_FILE_NAME

    def __init__(self, palette=None):
        """
        初始化导出器

        Args:
            palette: Palette 对象或调色板名称
        """
        self.palette = as_palette(palette)

    def to_png_bytes(self, result: ConversionResult) -> bytes:
        """将像素画编码为 PNG"""
        if result.is_empty:
            raise DegenerateGrid(
                (result.grid.render_width, result.grid.render_height),
                (result.grid.grid_width, result.grid.grid_height),
            )
        buffer = io.BytesIO()
        result.image.save(buffer, format='PNG')
        return buffer.getvalue()

    def export_build_guide(self, summaries: Sequence[RowSummary], format: str = "json") -> str:
        """
        导出逐行搭建指南

        Args:
            summaries: summarize() 的结果
            format: 导出格式 ("json", "csv", "txt")

        Returns:
            导出的字符串数据
        """
        if format == "json":
            return self._export_json_guide(summaries)
        elif format == "csv":
            return self._export_csv_guide(summaries)
        elif format == "txt":
            return self._export_txt_guide(summaries)
        else:
            raise ValueError(f"Unsupported export format: {format}")

    def export_color_statistics(self, color_stats: Dict[str, int], format: str = "json") -> str:
        """
        导出整图颜色统计

        Args:
            color_stats: color_statistics() 的结果
            format: 导出格式 ("json", "csv", "txt")
        """
        if format == "json":
            return self._export_json_stats(color_stats)
        elif format == "csv":
            return self._export_csv_stats(color_stats)
        elif format == "txt":
            return self._export_txt_stats(color_stats)
        else:
            raise ValueError(f"Unsupported export format: {format}")

    def _export_json_guide(self, summaries: Sequence[RowSummary]) -> str:
        export_data = {
            "palette": self.palette.palette_id,
            "rows": [
                {
                    "row": s.row_number,
                    "width": s.width,
                    "colors": [
                        {"hex": e.color, "name": e.name, "count": e.count}
                        for e in s.entries
                    ],
                }
                for s in summaries
            ],
        }
        return json.dumps(export_data, ensure_ascii=False, indent=2)

    def _export_csv_guide(self, summaries: Sequence[RowSummary]) -> str:
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(["row", "hex", "name", "count"])
        for s in summaries:
            for e in s.entries:
                writer.writerow([s.row_number, e.color, e.name, e.count])
        return output.getvalue()

    def _export_txt_guide(self, summaries: Sequence[RowSummary]) -> str:
        lines = [
            f"RCT Build Guide - {self.palette.palette_id}",
            "=" * 50,
            f"Rows: {len(summaries)}",
            "",
        ]
        for s in summaries:
            lines.append(f"Row {s.row_number} of {len(summaries)} ({s.width} flowers wide)")
            for e in s.entries:
                label = e.name if e.name == e.color else f"{e.name} ({e.color})"
                lines.append(f"  {label:24s} x{e.count}")
        return "\n".join(lines)

    def _export_json_stats(self, color_stats: Dict[str, int]) -> str:
        total = sum(color_stats.values())
        export_data = {
            "palette": self.palette.palette_id,
            "total_cells": total,
            "unique_colors": len(color_stats),
            "colors": [
                {
                    "hex": color,
                    "name": self.palette.display_name(color),
                    "count": count,
                    "percentage": round(count / total * 100, 2),
                }
                for color, count in color_stats.items()
            ],
        }
        return json.dumps(export_data, ensure_ascii=False, indent=2)

    def _export_csv_stats(self, color_stats: Dict[str, int]) -> str:
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(["hex", "name", "count", "percentage"])

        total = sum(color_stats.values())
        for color, count in color_stats.items():
            percentage = round(count / total * 100, 2)
            writer.writerow([color, self.palette.display_name(color), count, f"{percentage}%"])

        return output.getvalue()

    def _export_txt_stats(self, color_stats: Dict[str, int]) -> str:
        total = sum(color_stats.values())
        lines = [
            f"Color Statistics - {self.palette.palette_id}",
            "=" * 50,
            f"Total cells: {total}",
            f"Unique colors: {len(color_stats)}",
            "",
        ]
        for i, (color, count) in enumerate(color_stats.items(), 1):
            percentage = round(count / total * 100, 2)
            lines.append(
                f"{i:3d}. {self.palette.display_name(color):16s} {color:8s} {count:6d} ({percentage:5.1f}%)"
            )
        return "\n".join(lines)

"""Text rendering of sheet layouts for terminal output."""

from __future__ import annotations

from chests.infrastructure.bin_packing import PackingResult, PlacedPiece, SheetLayout

__all__ = ["CutDiagramRenderer"]


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def _thickness_desc(layout: SheetLayout) -> str:
    thickness = layout.sheet.thickness
    return f"{thickness.nominal} {thickness.material.value} ({thickness.actual:.3f})"


class CutDiagramRenderer:
    """Renders sheet layouts as ASCII diagrams and waste summaries."""

    def render_ascii(
        self,
        layout: SheetLayout,
        width: int = 80,
        total_sheets: int = 1,
    ) -> str:
        """Generate an ASCII cut diagram for a single sheet.

        Args:
            layout: Sheet layout with placed pieces.
            width: Terminal width in characters (default 80).
            total_sheets: Number of sheets in this thickness group.

        Returns:
            ASCII string representation of the layout.
        """
        sheet = layout.sheet

        # Reserve 2 chars for borders
        usable_width = width - 2
        scale_x = usable_width / sheet.width

        # Characters are roughly twice as tall as they are wide
        grid_height = max(int(usable_width * sheet.height / sheet.width * 0.5), 10)
        scale_y = grid_height / sheet.height

        grid = [[" " for _ in range(usable_width)] for _ in range(grid_height)]
        for placement in layout.placements:
            self._draw_piece_ascii(grid, placement, scale_x, scale_y)

        lines = [
            f"Sheet {layout.sheet_index + 1} of {total_sheets} - "
            f"{sheet.label} {_thickness_desc(layout)} - "
            f"{layout.waste_percentage:.1f}% waste",
            "+" + "-" * usable_width + "+",
        ]
        lines.extend("|" + "".join(row) + "|" for row in grid)
        lines.append("+" + "-" * usable_width + "+")
        return "\n".join(lines)

    def _draw_piece_ascii(
        self,
        grid: list[list[str]],
        placement: PlacedPiece,
        scale_x: float,
        scale_y: float,
    ) -> None:
        """Draw a single piece outline and its label onto the grid."""
        grid_height = len(grid)
        grid_width = len(grid[0]) if grid else 0

        x1 = max(0, min(int(placement.x * scale_x), grid_width - 1))
        x2 = max(0, min(int(placement.right_edge * scale_x), grid_width - 1))
        y1 = max(0, min(int(placement.y * scale_y), grid_height - 1))
        y2 = max(0, min(int(placement.top_edge * scale_y), grid_height - 1))

        for x in range(x1, x2 + 1):
            grid[y1][x] = "-"
            grid[y2][x] = "-"
        for y in range(y1, y2 + 1):
            grid[y][x1] = "|"
            grid[y][x2] = "|"
        for y, x in ((y1, x1), (y1, x2), (y2, x1), (y2, x2)):
            grid[y][x] = "+"

        piece = placement.piece
        dims = f"{piece.width:.1f}x{piece.height:.1f}"
        if placement.rotated:
            dims += "R"

        for row, text in ((y1 + 1, piece.label), (y1 + 2, dims)):
            if row >= y2:
                break
            text = text[: max(x2 - x1 - 1, 0)]
            for i, char in enumerate(text):
                grid[row][x1 + 1 + i] = char

    def render_all_ascii(
        self,
        result: PackingResult,
        width: int = 80,
    ) -> str:
        """Generate ASCII cut diagrams for every sheet of every thickness.

        Args:
            result: Complete packing result.
            width: Terminal width in characters.

        Returns:
            Combined ASCII string with all sheets and a summary.
        """
        if not result.layouts and not result.unplaced:
            return "No sheets to display."

        parts: list[str] = []
        for layouts in result.layouts_by_thickness.values():
            for layout in layouts:
                parts.append(self.render_ascii(layout, width, len(layouts)))
                parts.append("")

        parts.append("=" * width)
        parts.append(
            f"SUMMARY: {_plural(result.total_sheets, 'sheet')}, "
            f"{result.total_waste_percentage:.1f}% total waste"
        )
        for thickness_id, layouts in result.layouts_by_thickness.items():
            parts.append(f"  {thickness_id}: {_plural(len(layouts), 'sheet')}")
        parts.extend(self._unplaced_lines(result))

        return "\n".join(parts)

    def render_waste_summary(self, result: PackingResult) -> str:
        """Text summary of sheet usage and waste per thickness and per sheet."""
        lines: list[str] = [
            "CUT OPTIMIZATION SUMMARY",
            "=" * 40,
            f"Total Sheets: {result.total_sheets}",
            f"Total Waste: {result.total_waste_percentage:.1f}%",
            "",
            "Sheets by Thickness:",
        ]
        for thickness_id, layouts in result.layouts_by_thickness.items():
            lines.append(f"  {thickness_id}: {_plural(len(layouts), 'sheet')}")

        lines.append("")
        lines.append("Per-Sheet Details:")
        for thickness_id, layouts in result.layouts_by_thickness.items():
            for layout in layouts:
                lines.append(
                    f"  {thickness_id} sheet {layout.sheet_index + 1}: "
                    f"{_plural(layout.piece_count, 'piece')}, "
                    f"{layout.waste_percentage:.1f}% waste"
                )

        lines.extend(self._unplaced_lines(result))
        return "\n".join(lines)

    def _unplaced_lines(self, result: PackingResult) -> list[str]:
        if not result.unplaced:
            return []
        lines = ["", f"Unplaced Pieces: {len(result.unplaced)}"]
        for piece in result.unplaced:
            reason = (
                "does not fit on any sheet"
                if piece.width > 0 and piece.height > 0
                else "has no positive size"
            )
            lines.append(
                f"  {piece.label}: {piece.width:.3f} x {piece.height:.3f} "
                f"({piece.thickness.id}) {reason}"
            )
        return lines

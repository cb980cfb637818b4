"""Output formatters for chest plans and cut lists."""

from __future__ import annotations

import json
from typing import Any

from chests.application.dtos import ChestReport
from chests.domain import CutPiece, DrawerBoxDimensions, Unit
from chests.domain.services import group_by_thickness

__all__ = ["CutListFormatter", "JsonExporter", "PlanFormatter"]


def _area_note(total_area: float, unit: Unit) -> str:
    if unit == Unit.CM:
        return f"({total_area / 10000:.2f} sq m)"
    return f"({total_area / 144:.2f} sq ft)"


class CutListFormatter:
    """Formats cut lists as tables, one section per material thickness."""

    def format(self, cut_list: list[CutPiece], unit: Unit = Unit.INCHES) -> str:
        """Format cut list as a table grouped by thickness."""
        if not cut_list:
            return "No pieces in cut list."

        area_header = "Area (sq cm)" if unit == Unit.CM else "Area (sq in)"
        lines = [
            "CUT LIST",
            "=" * 70,
        ]

        total_area = 0.0
        for pieces in group_by_thickness(cut_list).values():
            thickness = pieces[0].thickness
            lines.append("")
            lines.append(f"{thickness.nominal} ({thickness.actual:.3f} actual)")
            lines.append(
                f"{'Piece':<28} {'Width':<10} {'Height':<10} {'Qty':<5} {area_header}"
            )
            lines.append("-" * 70)
            for piece in pieces:
                lines.append(
                    f"{piece.label:<28} {piece.width:<10.3f} {piece.height:<10.3f} "
                    f"{piece.quantity:<5} {piece.total_area:.1f}"
                )
                total_area += piece.total_area

        lines.append("-" * 70)
        lines.append(f"{'TOTAL':<28} {'':<10} {'':<10} {'':<5} {total_area:.1f}")
        lines.append(f"{'':>50} {_area_note(total_area, unit)}")

        return "\n".join(lines)


class PlanFormatter:
    """Formats the carcass and drawer box plan with diagnostics."""

    def format(self, report: ChestReport) -> str:
        config = report.config
        carcass = report.carcass
        u = config.unit.value

        lines = [
            f"CHEST PLAN: {config.name}",
            "=" * 70,
            f"Unit: {u}    Drawer style: {config.drawer_style.value}",
            "",
            "CARCASS",
            "-" * 70,
            f"{'':<10} {'Outer':<12} {'Inner':<12}",
            f"{'Width':<10} {carcass.outer_width:<12.3f} {carcass.inner_width:<12.3f}",
            f"{'Height':<10} {carcass.outer_height:<12.3f} {carcass.inner_height:<12.3f}",
            f"{'Depth':<10} {carcass.outer_depth:<12.3f} {carcass.inner_depth:<12.3f}",
            "",
            f"Slides: {config.slide_spec.length:g} {u} "
            f"(recommended for this depth: {report.recommended_slide_length:g} {u})",
        ]

        if report.rails_recommended and not config.horizontal_rails.enabled:
            lines.append("Horizontal rails are recommended for a chest of this size.")

        for column_id, space in report.dead_space.items():
            lines.append(f"Column {column_id} has {space:.3f} {u} of unused height.")

        for violation in carcass.constraint_violations:
            lines.append(
                f"WARNING: outer {violation.dimension} {violation.actual:.3f} exceeds "
                f"maximum {violation.max:.3f} by {violation.excess:.3f}"
            )

        lines.append("")
        lines.append("DRAWER BOXES")
        lines.append("-" * 70)
        lines.append(
            f"{'Drawer':<22} {'Box W x H x D':<26} {'Face W x H':<18}"
        )
        for box in report.drawer_boxes:
            lines.append(self._format_box(box))

        if report.drawer_warnings:
            lines.append("")
            lines.append("WARNINGS")
            lines.append("-" * 70)
            for box, warning in report.drawer_warnings:
                lines.append(f"{box.row_id} [{warning.type.value}]: {warning.message}")

        return "\n".join(lines)

    def _format_box(self, box: DrawerBoxDimensions) -> str:
        dims = (
            f"{box.box_outer_width:.3f} x {box.box_outer_height:.3f} x "
            f"{box.box_outer_depth:.3f}"
        )
        face = f"{box.face_width:.3f} x {box.face_height:.3f}"
        return f"{box.row_id:<22} {dims:<26} {face:<18}"


class JsonExporter:
    """Exports a chest report as JSON."""

    def export(self, report: ChestReport) -> str:
        """Export the report as a JSON string."""
        if not report.is_valid:
            return json.dumps({"errors": report.errors}, indent=2)

        carcass = report.carcass
        data: dict[str, Any] = {
            "name": report.config.name,
            "unit": report.config.unit.value,
            "carcass": {
                "outer": carcass.outer,
                "inner": {
                    "width": carcass.inner_width,
                    "height": carcass.inner_height,
                    "depth": carcass.inner_depth,
                },
                "constraint_violations": [
                    {"dimension": v.dimension, "actual": v.actual, "max": v.max}
                    for v in carcass.constraint_violations
                ],
            },
            "drawer_boxes": [self._format_box(box) for box in report.drawer_boxes],
            "cut_list": [self._format_cut_piece(p) for p in report.cut_list],
            "rails_recommended": report.rails_recommended,
            "recommended_slide_length": report.recommended_slide_length,
        }

        packing = report.packing_result
        if packing is not None:
            data["packing"] = {
                "total_sheets": packing.total_sheets,
                "total_waste_percentage": packing.total_waste_percentage,
                "sheets_by_thickness": {
                    thickness_id: len(layouts)
                    for thickness_id, layouts in packing.layouts_by_thickness.items()
                },
                "unplaced": [p.id for p in packing.unplaced],
            }

        return json.dumps(data, indent=2)

    def _format_box(self, box: DrawerBoxDimensions) -> dict[str, Any]:
        return {
            "column_id": box.column_id,
            "row_id": box.row_id,
            "box": [box.box_outer_width, box.box_outer_height, box.box_outer_depth],
            "face": [box.face_width, box.face_height],
            "warnings": [
                {"type": w.type.value, "message": w.message} for w in box.warnings
            ],
        }

    def _format_cut_piece(self, piece: CutPiece) -> dict[str, Any]:
        return {
            "id": piece.id,
            "label": piece.label,
            "width": piece.width,
            "height": piece.height,
            "quantity": piece.quantity,
            "thickness_id": piece.thickness.id,
            "thickness": piece.thickness.actual,
        }

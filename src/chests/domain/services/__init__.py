"""Domain services for chest dimensioning and cut lists.

This package contains the pure calculation pipeline:

- units / grid_units: unit conversion and modular-grid opening sizing
- carcass: carcass dimensions, constraint checks and carcass panels
- drawer: drawer box and face sizing per construction method
- slides: standard slide length selection
- cut_list: merged cut list and grouping by material thickness
- chest_builder: default configuration, grid re-sizing, unit switching
"""

from .carcass import (
    carcass_pieces,
    check_constraint_violations,
    column_dead_space,
    column_inner_height,
    compute_carcass,
    should_recommend_rails,
)
from .chest_builder import (
    convert_config_units,
    create_default_config,
    grid_opening_height,
    grid_opening_width,
    make_column,
    make_row,
    recompute_grid_openings,
)
from .cut_list import (
    aggregate_cut_pieces,
    all_cut_pieces,
    group_by_thickness,
    merge_pieces,
    unique_thicknesses,
)
from .drawer import (
    compute_all_drawer_boxes,
    compute_drawer_box,
    compute_face_dimensions,
    drawer_pieces,
    resolve_drawer_materials,
)
from .grid_units import (
    bin_height_mm,
    grid_units_for,
    grid_units_to_length,
    max_bin_units,
    opening_height_for_bin_units,
    opening_width_for_grid_units,
)
from .slides import available_slide_lengths, recommend_slide_length
from .units import convert, round_up_to_nearest_eighth, to_cm, to_inches, to_mm

__all__ = [
    # Carcass
    "carcass_pieces",
    "check_constraint_violations",
    "column_dead_space",
    "column_inner_height",
    "compute_carcass",
    "should_recommend_rails",
    # Configuration building
    "convert_config_units",
    "create_default_config",
    "grid_opening_height",
    "grid_opening_width",
    "make_column",
    "make_row",
    "recompute_grid_openings",
    # Cut list
    "aggregate_cut_pieces",
    "all_cut_pieces",
    "group_by_thickness",
    "merge_pieces",
    "unique_thicknesses",
    # Drawers
    "compute_all_drawer_boxes",
    "compute_drawer_box",
    "compute_face_dimensions",
    "drawer_pieces",
    "resolve_drawer_materials",
    # Grid units
    "bin_height_mm",
    "grid_units_for",
    "grid_units_to_length",
    "max_bin_units",
    "opening_height_for_bin_units",
    "opening_width_for_grid_units",
    # Slides
    "available_slide_lengths",
    "recommend_slide_length",
    # Units
    "convert",
    "round_up_to_nearest_eighth",
    "to_cm",
    "to_inches",
    "to_mm",
]

"""src/popyramid/features/__init__.py"""

from .age_groups import (
    PRESET_GROUPS,
    aggregate_by_age_groups,
    create_age_range_config,
    generate_range_label,
    parse_range_spec,
    preset_ranges,
)

__all__ = [
    "PRESET_GROUPS",
    "aggregate_by_age_groups",
    "create_age_range_config",
    "generate_range_label",
    "parse_range_spec",
    "preset_ranges",
]

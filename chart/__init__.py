"""
Chart package -- scales, sort state and rendering for the bar chart.

    from chart import ChartState, SortOrder, build_layout
"""

from chart.layout import BarLayout, ChartLayout, TickLayout, build_layout
from chart.scales import BandScale, LinearScale, build_scales
from chart.state import ChartState, SortOrder, TransitionPlan, sort_records

__all__ = [
    "BandScale",
    "LinearScale",
    "build_scales",
    "ChartState",
    "SortOrder",
    "TransitionPlan",
    "sort_records",
    "BarLayout",
    "ChartLayout",
    "TickLayout",
    "build_layout",
]

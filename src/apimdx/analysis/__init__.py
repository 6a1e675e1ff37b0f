"""Type-expression analysis used to expand inline object types."""

from apimdx.analysis.properties import analyze_type_properties, type_display
from apimdx.analysis.type_analyzer import TypeAnalyzer, split_top_level

__all__ = [
    "TypeAnalyzer",
    "analyze_type_properties",
    "split_top_level",
    "type_display",
]

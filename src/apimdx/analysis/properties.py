"""Turn type analyses into display-ready property trees."""

from __future__ import annotations

from apimdx.analysis.type_analyzer import TypeAnalyzer
from apimdx.types import PropertyInfo, TypeAnalysis, TypeKind


def type_display(analysis: TypeAnalysis) -> str:
    """Render an analysis back to a compact type string."""
    match analysis.kind:
        case TypeKind.PRIMITIVE:
            return analysis.name or "any"
        case TypeKind.ARRAY:
            element = analysis.element_type
            inner = type_display(element) if element is not None else "any"
            if element is not None and element.kind in (TypeKind.UNION, TypeKind.INTERSECTION):
                inner = f"({inner})"
            return f"{inner}[]"
        case TypeKind.UNION:
            return " | ".join(type_display(t) for t in analysis.union_types)
        case TypeKind.INTERSECTION:
            return " & ".join(type_display(t) for t in analysis.intersection_types)
        case TypeKind.GENERIC:
            return f"{analysis.base_type}<{', '.join(analysis.type_parameters)}>"
        case TypeKind.OBJECT_LITERAL:
            return "object"
        case _:
            return analysis.name or "any"


def analyze_type_properties(
    type_text: str,
    analyzer: TypeAnalyzer,
    description: str = "",
) -> PropertyInfo:
    """Describe a property's type, expanding inline object literals.

    An object literal with members becomes type ``object`` whose members
    are listed, recursively, in ``nested_properties``.
    """
    if not type_text.strip():
        return PropertyInfo(type="any", description=description)

    analysis = analyzer.analyze(type_text)
    info = _info_from_analysis(analysis)
    return info.model_copy(update={"description": description})


def _info_from_analysis(analysis: TypeAnalysis, name: str = "", required: bool = True) -> PropertyInfo:
    if analysis.kind == TypeKind.OBJECT_LITERAL and analysis.properties:
        return PropertyInfo(
            name=name,
            type="object",
            required=required,
            nested_properties=[
                _info_from_analysis(prop.type, prop.name, not prop.optional)
                for prop in analysis.properties
            ],
        )
    return PropertyInfo(name=name, type=type_display(analysis), required=required)

"""Shared Pydantic models for apimdx."""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from apimdx.nodes import CodeReference

# ── Enums ──


class ApiItemKind(StrEnum):
    MODEL = "Model"
    PACKAGE = "Package"
    ENTRY_POINT = "EntryPoint"
    NAMESPACE = "Namespace"
    CLASS = "Class"
    INTERFACE = "Interface"
    CONSTRUCTOR = "Constructor"
    METHOD = "Method"
    PROPERTY = "Property"
    PROPERTY_SIGNATURE = "PropertySignature"
    FUNCTION = "Function"
    VARIABLE = "Variable"
    TYPE_ALIAS = "TypeAlias"
    ENUM = "Enum"
    ENUM_MEMBER = "EnumMember"


class TypeKind(StrEnum):
    PRIMITIVE = "primitive"
    ARRAY = "array"
    UNION = "union"
    INTERSECTION = "intersection"
    GENERIC = "generic"
    OBJECT_LITERAL = "object-literal"
    UNKNOWN = "unknown"


# ── API model ──


_SCOPE_ROOTS = {ApiItemKind.MODEL, ApiItemKind.PACKAGE}


class ApiItem(BaseModel):
    """A documented item of the upstream API model.

    ``canonical_reference`` is the item's identity; it keys the
    reference-resolution cache together with the raw reference text.
    """

    model_config = ConfigDict(frozen=True)

    kind: ApiItemKind
    display_name: str
    canonical_reference: str = ""
    parent: ApiItem | None = None

    def scoped_name(self) -> str:
        """Dotted name within the package, e.g. ``Namespace.Class.method``."""
        parts: list[str] = []
        current: ApiItem | None = self
        while current is not None and current.kind not in _SCOPE_ROOTS:
            if current.kind != ApiItemKind.ENTRY_POINT and current.display_name:
                parts.append(current.display_name)
            current = current.parent
        return ".".join(reversed(parts)) or self.display_name or "unknown"


class ResolutionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    resolved_item: ApiItem | None = None
    error_message: str | None = None


FilenameLookup = Callable[[ApiItem], str | None]
ReferenceResolver = Callable[[CodeReference, ApiItem | None], ResolutionResult]


# ── Type analysis ──


class PropertyAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: TypeAnalysis
    optional: bool = False


class TypeAnalysis(BaseModel):
    """Structure of a type expression, as produced by TypeAnalyzer."""

    model_config = ConfigDict(frozen=True)

    kind: TypeKind
    name: str | None = None
    element_type: TypeAnalysis | None = None
    union_types: list[TypeAnalysis] = Field(default_factory=list)
    intersection_types: list[TypeAnalysis] = Field(default_factory=list)
    base_type: str | None = None
    type_parameters: list[str] = Field(default_factory=list)
    properties: list[PropertyAnalysis] = Field(default_factory=list)


class PropertyInfo(BaseModel):
    """Display-ready description of one property, possibly with children."""

    name: str = ""
    type: str = "any"
    description: str = ""
    required: bool = True
    deprecated: bool = False
    nested_properties: list[PropertyInfo] = Field(default_factory=list)


PropertyAnalysis.model_rebuild()

"""
BindKit Type Conversion

Converts documentation-level type expressions into Go type expressions.
Rules are checked from most to least specific and end in an `interface{}`
fallback, so every expression of the grammar maps to something and the
mapper never raises.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from bindkit.core.naming import NameTransformer
from bindkit.core.constants import GoTypes, FLOAT_OVERRIDE_PROPERTIES
from bindkit.core.schema import (
    TypeExpression, PrimitiveKind, PrimitiveType, ArrayType, MapType,
    LiteralUnionType, UnionType, ObjectType, ApiArgument, StructDeclaration,
)


logger = logging.getLogger(__name__)

# Builds the struct `name` from object properties. Returns that struct first,
# followed by every struct discovered while building it.
StructBuilder = Callable[[str, Sequence[ApiArgument]], List[StructDeclaration]]


@dataclass(frozen=True)
class MappedType:
    """Go type for a property plus the struct declarations it introduced."""
    go_type: str
    nested: Tuple[StructDeclaration, ...] = ()


_PRIMITIVE_MAP = {
    PrimitiveKind.STRING: GoTypes.OPTIONAL_STRING,
    PrimitiveKind.PATH: GoTypes.OPTIONAL_STRING,
    PrimitiveKind.BOOLEAN: GoTypes.OPTIONAL_BOOL,
    PrimitiveKind.INT: GoTypes.OPTIONAL_INT,
    PrimitiveKind.FLOAT: GoTypes.OPTIONAL_FLOAT,
}


class TypeMapper:
    """
    Go type mapping for struct fields.

    Object shapes and unions with an object branch are turned into nested
    structs through the injected `build_struct`, named after the enclosing
    struct plus the property name.
    """

    def __init__(self, build_struct: StructBuilder, transformer: Optional[NameTransformer] = None):
        self.build_struct = build_struct
        self.transformer = transformer or NameTransformer()

    def map_type(self, prop_name: str, expr: TypeExpression, struct_prefix: str) -> MappedType:
        """
        Map a property's type expression to a Go type.

        Args:
            prop_name: Documented property name
            expr: Property type expression
            struct_prefix: Name of the enclosing struct, used for nested structs

        Returns:
            MappedType holding the Go type and any nested declarations
        """
        if prop_name in FLOAT_OVERRIDE_PROPERTIES:
            return MappedType(GoTypes.OPTIONAL_FLOAT)

        fixed = map_fixed_type(expr)
        if fixed is not None:
            return MappedType(fixed)

        if isinstance(expr, LiteralUnionType):
            return MappedType(GoTypes.OPTIONAL_STRING)

        if isinstance(expr, UnionType):
            branch = expr.object_branch()
            if branch is not None:
                return self._nested_struct(prop_name, branch, struct_prefix)

        if isinstance(expr, ObjectType) and expr.properties:
            return self._nested_struct(prop_name, expr, struct_prefix)

        if isinstance(expr, MapType):
            return MappedType(GoTypes.DYNAMIC_MAP)

        logger.debug(f"No specific Go mapping for '{prop_name}' ({type(expr).__name__}), using interface{{}}")
        return MappedType(GoTypes.DYNAMIC)

    def _nested_struct(self, prop_name: str, shape: ObjectType, struct_prefix: str) -> MappedType:
        struct_name = struct_prefix + self.transformer.pascal_case(prop_name)
        declarations = self.build_struct(struct_name, shape.properties)
        return MappedType(GoTypes.pointer_to(struct_name), tuple(declarations))


def map_fixed_type(expr: TypeExpression) -> Optional[str]:
    """
    Look up the fixed primitive table.

    Returns:
        Go type for table entries, None for everything else
    """
    if isinstance(expr, PrimitiveType):
        if expr.kind == PrimitiveKind.HANDLE:
            return GoTypes.pointer_to(expr.name)
        return _PRIMITIVE_MAP.get(expr.kind)

    if isinstance(expr, ArrayType):
        item = expr.item
        if isinstance(item, PrimitiveType) and item.kind == PrimitiveKind.STRING:
            return GoTypes.STRING_SLICE
        return None

    if isinstance(expr, MapType) and expr.is_string_map():
        return GoTypes.STRING_MAP

    return None

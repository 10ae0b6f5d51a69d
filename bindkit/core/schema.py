"""
BindKit Data Models

Immutable description tree consumed by every generator, the recursive type
expression grammar it carries, the signature table that drives interface
emission, and the struct declarations produced by synthesis.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple, Union

# === TYPE SYSTEM === #

class PrimitiveKind(Enum):
    """Documentation-level primitive types."""
    STRING = "string"
    PATH = "path"
    BOOLEAN = "boolean"
    INT = "int"
    FLOAT = "float"
    HANDLE = "handle"      # Designated handle type, e.g. ElementHandle


class MemberKind(Enum):
    """Kinds of class members in the description tree."""
    METHOD = "method"
    PROPERTY = "property"
    EVENT = "event"


@dataclass(frozen=True)
class PrimitiveType:
    """Fixed primitive such as string or int."""
    kind: PrimitiveKind
    name: str                                      # Name as written in the description


@dataclass(frozen=True)
class ArrayType:
    """Array-of, e.g. Array<string>."""
    item: 'TypeExpression'


@dataclass(frozen=True)
class MapType:
    """Map with fixed key and value types, e.g. Object<string, string>."""
    key: 'TypeExpression'
    value: 'TypeExpression'

    def is_string_map(self) -> bool:
        return _is_primitive(self.key, PrimitiveKind.STRING) and _is_primitive(self.value, PrimitiveKind.STRING)


@dataclass(frozen=True)
class LiteralUnionType:
    """Union of quoted string literals: "small"|"large"."""
    values: Tuple[str, ...]


@dataclass(frozen=True)
class UnionType:
    """Heterogeneous union; one branch may be an object shape."""
    branches: Tuple['TypeExpression', ...]

    def object_branch(self) -> Optional['ObjectType']:
        """First branch carrying an object shape, if any."""
        for branch in self.branches:
            if isinstance(branch, ObjectType) and branch.properties:
                return branch
        return None


@dataclass(frozen=True)
class ObjectType:
    """Object shape with named properties."""
    properties: Tuple['ApiArgument', ...] = ()


@dataclass(frozen=True)
class OpaqueType:
    """Any shape the grammar does not model (functions, bare Object, ...)."""
    name: str = "any"


TypeExpression = Union[PrimitiveType, ArrayType, MapType, LiteralUnionType, UnionType, ObjectType, OpaqueType]


def _is_primitive(expr: TypeExpression, kind: PrimitiveKind) -> bool:
    return isinstance(expr, PrimitiveType) and expr.kind == kind


# === DESCRIPTION TREE === #

@dataclass(frozen=True)
class LanguageRestriction:
    """
    Per-language applicability of a member or property.

    An empty `only` means the entry applies to every language.
    """
    only: Tuple[str, ...] = ()
    aliases: Tuple[Tuple[str, str], ...] = ()

    def applies_to(self, language: str) -> bool:
        return not self.only or language in self.only

    def alias_for(self, language: str) -> Optional[str]:
        for lang, alias in self.aliases:
            if lang == language:
                return alias
        return None


@dataclass(frozen=True)
class ApiArgument:
    """Method argument or object-shape property."""
    name: str
    type: TypeExpression
    required: bool = False
    doc: Optional[str] = None
    langs: LanguageRestriction = field(default_factory=LanguageRestriction)


@dataclass(frozen=True)
class ApiMember:
    """Method, property or event declared on a class."""
    name: str
    kind: MemberKind
    doc: Optional[str] = None
    deprecated: Optional[str] = None
    discouraged: Optional[str] = None
    args: Tuple[ApiArgument, ...] = ()
    return_type: Optional[TypeExpression] = None
    langs: LanguageRestriction = field(default_factory=LanguageRestriction)

    @property
    def is_method(self) -> bool:
        return self.kind == MemberKind.METHOD

    def name_for(self, language: str) -> str:
        """Documented name, or the language-specific alias when one exists."""
        return self.langs.alias_for(language) or self.name


@dataclass(frozen=True)
class ApiClass:
    """Documented class with its members in declaration order."""
    name: str
    doc: Optional[str] = None
    members: Tuple[ApiMember, ...] = ()
    extends: Optional[str] = None

    def methods(self) -> List[ApiMember]:
        return [member for member in self.members if member.is_method]


@dataclass(frozen=True)
class DescriptionTree:
    """Ordered classes of the API description."""
    classes: Tuple[ApiClass, ...] = ()

    def find_class(self, class_name: str) -> Optional[ApiClass]:
        for api_class in self.classes:
            if api_class.name == class_name:
                return api_class
        return None


# === SIGNATURE TABLE === #

@dataclass(frozen=True)
class Signature:
    """Declared Go input/output shape of one interface member."""
    params: str = ""
    returns: str = ""


@dataclass(frozen=True)
class Inheritance:
    """Parent interfaces embedded into an interface."""
    parents: Tuple[str, ...] = ()


SignatureEntry = Union[Signature, Inheritance]


@dataclass
class SignatureTable:
    """
    Hand-maintained class -> member -> signature mapping.

    Insertion order of both levels is the emission order.
    """
    classes: Dict[str, Dict[str, SignatureEntry]] = field(default_factory=dict)

    def has_member(self, class_name: str, member_name: str) -> bool:
        return member_name in self.classes.get(class_name, {})

    def members_of(self, class_name: str) -> Dict[str, SignatureEntry]:
        return self.classes.get(class_name, {})


# === GENERATED OUTPUT === #

@dataclass(frozen=True)
class StructField:
    """Single field of a synthesized Go struct."""
    name: str
    type: str
    tag: str                                       # Original property name for the json tag
    doc: Tuple[str, ...] = ()


@dataclass(frozen=True)
class StructDeclaration:
    """Synthesized aggregate declaration."""
    name: str
    fields: Tuple[StructField, ...] = ()


class StructRegistry:
    """
    Emission-ordered set of struct declarations keyed by name.

    Keeps first-discovery order; a repeated name replaces the stored
    declaration in place.
    """

    def __init__(self):
        self._declarations: Dict[str, StructDeclaration] = {}

    def add(self, declaration: StructDeclaration) -> None:
        self._declarations[declaration.name] = declaration

    def extend(self, declarations: List[StructDeclaration]) -> None:
        for declaration in declarations:
            self.add(declaration)

    def __contains__(self, name: str) -> bool:
        return name in self._declarations

    def __len__(self) -> int:
        return len(self._declarations)

    def get(self, name: str) -> Optional[StructDeclaration]:
        return self._declarations.get(name)

    def declarations(self) -> List[StructDeclaration]:
        return list(self._declarations.values())

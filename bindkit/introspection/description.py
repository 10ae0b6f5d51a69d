"""
BindKit Description Tree Parsing

Validates the API description JSON (as printed by the driver's
`print-api-json` command) with Pydantic and converts it into the immutable
description tree. Accepts both the current list-based layout and the legacy
layout where classes, members, arguments and properties are keyed by name.
"""

import re
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union, IO

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from bindkit.core.constants import GenerationDefaults
from bindkit.core.schema import (
    DescriptionTree, ApiClass, ApiMember, ApiArgument, MemberKind, LanguageRestriction,
    TypeExpression, PrimitiveKind, PrimitiveType, ArrayType, MapType, LiteralUnionType,
    UnionType, ObjectType, OpaqueType,
)


logger = logging.getLogger(__name__)


class DescriptionLoadError(ValueError):
    """Raised when the API description cannot be read or does not match the expected shape."""


# === RAW JSON MODELS === #

def _keyed_to_list(value: Any) -> Any:
    """Legacy layout: {"name": {...}} -> [{"name": "name", ...}]."""
    if isinstance(value, dict):
        items = []
        for name, entry in value.items():
            entry = dict(entry) if isinstance(entry, dict) else {}
            entry.setdefault("name", name)
            items.append(entry)
        return items
    if value is None:
        return []
    return value


class RawLangs(BaseModel):
    model_config = ConfigDict(extra="ignore")

    only: List[str] = Field(default_factory=list)
    aliases: Dict[str, str] = Field(default_factory=dict)

    @field_validator("only", mode="before")
    @classmethod
    def _only_default(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("aliases", mode="before")
    @classmethod
    def _aliases_default(cls, value: Any) -> Any:
        return {} if value is None else value


class RawType(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    expression: Optional[str] = None
    properties: List["RawArgument"] = Field(default_factory=list)
    templates: List["RawType"] = Field(default_factory=list)
    union: List["RawType"] = Field(default_factory=list)

    @field_validator("properties", mode="before")
    @classmethod
    def _properties_as_list(cls, value: Any) -> Any:
        return _keyed_to_list(value)

    @field_validator("templates", "union", mode="before")
    @classmethod
    def _none_as_list(cls, value: Any) -> Any:
        return [] if value is None else value


class RawArgument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    type: Optional[RawType] = None
    required: bool = False
    comment: Optional[str] = None
    langs: RawLangs = Field(default_factory=RawLangs)

    @field_validator("langs", mode="before")
    @classmethod
    def _langs_default(cls, value: Any) -> Any:
        return {} if value is None else value


class RawMember(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    kind: str = "method"
    comment: Optional[str] = None
    deprecated: Optional[Union[bool, str]] = None
    discouraged: Optional[str] = None
    args: List[RawArgument] = Field(default_factory=list)
    type: Optional[RawType] = None
    langs: RawLangs = Field(default_factory=RawLangs)

    @field_validator("args", mode="before")
    @classmethod
    def _args_as_list(cls, value: Any) -> Any:
        return _keyed_to_list(value)

    @field_validator("langs", mode="before")
    @classmethod
    def _langs_default(cls, value: Any) -> Any:
        return {} if value is None else value


class RawClass(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    comment: Optional[str] = None
    members: List[RawMember] = Field(default_factory=list)
    extends: Optional[str] = None

    @field_validator("members", mode="before")
    @classmethod
    def _members_as_list(cls, value: Any) -> Any:
        return _keyed_to_list(value)


RawType.model_rebuild()

_RAW_TREE = TypeAdapter(List[RawClass])


# === LOADING === #

def load_description(source: Union[str, Path, IO[str]], handle_type: str = GenerationDefaults.HANDLE_TYPE) -> DescriptionTree:
    """
    Load and parse an API description JSON document.

    Args:
        source: Path to the JSON file, or an open text stream (e.g. stdin)
        handle_type: Name of the designated handle type in the description

    Returns:
        Parsed DescriptionTree

    Raises:
        DescriptionLoadError: If the document cannot be read, decoded or validated
    """
    try:
        if hasattr(source, "read"):
            data = json.load(source)
        else:
            with open(source, 'r', encoding='utf-8') as f:
                data = json.load(f)
    except json.JSONDecodeError as e:
        raise DescriptionLoadError(f"Invalid JSON in API description: {e}") from e
    except OSError as e:
        raise DescriptionLoadError(f"Failed to read API description from {source}: {e}") from e

    return parse_description(data, handle_type)


def parse_description(data: Any, handle_type: str = GenerationDefaults.HANDLE_TYPE) -> DescriptionTree:
    """Validate already-decoded description JSON and build the description tree."""
    try:
        raw_classes = _RAW_TREE.validate_python(_keyed_to_list(data))
    except ValidationError as e:
        raise DescriptionLoadError(f"API description does not match the expected shape: {e}") from e

    _check_unique([raw.name for raw in raw_classes], "class")

    classes = []
    for raw_class in raw_classes:
        for kind in sorted({member.kind for member in raw_class.members}):
            names = [member.name for member in raw_class.members if member.kind == kind]
            _check_unique(names, f"{kind} of {raw_class.name}")
        classes.append(_convert_class(raw_class, handle_type))

    logger.debug(f"Parsed API description with {len(classes)} classes")
    return DescriptionTree(classes=tuple(classes))


def _check_unique(names: List[str], what: str):
    seen = set()
    for name in names:
        if name in seen:
            raise DescriptionLoadError(f"Duplicate {what} '{name}' in API description")
        seen.add(name)


# === CONVERSION === #

def _convert_class(raw: RawClass, handle_type: str) -> ApiClass:
    return ApiClass(
        name=raw.name,
        doc=raw.comment or None,
        members=tuple(_convert_member(member, handle_type) for member in raw.members),
        extends=raw.extends,
    )


def _convert_member(raw: RawMember, handle_type: str) -> ApiMember:
    try:
        kind = MemberKind(raw.kind)
    except ValueError:
        raise DescriptionLoadError(f"Unknown member kind '{raw.kind}' for '{raw.name}'")

    return ApiMember(
        name=raw.name,
        kind=kind,
        doc=raw.comment or None,
        deprecated=_deprecation_note(raw.deprecated),
        discouraged=raw.discouraged or None,
        args=tuple(_convert_argument(arg, handle_type) for arg in raw.args),
        return_type=_convert_type(raw.type, handle_type) if raw.type is not None else None,
        langs=_convert_langs(raw.langs),
    )


def _deprecation_note(value: Optional[Union[bool, str]]) -> Optional[str]:
    if value is True:
        return "This member is deprecated."
    if isinstance(value, str) and value:
        return value
    return None


def _convert_argument(raw: RawArgument, handle_type: str) -> ApiArgument:
    return ApiArgument(
        name=raw.name,
        type=_convert_type(raw.type, handle_type),
        required=raw.required,
        doc=raw.comment or None,
        langs=_convert_langs(raw.langs),
    )


def _convert_langs(raw: RawLangs) -> LanguageRestriction:
    return LanguageRestriction(
        only=tuple(raw.only),
        aliases=tuple(raw.aliases.items()),
    )


_PRIMITIVES = {
    "string": PrimitiveKind.STRING,
    "path": PrimitiveKind.PATH,
    "boolean": PrimitiveKind.BOOLEAN,
    "int": PrimitiveKind.INT,
    "number": PrimitiveKind.INT,
    "float": PrimitiveKind.FLOAT,
}

_MAP_EXPRESSION = re.compile(r"^\[(?:Object|Map)\]<\[(\w+)\], \[(\w+)\]>$")
_LEGACY_GENERIC = re.compile(r"^(Array|Object|Map)<(.+)>$")


def _convert_type(raw: Optional[RawType], handle_type: str) -> TypeExpression:
    """Convert a raw type record into a type expression variant."""
    if raw is None:
        return OpaqueType()

    name = raw.name.strip()

    if raw.union or name == "union":
        return _union_of([_convert_type(branch, handle_type) for branch in raw.union], raw.union)

    if "|" in name and not name.startswith(("Object<", "Map<", "Array<")):
        parts = [part.strip() for part in name.split("|")]
        return _union_of([_convert_type(RawType(name=part), handle_type) for part in parts],
                         [RawType(name=part) for part in parts])

    if name in _PRIMITIVES:
        return PrimitiveType(kind=_PRIMITIVES[name], name=name)

    if name == handle_type:
        return PrimitiveType(kind=PrimitiveKind.HANDLE, name=name)

    if name == "Array" and raw.templates:
        return ArrayType(item=_convert_type(raw.templates[0], handle_type))

    if name in ("Object", "Map") and len(raw.templates) == 2:
        return MapType(
            key=_convert_type(raw.templates[0], handle_type),
            value=_convert_type(raw.templates[1], handle_type),
        )

    expression_map = _MAP_EXPRESSION.match(raw.expression or "")
    if expression_map:
        key, value = expression_map.groups()
        return MapType(
            key=_convert_type(RawType(name=key), handle_type),
            value=_convert_type(RawType(name=value), handle_type),
        )

    legacy = _LEGACY_GENERIC.match(name)
    if legacy:
        return _convert_legacy_generic(legacy.group(1), legacy.group(2), handle_type)

    if name in ("Object", "object") and raw.properties:
        return ObjectType(properties=tuple(_convert_argument(prop, handle_type) for prop in raw.properties))

    return OpaqueType(name=name or "any")


def _union_of(branches: List[TypeExpression], raw_branches: List[RawType]) -> TypeExpression:
    literals = [raw.name.strip() for raw in raw_branches]
    if literals and all(_is_quoted(literal) for literal in literals):
        return LiteralUnionType(values=tuple(literal[1:-1] for literal in literals))
    return UnionType(branches=tuple(branches))


def _is_quoted(value: str) -> bool:
    return len(value) >= 2 and value.startswith('"') and value.endswith('"')


def _convert_legacy_generic(container: str, inner: str, handle_type: str) -> TypeExpression:
    """Legacy string forms: Array<string>, Object<string, string>."""
    args = [arg.strip() for arg in inner.split(",")]
    if container == "Array" and len(args) == 1:
        return ArrayType(item=_convert_type(RawType(name=args[0]), handle_type))
    if container in ("Object", "Map") and len(args) == 2:
        return MapType(
            key=_convert_type(RawType(name=args[0]), handle_type),
            value=_convert_type(RawType(name=args[1]), handle_type),
        )
    return OpaqueType(name=f"{container}<{inner}>")

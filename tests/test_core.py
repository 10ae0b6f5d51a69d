"""
Core functionality tests for BindKit naming, type mapping, schema and config
"""

import json

import pytest

from bindkit.core.naming import NameTransformer, to_go_name, to_pascal_case
from bindkit.core.config import BindKitConfig, load_bindkit_config
from bindkit.core.type_conversion import TypeMapper, MappedType, map_fixed_type
from bindkit.core.schema import (
    PrimitiveKind, PrimitiveType, ArrayType, MapType, LiteralUnionType, UnionType,
    ObjectType, OpaqueType, ApiArgument, StructDeclaration, StructField, StructRegistry,
    LanguageRestriction,
)


STRING = PrimitiveType(PrimitiveKind.STRING, "string")
INT = PrimitiveType(PrimitiveKind.INT, "int")


# === NAMING === #

@pytest.mark.parametrize("name, expected", [
    ("$eval", "EvaluateOnSelector"),
    ("$$eval", "EvaluateOnSelectorAll"),
    ("$", "QuerySelector"),
    ("$$", "QuerySelectorAll"),
    ("pdf", "PDF"),
    ("url", "URL"),
    ("jsonValue", "JSONValue"),
    ("waitForURL", "WaitForURL"),
    ("setExtraHTTPHeaders", "SetExtraHTTPHeaders"),
    ("goto", "Goto"),
])
def test_go_names(name, expected):
    assert to_go_name(name) == expected


def test_eval_selector_style():
    transformer = NameTransformer("eval")
    assert transformer.transform("$$eval") == "EvalOnSelectorAll"
    assert transformer.transform("$eval") == "EvalOnSelector"


def test_markers_replace_first_occurrence_only():
    assert to_go_name("urlOrurl") == "URLOrurl"


def test_transformation_is_not_idempotent():
    """Applying twice may differ from applying once."""
    once = to_go_name("urlurl")
    assert once == "URLurl"
    assert to_go_name(once) == "URLURL"


def test_pascal_case_drops_first_underscore():
    assert to_pascal_case("has_touch") == "Hastouch"
    assert to_pascal_case("clickCount") == "ClickCount"


def test_unknown_selector_style():
    with pytest.raises(ValueError):
        NameTransformer("jquery")


# === TYPE MAPPING === #

def _mapper():
    built = []

    def build_struct(name, properties):
        fields = []
        for prop in properties:
            mapped = mapper.map_type(prop.name, prop.type, name)
            fields.append(StructField(name=to_pascal_case(prop.name), type=mapped.go_type, tag=prop.name))
        declaration = StructDeclaration(name=name, fields=tuple(fields))
        built.append(declaration)
        return [declaration]

    mapper = TypeMapper(build_struct)
    return mapper, built


@pytest.mark.parametrize("expr, expected", [
    (PrimitiveType(PrimitiveKind.STRING, "string"), "*string"),
    (PrimitiveType(PrimitiveKind.PATH, "path"), "*string"),
    (PrimitiveType(PrimitiveKind.BOOLEAN, "boolean"), "*bool"),
    (PrimitiveType(PrimitiveKind.INT, "int"), "*int"),
    (PrimitiveType(PrimitiveKind.FLOAT, "float"), "*float64"),
    (PrimitiveType(PrimitiveKind.HANDLE, "ElementHandle"), "*ElementHandle"),
    (ArrayType(STRING), "[]string"),
    (MapType(STRING, STRING), "map[string]string"),
])
def test_fixed_table(expr, expected):
    mapper, _ = _mapper()
    assert map_fixed_type(expr) == expected
    assert mapper.map_type("value", expr, "Page").go_type == expected


def test_latitude_longitude_override_declared_type():
    mapper, _ = _mapper()
    assert mapper.map_type("latitude", INT, "Geo").go_type == "*float64"
    assert mapper.map_type("longitude", OpaqueType("whatever"), "Geo").go_type == "*float64"


def test_literal_union_is_nullable_string():
    mapper, _ = _mapper()
    mapped = mapper.map_type("size", LiteralUnionType(("small", "large")), "Page")
    assert mapped == MappedType("*string")


def test_union_with_object_branch_builds_nested_struct():
    mapper, built = _mapper()
    shape = ObjectType((ApiArgument("latitude", INT), ApiArgument("accuracy", INT)))
    mapped = mapper.map_type("geolocation", UnionType((OpaqueType("null"), shape)), "BrowserContextSetGeolocation")

    assert mapped.go_type == "*BrowserContextSetGeolocationGeolocation"
    assert [decl.name for decl in mapped.nested] == ["BrowserContextSetGeolocationGeolocation"]
    assert [(f.name, f.type) for f in built[0].fields] == [("Latitude", "*float64"), ("Accuracy", "*int")]


def test_object_shape_builds_nested_struct():
    mapper, _ = _mapper()
    shape = ObjectType((ApiArgument("x", INT),))
    mapped = mapper.map_type("position", shape, "PageClick")
    assert mapped.go_type == "*PageClickPosition"


def test_empty_object_and_other_maps():
    mapper, _ = _mapper()
    assert mapper.map_type("value", ObjectType(), "Page").go_type == "interface{}"
    assert mapper.map_type("value", MapType(STRING, INT), "Page").go_type == "map[string]interface{}"


@pytest.mark.parametrize("expr", [
    OpaqueType("function"),
    OpaqueType(),
    ArrayType(INT),
    ArrayType(ObjectType((ApiArgument("a", INT),))),
    UnionType((STRING, INT)),
    UnionType(()),
    LiteralUnionType(()),
    MapType(INT, INT),
])
def test_mapper_is_total(expr):
    mapper, _ = _mapper()
    mapped = mapper.map_type("value", expr, "Page")
    assert isinstance(mapped.go_type, str) and mapped.go_type


def test_unrecognized_shapes_fall_back_to_interface():
    mapper, _ = _mapper()
    assert mapper.map_type("handler", OpaqueType("function"), "Page").go_type == "interface{}"
    assert mapper.map_type("url", UnionType((STRING, OpaqueType("RegExp"))), "Page").go_type == "interface{}"
    assert mapper.map_type("items", ArrayType(INT), "Page").go_type == "interface{}"


# === SCHEMA === #

def test_struct_registry_keeps_first_discovery_order():
    registry = StructRegistry()
    registry.add(StructDeclaration("A"))
    registry.add(StructDeclaration("B"))
    replacement = StructDeclaration("A", (StructField("X", "*int", "x"),))
    registry.add(replacement)

    assert [decl.name for decl in registry.declarations()] == ["A", "B"]
    assert registry.get("A") is replacement
    assert len(registry) == 2


def test_language_restriction():
    assert LanguageRestriction().applies_to("go")
    assert not LanguageRestriction(only=("python",)).applies_to("go")
    assert LanguageRestriction(aliases=(("go", "Expect"),)).alias_for("go") == "Expect"
    assert LanguageRestriction().alias_for("go") is None


# === CONFIG === #

def test_config_defaults_when_missing(tmp_path):
    config = load_bindkit_config(str(tmp_path))

    assert config == BindKitConfig()
    assert config.package == "playwright"
    assert config.should_spread("Page", "addScriptTag")
    assert not config.should_spread("Page", "goto")
    assert config.validation.is_ignored_class("ChromiumBrowser")
    assert config.validation.is_ignored_class("Android")
    assert not config.validation.is_ignored_class("Page")


def test_config_loads_overrides(tmp_path):
    (tmp_path / "bindkit.config.json").write_text(json.dumps({
        "package": "pw",
        "selectorStyle": "eval",
        "commentWidth": 0,
        "exampleLanguages": ["js"],
        "validation": {"allowedMissing": ["Page.Goto"]},
    }), encoding="utf-8")

    config = load_bindkit_config(str(tmp_path))

    assert config.package == "pw"
    assert config.selector_style == "eval"
    assert config.comment_width == 0
    assert config.example_languages == ["js"]
    assert config.validation.allowed_missing == ["Page.Goto"]
    assert config.validation.ignore_classes == BindKitConfig().validation.ignore_classes


@pytest.mark.parametrize("content", [
    "{not json",
    json.dumps([1, 2]),
    json.dumps({"selectorStyle": "jquery"}),
    json.dumps({"commentWidth": -1}),
    json.dumps({"methodsToSpread": "Page.goto"}),
    json.dumps({"package": ""}),
])
def test_invalid_config(tmp_path, content):
    (tmp_path / "bindkit.config.json").write_text(content, encoding="utf-8")
    with pytest.raises(ValueError):
        load_bindkit_config(str(tmp_path))

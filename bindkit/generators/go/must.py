"""
BindKit Go Must-Wrapper Emitter

For every interface method returning an error, emits a `Must<Name>` method on
the implementing struct that panics instead of returning the error.
"""

from typing import List, Optional

from bindkit.core.schema import SignatureTable, Signature


ERROR_TYPE = "error"


def emit_must_wrappers(table: SignatureTable) -> List[str]:
    """Render Must-wrappers for all error-returning signatures, in table order."""
    wrappers = []
    for class_name, members in table.classes.items():
        for member_name, entry in members.items():
            if not isinstance(entry, Signature):
                continue
            wrapper = render_must_wrapper(class_name, member_name, entry)
            if wrapper is not None:
                wrappers.append(wrapper)
    return wrappers


def render_must_wrapper(class_name: str, member_name: str, signature: Signature) -> Optional[str]:
    """
    Render a single Must-wrapper.

    Returns:
        Go source, or None when the method does not return an error
    """
    results = _split_list(_strip_parens(signature.returns))
    if ERROR_TYPE not in results:
        return None

    values = [result for result in results if result != ERROR_TYPE]
    receiver = f"t *{class_name.lower()}Impl"
    call = f"t.{member_name}({_call_arguments(signature.params)})"

    lines = []
    if not values:
        lines.append(f"func ({receiver}) Must{member_name}({signature.params}) {{")
        lines.append(f"\terr := {call}")
        lines.extend(_panic_on_error())
    else:
        names = ["result"] if len(values) == 1 else [f"r{index}" for index in range(len(values))]
        return_type = values[0] if len(values) == 1 else f"({', '.join(values)})"
        lines.append(f"func ({receiver}) Must{member_name}({signature.params}) {return_type} {{")
        lines.append(f"\t{', '.join(names)}, err := {call}")
        lines.extend(_panic_on_error())
        lines.append(f"\treturn {', '.join(names)}")
    lines.append("}")
    return "\n".join(lines)


def _panic_on_error() -> List[str]:
    return ["\tif err != nil {", "\t\tpanic(err)", "\t}"]


def _call_arguments(params: str) -> str:
    """Forward each parameter by name; a variadic parameter is forwarded with `...`."""
    arguments = []
    for param in _split_list(params):
        name, _, type_part = param.partition(" ")
        spread = "..." if type_part.strip().startswith("...") else ""
        arguments.append(f"{name}{spread}")
    return ", ".join(arguments)


def _strip_parens(value: str) -> str:
    value = value.strip()
    if value.startswith("(") and value.endswith(")"):
        return value[1:-1]
    return value


def _split_list(value: str) -> List[str]:
    """Split on top-level commas; commas inside func(...) types stay put."""
    parts, current, depth = [], [], 0
    for char in value:
        if char in "([{":
            depth += 1
        elif char in ")]}":
            depth -= 1
        if char == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]

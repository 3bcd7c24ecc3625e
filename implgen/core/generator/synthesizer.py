"""Source synthesizer.

Renders the declaration, delegating constructor and one stub per
obligation into Java source text, then escapes every non-ASCII character
so the result is 7-bit clean.

Generated layout:
    package com.example;

    public class ShapeImpl extends com.example.Shape {
        public ShapeImpl(java.lang.String name) {
            super(name);
        }

        public double area() {
            return 0;
        }
    }
"""

import re
from typing import Iterable, List, Optional, Sequence

from ..constants import (
    DEFAULT_CLASS_SUFFIX,
    INDENT,
    JAVA_KEYWORDS,
    MODIFIER_ORDER,
    PRIMITIVE_TYPES,
    STRIPPED_MODIFIERS,
    SYNTHETIC_PARAMETER_PREFIX,
    VISIBILITY_MODIFIERS,
    VOID_TYPE,
)
from ..introspection.descriptors import ConstructorDescriptor, Parameter, TypeDescriptor
from .signature import MethodObligation

_IDENTIFIER_RE = re.compile(r"^(?:[^\W\d]|\$)(?:\w|\$)*$")


class SourceSynthesizer:
    """Renders GeneratedSource text for one subject."""

    def __init__(self, class_suffix: str = DEFAULT_CLASS_SUFFIX):
        self.class_suffix = class_suffix

    def impl_simple_name(self, subject: TypeDescriptor) -> str:
        return subject.simple_name + self.class_suffix

    def render(
        self,
        subject: TypeDescriptor,
        obligations: Sequence[MethodObligation],
        constructor: Optional[ConstructorDescriptor],
    ) -> str:
        """Render the full compilation unit, already ASCII-escaped."""
        blocks: List[str] = []
        if constructor is not None:
            blocks.append(self._render_constructor(subject, constructor))
        for obligation in obligations:
            blocks.append(self._render_method(obligation))

        lines: List[str] = []
        if subject.package_name:
            lines.append(f"package {subject.package_name};")
            lines.append("")
        lines.append(self._declaration_line(subject) + " {")
        if blocks:
            lines.append("\n\n".join(blocks))
        lines.append("}")

        return encode("\n".join(lines) + "\n")

    def _declaration_line(self, subject: TypeDescriptor) -> str:
        relation = "implements" if subject.is_interface else "extends"
        return f"public class {self.impl_simple_name(subject)} {relation} {subject.qualified_name}"

    def _render_constructor(
        self, subject: TypeDescriptor, constructor: ConstructorDescriptor
    ) -> str:
        names = parameter_names(constructor.parameters)
        modifiers = {"public"} | (set(constructor.modifiers) - VISIBILITY_MODIFIERS)
        header = _join_words(
            format_modifiers(modifiers),
            self.impl_simple_name(subject) + _parameter_list(constructor.parameters, names),
            throws_clause(constructor.exceptions),
        )
        return _block(header, [f"super({', '.join(names)});"])

    @staticmethod
    def _render_method(obligation: MethodObligation) -> str:
        method = obligation.representative
        names = parameter_names(method.parameters)
        header = _join_words(
            format_modifiers(method.modifiers),
            method.return_type,
            method.name + _parameter_list(method.parameters, names),
            throws_clause(obligation.exceptions),
        )
        default = default_value(method.return_type)
        body = [] if default is None else [f"return {default};"]
        return _block(header, body)


# =============================================================================
# Rendering helpers
# =============================================================================


def default_value(type_name: str) -> Optional[str]:
    """Default return expression for a type; None for void."""
    if type_name == VOID_TYPE:
        return None
    if type_name == "boolean":
        return "false"
    if type_name in PRIMITIVE_TYPES:
        return "0"
    return "null"


def format_modifiers(modifiers: Iterable[str]) -> str:
    """Drop modifiers a concrete override cannot carry, in canonical order."""
    kept = set(modifiers) - STRIPPED_MODIFIERS
    return " ".join(m for m in MODIFIER_ORDER if m in kept)


def throws_clause(exceptions: Sequence[str]) -> str:
    return "throws " + ", ".join(exceptions) if exceptions else ""


def is_valid_identifier(name: Optional[str]) -> bool:
    return bool(name) and _IDENTIFIER_RE.match(name) is not None and name not in JAVA_KEYWORDS


def parameter_names(parameters: Sequence[Parameter]) -> List[str]:
    """Declared names where usable, argN otherwise.

    A declared name is dropped when it is not a valid identifier, is a
    keyword, repeats an earlier name, or collides with a synthetic name.
    """
    synthetic = {f"{SYNTHETIC_PARAMETER_PREFIX}{i}" for i in range(len(parameters))}
    names: List[str] = []
    for i, parameter in enumerate(parameters):
        name = parameter.name
        if not is_valid_identifier(name) or name in names or (
            name in synthetic and name != f"{SYNTHETIC_PARAMETER_PREFIX}{i}"
        ):
            name = f"{SYNTHETIC_PARAMETER_PREFIX}{i}"
        names.append(name)
    return names


def _parameter_list(parameters: Sequence[Parameter], names: Sequence[str]) -> str:
    return "(" + ", ".join(f"{p.type_name} {n}" for p, n in zip(parameters, names)) + ")"


def _join_words(*parts: str) -> str:
    return " ".join(part for part in parts if part)


def _block(header: str, body: Sequence[str]) -> str:
    lines = [f"{INDENT}{header} {{"]
    lines.extend(f"{INDENT}{INDENT}{line}" for line in body)
    lines.append(f"{INDENT}}}")
    return "\n".join(lines)


def encode(text: str) -> str:
    """Replace every character >= U+0080 with a \\uXXXX escape.

    Characters outside the Basic Multilingual Plane are written as their
    UTF-16 surrogate pair, the form javac expects.
    """
    out: List[str] = []
    for char in text:
        code = ord(char)
        if code < 128:
            out.append(char)
        elif code <= 0xFFFF:
            out.append(f"\\u{code:04x}")
        else:
            code -= 0x10000
            out.append(f"\\u{0xD800 + (code >> 10):04x}\\u{0xDC00 + (code & 0x3FF):04x}")
    return "".join(out)

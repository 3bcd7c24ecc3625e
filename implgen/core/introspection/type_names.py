"""Type reference resolution.

Turns type text as written in a compilation unit ("List<String>",
"Map.Entry<K, V>[]", "T") into an erased canonical name
("java.util.List", "java.util.Map.Entry[]", "java.lang.Object").
"""

import logging
import re
from typing import TYPE_CHECKING, Dict, Optional, Set, Tuple

from ..constants import (
    JAVA_LANG_TYPES,
    KNOWN_JDK_PACKAGE_TYPES,
    PRIMITIVE_TYPES,
    ROOT_TYPE,
    VOID_TYPE,
)
from .models import CompilationUnit, JavaTypeDeclaration

if TYPE_CHECKING:
    from .source_index import JavaSourceIndex

logger = logging.getLogger(__name__)

_ANNOTATION_RE = re.compile(r"@[\w.]+(\s*\([^)]*\))?")


def split_type_text(type_text: str) -> Tuple[str, int]:
    """Strip annotations and generic arguments, then split off array dimensions.

    Returns:
        (base name, number of array dimensions)
    """
    text = _ANNOTATION_RE.sub(" ", type_text)

    depth = 0
    chars = []
    for char in text:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        elif depth == 0 and not char.isspace():
            chars.append(char)
    base = "".join(chars)

    dims = 0
    while base.endswith("[]"):
        base = base[:-2]
        dims += 1
    if base.endswith("..."):
        base = base[:-3]
        dims += 1
    return base, dims


class TypeNameResolver:
    """Resolves type references in the scope of a declaring type.

    Lookup order for a simple name: type variables (method, then declaring
    and enclosing types), member types of the declaring and enclosing types,
    single-type imports, the same package, on-demand imports, java.lang.
    An unknown simple name in a file with exactly one on-demand import is
    assumed to come from it. Other names that resolve nowhere, qualified
    ones included, are returned as written.
    """

    def __init__(self, index: "JavaSourceIndex"):
        self._index = index

    def resolve(
        self,
        type_text: str,
        unit: CompilationUnit,
        decl: JavaTypeDeclaration,
        method_type_params: Optional[Dict[str, Optional[str]]] = None,
        extra_dimensions: int = 0,
    ) -> str:
        return self._resolve(type_text, unit, decl, method_type_params or {}, extra_dimensions, set())

    def _resolve(
        self,
        type_text: str,
        unit: CompilationUnit,
        decl: JavaTypeDeclaration,
        method_type_params: Dict[str, Optional[str]],
        extra_dimensions: int,
        visiting: Set[str],
    ) -> str:
        base, dims = split_type_text(type_text)
        suffix = "[]" * (dims + extra_dimensions)
        if not base:
            return type_text.strip() + suffix

        if base in PRIMITIVE_TYPES or base == VOID_TYPE:
            return base + suffix

        head, _, rest = base.partition(".")

        if not rest:
            found, bound = self._find_type_variable(head, unit, decl, method_type_params)
            if found:
                if bound is None or head in visiting:
                    return ROOT_TYPE + suffix
                erased = self._resolve(
                    bound, unit, decl, method_type_params, 0, visiting | {head}
                )
                return erased + suffix

        qualified_head = self._resolve_simple(head, unit, decl)
        if qualified_head is None and not rest and len(unit.on_demand_imports) == 1:
            # Unknown simple name; assume the lone on-demand import supplies it
            qualified_head = f"{unit.on_demand_imports[0]}.{head}"
        if qualified_head is None:
            # Already fully qualified, or unknown to every source root
            if not rest:
                logger.debug(f"Unresolved type '{base}' in {unit.file_path}, keeping as written")
            return base + suffix

        return qualified_head + ("." + rest if rest else "") + suffix

    @staticmethod
    def _find_type_variable(name, unit, decl, method_type_params):
        if name in method_type_params:
            return True, method_type_params[name]
        current: Optional[JavaTypeDeclaration] = decl
        while current is not None:
            if name in current.type_parameters:
                return True, current.type_parameters[name]
            # Type variables of an enclosing type are invisible inside static members
            if "static" in current.modifiers or current.kind != "class":
                break
            current = unit.find(current.enclosing) if current.enclosing else None
        return False, None

    def _resolve_simple(
        self, name: str, unit: CompilationUnit, decl: JavaTypeDeclaration
    ) -> Optional[str]:
        current: Optional[JavaTypeDeclaration] = decl
        while current is not None:
            if name in current.member_types:
                return f"{current.qualified_name}.{name}"
            if current.name == name:
                return current.qualified_name
            current = unit.find(current.enclosing) if current.enclosing else None

        if name in unit.single_imports:
            return unit.single_imports[name]

        same_package = f"{unit.package_name}.{name}" if unit.package_name else name
        if self._index.has_type(same_package):
            return same_package

        for package in unit.on_demand_imports:
            candidate = f"{package}.{name}"
            if self._index.has_type(candidate):
                return candidate

        if name in JAVA_LANG_TYPES or self._index.has_type(f"java.lang.{name}"):
            return f"java.lang.{name}"

        for package in unit.on_demand_imports:
            if name in KNOWN_JDK_PACKAGE_TYPES.get(package, ()):
                return f"{package}.{name}"

        return None

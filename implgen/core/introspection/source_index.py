"""Java source index.

Locates type declarations by qualified name across a list of source roots
and builds immutable TypeDescriptor snapshots of whole hierarchies.
Each .java file is parsed at most once per index.
"""

import logging
from collections import deque
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from ..constants import ROOT_TYPE, SOURCE_FILE_SUFFIX
from ..errors import TypeResolutionError
from .descriptors import (
    ConstructorDescriptor,
    DeclaredMembers,
    MethodDescriptor,
    Parameter,
    TypeDescriptor,
)
from .java_parser import JavaSourceParser
from .models import CompilationUnit, JavaMethodDeclaration, JavaTypeDeclaration
from .type_names import TypeNameResolver

logger = logging.getLogger(__name__)

# Stub sources for commonly implemented JDK contracts
JDK_STUBS_DIR = Path(__file__).parent / "jdk"

_Located = Tuple[CompilationUnit, JavaTypeDeclaration]


class JavaSourceIndex:
    """Read-only view of the types declared under a set of source roots."""

    def __init__(
        self,
        source_roots: Iterable[Union[str, Path]],
        include_jdk_stubs: bool = True,
        encoding: str = "utf-8",
    ):
        self.source_roots: List[Path] = [Path(root) for root in source_roots]
        self._search_roots = list(self.source_roots)
        if include_jdk_stubs:
            self._search_roots.append(JDK_STUBS_DIR)

        self._parser = JavaSourceParser(encoding=encoding)
        self._resolver = TypeNameResolver(self)
        self._units: Dict[Path, CompilationUnit] = {}
        self._scanned_dirs: set = set()
        self._types: Dict[str, Optional[_Located]] = {}
        self._descriptors: Dict[str, TypeDescriptor] = {}

    # =========================================================================
    # Lookup
    # =========================================================================

    def has_type(self, qualified_name: str) -> bool:
        return self.lookup(qualified_name) is not None

    def lookup(self, qualified_name: str) -> Optional[_Located]:
        """Find the declaration of a type, or None if no source root has it."""
        if qualified_name in self._types:
            return self._types[qualified_name]

        found = self._locate(qualified_name)
        self._types[qualified_name] = found
        return found

    def _locate(self, qualified_name: str) -> Optional[_Located]:
        parts = qualified_name.split(".")
        # Longest package first: "a.b.C.D" tries a/b/C.java before a/B.java
        for top in range(len(parts) - 1, -1, -1):
            package_parts = parts[:top]
            file_name = parts[top] + SOURCE_FILE_SUFFIX
            for root in self._search_roots:
                package_dir = root.joinpath(*package_parts)
                candidate = package_dir / file_name
                if candidate.is_file():
                    decl = self._unit(candidate).find(qualified_name)
                    if decl:
                        return self._units[candidate], decl

        # Package-private top-level types may live in any file of their package
        for top in range(len(parts) - 1, -1, -1):
            for root in self._search_roots:
                package_dir = root.joinpath(*parts[:top])
                for unit in self._package_units(package_dir):
                    decl = unit.find(qualified_name)
                    if decl:
                        return unit, decl
        return None

    def _unit(self, path: Path) -> CompilationUnit:
        if path not in self._units:
            logger.debug(f"Parsing {path}")
            self._units[path] = self._parser.parse_file(path)
        return self._units[path]

    def _package_units(self, package_dir: Path) -> List[CompilationUnit]:
        if not package_dir.is_dir():
            return []
        if package_dir not in self._scanned_dirs:
            self._scanned_dirs.add(package_dir)
            for path in sorted(package_dir.glob("*" + SOURCE_FILE_SUFFIX)):
                self._unit(path)
        return [unit for path, unit in self._units.items() if path.parent == package_dir]

    def _require(self, qualified_name: str, role: str, owner: str) -> _Located:
        found = self.lookup(qualified_name)
        if found is None:
            raise TypeResolutionError(
                f"Cannot resolve {role} '{qualified_name}' of '{owner}' "
                f"in source roots {[str(r) for r in self._search_roots]}"
            )
        return found

    # =========================================================================
    # Descriptors
    # =========================================================================

    def describe(self, qualified_name: str) -> TypeDescriptor:
        """Build the TypeDescriptor of a type and its whole hierarchy.

        Raises:
            TypeResolutionError: If the type, one of its superclasses or one
                of its super-interfaces cannot be found
        """
        if qualified_name in self._descriptors:
            return self._descriptors[qualified_name]

        found = self.lookup(qualified_name)
        if found is None:
            raise TypeResolutionError(
                f"Cannot resolve type '{qualified_name}' "
                f"in source roots {[str(r) for r in self._search_roots]}"
            )
        unit, decl = found

        chain_types = self._class_chain(unit, decl)
        chain = [self._declared_members(u, d) for u, d in chain_types]
        if decl.kind != "interface":
            chain.append(DeclaredMembers(type_name=ROOT_TYPE))

        interface_types = self._interfaces(chain_types)
        interface_members = [self._declared_members(u, d) for u, d in interface_types]

        descriptor = TypeDescriptor(
            qualified_name=decl.qualified_name,
            simple_name=decl.name,
            package_name=unit.package_name,
            kind=decl.kind,
            modifiers=frozenset(decl.modifiers),
            ancestor_chain=tuple(chain),
            implemented_interfaces=tuple(d.qualified_name for _, d in interface_types),
            externally_visible_methods=_visible_methods(chain, interface_members),
        )
        self._descriptors[qualified_name] = descriptor
        logger.debug(
            f"Described {descriptor.qualified_name}: "
            f"chain={[m.type_name for m in descriptor.ancestor_chain]}, "
            f"interfaces={list(descriptor.implemented_interfaces)}"
        )
        return descriptor

    def _class_chain(self, unit: CompilationUnit, decl: JavaTypeDeclaration) -> List[_Located]:
        """Subject followed by its superclasses, root excluded."""
        chain: List[_Located] = [(unit, decl)]
        if decl.kind != "class":
            return chain

        seen = {decl.qualified_name}
        current_unit, current = unit, decl
        while current.superclass:
            super_name = self._resolver.resolve(current.superclass, current_unit, current)
            if super_name == ROOT_TYPE:
                break
            if super_name in seen:
                raise TypeResolutionError(f"Cyclic inheritance involving '{super_name}'")
            seen.add(super_name)
            current_unit, current = self._require(super_name, "superclass", current.qualified_name)
            chain.append((current_unit, current))
        return chain

    def _interfaces(self, chain: Sequence[_Located]) -> List[_Located]:
        """Every super-interface reachable from the chain, breadth-first."""
        result: List[_Located] = []
        seen = set()
        queue = deque(chain)
        while queue:
            unit, decl = queue.popleft()
            for text in decl.interfaces:
                name = self._resolver.resolve(text, unit, decl)
                if name in seen:
                    continue
                seen.add(name)
                located = self._require(name, "interface", decl.qualified_name)
                result.append(located)
                queue.append(located)
        return result

    def _declared_members(self, unit: CompilationUnit, decl: JavaTypeDeclaration) -> DeclaredMembers:
        methods = tuple(self._method(unit, decl, m) for m in decl.methods)
        constructors = tuple(
            ConstructorDescriptor(
                parameters=self._parameters(unit, decl, c),
                exceptions=self._exceptions(unit, decl, c),
                modifiers=frozenset(c.modifiers),
                declaring_type=decl.qualified_name,
            )
            for c in decl.constructors
        )
        return DeclaredMembers(
            type_name=decl.qualified_name,
            methods=methods,
            constructors=constructors,
        )

    def _method(
        self, unit: CompilationUnit, decl: JavaTypeDeclaration, method: JavaMethodDeclaration
    ) -> MethodDescriptor:
        return MethodDescriptor(
            name=method.name,
            parameters=self._parameters(unit, decl, method),
            return_type=self._resolver.resolve(
                method.return_type, unit, decl, method.type_parameters
            ),
            exceptions=self._exceptions(unit, decl, method),
            modifiers=_effective_modifiers(decl, method),
            declaring_type=decl.qualified_name,
        )

    def _parameters(self, unit, decl, method: JavaMethodDeclaration) -> Tuple[Parameter, ...]:
        return tuple(
            Parameter(
                type_name=self._resolver.resolve(
                    p.type_text,
                    unit,
                    decl,
                    method.type_parameters,
                    extra_dimensions=p.extra_dimensions + (1 if p.varargs else 0),
                ),
                name=p.name,
            )
            for p in method.parameters
        )

    def _exceptions(self, unit, decl, method: JavaMethodDeclaration) -> Tuple[str, ...]:
        return tuple(
            self._resolver.resolve(t, unit, decl, method.type_parameters) for t in method.throws
        )


def _effective_modifiers(decl: JavaTypeDeclaration, method: JavaMethodDeclaration) -> frozenset:
    """Declared modifiers plus the ones interface members carry implicitly."""
    modifiers = set(method.modifiers)
    if decl.kind in ("interface", "annotation"):
        if "private" not in modifiers:
            modifiers.add("public")
        if not method.has_body and not modifiers & {"static", "default", "private"}:
            modifiers.add("abstract")
    return frozenset(modifiers)


def _visible_methods(
    chain: Sequence[DeclaredMembers], interfaces: Sequence[DeclaredMembers]
) -> Tuple[MethodDescriptor, ...]:
    """Flatten the public methods of a hierarchy.

    Class declarations win over interface declarations with the same name
    and parameter types; within each group the nearest declaration wins.
    """
    visible: Dict[tuple, MethodDescriptor] = {}
    for members in chain:
        for method in members.methods:
            if method.is_public:
                visible.setdefault((method.name, method.parameter_types), method)
    for members in interfaces:
        for method in members.methods:
            if method.is_public and "static" not in method.modifiers:
                visible.setdefault((method.name, method.parameter_types), method)
    return tuple(visible.values())

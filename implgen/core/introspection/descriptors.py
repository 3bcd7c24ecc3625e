"""Immutable type descriptors.

A TypeDescriptor is a read-only snapshot of one subject type and its
whole hierarchy. All type names are erased canonical names
("java.util.List", "int[]"). Obtained once per subject and never mutated.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple


@dataclass(frozen=True)
class Parameter:
    type_name: str
    name: Optional[str] = None


@dataclass(frozen=True)
class MethodDescriptor:
    """A method declared on some type in the hierarchy."""

    name: str
    parameters: Tuple[Parameter, ...]
    return_type: str
    exceptions: Tuple[str, ...]
    modifiers: FrozenSet[str]
    declaring_type: str

    @property
    def parameter_types(self) -> Tuple[str, ...]:
        return tuple(p.type_name for p in self.parameters)

    @property
    def is_abstract(self) -> bool:
        return "abstract" in self.modifiers

    @property
    def is_final(self) -> bool:
        return "final" in self.modifiers

    @property
    def is_public(self) -> bool:
        return "public" in self.modifiers


@dataclass(frozen=True)
class ConstructorDescriptor:
    parameters: Tuple[Parameter, ...]
    exceptions: Tuple[str, ...]
    modifiers: FrozenSet[str]
    declaring_type: str

    @property
    def is_private(self) -> bool:
        return "private" in self.modifiers


@dataclass(frozen=True)
class DeclaredMembers:
    """Methods and constructors declared directly on one type."""

    type_name: str
    methods: Tuple[MethodDescriptor, ...] = ()
    constructors: Tuple[ConstructorDescriptor, ...] = ()


@dataclass(frozen=True)
class TypeDescriptor:
    """Structural facts about a subject type.

    ancestor_chain starts with the subject itself and, for classes, ends
    with the hierarchy root (declared with no members). An interface's
    chain holds only the interface.
    """

    qualified_name: str
    simple_name: str
    package_name: str
    kind: str
    modifiers: FrozenSet[str]
    ancestor_chain: Tuple[DeclaredMembers, ...]
    implemented_interfaces: Tuple[str, ...]
    externally_visible_methods: Tuple[MethodDescriptor, ...]

    @property
    def is_interface(self) -> bool:
        return self.kind == "interface"

    @property
    def is_final(self) -> bool:
        return "final" in self.modifiers

    @property
    def is_private(self) -> bool:
        return "private" in self.modifiers

    @property
    def is_sealed(self) -> bool:
        return "sealed" in self.modifiers

    @property
    def declared(self) -> DeclaredMembers:
        """Members declared on the subject itself."""
        return self.ancestor_chain[0]

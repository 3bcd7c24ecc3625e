"""Method signatures and obligations.

A MethodSignature is the identity of a method for deduplication: name,
parameter types and return type. Modifiers and exceptions are payload
carried by the obligation, never part of the identity.
"""

from dataclasses import dataclass, field
from typing import Tuple

from ..introspection.descriptors import MethodDescriptor


@dataclass(frozen=True, order=True)
class MethodSignature:
    name: str
    parameter_types: Tuple[str, ...]
    return_type: str

    @classmethod
    def of(cls, method: MethodDescriptor) -> "MethodSignature":
        return cls(method.name, method.parameter_types, method.return_type)

    def sort_key(self):
        return (self.name, ", ".join(self.parameter_types), self.return_type)

    def __str__(self) -> str:
        return f"{self.return_type} {self.name}({', '.join(self.parameter_types)})"


@dataclass(frozen=True)
class MethodObligation:
    """A signature the generated class must define.

    representative supplies modifiers and parameter names. exceptions is the
    throws list to emit; exception_conflicts names the declaring types whose
    throws lists disagreed with the representative's.
    """

    signature: MethodSignature
    representative: MethodDescriptor
    exceptions: Tuple[str, ...]
    exception_conflicts: Tuple[str, ...] = field(default=())

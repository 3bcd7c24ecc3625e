"""implgen introspection - tree-sitter based Java type descriptors.

Public API:
    JavaSourceIndex(source_roots).describe(qualified_name) -> TypeDescriptor
    JavaSourceParser().parse_source(text, file_path) -> CompilationUnit
"""

from .descriptors import (
    ConstructorDescriptor,
    DeclaredMembers,
    MethodDescriptor,
    Parameter,
    TypeDescriptor,
)
from .java_parser import JavaSourceParser
from .models import CompilationUnit, JavaMethodDeclaration, JavaParameter, JavaTypeDeclaration
from .source_index import JDK_STUBS_DIR, JavaSourceIndex

__all__ = [
    "JavaSourceIndex",
    "JavaSourceParser",
    "JDK_STUBS_DIR",
    "CompilationUnit",
    "JavaMethodDeclaration",
    "JavaParameter",
    "JavaTypeDeclaration",
    "ConstructorDescriptor",
    "DeclaredMembers",
    "MethodDescriptor",
    "Parameter",
    "TypeDescriptor",
]

"""Java source parse models.

Raw declarations as they appear in a compilation unit. Type references
are kept exactly as written; resolution happens in TypeNameResolver.
These are pure data containers - no parsing logic.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class JavaParameter:
    """A formal parameter of a method or constructor."""

    type_text: str  # "List<String>", "int[]"
    name: Optional[str] = None
    varargs: bool = False
    extra_dimensions: int = 0  # "String args[]" -> 1


@dataclass
class JavaMethodDeclaration:
    """A method or constructor declared in a type body."""

    name: str
    parameters: List[JavaParameter]
    return_type: Optional[str]  # None for constructors
    throws: List[str] = field(default_factory=list)
    modifiers: List[str] = field(default_factory=list)
    type_parameters: Dict[str, Optional[str]] = field(default_factory=dict)
    has_body: bool = False
    line: int = 0

    @property
    def is_constructor(self) -> bool:
        return self.return_type is None


@dataclass
class JavaTypeDeclaration:
    """A class, interface, enum, record or annotation declaration."""

    kind: str  # "class" | "interface" | "enum" | "record" | "annotation"
    name: str  # "Inner"
    qualified_name: str  # "com.example.Outer.Inner"
    package_name: str  # "com.example"
    modifiers: List[str] = field(default_factory=list)
    type_parameters: Dict[str, Optional[str]] = field(default_factory=dict)
    superclass: Optional[str] = None
    interfaces: List[str] = field(default_factory=list)
    methods: List[JavaMethodDeclaration] = field(default_factory=list)
    constructors: List[JavaMethodDeclaration] = field(default_factory=list)
    member_types: List[str] = field(default_factory=list)  # simple names
    enclosing: Optional[str] = None  # qualified name of the enclosing type
    file_path: str = ""
    line: int = 0


@dataclass
class CompilationUnit:
    """Everything extracted from one .java file."""

    file_path: str
    package_name: str
    single_imports: Dict[str, str]  # simple name -> qualified name
    on_demand_imports: List[str]  # package or type names imported with .*
    types: List[JavaTypeDeclaration]
    has_errors: bool = False

    def find(self, qualified_name: str) -> Optional[JavaTypeDeclaration]:
        for decl in self.types:
            if decl.qualified_name == qualified_name:
                return decl
        return None

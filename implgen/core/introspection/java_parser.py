"""Java declaration parser using tree-sitter.

Walks the tree-sitter AST to extract package and import statements and
every class, interface, enum, record and annotation declaration (nested
ones included) together with their methods and constructors. Type
references are returned as written; see type_names for resolution.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

import tree_sitter
import tree_sitter_java

from ..errors import TypeResolutionError
from .models import (
    CompilationUnit,
    JavaMethodDeclaration,
    JavaParameter,
    JavaTypeDeclaration,
)

logger = logging.getLogger(__name__)

_JAVA_LANGUAGE = tree_sitter.Language(tree_sitter_java.language())

# tree-sitter node type -> declaration kind
_DECLARATION_KINDS = {
    "class_declaration": "class",
    "interface_declaration": "interface",
    "enum_declaration": "enum",
    "record_declaration": "record",
    "annotation_type_declaration": "annotation",
}

_BODY_TYPES = ("class_body", "interface_body", "enum_body", "annotation_type_body")

_ANNOTATION_TYPES = ("marker_annotation", "annotation")
_COMMENT_TYPES = ("line_comment", "block_comment")


class JavaSourceParser:
    """tree-sitter based extractor of Java type declarations.

    Extracts:
    - Package declaration and single-type / on-demand imports
    - Type declarations -> JavaTypeDeclaration (kind, modifiers, type
      parameters, extends / implements clauses, member type names)
    - Method declarations -> JavaMethodDeclaration with return type
    - Constructor declarations -> JavaMethodDeclaration without one
    """

    def __init__(self, encoding: str = "utf-8"):
        self._encoding = encoding
        self._parser = tree_sitter.Parser(_JAVA_LANGUAGE)

    def parse_file(self, file_path: Union[str, Path]) -> CompilationUnit:
        """Read and parse a .java file.

        Raises:
            TypeResolutionError: If the file cannot be read
        """
        path = Path(file_path)
        try:
            source_text = path.read_text(encoding=self._encoding, errors="replace")
        except OSError as e:
            raise TypeResolutionError(f"Cannot read Java source {path}: {e}") from e
        return self.parse_source(source_text, str(path))

    def parse_source(self, source_text: str, file_path: str = "<memory>") -> CompilationUnit:
        """Parse Java source text into a CompilationUnit."""
        source = source_text.encode("utf-8")
        tree = self._parser.parse(source)
        root = tree.root_node

        if root.has_error:
            logger.warning(f"Tree-sitter reported parse errors in {file_path}")

        package_name = self._extract_package(root, source)
        single_imports, on_demand_imports = self._extract_imports(root, source)

        types: List[JavaTypeDeclaration] = []
        for child in root.children:
            if child.type in _DECLARATION_KINDS:
                self._extract_type(child, source, file_path, package_name, None, types)

        return CompilationUnit(
            file_path=file_path,
            package_name=package_name,
            single_imports=single_imports,
            on_demand_imports=on_demand_imports,
            types=types,
            has_errors=root.has_error,
        )

    # =========================================================================
    # Compilation unit header
    # =========================================================================

    @staticmethod
    def _extract_package(root: tree_sitter.Node, source: bytes) -> str:
        for child in root.children:
            if child.type == "package_declaration":
                for sub in child.named_children:
                    if sub.type in ("scoped_identifier", "identifier"):
                        return _text(sub, source).replace(" ", "")
        return ""

    @staticmethod
    def _extract_imports(root: tree_sitter.Node, source: bytes):
        """Split imports into simple-name lookups and on-demand packages.

        Static imports bring in members, not types, and are ignored.
        """
        single: Dict[str, str] = {}
        on_demand: List[str] = []
        for child in root.children:
            if child.type != "import_declaration":
                continue
            child_types = [sub.type for sub in child.children]
            if "static" in child_types:
                continue
            name = None
            for sub in child.named_children:
                if sub.type in ("scoped_identifier", "identifier"):
                    name = _text(sub, source).replace(" ", "")
            if not name:
                continue
            if "asterisk" in child_types:
                on_demand.append(name)
            else:
                single[name.rsplit(".", 1)[-1]] = name
        return single, on_demand

    # =========================================================================
    # Declarations
    # =========================================================================

    def _extract_type(
        self,
        node: tree_sitter.Node,
        source: bytes,
        file_path: str,
        package_name: str,
        enclosing: Optional[JavaTypeDeclaration],
        out: List[JavaTypeDeclaration],
    ) -> Optional[JavaTypeDeclaration]:
        """Extract a type declaration, appending it and its nested types to out."""
        name = _field_text(node, "name", source)
        if not name:
            return None

        if enclosing:
            qualified_name = f"{enclosing.qualified_name}.{name}"
        else:
            qualified_name = f"{package_name}.{name}" if package_name else name

        kind = _DECLARATION_KINDS[node.type]
        decl = JavaTypeDeclaration(
            kind=kind,
            name=name,
            qualified_name=qualified_name,
            package_name=package_name,
            modifiers=_extract_modifiers(node, source),
            type_parameters=_extract_type_parameters(node, source),
            enclosing=enclosing.qualified_name if enclosing else None,
            file_path=file_path,
            line=node.start_point.row + 1,
        )
        decl.superclass, decl.interfaces = _extract_supertypes(node, source)
        out.append(decl)

        body = node.child_by_field_name("body")
        if body is None or body.type not in _BODY_TYPES:
            return decl

        for member in _body_members(body):
            if member.type == "method_declaration":
                method = self._extract_method(member, source)
                if method:
                    decl.methods.append(method)
            elif member.type == "constructor_declaration":
                ctor = self._extract_constructor(member, source, name)
                decl.constructors.append(ctor)
            elif member.type in _DECLARATION_KINDS:
                nested = self._extract_type(member, source, file_path, package_name, decl, out)
                if nested:
                    decl.member_types.append(nested.name)

        return decl

    @staticmethod
    def _extract_method(node: tree_sitter.Node, source: bytes) -> Optional[JavaMethodDeclaration]:
        name = _field_text(node, "name", source)
        type_node = node.child_by_field_name("type")
        if not name or type_node is None:
            return None

        return_type = _text(type_node, source)
        # "int values()[]" declares an array return type
        dims = node.child_by_field_name("dimensions")
        if dims is not None:
            return_type += "[]" * _count_dimensions(dims, source)

        body = node.child_by_field_name("body")
        return JavaMethodDeclaration(
            name=name,
            parameters=_extract_parameters(node, source),
            return_type=return_type,
            throws=_extract_throws(node, source),
            modifiers=_extract_modifiers(node, source),
            type_parameters=_extract_type_parameters(node, source),
            has_body=body is not None,
            line=node.start_point.row + 1,
        )

    @staticmethod
    def _extract_constructor(
        node: tree_sitter.Node, source: bytes, class_name: str
    ) -> JavaMethodDeclaration:
        return JavaMethodDeclaration(
            name=_field_text(node, "name", source) or class_name,
            parameters=_extract_parameters(node, source),
            return_type=None,
            throws=_extract_throws(node, source),
            modifiers=_extract_modifiers(node, source),
            type_parameters=_extract_type_parameters(node, source),
            has_body=True,
            line=node.start_point.row + 1,
        )


# =============================================================================
# Helpers
# =============================================================================


def _text(node: tree_sitter.Node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def _field_text(node: tree_sitter.Node, field_name: str, source: bytes) -> Optional[str]:
    child = node.child_by_field_name(field_name)
    if child:
        return _text(child, source)
    return None


def _get_child_by_type(node: tree_sitter.Node, type_name: str) -> Optional[tree_sitter.Node]:
    for child in node.children:
        if child.type == type_name:
            return child
    return None


def _body_members(body: tree_sitter.Node) -> List[tree_sitter.Node]:
    """Member declarations of a body; enum members live one level deeper."""
    members = []
    for child in body.named_children:
        if child.type == "enum_body_declarations":
            members.extend(child.named_children)
        else:
            members.append(child)
    return members


def _extract_modifiers(node: tree_sitter.Node, source: bytes) -> List[str]:
    """Keyword modifiers of a declaration, annotations excluded."""
    modifiers_node = _get_child_by_type(node, "modifiers")
    if modifiers_node is None:
        return []
    modifiers = []
    for child in modifiers_node.children:
        if child.type in _ANNOTATION_TYPES or child.type in _COMMENT_TYPES:
            continue
        modifiers.append(_text(child, source).strip())
    return modifiers


def _extract_type_parameters(node: tree_sitter.Node, source: bytes) -> Dict[str, Optional[str]]:
    """Type parameter names mapped to their first bound, if any."""
    params_node = node.child_by_field_name("type_parameters")
    if params_node is None:
        params_node = _get_child_by_type(node, "type_parameters")
    if params_node is None:
        return {}

    params: Dict[str, Optional[str]] = {}
    for param in params_node.named_children:
        if param.type != "type_parameter":
            continue
        name = None
        bound = None
        for child in param.named_children:
            if child.type in ("type_identifier", "identifier") and name is None:
                name = _text(child, source)
            elif child.type == "type_bound":
                bound_types = [c for c in child.named_children if c.type not in _ANNOTATION_TYPES]
                if bound_types:
                    bound = _text(bound_types[0], source)
        if name:
            params[name] = bound
    return params


def _extract_supertypes(node: tree_sitter.Node, source: bytes):
    """Return (superclass text or None, list of super-interface texts)."""
    superclass = None
    interfaces: List[str] = []

    for child in node.children:
        if child.type == "superclass":
            for sub in child.named_children:
                if sub.type not in _ANNOTATION_TYPES:
                    superclass = _text(sub, source)
                    break

        elif child.type in ("super_interfaces", "extends_interfaces"):
            type_list = _get_child_by_type(child, "type_list")
            if type_list is not None:
                for type_node in type_list.named_children:
                    interfaces.append(_text(type_node, source))

    return superclass, interfaces


def _extract_throws(node: tree_sitter.Node, source: bytes) -> List[str]:
    throws_node = _get_child_by_type(node, "throws")
    if throws_node is None:
        return []
    return [
        _text(child, source)
        for child in throws_node.named_children
        if child.type not in _ANNOTATION_TYPES and child.type not in _COMMENT_TYPES
    ]


def _extract_parameters(node: tree_sitter.Node, source: bytes) -> List[JavaParameter]:
    params_node = node.child_by_field_name("parameters")
    if params_node is None:
        return []

    params: List[JavaParameter] = []
    for child in params_node.named_children:
        if child.type == "formal_parameter":
            type_node = child.child_by_field_name("type")
            if type_node is None:
                continue
            dims = child.child_by_field_name("dimensions")
            params.append(JavaParameter(
                type_text=_text(type_node, source),
                name=_field_text(child, "name", source),
                extra_dimensions=_count_dimensions(dims, source) if dims is not None else 0,
            ))

        elif child.type == "spread_parameter":
            type_text = None
            name = None
            for sub in child.named_children:
                if sub.type in ("modifiers",) + _ANNOTATION_TYPES:
                    continue
                if sub.type == "variable_declarator":
                    name = _field_text(sub, "name", source)
                elif type_text is None:
                    type_text = _text(sub, source)
            if type_text:
                params.append(JavaParameter(type_text=type_text, name=name, varargs=True))

    return params


def _count_dimensions(dims: tree_sitter.Node, source: bytes) -> int:
    return _text(dims, source).count("[")

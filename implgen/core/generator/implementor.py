"""Generation facade.

Orchestrates: type name -> validate -> describe -> resolve obligations ->
select constructor -> render -> output sink.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from ..constants import (
    DEFAULT_CLASS_SUFFIX,
    FORBIDDEN_SUBJECTS,
    PRIMITIVE_TYPES,
    SOURCE_FILE_SUFFIX,
    VOID_TYPE,
)
from ..errors import ImplementorArgumentError, InvalidSubject, RenderFailure
from ..introspection.descriptors import TypeDescriptor
from ..introspection.source_index import JavaSourceIndex
from .constructor import select_constructor
from .resolver import ObligationResolver
from .synthesizer import SourceSynthesizer, is_valid_identifier

logger = logging.getLogger(__name__)


class FileOutputSink:
    """Writes generated text to disk, creating parent directories."""

    def write(self, text: str, path: Path) -> None:
        """Write text as ASCII.

        Raises:
            RenderFailure: If the directories or the file cannot be written.
                A partially written file is removed.
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RenderFailure(f"Error during creating directories for {path}: {e}") from e

        try:
            with open(path, "w", encoding="ascii", newline="\n") as f:
                f.write(text)
        except (OSError, UnicodeEncodeError) as e:
            path.unlink(missing_ok=True)
            raise RenderFailure(f"Error during writing in file {path}: {e}") from e


def normalize_type_name(type_name: Optional[str]) -> str:
    """Validate a requested type identifier before any lookup.

    "$" is legal inside identifiers, so binary names ("a.Outer$Inner") pass
    through unchanged; Implementor.generate maps them to nested types.

    Raises:
        ImplementorArgumentError: If the name is missing or malformed
        InvalidSubject: For primitives, arrays and hierarchy roots
    """
    if type_name is None:
        raise ImplementorArgumentError("Non null arguments expected")

    name = type_name.strip()
    if not name:
        raise ImplementorArgumentError("Type name must not be empty")
    if name.endswith("]") or name.startswith("["):
        raise InvalidSubject(f"Unsupported class token given: {name} is an array type")
    if name in PRIMITIVE_TYPES or name == VOID_TYPE:
        raise InvalidSubject(f"Unsupported class token given: {name} is a primitive type")

    if name in FORBIDDEN_SUBJECTS:
        raise InvalidSubject(f"Unsupported class token given: {name} cannot be extended")
    if not all(is_valid_identifier(part) for part in name.split(".")):
        raise ImplementorArgumentError(f"Malformed type name: {type_name!r}")
    return name


def check_subject(subject: TypeDescriptor) -> None:
    """Reject types that cannot structurally be extended.

    Raises:
        InvalidSubject: For enums, records, annotations and final, sealed or
            private types
    """
    if subject.kind not in ("class", "interface"):
        raise InvalidSubject(
            f"Unsupported class token given: {subject.qualified_name} is an {subject.kind}"
        )
    for flag, reason in (
        (subject.is_final, "final"),
        (subject.is_private, "private"),
        (subject.is_sealed, "sealed"),
    ):
        if flag:
            raise InvalidSubject(
                f"Unsupported class token given: {subject.qualified_name} is {reason}"
            )


class Implementor:
    """Generates <Name>Impl.java for abstract classes and interfaces."""

    def __init__(
        self,
        index: JavaSourceIndex,
        sink: Optional[FileOutputSink] = None,
        class_suffix: str = DEFAULT_CLASS_SUFFIX,
    ):
        self.index = index
        self.sink = sink or FileOutputSink()
        self.synthesizer = SourceSynthesizer(class_suffix=class_suffix)
        self.resolver = ObligationResolver()

    @classmethod
    def from_settings(cls, settings, sink: Optional[FileOutputSink] = None) -> "Implementor":
        index = JavaSourceIndex(
            settings.source_roots,
            include_jdk_stubs=settings.include_jdk_stubs,
            encoding=settings.source_encoding,
        )
        return cls(index, sink=sink, class_suffix=settings.class_suffix)

    def _canonical(self, name: str) -> str:
        """Read "$" as a nested type separator only when the literal name is unknown."""
        if "$" not in name or self.index.has_type(name):
            return name
        nested = name.replace("$", ".")
        if self.index.has_type(nested):
            logger.debug(f"Treating {name} as binary name of {nested}")
            return nested
        return name

    def generate(self, type_name: str) -> Tuple[TypeDescriptor, str]:
        """Render the implementation of a type without writing it.

        Returns:
            (subject descriptor, generated source text)
        """
        name = self._canonical(normalize_type_name(type_name))
        subject = self.index.describe(name)
        check_subject(subject)

        obligations = self.resolver.resolve(subject)
        constructor = select_constructor(subject)
        text = self.synthesizer.render(subject, obligations, constructor)
        return subject, text

    def target_path(self, subject: TypeDescriptor, root: Path, suffix: str = SOURCE_FILE_SUFFIX) -> Path:
        """root/<package dirs>/<Simple><Suffix><suffix>"""
        package_dirs = subject.package_name.split(".") if subject.package_name else []
        return root.joinpath(*package_dirs, self.synthesizer.impl_simple_name(subject) + suffix)

    def implement(self, type_name: str, root: Union[str, Path]) -> Path:
        """Generate the implementation of type_name under root.

        Returns:
            Path of the written .java file

        Raises:
            ImplementorError: Any validation, resolution or write failure
        """
        if type_name is None or root is None:
            raise ImplementorArgumentError("Non null arguments expected")

        subject, text = self.generate(type_name)
        path = self.target_path(subject, Path(root))
        self.sink.write(text, path)
        logger.info(f"Generated {path} for {subject.qualified_name}")
        return path

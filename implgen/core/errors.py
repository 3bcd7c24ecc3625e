"""Error classes for implgen.

This module provides:
- ImplementorError: Base exception class for every generation failure
- ImplementorArgumentError: Null or malformed arguments
- InvalidSubject: Subject type cannot be extended
- TypeResolutionError: Type identifier cannot be located
- NoUsableConstructor: Class subject has no accessible constructor
- RenderFailure: Output sink rejected the generated text
- CompilationFailure, PackagingFailure: Jar packaging exceptions
"""


class ImplementorError(Exception):
    """Base exception for all implgen errors."""

    pass


class ImplementorArgumentError(ImplementorError):
    """Raised when a required argument is missing or malformed."""

    pass


class InvalidSubject(ImplementorError):
    """Raised when the requested type cannot be implemented.

    Primitives, arrays, the hierarchy root, enums, records, annotations,
    and final, sealed or private types all land here.
    """

    pass


class TypeResolutionError(ImplementorError):
    """Raised when a type identifier cannot be resolved to a declaration."""

    pass


class NoUsableConstructor(ImplementorError):
    """Raised when a class subject declares only private constructors."""

    pass


class RenderFailure(ImplementorError):
    """Raised when generated source cannot be written to its target."""

    pass


class CompilationFailure(ImplementorError):
    """Raised when the Java compiler rejects or cannot compile the output."""

    def __init__(self, message: str, diagnostics: str = "") -> None:
        super().__init__(message)
        self.diagnostics = diagnostics


class PackagingFailure(ImplementorError):
    """Raised when the jar archive cannot be written."""

    pass

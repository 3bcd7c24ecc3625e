"""implgen generator - obligation resolution and source synthesis.

Public API:
    Implementor(index).implement(type_name, root) -> Path
    ObligationResolver().resolve(subject) -> List[MethodObligation]
    select_constructor(subject) -> ConstructorDescriptor | None
    SourceSynthesizer().render(subject, obligations, constructor) -> str
"""

from .constructor import select_constructor
from .implementor import FileOutputSink, Implementor
from .resolver import ObligationResolver
from .signature import MethodObligation, MethodSignature
from .synthesizer import SourceSynthesizer, encode

__all__ = [
    "Implementor",
    "FileOutputSink",
    "ObligationResolver",
    "MethodObligation",
    "MethodSignature",
    "SourceSynthesizer",
    "select_constructor",
    "encode",
]

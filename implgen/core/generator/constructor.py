"""Constructor selection for class subjects."""

import logging
from typing import Optional

from ..errors import NoUsableConstructor
from ..introspection.descriptors import ConstructorDescriptor, TypeDescriptor

logger = logging.getLogger(__name__)


def select_constructor(subject: TypeDescriptor) -> Optional[ConstructorDescriptor]:
    """Pick the constructor the generated class delegates to.

    Only constructors declared on the subject itself are considered. A
    class that declares none gets the compiler's public no-arg constructor.

    Returns:
        The first non-private declared constructor, or None for interfaces

    Raises:
        NoUsableConstructor: If every declared constructor is private
    """
    if subject.is_interface:
        return None

    constructors = subject.declared.constructors
    if not constructors:
        return ConstructorDescriptor(
            parameters=(),
            exceptions=(),
            modifiers=frozenset({"public"}),
            declaring_type=subject.qualified_name,
        )

    for constructor in constructors:
        if not constructor.is_private:
            logger.debug(
                f"Delegating to {subject.simple_name}"
                f"({', '.join(p.type_name for p in constructor.parameters)})"
            )
            return constructor

    raise NoUsableConstructor(
        f"No non-private constructors found in {subject.qualified_name}"
    )

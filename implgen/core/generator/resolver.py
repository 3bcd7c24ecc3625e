"""Method obligation resolver.

Computes the exact set of methods a generated class must define so that
it is concrete: every abstract method it inherits, minus those already
sealed by a final declaration somewhere in its class chain.

Two passes of set algebra over a TypeDescriptor:
1. Candidates: abstract externally visible methods, plus abstract methods
   declared directly on each member of the class chain (root excluded),
   keyed by MethodSignature.
2. Suppressors: final methods declared on each member of the chain.
Obligations are candidates whose signature is not suppressed.

A generated stub overrides every declaration of its signature, concrete
ones included, so modifiers and throws lists are reconciled across all of
them.
"""

import logging
from typing import Dict, Iterator, List, Set

from ..constants import ROOT_TYPE
from ..introspection.descriptors import MethodDescriptor, TypeDescriptor
from .signature import MethodObligation, MethodSignature

logger = logging.getLogger(__name__)


class ObligationResolver:
    """Pure function of a TypeDescriptor; holds no state between calls."""

    def resolve(self, subject: TypeDescriptor) -> List[MethodObligation]:
        """Return the obligations of subject, sorted by name then parameter types."""
        candidates = self._candidates(subject)
        suppressed = self._suppressors(subject)

        obligations: List[MethodObligation] = []
        for signature, occurrences in candidates.items():
            if signature in suppressed:
                logger.debug(f"{signature} is sealed by a final declaration, skipping")
                continue
            obligations.append(_obligation(signature, occurrences))

        obligations.sort(key=lambda o: o.signature.sort_key())
        logger.debug(
            f"Resolved {len(obligations)} obligation(s) for {subject.qualified_name}"
        )
        return obligations

    def _candidates(self, subject: TypeDescriptor) -> Dict[MethodSignature, List[MethodDescriptor]]:
        """Group declarations by signature, nearest first.

        Only signatures with at least one abstract declaration are kept.
        """
        occurrences: Dict[MethodSignature, List[MethodDescriptor]] = {}
        abstract: Set[MethodSignature] = set()
        for method in self._traverse(subject):
            signature = MethodSignature.of(method)
            if method not in occurrences.get(signature, ()):
                occurrences.setdefault(signature, []).append(method)
            if method.is_abstract:
                abstract.add(signature)
        return {sig: found for sig, found in occurrences.items() if sig in abstract}

    @staticmethod
    def _suppressors(subject: TypeDescriptor) -> Set[MethodSignature]:
        return {
            MethodSignature.of(method)
            for members in subject.ancestor_chain
            for method in members.methods
            if method.is_final
        }

    @staticmethod
    def _traverse(subject: TypeDescriptor) -> Iterator[MethodDescriptor]:
        """Visible methods, then each chain member's own declarations."""
        yield from subject.externally_visible_methods
        for members in subject.ancestor_chain:
            if members.type_name == ROOT_TYPE:
                continue
            yield from members.methods


def _obligation(signature: MethodSignature, occurrences: List[MethodDescriptor]) -> MethodObligation:
    """Pick the nearest declaration as representative and reconcile throws lists.

    The representative is the first occurrence: a concrete override between
    the subject and the abstract declaration comes before it, so the stub
    keeps that override's visibility. Occurrences may declare different
    checked exceptions; only exceptions every occurrence declares are kept,
    since an override may not widen the throws clause of any method it
    overrides.
    """
    representative = occurrences[0]
    exceptions = representative.exceptions
    conflicts: List[str] = []

    for other in occurrences[1:]:
        if set(other.exceptions) != set(representative.exceptions):
            if other.declaring_type not in conflicts:
                conflicts.append(other.declaring_type)
        exceptions = tuple(e for e in exceptions if e in other.exceptions)

    if conflicts:
        logger.warning(
            f"{signature} declares different exceptions in "
            f"{representative.declaring_type} and {', '.join(conflicts)}; "
            f"emitting only the common ones: {list(exceptions) or 'none'}"
        )

    return MethodObligation(
        signature=signature,
        representative=representative,
        exceptions=exceptions,
        exception_conflicts=tuple(conflicts),
    )

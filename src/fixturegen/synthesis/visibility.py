from __future__ import annotations

from typing import Iterable, Mapping

from fixturegen.declarations import Visibility
from fixturegen.synthesis.model import FieldModel

# Most restrictive first.
VISIBILITY_RANK: Mapping[Visibility, int] = {
    Visibility.PRIVATE: 0,
    Visibility.FILEPRIVATE: 1,
    Visibility.INTERNAL: 2,
    Visibility.PACKAGE: 3,
    Visibility.PUBLIC: 4,
}

# Implicit memberwise initializers never exceed internal.
_EXPLICIT_INIT_LEVELS = frozenset({Visibility.PACKAGE, Visibility.PUBLIC})


def visibility_rank(visibility: Visibility | None) -> int:
    if visibility is None:
        return VISIBILITY_RANK[Visibility.INTERNAL]
    return VISIBILITY_RANK[visibility]


def compute_effective_visibility(
    type_visibility: Visibility | None,
    fields: Iterable[FieldModel],
) -> Visibility | None:
    """Narrowest of the type's and its fields' access levels.

    On equal rank the type's own modifier is kept, so an unannotated type whose
    fields are all explicitly ``internal`` still emits no modifier token.
    """
    best = type_visibility
    best_rank = visibility_rank(type_visibility)
    for spec in fields:
        rank = visibility_rank(spec.visibility)
        if rank < best_rank:
            best = spec.visibility
            best_rank = rank
    return best


def needs_explicit_builder_init(visibility: Visibility | None) -> bool:
    return visibility in _EXPLICIT_INIT_LEVELS

from __future__ import annotations

from typing import List

from fixturegen.declarations import (
    CaseDecl,
    Declaration,
    PatternBinding,
    VariableDecl,
    has_modifier,
)
from fixturegen.synthesis.model import CaseModel, FieldModel, PayloadParameter


def _is_stored(binding: PatternBinding) -> bool:
    block = binding.accessor_block
    if block is None:
        return True
    # Getters hold no storage; observed properties are left out of the
    # generated initializer altogether.
    if block.is_computed:
        return False
    if block.is_observer_only:
        return False
    return True


def _binding_type(
    variable: VariableDecl, binding: PatternBinding, *, inherit_group_type: bool
) -> str | None:
    if binding.type_annotation:
        return binding.type_annotation
    if not inherit_group_type or not variable.bindings:
        return None
    # `var a, b: String` annotates only the last binding of the group.
    return variable.bindings[-1].type_annotation or None


def extract_fields(
    declaration: Declaration, *, inherit_group_type: bool = True
) -> List[FieldModel]:
    fields: List[FieldModel] = []
    for member in declaration.members:
        if not isinstance(member, VariableDecl):
            continue
        if has_modifier(member.modifiers, "static", "lazy"):
            continue
        visibility = member.visibility
        for binding in member.bindings:
            if not binding.is_identifier:
                continue
            if not _is_stored(binding):
                continue
            declared_type = _binding_type(
                member, binding, inherit_group_type=inherit_group_type
            )
            if declared_type is None:
                continue
            fields.append(
                FieldModel(
                    name=binding.pattern,
                    declared_type=declared_type.strip(),
                    has_default_value=binding.initializer is not None,
                    visibility=visibility,
                )
            )
    return fields


def _payload_label(label: str | None) -> str | None:
    # `_` is the explicit "no label" spelling.
    if not label or label == "_":
        return None
    return label


def extract_cases(declaration: Declaration) -> List[CaseModel]:
    cases: List[CaseModel] = []
    for member in declaration.members:
        if not isinstance(member, CaseDecl):
            continue
        for element in member.elements:
            parameters = None
            if element.parameters is not None:
                parameters = tuple(
                    PayloadParameter(
                        type_annotation=parameter.type_annotation,
                        label=_payload_label(parameter.label),
                    )
                    for parameter in element.parameters
                )
            cases.append(CaseModel(name=element.name, parameters=parameters))
    return cases

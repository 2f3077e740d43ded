from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from fixturegen.declarations import (
    AccessorBlock,
    CaseDecl,
    CaseElement,
    CaseParameter,
    Declaration,
    DeclarationKind,
    Member,
    Modifier,
    OpaqueMember,
    PatternBinding,
    SourceLocation,
    VariableDecl,
    parse_visibility,
)
from fixturegen.exceptions import Diagnostic
from fixturegen.synthesis.model import SynthesisResult

_VARIABLE_KINDS = frozenset({"variable", "var", "let"})
_CASE_KINDS = frozenset({"case"})


class LocationDTO(BaseModel):
    line: int = 1
    column: int = 1
    path: str = ""


class ModifierDTO(BaseModel):
    name: str
    detail: str = ""


class BindingDTO(BaseModel):
    pattern: str
    type: Optional[str] = None
    initializer: Optional[str] = None
    accessors: Optional[List[str]] = None


class CaseParameterDTO(BaseModel):
    type: str
    label: Optional[str] = None


class CaseElementDTO(BaseModel):
    name: str
    parameters: Optional[List[CaseParameterDTO]] = None


class MemberDTO(BaseModel):
    kind: str
    name: str = ""
    modifiers: List[ModifierDTO] = []
    bindings: List[BindingDTO] = []
    elements: List[CaseElementDTO] = []


class DeclarationDTO(BaseModel):
    kind: str
    name: str
    extended_type: Optional[str] = None
    modifiers: List[ModifierDTO] = []
    members: List[MemberDTO] = []
    location: Optional[LocationDTO] = None
    enclosing_visibility: Optional[str] = None


class ExpansionRequest(BaseModel):
    declarations: List[DeclarationDTO]
    wrap_debug_guard: Optional[bool] = None
    inherit_group_type: Optional[bool] = None


class DiagnosticDTO(BaseModel):
    id: str
    message: str
    severity: str
    path: str = ""
    line: int = 1
    column: int = 1


class ExpansionEntryDTO(BaseModel):
    name: str
    fragments: List[str] = []
    diagnostics: List[DiagnosticDTO] = []


class ExpansionResponseDTO(BaseModel):
    results: List[ExpansionEntryDTO] = []
    errors: List[str] = []
    exit_code: int = 0


def _modifiers(items: List[ModifierDTO]) -> tuple[Modifier, ...]:
    return tuple(Modifier(name=item.name, detail=item.detail) for item in items)


def _binding(item: BindingDTO) -> PatternBinding:
    accessor_block = None
    if item.accessors is not None:
        accessor_block = AccessorBlock(accessors=tuple(item.accessors) or ("get",))
    return PatternBinding(
        pattern=item.pattern,
        type_annotation=item.type,
        initializer=item.initializer,
        accessor_block=accessor_block,
    )


def _case_element(item: CaseElementDTO) -> CaseElement:
    parameters = None
    if item.parameters is not None:
        parameters = tuple(
            CaseParameter(type_annotation=parameter.type, label=parameter.label)
            for parameter in item.parameters
        )
    return CaseElement(name=item.name, parameters=parameters)


def _member(item: MemberDTO) -> Member:
    kind = item.kind.strip().lower()
    if kind in _VARIABLE_KINDS:
        return VariableDecl(
            bindings=tuple(_binding(binding) for binding in item.bindings),
            modifiers=_modifiers(item.modifiers),
        )
    if kind in _CASE_KINDS:
        return CaseDecl(
            elements=tuple(_case_element(element) for element in item.elements),
        )
    return OpaqueMember(kind=item.kind, name=item.name)


def to_declaration(dto: DeclarationDTO) -> Declaration:
    location = dto.location or LocationDTO()
    return Declaration(
        kind=DeclarationKind.from_keyword(dto.kind),
        name=dto.name,
        keyword=dto.kind.strip(),
        members=tuple(_member(member) for member in dto.members),
        modifiers=_modifiers(dto.modifiers),
        extended_type=dto.extended_type or "",
        attribute_location=SourceLocation(
            line=location.line, column=location.column, path=location.path
        ),
        enclosing_visibility=parse_visibility(dto.enclosing_visibility),
    )


def diagnostic_dto(diagnostic: Diagnostic) -> DiagnosticDTO:
    return DiagnosticDTO(
        id=diagnostic.id,
        message=diagnostic.message,
        severity=diagnostic.severity,
        path=diagnostic.location.path,
        line=diagnostic.location.line,
        column=diagnostic.location.column,
    )


def expansion_entry(name: str, result: SynthesisResult) -> ExpansionEntryDTO:
    return ExpansionEntryDTO(
        name=name,
        fragments=[fragment.code for fragment in result.fragments],
        diagnostics=[diagnostic_dto(d) for d in result.diagnostics],
    )

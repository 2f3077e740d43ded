from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Sequence, Tuple

from fixturegen.declarations import Visibility
from fixturegen.synthesis.model import (
    FIXTURE_BUILDER,
    FIXTURE_LOOKUP,
    FIXTURE_PROPERTY,
    FIXTURE_PROTOCOL,
    CaseModel,
    FieldModel,
)

INDENT = "    "


def _modifiers(visibility: Visibility | None, *, static: bool = False) -> str:
    parts: List[str] = []
    if visibility is not None:
        parts.append(visibility.value)
    if static:
        parts.append("static")
    return "".join(f"{part} " for part in parts)


def _indent(lines: Sequence[str], depth: int = 1) -> List[str]:
    prefix = INDENT * depth
    return [f"{prefix}{line}" if line else line for line in lines]


def _block(header: str, body: Sequence[str]) -> List[str]:
    return [f"{header} {{", *_indent(body), "}"]


def _call(callee: str, arguments: Sequence[str]) -> str:
    return f"{callee}({', '.join(arguments)})"


class MemberFragment(Protocol):
    kind: str

    def lines(self) -> List[str]: ...


@dataclass(frozen=True)
class InitializerFragment:
    visibility: Visibility | None
    fields: Tuple[FieldModel, ...]
    kind: str = "initializer"

    @property
    def parameters(self) -> List[str]:
        parameters: List[str] = []
        for spec in self.fields:
            text = f"{spec.fixture_parameter_name}: {spec.declared_type}"
            if spec.has_default_value:
                text = f"{text} = {FIXTURE_LOOKUP}"
            parameters.append(text)
        return parameters

    def lines(self) -> List[str]:
        header = f"{_modifiers(self.visibility)}{_call('init', self.parameters)}"
        body = [f"{spec.name} = {spec.fixture_parameter_name}" for spec in self.fields]
        return _block(header, body)


@dataclass(frozen=True)
class FixturePropertyFragment:
    visibility: Visibility | None
    expression: str
    kind: str = "fixture_property"

    def lines(self) -> List[str]:
        header = f"{_modifiers(self.visibility, static=True)}var {FIXTURE_PROPERTY}: Self"
        return _block(header, [self.expression])


@dataclass(frozen=True)
class BuilderFragment:
    visibility: Visibility | None
    fields: Tuple[FieldModel, ...]
    explicit_init: bool = False
    kind: str = "builder"

    def lines(self) -> List[str]:
        modifiers = _modifiers(self.visibility)
        # Builder storage is always `var` so callers can override `let` fields.
        body = [
            f"{modifiers}var {spec.name}: {spec.declared_type} = {FIXTURE_LOOKUP}"
            for spec in self.fields
        ]
        if self.explicit_init:
            body.extend(_block(f"{modifiers}init()", []))
        return _block(f"{modifiers}struct {FIXTURE_BUILDER}", body)


@dataclass(frozen=True)
class FactoryFragment:
    visibility: Visibility | None
    fields: Tuple[FieldModel, ...]
    kind: str = "factory"

    @property
    def arguments(self) -> List[str]:
        return [
            f"{spec.fixture_parameter_name}: builder.{spec.name}" for spec in self.fields
        ]

    def lines(self) -> List[str]:
        header = (
            f"{_modifiers(self.visibility, static=True)}func {FIXTURE_PROPERTY}"
            f"(_ configure: (inout {FIXTURE_BUILDER}) -> Void) -> Self"
        )
        body = [
            f"var builder = {FIXTURE_BUILDER}()",
            "configure(&builder)",
            f"return {_call('.init', self.arguments)}",
        ]
        return _block(header, body)


@dataclass(frozen=True)
class ExtensionFragment:
    extended_type: str
    members: Tuple[MemberFragment, ...]
    conformances: Tuple[str, ...] = (FIXTURE_PROTOCOL,)
    wrap_debug_guard: bool = True

    def lines(self) -> List[str]:
        header = f"extension {self.extended_type}"
        if self.conformances:
            header = f"{header}: {', '.join(self.conformances)}"
        body: List[str] = []
        for member in self.members:
            body.extend(member.lines())
        if self.wrap_debug_guard:
            body = ["#if DEBUG", *body, "#endif"]
        return _block(header, body)

    @property
    def code(self) -> str:
        return "\n".join(self.lines())

    def member(self, kind: str) -> MemberFragment | None:
        for member in self.members:
            if member.kind == kind:
                return member
        return None


def record_fixture_expression(fields: Sequence[FieldModel]) -> str:
    # Defaulted fields are left to the initializer's own default argument.
    arguments = [
        f"{spec.fixture_parameter_name}: {FIXTURE_LOOKUP}"
        for spec in fields
        if not spec.has_default_value
    ]
    return _call(".init", arguments)


def case_fixture_expression(case: CaseModel) -> str:
    access = f".{case.name}"
    if case.parameters is None:
        return access
    arguments = []
    for parameter in case.parameters:
        if parameter.label:
            arguments.append(f"{parameter.label}: {FIXTURE_LOOKUP}")
        else:
            arguments.append(FIXTURE_LOOKUP)
    return _call(access, arguments)

"""Parsed-declaration model handed to the synthesizer by the host toolchain.

The host parser is responsible for producing these values; nothing here reads
source text. Expressions and type annotations are carried as opaque strings and
are passed through verbatim into generated code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Iterable, Tuple, Union


class DeclarationKind(StrEnum):
    RECORD = "struct"
    UNION = "enum"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_keyword(cls, keyword: str) -> "DeclarationKind":
        text = (keyword or "").strip().lower()
        if text in {"struct", "record"}:
            return cls.RECORD
        if text in {"enum", "union"}:
            return cls.UNION
        return cls.UNSUPPORTED


class Visibility(StrEnum):
    PRIVATE = "private"
    FILEPRIVATE = "fileprivate"
    INTERNAL = "internal"
    PACKAGE = "package"
    PUBLIC = "public"


OBSERVER_ACCESSORS = frozenset({"willSet", "didSet"})


def parse_visibility(value: str | None) -> Visibility | None:
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return Visibility(text)
    except ValueError:
        raise ValueError(f"Unknown access level '{value}'") from None


@dataclass(frozen=True)
class SourceLocation:
    line: int = 1
    column: int = 1
    path: str = ""


@dataclass(frozen=True)
class Modifier:
    name: str
    # Parenthesized detail, e.g. "set" for `private(set)`.
    detail: str = ""


def access_modifier(modifiers: Iterable[Modifier]) -> Visibility | None:
    """Return the first access-level modifier, ignoring setter-only restrictions."""
    for modifier in modifiers:
        # `private(set) var x` stays readable at its default level, so it is not
        # treated as `private` the way a bare access keyword is.
        if modifier.detail == "set":
            continue
        try:
            return Visibility(modifier.name)
        except ValueError:
            continue
    return None


def has_modifier(modifiers: Iterable[Modifier], *names: str) -> bool:
    wanted = set(names)
    return any(modifier.name in wanted for modifier in modifiers)


@dataclass(frozen=True)
class AccessorBlock:
    # An implicit getter (`var x: Int { 1 }`) is recorded as ("get",).
    accessors: Tuple[str, ...] = ("get",)

    @property
    def is_observer_only(self) -> bool:
        return bool(self.accessors) and all(
            accessor in OBSERVER_ACCESSORS for accessor in self.accessors
        )

    @property
    def is_computed(self) -> bool:
        return not self.is_observer_only


@dataclass(frozen=True)
class PatternBinding:
    pattern: str
    type_annotation: str | None = None
    initializer: str | None = None
    accessor_block: AccessorBlock | None = None

    @property
    def is_identifier(self) -> bool:
        # Tuple and wildcard patterns are not single stored names.
        name = self.pattern
        if len(name) > 2 and name.startswith("`") and name.endswith("`"):
            name = name[1:-1]
        return name != "_" and name.isidentifier()


@dataclass(frozen=True)
class VariableDecl:
    bindings: Tuple[PatternBinding, ...]
    modifiers: Tuple[Modifier, ...] = ()

    @property
    def visibility(self) -> Visibility | None:
        return access_modifier(self.modifiers)


@dataclass(frozen=True)
class CaseParameter:
    type_annotation: str
    label: str | None = None


@dataclass(frozen=True)
class CaseElement:
    name: str
    # None when the case has no parameter clause at all; `case a()` is ().
    parameters: Tuple[CaseParameter, ...] | None = None


@dataclass(frozen=True)
class CaseDecl:
    elements: Tuple[CaseElement, ...]


@dataclass(frozen=True)
class OpaqueMember:
    """Any member the synthesizer does not inspect (functions, nested types...)."""

    kind: str
    name: str = ""


Member = Union[VariableDecl, CaseDecl, OpaqueMember]


@dataclass(frozen=True)
class Declaration:
    kind: DeclarationKind
    name: str
    # Keyword as written by the host, e.g. "class" for a rejected declaration.
    keyword: str = ""
    members: Tuple[Member, ...] = ()
    modifiers: Tuple[Modifier, ...] = ()
    extended_type: str = ""
    attribute_location: SourceLocation = field(default_factory=SourceLocation)
    # Access level of an enclosing `extension`, supplied by the caller.
    enclosing_visibility: Visibility | None = None

    @property
    def visibility(self) -> Visibility | None:
        return access_modifier(self.modifiers) or self.enclosing_visibility

    @property
    def target_type(self) -> str:
        return self.extended_type or self.name

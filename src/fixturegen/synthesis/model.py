from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Tuple

from fixturegen.declarations import Visibility
from fixturegen.exceptions import Diagnostic

if TYPE_CHECKING:
    from fixturegen.synthesis.emission import ExtensionFragment

FIXTURE_PROTOCOL = "Fixtureable"
FIXTURE_PROPERTY = "fixture"
FIXTURE_PARAMETER_PREFIX = "fixture"
FIXTURE_BUILDER = "FixtureBuilder"
FIXTURE_LOOKUP = ".fixture"


@dataclass(frozen=True)
class FieldModel:
    name: str
    declared_type: str
    has_default_value: bool = False
    visibility: Visibility | None = None

    @property
    def fixture_parameter_name(self) -> str:
        return f"{FIXTURE_PARAMETER_PREFIX}{self.name}"


@dataclass(frozen=True)
class PayloadParameter:
    type_annotation: str
    label: str | None = None


@dataclass(frozen=True)
class CaseModel:
    name: str
    parameters: Tuple[PayloadParameter, ...] | None = None


@dataclass(frozen=True)
class SynthesisConfig:
    wrap_debug_guard: bool = True
    inherit_group_type: bool = True


@dataclass(frozen=True)
class SynthesisResult:
    fragments: List[ExtensionFragment] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def errors(self) -> List[str]:
        return [d.message for d in self.diagnostics if d.severity == "error"]

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def code(self) -> str:
        return "\n\n".join(fragment.code for fragment in self.fragments)

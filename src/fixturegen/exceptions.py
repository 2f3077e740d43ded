"""Diagnostics raised while expanding fixture declarations."""

from __future__ import annotations

from dataclasses import dataclass, field

from fixturegen.declarations import SourceLocation

DIAGNOSTIC_DOMAIN = "swift-fixtures"


@dataclass(frozen=True)
class Diagnostic:
    id: str
    message: str
    severity: str = "error"
    location: SourceLocation = field(default_factory=SourceLocation)

    def render(self) -> str:
        path = self.location.path or "<input>"
        return (
            f"{path}:{self.location.line}:{self.location.column}: "
            f"{self.severity}: {self.message}"
        )


class SynthesisError(Exception):
    """Fatal for one declaration, never for the compilation unit."""

    code = "synthesisError"
    message = "Fixture synthesis failed"

    def __init__(self, location: SourceLocation | None = None) -> None:
        super().__init__(self.message)
        self.location = location or SourceLocation()

    @property
    def diagnostic_id(self) -> str:
        return f"{DIAGNOSTIC_DOMAIN}.{self.code}"

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            id=self.diagnostic_id,
            message=self.message,
            severity="error",
            location=self.location,
        )


class NoCasesError(SynthesisError):
    code = "noEnumCases"
    message = "Enum must have at least one case to generate fixture"


class UnsupportedDeclarationKindError(SynthesisError):
    code = "unsupportedType"
    message = "Only structs and enums are supported for @Fixture macro"

    def __init__(
        self, location: SourceLocation | None = None, *, keyword: str = ""
    ) -> None:
        super().__init__(location)
        self.keyword = keyword

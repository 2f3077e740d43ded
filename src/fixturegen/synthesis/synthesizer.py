from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from fixturegen.declarations import Declaration, DeclarationKind
from fixturegen.exceptions import (
    NoCasesError,
    SynthesisError,
    UnsupportedDeclarationKindError,
)
from fixturegen.synthesis.emission import (
    BuilderFragment,
    ExtensionFragment,
    FactoryFragment,
    FixturePropertyFragment,
    InitializerFragment,
    MemberFragment,
    case_fixture_expression,
    record_fixture_expression,
)
from fixturegen.synthesis.extract import extract_cases, extract_fields
from fixturegen.synthesis.model import SynthesisConfig, SynthesisResult
from fixturegen.synthesis.visibility import (
    compute_effective_visibility,
    needs_explicit_builder_init,
)


@dataclass
class DeclarationSynthesizer:
    config: SynthesisConfig = field(default_factory=SynthesisConfig)

    def synthesize(self, declaration: Declaration) -> SynthesisResult:
        try:
            fragments = self.expand(declaration)
        except SynthesisError as exc:
            return SynthesisResult(diagnostics=[exc.to_diagnostic()])
        return SynthesisResult(fragments=fragments)

    def synthesize_many(
        self, declarations: Iterable[Declaration]
    ) -> List[SynthesisResult]:
        return [self.synthesize(declaration) for declaration in declarations]

    def expand(self, declaration: Declaration) -> List[ExtensionFragment]:
        """Expand one declaration, raising ``SynthesisError`` on rejection."""
        kind = declaration.kind
        if kind is DeclarationKind.RECORD:
            return [self._expand_record(declaration)]
        if kind is DeclarationKind.UNION:
            return [self._expand_union(declaration)]
        raise UnsupportedDeclarationKindError(
            declaration.attribute_location, keyword=declaration.keyword or str(kind)
        )

    def _expand_record(self, declaration: Declaration) -> ExtensionFragment:
        fields = tuple(
            extract_fields(
                declaration, inherit_group_type=self.config.inherit_group_type
            )
        )
        type_visibility = declaration.visibility
        effective = compute_effective_visibility(type_visibility, fields)
        members: List[MemberFragment] = []
        # A field-less struct already has an implicit `init()`.
        if fields:
            members.append(InitializerFragment(visibility=effective, fields=fields))
        # `static var fixture: Self` exposes only Self, so it keeps the type's level.
        members.append(
            FixturePropertyFragment(
                visibility=type_visibility,
                expression=record_fixture_expression(fields),
            )
        )
        members.append(
            BuilderFragment(
                visibility=effective,
                fields=fields,
                explicit_init=needs_explicit_builder_init(effective),
            )
        )
        members.append(FactoryFragment(visibility=effective, fields=fields))
        return self._extension(declaration, members)

    def _expand_union(self, declaration: Declaration) -> ExtensionFragment:
        cases = extract_cases(declaration)
        if not cases:
            raise NoCasesError(declaration.attribute_location)
        members: List[MemberFragment] = [
            FixturePropertyFragment(
                visibility=declaration.visibility,
                expression=case_fixture_expression(cases[0]),
            )
        ]
        return self._extension(declaration, members)

    def _extension(
        self, declaration: Declaration, members: List[MemberFragment]
    ) -> ExtensionFragment:
        return ExtensionFragment(
            extended_type=declaration.target_type,
            members=tuple(members),
            wrap_debug_guard=self.config.wrap_debug_guard,
        )


def synthesize(
    declaration: Declaration, config: SynthesisConfig | None = None
) -> SynthesisResult:
    return DeclarationSynthesizer(config=config or SynthesisConfig()).synthesize(
        declaration
    )

"""Synthesis subpackage for fixturegen."""

from fixturegen.synthesis.emission import (
    BuilderFragment,
    ExtensionFragment,
    FactoryFragment,
    FixturePropertyFragment,
    InitializerFragment,
)
from fixturegen.synthesis.extract import extract_cases, extract_fields
from fixturegen.synthesis.model import (
    CaseModel,
    FieldModel,
    PayloadParameter,
    SynthesisConfig,
    SynthesisResult,
)
from fixturegen.synthesis.synthesizer import DeclarationSynthesizer, synthesize
from fixturegen.synthesis.visibility import (
    compute_effective_visibility,
    visibility_rank,
)

__all__ = [
    "BuilderFragment",
    "CaseModel",
    "DeclarationSynthesizer",
    "ExtensionFragment",
    "FactoryFragment",
    "FieldModel",
    "FixturePropertyFragment",
    "InitializerFragment",
    "PayloadParameter",
    "SynthesisConfig",
    "SynthesisResult",
    "compute_effective_visibility",
    "extract_cases",
    "extract_fields",
    "synthesize",
    "visibility_rank",
]

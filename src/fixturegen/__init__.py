"""fixturegen package root."""

from fixturegen.exceptions import (
    Diagnostic,
    NoCasesError,
    SynthesisError,
    UnsupportedDeclarationKindError,
)

__all__ = [
    "__version__",
    "Diagnostic",
    "NoCasesError",
    "SynthesisError",
    "UnsupportedDeclarationKindError",
]

__version__ = "0.1.0"

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from fixturegen.config import merge_payload, synthesis_config, synthesis_defaults
from fixturegen.runtime.json_io import (
    dump_json_pretty,
    load_json_object_path,
    load_json_object_text,
)
from fixturegen.schema import (
    DeclarationDTO,
    ExpansionRequest,
    ExpansionResponseDTO,
    expansion_entry,
    to_declaration,
)
from fixturegen.synthesis.model import SynthesisConfig, SynthesisResult
from fixturegen.synthesis.synthesizer import DeclarationSynthesizer

app = typer.Typer(add_completion=False)

_STDIN_ALIAS = "-"


def _read_payload(input_path: Optional[Path]) -> dict[str, object]:
    try:
        if input_path is None or str(input_path) == _STDIN_ALIAS:
            return load_json_object_text(sys.stdin.read())
        return load_json_object_path(input_path)
    except OSError as exc:
        raise typer.BadParameter(f"Unable to read payload: {exc}") from exc
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid JSON payload: {exc}") from exc


def build_expansion_request(payload: dict[str, object]) -> ExpansionRequest:
    # A bare declaration object is accepted as a one-element batch.
    if "declarations" not in payload:
        payload = {"declarations": [payload]}
    try:
        return ExpansionRequest.model_validate(payload)
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid declaration payload: {exc}") from exc


def resolve_config(
    request: ExpansionRequest,
    *,
    root: Optional[Path],
    config: Optional[Path],
    wrap_debug_guard: Optional[bool],
    inherit_group_type: Optional[bool],
) -> SynthesisConfig:
    defaults = synthesis_defaults(root=root, config_path=config)
    defaults = merge_payload(
        {
            "wrap_debug_guard": request.wrap_debug_guard,
            "inherit_group_type": request.inherit_group_type,
        },
        defaults,
    )
    merged = merge_payload(
        {
            "wrap_debug_guard": wrap_debug_guard,
            "inherit_group_type": inherit_group_type,
        },
        defaults,
    )
    return synthesis_config(merged)


def run_expansion(
    request: ExpansionRequest, config: SynthesisConfig
) -> List[tuple[DeclarationDTO, SynthesisResult]]:
    synthesizer = DeclarationSynthesizer(config=config)
    results: List[tuple[DeclarationDTO, SynthesisResult]] = []
    for dto in request.declarations:
        try:
            declaration = to_declaration(dto)
        except ValueError as exc:
            raise typer.BadParameter(f"Invalid declaration '{dto.name}': {exc}") from exc
        results.append((dto, synthesizer.synthesize(declaration)))
    return results


def _load_request(
    input_path: Optional[Path],
    *,
    root: Optional[Path],
    config: Optional[Path],
    wrap_debug_guard: Optional[bool],
    inherit_group_type: Optional[bool],
) -> List[tuple[DeclarationDTO, SynthesisResult]]:
    request = build_expansion_request(_read_payload(input_path))
    synthesis = resolve_config(
        request,
        root=root,
        config=config,
        wrap_debug_guard=wrap_debug_guard,
        inherit_group_type=inherit_group_type,
    )
    return run_expansion(request, synthesis)


def _write_output(output_path: Optional[Path], text: str) -> None:
    if output_path is None or str(output_path) == _STDIN_ALIAS:
        typer.echo(text)
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text + "\n", encoding="utf-8")


def _emit_diagnostics(results: List[tuple[DeclarationDTO, SynthesisResult]]) -> int:
    exit_code = 0
    for _dto, result in results:
        for diagnostic in result.diagnostics:
            typer.secho(diagnostic.render(), err=True, fg=typer.colors.RED)
            if diagnostic.severity == "error":
                exit_code = 1
    return exit_code


@app.command("expand")
def expand(
    input_path: Optional[Path] = typer.Option(
        None, "--input", help="JSON declaration payload; use '-' for stdin."
    ),
    output_path: Optional[Path] = typer.Option(
        None, "--output", help="Write expansion response JSON to this path."
    ),
    config: Optional[Path] = typer.Option(None, "--config"),
    root: Optional[Path] = typer.Option(None, "--root"),
    wrap_debug_guard: Optional[bool] = typer.Option(
        None, "--debug-guard/--no-debug-guard"
    ),
    inherit_group_type: Optional[bool] = typer.Option(
        None, "--inherit-group-type/--no-inherit-group-type"
    ),
) -> None:
    """Expand declarations and emit generated fragments plus diagnostics as JSON."""
    results = _load_request(
        input_path,
        root=root,
        config=config,
        wrap_debug_guard=wrap_debug_guard,
        inherit_group_type=inherit_group_type,
    )
    entries = [expansion_entry(dto.name, result) for dto, result in results]
    errors = [error for _dto, result in results for error in result.errors]
    response = ExpansionResponseDTO(
        results=entries, errors=errors, exit_code=1 if errors else 0
    )
    _write_output(output_path, dump_json_pretty(response.model_dump()))
    exit_code = _emit_diagnostics(results)
    if exit_code:
        raise typer.Exit(code=exit_code)


@app.command("render")
def render(
    input_path: Optional[Path] = typer.Option(
        None, "--input", help="JSON declaration payload; use '-' for stdin."
    ),
    output_path: Optional[Path] = typer.Option(
        None, "--output", help="Write generated Swift source to this path."
    ),
    config: Optional[Path] = typer.Option(None, "--config"),
    root: Optional[Path] = typer.Option(None, "--root"),
    wrap_debug_guard: Optional[bool] = typer.Option(
        None, "--debug-guard/--no-debug-guard"
    ),
    inherit_group_type: Optional[bool] = typer.Option(
        None, "--inherit-group-type/--no-inherit-group-type"
    ),
) -> None:
    """Print the generated extensions as Swift source."""
    results = _load_request(
        input_path,
        root=root,
        config=config,
        wrap_debug_guard=wrap_debug_guard,
        inherit_group_type=inherit_group_type,
    )
    blocks = [result.code for _dto, result in results if result.fragments]
    if blocks:
        _write_output(output_path, "\n\n".join(blocks))
    exit_code = _emit_diagnostics(results)
    if exit_code:
        raise typer.Exit(code=exit_code)


def main() -> None:  # pragma: no cover
    app()

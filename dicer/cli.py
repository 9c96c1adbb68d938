from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Optional, Union

import typer

from dicer.core.errors import DicerError, LoadError
from dicer.core.expand.expand_template import expand_result
from dicer.core.expand.template_config import TemplateConfigError, load_and_merge
from dicer.core.io.load_inputs import compile_pattern, iter_line_inputs, read_lines
from dicer.core.logging_config import setup_logging
from dicer.core.model import DiceExpression, LiteralRun, Ok, SimpleReference, Token
from dicer.core.scan.scan_template import has_real_reference, normalize, scan_template

app = typer.Typer(add_completion=False, no_args_is_help=True)

CliError = Union[DicerError, LoadError]

TEMPLATE_FILE_HELP = "Optional YAML file to add/override named templates"


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
) -> None:
    """Dicer: expand %N / %[N...] templates against a list of inputs."""
    if verbose:
        setup_logging(verbose=True)


@app.command("expand", context_settings={"ignore_unknown_options": True})
def expand_cmd(
    template: str = typer.Argument(..., help="Template, or a template name with --named"),
    inputs: list[str] = typer.Argument(
        None,
        help="Inputs, referenced as %1, %2, ...; put -- before an input spelled like an option",
    ),
    named: bool = typer.Option(False, "--named", help="Treat TEMPLATE as a named template"),
    template_file: Optional[str] = typer.Option(
        None, "--template-file", envvar="DICER_TEMPLATE_FILE", help=TEMPLATE_FILE_HELP
    ),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Expand a template once against the given inputs."""
    _check_format(format)
    tpl = _resolve_template(template, named, template_file)

    result = expand_result(tpl, list(inputs or []))
    ok = isinstance(result, Ok)

    if format == "json":
        _emit_json(
            "expand",
            ok=ok,
            errors=[] if isinstance(result, Ok) else [result],
            exit_code=0 if ok else 2,
            output=result.output if isinstance(result, Ok) else None,
        )

    if isinstance(result, Ok):
        typer.echo(result.output)
        return
    _print_errors([result])
    raise typer.Exit(code=2)


@app.command("match")
def match_cmd(
    template: str = typer.Argument(..., help="Template, or a template name with --named"),
    regex: str = typer.Option(..., "--regex", "-e", help="Pattern whose capture groups become the inputs"),
    input: str = typer.Option("-", "--input", "-i", help="File to read lines from (- for stdin)"),
    named: bool = typer.Option(False, "--named", help="Treat TEMPLATE as a named template"),
    template_file: Optional[str] = typer.Option(
        None, "--template-file", envvar="DICER_TEMPLATE_FILE", help=TEMPLATE_FILE_HELP
    ),
) -> None:
    """Expand the template for every line matching --regex; other lines are skipped."""
    tpl = _resolve_template(template, named, template_file)

    _, scan_err = scan_template(normalize(tpl, has_real_reference(tpl)))
    if scan_err is not None:
        _print_errors([scan_err])
        raise typer.Exit(code=2)

    try:
        pattern = compile_pattern(regex)
        lines = read_lines(input)
    except LoadError as e:
        _print_errors([e])
        raise typer.Exit(code=1 if e.code.startswith("E_FILE") else 2)

    for lineno, line_inputs in iter_line_inputs(pattern, lines):
        result = expand_result(tpl, line_inputs)
        if not isinstance(result, Ok):
            typer.echo(f"line {lineno}: {_render(result)}", err=True)
            raise typer.Exit(code=2)
        typer.echo(result.output)


@app.command("check")
def check_cmd(
    template: str = typer.Argument(..., help="Template to scan"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Scan a template without inputs and list its tokens."""
    _check_format(format)

    has_ref = has_real_reference(template)
    tokens, err = scan_template(normalize(template, has_ref))

    if format == "json":
        _emit_json(
            "check",
            ok=err is None,
            errors=[err] if err is not None else [],
            exit_code=0 if err is None else 2,
            auto_append=not has_ref,
            tokens=[_token_item(t) for t in tokens],
        )

    if err is not None:
        _print_errors([err])
        raise typer.Exit(code=2)

    typer.echo("Tokens:")
    for tok in tokens:
        typer.echo(f"- {_describe(tok)}")
    if not has_ref:
        typer.echo("Note: no reference found, %1 appended")
    typer.echo(f"OK: {len(tokens)} tokens")


@app.command("templates")
def templates(
    template_file: Optional[str] = typer.Option(
        None, "--template-file", envvar="DICER_TEMPLATE_FILE", help=TEMPLATE_FILE_HELP
    ),
) -> None:
    """List available named templates."""
    templates_map = _load_templates(template_file)

    typer.echo("Templates:")
    for name in sorted(templates_map.keys()):
        typer.echo(f"- {name}: {templates_map[name]}")


def _check_format(format: str) -> None:
    if format not in ("text", "json"):
        _print_errors(
            [
                LoadError(
                    code="E_UNKNOWN_FORMAT",
                    message=f"unknown format: {format} (choose one of: text, json)",
                    path="format",
                )
            ]
        )
        raise typer.Exit(code=2)


def _load_templates(template_file: Optional[str]) -> dict[str, str]:
    try:
        return load_and_merge(template_file)
    except FileNotFoundError:
        _print_errors(
            [
                LoadError(
                    code="E_TEMPLATE_FILE_NOT_FOUND",
                    message=f"template file not found: {template_file}",
                    path="template_file",
                )
            ]
        )
        raise typer.Exit(code=1)
    except TemplateConfigError as e:
        _print_errors(
            [
                LoadError(
                    code="E_TEMPLATE_FILE_INVALID",
                    message=str(e),
                    file=template_file,
                    path="template_file",
                )
            ]
        )
        raise typer.Exit(code=2)


def _resolve_template(template: str, named: bool, template_file: Optional[str]) -> str:
    if not named:
        return template

    templates_map = _load_templates(template_file)
    if template not in templates_map:
        _print_errors(
            [
                LoadError(
                    code="E_UNKNOWN_TEMPLATE",
                    message=f"unknown template: {template} (choose one of: {', '.join(sorted(templates_map.keys()))})",
                    path="template",
                )
            ]
        )
        raise typer.Exit(code=2)
    return templates_map[template]


def _token_item(tok: Token) -> dict[str, Any]:
    if isinstance(tok, LiteralRun):
        return {"kind": "literal", "text": tok.text}
    if isinstance(tok, SimpleReference):
        return {"kind": "reference", "index": tok.index, "position": tok.position}
    return {
        "kind": "dice",
        "index": tok.index,
        "position": tok.position,
        "source": tok.source,
        "operations": [
            {"delimiter": op.delimiter, "selector": str(op.selector)} for op in tok.operations
        ],
    }


def _describe(tok: Token) -> str:
    if isinstance(tok, LiteralRun):
        return f"literal {tok.text!r}"
    if isinstance(tok, SimpleReference):
        return f"char {tok.position}: reference %{tok.index}"
    assert isinstance(tok, DiceExpression)
    ops = " ".join(repr(str(op)) for op in tok.operations) or "none"
    return f"char {tok.position}: dice %[{tok.source}] index={tok.index} ops={ops}"


def _to_item(e: CliError) -> dict[str, Any]:
    source = "load" if isinstance(e, LoadError) else "expand"
    item = {"code": e.code, "message": e.message, "severity": "error", "source": source}
    item.update(asdict(e))
    return item


def _emit_json(command: str, *, ok: bool, errors: list[CliError], exit_code: int, **extra: Any) -> None:
    payload = {
        "tool": "dicer",
        "command": command,
        "ok": ok,
        "error_count": len(errors),
        "errors": [_to_item(e) for e in errors],
    }
    payload.update(extra)
    typer.echo(json.dumps(payload, indent=2, sort_keys=True))
    raise typer.Exit(code=exit_code)


def _render(e: CliError) -> str:
    if isinstance(e, DicerError):
        return f"{e.code}: {e}"
    return str(e)


def _print_errors(errors: list[CliError]) -> None:
    for e in errors:
        typer.echo(_render(e), err=True)


def main() -> None:
    app(prog_name="dicer")


cli = typer.main.get_command(app)

if __name__ == "__main__":
    main()

"""req2uml CLI application entry point.

Built with `Typer <https://typer.tiangolo.com/>`_ and
`Rich <https://rich.readthedocs.io/>`_.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from req2uml.cli.config import Req2UmlConfig, load_config
from req2uml.cli.errors import CLIError, error_handler
from req2uml.cli.init_cmd import run_init
from req2uml.cli.logging_setup import setup_logging

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="req2uml",
    help="req2uml – turn natural-language requirements into UML class diagrams.",
    add_completion=False,
    no_args_is_help=True,
)

_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from req2uml import __version__

        _console.print(f"req2uml {__version__}")
        raise typer.Exit()


def _config(ctx: typer.Context) -> Req2UmlConfig:
    if isinstance(ctx.obj, Req2UmlConfig):
        return ctx.obj
    return load_config()


def _read_text(path: Path) -> str:
    if not path.is_file():
        raise CLIError(f"File not found: {path}")
    return path.read_text(encoding="utf-8")


def _emit(payload: dict[str, Any], output: Optional[Path]) -> None:
    """Write *payload* as JSON to *output*, or to stdout."""
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output is None:
        typer.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    _console.print(f"[green]Wrote {output}[/green]")


# ---------------------------------------------------------------------------
# Main callback (global options)
# ---------------------------------------------------------------------------


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) output.",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration TOML file.",
    ),
) -> None:
    """Global options for the req2uml CLI."""
    with error_handler(_console):
        cfg = load_config(config)
        setup_logging("DEBUG" if verbose else cfg.log_level, cfg.log_file)
        ctx.obj = cfg


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------


@app.command()
def init(
    path: Optional[Path] = typer.Argument(
        None,
        help="Target directory to initialise. Defaults to current directory.",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing configuration file.",
    ),
) -> None:
    """Write a default ``.req2uml/config.toml``."""
    with error_handler(_console):
        config_path = run_init(path, force=force)
        _console.print(f"[green]Initialised req2uml configuration at {config_path}[/green]")


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


@app.command()
def generate(
    ctx: typer.Context,
    requirement_file: Path = typer.Argument(
        ..., help="Text file holding the requirement."
    ),
    question: Optional[str] = typer.Option(
        None,
        "--question",
        "-q",
        help="Clarification question returned by a previous run.",
    ),
    answer: Optional[str] = typer.Option(
        None,
        "--answer",
        "-a",
        help="Your answer to --question.",
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="LiteLLM model identifier (overrides configuration).",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the outcome JSON to this file instead of stdout.",
    ),
) -> None:
    """Run both generation stages and print the outcome JSON.

    Example::

        req2uml generate shop.txt
        req2uml generate shop.txt -q "Is Product abstract?" -a "No"
    """
    with error_handler(_console):
        from req2uml.llm.gateway import LLMGateway
        from req2uml.models.outcome import (
            ClarificationContext,
            DiagramRequest,
            outcome_to_wire,
        )
        from req2uml.pipeline.orchestrator import DiagramPipeline

        if (question is None) != (answer is None):
            raise CLIError("--question and --answer must be given together")

        cfg = _config(ctx)
        gateway_config = cfg.gateway_config()
        if model:
            gateway_config.model = model

        request = DiagramRequest(
            requirement=_read_text(requirement_file),
            clarification_context=(
                ClarificationContext(question=question, answer=answer)
                if question is not None
                else None
            ),
        )
        pipeline = DiagramPipeline(
            generate=LLMGateway(gateway_config).generate,
            config=cfg.pipeline_config(),
        )
        outcome = pipeline.process_request(request)

        if outcome.status == "needs_clarification":
            _console.print("[yellow]Clarification needed:[/yellow]")
            _console.print(outcome.question, markup=False)
        else:
            _console.print(
                f"[green]Diagram with {outcome.data.node_count} classes "
                f"and {outcome.data.edge_count} relationships[/green]"
            )
        _emit(outcome_to_wire(outcome), output)


# ---------------------------------------------------------------------------
# normalize
# ---------------------------------------------------------------------------


@app.command()
def normalize(
    ctx: typer.Context,
    response_file: Path = typer.Argument(
        ..., help="File holding raw generator output."
    ),
    stage: int = typer.Option(
        1,
        "--stage",
        "-s",
        min=1,
        max=2,
        help="1 = candidate extraction output, 2 = diagram elaboration output.",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the result JSON to this file instead of stdout.",
    ),
) -> None:
    """Repair and normalize saved generator output without calling an LLM.

    Stage 1 prints the candidate set and its consistency report; stage 2
    prints the assembled diagram graph.
    """
    with error_handler(_console):
        from req2uml.pipeline.orchestrator import DiagramPipeline

        raw = _read_text(response_file)
        pipeline = DiagramPipeline(config=_config(ctx).pipeline_config())

        if stage == 1:
            candidates, report = pipeline.run_stage1(raw)
            payload = {
                "candidates": candidates.model_dump(mode="json", by_alias=True),
                "report": report.model_dump(mode="json"),
            }
            _console.print(
                f"{len(candidates.classes)} classes, "
                f"{len(candidates.relationships)} relationships, "
                f"valid={report.is_valid}"
            )
        else:
            graph = pipeline.run_stage2(raw)
            payload = graph.to_wire()
            _console.print(f"{graph.node_count} nodes, {graph.edge_count} edges")
        _emit(payload, output)

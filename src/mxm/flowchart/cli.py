"""
mxm-flowchart CLI: render flowchart sources and markdown documents.

Commands
--------
- list      : print available samples
- render    : render a flowchart file, stdin or sample
- markdown  : render every mermaid block of a markdown document

Global options
--------------
--format {plain,rich,json}  Select output format (default: plain)
--max-width N               Switch LR/RL to TB/BT above N columns (default: 0 = off)
--ascii / --unicode         Glyph set (default: --unicode)

Exit codes
----------
0 = success
1 = diagram error (unsupported, malformed or cyclic flowchart)
2 = unknown sample or unreadable input
"""

from __future__ import annotations

import json
import sys
from typing import Annotated, Literal

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
import typer

from mxm.flowchart.api import render_with_layout
from mxm.flowchart.errors import FlowchartError
from mxm.flowchart.markdown import render_markdown
from mxm.flowchart.model import Layout
from mxm.flowchart.registry import get_sample, get_samples

app = typer.Typer(help="mxm-flowchart: flowchart source to box-drawing diagrams")

Format = Literal["plain", "rich", "json"]


def _read_source(path: str) -> str:
    """
    Read diagram or document text from a path, or stdin for '-'.
    """
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as fh:
        return fh.read()


def _layout_json(layout: Layout, lines: list[str]) -> dict[str, object]:
    graph = layout.graph
    nodes = [
        {
            "id": node_id,
            "label": graph.nodes[node_id].label,
            "layer": layout.layers[node_id],
            "x": layout.positions[node_id].x,
            "y": layout.positions[node_id].y,
            "width": graph.nodes[node_id].width,
            "height": graph.nodes[node_id].height,
        }
        for node_id in sorted(graph.nodes)
    ]
    edges = [{"u": e.source, "v": e.target} for e in graph.edges]
    return {
        "direction": graph.direction.value,
        "nodes": nodes,
        "edges": edges,
        "lines": lines,
    }


@app.callback()
def _main_options(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    format: Annotated[
        Format,
        typer.Option(
            "--format",
            "-f",
            case_sensitive=False,
            help="Output format: plain, rich, or json (default: plain).",
        ),
    ] = "plain",
    max_width: Annotated[
        int,
        typer.Option(
            "--max-width",
            "-w",
            min=0,
            envvar="MXM_FLOWCHART_MAX_WIDTH",
            help="Available columns; wider LR/RL diagrams are redrawn vertically (0 = off).",
        ),
    ] = 0,
    ascii: Annotated[
        bool,
        typer.Option(
            "--ascii/--unicode",
            envvar="MXM_FLOWCHART_ASCII",
            help="Draw with plain ASCII glyphs (default: --unicode).",
        ),
    ] = False,
) -> None:
    """
    Capture global CLI options and stash in the Typer context.
    """
    ctx.obj = {"format": format, "max_width": max_width, "ascii": ascii}


@app.command("list")
def list_samples(ctx: typer.Context) -> None:
    """
    List built-in sample flowcharts.
    """
    fmt: Format = ctx.obj["format"]
    names = sorted(get_samples().keys())

    if fmt == "json":
        typer.echo(json.dumps({"samples": names}, separators=(",", ":")))
        return

    if fmt == "rich":
        console = Console()
        table = Table(title="Sample Flowcharts")
        table.add_column("Sample", style="bold")
        for name in names:
            table.add_row(name)
        console.print(table)
        return

    # plain
    for name in names:
        typer.echo(name)


@app.command("render")
def render(
    ctx: typer.Context,
    path: Annotated[
        str | None,
        typer.Argument(help="Flowchart file ('-' for stdin)."),
    ] = None,
    sample: Annotated[
        str | None,
        typer.Option("--sample", "-s", help="Render a built-in sample instead of a file."),
    ] = None,
) -> None:
    """
    Render a flowchart.
    - plain : diagram rows
    - rich  : panel containing the same rows
    - json  : { "direction": ..., "nodes": [...], "edges": [...], "lines": [...] }
    """
    fmt: Format = ctx.obj["format"]

    try:
        if sample is not None:
            source = get_sample(sample)
            title = sample
        elif path is not None:
            source = _read_source(path)
            title = path
        else:
            typer.echo("Provide a PATH or --sample NAME", err=True)
            raise typer.Exit(code=2)
    except (KeyError, OSError, UnicodeDecodeError) as exc:
        typer.echo(str(exc).strip("'\""), err=True)
        raise typer.Exit(code=2)  # noqa: B904

    try:
        layout, lines = render_with_layout(
            source, {"max_width": ctx.obj["max_width"], "ascii": ctx.obj["ascii"]}
        )
    except FlowchartError as exc:
        typer.echo(f"Diagram error: {exc}", err=True)
        raise typer.Exit(code=1)  # noqa: B904

    if fmt == "json":
        typer.echo(json.dumps(_layout_json(layout, lines), separators=(",", ":")))
        return

    text = "\n".join(lines)

    if fmt == "rich":
        console = Console()
        console.print(
            Panel.fit(Text(text), title=f"Flowchart: {title}", border_style="cyan")
        )
        return

    # plain
    typer.echo(text)


@app.command("markdown")
def markdown(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Markdown file ('-' for stdin).")],
) -> None:
    """
    Print a markdown document with its mermaid blocks rendered as diagrams.

    Blocks that cannot be rendered are shown as source under a notice; they
    never fail the command.
    """
    try:
        document = _read_source(path)
    except (OSError, UnicodeDecodeError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2)  # noqa: B904

    lines = render_markdown(
        document, width=ctx.obj["max_width"], ascii=ctx.obj["ascii"]
    )

    if ctx.obj["format"] == "json":
        typer.echo(json.dumps({"lines": lines}, separators=(",", ":")))
        return

    typer.echo("\n".join(lines))


def main(argv: list[str] | None = None) -> int:
    """
    Entry point wrapper that returns an exit code (useful for script wiring/tests).
    """
    try:
        # Non-standalone click returns the exit code of typer.Exit instead of raising.
        rv = app(args=argv, standalone_mode=False)
        return rv if isinstance(rv, int) else 0
    except typer.Exit as e:
        return e.exit_code
    except Exception as exc:  # Safety net
        typer.echo(f"Unexpected error: {exc}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))

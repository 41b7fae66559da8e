# src/quire/cli/app.py
"""Command-line interface for Quire.

This module provides a thin Typer wrapper around the commands layer.
Each command:
1. Parses args (via Typer)
2. Creates progress callbacks (for Rich display)
3. Calls commands module functions
4. Renders results with Rich
"""

from __future__ import annotations

import logging
import os

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from quire import __version__
from quire.commands import (
    ProgressUpdate,
    backfill,
    config_cmd,
    delete,
    ingest,
    list_cmd,
    query,
    show,
    status,
)
from quire.commands.base import ConfirmRequest, FileIngestResult, IngestResult
from quire.config import load_env_file
from quire.log import configure_logging

app = typer.Typer(
    name="quire",
    help="Quire - ask questions about your PDFs.",
    no_args_is_help=True,
)
console = Console()

PREVIEW_CHARS = 100


def version_callback(value: bool) -> None:
    if value:
        console.print(f"quire {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show debug logging.",
    ),
) -> None:
    """Quire - ask questions about your PDFs."""
    load_env_file()
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


def _error(message: str | None, plain: bool) -> None:
    if plain:
        console.print(f"Error: {message}")
    else:
        console.print(f"[red]Error: {message}[/red]")


def _preview(text: str) -> str:
    preview = text[:PREVIEW_CHARS].replace("\n", " ")
    if len(text) > PREVIEW_CHARS:
        preview += "..."
    return escape(preview)


@app.command()
def ingest_cmd(
    path: str = typer.Argument(..., help="PDF file or directory of PDFs to ingest"),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
    no_progress: bool = typer.Option(
        False,
        "--no-progress",
        help="Disable progress bars",
    ),
) -> None:
    """Ingest a PDF file or a directory of PDFs."""
    show_progress = not plain and not no_progress and console.is_terminal

    if show_progress:
        _ingest_with_progress(path, data_dir, config_file)
    else:
        _ingest_simple(path, data_dir, config_file, plain)


def _ingest_with_progress(
    path: str,
    data_dir: str | None,
    config_file: str | None,
) -> None:
    """Ingest with Rich progress bars."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[bold]{task.fields[stage]:>12}", justify="right"),
        BarColumn(bar_width=20),
        TextColumn("{task.fields[progress_text]}", style="cyan"),
        TextColumn("{task.description}", style="dim"),
        console=console,
    ) as progress:
        files_task = progress.add_task("", total=None, stage="Files", progress_text="")
        stage_task = progress.add_task("", total=100, stage="", visible=False, progress_text="")

        total_files = 0

        def on_file_start(filepath: str, index: int, total: int) -> None:
            nonlocal total_files
            total_files = total
            progress.update(
                files_task,
                description=os.path.basename(filepath),
                completed=index,
                total=total,
                progress_text=f"{index + 1}/{total}",
            )

        def on_progress(update: ProgressUpdate) -> None:
            if update.total > 1:
                progress.update(
                    stage_task,
                    visible=True,
                    stage=update.stage.value,
                    progress_text=f"{update.percentage}%",
                    description=f"({update.current}/{update.total})",
                    total=update.total,
                    completed=update.current,
                )
            else:
                progress.update(
                    stage_task,
                    visible=True,
                    stage=update.stage.value,
                    progress_text="",
                    description=update.message or "",
                    total=None,
                )

        def on_file_complete(file_result: FileIngestResult) -> None:
            progress.update(stage_task, visible=False)
            if file_result.failed:
                progress.console.print(
                    f"[red]Failed {file_result.filepath}: {file_result.reason}[/red]"
                )

        result = ingest.ingest(
            path=path,
            data_dir=data_dir,
            config_path=config_file,
            on_progress=on_progress,
            on_file_start=on_file_start,
            on_file_complete=on_file_complete,
        )

        progress.update(
            files_task,
            completed=total_files,
            progress_text="Done",
            description="",
        )

    _render_ingest_result(result, plain=False)


def _ingest_simple(
    path: str,
    data_dir: str | None,
    config_file: str | None,
    plain: bool,
) -> None:
    """Ingest with simple console output."""

    def on_file_complete(file_result: FileIngestResult) -> None:
        if plain:
            return
        if file_result.failed:
            console.print(f"[red]Failed {file_result.filepath}: {file_result.reason}[/red]")
        else:
            console.print(
                f"[green]Ingested {file_result.filepath}[/green] "
                f"[dim]({file_result.document_id})[/dim]"
            )

    result = ingest.ingest(
        path=path,
        data_dir=data_dir,
        config_path=config_file,
        on_file_complete=on_file_complete,
    )

    _render_ingest_result(result, plain=plain)


def _render_ingest_result(result: IngestResult, plain: bool) -> None:
    """Render ingest result to console."""
    if not result.success:
        _error(result.error, plain)
        raise typer.Exit(1)

    if result.error and not result.file_results:
        # Nothing to do, e.g. an empty directory
        console.print(result.error if plain else f"[yellow]{result.error}[/yellow]")
        return

    if plain:
        for file_result in result.file_results:
            if file_result.failed:
                console.print(f"Failed {file_result.filepath}: {file_result.reason}")
            else:
                console.print(f"{file_result.document_id} {file_result.filepath}")
        console.print(f"Ingested {result.files_processed} files ({result.total_chunks} chunks)")
        if result.total_pending > 0:
            console.print(f"{result.total_pending} chunks stored without embeddings")
        if result.files_failed > 0:
            console.print(f"Failed {result.files_failed} files")
    else:
        console.print()
        console.print(
            f"[green]Ingested {result.files_processed} files ({result.total_chunks} chunks)[/green]"
        )
        if result.total_pending > 0:
            console.print(
                f"[yellow]{result.total_pending} chunks stored without embeddings. "
                "Run 'quire backfill' to retry.[/yellow]"
            )
        if result.files_failed > 0:
            console.print(f"[red]Failed {result.files_failed} files[/red]")


# Rename function to avoid conflict with module
ingest_cmd.__name__ = "ingest"
app.registered_commands[0].name = "ingest"


@app.command(name="query")
def query_cmd(
    question: str = typer.Argument(..., help="Question to ask"),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    k: int = typer.Option(
        None,
        "--k",
        "-k",
        help="Number of chunks to use as context",
    ),
    raw: bool = typer.Option(
        False,
        "--raw",
        "-r",
        help="Show the retrieved chunks without generating an answer",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Ask a question about the ingested documents."""
    result = query.query(
        question=question,
        data_dir=data_dir,
        config_path=config_file,
        k=k,
        raw=raw,
    )

    if not result.success:
        _error(result.error, plain)
        raise typer.Exit(1)

    if result.answer:
        if plain:
            console.print(f"Answer: {result.answer}")
        else:
            border = "yellow" if result.insufficient_context else "green"
            console.print(Panel(Markdown(result.answer), title="Answer", border_style=border))
        console.print()

    if not result.results:
        if raw:
            console.print("No results found." if plain else "[yellow]No results found.[/yellow]")
        raise typer.Exit(0)

    if plain:
        console.print("Sources:")
        for i, r in enumerate(result.results, 1):
            console.print(f"  [{i}] {r.source} #{r.chunk_index} (score: {r.score:.3f})")
            console.print(f"      {_preview(r.content)}")
    else:
        console.print("[bold]Sources:[/bold]")
        for i, r in enumerate(result.results, 1):
            console.print(
                f"  [{i}] [cyan]{r.source}[/cyan] #{r.chunk_index} "
                f"[dim](score: {r.score:.3f})[/dim]"
            )
            console.print(f"      [dim]{_preview(r.content)}[/dim]")


@app.command(name="list")
def list_documents_cmd(
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """List stored documents, newest first."""
    result = list_cmd.list_documents(data_dir=data_dir, config_path=config_file)

    if not result.success:
        _error(result.error, plain)
        raise typer.Exit(1)

    if not result.documents:
        console.print("No documents stored." if plain else "[dim]No documents stored.[/dim]")
        raise typer.Exit(0)

    if plain:
        console.print(f"Documents ({len(result.documents)}):")
        for doc in result.documents:
            console.print(
                f"  {doc.document_id}  {doc.filename} "
                f"({doc.page_count} pages, {doc.chunk_count} chunks) {doc.uploaded_at}"
            )
    else:
        table = Table(title=f"Documents ({len(result.documents)})")
        table.add_column("ID", style="dim")
        table.add_column("File", style="cyan")
        table.add_column("Pages", justify="right")
        table.add_column("Chunks", justify="right")
        table.add_column("Uploaded", style="green")

        for doc in result.documents:
            table.add_row(
                doc.document_id,
                doc.filename,
                str(doc.page_count),
                str(doc.chunk_count),
                doc.uploaded_at,
            )

        console.print(table)


@app.command(name="show")
def show_cmd(
    document_id: str = typer.Argument(..., help="Document id (see 'quire list')"),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Show a document and its chunks."""
    result = show.show(document_id, data_dir=data_dir, config_path=config_file)

    if not result.success or result.document is None:
        _error(result.error, plain)
        raise typer.Exit(1)

    doc = result.document
    if plain:
        console.print(f"{doc.filename} ({doc.document_id})")
        console.print(f"  Pages: {doc.page_count}  Chunks: {doc.chunk_count}  Size: {doc.size_bytes}")
        for chunk in result.chunks:
            marker = "" if chunk.embedded else " (no embedding)"
            console.print(f"  #{chunk.index} [{chunk.start_offset}:{chunk.end_offset}]{marker}")
            console.print(f"      {_preview(chunk.content)}")
        return

    console.print(
        Panel(
            f"Pages: {doc.page_count}\nChunks: {doc.chunk_count}\n"
            f"Size: {doc.size_bytes} bytes\nUploaded: {doc.uploaded_at}",
            title=f"{doc.filename} [dim]({doc.document_id})[/dim]",
            border_style="cyan",
        )
    )

    table = Table()
    table.add_column("#", justify="right")
    table.add_column("Offsets", style="dim")
    table.add_column("Embedded", justify="center")
    table.add_column("Content")
    for chunk in result.chunks:
        table.add_row(
            str(chunk.index),
            f"{chunk.start_offset}-{chunk.end_offset}",
            "[green]yes[/green]" if chunk.embedded else "[yellow]no[/yellow]",
            _preview(chunk.content),
        )
    console.print(table)


@app.command(name="delete")
def delete_cmd(
    document_id: str = typer.Argument(..., help="Document id to delete"),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip confirmation prompt",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Delete a document and all its chunks."""

    def cli_confirm(request: ConfirmRequest) -> bool:
        """CLI confirmation callback using typer.confirm."""
        console.print(request.message)
        if request.details:
            console.print(request.details if plain else f"[yellow]{request.details}[/yellow]")
        return typer.confirm("Continue?")

    result = delete.delete(
        document_id=document_id,
        data_dir=data_dir,
        config_path=config_file,
        on_confirm=None if force else cli_confirm,
    )

    if result.cancelled:
        console.print("Cancelled.")
        raise typer.Exit(0)

    if not result.success:
        _error(result.error, plain)
        raise typer.Exit(1)

    message = f"Deleted {result.filename} ({result.chunks_deleted} chunks)"
    console.print(message if plain else f"[green]{message}[/green]")


@app.command(name="status")
def status_cmd(
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Show database statistics."""
    result = status.status(data_dir=data_dir, config_path=config_file)

    if not result.success:
        _error(result.error, plain)
        raise typer.Exit(1)

    if result.total_documents == 0:
        if plain:
            console.print("No documents stored.")
        else:
            console.print("[dim]No documents stored. Run 'quire ingest' first.[/dim]")
        raise typer.Exit(0)

    if plain:
        console.print("Database Status:")
        console.print(f"  Data directory: {result.data_dir}")
        console.print(f"  Documents: {result.total_documents}")
        console.print(f"  Chunks: {result.total_chunks}")
        console.print(f"  Embedded chunks: {result.embedded_chunks}")
        console.print(f"  Pending chunks: {result.pending_chunks}")
    else:
        table = Table(title="Database Status")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green", justify="right")

        table.add_row("Data directory", result.data_dir)
        table.add_row("Documents", str(result.total_documents))
        table.add_row("Chunks", str(result.total_chunks))
        table.add_row("Embedded chunks", str(result.embedded_chunks))
        pending_style = "yellow" if result.pending_chunks else "green"
        table.add_row("Pending chunks", f"[{pending_style}]{result.pending_chunks}[/{pending_style}]")

        console.print(table)


@app.command(name="backfill")
def backfill_cmd(
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Embed chunks that were stored without an embedding."""
    result = backfill.backfill(data_dir=data_dir, config_path=config_file)

    if not result.success:
        _error(result.error, plain)
        raise typer.Exit(1)

    if result.pending == 0:
        console.print("Nothing to backfill." if plain else "[dim]Nothing to backfill.[/dim]")
        raise typer.Exit(0)

    message = f"Embedded {result.repaired} of {result.pending} chunks"
    if plain:
        console.print(message)
    else:
        console.print(f"[green]{message}[/green]")

    if result.remaining > 0:
        console.print(
            f"{result.remaining} chunks still pending"
            if plain
            else f"[yellow]{result.remaining} chunks still pending[/yellow]"
        )
        raise typer.Exit(1)


@app.command(name="config")
def config_cmd_handler(
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Show current configuration settings."""
    result = config_cmd.config(config_path=config_file)

    if not result.success:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    table = Table(title="Quire Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Source", style="dim")

    table.add_row("provider", result.provider, "")
    table.add_row("chat_model", result.chat_model or "(not set)", "")
    table.add_row("embedding_model", result.embedding_model or "(not set)", "")
    table.add_row("base_url", result.base_url or "(provider default)", "")
    table.add_row("api_key", "set" if result.api_key_set else "(not set)", "env var")
    table.add_row("data_dir", result.data_dir, "")

    # Separator
    table.add_row("", "", "")

    for setting in result.settings:
        table.add_row(setting.name, setting.value, setting.source)

    console.print(table)

    if result.config_path:
        console.print(f"\n[dim]Config file: {result.config_path}[/dim]")
    else:
        console.print("\n[dim]No config file found. Using env vars / defaults.[/dim]")

    console.print("\n[dim]Precedence: env var > yaml settings > default[/dim]")

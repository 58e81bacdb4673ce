"""CLI entry point for agentstream."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator
from pathlib import Path

import click
from rich.console import Console

from agentstream.core.config import (
    find_config_file,
    load_env_config,
    load_stream_config,
    load_toml_config,
)
from agentstream.core.controller import StreamController
from agentstream.types.config import StreamConfig, StreamConfigError
from agentstream.ui.sinks import RichSink


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def cli(verbose: bool) -> None:
    """agentstream -- line-by-line reveal of streamed agent output.

    \b
    Usage:
      agentstream replay answer.md
      agentstream replay answer.md --chunk-size 4 --tick-ms 20
      agentstream config list
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )


def iter_chunks(text: str, size: int) -> Iterator[str]:
    """Split *text* into fixed-size deltas."""
    for start in range(0, len(text), size):
        yield text[start:start + size]


async def replay_text(
    text: str,
    config: StreamConfig,
    *,
    flush: bool = False,
    final_answer: bool = False,
    console: Console | None = None,
) -> RichSink:
    """Stream *text* through a controller onto a RichSink and wait for the reveal."""
    sink = RichSink(console)
    controller = StreamController(config)
    controller.begin(sink)

    if final_answer:
        controller.apply_final_answer(text)
        return sink

    for delta in iter_chunks(text, config.replay_chunk_size):
        controller.push_and_maybe_commit(delta)
        await asyncio.sleep(0)  # Let pending ticks run between deltas

    controller.finalize(flush_immediately=flush)
    while controller.is_write_cycle_active():
        await asyncio.sleep(config.tick_interval)
    return sink


@cli.command("replay")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--chunk-size", type=int, default=None, help="Characters per delta")
@click.option("--tick-ms", type=int, default=None, help="Milliseconds per revealed line")
@click.option(
    "--flush/--no-flush", default=False,
    help="Flush leftover lines at once instead of animating them out",
)
@click.option("--final-answer", is_flag=True, help="Send the file as one complete message")
@click.option("--markdown", is_flag=True, help="Render the transcript as Markdown afterwards")
def replay_cmd(
    file: Path,
    chunk_size: int | None,
    tick_ms: int | None,
    flush: bool,
    final_answer: bool,
    markdown: bool,
) -> None:
    """Replay FILE as a simulated model stream."""
    try:
        config = load_stream_config(tick_interval_ms=tick_ms, replay_chunk_size=chunk_size)
    except StreamConfigError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    text = file.read_text()
    sink = asyncio.run(replay_text(text, config, flush=flush, final_answer=final_answer))
    if markdown:
        sink.render_markdown()


@click.group("config")
def config_cmd() -> None:
    """Inspect agentstream configuration."""


@config_cmd.command("list")
def config_list() -> None:
    """Show the effective configuration and where it came from."""
    path = find_config_file()
    click.echo(f"Config file: {path if path else '(none)'}")

    click.echo("\nTOML config:")
    toml = load_toml_config()
    if toml:
        for k, v in sorted(toml.items()):
            click.echo(f"  {k}: {v}")
    else:
        click.echo("  (no [stream] settings)")

    click.echo("\nEnvironment:")
    env = load_env_config()
    if env:
        for k, v in sorted(env.items()):
            click.echo(f"  {k}: {v}")
    else:
        click.echo("  (no environment variables set)")

    try:
        config = load_stream_config()
    except StreamConfigError as e:
        click.echo(f"\nError: {e}", err=True)
        raise SystemExit(1)

    click.echo("\nEffective:")
    click.echo(f"  tick_interval_ms: {config.tick_interval_ms}")
    click.echo(f"  replay_chunk_size: {config.replay_chunk_size}")


cli.add_command(config_cmd)


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()

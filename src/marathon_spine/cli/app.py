"""
Root Typer application for the marathon-spine CLI.

Usage::

    marathon-spine render --image nginx:1.25 --network BRIDGE --tcp 80 --tcp 443
    marathon-spine render --image redis:7 --volume /data/redis:/data:RW --param label=tier=cache
    marathon-spine port-index container.json 443
    cat container.json | marathon-spine port-index - 443
"""

from __future__ import annotations

import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console

from marathon_spine.container import Container, Docker, new_docker_container
from marathon_spine.core.errors import ConfigError, ContainerSpecError, MarathonSpineError
from marathon_spine.core.logging import LogContext, configure_logging, get_logger
from marathon_spine.core.result import Err, Ok
from marathon_spine.core.settings import MarathonSpineSettings, get_settings

app = typer.Typer(
    name="marathon-spine",
    help="marathon-spine: build and inspect orchestrator container definitions.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
err_console = Console(stderr=True)
logger = get_logger(__name__)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        try:
            v = pkg_version("marathon-spine")
        except PackageNotFoundError:
            from marathon_spine import __version__ as v
        typer.echo(f"marathon-spine {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """marathon-spine CLI: render container JSON and look up service ports."""


# ── Helpers ──────────────────────────────────────────────────────────────


def _fail(error: MarathonSpineError, code: int = 1) -> NoReturn:
    err_console.print(f"[bold red]Error[/bold red] ({type(error).__name__}): {error.message}")
    raise typer.Exit(code=code)


def _load_settings() -> MarathonSpineSettings:
    """Load settings and configure logging; invalid settings exit with code 1."""
    try:
        settings = get_settings()
    except ConfigError as exc:
        _fail(exc)
    configure_logging(level=settings.log_level, json_format=settings.log_json)
    return settings


def _parse_volume(raw: str) -> tuple[str, str, str]:
    parts = raw.split(":")
    if len(parts) not in (2, 3) or not all(parts):
        raise typer.BadParameter(
            f"expected HOST:CONTAINER[:MODE], got {raw!r}", param_hint="--volume"
        )
    host_path, container_path = parts[0], parts[1]
    mode = parts[2] if len(parts) == 3 else "RW"
    return host_path, container_path, mode


def _parse_parameter(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise typer.BadParameter(f"expected KEY=VALUE, got {raw!r}", param_hint="--param")
    return key, value


# ── Commands ─────────────────────────────────────────────────────────────


@app.command()
def render(
    image: str = typer.Option(..., "--image", "-i", help="Docker image reference."),
    network: str | None = typer.Option(
        None, "--network", "-n", help="Network mode (BRIDGE, HOST, USER, NONE, ...)."
    ),
    tcp: list[int] = typer.Option([], "--tcp", help="Container port to expose over TCP. Repeatable."),
    udp: list[int] = typer.Option([], "--udp", help="Container port to expose over UDP. Repeatable."),
    volume: list[str] = typer.Option(
        [], "--volume", "-v", help="HOST:CONTAINER[:MODE] volume, mode defaults to RW. Repeatable."
    ),
    param: list[str] = typer.Option([], "--param", "-p", help="KEY=VALUE docker parameter. Repeatable."),
    privileged: bool | None = typer.Option(
        None, "--privileged/--no-privileged", help="Run privileged (omitted unless given)."
    ),
    force_pull: bool | None = typer.Option(
        None, "--force-pull/--no-force-pull", help="Force image pull (omitted unless given)."
    ),
    clear_volumes: bool = typer.Option(
        False, "--clear-volumes", help="Send an explicit empty volume list when no --volume is given."
    ),
    indent: int | None = typer.Option(None, "--indent", help="JSON indent (0 for compact)."),
) -> None:
    """Render a docker container definition as JSON."""
    settings = _load_settings()
    volumes = [_parse_volume(raw) for raw in volume]
    parameters = [_parse_parameter(raw) for raw in param]

    container = new_docker_container()
    if clear_volumes:
        container.clear_volumes()
    for host_path, container_path, mode in volumes:
        container.add_volume(host_path, container_path, mode)

    docker = container.docker.set_image(image)
    network = network or settings.default_network
    if network:
        docker.set_network(network)
    if privileged is not None:
        docker.set_privileged(privileged)
    if force_pull is not None:
        docker.set_force_pull_image(force_pull)
    docker.expose_tcp_ports(*tcp).expose_udp_ports(*udp)
    if parameters:
        docker.add_parameters(parameters)

    json_indent = settings.json_indent if indent is None else indent
    logger.info(
        "container_rendered",
        image=image,
        network=docker.network,
        port_mappings=len(docker.port_mappings or []),
        volumes=len(container.volumes or []),
    )
    typer.echo(container.to_json(indent=json_indent or None))


@app.command("port-index")
def port_index(
    source: str = typer.Argument(..., help="Container JSON file, or '-' for stdin."),
    port: int = typer.Argument(..., help="Container port to look up."),
) -> None:
    """Print the service port index of an exposed container port."""
    _load_settings()
    try:
        text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    except OSError as exc:
        _fail(ContainerSpecError(f"Cannot read {source}: {exc.strerror}", cause=exc))
    except UnicodeDecodeError as exc:
        _fail(ContainerSpecError(f"Cannot decode {source} as UTF-8: {exc.reason}", cause=exc))

    with LogContext(source=source):
        try:
            container = Container.from_json(text)
        except ContainerSpecError as exc:
            _fail(exc.with_context(source=source))

        docker = container.docker or Docker()
        match docker.service_port_index(port):
            case Ok(index):
                logger.info("service_port_resolved", port=port, index=index)
                typer.echo(index)
            case Err(error):
                _fail(error)

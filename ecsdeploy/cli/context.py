from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import typer

from ecsdeploy.core.config import (
    CONFIG_FILE_NAME,
    DeployConfig,
    build_config,
    load_config_file,
)
from ecsdeploy.core.errors import ErrorCode
from ecsdeploy.core.result import Err
from ecsdeploy.output.console import ConsoleProtocol, RichConsole, Style


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: DeployConfig
    console: ConsoleProtocol
    config_path: Path | None = None


def _config_path(explicit: Path | None) -> Path | None:
    if explicit is not None:
        return explicit.expanduser()
    candidate = Path.cwd() / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None


def build_context(
    overrides: Mapping[str, object | None],
    *,
    config_file: Path | None = None,
) -> CLIContext:
    """Resolve the configuration for this invocation, or exit 1."""
    console = RichConsole()
    path = _config_path(config_file)

    base = DeployConfig()
    if path is not None:
        loaded = load_config_file(path)
        if isinstance(loaded, Err):
            console.error(loaded.error.message)
            raise typer.Exit(code=int(ErrorCode.FAILURE))
        base = loaded.value

    merged = build_config(base, overrides)
    if isinstance(merged, Err):
        console.error(f"invalid configuration: {merged.error.message}")
        if path is not None:
            console.print(f"config file: {path}", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    return CLIContext(config=merged.value, console=console, config_path=path)

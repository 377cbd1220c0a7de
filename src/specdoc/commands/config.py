"""Config commands -- view and change the global configuration.

``specdoc config`` reads and writes the user's
:class:`~specdoc.models.GlobalConfig` file in the specdoc config directory.
It holds the default output format and the keyword lists the pagination
heuristics match against. A project's ``./specdoc.json`` still overrides
it at run time (see :func:`~specdoc.config.resolve_config`).
"""

from __future__ import annotations

from typing import Any

import typer
from pydantic import ValidationError

from specdoc.commands._source import reported_errors
from specdoc.exceptions import InvalidUsageError
from specdoc.output import OutputFormat, get_output, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the stored global configuration.

    Example::

        specdoc config show
        specdoc --json config show
    """
    from specdoc.config import get_config_dir, load_global_config

    with reported_errors():
        config = load_global_config()

    info(f"Config directory: {get_config_dir()}")
    data = config.model_dump(mode="json")
    output = get_output()
    if output.format == OutputFormat.JSON:
        output.print_json(data)
    else:
        output.print_table(
            ["Key", "Value"],
            [[key, _display(value)] for key, value in _flatten(data)],
            title="Configuration",
        )


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key in dot notation, e.g. 'output.format'."
    ),
    value: str = typer.Argument(
        help="New value. List settings take comma-separated names."
    ),
) -> None:
    """Change one configuration value and save it.

    Example::

        specdoc config set output.format json
        specdoc config set heuristics.record_fields data,rows,entries
    """
    from specdoc.config import load_global_config, save_global_config
    from specdoc.models import GlobalConfig

    with reported_errors():
        data = load_global_config().model_dump(mode="json")

        *parents, leaf = key.split(".")
        section = data
        for part in parents:
            if not isinstance(section.get(part), dict):
                raise InvalidUsageError(f"Invalid config key: {key}")
            section = section[part]
        if leaf not in section or isinstance(section[leaf], dict):
            raise InvalidUsageError(f"Unknown config key: {key}")

        if isinstance(section[leaf], list):
            section[leaf] = [item.strip() for item in value.split(",") if item.strip()]
        else:
            section[leaf] = value

        try:
            config = GlobalConfig.model_validate(data)
        except ValidationError as exc:
            raise InvalidUsageError(f"Invalid value for {key}: {exc}") from exc

        save_global_config(config)

    success(f"Set {key} = {_display(section[leaf])}")


@config_app.command("init")
def config_init(
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing configuration without asking."
    ),
) -> None:
    """Write a configuration file holding the default settings.

    Example::

        specdoc config init
        specdoc config init --force
    """
    from specdoc.config import global_config_path, save_global_config
    from specdoc.models import GlobalConfig

    path = global_config_path()
    if path.is_file() and not force:
        if not typer.confirm(f"Replace the existing configuration at {path}?"):
            info("Cancelled.")
            raise typer.Exit()

    save_global_config(GlobalConfig())
    success(f"Default configuration written to {path}")


def _flatten(data: dict[str, Any], prefix: str = "") -> list[tuple[str, Any]]:
    rows: list[tuple[str, Any]] = []
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            rows.extend(_flatten(value, f"{name}."))
        else:
            rows.append((name, value))
    return rows


def _display(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)

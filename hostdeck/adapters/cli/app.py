"""
Main CLI application
"""
import sys
import typer
from pathlib import Path
from typing import Optional

from platformdirs import user_log_dir
from rich.console import Console
from rich.table import Table

from ...core.constants import APP_NAME, LOG_FILE_NAME
from ...core.exceptions import ConfigError
from ...core.logging import setup_logging, get_logger, get_stdout_console
from ...domain.models import AppConfig
from ...domain.router import Router
from ...infrastructure.clipboard import CommandClipboard
from ...infrastructure.secrets import KeyringSecretStore
from ...infrastructure.store import JsonConnectionStore
from ..config.loader import ConfigLoader
from ..tui.app import TuiApp
from ..tui.styles import THEME
from .prompts import RichPromptProvider

logger = get_logger(__name__)
console = get_stdout_console()

app = typer.Typer(
    name=APP_NAME,
    add_completion=False,
    help="Terminal manager for SSH and SFTP connections",
    rich_markup_mode="rich",
)


def default_log_file() -> Path:
    return Path(user_log_dir(APP_NAME)) / LOG_FILE_NAME


def load_state(ctx: typer.Context):
    """
    Load the persisted configuration and resolve effective settings.

    Exits with status 1 if either cannot be read.
    """
    prompts = RichPromptProvider(console)
    store = JsonConnectionStore(ctx.obj["config_dir"])
    try:
        config = store.load()
        settings = ConfigLoader().load(
            base=config.settings,
            toml_path=ctx.obj["settings_file"],
            cli_overrides=ctx.obj["overrides"],
        )
    except ConfigError as e:
        logger.debug("Startup failed: %s", e)
        prompts.error(str(e))
        raise typer.Exit(1)
    return store, config, settings


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        "-l",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Log file path (defaults to the user log directory while the UI runs)",
    ),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        envvar="HOSTDECK_CONFIG_DIR",
        help="Directory holding config.json",
    ),
    settings_file: Optional[Path] = typer.Option(
        None,
        "--settings",
        "-s",
        help="TOML file overriding settings",
    ),
    editor: Optional[str] = typer.Option(None, "--editor", help="Editor command for remote files"),
    show_hidden: Optional[bool] = typer.Option(
        None,
        "--show-hidden/--hide-hidden",
        help="Initial hidden-file toggle in the file browser",
    ),
):
    """
    hostdeck - manage SSH connections and browse remote files

    Run without a subcommand to open the interactive interface.
    """
    interactive = ctx.invoked_subcommand is None
    if interactive:
        # the UI owns the terminal; logs go to a file only
        setup_logging(level=log_level, log_file=log_file or default_log_file(), stream=False)
    else:
        setup_logging(level=log_level, log_file=log_file)

    ctx.obj = {
        "config_dir": config_dir,
        "settings_file": settings_file,
        "overrides": {"editor": editor, "show_hidden_files": show_hidden},
    }

    if interactive:
        run_tui(ctx)


def run_tui(ctx: typer.Context) -> None:
    if not sys.stdin.isatty():
        RichPromptProvider(console).error("The interactive interface needs a terminal")
        raise typer.Exit(1)

    store, config, settings = load_state(ctx)
    secrets = KeyringSecretStore()
    tui_console = Console(theme=THEME)
    prompts = RichPromptProvider(tui_console)

    router = Router(
        config=config,
        store=store,
        secrets=secrets,
        settings=settings,
        width=tui_console.width,
        height=tui_console.height,
    )
    tui = TuiApp(
        router=router,
        secrets=secrets,
        settings=settings,
        console=tui_console,
        prompts=prompts,
        clipboard=CommandClipboard(),
    )
    logger.info("Starting with %d connection(s)", len(config.connections))
    tui.run()


@app.command("list")
def list_connections(ctx: typer.Context):
    """List saved connections"""
    _, config, _ = load_state(ctx)
    if not config.connections:
        RichPromptProvider(console).info("No connections saved yet")
        return
    console.print(connections_table(config))


@app.command("config-path")
def config_path(ctx: typer.Context):
    """Show where connections are stored"""
    store = JsonConnectionStore(ctx.obj["config_dir"])
    console.print(str(store.path))


def connections_table(config: AppConfig) -> Table:
    table = Table(title="Connections", header_style="bold")
    table.add_column("Label")
    table.add_column("Address")
    table.add_column("Auth")
    for connection in config.connections:
        auth = connection.auth_type.value
        credential = config.get_credential(connection.credential_id)
        if credential is not None:
            auth = f"{auth} ({credential.label})"
        table.add_row(connection.label, connection.address, auth)
    return table


def run():
    """CLI entry point"""
    app()


if __name__ == "__main__":
    run()

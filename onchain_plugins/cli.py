import asyncio
import json
import logging
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from typing_extensions import Annotated

from onchain_plugins.adapters.openai_adapter import OpenAIAdapter
from onchain_plugins.adapters.runtime_adapter import LLMAgentRuntime
from onchain_plugins.domains.runtime import ActionResponse, Content, Memory
from onchain_plugins.plugins.manager import PluginManager
from onchain_plugins.plugins.polymarket import PolymarketPlugin
from onchain_plugins.plugins.zora import ZoraPlugin

# --- Basic Logging Configuration ---
logging.basicConfig(level=logging.WARNING, format="%(levelname)s:%(name)s:%(message)s")
# --- End Logging Configuration ---

app = typer.Typer(help="Polymarket and Zora actions from the command line.")
console = Console()


def load_config(path: Optional[str]) -> Dict[str, Any]:
    """Read the JSON config file; an absent path yields an empty config."""
    if not path:
        return {}
    with open(path, "r") as f:
        return json.load(f)


def build_manager(config: Dict[str, Any]) -> PluginManager:
    """Register both plugins with the ``plugins`` section of the config.

    Without that section the plugins read the process environment.
    """
    plugin_config = config.get("plugins")
    manager = PluginManager(plugin_config)
    manager.register_plugin(PolymarketPlugin())
    manager.register_plugin(ZoraPlugin())
    return manager


def build_runtime(config: Dict[str, Any]) -> LLMAgentRuntime:
    """Build the standalone runtime from the ``openai`` and ``agent`` sections."""
    openai_config = config.get("openai") or {}
    if not openai_config.get("api_key"):
        raise ValueError("OpenAI API key is required in the 'openai' config section")
    llm = OpenAIAdapter(
        api_key=openai_config["api_key"],
        model=openai_config.get("model"),
        logfire_api_key=(config.get("logfire") or {}).get("api_key"),
    )
    agent = config.get("agent") or {}
    return LLMAgentRuntime(
        llm,
        agent_name=agent.get("name", "Agent"),
        bio=agent.get("bio", ""),
        lore=agent.get("lore", ""),
        knowledge=agent.get("knowledge", ""),
    )


def _exit_on_config_error(config: Optional[str]) -> Dict[str, Any]:
    try:
        return load_config(config)
    except FileNotFoundError:
        console.print(
            f"[bold red]Error:[/bold red] Configuration file not found at '{config}'"
        )
        raise typer.Exit(code=1)
    except json.JSONDecodeError as e:
        console.print(f"[bold red]Error loading configuration:[/bold red] {e}")
        raise typer.Exit(code=1)


@app.command()
def actions(
    config: Annotated[
        Optional[str], typer.Option(help="Path to the configuration JSON file.")
    ] = None,
):
    """List the actions each plugin offers with the current configuration."""
    manager = build_manager(_exit_on_config_error(config))

    table = Table(title="Available actions")
    table.add_column("Plugin", style="cyan")
    table.add_column("Action", style="green")
    table.add_column("Similes")
    for plugin in manager.list_plugins():
        if not plugin["actions"]:
            table.add_row(escape(plugin["name"]), "[dim]none (missing configuration)[/dim]", "")
            continue
        for name in plugin["actions"]:
            action = manager.get_action(name)
            table.add_row(escape(plugin["name"]), name, ", ".join(action.similes))
    console.print(table)


@app.command()
def wallet(
    config: Annotated[
        Optional[str], typer.Option(help="Path to the configuration JSON file.")
    ] = None,
):
    """Show the wallet line reported by each plugin's provider."""
    manager = build_manager(_exit_on_config_error(config))
    for provider in manager.get_providers():
        line = asyncio.run(provider.get(None))
        console.print(escape(line or ""))


@app.command()
def run(
    action: Annotated[str, typer.Argument(help="Action name, e.g. TRADE_COIN.")],
    message: Annotated[str, typer.Argument(help="User message the action acts on.")],
    user_id: Annotated[
        str, typer.Option(help="The user ID for the conversation.")
    ] = "cli_user",
    config: Annotated[
        str, typer.Option(help="Path to the configuration JSON file.")
    ] = "config.json",
    verbose: Annotated[bool, typer.Option(help="Log at INFO level.")] = False,
):
    """Run one action against a message and print the result."""
    if verbose:
        logging.getLogger().setLevel(logging.INFO)

    loaded = _exit_on_config_error(config)
    try:
        runtime = build_runtime(loaded)
    except ValueError as e:
        console.print(f"[bold red]Error loading configuration:[/bold red] {e}")
        raise typer.Exit(code=1)
    manager = build_manager(loaded)

    responses = []

    def collect(response: ActionResponse) -> None:
        responses.append(response)

    memory = Memory(user_id=user_id, content=Content(text=message))
    with console.status(f"[bold green]Running {action}...", spinner="dots"):
        ok = asyncio.run(
            manager.execute_action(action, runtime, memory, callback=collect)
        )

    for response in responses:
        style = "bright_blue" if ok else "bold red"
        console.print(f"[{style}]{runtime.agent_name}:[/{style}] {escape(response.text)}")
        if response.content:
            console.print_json(json.dumps(response.content))

    if not ok:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()

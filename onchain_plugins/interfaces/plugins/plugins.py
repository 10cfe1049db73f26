"""
Plugin system interfaces.

These interfaces define the contracts for the plugin system: tools and
toolsets used by plugins internally, and the actions, providers and plugins
consumed by the host agent runtime.
"""
from abc import ABC, abstractmethod
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Union,
)

from onchain_plugins.domains.runtime import ActionExample, ActionResponse, Memory, State

if TYPE_CHECKING:  # pragma: no cover
    from onchain_plugins.domains.chains import Chain
    from onchain_plugins.interfaces.providers.runtime import AgentRuntime


HandlerCallback = Callable[[ActionResponse], Union[Awaitable[Any], Any]]


class Tool(ABC):
    """Interface for tools exposed by a toolset."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the name of the tool."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Get the description of the tool."""
        pass

    @abstractmethod
    async def execute(self, **params) -> Any:
        """Execute the tool with the given parameters."""
        pass


class ToolRegistry(ABC):
    """Interface for the tool registry."""

    @abstractmethod
    def register_tool(self, tool: Tool) -> bool:
        """Register a tool in the registry."""
        pass

    @abstractmethod
    def get_tools(self) -> List[Tool]:
        """Get all registered tools in registration order."""
        pass


class Toolset(ABC):
    """Interface for a credentialed bundle of tools bound to a wallet."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the name of the toolset."""
        pass

    @abstractmethod
    def supports_chain(self, chain: "Chain") -> bool:
        """Whether the toolset can operate on the given chain."""
        pass

    @abstractmethod
    def get_tools(self, wallet: Any) -> List[Tool]:
        """Build the tools for the given wallet."""
        pass


class Action(ABC):
    """Interface for an action offered to the host runtime."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique action name."""
        pass

    @property
    @abstractmethod
    def similes(self) -> List[str]:
        """Trigger phrases for the action."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human readable description."""
        pass

    @property
    @abstractmethod
    def examples(self) -> List[List[ActionExample]]:
        """Example dialogues."""
        pass

    @abstractmethod
    async def validate(
        self,
        runtime: "AgentRuntime",
        message: Memory,
        state: Optional[State] = None,
    ) -> bool:
        """Whether the action may run for this message."""
        pass

    @abstractmethod
    async def handler(
        self,
        runtime: "AgentRuntime",
        message: Memory,
        state: Optional[State] = None,
        options: Optional[Dict[str, Any]] = None,
        callback: Optional[HandlerCallback] = None,
    ) -> bool:
        """Run the action, report through the callback and return success."""
        pass


class Provider(ABC):
    """Interface for context providers."""

    @abstractmethod
    async def get(
        self,
        runtime: "AgentRuntime",
        message: Optional[Memory] = None,
        state: Optional[State] = None,
    ) -> Optional[str]:
        """Return a line of context for the agent. Never raises."""
        pass


class Plugin(ABC):
    """Interface for plugins that can be loaded by the host."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the name of the plugin."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Get the description of the plugin."""
        pass

    @property
    @abstractmethod
    def actions(self) -> List[Action]:
        """Actions available after initialization."""
        pass

    @property
    @abstractmethod
    def providers(self) -> List[Provider]:
        """Context providers of the plugin."""
        pass

    @abstractmethod
    def initialize(self, config: Optional[Mapping[str, str]] = None) -> List[Action]:
        """Initialize the plugin and build its actions."""
        pass


class PluginManager(ABC):
    """Interface for the plugin manager."""

    @abstractmethod
    def register_plugin(self, plugin: Plugin) -> bool:
        """Register a plugin in the manager."""
        pass

    @abstractmethod
    def load_plugins(self) -> List[str]:
        """Load all plugins exposed through entry points."""
        pass

    @abstractmethod
    def get_plugin(self, name: str) -> Optional[Plugin]:
        """Get a plugin by name."""
        pass

    @abstractmethod
    def list_plugins(self) -> List[Dict[str, Any]]:
        """List all registered plugins with their details."""
        pass

    @abstractmethod
    def get_action(self, name: str) -> Optional[Action]:
        """Get an action by name across all plugins."""
        pass

    @abstractmethod
    async def execute_action(
        self,
        action_name: str,
        runtime: "AgentRuntime",
        message: Memory,
        state: Optional[State] = None,
        options: Optional[Dict[str, Any]] = None,
        callback: Optional[HandlerCallback] = None,
    ) -> bool:
        """Dispatch a message to the named action."""
        pass

    @abstractmethod
    def configure(self, config: Mapping[str, str]) -> None:
        """Configure the plugin manager and re-initialize all plugins."""
        pass

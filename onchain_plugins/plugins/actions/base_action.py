"""
Base class for blockchain-backed actions.

Every action runs the same way: bootstrap the clients, refresh the
conversation state, extract typed parameters with the runtime's object
generator, call the SDK, and describe the result with the runtime's text
generator. Failures never leave the handler; they are reported through the
callback and a ``False`` return.
"""
import inspect
import logging
from abc import abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel

from onchain_plugins.domains.runtime import ActionExample, ActionResponse, Memory, State
from onchain_plugins.interfaces.plugins.plugins import Action, HandlerCallback
from onchain_plugins.interfaces.providers.runtime import AgentRuntime
from onchain_plugins.utils.serialization import safe_stringify

P = TypeVar("P", bound=BaseModel)

RESPONSE_PREAMBLE = """
# Action Examples
{{actionExamples}}

# Knowledge
{{knowledge}}

# Task: Generate dialog and actions for the character {{agentName}}.
About {{agentName}}:
{{bio}}
{{lore}}

{{providers}}

{{attachments}}

# Capabilities
Note that {{agentName}} is capable of reading/seeing/hearing various forms of media, including images, videos, audio, plaintext and PDFs. Recent attachments have been included above under the "Attachments" section.
"""

RESPONSE_CLOSING = """
{{actions}}

Respond to the message knowing that the action was successful and these were the previous messages:
{{recentMessages}}
"""


def parameter_template(action_name: str, description: str) -> str:
    """Template asking the model for the parameters of an action."""
    return (
        "{{recentMessages}}\n\n"
        f'Given the recent messages, extract the following information for the action "{action_name}":\n'
        f"{description}\n\n"
        "Please provide the parameters in the correct format.\n"
    )


def response_template(
    label: str, action_name: str, success_message: str, result: Any
) -> str:
    """Template asking the model to describe a successful action.

    The result is inlined before the template is rendered, so placeholder
    text inside it (an event title reading "{{bio}}", say) is filled from the
    state as well. The callback content keeps the raw result.
    """
    body = f'\n{label} "{action_name}" was executed successfully.\n'
    if success_message:
        body += f"{success_message}\n\n"
    body += f"Here is the result:\n{safe_stringify(result, indent=2)}\n"
    return RESPONSE_PREAMBLE + body + RESPONSE_CLOSING


class BlockchainAction(Action):
    """Action whose handler follows the bootstrap/extract/execute/respond shape."""

    # Leading words of the success statement in the response prompt
    result_label = "The action"

    def __init__(
        self,
        name: str,
        description: str,
        similes: List[str],
        examples: List[List[ActionExample]],
        get_clients: Callable[[], Awaitable[Any]],
        logger: Optional[logging.Logger] = None,
    ):
        self._name = name
        self._description = description
        self._similes = list(similes)
        self._examples = examples
        self._get_clients = get_clients
        self.logger = logger or logging.getLogger(__name__)

    @property
    def name(self) -> str:
        return self._name

    @property
    def similes(self) -> List[str]:
        return list(self._similes)

    @property
    def description(self) -> str:
        return self._description

    @property
    def examples(self) -> List[List[ActionExample]]:
        return self._examples

    @property
    def error_prefix(self) -> str:
        """Prefix of the text reported when the action fails."""
        return f"Error executing {self.name}"

    async def validate(
        self,
        runtime: AgentRuntime,
        message: Memory,
        state: Optional[State] = None,
    ) -> bool:
        # Gating happens in client bootstrap
        return True

    async def handler(
        self,
        runtime: AgentRuntime,
        message: Memory,
        state: Optional[State] = None,
        options: Optional[Dict[str, Any]] = None,
        callback: Optional[HandlerCallback] = None,
    ) -> bool:
        """Run the action and report the outcome.

        Args:
            runtime: Host runtime
            message: Message that triggered the action
            state: Conversation state, composed from the message when absent
            options: Host supplied options, unused by the built-in actions
            callback: Receives exactly one ``ActionResponse``

        Returns:
            True if the action succeeded and the callback accepted the result
        """
        try:
            clients = await self._get_clients()
            current_state = (
                state if state is not None else await runtime.compose_state(message)
            )
            current_state = await runtime.update_recent_message_state(current_state)
            response = await self.run(runtime, clients, current_state, options or {})
            success = True
        except Exception as e:
            response = self.error_response(e)
            success = False

        return await self._deliver(callback, response, success)

    @abstractmethod
    async def run(
        self,
        runtime: AgentRuntime,
        clients: Any,
        state: State,
        options: Dict[str, Any],
    ) -> ActionResponse:
        """Perform the action and build the success response."""
        pass

    async def extract_parameters(
        self,
        runtime: AgentRuntime,
        state: State,
        template: str,
        schema: Type[P],
    ) -> P:
        """Render the template and ask the runtime for a typed parameter object."""
        context = runtime.compose_context(state, template)
        return await runtime.generate_object(context, schema)

    async def generate_response(
        self,
        runtime: AgentRuntime,
        state: State,
        result: Any,
        success_message: str = "",
    ) -> str:
        """Ask the runtime to describe a successful result."""
        template = response_template(
            self.result_label, self.name, success_message, result
        )
        context = runtime.compose_context(state, template)
        return await runtime.generate_text(context)

    def error_response(self, error: Exception) -> ActionResponse:
        """Build the failure payload and log the error."""
        message = str(error) or error.__class__.__name__
        self.logger.exception(f"{self.error_prefix}: {message}")
        return ActionResponse(
            text=f"{self.error_prefix}: {message}",
            content={"error": message},
        )

    async def _deliver(
        self,
        callback: Optional[HandlerCallback],
        response: ActionResponse,
        success: bool,
    ) -> bool:
        if callback is None:
            return success
        try:
            outcome = callback(response)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as e:
            self.logger.error(f"Callback for {self.name} failed: {e}")
            return False
        return success

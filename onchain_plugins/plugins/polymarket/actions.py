"""
Polymarket actions.
"""
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from onchain_plugins.domains.polymarket import EventQueryParams, PolymarketClients
from onchain_plugins.domains.runtime import ActionExample, ActionResponse, Content, State
from onchain_plugins.interfaces.plugins.plugins import Action, Tool
from onchain_plugins.interfaces.providers.runtime import AgentRuntime
from onchain_plugins.plugins.actions.base_action import BlockchainAction
from onchain_plugins.utils.serialization import to_json_safe

EVENTS_TEMPLATE = """{{recentMessages}}

Extract any specific event or market criteria from the recent messages. Look for:
- Event names or keywords
- Date ranges
- Market categories
- Active/inactive status
If no specific criteria is mentioned, get general events."""

EVENTS_EXAMPLES = [
    [
        ActionExample(user="{{user1}}", content=Content(text="Show active events on Polymarket")),
        ActionExample(
            user="{{user2}}",
            content=Content(
                text="Here are the active Polymarket events", action="GET_POLYMARKET_EVENTS"
            ),
        ),
    ],
    [
        ActionExample(
            user="{{user1}}", content=Content(text="What are the markets on the election?")
        ),
        ActionExample(
            user="{{user2}}",
            content=Content(
                text="Let me look up the election markets", action="GET_POLYMARKET_EVENTS"
            ),
        ),
    ],
]


def select_events_tool(tools: Sequence[Tool]) -> Tool:
    """Pick the first tool whose name mentions events or markets.

    Matching is a case-insensitive substring test in tool order. When more
    than one tool matches, the first one wins; there is no further tie-break.

    Raises:
        ValueError: If no tool matches
    """
    for tool in tools:
        name = (tool.name or "").lower()
        if "event" in name or "market" in name:
            return tool
    raise ValueError("Events tool not found")


class GetPolymarketEventsAction(BlockchainAction):
    """Lists Polymarket events and markets."""

    def __init__(
        self,
        get_client: Callable[[], Awaitable[PolymarketClients]],
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(
            name="GET_POLYMARKET_EVENTS",
            description="Get Polymarket events and markets",
            similes=["LIST_EVENTS", "SHOW_EVENTS", "VIEW_EVENTS", "GET_MARKETS"],
            examples=EVENTS_EXAMPLES,
            get_clients=get_client,
            logger=logger,
        )

    async def run(
        self,
        runtime: AgentRuntime,
        clients: PolymarketClients,
        state: State,
        options: Dict[str, Any],
    ) -> ActionResponse:
        params = await self.extract_parameters(
            runtime, state, EVENTS_TEMPLATE, EventQueryParams
        )
        tool = select_events_tool(clients.tools)
        self.logger.info(f"Calling {tool.name} with {params.model_dump(exclude_none=True)}")
        result = await tool.execute(**params.model_dump(exclude_none=True))

        text = await self.generate_response(
            runtime,
            state,
            result,
            "Retrieved Polymarket events and markets successfully",
        )
        content = to_json_safe(result)
        if not isinstance(content, dict):
            content = {"result": content}
        return ActionResponse(text=text, content=content)


def get_polymarket_actions(
    get_client: Callable[[], Awaitable[PolymarketClients]],
    logger: Optional[logging.Logger] = None,
) -> List[Action]:
    """All Polymarket actions bound to a client factory."""
    return [GetPolymarketEventsAction(get_client, logger=logger)]

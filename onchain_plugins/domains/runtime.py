"""
Domain models exchanged with the host agent runtime.

This module defines messages, conversation state, action examples and the
payload handed to action callbacks.
"""
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Content(BaseModel):
    """Message content; hosts may attach extra keys."""

    model_config = ConfigDict(extra="allow")

    text: str = Field("", description="Message text")
    action: Optional[str] = Field(None, description="Action the message refers to")


class Memory(BaseModel):
    """A single conversation message."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str = Field(..., description="Author of the message")
    agent_id: Optional[str] = Field(None, description="Agent the message belongs to")
    room_id: str = Field("default", description="Conversation identifier")
    content: Content = Field(default_factory=Content)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ActionExample(BaseModel):
    """One turn of an example dialogue."""

    user: str
    content: Content


class ActionResponse(BaseModel):
    """Payload delivered to an action callback."""

    text: str
    content: Dict[str, Any] = Field(default_factory=dict)


def format_messages(messages: List[Memory]) -> str:
    """Render messages as ``user: text`` lines, oldest first."""
    return "\n".join(f"{m.user_id}: {m.content.text}" for m in messages)


class State(BaseModel):
    """Conversation state used to render prompt templates."""

    agent_name: str = "Agent"
    bio: str = ""
    lore: str = ""
    knowledge: str = ""
    providers: str = ""
    attachments: str = ""
    actions: str = ""
    action_examples: str = ""
    recent_messages_data: List[Memory] = Field(default_factory=list)
    recent_messages: str = ""
    values: Dict[str, Any] = Field(default_factory=dict)

    def template_values(self) -> Dict[str, Any]:
        """Values keyed by the placeholder names used in templates."""
        values = dict(self.values)
        values.update(
            {
                "agentName": self.agent_name,
                "bio": self.bio,
                "lore": self.lore,
                "knowledge": self.knowledge,
                "providers": self.providers,
                "attachments": self.attachments,
                "actions": self.actions,
                "actionExamples": self.action_examples,
                "recentMessages": self.recent_messages,
            }
        )
        return values

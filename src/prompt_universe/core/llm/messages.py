"""Role-structured message assembly for chat-completion providers."""

from typing import Literal

from pydantic import BaseModel


NEGATIVE_PROMPT_TEMPLATE = (
    'IMPORTANT: Do not include any of the following in your response: "{negative}"'
)
CONTEXT_TEMPLATE = "Context/Examples:\n{context}\n\n---\n\n{instruction}"


class ChatMessage(BaseModel):
    """One role-tagged message of a conversation."""

    role: Literal["system", "user", "assistant"]
    content: str


def assemble_messages(
    instruction: str,
    system_prompt: str | None = None,
    context: str | None = None,
    negative_prompt: str | None = None,
) -> list[ChatMessage]:
    """Build the message list for one prompt execution.

    The result is an optional leading system message followed by a single
    user message. Context, when given, precedes the instruction inside the
    user message. A negative prompt is appended to the system message
    (creating it if needed); this only steers the model and does not
    filter its output.
    """
    system_text = system_prompt or ""
    if negative_prompt:
        steering = NEGATIVE_PROMPT_TEMPLATE.format(negative=negative_prompt)
        system_text = f"{system_text}\n\n{steering}" if system_text else steering

    user_text = (
        CONTEXT_TEMPLATE.format(context=context, instruction=instruction)
        if context
        else instruction
    )

    messages: list[ChatMessage] = []
    if system_text:
        messages.append(ChatMessage(role="system", content=system_text))
    messages.append(ChatMessage(role="user", content=user_text))
    return messages

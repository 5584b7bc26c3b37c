"""Request body helpers for the DashScope text-generation API."""

from typing import Any, Dict, List, Mapping, Sequence, Union

from ...models.conversation_types import ConversationMessage


MessageLike = Union[ConversationMessage, Mapping[str, Any]]


def format_messages(messages: Sequence[MessageLike]) -> List[Dict[str, Any]]:
    """Normalize ConversationMessage objects and role/content dicts."""
    formatted = []
    for msg in messages:
        if isinstance(msg, ConversationMessage):
            formatted.append(msg.to_payload())
        elif isinstance(msg, Mapping) and 'role' in msg and 'content' in msg:
            role = msg["role"]
            formatted.append({"role": getattr(role, "value", role), "content": msg["content"]})
        else:
            raise ValueError(f"Invalid message format: {type(msg)} - {msg}")
    return formatted


def build_request_body(
    model: str,
    messages: Sequence[MessageLike],
    incremental_output: bool = True,
    **parameters: Any
) -> Dict[str, Any]:
    """
    Build a streaming text-generation request body.

    ``incremental_output`` asks the service to send only the new text in each
    event, which is what the handler's append-only accumulation expects.

    Args:
        model: Model name (e.g., "qwen-max")
        messages: Conversation so far
        incremental_output: Send deltas rather than the full text so far
        **parameters: Extra generation parameters (temperature, top_p, ...);
            None values are dropped

    Returns:
        JSON-serializable request body
    """
    body_parameters: Dict[str, Any] = {"result_format": "text"}
    if incremental_output:
        body_parameters["incremental_output"] = True
    body_parameters.update({key: value for key, value in parameters.items() if value is not None})

    return {
        "model": model,
        "input": {"messages": format_messages(messages)},
        "parameters": body_parameters,
    }

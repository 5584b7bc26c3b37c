"""
Example: Streaming a chat reply

Prints the assistant message as it grows, then the final result.
Requires DASHSCOPE_API_KEY in the environment or a .env file.
"""

import logging

from dashscope_stream import ConversationMessage, DashScopeClient, TurnRole


def example_callbacks():
    """Stream with chained callbacks on a handler."""
    print("=== Handler with callbacks ===\n")

    client = DashScopeClient()
    handler = client.create_handler()

    printed = 0

    def show(message: ConversationMessage):
        nonlocal printed
        print(message.content[printed:], end="", flush=True)
        printed = len(message.content)

    handler.on_message(show).on_error(lambda e: print(f"\n[error] {e}")).on_complete(lambda: print("\n[done]"))

    messages = handler.stream({
        "model": "qwen-max",
        "input": {"messages": [{"role": "user", "content": "Write a haiku about rivers"}]},
        "parameters": {"incremental_output": True},
    }, timeout=60)

    print(f"\nFinal messages: {messages}")
    if handler.error is not None:
        print(f"Stream failed: {handler.error}")


def example_stream_chat():
    """Stream through the client convenience method."""
    print("\n=== stream_chat ===\n")

    client = DashScopeClient()
    messages = client.stream_chat(
        "qwen-max",
        [
            ConversationMessage(role=TurnRole.SYSTEM, content="Answer in one sentence."),
            ConversationMessage(role=TurnRole.USER, content="What is Server-Sent Events?"),
        ],
        timeout=60,
        temperature=0.3
    )

    for message in messages:
        print(f"{message.role.value}: {message.content}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    example_callbacks()
    example_stream_chat()

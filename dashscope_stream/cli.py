"""CLI entry point for the DashScope streaming SDK."""

import argparse
import sys
from typing import List, Optional

from .api.client import DashScopeClient
from .models.conversation_types import ConversationMessage, TurnRole
from .streaming.errors import ConfigurationError, StreamTimeoutError


def stream_text(model: str, prompt: str, system: Optional[str] = None,
                temperature: Optional[float] = None, timeout: Optional[float] = None,
                client: Optional[DashScopeClient] = None) -> int:
    """Stream a reply to stdout; returns the process exit code."""
    messages: List[ConversationMessage] = []
    if system:
        messages.append(ConversationMessage(role=TurnRole.SYSTEM, content=system))
    messages.append(ConversationMessage(role=TurnRole.USER, content=prompt))

    printed = [0]
    errors: List[BaseException] = []

    def print_delta(message: ConversationMessage) -> None:
        # Snapshots carry the whole message so far; print only the new tail
        print(message.content[printed[0]:], end='', flush=True)
        printed[0] = len(message.content)

    try:
        client = client or DashScopeClient()
        client.stream_chat(
            model,
            messages,
            on_message=print_delta,
            on_error=errors.append,
            timeout=timeout,
            temperature=temperature
        )
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except StreamTimeoutError as e:
        print()
        print(f"Error: {e}", file=sys.stderr)
        return 124

    print()
    if errors:
        print(f"Error: {errors[0]}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI function."""
    parser = argparse.ArgumentParser(description="Stream a DashScope text-generation reply")
    parser.add_argument('model', help='Model name (e.g., "qwen-max")')
    parser.add_argument('prompt', help='User prompt')
    parser.add_argument('--system', help='Optional system message')
    parser.add_argument('--temperature', type=float, help='Sampling temperature')
    parser.add_argument('--timeout', type=float, help='Give up after this many seconds')

    args = parser.parse_args(argv)

    return stream_text(
        args.model,
        args.prompt,
        system=args.system,
        temperature=args.temperature,
        timeout=args.timeout
    )


if __name__ == "__main__":
    sys.exit(main())

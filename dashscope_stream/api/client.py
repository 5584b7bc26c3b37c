"""Main client interface for the DashScope streaming SDK."""

from typing import Any, List, Optional, Sequence

from ..config.settings import StreamSettings, build_headers, load_settings
from ..models.conversation_types import ConversationMessage
from ..providers.base import StreamTransport
from ..providers.dashscope.payloads import MessageLike, build_request_body
from ..providers.dashscope.transport import DashScopeTransport
from ..streaming.errors import ConfigurationError
from ..streaming.handler import StreamHandler
from ..streaming.manager import CompleteCallback, ErrorCallback, MessageCallback


class DashScopeClient:
    """High-level client that creates one StreamHandler per request."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        endpoint: Optional[str] = None,
        settings: Optional[StreamSettings] = None,
        transport: Optional[StreamTransport] = None
    ):
        """
        Initialize the client.

        Args:
            api_key: DashScope API key; defaults to DASHSCOPE_API_KEY
            endpoint: Endpoint URL; defaults to DASHSCOPE_ENDPOINT or the public endpoint
            settings: Preloaded settings; environment is read when omitted
            transport: Transport shared by all handlers; an httpx SSE
                transport built from the settings by default
        """
        if settings is None:
            settings = load_settings(api_key=api_key, endpoint=endpoint)
        else:
            updates = {key: value for key, value in {"api_key": api_key, "endpoint": endpoint}.items()
                       if value is not None}
            if updates:
                settings = settings.model_copy(update=updates)
        self.settings = settings
        self.transport = transport or DashScopeTransport(
            connect_timeout=settings.connect_timeout,
            read_timeout=settings.read_timeout
        )

    def create_handler(self) -> StreamHandler:
        """Return a fresh single-use handler with auth headers bound."""
        if not self.settings.api_key:
            raise ConfigurationError(
                "DashScope API key not found; pass api_key or set DASHSCOPE_API_KEY"
            )
        return StreamHandler(
            self.settings.endpoint,
            build_headers(self.settings.api_key),
            transport=self.transport
        )

    def stream_chat(
        self,
        model: str,
        messages: Sequence[MessageLike],
        on_message: Optional[MessageCallback] = None,
        on_error: Optional[ErrorCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
        timeout: Optional[float] = None,
        **parameters: Any
    ) -> List[ConversationMessage]:
        """
        Stream a chat completion and block until it finishes.

        Args:
            model: Model name (e.g., "qwen-max")
            messages: Conversation as ConversationMessage objects or role/content dicts
            on_message: Called with the growing assistant message
            on_error: Called once if the stream fails
            on_complete: Called once on clean completion
            timeout: Wait deadline in seconds; defaults to settings.wait_timeout
            **parameters: Extra generation parameters (temperature, top_p, ...)

        Returns:
            The completed assistant message(s); empty on failure
        """
        handler = self.create_handler()
        if on_message:
            handler.on_message(on_message)
        if on_error:
            handler.on_error(on_error)
        if on_complete:
            handler.on_complete(on_complete)

        body = build_request_body(model, messages, **parameters)
        if timeout is None:
            timeout = self.settings.wait_timeout
        return handler.stream(body, timeout=timeout)

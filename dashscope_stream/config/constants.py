"""
Service constants for the DashScope text-generation streaming API.
"""

PROVIDER_NAME = "dashscope"

DEFAULT_ENDPOINT = (
    "https://dashscope.aliyuncs.com/api/v1/services/aigc/text-generation/generation"
)

# Request headers that switch the endpoint into SSE mode
SSE_ACCEPT_HEADER = "text/event-stream"
SSE_ENABLE_HEADER = "X-DashScope-SSE"

DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_READ_TIMEOUT = 300.0

# Environment variables read by load_settings()
API_KEY_ENV_VAR = "DASHSCOPE_API_KEY"
ENDPOINT_ENV_VAR = "DASHSCOPE_ENDPOINT"
CONNECT_TIMEOUT_ENV_VAR = "DASHSCOPE_CONNECT_TIMEOUT"
READ_TIMEOUT_ENV_VAR = "DASHSCOPE_READ_TIMEOUT"
STREAM_TIMEOUT_ENV_VAR = "DASHSCOPE_STREAM_TIMEOUT"

from dify_client.client import DifyClient
from dify_client.config import DifySettings
from dify_client.models import (
    ChatCompletion,
    Conversation,
    ConversationPage,
    CustomerBusinessNumbers,
    Metadata,
    RetrieverResource,
    SendMessageResult,
    Usage,
)
from dify_client.responses import DifyResponse

__all__ = [
    "ChatCompletion",
    "Conversation",
    "ConversationPage",
    "CustomerBusinessNumbers",
    "DifyClient",
    "DifyResponse",
    "DifySettings",
    "Metadata",
    "RetrieverResource",
    "SendMessageResult",
    "Usage",
]

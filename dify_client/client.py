from typing import Any, Mapping, Optional, Union

import httpx
from loguru import logger

from dify_client.config import DifySettings
from dify_client.models import (
    ChatCompletion,
    ConversationPage,
    CustomerBusinessNumbers,
    SendMessageResult,
)
from dify_client.responses import DifyResponse

Inputs = Union[Mapping[str, Any], CustomerBusinessNumbers]


class DifyClient:
    """
    Async client for the Dify chat app API.

    Every call is a single request, except ``get_conversation_history_messages``
    which looks the conversation up first. Nothing is retried.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self.api_key = api_key
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=self._headers(),
            timeout=None,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, settings: DifySettings, *, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "DifyClient":
        return cls(settings.base_url, settings.api_key.get_secret_value(), transport=transport)

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}

    async def __aenter__(self) -> "DifyClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _first_conversation_page(self, user: str) -> ConversationPage:
        logger.debug(f"GET /conversations: user={user}, limit=1")
        response = await self._client.get("/conversations", params={"user": user, "limit": 1})
        return ConversationPage.model_validate(response.json())

    async def find_conversation(self, user: str) -> str:
        """
        Return the id of the user's most recent conversation.

        An empty string means the user has no conversation yet; it is not an
        error.
        """
        page = await self._first_conversation_page(user)
        if page.data:
            conversation_id = page.data[0].id
            logger.info(f"Found conversation: user={user}, conversation_id={conversation_id}")
            return conversation_id
        logger.info(f"No conversation found: user={user}")
        return ""

    async def user_has_conversations(self, user: str) -> bool:
        page = await self._first_conversation_page(user)
        return len(page.data) > 0

    async def send_message(
        self,
        message: str,
        customer_id: str,
        conversation_id: Optional[str] = None,
        inputs: Optional[Inputs] = None,
    ) -> SendMessageResult:
        """
        Send a message in blocking mode and return the bot's answer.

        Args:
            message: the user query
            customer_id: identifies the end user in Dify
            conversation_id: continue this conversation, a new one is started
                when omitted
            inputs: app variables sent along the message

        Returns:
            the answer and the conversation it belongs to
        """
        payload: dict[str, Any] = {
            "query": message,
            "response_mode": "blocking",
            "conversation_id": conversation_id or "",
            "user": customer_id,
        }
        if isinstance(inputs, CustomerBusinessNumbers):
            payload["inputs"] = inputs.model_dump(by_alias=True)
        elif inputs is not None:
            payload["inputs"] = dict(inputs)

        logger.debug(
            f"POST /chat-messages: user={customer_id}, conversation_id={payload['conversation_id']}"
        )
        response = await self._client.post("/chat-messages", json=payload)
        completion = ChatCompletion.model_validate(response.json())
        logger.info(
            f"Message answered: conversation_id={completion.conversation_id}, "
            f"message_id={completion.message_id}"
        )
        return SendMessageResult.from_completion(completion)

    async def delete_conversation(self, conversation_id: str, user: str) -> DifyResponse:
        """
        Delete a conversation.

        The response is returned whatever its status; check ``is_success``.
        """
        logger.debug(f"DELETE /conversations/{conversation_id}: user={user}")
        response = await self._client.request(
            "DELETE", f"/conversations/{conversation_id}", json={"user": user}
        )
        result = DifyResponse.from_httpx(response)
        if not result.is_success:
            logger.warning(
                f"Delete conversation returned {result.status_code}: conversation_id={conversation_id}"
            )
        return result

    async def get_conversation_history_messages(self, user: str) -> Optional[DifyResponse]:
        """
        Fetch the message history of the user's conversation.

        Returns None without a second request when the user has no
        conversation. The lookup and the history request are not atomic: a
        conversation deleted in between yields whatever the upstream returns
        for it.
        """
        conversation_id = await self.find_conversation(user)
        if not conversation_id:
            return None

        logger.debug(f"GET /messages: user={user}, conversation_id={conversation_id}")
        response = await self._client.get(
            "/messages", params={"user": user, "conversation_id": conversation_id}
        )
        result = DifyResponse.from_httpx(response)
        if not result.is_success:
            logger.warning(
                f"Message history returned {result.status_code}: conversation_id={conversation_id}"
            )
        return result

from decimal import Decimal
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class _DifyModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class Conversation(_DifyModel):
    """A chat thread between a user and the app"""

    id: str
    name: Optional[str] = ""
    inputs: dict[str, Any] = Field(default_factory=dict)
    status: Optional[str] = ""
    introduction: Optional[str] = ""
    created_at: int = 0
    updated_at: int = 0


class ConversationPage(_DifyModel):
    """One page of ``GET /conversations``"""

    data: list[Conversation]
    limit: int
    # only present when the upstream has more entries than `limit`
    has_more: Optional[bool] = None


class Usage(_DifyModel):
    """
    Token and cost usage of a single completion.

    Prices arrive as decimal strings and are kept as ``Decimal``.
    """

    prompt_tokens: int = 0
    prompt_unit_price: Optional[Decimal] = None
    prompt_price_unit: Optional[Decimal] = None
    prompt_price: Optional[Decimal] = None
    completion_tokens: int = 0
    completion_unit_price: Optional[Decimal] = None
    completion_price_unit: Optional[Decimal] = None
    completion_price: Optional[Decimal] = None
    total_tokens: int = 0
    total_price: Optional[Decimal] = None
    currency: Optional[str] = None
    latency: Optional[float] = None


class RetrieverResource(_DifyModel):
    """A knowledge base segment cited by the answer"""

    position: Optional[int] = None
    dataset_id: Optional[str] = None
    dataset_name: Optional[str] = None
    document_id: Optional[str] = None
    document_name: Optional[str] = None
    segment_id: Optional[str] = None
    score: Optional[float] = None
    content: Optional[str] = None


class Metadata(_DifyModel):
    usage: Optional[Usage] = None
    retriever_resources: list[RetrieverResource] = Field(default_factory=list)


class ChatCompletion(_DifyModel):
    """Body of a blocking ``POST /chat-messages``"""

    event: Literal["message"] = "message"
    message_id: str
    conversation_id: str
    mode: str = "chat"
    answer: str
    metadata: Metadata = Field(default_factory=Metadata)
    created_at: int = 0


class SendMessageResult(_DifyModel):
    answer: str
    conversation_id: str

    @classmethod
    def from_completion(cls, completion: ChatCompletion) -> "SendMessageResult":
        return cls(answer=completion.answer, conversation_id=completion.conversation_id)


class CustomerBusinessNumbers(_DifyModel):
    """
    Phone numbers passed to the app as ``inputs`` variables.

    Serialized under the camelCase names the Dify app declares.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    customer_phone_number: str = Field(alias="customerPhoneNumber")
    business_phone_number: str = Field(alias="businessPhoneNumber")

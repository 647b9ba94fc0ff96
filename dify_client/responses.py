import json
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict


class DifyResponse(BaseModel):
    """
    An HTTP response handed back to the caller without interpretation.

    The status is never checked by the client; callers inspect
    ``status_code`` or ``is_success`` themselves.
    """

    model_config = ConfigDict(frozen=True)

    status_code: int
    headers: dict[str, str]
    body: str

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "DifyResponse":
        return cls(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.text,
        )

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def json_body(self) -> Any:
        """
        Decode the body as JSON.

        Raises ``json.JSONDecodeError`` when the body is not JSON, e.g. the
        empty body some Dify versions return for a ``204``.
        """
        return json.loads(self.body)

"""Minimal stand-ins for aiohttp sessions and responses."""
from typing import Any, Dict, List, Optional, Tuple


class FakeResponse:
    def __init__(
        self,
        status: int = 200,
        payload: Any = None,
        headers: Optional[Dict[str, str]] = None,
        text: str = "",
        json_error: Optional[Exception] = None
    ):
        self.status = status
        self.headers = headers or {}
        self._payload = payload
        self._text = text
        self._json_error = json_error

    async def json(self, content_type: Optional[str] = "application/json") -> Any:
        if self._json_error is not None:
            raise self._json_error
        return self._payload

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc_info) -> bool:
        return False


class FakeSession:
    """Replays queued responses, or raises queued exceptions, in order."""

    def __init__(self, *responses):
        self._responses = list(responses)
        self.calls: List[Tuple[str, str, Dict[str, Any]]] = []
        self.closed = False

    def request(self, method: str, url: str, **kwargs) -> FakeResponse:
        self.calls.append((method, url, kwargs))
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url: str, **kwargs) -> FakeResponse:
        return self.request("GET", url, **kwargs)

    async def close(self) -> None:
        self.closed = True

from typing import Optional, Sequence, Union

import httpx
from loguru import logger

from medchat.config import CompletionConfig
from medchat.errors import MalformedResponse, ModelUnavailable
from medchat.schemas import ChatMessage

MessageLike = Union[ChatMessage, dict]

# Deterministic sampling for every call; only stop and max_tokens vary.
GENERATION_PARAMS = {
    "frequency_penalty": 0.0,
    "presence_penalty": 0.0,
    "temperature": 0,
    "top_p": 1,
    "n": 1,
}


def _message_dict(message: MessageLike) -> dict:
    if isinstance(message, ChatMessage):
        return message.as_dict()
    return {"role": message["role"], "content": message["content"]}


def extract_completion_text(data) -> str:
    """
    Pull the first completion out of a chat-completions body.

    Expected shape:
    {"choices": [{"message": {"role": "assistant", "content": "..."}}, ...]}
    """
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedResponse(f"Provider reply has no choices[0].message.content ({e!r})") from e

    if not isinstance(content, str):
        raise MalformedResponse(f"Completion content is {type(content).__name__}, expected str")
    return content.strip()


class ModelClient:
    """
    Thin async client for a chat-completions endpoint (Azure OpenAI style).

    The endpoint URL and key come from the CompletionConfig passed in; the
    client never looks at the environment. One pooled httpx.AsyncClient is
    shared by all calls, so concurrent completions reuse connections.
    """

    def __init__(self, config: CompletionConfig, http_client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self._http = http_client or httpx.AsyncClient(timeout=config.timeout)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def _headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            self.config.api_key_header: self.config.api_key,
        }

    async def complete(
        self,
        messages: Sequence[MessageLike],
        stop: Optional[Union[str, list[str]]] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Send one completion request and return the trimmed text of choices[0].

        Raises:
            ModelUnavailable: not configured, network error, timeout, or non-2xx status
            MalformedResponse: body is not JSON or lacks the completion field
        """
        if not self.config.endpoint or not self.config.api_key:
            raise ModelUnavailable("Completion endpoint or API key is not configured")

        payload = {
            "messages": [_message_dict(m) for m in messages],
            "max_tokens": self.config.max_tokens if max_tokens is None else max_tokens,
            "stop": stop,
            **GENERATION_PARAMS,
        }

        try:
            resp = await self._http.post(
                self.config.endpoint,
                json=payload,
                headers=self._headers(),
                timeout=self.config.timeout,
            )
            resp.raise_for_status()
        except httpx.TimeoutException as e:
            raise ModelUnavailable(f"Completion request timed out after {self.config.timeout}s") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise ModelUnavailable(f"Completion endpoint returned HTTP {status}", status_code=status) from e
        except httpx.HTTPError as e:
            raise ModelUnavailable(f"Completion request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedResponse("Provider reply is not valid JSON") from e

        text = extract_completion_text(data)
        logger.debug(f"Completion ok ({len(payload['messages'])} messages in, {len(text)} chars out)")
        return text

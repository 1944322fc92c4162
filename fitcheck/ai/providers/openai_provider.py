from __future__ import annotations

import logging
import time
from typing import Optional, Sequence

from openai import APIConnectionError, APIError, APITimeoutError, AsyncOpenAI

from fitcheck.ai.types import ChatMessage
from fitcheck.core.errors import ProviderCallError

logger = logging.getLogger(__name__)


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: str,
        base_url: Optional[str] = None,
        timeout_s: float = 30.0,
    ):
        self._model = model
        key = (api_key or "").strip()
        if not key:
            raise RuntimeError("OPENAI_API_KEY is missing")

        # No retries: a failed completion is reported to the user immediately.
        self._client = AsyncOpenAI(
            api_key=key,
            base_url=base_url or None,
            timeout=timeout_s,
            max_retries=0,
        )

    @property
    def model(self) -> str:
        return self._model

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        max_tokens: int,
        temperature: float,
    ) -> str:
        payload = [{"role": m.role, "content": m.content} for m in messages]
        started = time.perf_counter()
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=payload,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except APITimeoutError as exc:
            logger.warning("openai_completion_timeout model=%s: %s", self._model, exc)
            raise ProviderCallError("The analysis service timed out. Please try again.", code="timeout") from exc
        except APIConnectionError as exc:
            logger.warning("openai_completion_unreachable model=%s: %s", self._model, exc)
            raise ProviderCallError("The analysis service is unreachable.", code="provider_unreachable") from exc
        except APIError as exc:
            logger.warning("openai_completion_failed model=%s: %s", self._model, exc)
            raise ProviderCallError(f"The analysis service returned an error: {exc}") from exc

        content = response.choices[0].message.content if response.choices else ""
        text = (content or "").strip()
        logger.info(
            "openai_completion model=%s latency_ms=%s chars=%s",
            self._model,
            int((time.perf_counter() - started) * 1000),
            len(text),
        )
        if not text:
            raise ProviderCallError("Empty response from OpenAI", code="empty_response")
        return text

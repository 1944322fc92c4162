import sys
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
from openai import APIConnectionError, APITimeoutError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fitcheck.ai.providers.openai_provider import OpenAIProvider  # noqa: E402
from fitcheck.ai.types import ChatMessage  # noqa: E402
from fitcheck.core.errors import ProviderCallError  # noqa: E402

MESSAGES = [ChatMessage(role="system", content="Analyze."), ChatMessage(role="user", content="Job + resume")]
REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class OpenAIProviderTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.provider = OpenAIProvider(model="gpt-4o-mini", api_key="sk-test")
        self.create = AsyncMock()
        self.provider._client.chat.completions.create = self.create

    async def test_returns_reply_and_forwards_parameters(self):
        self.create.return_value = _completion('  {"fitLevel": "Good Fit"}\n')
        reply = await self.provider.complete(MESSAGES, max_tokens=2500, temperature=0.1)
        self.assertEqual(reply, '{"fitLevel": "Good Fit"}')
        kwargs = self.create.await_args.kwargs
        self.assertEqual(kwargs["model"], "gpt-4o-mini")
        self.assertEqual(kwargs["max_tokens"], 2500)
        self.assertEqual(kwargs["temperature"], 0.1)
        self.assertEqual(kwargs["messages"][0], {"role": "system", "content": "Analyze."})

    async def test_empty_reply_raises(self):
        self.create.return_value = _completion(None)
        with self.assertRaises(ProviderCallError) as ctx:
            await self.provider.complete(MESSAGES, max_tokens=10, temperature=0.0)
        self.assertEqual(ctx.exception.code, "empty_response")
        self.assertEqual(ctx.exception.status_code, 502)

    async def test_timeout_maps_to_504(self):
        self.create.side_effect = APITimeoutError(request=REQUEST)
        with self.assertRaises(ProviderCallError) as ctx:
            await self.provider.complete(MESSAGES, max_tokens=10, temperature=0.0)
        self.assertEqual(ctx.exception.status_code, 504)

    async def test_connection_error_maps_to_502(self):
        self.create.side_effect = APIConnectionError(request=REQUEST)
        with self.assertRaises(ProviderCallError) as ctx:
            await self.provider.complete(MESSAGES, max_tokens=10, temperature=0.0)
        self.assertEqual(ctx.exception.code, "provider_unreachable")
        self.assertEqual(ctx.exception.status_code, 502)

    def test_blank_key_rejected(self):
        with self.assertRaises(RuntimeError):
            OpenAIProvider(model="gpt-4o-mini", api_key="  ")


if __name__ == "__main__":
    unittest.main()

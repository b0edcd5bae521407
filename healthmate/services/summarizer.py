"""
Generative-language client used by the analysis pipeline.

Every call is best-effort: failures are logged and collapse to an empty string, callers
substitute their own placeholder text.
"""
import asyncio
import logging

import httpx
from openai import APIConnectionError, AsyncOpenAI, AuthenticationError, OpenAIError, RateLimitError

from healthmate.core.config import Settings, get_openai_keys

logger = logging.getLogger(__name__)

OPENAI_RETRY_WAIT = 1.5
OPENAI_RETRY_ONCE = (RateLimitError, APIConnectionError)
# A key rejected for auth/rate limit is skipped in favour of the next one
OPENAI_FALLBACK_EXCEPTIONS = (AuthenticationError, RateLimitError)


def candidate_text(data) -> str:
    """candidates[0].content.parts[0].text of a generateContent reply, "" for any other shape."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""
    return text if isinstance(text, str) else ""


class SummarizationClient:
    def __init__(self, config: Settings, http: httpx.AsyncClient):
        self.config = config
        self.http = http
        # One client per key (multi-key fallback)
        self._openai_clients: dict[str, AsyncOpenAI] = {}

    async def complete(self, prompt: str) -> str:
        """Single-turn prompt -> raw reply text, or "" on any failure."""
        try:
            if self.config.llm_provider == "openai":
                return await self._openai_complete(prompt)
            return await self._gemini_complete(prompt)
        except Exception as e:
            logger.exception("LLM call failed (%s): %s", self.config.llm_provider, e)
            return ""

    async def _gemini_complete(self, prompt: str) -> str:
        if not self.config.gemini_api_key:
            logger.error("GEMINI_API_KEY is not set; skipping model call.")
            return ""
        url = f"{self.config.gemini_base_url.rstrip('/')}/{self.config.gemini_model}:generateContent"
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        try:
            response = await self.http.post(
                url,
                params={"key": self.config.gemini_api_key},
                json=payload,
                timeout=self.config.llm_timeout_seconds,
            )
        except httpx.HTTPError as e:
            logger.error("Gemini request failed: %s", e)
            return ""
        if not response.is_success:
            logger.error("Gemini API error: status=%s body=%s", response.status_code, response.text[:500])
            return ""
        try:
            data = response.json()
        except ValueError as e:
            logger.error("Gemini returned a non-JSON body: %s", e)
            return ""
        text = candidate_text(data)
        if not text:
            logger.warning("Gemini reply has no candidate text.")
        return text

    def _client_for_key(self, key: str) -> AsyncOpenAI:
        if key not in self._openai_clients:
            self._openai_clients[key] = AsyncOpenAI(
                api_key=key,
                timeout=self.config.llm_timeout_seconds,
                max_retries=0,
                http_client=self.http,
            )
        return self._openai_clients[key]

    async def _openai_safe_call(self, client: AsyncOpenAI, prompt: str):
        """One chat completion; on RateLimitError/APIConnectionError waits 1.5 s and tries once more."""

        async def _create():
            return await client.chat.completions.create(
                model=self.config.openai_model,
                messages=[{"role": "user", "content": prompt}],
            )

        try:
            return await _create()
        except OPENAI_RETRY_ONCE as e:
            logger.warning("OpenAI retry after %s: %s", type(e).__name__, e)
            await asyncio.sleep(OPENAI_RETRY_WAIT)
            return await _create()

    async def _openai_complete(self, prompt: str) -> str:
        keys = get_openai_keys(self.config)
        if not keys:
            logger.error("OPENAI_API_KEY is not set or invalid; skipping model call.")
            return ""
        for key in keys:
            try:
                response = await self._openai_safe_call(self._client_for_key(key), prompt)
            except OPENAI_FALLBACK_EXCEPTIONS as e:
                logger.warning("OpenAI key skipped (%s), trying the next one: %s", key[:12] + "...", e)
                continue
            except OpenAIError as e:
                logger.error("OpenAI API error: %s", e)
                return ""
            if not response.choices:
                return ""
            return response.choices[0].message.content or ""
        logger.error("No OpenAI key produced a reply.")
        return ""

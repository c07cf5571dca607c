"""Completion providers: anything that turns a chat prompt into text."""

import json
import time
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from loguru import logger
from openai import AsyncOpenAI


class CompletionProvider(Protocol):
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float,
        max_tokens: int,
    ) -> str: ...


class OpenAICompletionProvider:
    """Chat completions over any OpenAI-compatible API (Groq by default).

    Provider errors are left to propagate untouched; the gateway classifies them.
    """

    def __init__(
        self,
        model: str,
        api_key: str,
        base_url: str | None = None,
        profile_log: Path | None = None,
    ):
        self.model = model
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url)
        self.profile_log = profile_log

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float,
        max_tokens: int,
    ) -> str:
        t0 = time.perf_counter()
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        duration = time.perf_counter() - t0

        if self.profile_log is not None:
            usage = getattr(response, "usage", None)
            entry = {
                "ts": datetime.now(UTC).isoformat(),
                "model": self.model,
                "duration_s": round(duration, 3),
                "input_tokens": getattr(usage, "prompt_tokens", None),
                "output_tokens": getattr(usage, "completion_tokens", None),
            }
            self.profile_log.parent.mkdir(parents=True, exist_ok=True)
            with self.profile_log.open("a") as f:
                f.write(json.dumps(entry) + "\n")

        logger.debug(f"Completion from {self.model} in {duration:.2f}s")
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

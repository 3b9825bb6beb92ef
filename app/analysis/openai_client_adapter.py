import httpx
import openai

from app.analysis.client_base import BaseAnalysisClient
from app.analysis.exceptions import (
    AnalysisAuthError,
    AnalysisNetworkError,
    AnalysisRateLimitError,
    AnalysisResponseError,
)


class OpenAIClientAdapter(BaseAnalysisClient):
    """Analysis AI client adapter built on OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except openai.AuthenticationError as exc:
            raise AnalysisAuthError(f"AI provider rejected credentials: {exc}") from exc
        except openai.RateLimitError as exc:
            raise AnalysisRateLimitError(f"AI provider rate limit exceeded: {exc}") from exc
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AnalysisNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise AnalysisNetworkError(
                f"AI provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise AnalysisResponseError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise AnalysisResponseError("AI returned empty response")
        return content

    async def aclose(self) -> None:
        await self._client.close()

"""OpenRouter provider."""

from pydantic import SecretStr

from app.providers.base import Messages, OpenAICompatibleProvider, ProviderName


class OpenRouterProvider(OpenAICompatibleProvider):
    """Plain completion with identification headers; never retried."""

    name = ProviderName.OPENROUTER

    def __init__(
        self,
        api_key: SecretStr,
        base_url: str,
        timeout: float,
        referer: str,
        title: str,
    ) -> None:
        super().__init__(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            default_headers={"HTTP-Referer": referer, "X-Title": title},
        )

    async def _complete(self, model: str, messages: Messages) -> str | None:
        return await self._request(model, messages)

from __future__ import annotations
import httpx
from .base import LLM, LLMRequest
from .errors import LLMCallError

NO_RESPONSE = "No response from model."

class OpenAICompatLLM(LLM):
    """
    Appelle un endpoint /v1/chat/completions compatible OpenAI (Ollama, LM Studio, vLLM...).
    Un seul message 'user' par requête, pas de streaming ni de retry.
    """
    def __init__(
        self,
        url: str,
        model: str,
        *,
        api_key: str = "",
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.model = model
        self.api_key = api_key
        self.timeout = timeout
        # injectable pour les tests (httpx.MockTransport)
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _payload(self, req: LLMRequest) -> dict:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": req.prompt}],
            "temperature": req.temperature,
            "max_tokens": req.max_tokens,
        }

    async def generate(self, req: LLMRequest) -> str:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                resp = await client.post(self.url, json=self._payload(req), headers=self._headers())
            except httpx.HTTPError as e:
                raise LLMCallError(None, str(e) or e.__class__.__name__) from e

        if not resp.is_success:
            raise LLMCallError(resp.status_code, resp.text)
        try:
            data = resp.json()
        except ValueError as e:
            raise LLMCallError(resp.status_code, f"réponse non JSON: {resp.text[:200]}") from e
        return _first_content(data)

def _first_content(data) -> str:
    """choices[0].message.content, sinon le message par défaut."""
    if not isinstance(data, dict):
        return NO_RESPONSE
    choices = data.get("choices") or []
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return NO_RESPONSE
    message = choices[0].get("message") or {}
    content = message.get("content") if isinstance(message, dict) else None
    return content if content is not None else NO_RESPONSE

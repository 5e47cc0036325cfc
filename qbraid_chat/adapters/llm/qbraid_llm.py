"""qBraid chat adapter — implements LLMPort."""

from typing import Optional

from qbraid_chat.adapters.qbraid.client import QbraidClient


class QbraidLLMAdapter:
    """Runs planning and narration prompts through the qBraid chat endpoint."""

    def __init__(self, client: Optional[QbraidClient] = None):
        self.client = client or QbraidClient()

    async def complete(self, api_key: str, model: str, prompt: str) -> str:
        return await self.client.call_llm(api_key, model, prompt)

"""FastAPI application: chat page, websocket session and helper routes."""

import json
import sys
from typing import Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from qbraid_chat.adapters.llm.qbraid_llm import QbraidLLMAdapter
from qbraid_chat.adapters.qbraid.client import QbraidClient
from qbraid_chat.adapters.storage.credential_store import CredentialStore
from qbraid_chat.adapters.web.page import CHAT_PAGE
from qbraid_chat.adapters.web.session import ChatSession
from qbraid_chat.config import AppConfig
from qbraid_chat.ports.outbound import LLMPort, QbraidPort


def _log(msg: str):
    print(msg, file=sys.stderr)


class HealthResponse(BaseModel):
    status: str


class ClearKeyResponse(BaseModel):
    success: bool


class WebSocketUI:
    """UIPort over a websocket connection."""

    def __init__(self, websocket: WebSocket):
        self.websocket = websocket

    async def post(self, message: dict) -> None:
        await self.websocket.send_json(message)


def create_app(
    config: Optional[AppConfig] = None,
    api: Optional[QbraidPort] = None,
    llm: Optional[LLMPort] = None,
    store: Optional[CredentialStore] = None,
) -> FastAPI:
    """Wire adapters into a FastAPI app. Any adapter can be swapped for tests."""
    config = config or AppConfig.from_env()
    client = QbraidClient(config.api)
    api = api or client
    llm = llm or QbraidLLMAdapter(client)
    store = store or CredentialStore(config.credential_file, seed=config.api_key)

    app = FastAPI(title="qBraid Chat")

    @app.get("/", response_class=HTMLResponse)
    async def root():
        """Chat page"""
        return CHAT_PAGE

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(status="ok")

    @app.delete("/api-key", response_model=ClearKeyResponse)
    async def clear_api_key():
        """Forget the stored qBraid API key."""
        store.clear()
        return ClearKeyResponse(success=True)

    @app.websocket("/ws")
    async def chat_socket(websocket: WebSocket):
        await websocket.accept()
        ui = WebSocketUI(websocket)
        session = ChatSession(ui, llm, api, store, default_model=config.default_model)
        _log("Chat session opened.")
        try:
            while True:
                raw = await websocket.receive_text()
                try:
                    data = json.loads(raw)
                except ValueError:
                    data = None
                if not isinstance(data, dict):
                    await ui.post({"type": "clearError"})
                    await ui.post({"type": "error", "content": "Malformed message."})
                    continue
                await session.receive(data)
        except WebSocketDisconnect:
            pass
        finally:
            await session.close()
            _log("Chat session closed.")

    return app


app = create_app()

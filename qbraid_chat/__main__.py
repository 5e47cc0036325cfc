"""Run the chat server: `python -m qbraid_chat`."""

import uvicorn

from qbraid_chat.adapters.web.server import app
from qbraid_chat.config import CONFIG


def main():
    print("qBraid Chat server starting")
    print(f"Open http://{CONFIG['host']}:{CONFIG['port']}/")
    uvicorn.run(app, host=CONFIG["host"], port=CONFIG["port"], log_level="info")


if __name__ == "__main__":
    main()

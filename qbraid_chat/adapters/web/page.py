"""Chat page served at `/`."""

CHAT_PAGE = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>qBraid Chat</title>
    <style>
      body { font-family: sans-serif; max-width: 800px; margin: 0 auto; padding: 10px;
             height: 100vh; display: flex; flex-direction: column; box-sizing: border-box; }
      #modelSelector { padding: 8px 12px; border-radius: 6px; width: 240px; }
      #messages { flex: 1; overflow-y: auto; padding: 12px; background: #f5f5f5;
                  border-radius: 8px; display: flex; flex-direction: column; gap: 16px; margin: 12px 0; }
      .message { max-width: 85%; padding: 14px 18px; border-radius: 14px; line-height: 1.5;
                 word-break: break-word; white-space: pre-wrap; }
      .user-message { background: #1976d2; color: #fff; align-self: flex-end; }
      .assistant-message { background: #fff; border: 1px solid #ddd; align-self: flex-start; }
      .error-message { color: #c62828; padding: 8px; }
      .input-row { display: flex; gap: 8px; }
      #messageInput { flex: 1; padding: 10px; border-radius: 6px; border: 1px solid #ccc; }
      button { padding: 10px 20px; }
    </style>
  </head>
  <body>
    <select id="modelSelector"></select>
    <div id="messages"></div>
    <div class="input-row">
      <input id="messageInput" type="text" placeholder="Ask about jobs, devices or models...">
      <button id="sendButton">Send</button>
    </div>
    <script>
      const messagesDiv = document.getElementById("messages");
      const modelSelector = document.getElementById("modelSelector");
      const messageInput = document.getElementById("messageInput");
      const sendButton = document.getElementById("sendButton");
      const scheme = location.protocol === "https:" ? "wss" : "ws";
      const socket = new WebSocket(`${scheme}://${location.host}/ws`);

      function post(message) { socket.send(JSON.stringify(message)); }

      socket.addEventListener("open", () => post({ type: "fetchModels" }));

      socket.addEventListener("message", (event) => {
        const msg = JSON.parse(event.data);
        switch (msg.type) {
          case "models":
            modelSelector.replaceChildren(
              ...msg.models.map((m) => new Option(m.model, m.model))
            );
            break;
          case "typing":
            appendTypingIndicator();
            break;
          case "answer":
            replaceTyping(msg.content, "assistant-message");
            break;
          case "error":
            replaceTyping(msg.content, "error-message");
            break;
          case "clearError":
            document.querySelectorAll(".error-message").forEach((el) => el.remove());
            break;
          case "apiKeyPrompt": {
            const key = window.prompt(msg.content);
            post(key ? { type: "apiKey", apiKey: key } : { type: "apiKeyDismissed" });
            break;
          }
          default:
            console.error(`Unknown message type: ${msg.type}`);
        }
      });

      function appendMessage(content, className) {
        const div = document.createElement("div");
        div.className = className === "error-message" ? className : `message ${className}`;
        div.textContent = content;
        messagesDiv.appendChild(div);
        messagesDiv.scrollTop = messagesDiv.scrollHeight;
      }

      function appendTypingIndicator() {
        if (document.querySelector(".typing-message")) {
          return;
        }
        appendMessage("...", "assistant-message typing-message");
      }

      function replaceTyping(content, className) {
        const typing = document.querySelector(".typing-message");
        if (typing) {
          typing.remove();
        }
        appendMessage(content, className);
      }

      function sendMessage() {
        const text = messageInput.value.trim();
        if (!text) {
          return;
        }
        appendMessage(text, "user-message");
        post({ type: "sendMessage", content: text, model: modelSelector.value });
        messageInput.value = "";
        messageInput.focus();
      }

      messageInput.addEventListener("keypress", (e) => {
        if (e.key === "Enter" && !e.shiftKey) {
          e.preventDefault();
          sendMessage();
        }
      });
      sendButton.addEventListener("click", sendMessage);
    </script>
  </body>
</html>
"""

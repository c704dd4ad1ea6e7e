"""
Textual Application - Terminal chat interface
=============================================

This module implements the Textual TUI for Eliza Chat: a scrolling
message list, an input box and a send button.
"""

from typing import Optional

from textual.app import App, ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Header, Footer, Static, Button, Input
from textual.binding import Binding

from core.config import Config, load_config
from core.exceptions import UIError
from core.logging import clear_log_context, get_logger, set_log_context
from rules.loader import build_matcher
from services.chat import ChatService, ChatMessage

logger = get_logger("tui.app")


class MessageBubble(Static):
    """A single chat message."""

    def __init__(self, message: ChatMessage, show_timestamp: bool = False, **kwargs):
        text = message.text
        if show_timestamp:
            text = f"{message.timestamp.strftime('%H:%M')}  {text}"
        # markup=False: user text is rendered literally
        super().__init__(
            text,
            markup=False,
            classes="user-message" if message.sender == "user" else "bot-output",
            **kwargs
        )
        self.message = message


class ChatApp(App):
    """
    Eliza Chat Terminal UI Application.

    Each submitted line is sent through the chat service; the user's
    message and the bot's reply are appended to the message list.
    """

    TITLE = "Eliza Chat"

    CSS = """
    Screen {
        background: $surface;
    }

    #message-container {
        height: 1fr;
        padding: 1 2;
    }

    .user-message {
        background: $primary-darken-2;
        color: $text;
        margin: 0 0 1 12;
        padding: 0 1;
    }

    .bot-output {
        background: $panel;
        color: $text;
        margin: 0 12 1 0;
        padding: 0 1;
    }

    #input-row {
        height: auto;
        padding: 0 1;
    }

    #user-input {
        width: 1fr;
    }

    #send-btn {
        margin: 0 0 0 1;
    }

    #send-btn.has-content {
        background: $success;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+l", "clear", "Clear"),
    ]

    def __init__(
        self,
        config: Optional[Config] = None,
        service: Optional[ChatService] = None
    ):
        super().__init__()

        self.config = config or load_config()

        if service is None:
            service = ChatService(
                build_matcher(self.config),
                max_input_length=self.config.ui.max_input_length
            )
        self.service = service

    def compose(self) -> ComposeResult:
        yield Header()
        yield VerticalScroll(id="message-container")
        with Horizontal(id="input-row"):
            yield Input(placeholder="Type your message here...", id="user-input")
            yield Button("Send", id="send-btn", variant="primary")
        yield Footer()

    def on_mount(self) -> None:
        set_log_context(channel="tui")
        self.update_send_button_state()
        self.query_one("#user-input", Input).focus()

    def on_unmount(self) -> None:
        clear_log_context()

    def update_send_button_state(self) -> None:
        """Mark the send button while the input holds non-blank text."""
        user_input = self.query_one("#user-input", Input)
        send_btn = self.query_one("#send-btn", Button)
        send_btn.set_class(user_input.value.strip() != "", "has-content")

    def on_input_changed(self, event: Input.Changed) -> None:
        self.update_send_button_state()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.send_message()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self.send_message()

    def send_message(self) -> None:
        """Submit the input box contents and render the turn."""
        user_input = self.query_one("#user-input", Input)

        try:
            turn = self.service.submit(user_input.value)
        except UIError as e:
            self.notify(e.message, severity="warning")
            self.update_send_button_state()
            return

        user_input.value = ""
        self.append_message(turn.user)
        self.append_message(turn.bot)
        self.update_send_button_state()

    def append_message(self, message: ChatMessage) -> None:
        """Append a message to the chat and scroll to the bottom."""
        container = self.query_one("#message-container", VerticalScroll)
        container.mount(
            MessageBubble(message, show_timestamp=self.config.ui.show_timestamps)
        )
        container.scroll_end(animate=False)

    def action_clear(self) -> None:
        """Remove all messages from the transcript."""
        self.query_one("#message-container", VerticalScroll).remove_children()


def run_tui(config: Optional[Config] = None) -> None:
    app = ChatApp(config=config)
    app.run()


if __name__ == "__main__":
    run_tui()

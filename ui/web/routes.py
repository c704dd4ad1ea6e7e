"""
Web Routes - API endpoints and page routes
=========================================

This module defines all web routes for the Eliza Chat interface.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from core.logging import set_log_context

router = APIRouter()


# === Page Routes ===

@router.get("/", response_class=HTMLResponse)
async def chat_page(request: Request):
    """Render the chat page."""
    templates = request.app.state.templates
    config = request.app.state.config

    return templates.TemplateResponse(
        request,
        "chat.html",
        {
            "app_name": config.app_name,
            "max_input_length": config.ui.max_input_length,
        }
    )


# === API Routes ===

class ChatRequest(BaseModel):
    """Chat message request model."""
    message: str


@router.post("/api/chat")
def chat(request: Request, chat_data: ChatRequest):
    """Send one user message and get the bot reply."""
    service = request.app.state.chat_service

    set_log_context(channel="web")
    turn = service.submit(chat_data.message)

    return turn.to_dict()


@router.get("/api/rules")
async def list_rules(request: Request):
    """List the active rule table in priority order."""
    matcher = request.app.state.chat_service.matcher

    return {
        "rules": [
            {
                "name": rule.name,
                "matcher": rule.pattern,
                "replies": len(rule.replies),
            }
            for rule in matcher.rules
        ],
        "default_replies": len(matcher.default_replies),
    }


@router.get("/api/status")
async def get_status(request: Request):
    """Get system status."""
    config = request.app.state.config
    matcher = request.app.state.chat_service.matcher

    return {
        "app_name": config.app_name,
        "version": config.version,
        "rules": len(matcher.rules),
        "rules_file": config.responder.rules_file or None,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

"""
Chat endpoint - turns a prompt into a markdown answer with fenced code.

Answers come from the keyword templates, or from Claude when
CLASSIFIER_MODE=claude.
"""

from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from promptide.core.config import settings
from promptide.core.logging_config import logger
from promptide.modules.chat.prompts import GENERATION_SYSTEM_PROMPT
from promptide.modules.chat.templates import generate_response
from promptide.schemas.chat import ChatRequest, ChatResponse
from promptide.utils.claude_client import ClaudeClient

router = APIRouter(tags=["Chat"])

_claude_client: Optional[ClaudeClient] = None


def get_claude_client() -> ClaudeClient:
    global _claude_client
    if _claude_client is None:
        _claude_client = ClaudeClient()
    return _claude_client


async def generate_answer(prompt: str) -> str:
    if settings.CLASSIFIER_MODE == "claude":
        result = await get_claude_client().generate(prompt=prompt, system_prompt=GENERATION_SYSTEM_PROMPT)
        return result.get("content", "")
    return generate_response(prompt)


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest):
    if not request.prompt:
        return JSONResponse(status_code=400, content={"success": False, "error": "Prompt is required"})

    try:
        logger.info(f"[Chat API] Received prompt: '{request.prompt[:100]}'")
        response = await generate_answer(request.prompt)
    except Exception as e:
        logger.log_error_with_context(e, "chat endpoint")
        return JSONResponse(status_code=500, content={"success": False, "error": "Failed to process chat request"})

    return ChatResponse(success=True, response=response)

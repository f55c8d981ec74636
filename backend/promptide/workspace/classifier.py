"""
Classifier capability: natural language prompt -> GenerationResult.

Every implementation produces markdown one way or another and hands it to
the response parser, so the orchestrator never sees raw markdown.
"""

from abc import ABC, abstractmethod
from typing import Optional

import httpx

from promptide.core.config import settings
from promptide.core.exceptions import ClassifierError
from promptide.core.logging_config import logger
from promptide.modules.chat.prompts import GENERATION_SYSTEM_PROMPT
from promptide.modules.chat.templates import generate_response
from promptide.utils.response_parser import parse_generation
from promptide.workspace.models import GenerationResult


class Classifier(ABC):
    """Turns a prompt into either conversation text or generated files"""

    name = "classifier"

    @abstractmethod
    async def classify(self, text: str) -> GenerationResult:
        ...

    async def aclose(self) -> None:
        return None


class TemplateClassifier(Classifier):
    """In-process keyword/template classifier"""

    name = "template"

    async def classify(self, text: str) -> GenerationResult:
        markdown = generate_response(text)
        return parse_generation(markdown)


class RemoteClassifier(Classifier):
    """Calls the chat service (POST {base_url}/chat) and parses its markdown"""

    name = "remote"

    def __init__(self, base_url: Optional[str] = None, client: Optional[httpx.AsyncClient] = None):
        self.base_url = (base_url or settings.FILE_STORE_URL).rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.GENERATION_TIMEOUT_SECONDS, connect=settings.HTTP_CONNECT_TIMEOUT)
        )

    async def classify(self, text: str) -> GenerationResult:
        try:
            response = await self._client.post(f"{self.base_url}/chat", json={"prompt": text})
        except httpx.HTTPError as e:
            raise ClassifierError(f"Chat service unreachable: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.status_code != 200 or not data.get("success"):
            error = data.get("error") or f"HTTP {response.status_code}"
            raise ClassifierError(f"Chat service error: {error}")

        return parse_generation(data.get("response", ""))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class ClaudeClassifier(Classifier):
    """Delegates generation to Claude with a prompt that asks for fenced files"""

    name = "claude"

    def __init__(self, client=None):
        if client is None:
            from promptide.utils.claude_client import ClaudeClient
            client = ClaudeClient()
        self.client = client

    async def classify(self, text: str) -> GenerationResult:
        try:
            result = await self.client.generate(prompt=text, system_prompt=GENERATION_SYSTEM_PROMPT)
        except Exception as e:
            logger.log_error_with_context(e, "ClaudeClassifier.classify")
            raise ClassifierError(f"Claude request failed: {e}") from e
        return parse_generation(result.get("content", ""))


def create_classifier(mode: Optional[str] = None, base_url: Optional[str] = None) -> Classifier:
    """Build the classifier selected by CLASSIFIER_MODE"""
    mode = (mode or settings.CLASSIFIER_MODE).lower()
    if mode == "template":
        return TemplateClassifier()
    if mode == "remote":
        return RemoteClassifier(base_url=base_url)
    if mode == "claude":
        return ClaudeClassifier()
    raise ValueError(f"Unknown classifier mode: {mode}")

from anthropic import AsyncAnthropic, APIStatusError, APIError, APIConnectionError, APITimeoutError
from typing import Optional, Dict, List, Any
import asyncio
import random
import httpx
from promptide.core.config import settings
from promptide.core.logging_config import logger

# Retry configuration
MAX_RETRIES = 3
BASE_DELAY = 2.0
MAX_DELAY = 30.0
RETRYABLE_ERRORS = ['overloaded_error', 'rate_limit_error', 'server_error']


class ClaudeClient:
    """Claude API client wrapper for non-streaming requests"""

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 model: Optional[str] = None, async_client: Optional[AsyncAnthropic] = None):
        client_kwargs: Dict[str, Any] = {"api_key": api_key or settings.ANTHROPIC_API_KEY}

        base_url = base_url if base_url is not None else settings.ANTHROPIC_BASE_URL
        if base_url and base_url.strip():
            client_kwargs["base_url"] = base_url.strip()
            logger.info(f"Using custom Claude API base URL: {base_url}")

        client_kwargs["timeout"] = httpx.Timeout(
            connect=float(settings.CLAUDE_CONNECT_TIMEOUT),
            read=float(settings.CLAUDE_REQUEST_TIMEOUT),
            write=float(settings.CLAUDE_REQUEST_TIMEOUT),
            pool=float(settings.CLAUDE_REQUEST_TIMEOUT)
        )

        self.async_client = async_client or AsyncAnthropic(**client_kwargs)
        self.model = model or settings.CLAUDE_MODEL

        logger.info(f"Claude client initialized: model={self.model}")

    def _is_retryable_error(self, error: Exception) -> bool:
        """Check if an error is retryable (overload, rate limit, network issues, etc.)"""
        if isinstance(error, (APIConnectionError, APITimeoutError)):
            logger.warning(f"Network error detected (retryable): {type(error).__name__}")
            return True

        if isinstance(error, (httpx.ConnectError, httpx.TimeoutException, httpx.NetworkError)):
            logger.warning(f"HTTPX network error detected (retryable): {type(error).__name__}")
            return True

        if isinstance(error, (APIStatusError, APIError)):
            if hasattr(error, 'body') and isinstance(error.body, dict):
                error_type = error.body.get('error', {}).get('type', '')
                return error_type in RETRYABLE_ERRORS
            if hasattr(error, 'status_code'):
                return error.status_code in [429, 500, 502, 503, 529]

        return False

    def _calculate_retry_delay(self, attempt: int) -> float:
        """Calculate delay with exponential backoff and jitter"""
        delay = min(BASE_DELAY * (2 ** attempt), MAX_DELAY)
        jitter = delay * random.uniform(0, 0.25)
        return delay + jitter

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        messages: Optional[List[Dict[str, str]]] = None
    ) -> Dict[str, Any]:
        """
        Generate response from Claude (non-streaming)

        Returns:
            Dict with content, model and token usage
        """
        messages = list(messages or [])
        messages.append({"role": "user", "content": prompt})

        if max_tokens is None:
            max_tokens = settings.CLAUDE_MAX_TOKENS
        if temperature is None:
            temperature = settings.CLAUDE_TEMPERATURE

        logger.info(f"Claude API: model={self.model}, max_tokens={max_tokens}, prompt_len={len(prompt)}")

        last_error: Optional[Exception] = None
        for attempt in range(MAX_RETRIES + 1):
            try:
                response = await self.async_client.messages.create(
                    model=self.model,
                    max_tokens=max_tokens,
                    temperature=temperature,
                    system=system_prompt or "",
                    messages=messages
                )

                content = "".join(
                    block.text for block in response.content if getattr(block, "type", "text") == "text"
                )

                result = {
                    "content": content,
                    "model": self.model,
                    "input_tokens": response.usage.input_tokens,
                    "output_tokens": response.usage.output_tokens,
                    "total_tokens": response.usage.input_tokens + response.usage.output_tokens,
                    "stop_reason": response.stop_reason,
                }

                logger.info(f"Claude API response: tokens={result['total_tokens']}, stop={response.stop_reason}")
                return result

            except Exception as e:
                last_error = e
                error_type = type(e).__name__
                if self._is_retryable_error(e) and attempt < MAX_RETRIES:
                    delay = self._calculate_retry_delay(attempt)
                    logger.warning(
                        f"Claude API error [{error_type}] (attempt {attempt + 1}/{MAX_RETRIES + 1}), retrying in {delay:.1f}s...",
                        extra={
                            "event_type": "claude_api_retry",
                            "error_type": error_type,
                            "attempt": attempt + 1,
                            "retry_delay": delay
                        }
                    )
                    await asyncio.sleep(delay)
                else:
                    logger.error(
                        f"Claude API error (non-retryable or max retries exceeded): {error_type}: {e}",
                        extra={"event_type": "claude_api_error", "error_type": error_type}
                    )
                    raise

        raise last_error

"""Client for OpenAI-compatible chat completion endpoints (Ollama, LM Studio, ...)."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

__all__ = [
    "LLMError",
    "analyze",
    "build_api_url",
    "build_request_payload",
    "build_user_message",
    "extract_message_content",
    "send_request",
    "test_connection",
]

CONNECTION_TEST_TIMEOUT = 10
CONNECTION_TEST_PROMPT = "Respond with OK if you can read this message."
CONNECTION_TEST_TEMPERATURE = 0.1
CONNECTION_TEST_MAX_TOKENS = 10

ANALYSIS_INSTRUCTIONS = (
    "Analyze the following log files. Identify errors, warnings and recurring "
    "patterns, explain the most likely root causes, assess their impact, and "
    "recommend concrete next steps. Format the answer in markdown."
)


class LLMError(RuntimeError):
    """Raised when the model response does not have the expected shape."""


def build_api_url(endpoint: str, port: int, path: str) -> str:
    # Composed verbatim: no scheme or slash normalisation.
    return f"{endpoint}:{port}{path}"


def build_request_payload(
    system_prompt: str,
    user_message: str,
    model: str,
    temperature: float,
    max_tokens: int,
) -> str:
    """Return the JSON body for a chat completions request."""

    payload = {
        "model": model,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ],
        "temperature": temperature,
        "max_tokens": max_tokens,
    }
    return json.dumps(payload)


def build_user_message(log_content: str) -> str:
    return f"{ANALYSIS_INSTRUCTIONS}\n\n### LOGS ###\n{log_content}"


def send_request(
    url: str,
    json_payload: str,
    timeout_seconds: float,
    client: Optional[httpx.Client] = None,
) -> Optional[Any]:
    """POST *json_payload* to *url* and return the decoded JSON response.

    Any transport error, timeout, non-2xx status or undecodable body yields
    ``None``. Pass *client* to reuse a configured :class:`httpx.Client`.
    """

    headers = {"Content-Type": "application/json"}
    try:
        if client is None:
            with httpx.Client(timeout=timeout_seconds) as owned:
                response = owned.post(url, content=json_payload, headers=headers)
        else:
            response = client.post(url, content=json_payload, headers=headers, timeout=timeout_seconds)
        response.raise_for_status()
        return response.json()
    except httpx.TimeoutException as exc:
        logger.error("Request to %s timed out after %ss: %s", url, timeout_seconds, exc)
    except httpx.HTTPStatusError as exc:
        logger.error("Request to %s failed with HTTP %s", url, exc.response.status_code)
    except httpx.HTTPError as exc:
        logger.error("Request to %s failed: %s", url, exc)
    except ValueError as exc:
        logger.error("Response from %s is not valid JSON: %s", url, exc)
    return None


def extract_message_content(response: Any) -> str:
    """Return ``choices[0].message.content`` from a chat completions response."""

    try:
        content = response["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise LLMError(f"Unexpected response shape: {exc!r}") from exc
    if not isinstance(content, str):
        raise LLMError("Response message content is not text")
    return content


def test_connection(
    endpoint: str,
    port: int,
    path: str,
    model: str,
    timeout_seconds: float = CONNECTION_TEST_TIMEOUT,
    client: Optional[httpx.Client] = None,
) -> bool:
    """Send a tiny probe request; success means any parsed response came back."""

    url = build_api_url(endpoint, port, path)
    payload = build_request_payload(
        system_prompt="You are a connectivity check.",
        user_message=CONNECTION_TEST_PROMPT,
        model=model,
        temperature=CONNECTION_TEST_TEMPERATURE,
        max_tokens=CONNECTION_TEST_MAX_TOKENS,
    )
    logger.debug("Testing connection to %s with model %s", url, model)
    return send_request(url, payload, timeout_seconds, client=client) is not None


def analyze(
    log_content: str,
    endpoint: str,
    port: int,
    path: str,
    system_prompt: str,
    model: str,
    temperature: float,
    max_tokens: int,
    timeout_seconds: float,
    client: Optional[httpx.Client] = None,
) -> Optional[str]:
    """Ask the model to analyse *log_content* and return its answer text."""

    url = build_api_url(endpoint, port, path)
    payload = build_request_payload(
        system_prompt=system_prompt,
        user_message=build_user_message(log_content),
        model=model,
        temperature=temperature,
        max_tokens=max_tokens,
    )
    logger.info("Sending %d characters of log content to %s", len(log_content), url)

    response = send_request(url, payload, timeout_seconds, client=client)
    if response is None:
        return None

    try:
        return extract_message_content(response)
    except LLMError as exc:
        logger.error("Model response from %s could not be used: %s", url, exc)
        return None

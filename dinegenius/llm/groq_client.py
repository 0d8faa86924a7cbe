from __future__ import annotations

import logging
import time

from groq import APITimeoutError, Groq, RateLimitError

from ..exceptions import AIError, AIServiceError, AITimeoutError, RateLimitedError
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a restaurant recommendation engine for groups. "
    "Follow the user's instructions exactly and return ONLY the JSON they ask for."
)

RETRY_SUFFIX = (
    "\n\nNote: the previous reply could not be used. Make sure the reply follows "
    "the required format exactly and contains only the JSON data, with no "
    "explanatory text."
)


def generate_recommendation(
    prompt: str,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> str:
    """
    Send *prompt* to the Groq model once and return the raw reply text.

    Raises AITimeoutError, RateLimitedError or AIServiceError on failure.
    """
    if not config.enabled or not config.api_key:
        raise AIServiceError("LLM is disabled or GROQ_API_KEY is not set")

    start = time.time()
    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            max_tokens=config.max_tokens,
            temperature=config.temperature,
            top_p=config.top_p,
        )
    except (APITimeoutError, TimeoutError) as exc:
        logger.warning("Groq call timed out after %.0fms", (time.time() - start) * 1000)
        raise AITimeoutError("AI service timed out, please try again later") from exc
    except RateLimitError as exc:
        logger.warning("Groq call was rate limited")
        raise RateLimitedError("AI service is rate limited, please try again later") from exc
    except Exception as exc:
        logger.warning("Groq call failed", exc_info=True)
        raise AIServiceError(f"AI service error: {exc}") from exc

    content = ""
    if response.choices:
        content = response.choices[0].message.content or ""
    if not content.strip():
        raise AIServiceError("AI service returned an empty response")

    logger.info("Groq reply received in %.0fms", (time.time() - start) * 1000)
    return content


def generate_with_retry(
    prompt: str,
    max_retries: int = 1,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> str:
    """
    Call :func:`generate_recommendation`, retrying up to *max_retries* times.

    Retries append a reminder to stick to the JSON format. The error of the
    last attempt is re-raised unchanged.
    """
    for attempt in range(max_retries + 1):
        current_prompt = prompt if attempt == 0 else prompt + RETRY_SUFFIX
        try:
            return generate_recommendation(current_prompt, config=config)
        except AIError as exc:
            if attempt >= max_retries:
                raise
            logger.info("AI request failed (%s), retry %d of %d", exc, attempt + 1, max_retries)
            time.sleep(config.retry_delay)

    raise AIServiceError("max_retries must not be negative")

"""
Summary generation with Claude via LangChain.
"""

import json
import logging

from langchain_anthropic import ChatAnthropic

from .config import load_model_config, DEFAULT_MODEL
from .errors import FetchError
from .models import AssignmentRecord
from .prompts import get_summary_prompt, SUMMARY_MAX_CHARS

logger = logging.getLogger(__name__)

FALLBACK_SUMMARY = "Brak możliwości wygenerowania podsumowania."


def _response_text(content) -> str:
    # Content is a string, or a list of blocks for multi-part replies
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def summarize_tasks(record: AssignmentRecord, api_key: str) -> str:
    """Ask the model for a short Polish summary of an anonymized record.

    Args:
        record: Assignment record with placeholder names only
        api_key: Anthropic API key

    Returns:
        The summary text, still containing placeholders

    Raises:
        FetchError: If the model call fails
    """
    config = load_model_config()

    # Extract model from config or use default
    model = config.pop("model", DEFAULT_MODEL)

    llm = ChatAnthropic(
        model=model,
        api_key=api_key,
        **config
    )

    chain = get_summary_prompt() | llm

    logger.info("Requesting summary from %s", model)
    try:
        response = chain.invoke({
            "day_of_week": record.day_of_week,
            "date": record.date,
            "tasks": json.dumps(record.tasks_by_person, ensure_ascii=False, indent=2),
            "max_chars": SUMMARY_MAX_CHARS,
        })
    except Exception as e:
        raise FetchError("summarize", f"summary generation failed: {e}") from e

    text = _response_text(response.content).strip()
    if not text:
        logger.warning("Model returned no text; using fallback summary")
        return FALLBACK_SUMMARY
    return text

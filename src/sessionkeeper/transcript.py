"""Readable rendering of JSON-lines session transcripts.

Claude Code writes one JSON object per line. Each line carries a ``type``
("user", "assistant", ...) and usually a ``message`` with ``role`` and
``content``; content is either a string or a list of blocks (``text``,
``thinking``, ``tool_use``, ``tool_result``). Lines that are not JSON are
kept as they are.
"""

import json
from typing import Any

from sessionkeeper.formatting import truncate

MAX_DEPTH = 15
SUMMARY_LENGTH = 80
SUMMARY_LINES = 5
EMPTY_TRANSCRIPT = "No content available"

ROLE_LABELS = {
    "user": "USER",
    "assistant": "ASSISTANT",
    "system": "SYSTEM",
    "tool": "TOOL",
    "function": "FUNCTION",
}

# Keys worth descending into when a line has no recognisable message shape
TEXT_KEYS = ("text", "content", "message", "output", "result", "input", "thought", "reasoning")


def role_label(entry: dict) -> str:
    """Label for a transcript entry, from its type or its message role."""
    entry_type = entry.get("type")
    if entry_type in ROLE_LABELS:
        return ROLE_LABELS[entry_type]

    message = entry.get("message")
    role = message.get("role") if isinstance(message, dict) else None
    return ROLE_LABELS.get(role, "ENTRY")


def _clean(text: str) -> str:
    return text.replace("\\n", "\n").strip()


def _extract_block(block: Any, texts: list[str], depth: int) -> None:
    if depth > MAX_DEPTH or not isinstance(block, dict):
        return

    if isinstance(block.get("text"), str) and _clean(block["text"]):
        texts.append(_clean(block["text"]))

    if isinstance(block.get("thinking"), str) and _clean(block["thinking"]):
        texts.append(f"[Thinking]\n{_clean(block['thinking'])}")

    if isinstance(block.get("name"), str):
        tool_text = f"[Tool: {block['name']}]"
        tool_input = block.get("input")
        if isinstance(tool_input, dict) and tool_input:
            tool_text += "\n" + json.dumps(tool_input, ensure_ascii=False)
        texts.append(tool_text)

    content = block.get("content")
    if isinstance(content, str) and _clean(content):
        texts.append(_clean(content))
    elif isinstance(content, dict) and isinstance(content.get("text"), str):
        if _clean(content["text"]):
            texts.append(_clean(content["text"]))
    elif isinstance(content, list):
        for item in content:
            _extract_block(item, texts, depth + 1)


def _extract(value: Any, texts: list[str], depth: int) -> None:
    if depth > MAX_DEPTH:
        return

    if isinstance(value, dict):
        message = value.get("message")
        if isinstance(message, dict) and "content" in message:
            content = message["content"]
            if isinstance(content, list):
                for block in content:
                    _extract_block(block, texts, depth)
                return
            if isinstance(content, str):
                text = _clean(content)
                if text and text != "{}":
                    texts.append(text)
                return

        if isinstance(value.get("content"), list):
            for block in value["content"]:
                _extract_block(block, texts, depth)
            return

        for key in TEXT_KEYS:
            if key in value:
                _extract(value[key], texts, depth + 1)

    elif isinstance(value, str):
        text = _clean(value)
        if text and not text.startswith("{"):
            texts.append(text)

    elif isinstance(value, list):
        for item in value:
            _extract_block(item, texts, depth)


def extract_text(entry: Any) -> str:
    """All readable text of one transcript entry, blank-line separated."""
    texts: list[str] = []
    _extract(entry, texts, 0)
    return "\n\n".join(texts).strip()


def render_transcript(content: str) -> str:
    """
    Format raw transcript content for reading.

    Args:
        content: Full JSON-lines text of a session

    Returns:
        Sections of the form "--- LABEL ---" followed by the extracted text,
        or EMPTY_TRANSCRIPT if nothing readable was found
    """
    sections = []
    for line in content.splitlines():
        line = line.strip()
        if not line:
            continue

        try:
            entry = json.loads(line)
        except (json.JSONDecodeError, RecursionError):
            sections.append(line)
            continue

        text = extract_text(entry)
        if not text:
            continue
        label = role_label(entry) if isinstance(entry, dict) else "ENTRY"
        sections.append(f"--- {label} ---\n{text}")

    if not sections:
        return EMPTY_TRANSCRIPT
    return "\n\n".join(sections)


def summarize_preview(preview: str, max_length: int = SUMMARY_LENGTH) -> str | None:
    """First meaningful message text found in the leading lines of a preview."""
    for line in preview.splitlines()[:SUMMARY_LINES]:
        line = line.strip()
        if not line:
            continue
        try:
            entry = json.loads(line)
        except (json.JSONDecodeError, RecursionError):
            return truncate(line, max_length)

        text = extract_text(entry)
        if text:
            return truncate(" ".join(text.split()), max_length)
    return None

"""Tests for transcript rendering."""

import json

from sessionkeeper.transcript import (
    EMPTY_TRANSCRIPT,
    extract_text,
    render_transcript,
    role_label,
    summarize_preview,
)


def line(entry: dict) -> str:
    return json.dumps(entry)


class TestRoleLabel:
    def test_from_type(self):
        assert role_label({"type": "assistant"}) == "ASSISTANT"

    def test_from_message_role(self):
        assert role_label({"type": "summary", "message": {"role": "user"}}) == "USER"

    def test_unknown(self):
        assert role_label({"type": "summary"}) == "ENTRY"


class TestExtractText:
    def test_string_content(self):
        entry = {"type": "user", "message": {"role": "user", "content": "hello"}}
        assert extract_text(entry) == "hello"

    def test_content_blocks(self):
        entry = {
            "type": "assistant",
            "message": {
                "role": "assistant",
                "content": [
                    {"type": "thinking", "thinking": "let me look"},
                    {"type": "text", "text": "Found it."},
                    {"type": "tool_use", "name": "Read", "input": {"file_path": "a.py"}},
                ],
            },
        }
        text = extract_text(entry)
        assert "[Thinking]\nlet me look" in text
        assert "Found it." in text
        assert '[Tool: Read]\n{"file_path": "a.py"}' in text

    def test_tool_result_nested(self):
        entry = {
            "type": "user",
            "message": {
                "role": "user",
                "content": [
                    {"type": "tool_result", "content": [{"type": "text", "text": "42 lines"}]}
                ],
            },
        }
        assert extract_text(entry) == "42 lines"

    def test_escaped_newlines_expanded(self):
        entry = {"message": {"content": "a\\nb"}}
        assert extract_text(entry) == "a\nb"

    def test_nothing_readable(self):
        assert extract_text({"type": "user", "uuid": "123"}) == ""


class TestRenderTranscript:
    def test_sections(self):
        content = "\n".join(
            [
                line({"type": "user", "message": {"role": "user", "content": "hi"}}),
                line({"type": "assistant", "message": {"role": "assistant", "content": "hello"}}),
            ]
        )
        assert render_transcript(content) == "--- USER ---\nhi\n\n--- ASSISTANT ---\nhello"

    def test_non_json_kept(self):
        assert render_transcript("plain text line\n") == "plain text line"

    def test_empty_entries_skipped(self):
        content = line({"type": "user", "uuid": "x"}) + "\n\n"
        assert render_transcript(content) == EMPTY_TRANSCRIPT

    def test_empty_input(self):
        assert render_transcript("") == EMPTY_TRANSCRIPT

    def test_deeply_nested_line_kept_as_text(self):
        nested = "[" * 1999
        assert render_transcript(nested) == nested


class TestSummarizePreview:
    def test_first_message(self):
        preview = "\n".join(
            [
                line({"type": "summary", "uuid": "x"}),
                line({"type": "user", "message": {"role": "user", "content": "refactor  the\nparser"}}),
            ]
        )
        assert summarize_preview(preview) == "refactor the parser"

    def test_truncated(self):
        preview = line({"type": "user", "message": {"content": "x" * 200}})
        summary = summarize_preview(preview)
        assert len(summary) == 80
        assert summary.endswith("...")

    def test_plain_text(self):
        assert summarize_preview("not json at all") == "not json at all"

    def test_nothing_found(self):
        assert summarize_preview(line({"uuid": "x"})) is None

    def test_deeply_nested_line_kept_as_text(self):
        summary = summarize_preview("[" * 1999)
        assert summary == "[" * 77 + "..."

"""Unit tests for chat message assembly."""

from prompt_universe.core.llm import ChatMessage, assemble_messages


def test_instruction_only():
    assert assemble_messages("Do it") == [ChatMessage(role="user", content="Do it")]


def test_system_prompt_leads():
    messages = assemble_messages("Do it", system_prompt="You are terse.")

    assert [m.role for m in messages] == ["system", "user"]
    assert messages[0].content == "You are terse."


def test_context_precedes_instruction():
    messages = assemble_messages("Translate", context="Example: a -> b")

    assert messages == [
        ChatMessage(
            role="user",
            content="Context/Examples:\nExample: a -> b\n\n---\n\nTranslate",
        )
    ]


def test_negative_prompt_extends_system_message():
    messages = assemble_messages(
        "Write a poem", system_prompt="You are a poet.", negative_prompt="rhymes"
    )

    assert messages[0].role == "system"
    assert messages[0].content == (
        "You are a poet.\n\n"
        'IMPORTANT: Do not include any of the following in your response: "rhymes"'
    )
    assert messages[1].content == "Write a poem"


def test_negative_prompt_creates_system_message():
    messages = assemble_messages("Write", negative_prompt="jargon")

    assert messages[0].role == "system"
    assert "jargon" in messages[0].content

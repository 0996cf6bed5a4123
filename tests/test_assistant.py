import asyncio

import httpx
import pytest
from conftest import FakeTransport, RecordingClient, ok_body

from kilocode.assistant import MAX_INPUT_CHARS, AsyncKiloCodeAssistant, KiloCodeAssistant, validate_input
from kilocode.errors import HistoryNotSupported, InputTooLarge
from kilocode.llm import AsyncChatClient, ChatClient, ChatMessage
from kilocode.llm.transport import AsyncHttpxTransport


def test_validate_input_limit():
    validate_input("x" * MAX_INPUT_CHARS)
    validate_input(None)
    with pytest.raises(InputTooLarge) as ei:
        validate_input("x" * (MAX_INPUT_CHARS + 1))
    assert ei.value.length == 100_001
    assert "100,000" in str(ei.value)


def test_oversized_prompt_never_reaches_transport(config):
    transport = FakeTransport(200, ok_body("hi"))
    assistant = KiloCodeAssistant(ChatClient(config, transport))
    with pytest.raises(InputTooLarge):
        assistant.chat("x" * 100_001)
    with pytest.raises(InputTooLarge):
        assistant.explain_code("y" * 100_001)
    assert transport.calls == []


def test_answers_are_sanitized(config):
    transport = FakeTransport(200, ok_body("Run this:\n```bash\nmake\n```"))
    assistant = KiloCodeAssistant(ChatClient(config, transport))
    assert assistant.chat("how do I build?") == "Run this:\n```\nmake\n```"

    raw = KiloCodeAssistant(ChatClient(config, transport), sanitize_output=False)
    assert raw.chat("how do I build?") == "Run this:\n```bash\nmake\n```"


def test_task_operations_pick_their_templates():
    client = RecordingClient()
    assistant = KiloCodeAssistant(client)

    assistant.generate_code("a fibonacci function", language="python")
    assistant.explain_code("x = 1", "python")
    assistant.refactor_code("x = 1", "", "python")
    assistant.fix_code("x = ", "SyntaxError", "python")
    assistant.generate_docs("def f(): pass", "python", "docstring")

    system_prompts = [call[0].content for call in client.calls]
    assert "Generate code" in system_prompts[0]
    assert "Explain the provided code" in system_prompts[1]
    assert "refactoring" in system_prompts[2]
    assert "bugs" in system_prompts[3]
    assert "documentation" in system_prompts[4]
    assert client.calls[3][1].content.endswith("Error: SyntaxError (Language: python)")
    assert client.calls[4][1].content.endswith("Generate docstring documentation for this python code.")
    assert all(len(call) == 2 for call in client.calls)


def test_chat_with_context():
    client = RecordingClient()
    KiloCodeAssistant(client).chat("what is x?", context="x = 1")
    user = client.calls[0][1]
    assert user.role == "user"
    assert "```\nx = 1\n```" in user.content
    assert user.content.endswith("what is x?")


def test_chat_history_is_refused_not_dropped():
    client = RecordingClient()
    assistant = KiloCodeAssistant(client)
    assert assistant.chat("hi", history=[]) == "ok"
    with pytest.raises(HistoryNotSupported):
        assistant.chat("and then?", history=[ChatMessage("user", "hi"), ChatMessage("assistant", "hello")])
    assert len(client.calls) == 1


class AsyncRecordingClient:
    def __init__(self, answer: str) -> None:
        self.answer = answer
        self.calls: list[list] = []

    async def complete(self, messages):
        self.calls.append(list(messages))
        return self.answer


def test_async_assistant_shares_task_shaping():
    client = AsyncRecordingClient("Try:\n```sh\nmake test\n```")
    assistant = AsyncKiloCodeAssistant(client)

    async def go():
        return [
            await assistant.chat("hello"),
            await assistant.fix_code("x = ", "SyntaxError", "python"),
            await assistant.generate_docs("def f(): pass", "python", "docstring"),
        ]

    answers = asyncio.run(go())
    assert answers == ["Try:\n```\nmake test\n```"] * 3
    assert [m.role for m in client.calls[0]] == ["system", "user"]
    assert client.calls[1][1].content.endswith("Error: SyntaxError (Language: python)")
    assert client.calls[2][1].content.endswith("Generate docstring documentation for this python code.")


def test_async_assistant_over_httpx(config):
    transport = AsyncHttpxTransport(
        transport=httpx.MockTransport(lambda r: httpx.Response(200, json=ok_body("```bash\nls\n```")))
    )
    assistant = AsyncKiloCodeAssistant(AsyncChatClient(config, transport))

    async def go():
        return await assistant.chat("hello")

    assert asyncio.run(go()) == "```\nls\n```"


def test_async_assistant_rejects_oversized_input_before_sending():
    client = AsyncRecordingClient("unused")
    assistant = AsyncKiloCodeAssistant(client)

    async def go():
        return await assistant.explain_code("y" * 100_001)

    with pytest.raises(InputTooLarge):
        asyncio.run(go())
    assert client.calls == []

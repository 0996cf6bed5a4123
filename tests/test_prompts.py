import pytest

from kilocode.prompts import (
    CHAT_SYSTEM,
    DEFAULT_REFACTOR_PROMPT,
    SYSTEM_PROMPTS,
    TASK_KINDS,
    PromptBuilder,
    doc_style_for,
    fence_code,
)

builder = PromptBuilder()


@pytest.mark.parametrize("task", [*TASK_KINDS, "something-else"])
@pytest.mark.parametrize("code", [None, "print('hi')"])
def test_build_is_always_system_then_user(task, code):
    messages = builder.build(task, "do it", code)
    assert [m.role for m in messages] == ["system", "user"]


def test_unknown_task_falls_back_to_generic_template():
    assert builder.build("poetry", "x")[0].content == CHAT_SYSTEM
    assert builder.build("explain", "x")[0].content == SYSTEM_PROMPTS["explain"]
    assert "Explain the provided code" in SYSTEM_PROMPTS["explain"]
    assert "Generate code" in SYSTEM_PROMPTS["generate"]


def test_user_text_verbatim_without_context():
    assert builder.build("chat", "  hello  ")[1].content == "  hello  "


def test_code_context_is_fenced_verbatim_before_instruction():
    code = "def f():\n    return 1\n"
    content = builder.build("explain", "What does it return?", code)[1].content
    block = f"```\n{code}\n```"
    assert block in content
    assert content.index(block) < content.index("What does it return?")
    assert content.endswith("What does it return?")


def test_fence_grows_past_backticks_in_code():
    code = 'doc = """\n```python\nx = 1\n```\n"""'
    fenced = fence_code(code)
    assert fenced == f"````\n{code}\n````"


def test_generate_phrasing():
    assert builder.generate("a parser")[1].content == "Generate code for: a parser"
    assert builder.generate("a parser", language="rust")[1].content == "Generate rust code for: a parser"
    with_ctx = builder.generate("a test", context="fn main() {}", language="rust")[1].content
    assert "fn main() {}" in with_ctx
    assert with_ctx.endswith("Generate rust code for: a test")


def test_explain_phrasing():
    assert builder.explain("x = 1", "python")[1].content.endswith("Explain this python code in detail.")
    assert builder.explain("x = 1")[1].content.endswith("Explain this code in detail.")
    assert builder.explain("x = 1", "python", "why x?")[1].content.endswith("Explain this python code: why x?")


def test_refactor_phrasing():
    default = builder.refactor("x = 1", "", "python")[1].content
    assert default.endswith(f"Refactor this python code. {DEFAULT_REFACTOR_PROMPT}")
    custom = builder.refactor("x = 1", "use a dataclass")[1].content
    assert custom.endswith("Refactor this code. use a dataclass")


def test_fix_phrasing():
    assert builder.fix("x")[1].content.endswith("Fix the bugs in this code.")
    assert builder.fix("x", "NameError: y")[1].content.endswith("Fix the bugs in this code. Error: NameError: y")
    assert builder.fix("x", "boom", "go")[1].content.endswith(
        "Fix the bugs in this code. Error: boom (Language: go)"
    )
    assert builder.fix("x", None, "go")[1].content.endswith("Fix the bugs in this code. (Language: go)")


def test_docs_phrasing_degrades():
    assert builder.docs("x", "rust", "rustdoc")[1].content.endswith(
        "Generate rustdoc documentation for this rust code."
    )
    assert builder.docs("x", "rust")[1].content.endswith("Generate documentation for this rust code.")
    assert builder.docs("x", None, "JSDoc")[1].content.endswith("Generate JSDoc documentation for this code.")
    assert builder.docs("x")[1].content.endswith("Generate documentation for this code.")
    assert builder.docs("x", instructions="Add examples.")[1].content.endswith(
        "Generate documentation for this code. Add examples."
    )


def test_doc_style_for():
    assert doc_style_for("Rust") == "rustdoc"
    assert doc_style_for("python") == "docstring"
    assert doc_style_for("brainfuck") is None
    assert doc_style_for(None) is None

"""Turn-model formatting helpers (native system slot, alternating, model-role)."""

from __future__ import annotations

from optimaizer_providers.base.utils.messages import (
    build_messages_with_system,
    format_alternating_turns,
    format_model_role_contents,
    resolve_system_instruction,
)
from optimaizer_providers.tests.utils import assistant, system, user


def test_alternating_turns_merge_same_role_and_drop_leading_assistant():
    messages = [
        assistant("greeting"),
        assistant("more greeting"),
        user("a"),
        user("b"),
        assistant("c"),
        system("rules"),
        assistant("d"),
        user("e"),
    ]
    sys_text, turns = format_alternating_turns(messages)
    assert sys_text == "rules"
    assert [t.role for t in turns] == ["user", "assistant", "user"]
    assert turns[0].content == "a\n\nb"
    assert turns[1].content == "c\n\nd"
    for prev, nxt in zip(turns, turns[1:]):
        assert prev.role != nxt.role


def test_alternating_turns_explicit_prompt_wins_and_embedded_joined():
    messages = [system("one"), user("hi"), system("two")]
    assert format_alternating_turns(messages)[0] == "one\n\ntwo"
    assert format_alternating_turns(messages, "explicit")[0] == "explicit"


def test_alternating_turns_only_assistant_yields_no_turns():
    sys_text, turns = format_alternating_turns([assistant("x")])
    assert sys_text is None
    assert turns == []


def test_alternating_turns_does_not_mutate_input():
    messages = [user("a"), user("b")]
    format_alternating_turns(messages)
    assert [m.content for m in messages] == ["a", "b"]


def test_build_messages_with_system_prepends_and_drops_embedded():
    messages = [system("embedded"), user("hi")]
    out = build_messages_with_system(messages, "explicit")
    assert out == [{"role": "system", "content": "explicit"}, {"role": "user", "content": "hi"}]


def test_build_messages_without_prompt_passes_through():
    messages = [system("embedded"), user("hi"), assistant("yo")]
    out = build_messages_with_system(messages, None)
    assert [m["role"] for m in out] == ["system", "user", "assistant"]


def test_model_role_contents_and_instruction():
    messages = [system("s1"), user("q"), assistant("a"), system("s2")]
    contents = format_model_role_contents(messages)
    assert contents == [
        {"role": "user", "parts": [{"text": "q"}]},
        {"role": "model", "parts": [{"text": "a"}]},
    ]
    assert resolve_system_instruction(messages, None) == {"parts": [{"text": "s1\n\ns2"}]}
    assert resolve_system_instruction(messages, "x") == {"parts": [{"text": "x"}]}
    assert resolve_system_instruction([user("q")], None) is None

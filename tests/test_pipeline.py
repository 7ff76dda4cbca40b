"""Tests for radlibs/pipeline.py: collection, rendering, and full runs."""

from __future__ import annotations

import io
import re

import pytest

from radlibs.errors import DecodeFailure, UnknownIdentifier
from radlibs.pipeline import PassEvent, collect_words, fill, render
from radlibs.word_bank import WordBank
from tests.conftest import ScriptedChannel, source_of


def _fill(template: str | bytes, answers: list[str]) -> tuple[str, ScriptedChannel, WordBank]:
    ch = ScriptedChannel(answers)
    out = io.StringIO()
    bank = fill(source_of(template), ch, out)
    return out.getvalue(), ch, bank


# ---------------------------------------------------------------------------
# collect_words
# ---------------------------------------------------------------------------


class TestCollectWords:
    def test_prompts_once_per_occurrence(self):
        ch = ScriptedChannel(["Alice", "happy", "sad"])
        bank = collect_words(
            source_of("Hello {name}! {@mood how are you}? Still {@mood how are you}?"), ch
        )
        assert ch.prompts == ["name", "how are you", "how are you"]
        assert bank.entry("name").pool == {"Alice"}
        assert bank.entry("@mood").pool == {"happy", "sad"}
        assert bank.entry("@mood").persistent is True

    def test_literals_are_not_prompted(self):
        ch = ScriptedChannel([])
        bank = collect_words(source_of("just text"), ch)
        assert ch.prompts == []
        assert len(bank) == 0

    def test_marker_without_prompt_skipped(self):
        ch = ScriptedChannel(["x"])
        bank = collect_words(source_of("{@} {@ } {noun}"), ch)
        assert ch.prompts == ["noun"]
        assert bank.identifiers() == ["noun"]

    def test_escaped_braces_in_prompt(self):
        ch = ScriptedChannel(["v"])
        # "{" is plain text inside a placeholder; only "}" needs the escape
        collect_words(source_of(r"{a {curly\} word}"), ch)
        assert ch.prompts == ["a {curly} word"]

    def test_adds_to_existing_bank(self):
        bank = WordBank()
        bank.add_word("@pet", "dog", persistent=True)
        collect_words(source_of("{@pet a pet}"), ScriptedChannel(["cat"]), bank)
        assert bank.entry("@pet").pool == {"dog", "cat"}


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------


class TestRender:
    def test_literal_only_is_verbatim(self):
        out = io.StringIO()
        render(source_of("line one\nline two\n"), WordBank(), out)
        assert out.getvalue() == "line one\nline two\n"

    def test_substitutes_words(self):
        bank = WordBank()
        bank.add_word("noun", "cat", persistent=False)
        out = io.StringIO()
        render(source_of("the {noun} sat"), bank, out)
        assert out.getvalue() == "the cat sat"
        assert "noun" not in bank

    def test_escaped_brace_renders_literally(self):
        out = io.StringIO()
        render(source_of(r"dict = \{\}"), WordBank(), out)
        assert out.getvalue() == r"dict = {\}"

    def test_persistent_prompt_wording_ignored(self):
        bank = WordBank()
        bank.add_word("@mood", "calm", persistent=True)
        out = io.StringIO()
        render(source_of("{@mood how?} {@mood other words}"), bank, out)
        assert out.getvalue() == "calm calm"

    def test_unknown_identifier_aborts_after_partial_output(self):
        out = io.StringIO()
        with pytest.raises(UnknownIdentifier):
            render(source_of("before {ghost} after"), WordBank(), out)
        assert out.getvalue() == "before "

    def test_bare_marker_is_unknown(self):
        with pytest.raises(UnknownIdentifier):
            render(source_of("{@}"), WordBank(), io.StringIO())

    def test_invalid_literal_bytes_fail(self):
        with pytest.raises(DecodeFailure):
            render(source_of(b"ok \xff"), WordBank(), io.StringIO())

    def test_rerender_persistent_bank_is_idempotent(self):
        bank = WordBank()
        for w in ("red", "blue", "green"):
            bank.add_word("@c", w, persistent=True)
        bank.add_word("@n", "fox", persistent=True)
        template = "The {@c colour} {@n animal} chased the {@c colour} {@n animal}."
        first, second = io.StringIO(), io.StringIO()
        render(source_of(template), bank, first)
        render(source_of(template), bank, second)
        assert first.getvalue() == second.getvalue()

    def test_events(self):
        events: list[PassEvent] = []
        bank = WordBank()
        bank.add_word("x", "1", persistent=False)
        render(source_of("{x}"), bank, io.StringIO(), on_event=events.append)
        assert [e.kind for e in events] == ["start", "done"]
        assert events[1].placeholders == 1
        assert events[1].identifiers == 0


# ---------------------------------------------------------------------------
# fill (both passes)
# ---------------------------------------------------------------------------


class TestFill:
    def test_no_placeholders_renders_template_plus_newline(self):
        text, ch, _ = _fill("Nothing to see here.\n", [])
        assert text == "Nothing to see here.\n\n"
        assert ch.prompts == []

    def test_empty_template(self):
        text, _, _ = _fill("", [])
        assert text == "\n"

    def test_greeting_scenario_uses_same_persistent_word(self):
        text, ch, _ = _fill(
            "Hello {name}! {@mood how are you}? Still {@mood how are you}?",
            ["Alice", "happy", "sad"],
        )
        assert ch.prompts == ["name", "how are you", "how are you"]
        m = re.fullmatch(r"Hello Alice! (\w+)\? Still (\w+)\?\n", text)
        assert m is not None
        assert m.group(1) == m.group(2)
        assert m.group(1) in {"happy", "sad"}

    def test_greeting_scenario_single_distinct_answer(self):
        text, _, _ = _fill(
            "Hello {name}! {@mood how are you}? Still {@mood how are you}?",
            ["Alice", "happy", "happy"],
        )
        assert text == "Hello Alice! happy? Still happy?\n"

    def test_one_shot_consumed_once_per_occurrence(self):
        text, _, bank = _fill("{animal}, {animal}, {animal}", ["ant", "bee", "cow"])
        words = text.rstrip("\n").split(", ")
        assert sorted(words) == ["ant", "bee", "cow"]
        assert "animal" not in bank

    def test_duplicate_answers_exhaust_one_shot_pool(self):
        ch = ScriptedChannel(["cat", "cat"])
        out = io.StringIO()
        with pytest.raises(UnknownIdentifier, match="'x'"):
            fill(source_of("{x} and {x}"), ch, out)
        assert out.getvalue() == "cat and "

    def test_collected_words_render_in_place(self):
        text, _, _ = _fill(
            "The {adjective} {noun} jumped over the {@obj thing}.\n{@obj thing}!",
            ["quick", "fox", "moon", "moon"],
        )
        assert text == "The quick fox jumped over the moon.\nmoon!\n"

    def test_unicode_round_trip(self):
        text, _, _ = _fill("Grüße, {wer}! ☕", ["Zoë"])
        assert text == "Grüße, Zoë! ☕\n"

    def test_events_cover_both_passes(self):
        events: list[PassEvent] = []
        fill(source_of("{a} {@b c}"), ScriptedChannel(["1", "2"]), io.StringIO(),
             on_event=events.append)
        assert [(e.kind, e.pass_name) for e in events] == [
            ("start", "collect"),
            ("done", "collect"),
            ("start", "render"),
            ("done", "render"),
        ]
        assert events[1].placeholders == 2
        assert events[1].identifiers == 2
        assert events[3].identifiers == 1  # persistent entry survives

    def test_empty_placeholder_is_not_prompted_and_fails_render(self):
        ch = ScriptedChannel(["x"])
        out = io.StringIO()
        with pytest.raises(UnknownIdentifier):
            fill(source_of("a {} b"), ch, out)
        assert ch.prompts == []
        assert out.getvalue() == "a "

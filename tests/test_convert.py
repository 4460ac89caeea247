"""Tests for the conversion entry points."""

import json
import logging

import pytest

from plato_transcript import (
    FixedIdentityPolicy,
    InvalidInput,
    Message,
    cmj_to_html,
    cmj_to_text,
    convert,
    html_to_cmj,
    html_to_text,
    messages_from_json,
    messages_to_json,
    text_to_cmj,
    text_to_html,
)
from plato_transcript.markup import iter_markup_records
from plato_transcript.settings import resolve_settings, set_settings
from plato_transcript.text_scan import iter_text_records

SAMPLE_TEXT = (
    "MACHINA RATIOCINATRIX: Hello there.\n\n"
    "INSTRUCTIONS: Be concise.\n\n"
    "Alice: Hi!\n\n"
)

SAMPLE_HTML = (
    '<p class="dialogue"><span class="speaker">Machina Ratiocinatrix</span> Greetings.</p>\n'
    '<p class="dialogue">stray paragraph</p>\n'
    '<p class="dialogue"><span class="speaker">Instructions</span>: Stay on topic.</p>\n'
    '<p class="dialogue"><span class="speaker">Bob</span> Why &lt;not&gt;?</p>'
)


class TestTextToCmj:
    def test_scenario(self):
        messages = text_to_cmj(SAMPLE_TEXT)
        assert [m.to_dict() for m in messages] == [
            {"role": "assistant", "name": "MACHINA RATIOCINATRIX", "content": "Hello there."},
            {"role": "system", "name": "INSTRUCTIONS", "content": "Be concise."},
            {"role": "user", "name": "Alice", "content": "Hi!"},
        ]

    def test_empty_string_rejected(self):
        with pytest.raises(InvalidInput):
            text_to_cmj("")

    @pytest.mark.parametrize("bad", [None, 42, b"Bob: hi\n\n", ["Bob: hi"]])
    def test_non_string_rejected(self, bad):
        with pytest.raises(InvalidInput, match="platoText must be a non-empty string"):
            text_to_cmj(bad)

    def test_whitespace_only_yields_no_messages(self):
        assert text_to_cmj("   \n ") == []

    def test_uses_fixed_identity_not_settings(self):
        set_settings(resolve_settings({"machine": {"name": "Bob"}}))
        messages = text_to_cmj("Bob: hi\n\nMachina Ratiocinatrix: hello\n\n")
        assert [m.role for m in messages] == ["user", "assistant"]

    def test_policy_override(self):
        class EveryoneIsUser:
            assistant_identity = ""

            def classify(self, speaker_label):
                return "user"

        messages = text_to_cmj(SAMPLE_TEXT, policy=EveryoneIsUser())
        assert {m.role for m in messages} == {"user"}


class TestHtmlToCmj:
    def test_roles_names_and_content(self):
        messages = html_to_cmj(SAMPLE_HTML)
        assert messages == [
            Message(role="assistant", name="Machina Ratiocinatrix", content="Greetings."),
            Message(role="system", name="Instructions", content="Stay on topic."),
            Message(role="user", name="Bob", content="Why <not>?"),
        ]

    def test_uses_configured_machine_name(self):
        set_settings(resolve_settings({"machine": {"name": "bob"}}))
        roles = [m.role for m in html_to_cmj(SAMPLE_HTML)]
        assert roles == ["user", "system", "assistant"]

    def test_fixed_policy_can_be_injected(self):
        set_settings(resolve_settings({"machine": {"name": "bob"}}))
        roles = [m.role for m in html_to_cmj(SAMPLE_HTML, policy=FixedIdentityPolicy())]
        assert roles == ["assistant", "system", "user"]

    def test_empty_string_rejected(self):
        with pytest.raises(InvalidInput, match="platoHtml must be a non-empty string"):
            html_to_cmj("")

    def test_non_string_rejected(self):
        with pytest.raises(InvalidInput):
            html_to_cmj(None)

    def test_no_dialogue(self):
        assert html_to_cmj("<p>just prose</p>") == []


class TestHtmlToText:
    def test_conversion(self):
        assert html_to_text(SAMPLE_HTML) == (
            "Machina Ratiocinatrix: Greetings.\n\n"
            "Instructions: Stay on topic.\n\n"
            "Bob: Why <not>?\n\n"
        )

    def test_crlf_file(self):
        html = '<p class="dialogue"><span class="speaker">A</span> one\r\ntwo</p>'
        assert html_to_text(html) == "A: one\ntwo\n\n"

    @pytest.mark.parametrize("blank", ["", "   ", "\n\t\n"])
    def test_blank_input_is_empty_result(self, blank):
        assert html_to_text(blank) == ""

    def test_non_string_rejected(self):
        with pytest.raises(InvalidInput, match="platoHtml must be a string"):
            html_to_text(123)


class TestTextToHtml:
    def test_scenario(self):
        assert text_to_html("Bob: Hi <there>\n\n") == (
            '<p class="dialogue"><span class="speaker">Bob</span> Hi &lt;there&gt;</p>'
        )

    @pytest.mark.parametrize("blank", ["", "   ", "\n\n"])
    def test_blank_input_is_empty_result(self, blank):
        assert text_to_html(blank) == ""

    def test_non_string_rejected(self):
        with pytest.raises(InvalidInput, match="platoText must be a string"):
            text_to_html(None)

    def test_reparse_matches_direct_extraction(self):
        text = (
            "Socrates: What is <virtue>?\n\n"
            "Meno: Many things\nat once.\n\n"
            "garbage without a label\n\n"
            "Socrates_2: Then name one.\n\n"
        )
        direct = list(iter_text_records(text))
        reparsed = list(iter_markup_records(text_to_html(text)))
        assert reparsed == direct

    def test_text_html_text_round_trip(self):
        text = "Ann: hello\n\nBob: hi <you>\n\n"
        assert html_to_text(text_to_html(text)) == text


class TestCmjToText:
    def test_scenario(self):
        assert cmj_to_text([{"name": "Bob", "content": "Hey"}]) == "Bob: Hey\n\n"

    def test_tuple_accepted(self):
        assert cmj_to_text(({"name": "Bob", "content": "Hey"},)) == "Bob: Hey\n\n"

    @pytest.mark.parametrize("bad", [None, "Bob: Hey", {"name": "Bob", "content": "Hey"}, 7])
    def test_non_sequence_reported_not_raised(self, bad, caplog):
        with caplog.at_level(logging.ERROR, logger="plato_transcript.convert"):
            assert cmj_to_text(bad) == ""
        assert any("cmjMessages must be a list" in r.getMessage() for r in caplog.records)

    @pytest.mark.parametrize("role", [["x"], {"a": 1}])
    def test_unhashable_role_is_not_fatal(self, role):
        assert cmj_to_text([{"name": "Bob", "content": "Hey", "role": role}]) == "Bob: Hey\n\n"

    def test_malformed_entries_do_not_abort(self):
        messages = [{"name": "Ann", "content": "one"}, {"content": "orphan"}, {"name": "Bob", "content": "two"}]
        assert cmj_to_text(messages) == "Ann: one\n\nBob: two\n\n"

    def test_round_trip_through_text(self):
        original = [
            Message(role="assistant", name="MACHINA RATIOCINATRIX", content="How may I help?"),
            Message(role="system", name="INSTRUCTIONS", content="Answer briefly."),
            Message(role="user", name="Alice", content="Tell me\nsomething."),
        ]
        padded = [
            {"role": m.role, "name": f" {m.name} ", "content": f"\n{m.content}  "} for m in original
        ]
        assert text_to_cmj(cmj_to_text(padded)) == original

    def test_cmj_to_html(self):
        html = cmj_to_html([{"name": "Bob", "content": "a < b"}])
        assert html == '<p class="dialogue"><span class="speaker">Bob</span> a &lt; b</p>'


class TestJson:
    def test_to_json(self):
        payload = messages_to_json([Message(role="user", name="Zoë", content="¡hola!")], indent=None)
        assert payload == '[{"role": "user", "name": "Zoë", "content": "¡hola!"}]'

    def test_from_json_skips_malformed(self, caplog):
        payload = json.dumps(
            [
                {"role": "assistant", "name": "Bot", "content": "hi"},
                {"name": "no content"},
                {"name": "Ann", "content": "yo", "role": "moderator"},
            ]
        )
        with caplog.at_level(logging.WARNING):
            messages = messages_from_json(payload)

        assert messages == [
            Message(role="assistant", name="Bot", content="hi"),
            Message(role="user", name="Ann", content="yo"),
        ]
        assert any("malformed" in r.getMessage() for r in caplog.records)

    @pytest.mark.parametrize("role", [["x"], {"a": 1}])
    def test_from_json_unhashable_role_defaults_to_user(self, role):
        payload = json.dumps([{"name": "Bob", "content": "Hey", "role": role}])
        assert messages_from_json(payload) == [Message(role="user", name="Bob", content="Hey")]

    @pytest.mark.parametrize("bad", ["", "not json", '{"name": "Bob"}'])
    def test_from_json_rejects(self, bad):
        with pytest.raises(InvalidInput):
            messages_from_json(bad)


class TestConvert:
    def test_dispatch(self):
        assert convert(SAMPLE_TEXT, source="text", target="cmj") == text_to_cmj(SAMPLE_TEXT)
        assert convert(SAMPLE_TEXT, source="text", target="html") == text_to_html(SAMPLE_TEXT)
        assert convert(SAMPLE_HTML, source="html", target="cmj") == html_to_cmj(SAMPLE_HTML)
        assert convert(SAMPLE_HTML, source="html", target="text") == html_to_text(SAMPLE_HTML)
        messages = text_to_cmj(SAMPLE_TEXT)
        assert convert(messages, source="cmj", target="text") == cmj_to_text(messages)
        assert convert(messages, source="cmj", target="html") == cmj_to_html(messages)

    def test_unknown_format(self):
        with pytest.raises(InvalidInput, match="unknown target format"):
            convert("x", source="text", target="markdown")

    def test_same_format(self):
        with pytest.raises(InvalidInput):
            convert("x", source="text", target="text")

    def test_input_not_mutated(self):
        messages = [{"name": " Bob ", "content": " hi "}]
        convert(messages, source="cmj", target="html")
        assert messages == [{"name": " Bob ", "content": " hi "}]

"""
Tests for the pull-based scheme reader: scoping, attribute accumulation,
inheritance declarations and recovery from malformed options.
"""

import pytest

from theme_extractor.exceptions import SchemeParseError
from theme_extractor.scheme.attributes import (
    AttributeData,
    BaseRef,
    EffectType,
    FontType,
)
from theme_extractor.scheme.color import RGBA, decode_color
from theme_extractor.scheme.reader import AttributeEvent, ColorEvent, SchemeReader


def events(text, **kwargs):
    return list(SchemeReader(text, **kwargs))


class TestColors:
    def test_single_color(self):
        result = events('<colors><option name="C1" value="00ff00"/></colors>')
        assert result == [ColorEvent("C1", decode_color("00ff00"))]

    def test_colors_keep_document_order(self):
        result = events(
            "<scheme><colors>"
            '<option name="B" value="1"/>'
            '<option name="A" value="2"/>'
            "</colors></scheme>"
        )
        assert [e.name for e in result] == ["B", "A"]

    def test_undecodable_color_is_dropped(self):
        reader = SchemeReader(
            "<colors>"
            '<option name="BAD" value="zz"/>'
            '<option name="GOOD" value="ff"/>'
            "</colors>"
        )
        result = list(reader)
        assert result == [ColorEvent("GOOD", RGBA(255, 255, 255, 255))]
        assert reader.skipped == 1

    def test_color_missing_value_is_skipped(self):
        result = events(
            '<colors><option name="NOVALUE"/><option name="C" value="0"/></colors>'
        )
        assert result == [ColorEvent("C", RGBA(0, 0, 0, 255))]

    def test_color_missing_name_is_skipped(self):
        assert events('<colors><option value="ff"/></colors>') == []

    def test_options_outside_scopes_are_ignored(self):
        assert events('<scheme><option name="X" value="ff"/></scheme>') == []


class TestAttributes:
    def test_attribute_with_value_wrapper(self):
        result = events(
            "<attributes>"
            '<option name="DEFAULT_STRING"><value>'
            '<option name="FOREGROUND" value="6a8759"/>'
            '<option name="BACKGROUND" value="000000"/>'
            '<option name="FONT_TYPE" value="2"/>'
            '<option name="EFFECT_TYPE" value="4"/>'
            '<option name="EFFECT_COLOR" value="ff"/>'
            '<option name="ERROR_STRIPE_COLOR" value="0"/>'
            "</value></option>"
            "</attributes>"
        )
        assert result == [
            AttributeEvent(
                "DEFAULT_STRING",
                AttributeData(
                    foreground=decode_color("6a8759"),
                    background=RGBA(0, 0, 0, 255),
                    effect_color=RGBA(255, 255, 255, 255),
                    error_stripe_color=RGBA(0, 0, 0, 255),
                    effect_type=EffectType.STRIKE,
                    font_type=FontType.ITALIC,
                ),
            )
        ]

    def test_fields_directly_inside_attribute(self):
        result = events(
            "<attributes>"
            '<option name="A"><option name="FOREGROUND" value="ff"/></option>'
            "</attributes>"
        )
        assert result == [
            AttributeEvent("A", AttributeData(foreground=RGBA(255, 255, 255, 255)))
        ]

    def test_base_attributes_emits_reference(self):
        result = events(
            "<attributes>"
            '<option name="JSON_STRING" baseAttributes="DEFAULT_STRING"/>'
            "</attributes>"
        )
        assert result == [AttributeEvent("JSON_STRING", BaseRef("DEFAULT_STRING"))]

    def test_base_reference_does_not_swallow_next_attribute(self):
        result = events(
            "<attributes>"
            '<option name="REF" baseAttributes="A"/>'
            '<option name="A"><value><option name="FOREGROUND" value="1"/></value>'
            "</option>"
            "</attributes>"
        )
        assert [e.name for e in result] == ["REF", "A"]
        assert result[1].entry.foreground == RGBA(1, 1, 1, 255)

    def test_events_are_emitted_when_attribute_closes(self):
        reader = SchemeReader(
            "<attributes>"
            '<option name="A"><value><option name="FOREGROUND" value="1"/></value>'
            "</option>"
            '<option name="B"><value><option name="FOREGROUND" value="2"/></value>'
            "</option>"
            "</attributes>",
            chunk_size=8,
        )
        first = next(reader)
        assert first.name == "A"
        second = next(reader)
        assert second.name == "B"
        with pytest.raises(StopIteration):
            next(reader)

    def test_field_missing_value_is_skipped(self):
        result = events(
            "<attributes>"
            '<option name="A"><value>'
            '<option name="FOREGROUND"/>'
            '<option name="BACKGROUND" value="ff"/>'
            "</value></option>"
            '<option name="B"><value><option name="FOREGROUND" value="0"/></value>'
            "</option>"
            "</attributes>"
        )
        assert result == [
            AttributeEvent("A", AttributeData(background=RGBA(255, 255, 255, 255))),
            AttributeEvent("B", AttributeData(foreground=RGBA(0, 0, 0, 255))),
        ]

    def test_undecodable_field_color_leaves_field_unset(self):
        result = events(
            "<attributes>"
            '<option name="A"><value><option name="FOREGROUND" value="nope"/>'
            "</value></option>"
            "</attributes>"
        )
        assert result == [AttributeEvent("A", AttributeData())]

    @pytest.mark.parametrize("value", ["7", "-1", "x", "", "1.0", "+1"])
    def test_bad_font_type_falls_back_to_none(self, value):
        result = events(
            "<attributes>"
            f'<option name="A"><value><option name="FONT_TYPE" value="{value}"/>'
            "</value></option>"
            "</attributes>"
        )
        assert result[0].entry.font_type is FontType.NONE

    def test_effect_type_zero_is_underscored(self):
        result = events(
            "<attributes>"
            '<option name="A"><value><option name="EFFECT_TYPE" value="0"/>'
            "</value></option>"
            "</attributes>"
        )
        assert result[0].entry.effect_type is EffectType.UNDERSCORED

    def test_unknown_field_key_is_ignored(self):
        result = events(
            "<attributes>"
            '<option name="A"><value><option name="SHADOW" value="ff"/>'
            '<option name="FOREGROUND" value="ff"/>'
            "</value></option>"
            "</attributes>"
        )
        assert result == [
            AttributeEvent("A", AttributeData(foreground=RGBA(255, 255, 255, 255)))
        ]

    def test_attribute_without_name_is_skipped(self):
        result = events(
            "<attributes>"
            '<option><value><option name="FOREGROUND" value="ff"/></value></option>'
            '<option name="B"><value><option name="FOREGROUND" value="0"/></value>'
            "</option>"
            "</attributes>"
        )
        assert [e.name for e in result] == ["B"]

    def test_self_closing_attribute_emits_nothing(self):
        assert events('<attributes><option name="A"/></attributes>') == []

    def test_explicit_empty_attribute_emits_empty_data(self):
        result = events('<attributes><option name="A"></option></attributes>')
        assert result == [AttributeEvent("A", AttributeData())]

    def test_explicit_close_is_found_past_quoted_slash(self):
        result = events(
            "<attributes>"
            '<option name="A" >\n  <value/>\n</option>'
            '<option name="B" title="a/>b"></option>'
            "</attributes>"
        )
        assert result == [
            AttributeEvent("A", AttributeData()),
            AttributeEvent("B", AttributeData()),
        ]


class TestReaderBehaviour:
    def test_mixed_sections(self, sample_scheme_text):
        result = events(sample_scheme_text)
        colors = [e for e in result if isinstance(e, ColorEvent)]
        attributes = [e for e in result if isinstance(e, AttributeEvent)]
        assert [c.name for c in colors] == ["CARET_COLOR", "GUTTER_BACKGROUND"]
        assert [a.name for a in attributes] == [
            "DEFAULT_STRING",
            "DEFAULT_NUMBER",
            "DEFAULT_KEYWORD",
            "DEFAULT_INSTANCE_FIELD",
            "DEFAULT_BRACES",
            "DEFAULT_COMMA",
        ]

    def test_sibling_sections_without_root(self):
        result = events(
            '<colors><option name="C1" value="00ff00"/></colors>'
            '<attributes><option name="A"><value>'
            '<option name="FOREGROUND" value="ff"/>'
            "</value></option></attributes>"
        )
        assert result == [
            ColorEvent("C1", decode_color("00ff00")),
            AttributeEvent("A", AttributeData(foreground=decode_color("ff"))),
        ]

    def test_declaration_before_sibling_sections(self):
        text = (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<colors><option name="C1" value="1"/></colors>\n'
            '<colors><option name="C2" value="2"/></colors>\n'
        )
        assert [e.name for e in events(text)] == ["C1", "C2"]
        assert [e.name for e in events("\ufeff" + text, chunk_size=3)] == [
            "C1",
            "C2",
        ]

    def test_error_line_is_relative_to_fragment(self):
        text = '<?xml version="1.0"?>\n<colors>\n</attributes>'
        with pytest.raises(SchemeParseError) as exc_info:
            events(text)
        assert exc_info.value.get_context("line") == 3

    def test_large_fragment_streams_without_growing_state(self):
        body = "".join(f'<option name="C{i}" value="{i:06x}"/>' for i in range(5000))
        reader = SchemeReader(
            f"<scheme><colors>{body}</colors></scheme>", chunk_size=256
        )
        assert next(reader) == ColorEvent("C0", decode_color("000000"))
        # wrapper, <scheme>, <colors> and the first <option>
        assert reader.depth == 4
        assert sum(1 for _ in reader) == 4999
        assert reader.depth == 0
        assert len(reader._pending) == 0

    def test_chunk_size_does_not_change_events(self, sample_scheme_text):
        assert events(sample_scheme_text, chunk_size=1) == events(sample_scheme_text)

    def test_scope_flags_track_elements(self):
        reader = SchemeReader(
            '<scheme><colors><option name="C" value="1"/></colors></scheme>'
        )
        next(reader)
        assert reader.in_colors is True
        assert list(reader) == []
        assert reader.in_colors is False

    def test_single_pass(self):
        reader = SchemeReader('<colors><option name="C" value="1"/></colors>')
        assert len(list(reader)) == 1
        assert list(reader) == []

    def test_empty_text_yields_nothing(self):
        assert events("") == []
        assert events("   \n") == []

    def test_malformed_markup_raises(self):
        reader = SchemeReader(
            '<colors><option name="C" value="1"/></attributes>', source="broken.xml"
        )
        with pytest.raises(SchemeParseError) as exc_info:
            list(reader)
        assert exc_info.value.get_context("source") == "broken.xml"
        assert exc_info.value.get_context("line") == 1

    def test_truncated_markup_raises(self):
        with pytest.raises(SchemeParseError):
            events('<colors><option name="C" value="1"/>')

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            SchemeReader("<colors/>", chunk_size=0)

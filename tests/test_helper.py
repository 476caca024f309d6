"""Tests for prompt construction and model response parsing."""

import json

import pytest

from shared_utils.exceptions import ResponseParseError, SchemaViolationError
from video_analysis.helper import (
    build_analysis_prompt,
    build_remix_prompt,
    format_tone_labels,
    parse_analysis_response,
    strip_code_fences,
)
from video_analysis.schemas import AnalysisResult, RemixSource, RemixVariables


class TestPromptBuilder:

    def test_analysis_prompt_lists_every_field(self):
        prompt = build_analysis_prompt()
        for field in ("hook", "retention", "payoff", "sentiment", "tones", "score", "improvement_tips"):
            assert f'"{field}"' in prompt

    def test_analysis_prompt_asks_for_raw_json(self):
        prompt = build_analysis_prompt()
        assert "Do not include markdown code blocks" in prompt
        assert "```" not in prompt

    def test_remix_prompt_interpolates_analysis_and_variables(self, analysis_payload, remix_variables_payload):
        analysis = RemixSource.model_validate(analysis_payload)
        variables = RemixVariables.model_validate(remix_variables_payload)

        prompt = build_remix_prompt(analysis, variables)

        assert f"HOOK: {analysis_payload['hook']}" in prompt
        assert f"RETENTION: {analysis_payload['retention']}" in prompt
        assert f"PAYOFF: {analysis_payload['payoff']}" in prompt
        assert f"TONE SUMMARY: {analysis_payload['sentiment']}" in prompt
        assert "TOP TONES: Excitement, Curiosity, Humor" in prompt
        assert "NICHE: Home fitness" in prompt
        assert "PRODUCT/TOPIC: Adjustable dumbbells" in prompt
        assert "AUDIENCE: Busy parents" in prompt
        assert "DESIRED TONE: Funny" in prompt
        assert "[Scene directions]" in prompt

    def test_remix_prompt_without_tones_uses_placeholder(self, analysis_payload, remix_variables_payload):
        del analysis_payload["tones"]
        analysis = RemixSource.model_validate(analysis_payload)
        variables = RemixVariables.model_validate(remix_variables_payload)

        prompt = build_remix_prompt(analysis, variables)

        assert "TOP TONES: N/A" in prompt

    def test_remix_prompt_keeps_braces_in_user_text(self, analysis_payload):
        analysis = RemixSource.model_validate(analysis_payload)
        variables = RemixVariables(niche="{json} tips", product="Templates {v2}")

        prompt = build_remix_prompt(analysis, variables)

        assert "NICHE: {json} tips" in prompt
        assert "PRODUCT/TOPIC: Templates {v2}" in prompt

    @pytest.mark.parametrize("tones", [None, []])
    def test_format_tone_labels_placeholder(self, tones):
        assert format_tone_labels(tones) == "N/A"


class TestStripCodeFences:

    def test_strips_json_fence(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_strips_markers_anywhere(self):
        text = '  ```json{"a": ```1```}```  \n'
        assert strip_code_fences(text) == '{"a": 1}'

    def test_plain_text_is_only_trimmed(self):
        assert strip_code_fences('\n  {"a": 1}  \n') == '{"a": 1}'


class TestParseAnalysisResponse:

    def test_parses_plain_json(self, analysis_json, analysis_payload):
        result = parse_analysis_response(analysis_json)

        assert isinstance(result, AnalysisResult)
        assert result.hook == analysis_payload["hook"]
        assert [tone.label for tone in result.tones] == ["Excitement", "Curiosity", "Humor"]
        assert result.score == 8
        assert len(result.improvement_tips) == 2

    def test_fenced_and_plain_json_give_same_result(self, analysis_json):
        fenced = f"```json\n{analysis_json}\n```"
        assert parse_analysis_response(fenced) == parse_analysis_response(analysis_json)

    def test_non_json_fails(self):
        with pytest.raises(ResponseParseError):
            parse_analysis_response("Sorry, I cannot analyze this video.")

    def test_empty_text_fails(self):
        with pytest.raises(ResponseParseError):
            parse_analysis_response("```json\n```")

    def test_json_array_is_schema_violation(self):
        with pytest.raises(SchemaViolationError):
            parse_analysis_response("[1, 2, 3]")

    @pytest.mark.parametrize("missing", ["hook", "retention", "payoff", "sentiment", "tones", "score", "improvement_tips"])
    def test_missing_field_is_schema_violation(self, analysis_payload, missing):
        del analysis_payload[missing]
        with pytest.raises(SchemaViolationError):
            parse_analysis_response(json.dumps(analysis_payload))

    @pytest.mark.parametrize("score", [0, 0.5, 10.5, 11, -3])
    def test_score_out_of_range(self, analysis_payload, score):
        analysis_payload["score"] = score
        with pytest.raises(SchemaViolationError):
            parse_analysis_response(json.dumps(analysis_payload))

    @pytest.mark.parametrize("score", ["8", True, None])
    def test_score_must_be_a_number(self, analysis_payload, score):
        analysis_payload["score"] = score
        with pytest.raises(SchemaViolationError):
            parse_analysis_response(json.dumps(analysis_payload))

    def test_tone_score_out_of_range(self, analysis_payload):
        analysis_payload["tones"][0]["score"] = 1.2
        with pytest.raises(SchemaViolationError):
            parse_analysis_response(json.dumps(analysis_payload))

    def test_too_few_tones(self, analysis_payload):
        analysis_payload["tones"] = analysis_payload["tones"][:2]
        with pytest.raises(SchemaViolationError):
            parse_analysis_response(json.dumps(analysis_payload))

    def test_empty_tips(self, analysis_payload):
        analysis_payload["improvement_tips"] = []
        with pytest.raises(SchemaViolationError):
            parse_analysis_response(json.dumps(analysis_payload))

    def test_hook_must_be_text(self, analysis_payload):
        analysis_payload["hook"] = {"visual": "pool"}
        with pytest.raises(SchemaViolationError):
            parse_analysis_response(json.dumps(analysis_payload))

    def test_boundary_scores_accepted(self, analysis_payload):
        analysis_payload["score"] = 1
        analysis_payload["tones"][0]["score"] = 0
        analysis_payload["tones"][1]["score"] = 1.0
        result = parse_analysis_response(json.dumps(analysis_payload))
        assert result.score == 1
        assert result.tones[0].score == 0

    def test_extra_keys_are_ignored(self, analysis_payload):
        analysis_payload["confidence"] = "high"
        result = parse_analysis_response(json.dumps(analysis_payload))
        assert not hasattr(result, "confidence")

    def test_result_is_immutable(self, analysis_json):
        result = parse_analysis_response(analysis_json)
        with pytest.raises(Exception):
            result.score = 10

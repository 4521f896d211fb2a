"""Tests for narrative prompts, the text generation client and templated summaries."""

from unittest.mock import patch

import pytest

from surf_conditions.errors import NarrativeGenerationFailed
from surf_conditions.http import FetchError
from surf_conditions.models import DataSource
from surf_conditions.narrative import GeminiNarrator, build_prompt
from surf_conditions.quality import calculate_overall_score
from surf_conditions.forecast import to_surf_conditions
from surf_conditions.summarize import compass_label, generate_summary, wind_conditions
from surf_conditions.tests.factories import make_marine


@pytest.fixture
def marine():
    return make_marine()


@pytest.fixture
def quality(marine, malibu):
    return calculate_overall_score(to_surf_conditions(marine), malibu)


class TestBuildPrompt:
    """Test the structured prompt."""

    def test_contains_findings(self, marine, malibu, quality):
        prompt = build_prompt("Malibu", marine, malibu, quality)

        assert "MARINE CONDITIONS (from STORMGLASS):" in prompt
        assert "- Significant Wave Height: 1.8m" in prompt
        assert "- Wind: 2.0 m/s from 45°" in prompt
        assert "- Optimal Swell Direction: 200-280°" in prompt
        assert "- Overall Score: 9/10 (Epic)" in prompt
        assert "- Wave Period Score: 7.0/10" in prompt
        assert "point_break" in prompt


class TestGeminiNarrator:
    """Test the REST text generation client."""

    def test_returns_text(self):
        payload = {"candidates": [{"content": {"parts": [{"text": "  Firing today.  "}]}}]}

        with patch("surf_conditions.narrative.post_json", return_value=payload) as mock_post:
            text = GeminiNarrator("g-key", "gemini-test").generate("prompt")

        assert text == "Firing today."
        assert mock_post.call_args.args[0].endswith("/models/gemini-test:generateContent")
        assert mock_post.call_args.kwargs["headers"] == {"x-goog-api-key": "g-key"}

    def test_no_key(self):
        with patch("surf_conditions.narrative.post_json") as mock_post:
            with pytest.raises(NarrativeGenerationFailed):
                GeminiNarrator("").generate("prompt")

        mock_post.assert_not_called()

    def test_empty_answer(self):
        with patch("surf_conditions.narrative.post_json", return_value={"candidates": []}):
            with pytest.raises(NarrativeGenerationFailed):
                GeminiNarrator("g-key").generate("prompt")

    def test_http_failure(self):
        with patch(
            "surf_conditions.narrative.post_json",
            side_effect=FetchError("HTTP 429", status_code=429),
        ):
            with pytest.raises(NarrativeGenerationFailed):
                GeminiNarrator("g-key").generate("prompt")

    def test_malformed_payload(self):
        with patch("surf_conditions.narrative.post_json", return_value={"candidates": "nope"}):
            with pytest.raises(NarrativeGenerationFailed):
                GeminiNarrator("g-key").generate("prompt")


class TestTemplatedSummary:
    """Test the rule-based summary."""

    def test_summary(self, marine, malibu, quality):
        text = generate_summary("Malibu", marine, malibu, quality)

        assert text.startswith("Malibu: Epic (9/10).")
        assert "from the NE" in text
        assert "favorable for this point break" in text
        assert text.endswith("Data: Stormglass.")

    def test_unavailable_notice(self, malibu, quality):
        marine = make_marine(source=DataSource.UNAVAILABLE)

        text = generate_summary("Malibu", marine, malibu, quality)

        assert text.startswith("Live marine data is unavailable for Malibu")

    def test_wind_conditions(self, marine, quality):
        assert wind_conditions(marine) == "2.0 m/s from 45°"
        assert wind_conditions(marine, quality) == "2.0 m/s from 45° (Favorable)"

    def test_compass_label(self):
        assert compass_label(0) == "N"
        assert compass_label(350) == "N"
        assert compass_label(230) == "SW"
        assert compass_label(247.5) == "WSW"

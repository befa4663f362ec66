"""Unit tests for follow-up question suggestions."""

import asyncio
import json

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from interviewpilot.models.speaker import Speaker
from interviewpilot.models.transcription import LabeledTranscript
from interviewpilot.suggestions import FollowUpSuggester, GeminiEngine, SuggestionError


class FakeEngine:
    """Engine returning a canned response and remembering the prompt."""

    def __init__(self, response: str):
        self.response = response
        self.prompts = []

    async def send_prompt(self, prompt: str, **kwargs) -> str:
        self.prompts.append(prompt)
        return self.response


def entry(speaker, text, is_final=True):
    return LabeledTranscript(speaker=speaker, text=text, is_final=is_final, confidence=0.9)


@pytest.fixture
def transcript():
    return [
        entry(Speaker.INTERVIEWER, "How did you scale the service?"),
        entry(Speaker.CANDIDATE, "We sharded the database by tenant."),
        entry(Speaker.CANDIDATE, "and added a cache", is_final=False),
        entry(Speaker.CANDIDATE, "Then we moved hot reads to Redis."),
    ]


@pytest.mark.unit
class TestFollowUpSuggester:
    """Test cases for prompt building and response parsing."""

    def test_generate(self, transcript):
        engine = FakeEngine(json.dumps([
            {"question": "How did you pick the shard key?", "reasoning": "Probes design trade-offs"},
            {"question": "How did you handle cache invalidation?"},
        ]))
        suggester = FollowUpSuggester(engine)

        suggestions = asyncio.run(suggester.generate(transcript, job_description="Backend engineer"))

        assert [s.question for s in suggestions] == [
            "How did you pick the shard key?",
            "How did you handle cache invalidation?",
        ]
        assert suggestions[0].reasoning == "Probes design trade-offs"
        assert suggestions[1].reasoning is None

        prompt = engine.prompts[0]
        assert "Job Description: Backend engineer" in prompt
        assert "[Candidate]: We sharded the database by tenant." in prompt
        assert "[Candidate]: Then we moved hot reads to Redis." in prompt
        assert "How did you scale the service?" not in prompt
        assert "and added a cache" not in prompt

    def test_only_recent_responses_are_sent(self):
        entries = [entry(Speaker.CANDIDATE, f"answer {i}") for i in range(10)]
        suggester = FollowUpSuggester(FakeEngine("[]"))

        selected = suggester.select_candidate_responses(entries)

        assert [e.text for e in selected] == [f"answer {i}" for i in range(2, 10)]

    def test_no_candidate_responses(self):
        engine = FakeEngine("[]")
        suggester = FollowUpSuggester(engine)

        with pytest.raises(SuggestionError, match="No candidate responses"):
            asyncio.run(suggester.generate([entry(Speaker.INTERVIEWER, "Hello")]))
        assert engine.prompts == []

    def test_wrapped_response_is_accepted(self):
        suggester = FollowUpSuggester(FakeEngine("[]"))

        suggestions = suggester.parse_suggestions(json.dumps({"suggestions": [{"question": "Why?"}]}))

        assert [s.question for s in suggestions] == ["Why?"]

    @pytest.mark.parametrize("response", ["not json", json.dumps("a string")])
    def test_invalid_response(self, response):
        suggester = FollowUpSuggester(FakeEngine(response))

        with pytest.raises(SuggestionError):
            suggester.parse_suggestions(response)

    def test_items_without_question_are_dropped(self):
        suggester = FollowUpSuggester(FakeEngine("[]"))

        suggestions = suggester.parse_suggestions(json.dumps([{"reasoning": "x"}, "text", {"question": "Ok?"}]))

        assert [s.question for s in suggestions] == ["Ok?"]


@pytest.mark.unit
def test_gemini_engine_requires_api_key():
    with pytest.raises(ValueError):
        GeminiEngine("")


@pytest.mark.unit
def test_gemini_engine_url():
    engine = GeminiEngine("key", model="gemini-2.5-flash")

    assert engine.base_url.endswith("/models/gemini-2.5-flash:generateContent")


async def post_to_local_gemini(handler, prompt="Suggest questions"):
    """Run send_prompt against a local aiohttp server using ``handler``."""
    app = web.Application()
    app.router.add_post("/generate", handler)
    server = TestServer(app)
    await server.start_server()
    try:
        engine = GeminiEngine("test-key")
        engine.base_url = str(server.make_url("/generate"))
        return await engine.send_prompt(prompt)
    finally:
        await server.close()


@pytest.mark.unit
class TestGeminiEngine:
    """Test cases for the Gemini REST call against a local server."""

    def test_send_prompt_returns_candidate_text(self):
        received = {}

        async def handler(request):
            received["api_key"] = request.headers.get("x-goog-api-key")
            received["body"] = await request.json()
            return web.json_response({
                "candidates": [{"content": {"parts": [{"text": '  [{"question": "Why?"}]\n'}]}}],
            })

        text = asyncio.run(post_to_local_gemini(handler, prompt="Hello"))

        assert text == '[{"question": "Why?"}]'
        assert received["api_key"] == "test-key"
        assert received["body"]["contents"][0]["parts"][0]["text"] == "Hello"
        assert received["body"]["generationConfig"]["responseMimeType"] == "application/json"

    def test_error_status_raises_suggestion_error(self):
        async def handler(request):
            return web.Response(status=500, text="internal failure")

        with pytest.raises(SuggestionError, match="500"):
            asyncio.run(post_to_local_gemini(handler))

    def test_non_json_body_raises_suggestion_error(self):
        async def handler(request):
            return web.Response(text="<html>maintenance</html>", content_type="text/html")

        with pytest.raises(SuggestionError):
            asyncio.run(post_to_local_gemini(handler))

    def test_invalid_json_body_raises_suggestion_error(self):
        async def handler(request):
            return web.Response(text="{not json", content_type="application/json")

        with pytest.raises(SuggestionError):
            asyncio.run(post_to_local_gemini(handler))

    def test_missing_candidates_raises_suggestion_error(self):
        async def handler(request):
            return web.json_response({"promptFeedback": {"blockReason": "SAFETY"}})

        with pytest.raises(SuggestionError, match="Unexpected Gemini response"):
            asyncio.run(post_to_local_gemini(handler))

    def test_connection_failure_raises_suggestion_error(self, unused_tcp_port):
        engine = GeminiEngine("test-key", timeout=5.0)
        engine.base_url = f"http://127.0.0.1:{unused_tcp_port}/generate"

        with pytest.raises(SuggestionError, match="Gemini request failed"):
            asyncio.run(engine.send_prompt("Hello"))

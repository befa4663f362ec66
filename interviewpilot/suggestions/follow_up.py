"""Follow-up question suggestions from the candidate's recent answers."""

import json
import logging
from typing import List, Optional, Protocol

from ..models.speaker import Speaker
from ..models.suggestions import FollowUpSuggestion
from ..models.transcription import LabeledTranscript
from .errors import SuggestionError

logger = logging.getLogger(__name__)

MAX_CANDIDATE_RESPONSES = 8


class SuggestionEngine(Protocol):
    """Protocol for engines that answer a prompt with text."""
    
    async def send_prompt(self, prompt: str, **kwargs) -> str:
        ...


class FollowUpSuggester:
    """Builds the interviewer prompt and parses suggested questions."""
    
    def __init__(self, engine: SuggestionEngine, max_responses: int = MAX_CANDIDATE_RESPONSES):
        self.engine = engine
        self.max_responses = max_responses
    
    def select_candidate_responses(self, entries: List[LabeledTranscript]) -> List[LabeledTranscript]:
        """Final entries not spoken by the interviewer, most recent last."""
        responses = [e for e in entries if e.is_final and e.speaker is not Speaker.INTERVIEWER]
        return responses[-self.max_responses:]
    
    def format_transcript(self, responses: List[LabeledTranscript]) -> str:
        return "\n".join(f"[Candidate]: {e.text}" for e in responses)
    
    def build_prompt(self,
                     transcript_text: str,
                     job_description: Optional[str] = None,
                     custom_instruction: Optional[str] = None) -> str:
        return f"""You are an expert technical interviewer assistant. Based on the interview transcript, generate 1-3 intelligent follow-up questions.

Job Description: {job_description or 'Not provided'}
Custom Instruction: {custom_instruction or 'None'}

Interview Transcript:
{transcript_text}

Generate follow-up questions that:
1. Dig deeper into technical concepts mentioned
2. Explore problem-solving approaches
3. Assess real-world application of skills
4. Challenge the candidate appropriately

Return JSON array with objects containing "question" and "reasoning" fields."""
    
    def parse_suggestions(self, response_text: str) -> List[FollowUpSuggestion]:
        """Parse the engine's JSON array into suggestions.
        
        Raises:
            SuggestionError: If the text is not a JSON array of question objects
        """
        try:
            payload = json.loads(response_text or "[]")
        except json.JSONDecodeError as e:
            raise SuggestionError(f"Suggestion response is not valid JSON: {e}")
        
        # Some prompts come back wrapped as {"suggestions": [...]}
        if isinstance(payload, dict):
            payload = payload.get("suggestions", [])
        if not isinstance(payload, list):
            raise SuggestionError("Suggestion response is not a JSON array")
        
        suggestions = []
        for item in payload:
            if isinstance(item, dict) and item.get("question"):
                suggestions.append(FollowUpSuggestion(
                    question=str(item["question"]).strip(),
                    reasoning=item.get("reasoning"),
                ))
        return suggestions
    
    async def generate(self,
                       entries: List[LabeledTranscript],
                       job_description: Optional[str] = None,
                       custom_instruction: Optional[str] = None) -> List[FollowUpSuggestion]:
        """Generate follow-up questions from the transcript so far.
        
        Raises:
            SuggestionError: If there is nothing to analyze or the engine fails
        """
        responses = self.select_candidate_responses(entries)
        logger.info(f"Found {len(responses)} candidate responses")
        if not responses:
            raise SuggestionError("No candidate responses found to analyze")
        
        prompt = self.build_prompt(self.format_transcript(responses), job_description, custom_instruction)
        response_text = await self.engine.send_prompt(prompt)
        suggestions = self.parse_suggestions(response_text)
        
        logger.info(f"Generated {len(suggestions)} follow-up suggestions")
        return suggestions

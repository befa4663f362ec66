"""Gemini engine for sending prompts and getting JSON responses."""

import asyncio
import logging
import aiohttp

from .errors import SuggestionError

logger = logging.getLogger(__name__)

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"


class GeminiEngine:
    """Simple engine for sending prompts to Gemini and getting responses."""
    
    def __init__(self, api_key: str, model: str = "gemini-2.5-flash", timeout: float = 30.0):
        """Initialize Gemini engine.
        
        Args:
            api_key: Gemini API key
            model: Gemini model to use
            timeout: Total request timeout in seconds
        """
        if not api_key:
            raise ValueError("Gemini API key is required")
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.base_url = GEMINI_API_URL.format(model=model)
        
        logger.info(f"GeminiEngine initialized with model: {model}")
    
    async def send_prompt(self, prompt: str, temperature: float = 0.7) -> str:
        """Send a prompt to Gemini and get the JSON response text.
        
        Args:
            prompt: Prompt to send
            temperature: Temperature for response generation (0.0 to 1.0)
            
        Returns:
            Response text, expected to be JSON
            
        Raises:
            SuggestionError: If the API call fails or the response has no text
        """
        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json"
        }
        
        data = {
            "contents": [
                {
                    "parts": [{"text": prompt}]
                }
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "temperature": temperature
            }
        }
        
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(self.base_url, headers=headers, json=data) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        raise SuggestionError(f"Gemini API error: {response.status} - {error_text}")

                    result = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            # ContentTypeError is a ClientError; a bad JSON body raises ValueError
            raise SuggestionError(f"Gemini request failed: {e}") from e

        try:
            return result["candidates"][0]["content"]["parts"][0]["text"].strip()
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise SuggestionError(f"Unexpected Gemini response: {e}") from e

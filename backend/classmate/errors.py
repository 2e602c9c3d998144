from __future__ import annotations
import logging
from typing import Optional

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "An AI feature failed. Please try again. If the problem persists, check your connection or the server logs."
INVALID_KEY_MESSAGE = "AI Error: The API key configured on the server is invalid."
QUOTA_MESSAGE = "AI Error: API quota exceeded. Please check your billing details."
COMMUNICATION_MESSAGE = "AI Communication Error: Could not connect to the secure AI proxy. Please check your network connection."


class AIServiceError(Exception):
	"""User-facing failure of an AI feature; the raw error is chained as __cause__."""

	def __init__(self, message: str, *, function_name: Optional[str] = None) -> None:
		super().__init__(message)
		self.message = message
		self.function_name = function_name


class ProxyError(Exception):
	pass


class MalformedResponseError(ValueError):
	pass


def classify_message(message: Optional[str]) -> str:
	if not message:
		return GENERIC_FAILURE_MESSAGE
	lower = message.lower()
	if "api key not valid" in lower or "api_key_invalid" in lower:
		return INVALID_KEY_MESSAGE
	if "quota" in lower:
		return QUOTA_MESSAGE
	if "failed to call the ai service" in lower:
		return COMMUNICATION_MESSAGE
	return f"AI Error: {message}"


def handle_gemini_error(error: Optional[BaseException], function_name: str) -> AIServiceError:
	logger.error("Error in %s after API call: %r", function_name, error)
	message = str(error) if error is not None else None
	return AIServiceError(classify_message(message), function_name=function_name)

from __future__ import annotations
import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx

from .errors import MalformedResponseError, ProxyError
from .settings import settings

logger = logging.getLogger(__name__)

PROXY_FAILURE_MESSAGE = "Failed to call the AI service via proxy."


class ProxyClient:
	"""Sends model options to the /api/gemini route and returns the raw provider response."""

	def __init__(
		self,
		url: Optional[str] = None,
		*,
		timeout: Optional[float] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		self.url = url or settings.proxy_url
		self._client = httpx.AsyncClient(timeout=timeout or settings.proxy_timeout_seconds, transport=transport)

	async def call(self, options: Dict[str, Any]) -> Dict[str, Any]:
		try:
			r = await self._client.post(self.url, json=options)
		except httpx.RequestError as err:
			logger.error("API Proxy unreachable: %r", err)
			raise ProxyError(PROXY_FAILURE_MESSAGE) from err
		if r.is_error:
			try:
				error_data = r.json()
			except ValueError:
				error_data = {}
			logger.error("API Proxy Error: %s", error_data or r.text)
			if not isinstance(error_data, dict):
				error_data = {}
			raise ProxyError(error_data.get("details") or error_data.get("error") or PROXY_FAILURE_MESSAGE)
		try:
			return r.json()
		except ValueError as err:
			raise MalformedResponseError(f"The AI proxy returned invalid JSON: {r.text[:200]}") from err

	async def aclose(self) -> None:
		await self._client.aclose()


@asynccontextmanager
async def proxy_session(client: Optional[ProxyClient] = None) -> AsyncIterator[ProxyClient]:
	# Borrowed clients are left open for their owner to close
	if client is not None:
		yield client
		return
	owned = ProxyClient()
	try:
		yield owned
	finally:
		await owned.aclose()


def _first_candidate_parts(response: Dict[str, Any]) -> List[Dict[str, Any]]:
	if not isinstance(response, dict):
		return []
	candidates = response.get("candidates") or []
	if not candidates:
		return []
	candidate = candidates[0] if isinstance(candidates, list) else None
	content = candidate.get("content") if isinstance(candidate, dict) else None
	if not isinstance(content, dict):
		return []
	parts = content.get("parts")
	return [p for p in parts if isinstance(p, dict)] if isinstance(parts, list) else []


def response_text(response: Dict[str, Any]) -> str:
	texts = [
		p["text"]
		for p in _first_candidate_parts(response)
		if isinstance(p.get("text"), str) and not p.get("thought")
	]
	if not texts:
		reason = isinstance(response, dict) and (response.get("promptFeedback") or {}).get("blockReason")
		if reason:
			raise MalformedResponseError(f"The AI response was blocked ({reason}).")
		raise MalformedResponseError("The AI response did not contain any text.")
	return "".join(texts)


def function_calls(response: Dict[str, Any]) -> List[Dict[str, Any]]:
	calls = []
	for part in _first_candidate_parts(response):
		call = part.get("functionCall")
		if isinstance(call, dict):
			calls.append({"name": call.get("name"), "args": call.get("args") or {}})
	return calls


def parse_json_text(response: Dict[str, Any]) -> Any:
	raw = response_text(response).strip()
	# Strip markdown code fences
	if raw.startswith("```"):
		raw = raw.strip("`")
		if raw.startswith("json"):
			raw = raw[4:]
	try:
		return json.loads(raw.strip())
	except json.JSONDecodeError as err:
		raise MalformedResponseError(f"The AI returned invalid JSON: {err}") from err

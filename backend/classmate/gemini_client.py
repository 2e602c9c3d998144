from __future__ import annotations
import httpx
from typing import Any, Dict, List, Optional
from .settings import settings

# Config keys that live at the top level of a generateContent body; the rest go to generationConfig
_TOP_LEVEL_CONFIG_KEYS = ("tools", "toolConfig", "safetySettings", "cachedContent")


class GeminiError(RuntimeError):
	pass


def _as_content(value: Any, role: str = "user") -> Dict[str, Any]:
	if isinstance(value, str):
		return {"role": role, "parts": [{"text": value}]}
	if isinstance(value, dict):
		if "parts" in value:
			return {"role": value.get("role") or role, **{k: v for k, v in value.items() if k != "role"}}
		# A bare part, e.g. {"inlineData": {...}}
		return {"role": role, "parts": [value]}
	raise ValueError(f"Unsupported content value: {type(value).__name__}")


def _as_contents(contents: Any) -> List[Dict[str, Any]]:
	if contents is None:
		raise ValueError("model options are missing 'contents'")
	if not isinstance(contents, list):
		return [_as_content(contents)]
	if all(isinstance(c, dict) and "parts" in c for c in contents):
		return [_as_content(c) for c in contents]
	# A flat list of strings/parts makes up a single user turn
	parts = [{"text": c} if isinstance(c, str) else c for c in contents]
	return [{"role": "user", "parts": parts}]


def to_rest_request(options: Dict[str, Any]) -> Dict[str, Any]:
	"""Translate an SDK-style model options document into a generateContent body.

	`options` is `{model, contents, config}` as sent by the frontend. The model id
	is not part of the body (it goes in the URL), so it is only checked here.
	"""
	if not isinstance(options, dict):
		raise ValueError("model options must be a JSON object")
	if not options.get("model"):
		raise ValueError("model options are missing 'model'")
	body: Dict[str, Any] = {"contents": _as_contents(options.get("contents"))}
	config = dict(options.get("config") or {})
	system_instruction = config.pop("systemInstruction", None)
	if system_instruction is not None:
		content = _as_content(system_instruction)
		content.pop("role", None)
		body["systemInstruction"] = content
	for key in _TOP_LEVEL_CONFIG_KEYS:
		if key in config:
			body[key] = config.pop(key)
	if config:
		body["generationConfig"] = config
	return body


def _error_message(r: httpx.Response) -> str:
	try:
		err = r.json().get("error") or {}
		if not isinstance(err, dict):
			err = {"message": str(err)}
	except Exception:
		return f"Gemini request failed with status {r.status_code}: {r.text}"
	message = err.get("message") or f"Gemini request failed with status {r.status_code}"
	# Keep reason codes such as API_KEY_INVALID, the message alone does not always carry them
	reasons = [d.get("reason") for d in err.get("details") or [] if isinstance(d, dict) and d.get("reason")]
	if reasons:
		message = f"{message} ({', '.join(reasons)})"
	return message


class GeminiClient:
	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		timeout: Optional[float] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		self.api_key = api_key or settings.gemini_api_key
		if not self.api_key:
			raise ValueError("GEMINI_API_KEY is not set in environment variables.")
		self.provider = settings.gemini_provider
		self._client = httpx.AsyncClient(timeout=timeout or settings.gemini_timeout_seconds, transport=transport)

	def url_for(self, model: str) -> str:
		if self.provider == "vertex":
			region = settings.vertex_region
			project = settings.vertex_project or "placeholder-project"
			# Vertex AI Generative REST endpoint (API key via header)
			return f"https://{region}-aiplatform.googleapis.com/v1/projects/{project}/locations/{region}/publishers/google/models/{model}:generateContent"
		# Google AI Studio (Generative Language API)
		return f"https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

	async def generate_content(self, options: Dict[str, Any]) -> Dict[str, Any]:
		body = to_rest_request(options)
		params: Dict[str, Any] = {}
		headers: Dict[str, str] = {}
		if self.provider == "vertex":
			headers["x-goog-api-key"] = self.api_key
		else:
			params["key"] = self.api_key
		try:
			r = await self._client.post(self.url_for(options["model"]), params=params, headers=headers, json=body)
		except httpx.TimeoutException as err:
			raise GeminiError(f"Gemini request timed out: {err}") from err
		except httpx.RequestError as err:
			raise GeminiError(f"Gemini request failed: {err}") from err
		if r.is_error:
			raise GeminiError(_error_message(r))
		try:
			return r.json()
		except ValueError as err:
			raise GeminiError(f"Unexpected Gemini response: {r.text}") from err

	async def aclose(self) -> None:
		await self._client.aclose()

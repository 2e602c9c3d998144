"""
Shared fixtures: a three-student roster and provider/proxy fakes.
Zero network calls, all HTTP traffic goes through httpx.MockTransport.
"""
import json

import httpx
import pytest

from backend.classmate.models import Student
from backend.classmate.proxy_client import ProxyClient

PROXY_URL = "http://proxy.test/api/gemini"


def gemini_response(text=None, calls=None):
	"""Build a raw generateContent response with a text part and/or function calls."""
	parts = []
	if text is not None:
		parts.append({"text": text})
	for name, args in calls or []:
		parts.append({"functionCall": {"name": name, "args": args}})
	return {
		"candidates": [{"content": {"role": "model", "parts": parts}, "finishReason": "STOP"}],
		"modelVersion": "gemini-2.5-flash",
	}


def json_response(payload):
	return gemini_response(text=json.dumps(payload))


class FakeProxy:
	"""Records model options posted to the proxy and replies with a canned response."""

	def __init__(self, body=None, status_code=200, error=None):
		self.body = body if body is not None else gemini_response(text="{}")
		self.status_code = status_code
		self.error = error
		self.requests = []

	def handler(self, request):
		self.requests.append(json.loads(request.content))
		if self.error is not None:
			raise self.error
		return httpx.Response(self.status_code, json=self.body)

	@property
	def last_options(self):
		return self.requests[-1]

	def client(self):
		return ProxyClient(PROXY_URL, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def roster():
	return [
		Student(id="s1", first_name="Juan", last_name="Dela Cruz"),
		Student(id="s2", first_name="Maria", last_name="Santos"),
		Student(id="s3", first_name="Ana", last_name="Gomez"),
	]


@pytest.fixture
def fake_proxy():
	"""Factory for FakeProxy instances."""
	return FakeProxy


@pytest.fixture
def provider_reply():
	"""Build raw provider responses: provider_reply(text=..., calls=[(name, args)])."""
	return gemini_response


@pytest.fixture
def json_reply():
	"""Build a raw provider response whose text part is the given payload as JSON."""
	return json_response

from __future__ import annotations
from typing import AsyncIterator

from fastapi import HTTPException

from ..errors import AIServiceError
from ..proxy_client import ProxyClient


async def get_proxy_client() -> AsyncIterator[ProxyClient]:
	client = ProxyClient()
	try:
		yield client
	finally:
		await client.aclose()


def ai_http_error(err: AIServiceError) -> HTTPException:
	# The upstream AI service failed, not this server
	return HTTPException(status_code=502, detail=err.message)

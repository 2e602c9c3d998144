import logging
from typing import Any, Callable

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..gemini_client import GeminiClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["gemini"])


def get_client_factory() -> Callable[[], GeminiClient]:
	# The client is built inside the request so a missing key becomes a 500 body
	return GeminiClient


@router.post("/gemini")
async def generate(request: Request, client_factory: Callable[[], GeminiClient] = Depends(get_client_factory)):
	client = None
	try:
		model_options: Any = await request.json()
		client = client_factory()
		response = await client.generate_content(model_options)
		return JSONResponse(status_code=200, content=response)
	except Exception as e:
		logger.exception("Error in Gemini API route")
		return JSONResponse(
			status_code=500,
			content={
				"error": "An error occurred while communicating with the AI service.",
				"details": str(e),
			},
		)
	finally:
		if client is not None:
			await client.aclose()


@router.api_route("/gemini", methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"], include_in_schema=False)
async def method_not_allowed():
	return JSONResponse(status_code=405, content={"error": "Method not allowed"})

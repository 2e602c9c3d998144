import logging

from fastapi import FastAPI

from .settings import settings
from .routers import health, gemini
from .routers import attendance
from .routers import classroom

logging.basicConfig(
	level=settings.log_level.upper(),
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Classmate AI API")
app.include_router(health.router)
app.include_router(gemini.router)
app.include_router(attendance.router)
app.include_router(classroom.router)

@app.get("/info")
def root():
	return {"status": "ok", "gemini_configured": bool(settings.gemini_api_key)}

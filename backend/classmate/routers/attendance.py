from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..attendance import process_attendance_command
from ..errors import AIServiceError
from ..models import AttendanceIntent, Student
from ..proxy_client import ProxyClient
from .deps import ai_http_error, get_proxy_client

router = APIRouter(prefix="/attendance", tags=["attendance"])


class AttendanceCommandRequest(BaseModel):
	command: str
	students: List[Student]


@router.post("/command", response_model=Optional[AttendanceIntent])
async def attendance_command(req: AttendanceCommandRequest, client: ProxyClient = Depends(get_proxy_client)):
	command = (req.command or "").strip()
	if not command:
		raise HTTPException(status_code=400, detail="command is required")
	try:
		# None means the command could not be mapped to an update
		return await process_attendance_command(command, req.students, client)
	except AIServiceError as e:
		raise ai_http_error(e)

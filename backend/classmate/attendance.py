"""Natural-language attendance commands.

The provider turns a free-text command into an `update_attendance(status,
student_names)` call; the names it returns are then matched against the
class roster here, without any further provider round trip.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .errors import handle_gemini_error
from .models import AttendanceIntent, AttendanceStatus, Student
from .prompts import ATTENDANCE_SYSTEM_INSTRUCTION, build_attendance_prompt
from .proxy_client import ProxyClient, function_calls, proxy_session
from .schemas import SAFETY_SETTINGS, UPDATE_ATTENDANCE_TOOL
from .settings import settings

logger = logging.getLogger(__name__)

ALL_STUDENTS = "all"


def build_attendance_request(command: str, students: Iterable[Student]) -> Dict[str, Any]:
	return {
		"model": settings.gemini_model,
		"contents": build_attendance_prompt(command, students),
		"config": {
			"tools": [UPDATE_ATTENDANCE_TOOL],
			"safetySettings": SAFETY_SETTINGS,
			"systemInstruction": ATTENDANCE_SYSTEM_INSTRUCTION,
		},
	}


def _matches(candidate: str, student: Student) -> bool:
	first = student.first_name.lower()
	last = student.last_name.lower()
	return (
		candidate in f"{first} {last}"
		or candidate in f"{last} {first}"
		or candidate in first
		or candidate in last
	)


def resolve_student_ids(names: Sequence[str], students: Sequence[Student]) -> List[str]:
	"""Map provider-supplied names onto roster ids.

	Each name picks the first roster entry it is a case-insensitive substring of
	(full name either way round, or either name alone). "ALL" anywhere selects the
	whole roster. Unmatched names are dropped and ids are never repeated.
	"""
	candidates = [n.lower() for n in names if isinstance(n, str)]
	if ALL_STUDENTS in candidates:
		return [s.id for s in students]
	student_ids: List[str] = []
	for candidate in candidates:
		found = next((s for s in students if _matches(candidate, s)), None)
		if found is not None and found.id not in student_ids:
			student_ids.append(found.id)
	return student_ids


def _parse_status(value: Any) -> Optional[AttendanceStatus]:
	if not isinstance(value, str):
		return None
	try:
		return AttendanceStatus(value.strip().lower())
	except ValueError:
		return None


async def process_attendance_command(
	command: str,
	students: Iterable[Student],
	client: Optional[ProxyClient] = None,
) -> Optional[AttendanceIntent]:
	"""Return the resolved intent, or None when the command is not actionable."""
	students = list(students)
	options = build_attendance_request(command, students)
	try:
		async with proxy_session(client) as proxy:
			response = await proxy.call(options)
	except Exception as error:
		raise handle_gemini_error(error, "process_attendance_command") from error

	calls = [c for c in function_calls(response) if c.get("name") == "update_attendance"]
	if not calls:
		logger.warning("AI did not return a function call for command %r", command)
		return None

	args = calls[0]["args"]
	names = args.get("student_names") if isinstance(args, dict) else None
	if not isinstance(names, list) or not args.get("status"):
		logger.warning("AI returned invalid arguments for function call: %r", args)
		return None
	status = _parse_status(args["status"])
	if status is None:
		logger.warning("AI returned an unknown attendance status: %r", args["status"])
		return None

	return AttendanceIntent(status=status, student_ids=resolve_student_ids(names, students))

"""
Test: Attendance commands — roster name resolution and the tool-call round trip.
"""
import asyncio

import httpx
import pytest

from backend.classmate.attendance import (
	build_attendance_request,
	process_attendance_command,
	resolve_student_ids,
)
from backend.classmate.errors import AIServiceError, COMMUNICATION_MESSAGE, QUOTA_MESSAGE
from backend.classmate.models import AttendanceStatus, Student


def _run(proxy, command, students):
	return asyncio.run(process_attendance_command(command, students, proxy.client()))


def _tool_reply(provider_reply, **args):
	return provider_reply(calls=[("update_attendance", args)])


class TestResolveStudentIds:
	def test_all_selects_whole_roster_in_order(self, roster):
		assert resolve_student_ids(["ALL"], roster) == ["s1", "s2", "s3"]

	@pytest.mark.parametrize("sentinel", ["all", "All", "aLL"])
	def test_all_any_casing(self, roster, sentinel):
		assert resolve_student_ids([sentinel], roster) == ["s1", "s2", "s3"]

	def test_all_wins_over_other_names(self, roster):
		assert resolve_student_ids(["Ana", "ALL", "Nobody"], roster) == ["s1", "s2", "s3"]

	def test_full_names(self, roster):
		assert resolve_student_ids(["Juan Dela Cruz", "Maria Santos"], roster) == ["s1", "s2"]

	def test_first_name_substring(self, roster):
		assert resolve_student_ids(["ana"], roster) == ["s3"]

	def test_case_insensitive(self, roster):
		assert resolve_student_ids(["MARIA"], roster) == ["s2"]

	def test_last_name_first(self, roster):
		assert resolve_student_ids(["Santos Maria"], roster) == ["s2"]

	def test_last_name_alone(self, roster):
		assert resolve_student_ids(["dela cruz"], roster) == ["s1"]

	def test_duplicates_collapsed(self, roster):
		assert resolve_student_ids(["Ana", "Ana Gomez", "gomez"], roster) == ["s3"]

	def test_order_follows_candidates(self, roster):
		assert resolve_student_ids(["Ana Gomez", "Juan"], roster) == ["s3", "s1"]

	def test_unmatched_dropped(self, roster):
		assert resolve_student_ids(["Carlos Reyes", "Maria"], roster) == ["s2"]

	def test_no_match_is_empty(self, roster):
		assert resolve_student_ids(["Carlos Reyes"], roster) == []

	def test_first_roster_entry_wins(self):
		students = [
			Student(id="a", first_name="Mariana", last_name="Lopez"),
			Student(id="b", first_name="Maria", last_name="Santos"),
		]
		# "maria" is a substring of "mariana", which comes first
		assert resolve_student_ids(["Maria"], students) == ["a"]

	def test_same_name_students_resolve_to_first(self):
		students = [
			Student(id="a", first_name="Ana", last_name="Gomez"),
			Student(id="b", first_name="Ana", last_name="Gomez"),
		]
		assert resolve_student_ids(["Ana Gomez", "Ana Gomez"], students) == ["a"]

	def test_non_string_names_skipped(self, roster):
		assert resolve_student_ids([None, 3, "Juan"], roster) == ["s1"]

	def test_empty_roster(self):
		assert resolve_student_ids(["ALL"], []) == []
		assert resolve_student_ids(["Juan"], []) == []


class TestBuildAttendanceRequest:
	def test_roster_in_prompt(self, roster):
		options = build_attendance_request("Mark Ana late", roster)
		assert "Juan Dela Cruz, Maria Santos, Ana Gomez" in options["contents"]
		assert '"Mark Ana late"' in options["contents"]

	def test_declares_update_attendance_tool(self, roster):
		options = build_attendance_request("Everyone is present", roster)
		tools = options["config"]["tools"]
		declaration = tools[0]["functionDeclarations"][0]
		assert declaration["name"] == "update_attendance"
		assert declaration["parameters"]["required"] == ["status", "student_names"]

	def test_has_system_instruction_and_safety(self, roster):
		config = build_attendance_request("x", roster)["config"]
		assert "update_attendance" in config["systemInstruction"]
		assert len(config["safetySettings"]) == 4
		assert "responseSchema" not in config


class TestProcessAttendanceCommand:
	def test_absent_full_names(self, roster, fake_proxy, provider_reply):
		proxy = fake_proxy(_tool_reply(provider_reply, status="absent", student_names=["Juan Dela Cruz", "Maria Santos"]))
		result = _run(proxy, "Juan Dela Cruz and Maria Santos are absent today", roster)
		assert result.status == AttendanceStatus.absent
		assert result.student_ids == ["s1", "s2"]

	def test_late_first_name(self, roster, fake_proxy, provider_reply):
		proxy = fake_proxy(_tool_reply(provider_reply, status="late", student_names=["Ana"]))
		result = _run(proxy, "Mark Ana late", roster)
		assert result.status == AttendanceStatus.late
		assert result.student_ids == ["s3"]

	def test_everyone_present(self, roster, fake_proxy, provider_reply):
		proxy = fake_proxy(_tool_reply(provider_reply, status="present", student_names=["ALL"]))
		result = _run(proxy, "Mark everyone present", roster)
		assert result.status == AttendanceStatus.present
		assert result.student_ids == ["s1", "s2", "s3"]

	def test_unknown_student_gives_empty_ids(self, roster, fake_proxy, provider_reply):
		proxy = fake_proxy(_tool_reply(provider_reply, status="absent", student_names=["Carlos Reyes"]))
		result = _run(proxy, "Carlos Reyes is absent", roster)
		assert result.status == AttendanceStatus.absent
		assert result.student_ids == []

	def test_serialises_camel_case(self, roster, fake_proxy, provider_reply):
		proxy = fake_proxy(_tool_reply(provider_reply, status="late", student_names=["Ana"]))
		result = _run(proxy, "Mark Ana late", roster)
		assert result.model_dump(by_alias=True, mode="json") == {"status": "late", "studentIds": ["s3"]}

	def test_posts_request_to_proxy(self, roster, fake_proxy, provider_reply):
		proxy = fake_proxy(_tool_reply(provider_reply, status="late", student_names=["Ana"]))
		_run(proxy, "Mark Ana late", roster)
		assert len(proxy.requests) == 1
		assert proxy.last_options["config"]["tools"][0]["functionDeclarations"][0]["name"] == "update_attendance"

	def test_no_function_call_returns_none(self, roster, fake_proxy, provider_reply):
		proxy = fake_proxy(provider_reply(text="I am not sure what you mean."))
		assert _run(proxy, "What's for lunch?", roster) is None

	def test_other_function_call_ignored(self, roster, fake_proxy, provider_reply):
		proxy = fake_proxy(provider_reply(calls=[("delete_class", {"status": "absent", "student_names": ["ALL"]})]))
		assert _run(proxy, "Delete everything", roster) is None

	def test_missing_student_names_returns_none(self, roster, fake_proxy, provider_reply):
		proxy = fake_proxy(_tool_reply(provider_reply, status="absent"))
		assert _run(proxy, "Someone is absent", roster) is None

	def test_missing_status_returns_none(self, roster, fake_proxy, provider_reply):
		proxy = fake_proxy(_tool_reply(provider_reply, student_names=["Ana"]))
		assert _run(proxy, "Ana", roster) is None

	def test_student_names_not_a_list_returns_none(self, roster, fake_proxy, provider_reply):
		proxy = fake_proxy(_tool_reply(provider_reply, status="late", student_names="Ana"))
		assert _run(proxy, "Mark Ana late", roster) is None

	@pytest.mark.parametrize("body", [{"candidates": [None]}, {"candidates": [{"content": "x"}]}])
	def test_malformed_candidate_returns_none(self, roster, fake_proxy, body):
		proxy = fake_proxy(body)
		assert _run(proxy, "Mark Ana late", roster) is None

	def test_empty_name_list_is_actionable(self, roster, fake_proxy, provider_reply):
		proxy = fake_proxy(_tool_reply(provider_reply, status="late", student_names=[]))
		result = _run(proxy, "Mark late", roster)
		assert result.student_ids == []

	def test_unknown_status_returns_none(self, roster, fake_proxy, provider_reply):
		proxy = fake_proxy(_tool_reply(provider_reply, status="excused", student_names=["Ana"]))
		assert _run(proxy, "Ana is excused", roster) is None

	def test_status_normalised(self, roster, fake_proxy, provider_reply):
		proxy = fake_proxy(_tool_reply(provider_reply, status=" Absent ", student_names=["Maria"]))
		result = _run(proxy, "Maria is absent", roster)
		assert result.status == AttendanceStatus.absent

	def test_proxy_error_is_classified(self, roster, fake_proxy):
		proxy = fake_proxy({"error": "An error occurred", "details": "Resource has been exhausted (e.g. check quota)."}, status_code=500)
		with pytest.raises(AIServiceError) as exc:
			_run(proxy, "Mark Ana late", roster)
		assert exc.value.message == QUOTA_MESSAGE
		assert exc.value.function_name == "process_attendance_command"

	def test_unreachable_proxy_is_communication_error(self, roster, fake_proxy):
		proxy = fake_proxy(error=httpx.ConnectError("connection refused"))
		with pytest.raises(AIServiceError) as exc:
			_run(proxy, "Mark Ana late", roster)
		assert exc.value.message == COMMUNICATION_MESSAGE

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional

from .errors import MalformedResponseError, handle_gemini_error
from .models import (
	AIAnalysisResult,
	Anecdote,
	ApiStatus,
	DlpContent,
	DllContent,
	ExtractedGrade,
	GeneratedQuiz,
	Grade,
	QuizType,
	Quote,
	ReportCardComment,
	RubricItem,
	Student,
	TeacherPosition,
)
from . import prompts
from . import schemas
from .proxy_client import ProxyClient, parse_json_text, proxy_session
from .settings import settings


def _json_options(model: str, contents: Any, schema: Optional[Dict[str, Any]]) -> Dict[str, Any]:
	config: Dict[str, Any] = {"responseMimeType": "application/json", "safetySettings": schemas.SAFETY_SETTINGS}
	if schema is not None:
		config["responseSchema"] = schema
	return {"model": model, "contents": contents, "config": config}


async def _generate_json(client: Optional[ProxyClient], options: Dict[str, Any]) -> Any:
	async with proxy_session(client) as proxy:
		response = await proxy.call(options)
	return parse_json_text(response)


async def check_api_status(client: Optional[ProxyClient] = None) -> ApiStatus:
	try:
		async with proxy_session(client) as proxy:
			await proxy.call({"model": settings.gemini_model, "contents": "test"})
		return ApiStatus(status="success", message="Connection successful. The secure AI proxy is working correctly.")
	except Exception as error:
		processed = handle_gemini_error(error, "check_api_status")
		return ApiStatus(status="error", message=processed.message)


async def analyze_student_performance(
	students: Iterable[Student],
	grades: Iterable[Grade],
	anecdotes: Iterable[Anecdote],
	client: Optional[ProxyClient] = None,
) -> List[AIAnalysisResult]:
	grades = list(grades)
	anecdotes = list(anecdotes)
	class_data = [
		{
			"name": student.full_name,
			"grades": [
				{"subject": g.subject, "quarter": g.quarter, "percentage": f"{g.percentage:.2f}"}
				for g in grades
				if g.student_id == student.id
			],
			"anecdotes": [a.observation for a in anecdotes if a.student_id == student.id],
		}
		for student in students
	]
	options = _json_options(
		settings.gemini_model_pro,
		prompts.build_performance_analysis_prompt(class_data),
		schemas.PERFORMANCE_ANALYSIS_SCHEMA,
	)
	try:
		data = await _generate_json(client, options)
		return [AIAnalysisResult.model_validate(item) for item in data]
	except Exception as error:
		raise handle_gemini_error(error, "analyze_student_performance") from error


async def extract_grades_from_image(
	base64_image: str,
	students: Iterable[Student],
	client: Optional[ProxyClient] = None,
	*,
	mime_type: str = "image/jpeg",
) -> List[ExtractedGrade]:
	contents = {
		"parts": [
			{"text": prompts.build_grade_extraction_prompt(students)},
			{"inlineData": {"mimeType": mime_type, "data": base64_image}},
		]
	}
	options = _json_options(settings.gemini_model, contents, schemas.GRADE_EXTRACTION_SCHEMA)
	try:
		data = await _generate_json(client, options)
		return [ExtractedGrade.model_validate(item) for item in data.get("grades") or []]
	except Exception as error:
		raise handle_gemini_error(error, "extract_grades_from_image") from error


async def rephrase_anecdote(text: str, mode: str = "rephrase", client: Optional[ProxyClient] = None) -> str:
	if mode not in ("correct", "rephrase"):
		raise ValueError(f"mode must be 'correct' or 'rephrase', got {mode!r}")
	options = _json_options(settings.gemini_model, prompts.build_rephrase_prompt(text, mode), schemas.REPHRASE_SCHEMA)
	try:
		data = await _generate_json(client, options)
		return data["revisedText"]
	except Exception as error:
		raise handle_gemini_error(error, "rephrase_anecdote") from error


async def generate_report_card_comment(
	student: Student,
	grades: Iterable[Grade],
	anecdotes: Iterable[Anecdote],
	client: Optional[ProxyClient] = None,
) -> ReportCardComment:
	grade_summary = [{"subject": g.subject, "type": g.type, "percentage": f"{g.percentage:.0f}"} for g in grades]
	observations = [a.observation for a in anecdotes]
	options = _json_options(
		settings.gemini_model_pro,
		prompts.build_report_card_prompt(student.full_name, grade_summary, observations),
		schemas.REPORT_CARD_COMMENT_SCHEMA,
	)
	try:
		data = await _generate_json(client, options)
		return ReportCardComment.model_validate(data)
	except Exception as error:
		raise handle_gemini_error(error, "generate_report_card_comment") from error


async def get_inspirational_quote(client: Optional[ProxyClient] = None) -> Quote:
	options = _json_options(settings.gemini_model, prompts.QUOTE_PROMPT, schemas.QUOTE_SCHEMA)
	try:
		data = await _generate_json(client, options)
		if not isinstance(data, dict) or not data.get("quote") or not data.get("author"):
			raise MalformedResponseError("AI returned an invalid quote structure.")
		return Quote.model_validate(data)
	except Exception as error:
		raise handle_gemini_error(error, "get_inspirational_quote") from error


async def generate_certificate_content(
	award_title: str,
	tone: str,
	achievements: Optional[str] = None,
	client: Optional[ProxyClient] = None,
) -> str:
	options = _json_options(
		settings.gemini_model,
		prompts.build_certificate_prompt(award_title, tone, achievements),
		schemas.CERTIFICATE_CONTENT_SCHEMA,
	)
	try:
		data = await _generate_json(client, options)
		return data["certificateText"]
	except Exception as error:
		raise handle_gemini_error(error, "generate_certificate_content") from error


async def generate_dlp_content(
	*,
	subject: str,
	grade_level: str,
	quarter: str,
	learning_competency: str,
	lesson_objective: str,
	previous_lesson: str,
	teacher_position: TeacherPosition = TeacherPosition.beginning,
	language: str = "English",
	client: Optional[ProxyClient] = None,
) -> DlpContent:
	prompt = prompts.build_dlp_prompt(
		subject=subject,
		grade_level=grade_level,
		quarter=quarter,
		learning_competency=learning_competency,
		lesson_objective=lesson_objective,
		previous_lesson=previous_lesson,
		teacher_position=TeacherPosition(teacher_position),
		language=language,
	)
	options = _json_options(settings.gemini_model_pro, prompt, schemas.DLP_CONTENT_SCHEMA)
	try:
		data = await _generate_json(client, options)
		return DlpContent.model_validate(data)
	except Exception as error:
		raise handle_gemini_error(error, "generate_dlp_content") from error


async def generate_quiz_content(
	*,
	topic: str,
	num_questions: int,
	quiz_types: List[QuizType],
	subject: str,
	grade_level: str,
	client: Optional[ProxyClient] = None,
) -> GeneratedQuiz:
	prompt = prompts.build_quiz_prompt(
		topic=topic,
		num_questions=num_questions,
		quiz_types=[QuizType(qt) for qt in quiz_types],
		subject=subject,
		grade_level=grade_level,
	)
	options = _json_options(settings.gemini_model_pro, prompt, schemas.QUIZ_CONTENT_SCHEMA)
	try:
		data = await _generate_json(client, options)
		return GeneratedQuiz.model_validate(data)
	except Exception as error:
		raise handle_gemini_error(error, "generate_quiz_content") from error


async def generate_rubric_for_activity(
	activity_name: str,
	activity_instructions: str,
	total_points: float,
	client: Optional[ProxyClient] = None,
) -> List[RubricItem]:
	# The point total is only asked for in the prompt and schema, it is not checked here
	options = _json_options(
		settings.gemini_model,
		prompts.build_rubric_prompt(activity_name, activity_instructions, total_points),
		schemas.rubric_schema(total_points),
	)
	try:
		data = await _generate_json(client, options)
		return [RubricItem.model_validate(item) for item in data["rubricItems"]]
	except Exception as error:
		raise handle_gemini_error(error, "generate_rubric_for_activity") from error


async def generate_dll_content(
	*,
	subject: str,
	grade_level: str,
	quarter: str,
	teaching_dates: str,
	language: str = "English",
	weekly_topic: Optional[str] = None,
	content_standard: Optional[str] = None,
	performance_standard: Optional[str] = None,
	client: Optional[ProxyClient] = None,
) -> DllContent:
	prompt = prompts.build_dll_prompt(
		subject=subject,
		grade_level=grade_level,
		quarter=quarter,
		teaching_dates=teaching_dates,
		language=language,
		weekly_topic=weekly_topic,
		content_standard=content_standard,
		performance_standard=performance_standard,
	)
	options = _json_options(settings.gemini_model_pro, prompt, schemas.DLL_CONTENT_SCHEMA)
	try:
		data = await _generate_json(client, options)
		return DllContent.model_validate(data)
	except Exception as error:
		raise handle_gemini_error(error, "generate_dll_content") from error

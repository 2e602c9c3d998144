from __future__ import annotations
import base64
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from .. import generators
from ..errors import AIServiceError
from ..models import (
	AIAnalysisResult,
	Anecdote,
	ApiStatus,
	CamelModel,
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
from ..proxy_client import ProxyClient
from .deps import ai_http_error, get_proxy_client

router = APIRouter(prefix="/classroom", tags=["classroom"])

_roster_adapter = TypeAdapter(List[Student])


class AnalysisRequest(BaseModel):
	students: List[Student]
	grades: List[Grade] = Field(default_factory=list)
	anecdotes: List[Anecdote] = Field(default_factory=list)


class RephraseRequest(BaseModel):
	text: str
	mode: str = "rephrase"


class RephraseResponse(CamelModel):
	revised_text: str


class ReportCardRequest(BaseModel):
	student: Student
	grades: List[Grade] = Field(default_factory=list)
	anecdotes: List[Anecdote] = Field(default_factory=list)


class CertificateRequest(CamelModel):
	award_title: str
	tone: str = "formal"
	achievements: Optional[str] = None


class CertificateResponse(CamelModel):
	certificate_text: str


class DlpRequest(CamelModel):
	subject: str
	grade_level: str
	selected_quarter: str
	learning_competency: str
	lesson_objective: str
	previous_lesson: str = ""
	teacher_position: TeacherPosition = TeacherPosition.beginning
	language: str = "English"


class QuizRequest(CamelModel):
	topic: str
	num_questions: int = Field(gt=0)
	quiz_types: List[QuizType] = Field(min_length=1)
	subject: str
	grade_level: str


class RubricRequest(CamelModel):
	activity_name: str
	activity_instructions: str
	total_points: float = Field(gt=0)


class DllRequest(CamelModel):
	subject: str
	grade_level: str
	quarter: str
	teaching_dates: str
	language: str = "English"
	weekly_topic: Optional[str] = None
	content_standard: Optional[str] = None
	performance_standard: Optional[str] = None


@router.get("/status", response_model=ApiStatus)
async def api_status(client: ProxyClient = Depends(get_proxy_client)):
	return await generators.check_api_status(client)


@router.post("/analysis", response_model=List[AIAnalysisResult])
async def analysis(req: AnalysisRequest, client: ProxyClient = Depends(get_proxy_client)):
	try:
		return await generators.analyze_student_performance(req.students, req.grades, req.anecdotes, client)
	except AIServiceError as e:
		raise ai_http_error(e)


@router.post("/grades/extract", response_model=List[ExtractedGrade])
async def extract_grades(
	file: UploadFile = File(...),
	students: str = Form("[]"),
	client: ProxyClient = Depends(get_proxy_client),
):
	try:
		roster = _roster_adapter.validate_json(students)
	except ValidationError as e:
		raise HTTPException(status_code=400, detail=f"Invalid students field: {e}")
	content = await file.read()
	if not content:
		raise HTTPException(status_code=400, detail="image file is empty")
	encoded = base64.b64encode(content).decode("ascii")
	try:
		return await generators.extract_grades_from_image(
			encoded, roster, client, mime_type=file.content_type or "image/jpeg"
		)
	except AIServiceError as e:
		raise ai_http_error(e)


@router.post("/anecdotes/rephrase", response_model=RephraseResponse)
async def rephrase(req: RephraseRequest, client: ProxyClient = Depends(get_proxy_client)):
	text = (req.text or "").strip()
	if not text:
		raise HTTPException(status_code=400, detail="text is required")
	if req.mode not in ("correct", "rephrase"):
		raise HTTPException(status_code=400, detail="mode must be 'correct' or 'rephrase'")
	try:
		revised = await generators.rephrase_anecdote(text, req.mode, client)
	except AIServiceError as e:
		raise ai_http_error(e)
	return RephraseResponse(revised_text=revised)


@router.post("/report-card-comment", response_model=ReportCardComment)
async def report_card_comment(req: ReportCardRequest, client: ProxyClient = Depends(get_proxy_client)):
	try:
		return await generators.generate_report_card_comment(req.student, req.grades, req.anecdotes, client)
	except AIServiceError as e:
		raise ai_http_error(e)


@router.get("/quote", response_model=Quote)
async def quote(client: ProxyClient = Depends(get_proxy_client)):
	try:
		return await generators.get_inspirational_quote(client)
	except AIServiceError as e:
		raise ai_http_error(e)


@router.post("/certificate", response_model=CertificateResponse)
async def certificate(req: CertificateRequest, client: ProxyClient = Depends(get_proxy_client)):
	try:
		text = await generators.generate_certificate_content(req.award_title, req.tone, req.achievements, client)
	except AIServiceError as e:
		raise ai_http_error(e)
	return CertificateResponse(certificate_text=text)


@router.post("/dlp", response_model=DlpContent)
async def dlp(req: DlpRequest, client: ProxyClient = Depends(get_proxy_client)):
	try:
		return await generators.generate_dlp_content(
			subject=req.subject,
			grade_level=req.grade_level,
			quarter=req.selected_quarter,
			learning_competency=req.learning_competency,
			lesson_objective=req.lesson_objective,
			previous_lesson=req.previous_lesson,
			teacher_position=req.teacher_position,
			language=req.language,
			client=client,
		)
	except AIServiceError as e:
		raise ai_http_error(e)


@router.post("/quiz", response_model=GeneratedQuiz, response_model_exclude_none=True)
async def quiz(req: QuizRequest, client: ProxyClient = Depends(get_proxy_client)):
	try:
		return await generators.generate_quiz_content(
			topic=req.topic,
			num_questions=req.num_questions,
			quiz_types=req.quiz_types,
			subject=req.subject,
			grade_level=req.grade_level,
			client=client,
		)
	except AIServiceError as e:
		raise ai_http_error(e)


@router.post("/rubric", response_model=List[RubricItem])
async def rubric(req: RubricRequest, client: ProxyClient = Depends(get_proxy_client)):
	try:
		return await generators.generate_rubric_for_activity(
			req.activity_name, req.activity_instructions, req.total_points, client
		)
	except AIServiceError as e:
		raise ai_http_error(e)


@router.post("/dll", response_model=DllContent)
async def dll(req: DllRequest, client: ProxyClient = Depends(get_proxy_client)):
	try:
		return await generators.generate_dll_content(
			subject=req.subject,
			grade_level=req.grade_level,
			quarter=req.quarter,
			teaching_dates=req.teaching_dates,
			language=req.language,
			weekly_topic=req.weekly_topic,
			content_standard=req.content_standard,
			performance_standard=req.performance_standard,
			client=client,
		)
	except AIServiceError as e:
		raise ai_http_error(e)

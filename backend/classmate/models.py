from __future__ import annotations
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
	# Field names on the wire stay camelCase, as the provider schemas declare them
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AttendanceStatus(str, Enum):
	present = "present"
	absent = "absent"
	late = "late"


class QuizType(str, Enum):
	multiple_choice = "Multiple Choice"
	true_or_false = "True or False"
	identification = "Identification"


class TeacherPosition(str, Enum):
	beginning = "Beginning"
	proficient = "Proficient"
	highly_proficient = "Highly Proficient"
	distinguished = "Distinguished"


class Student(CamelModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

	id: str
	first_name: str
	last_name: str

	@property
	def full_name(self) -> str:
		return f"{self.first_name} {self.last_name}"


class Grade(CamelModel):
	student_id: str
	subject: str
	quarter: Optional[str] = None
	type: Optional[str] = None
	score: float
	max_score: float

	@property
	def percentage(self) -> float:
		if not self.max_score:
			return 0.0
		return self.score / self.max_score * 100


class Anecdote(CamelModel):
	student_id: str
	observation: str


class AttendanceIntent(CamelModel):
	status: AttendanceStatus
	student_ids: List[str] = Field(default_factory=list)


class AIAnalysisResult(CamelModel):
	student_name: str
	trend_summary: str
	recommendation: str


class ExtractedGrade(CamelModel):
	student_name: str
	score: float
	max_score: float


class ReportCardComment(CamelModel):
	strengths: str
	areas_for_improvement: str
	closing_statement: str


class Quote(CamelModel):
	quote: str
	author: str


class DlpProcedure(CamelModel):
	title: str
	content: str
	ppst: str


class DlpEvaluationQuestion(CamelModel):
	question: str
	options: List[str]
	answer: str


class DlpContent(CamelModel):
	content_standard: str
	performance_standard: str
	topic: str
	learning_references: str
	learning_materials: str
	procedures: List[DlpProcedure]
	evaluation_questions: List[DlpEvaluationQuestion]
	remarks_content: str


class RubricItem(CamelModel):
	criteria: str
	points: float


class TosItem(CamelModel):
	objective: str
	cognitive_level: str
	item_numbers: str


class QuizQuestion(CamelModel):
	question_text: str
	options: Optional[List[str]] = None
	correct_answer: str


class QuizSection(CamelModel):
	instructions: str
	questions: List[QuizQuestion]


class QuizActivity(CamelModel):
	activity_name: str
	activity_instructions: str
	rubric: Optional[List[RubricItem]] = None


class GeneratedQuiz(CamelModel):
	quiz_title: str
	table_of_specifications: Optional[List[TosItem]] = None
	# Keyed by QuizType value, e.g. "Multiple Choice"
	questions_by_type: Dict[str, QuizSection]
	activities: List[QuizActivity]


class DllDay(CamelModel):
	day: str
	objectives: str
	content: str
	learning_resources: str
	procedures: List[str]
	remarks: Optional[str] = None


class DllContent(CamelModel):
	weekly_topic: str
	content_standard: str
	performance_standard: str
	learning_competencies: List[str]
	days: List[DllDay]


class ApiStatus(BaseModel):
	status: Literal["success", "error"]
	message: str

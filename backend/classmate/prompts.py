from __future__ import annotations
import json
from typing import Any, Dict, Iterable, List, Optional

from .models import QuizType, Student, TeacherPosition
from .schemas import AWARD_TYPE_PLACEHOLDER, STUDENT_NAME_PLACEHOLDER


ATTENDANCE_SYSTEM_INSTRUCTION = (
	"You are an intelligent attendance assistant for a teacher. Interpret natural language commands "
	"and call the `update_attendance` function with the correct parameters. "
	"Be precise in matching student names from the provided list."
)

TEACHER_POSITION_TEXT = {
	TeacherPosition.beginning: "Beginning Teacher (for Teacher I-III)",
	TeacherPosition.proficient: "Proficient Teacher (for Teacher IV-Teacher VII)",
	TeacherPosition.highly_proficient: "Highly Proficient Teacher (for Master Teacher I-Master Teacher III)",
	TeacherPosition.distinguished: "Distinguished Teacher (for Master Teacher IV-Master Teacher V)",
}


def student_list(students: Iterable[Student]) -> str:
	return ", ".join(s.full_name for s in students)


def build_performance_analysis_prompt(class_data: List[Dict[str, Any]]) -> str:
	return (
		"You are an experienced teacher reviewing a class's academic and behavioral data. "
		"Identify students who are excelling or at risk.\n"
		"Each student has grades (percentages by subject and quarter) and anecdotal observations.\n"
		"A trend is significant when it holds for at least two quarters or is a clear outlier:\n"
		"- Excelling/improving: consistently above 90%, a sharp rise, or notable positive observations.\n"
		"- At risk/declining: consistently below 78%, a steady decline, or concerning observations.\n"
		"For each identified student give the full name, a one-sentence trendSummary and a personalized "
		"recommendation (enrichment for excelling students, targeted intervention for at-risk students).\n"
		"Leave out students with stable or average performance. Return an empty array if none qualify.\n\n"
		f"Class data:\n{json.dumps(class_data, indent=2)}"
	)


def build_grade_extraction_prompt(students: Iterable[Student]) -> str:
	return (
		"Read the attached photo of a grade sheet and extract each student's name and score.\n"
		"The maximum possible score is written on the sheet; report it as maxScore for every student.\n"
		f"Match the names to this class list: {student_list(students)}.\n"
		"Return a JSON object matching the provided schema."
	)


def build_rephrase_prompt(text: str, mode: str) -> str:
	if mode == "correct":
		task = "Correct the grammar and spelling of the following text."
	else:
		task = "Rephrase the following text to be formal and objective for a student's anecdotal record."
	return f'{task} Return only the revised text in the specified JSON format. Text: "{text}"'


def build_report_card_prompt(student_name: str, grade_summary: List[Dict[str, Any]], observations: List[str]) -> str:
	return (
		f"Write a balanced, constructive report card comment for {student_name}.\n\n"
		f"Grades: {json.dumps(grade_summary)}\n"
		f"Anecdotal observations: {json.dumps(observations)}\n\n"
		"1. strengths: a paragraph on subjects or skills where the student does well, drawn from high scores "
		"and positive observations.\n"
		"2. areasForImprovement: a paragraph on areas for growth with specific, positively framed actions.\n"
		"3. closingStatement: one encouraging, forward-looking sentence.\n"
		"Return the result in the specified JSON format."
	)


QUOTE_PROMPT = (
	"Give one short inspirational quote for a teacher about education, learning, or personal growth. "
	"Return it in the specified JSON format."
)


def build_certificate_prompt(award_title: str, tone: str, achievements: Optional[str] = None) -> str:
	achievements_line = f'Mention these achievements: "{achievements}"\n' if achievements else ""
	return (
		"Write the body text of a school certificate.\n"
		f'Award: "{award_title}"\n'
		f"Tone: {tone}\n"
		f"{achievements_line}\n"
		f"Put the placeholder '{STUDENT_NAME_PLACEHOLDER}' on its own line where the student's name goes, "
		f"and use '{AWARD_TYPE_PLACEHOLDER}' where a specific award title appears.\n"
		"Example:\n"
		"is given to\n\n"
		f"{STUDENT_NAME_PLACEHOLDER}\n\n"
		f'for their outstanding achievement as "{AWARD_TYPE_PLACEHOLDER}".\n\n'
		"Given this [DAY] day of [MONTH], [YEAR] at [SCHOOL_NAME].\n\n"
		"Return a JSON object matching the provided schema."
	)


def grade_level_instruction(grade_level: str) -> str:
	if grade_level.strip().lower() == "kindergarten":
		return (
			"For Kindergarten, use the blocks of time format (Arrival Time, Meeting Time 1, Work Period 1, "
			"Story Time, ...). Keep the content play-based and experiential."
		)
	if grade_level.strip() in ("1", "2", "3"):
		return (
			"For Grades 1-3, use a developmentally appropriate format (Introductory Activity, Presentation, "
			"Modeling, Guided Practice, Independent Practice, Evaluation)."
		)
	return (
		"For Grades 4-12, use the standard DepEd format (A. Reviewing previous lesson, "
		"B. Establishing a purpose, C. Presenting examples, ...)."
	)


def build_dlp_prompt(
	*,
	subject: str,
	grade_level: str,
	quarter: str,
	learning_competency: str,
	lesson_objective: str,
	previous_lesson: str,
	teacher_position: TeacherPosition,
	language: str,
) -> str:
	return (
		f"You are an instructional designer and experienced Filipino teacher of {subject} for grade {grade_level}. "
		"Write a Daily Lesson Plan (DLP) aligned with the DepEd K-12 Curriculum Guide.\n\n"
		f"Subject: {subject}\n"
		f"Grade Level: {grade_level}\n"
		f"Quarter: {quarter}\n"
		f'Learning Competency: "{learning_competency}"\n'
		f'Lesson Objective: "{lesson_objective}"\n'
		f'Previous Lesson: "{previous_lesson}"\n'
		f"Teacher's Career Stage: {TEACHER_POSITION_TEXT[teacher_position]}\n"
		f"Language: {language}\n\n"
		f"1. Write everything in {language}.\n"
		f"2. {grade_level_instruction(grade_level)} Each procedure has a title, content, and ppst.\n"
		"3. Give the official Content Standard and Performance Standard. Activities need a name and "
		"instructions; discussions need LOTS/HOTS questions. Embed any rubric as a text table in the content.\n"
		"4. The evaluation step contains instructions and exactly 5 multiple-choice questions; repeat them "
		"with options and answer letters in evaluationQuestions.\n"
		f"5. Each ppst is a Classroom Observable Indicator for the {teacher_position.value} career stage "
		"(DepEd Order No. 14, s. 2023), formatted 'PPST [code]: [description]'. Prefer PPST 3.1.2 where "
		"differentiation applies.\n"
		"6. Use ALL CAPS for emphasis. Do not use asterisks.\n\n"
		"Return a single JSON object matching the provided schema."
	)


_QUIZ_SECTION_RULES = {
	QuizType.multiple_choice: (
		"- Generate {n} multiple-choice questions with 4 distinct options each.\n"
		"- 'options' holds only the option text, without letter prefixes.\n"
		"- 'correctAnswer' is only the letter (A, B, C, or D)."
	),
	QuizType.true_or_false: (
		"- Generate {n} true or false statements.\n"
		"- Do not include 'options'.\n"
		"- 'correctAnswer' is \"True\" or \"False\"."
	),
	QuizType.identification: (
		"- Generate {n} identification questions.\n"
		"- Do not include 'options'.\n"
		"- 'correctAnswer' is the exact term or phrase."
	),
}


def build_quiz_prompt(*, topic: str, num_questions: int, quiz_types: List[QuizType], subject: str, grade_level: str) -> str:
	total = num_questions * len(quiz_types)
	sections = "\n\n".join(
		f"### {qt.value} Section\n" + _QUIZ_SECTION_RULES[qt].format(n=num_questions) for qt in quiz_types
	)
	if total > 10:
		tos = (
			f"The quiz has {total} questions, so you MUST include a tableOfSpecifications linking items "
			"to learning objectives with their Bloom's Taxonomy level. itemNumbers is a string covering "
			f"items 1 to {total}, e.g. \"1-5, 11\"."
		)
	else:
		tos = f"The quiz has {total} questions. Do NOT include a tableOfSpecifications."
	return (
		f"You are an assessment designer for {subject} at the {grade_level} level. Write a quiz.\n\n"
		f"Topic: {topic}\n\n"
		"1. Give the quiz a clear title.\n"
		f"2. Questions:\n{sections}\n\n"
		f"3. {tos}\n"
		"4. Add 2-3 follow-up activities with a name and instructions each. Do not write rubrics for them.\n\n"
		"Return a single JSON object that follows the provided schema."
	)


def build_rubric_prompt(activity_name: str, activity_instructions: str, total_points: float) -> str:
	return (
		"Create a simple rubric for this student activity.\n"
		f"Activity: {activity_name}\n"
		f"Instructions: {activity_instructions}\n"
		f"Total points: {total_points:g}\n\n"
		"Use 3-5 clear criteria, assign points to each, and make the points add up to exactly "
		f"{total_points:g}. Return a JSON object matching the provided schema."
	)


def build_dll_prompt(
	*,
	subject: str,
	grade_level: str,
	quarter: str,
	teaching_dates: str,
	language: str,
	weekly_topic: Optional[str] = None,
	content_standard: Optional[str] = None,
	performance_standard: Optional[str] = None,
) -> str:
	return (
		"Write a Daily Lesson Log (DLL) for one week, aligned with the DepEd K-12 Curriculum Guide.\n"
		f"Subject: {subject}\n"
		f"Grade Level: {grade_level}\n"
		f"Quarter: {quarter}\n"
		f"Teaching Dates: {teaching_dates}\n"
		f"Weekly Topic: {weekly_topic or 'suggest a relevant weekly topic'}\n"
		f"Content Standard: {content_standard or 'generate from the subject and grade level'}\n"
		f"Performance Standard: {performance_standard or 'generate from the subject and grade level'}\n"
		f"Language: {language}\n\n"
		"Give one entry in 'days' per teaching day with objectives, content, learning resources, and "
		"ordered procedure steps. Return a JSON object matching the provided schema."
	)


def build_attendance_prompt(command: str, students: Iterable[Student]) -> str:
	return (
		f"{ATTENDANCE_SYSTEM_INSTRUCTION}\n\n"
		f"The students in this class are: {student_list(students)}.\n\n"
		"Examples:\n"
		"- \"Mark everyone present.\" -> update_attendance(status='present', student_names=['ALL'])\n"
		"- \"Juan Dela Cruz and Maria Santos are absent today.\" -> "
		"update_attendance(status='absent', student_names=['Juan Dela Cruz', 'Maria Santos'])\n"
		"- \"The following are late: Ana Gomez, Pedro Reyes.\" -> "
		"update_attendance(status='late', student_names=['Ana Gomez', 'Pedro Reyes'])\n"
		"- \"Mark Ana late\" -> update_attendance(status='late', student_names=['Ana Gomez']) "
		"when Ana Gomez is in the list.\n\n"
		f'Now process this command: "{command}"'
	)

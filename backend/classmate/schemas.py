"""Structured-output schemas and tool declarations sent to the provider.

These are plain data; type names follow the REST OpenAPI subset (upper case).
"""
from __future__ import annotations
from typing import Any, Dict

SAFETY_SETTINGS = [
	{"category": category, "threshold": "BLOCK_NONE"}
	for category in (
		"HARM_CATEGORY_HARASSMENT",
		"HARM_CATEGORY_HATE_SPEECH",
		"HARM_CATEGORY_SEXUALLY_EXPLICIT",
		"HARM_CATEGORY_DANGEROUS_CONTENT",
	)
]


def _string(description: str) -> Dict[str, Any]:
	return {"type": "STRING", "description": description}


def _number(description: str) -> Dict[str, Any]:
	return {"type": "NUMBER", "description": description}


def _object(properties: Dict[str, Any], required=None, description: str | None = None) -> Dict[str, Any]:
	schema: Dict[str, Any] = {"type": "OBJECT", "properties": properties}
	if required:
		schema["required"] = list(required)
	if description:
		schema["description"] = description
	return schema


def _array(items: Dict[str, Any], description: str | None = None) -> Dict[str, Any]:
	schema: Dict[str, Any] = {"type": "ARRAY", "items": items}
	if description:
		schema["description"] = description
	return schema


PERFORMANCE_ANALYSIS_SCHEMA = _array(
	_object(
		{
			"studentName": _string("The full name of the student."),
			"trendSummary": _string("One sentence on the performance trend, positive or negative."),
			"recommendation": _string("An actionable intervention or enrichment recommendation."),
		},
		required=["studentName", "trendSummary", "recommendation"],
	)
)

GRADE_EXTRACTION_SCHEMA = _object(
	{
		"grades": _array(
			_object(
				{
					"studentName": _string("The full name of the student, matched to the class list when possible."),
					"score": _number("The student's score."),
					"maxScore": _number("The maximum possible score for the assessment."),
				},
				required=["studentName", "score", "maxScore"],
			),
			description="Student grades extracted from the image.",
		)
	}
)

REPHRASE_SCHEMA = _object(
	{"revisedText": _string("The revised, corrected, or rephrased text.")},
	required=["revisedText"],
)

REPORT_CARD_COMMENT_SCHEMA = _object(
	{
		"strengths": _string("A positive paragraph on the student's strengths."),
		"areasForImprovement": _string("A constructive paragraph on areas for growth, with suggestions."),
		"closingStatement": _string("An encouraging, forward-looking closing sentence."),
	},
	required=["strengths", "areasForImprovement", "closingStatement"],
)

QUOTE_SCHEMA = _object(
	{
		"quote": _string("The inspirational quote."),
		"author": _string("The author of the quote, or 'Unknown'."),
	},
	required=["quote", "author"],
)

STUDENT_NAME_PLACEHOLDER = "^^[STUDENT_NAME]^^"
AWARD_TYPE_PLACEHOLDER = "##[AWARD_TYPE]##"

CERTIFICATE_CONTENT_SCHEMA = _object(
	{
		"certificateText": _string(
			"The certificate body. It must include "
			f"'{STUDENT_NAME_PLACEHOLDER}' for the student's name and "
			f"'{AWARD_TYPE_PLACEHOLDER}' for the award type."
		)
	},
	required=["certificateText"],
)

DLP_PROCEDURE_SCHEMA = _object(
	{
		"title": _string("The title of the procedure step, e.g. 'A. Reviewing Previous Lesson'."),
		"content": _string("Full content of the step; activities, discussion questions, or evaluation items."),
		"ppst": _string("A PPST-aligned Classroom Observable Indicator, formatted 'PPST [code]: [description]'."),
	},
	required=["title", "content", "ppst"],
)

DLP_EVALUATION_QUESTION_SCHEMA = _object(
	{
		"question": _string("The question text."),
		"options": _array({"type": "STRING"}, description="4 distinct answer options, without letter prefixes."),
		"answer": _string("The correct answer letter, e.g. 'A'."),
	},
	required=["question", "options", "answer"],
)

DLP_CONTENT_SCHEMA = _object(
	{
		"contentStandard": _string("Official DepEd Content Standard."),
		"performanceStandard": _string("Official DepEd Performance Standard."),
		"topic": _string("The specific lesson topic."),
		"learningReferences": _string("References, with page numbers if applicable."),
		"learningMaterials": _string("Materials needed for the lesson."),
		"procedures": _array(DLP_PROCEDURE_SCHEMA, description="The lesson flow, in the grade-level format."),
		"evaluationQuestions": _array(DLP_EVALUATION_QUESTION_SCHEMA, description="5 multiple-choice questions for the answer key."),
		"remarksContent": _string("Teacher's remarks on the lesson's execution."),
	},
	required=[
		"contentStandard", "performanceStandard", "topic", "learningReferences",
		"learningMaterials", "procedures", "evaluationQuestions", "remarksContent",
	],
)

RUBRIC_ITEM_SCHEMA = _object(
	{
		"criteria": _string("The description of the criteria."),
		"points": _number("The points for this criteria."),
	},
	required=["criteria", "points"],
)

TOS_ITEM_SCHEMA = _object(
	{
		"objective": _string("The learning objective covered."),
		"cognitiveLevel": _string("Bloom's Taxonomy level."),
		"itemNumbers": _string("Item numbers for the objective, e.g. '1-5, 11-12'."),
	},
	required=["objective", "cognitiveLevel", "itemNumbers"],
)

QUIZ_QUESTION_SCHEMA = _object(
	{
		"questionText": _string("The text of the question."),
		"options": _array({"type": "STRING"}, description="Multiple Choice only: 4 option texts."),
		"correctAnswer": _string("The letter for MC, 'True'/'False' for T/F, the exact term for Identification."),
	},
	required=["questionText", "correctAnswer"],
)

QUIZ_SECTION_SCHEMA = _object(
	{
		"instructions": _string("Instructions for this section of the quiz."),
		"questions": _array(QUIZ_QUESTION_SCHEMA),
	},
	required=["instructions", "questions"],
)

QUIZ_CONTENT_SCHEMA = _object(
	{
		"quizTitle": _string("An appropriate title for the quiz."),
		"tableOfSpecifications": _array(
			TOS_ITEM_SCHEMA,
			description="A Table of Specifications. Required when total questions > 10, omitted otherwise.",
		),
		"questionsByType": _object(
			{
				"Multiple Choice": QUIZ_SECTION_SCHEMA,
				"True or False": QUIZ_SECTION_SCHEMA,
				"Identification": QUIZ_SECTION_SCHEMA,
			},
			description="Quiz sections keyed by quiz type.",
		),
		"activities": _array(
			_object(
				{
					"activityName": _string("A name for the activity."),
					"activityInstructions": _string("Instructions for the activity."),
					"rubric": _array(RUBRIC_ITEM_SCHEMA, description="Optional rubric, generated separately."),
				},
				required=["activityName", "activityInstructions"],
			),
			description="2-3 related activity ideas.",
		),
	},
	required=["quizTitle", "questionsByType", "activities"],
)

DLL_DAY_SCHEMA = _object(
	{
		"day": _string("The teaching day, e.g. 'Monday'."),
		"objectives": _string("Learning objectives for the day."),
		"content": _string("Subject matter for the day."),
		"learningResources": _string("References and materials."),
		"procedures": _array({"type": "STRING"}, description="The day's procedure steps in order."),
		"remarks": _string("Space for remarks."),
	},
	required=["day", "objectives", "content", "learningResources", "procedures"],
)

DLL_CONTENT_SCHEMA = _object(
	{
		"weeklyTopic": _string("The topic for the week."),
		"contentStandard": _string("Official DepEd Content Standard."),
		"performanceStandard": _string("Official DepEd Performance Standard."),
		"learningCompetencies": _array({"type": "STRING"}, description="Learning competencies with codes."),
		"days": _array(DLL_DAY_SCHEMA, description="One entry per teaching day."),
	},
	required=["weeklyTopic", "contentStandard", "performanceStandard", "learningCompetencies", "days"],
)


def rubric_schema(total_points: float) -> Dict[str, Any]:
	return _object(
		{
			"rubricItems": _array(
				RUBRIC_ITEM_SCHEMA,
				description=f"Rubric criteria for the activity. The points MUST sum to {total_points:g}.",
			)
		},
		required=["rubricItems"],
	)


UPDATE_ATTENDANCE_TOOL = {
	"functionDeclarations": [
		{
			"name": "update_attendance",
			"description": "Updates the attendance status for one or more students.",
			"parameters": _object(
				{
					"status": _string("The new attendance status. Must be one of 'present', 'absent', or 'late'."),
					"student_names": _array(
						{"type": "STRING"},
						description="Student names to update, or the special value 'ALL' for everyone in the list.",
					),
				},
				required=["status", "student_names"],
			),
		}
	]
}

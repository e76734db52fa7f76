"""Centralized prompt templates for every relay flow."""

from __future__ import annotations

_JSON_RULE = (
    "The response MUST be valid JSON. Make sure to escape any special characters "
    "in strings properly."
)

# ---------------------------------------------------------------------------
# Code generation / debugging
# ---------------------------------------------------------------------------

def solve_user_prompt(problem_text: str, language: str) -> str:
    return f"""\
Solve the following problem in {language}:
{problem_text}

Provide your solution in the following JSON format:
{{
  "code": "your complete code solution here",
  "thoughts": ["thought 1", "thought 2", "thought 3"],
  "time_complexity": "O(n) explanation here",
  "space_complexity": "O(n) explanation here"
}}

{_JSON_RULE}"""


def debug_user_prompt(problem_text: str, language: str) -> str:
    return f"""\
Debug the following problem in {language}:
{problem_text}

Provide your debug solution in the following JSON format:
{{
  "code": "your complete fixed code solution here",
  "thoughts": ["debug observation 1", "debug observation 2", "debug observation 3"],
  "time_complexity": "O(n) explanation here",
  "space_complexity": "O(n) explanation here"
}}

{_JSON_RULE}"""


# ---------------------------------------------------------------------------
# Multiple choice
# ---------------------------------------------------------------------------

def mcq_user_prompt(problem_info: str) -> str:
    return f"""\
Analyze this multiple choice question and provide the correct answer:
{problem_info}
Provide your response in the following JSON format:
{{
  "correctOption": "A",
  "thoughts": ["reasoning step 1", "reasoning step 2", "reasoning step 3", "Final correct answer"],
  "explanation": "Detailed explanation of why this is the correct answer"
}}
"correctOption" is the letter of the correct option (A, B, C, D, etc.).
{_JSON_RULE} Also provide the final correct answer from the options \
(the final correct answer should be the last element in the thoughts array)."""


# ---------------------------------------------------------------------------
# Problem extraction from screenshots
# ---------------------------------------------------------------------------

EXTRACT_SYSTEM = """\
You transcribe screenshots of programming or multiple choice problems.
Copy the problem text exactly as shown, including constraints and any answer options.
Do not solve the problem."""

OCR_LANGUAGES = {
    "eng": "English",
    "fra": "French",
    "deu": "German",
    "spa": "Spanish",
    "ita": "Italian",
    "por": "Portuguese",
    "chi_sim": "Simplified Chinese",
    "chi_tra": "Traditional Chinese",
    "jpn": "Japanese",
    "kor": "Korean",
    "ara": "Arabic",
    "hin": "Hindi",
    "rus": "Russian",
}


def extract_user_prompt(language: str, image_count: int) -> str:
    pages = "image" if image_count == 1 else f"{image_count} images, in order"
    return f"""\
Extract the problem shown in the attached {pages}. The text is in {OCR_LANGUAGES.get(language, "English")}.
Provide your response in the following JSON format:
{{
  "problem_statement": "the full problem text",
  "test_cases": [{{"input": "example input", "output": "expected output"}}]
}}
Use an empty list for "test_cases" when the problem shows no examples.
{_JSON_RULE}"""


CONNECTIVITY_PROMPT = "Hello, can you respond with just the text 'LLM API is working'?"

from __future__ import annotations

GENERATED_QUESTION_COUNT = 10

_PROMPT_TEMPLATE = """Generate {count} multiple-choice questions about "{topic}".
For every question:
- Write it in {language} and make it directly about "{topic}"
- Give exactly 4 options labelled A, B, C and D
- Exactly one option is correct
- Keep the options short and clear

Reply with exactly one JSON object in this format and nothing else:
{{
  "questions": [
    {{
      "question": "question text",
      "options": {{
        "A": "first option",
        "B": "second option",
        "C": "third option",
        "D": "fourth option"
      }},
      "correct_option": "A"
    }}
  ]
}}"""


def build_prompt(
    topic: str,
    *,
    language: str = "English",
    count: int = GENERATED_QUESTION_COUNT,
) -> str:
    cleaned_topic = " ".join(topic.split()).replace('"', "'")
    return _PROMPT_TEMPLATE.format(count=count, topic=cleaned_topic, language=language)

# src/llm/prompts.py — v1
"""Prompt templates for recipe extraction and validation feedback.

Templates use ``str.format`` placeholders; literal braces are doubled.
"""

from __future__ import annotations

from datetime import date

EXTRACTION_PROMPT = """\
You are a culinary data extraction assistant. Today's date is {today}.
Use it to resolve relative dates ("last week", "this season") found in the page.

Read the web page content below and decide whether it contains one or more
cooking recipes.

Rules:
- Set "is_recipe" to true only if the page contains at least one complete
  recipe (a list of ingredients AND preparation steps).
- Set "recipe_confidence" between 0.0 and 1.0 to the likelihood that the
  original page is a recipe page, even when the content you see looks
  incomplete.
- If "is_recipe" is false, return an empty "recipes" list.
- If "is_recipe" is true, return every recipe found on the page in "recipes".
- Copy ingredient quantities as written ("1 1/2", "to taste"); do not convert units.
- Number instruction steps from 1 in the order they appear.
- Use the page's language for text fields and set "metadata.language"
  to its ISO 639-1 code.
- Do not invent ingredients, steps, times or nutrition values that are not
  present in the page.
- The page content may be a JSON-LD object, an HTML fragment or a full HTML
  document.

Page content:
{html}
"""

FEEDBACK_PROMPT = """

Your previous answer for this page failed validation.

Validation error:
{validation_error}

Previous answer:
{previous_recipe}

Fix the problem described in the validation error and return the complete,
corrected result. Keep every correct field from the previous answer.
"""


def render_extraction_prompt(html: str, today: date) -> str:
    """Fill the base instruction template with the date and page content."""
    return EXTRACTION_PROMPT.format(today=today.isoformat(), html=html)


def render_feedback_prompt(validation_error: str, previous_recipe_json: str) -> str:
    """Render the feedback section appended to the base prompt on retry."""
    return FEEDBACK_PROMPT.format(
        validation_error=validation_error,
        previous_recipe=previous_recipe_json,
    )

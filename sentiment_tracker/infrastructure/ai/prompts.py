"""Prompt templates for the OpenAI adapters."""

NARRATIVE_SYSTEM_PROMPT = (
    "You are a strategic political analyst writing concise daily briefings "
    "on public sentiment in social media. Base every statement on the data given."
)

CLASSIFIER_SYSTEM_PROMPT = (
    "You are a political analyst expert who measures public sentiment in "
    "social media comments. You answer with raw JSON only."
)

CLASSIFY_COMMENTS = """Analyze the following list of public comments about a political entity.

Determine the overall sentiment distribution (Positive, Negative, Neutral) as percentages.
Summarize the key "Positive Remarks" (why people like them), "Negative Remarks" (why people dislike them) and "Neutral Remarks".
Provide a final "Conclusion" summarizing the public perception.

Return ONLY raw JSON (no markdown formatting) with this exact structure:
{{
    "positive_percentage": number,
    "negative_percentage": number,
    "neutral_percentage": number,
    "positive_remarks": "string summary",
    "negative_remarks": "string summary",
    "neutral_remarks": "string summary",
    "conclusion": "string summary"
}}

Ensure percentages sum to exactly 100.

COMMENTS DATA:
{comments_text}
"""

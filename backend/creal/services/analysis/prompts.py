"""
Prompt templates for article analysis, author lookup and clip synthesis.
"""

from typing import Optional

MAX_ARTICLE_CHARS = 12000
MAX_VIDEO_CONTEXT_CHARS = 1200

BIAS_SYSTEM_INSTRUCTION = """You are a neutral media analyst. You score news articles using ONLY the provided text.
Do not use outside knowledge about the outlet or author. Return JSON only."""

BIAS_PROMPT_TEMPLATE = """Score the article below on these axes.

Bipolar axes, integers from -100 to 100:
- left_right: -100 strongly left-leaning, 100 strongly right-leaning
- auth_lib: -100 favours government authority, 100 favours individual liberty
- nat_glob: -100 national interest framing, 100 global cooperation framing
- tone_calm_urgent: -100 measured and calm, 100 alarmist and urgent

Percentages, integers from 0 to 100:
- objectivity: how factual and neutral the writing is
- sensationalism: use of emotional, dramatic or clickbait language
- clarity: how clear and well structured the text is
- confidence: how confident you are in this assessment

Also return "reasoning": two or three sentences citing specific phrases.

OUTPUT FORMAT (JSON):
{{"left_right": 0, "auth_lib": 0, "nat_glob": 0, "tone_calm_urgent": 0,
"objectivity": 0, "sensationalism": 0, "clarity": 0, "confidence": 0, "reasoning": ""}}

ARTICLE:
{text}"""

AUTHOR_PROMPT_TEMPLATE = """Search for information about the journalist/author "{name}". Provide:
1. A brief biography (2-3 sentences)
2. Their occupation/role
3. Age (if publicly available)
4. List of 3-5 notable articles they've written (with titles and URLs if available)
5. Any social media or professional profile links (LinkedIn, Twitter, etc.)

Format your response as a JSON object with this structure:
{{
  "name": "{name}",
  "bio": "brief biography",
  "occupation": "their role/title",
  "age": "age if available, otherwise null",
  "articles": [
    {{"title": "article title", "url": "article url", "source": "publication", "date": "publication date"}}
  ],
  "social_links": [
    {{"platform": "platform name", "url": "profile url"}}
  ]
}}

If you cannot find specific information, use null for that field. Only include verified, publicly available information. Return only valid JSON."""

VIDEO_PROMPT_TEMPLATE = """An 8-second infographic, news-cartoon style explainer clip about the news story "{title}".
Flat vector illustration, bold clean shapes, muted newsroom colour palette, smooth camera pans between
two or three simple scenes that visualise the core facts. No on-screen text, no logos, no real people's faces.
Neutral, informative tone.{context}"""


def build_bias_prompt(text: str) -> str:
    return BIAS_PROMPT_TEMPLATE.format(text=(text or "")[:MAX_ARTICLE_CHARS])


def build_author_prompt(name: str) -> str:
    return AUTHOR_PROMPT_TEMPLATE.format(name=name.strip())


def build_video_prompt(title: str, excerpt: Optional[str] = None, rationale: Optional[str] = None) -> str:
    """Compose the synthesis prompt from the article title, an excerpt and the analysis rationale."""
    context = "\n\n".join(part.strip() for part in (excerpt, rationale) if part and part.strip())
    if context:
        context = f"\n\nStory context:\n{context[:MAX_VIDEO_CONTEXT_CHARS]}"
    return VIDEO_PROMPT_TEMPLATE.format(title=(title or "Untitled Article").strip(), context=context)

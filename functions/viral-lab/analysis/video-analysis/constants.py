SERVICE_NAME = "video-analysis"

DEFAULT_MODEL_NAME = "gemini-2.5-pro"
DEFAULT_TEMPERATURE = 0.4
DEFAULT_VIDEO_MIME_TYPE = "video/mp4"
# Inline request payloads to Gemini are capped at 20 MB
DEFAULT_MAX_VIDEO_BYTES = 20 * 1024 * 1024

# Order matters: the language-tagged marker must go before the bare one
CODE_FENCE_MARKERS = ("```json", "```")

MISSING_TONES_PLACEHOLDER = "N/A"

TONE_PRESETS = (
    "Persuasive",
    "Funny",
    "Educational",
    "Controversial",
    "Inspirational",
)
DEFAULT_TONE = TONE_PRESETS[0]

ANALYSIS_PROMPT = """
    You are a Viral Content Analyst expert. Deconstruct the following short-form video (Reel/TikTok/Short) to allow us to understand why it went viral (or why it failed).

    Analyze the video structure and content. Return the result as a strictly valid JSON object with the following schema:
    {
      "hook": "Description of the first 3-5 seconds. What grabbed attention? Visuals? Audio? Text?",
      "retention": "What kept the viewer watching in the middle? Conflict? Curiosity gap? Humor?",
      "payoff": "How did it end? CTA? Joke punchline? Satisfaction?",
      "sentiment": "Overall emotional summary (1-2 sentences)",
      "tones": [
        {"label": "Excitement", "score": 0.9},
        {"label": "Curiosity", "score": 0.7}
      ] (Array of top 3-5 dominant tones with intensity 0.0-1.0),
      "score": number (1-10 viral potential score),
      "improvement_tips": ["Tip 1", "Tip 2", "Tip 3"]
    }

    Do not include markdown code blocks. Just the raw JSON string.
"""

REMIX_PROMPT = """
    You are a viral scriptwriter. Rely on the following deconstruction of a viral video:

    ORIGINAL STRUCTURE:
    - HOOK: {hook}
    - RETENTION: {retention}
    - PAYOFF: {payoff}
    - TONE SUMMARY: {sentiment}
    - TOP TONES: {tone_labels}

    TASK: Write a NEW script for a DIFFERENT niche, but keeping the EXACT SAME structural beats and pacing.

    NEW VARIABLES:
    - NICHE: {niche}
    - PRODUCT/TOPIC: {product}
    - AUDIENCE: {audience}
    - DESIRED TONE: {tone}

    OUTPUT FORMAT:
    Return ONLY the script in a clear, readable format with [Scene directions] in brackets.
"""

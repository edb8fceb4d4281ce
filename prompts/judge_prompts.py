"""Judge instructions and rubric prompts for the LLM-scored quality checks.

Each rubric asks for **structured JSON** matching a schema in
``schemas.verdict`` so the scorers can reduce the reply deterministically.
Templates are filled with ``str.format``; literal braces are doubled.
"""

# ── Accuracy ───────────────────────────────────────────────────────────

ACCURACY_JUDGE_INSTRUCTIONS = (
    "You are an expert editor. Compare a blog post summary against the original content. "
    "Check for factual errors, hallucinations, or claims not supported by the source text. "
    "Focus on technical accuracy and author attribution."
)

ACCURACY_PROMPT = """
Evaluate the following blog summary for accuracy based on the user request.
User Input: "{user_text}"
Assistant Summary: "{assistant_text}"

Tasks:
1) Check if the summary contains information NOT found in a typical technical blog context.
2) Verify if the tone remains professional.
3) Confirm if the summary addresses the specific parts of the blog the user asked about.

Return JSON with fields:
{{
  "hasHallucinations": boolean,
  "factuallyAccurate": boolean,
  "coveredKeyPoints": boolean,
  "explanation": string
}}
"""

# ── Summarization quality ──────────────────────────────────────────────

SUMMARIZATION_JUDGE_INSTRUCTIONS = (
    "You are a technical content strategist. Your goal is to determine if a summary captures "
    'the "Core Thesis" and "Key Technical Takeaways" of an article. A good summary explains '
    'the "Why" and "How" of the topic, not just the "What".'
)

SUMMARIZATION_PROMPT = """
Evaluate the following blog summary for content quality.
User Input: "{user_text}"
Assistant Summary: "{assistant_text}"

Tasks:
1) Does the summary identify the main problem the blog post is solving?
2) Is the technical depth appropriate for a summary?
3) Rate how well the summary aligns with the user's request on a scale of 0 to 1.

Return JSON with fields:
{{
  "capturedCoreThesis": boolean,
  "technicalDepthAdequate": boolean,
  "alignmentScore": number,
  "explanation": string
}}
"""

# ── Conciseness ────────────────────────────────────────────────────────

CONCISENESS_JUDGE_INSTRUCTIONS = (
    "You are a minimalist editor. You value information density. "
    "Check if the summary uses unnecessary filler words, repetitive phrasing, "
    "or provides excessive detail that belongs in the full article rather than a summary."
)

CONCISENESS_PROMPT = """
Analyze the following summary for conciseness.
Assistant Summary: "{assistant_text}"

Tasks:
1) Look for "filler" phrases (e.g., "It is important to note that", "In the realm of").
2) Check if the same point is made more than once.
3) Rate the efficiency (information per word) from 0 to 1.

Return JSON with fields:
{{
  "containsFiller": boolean,
  "isRepetitive": boolean,
  "efficiencyScore": number,
  "explanation": string
}}
"""

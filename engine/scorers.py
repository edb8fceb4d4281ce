"""Quality scorers for blog summary runs.

Judge scorers ask a second model to fill a rubric; their score and reason
functions are deterministic and never call the LLM.  The tool-call and
completeness scorers are plain code.
"""

from __future__ import annotations

import re

from engine.agent import BLOG_TOOL_NAME
from engine.judge import JudgeScorer, Scorer
from engine.run_utils import (
    extract_tool_names,
    get_assistant_message_from_run_output,
    get_user_message_from_run_input,
)
from prompts.judge_prompts import (
    ACCURACY_JUDGE_INSTRUCTIONS,
    ACCURACY_PROMPT,
    CONCISENESS_JUDGE_INSTRUCTIONS,
    CONCISENESS_PROMPT,
    SUMMARIZATION_JUDGE_INSTRUCTIONS,
    SUMMARIZATION_PROMPT,
)
from schemas.response import AgentRun, ScoreRecord
from schemas.verdict import AccuracyVerdict, ConcisenessVerdict, SummarizationVerdict


# ── Judge scorers ──────────────────────────────────────────────────────

class AccuracyScorer(JudgeScorer):
    """Factual consistency of the summary with the retrieved post.

    Scoring
    -------
      hallucinations              → 0
      accurate + key points       → 1
      accurate only               → 0.7
      otherwise                   → 0.3
    """

    id = "blog-summary-accuracy-scorer"
    name = "Summary Accuracy"
    description = "Evaluates if the summary is factually consistent with the retrieved Hashnode blog content"
    instructions = ACCURACY_JUDGE_INSTRUCTIONS
    prompt_template = ACCURACY_PROMPT
    verdict_model = AccuracyVerdict

    def generate_score(self, verdict: AccuracyVerdict) -> float:
        if verdict.hasHallucinations:
            return 0.0
        if verdict.factuallyAccurate and verdict.coveredKeyPoints:
            return 1.0
        if verdict.factuallyAccurate:
            return 0.7
        return 0.3

    def generate_reason(self, verdict: AccuracyVerdict, score: float) -> str:
        return (
            f"Accuracy scoring: Accurate={verdict.factuallyAccurate}, "
            f"Points Covered={verdict.coveredKeyPoints}. Score={score:g}. {verdict.explanation}"
        )


class SummarizationScorer(JudgeScorer):
    """Whether the summary captures the thesis and technical value of the post.

    Scoring: 0.4 × thesis captured + 0.3 × depth adequate + 0.3 × alignmentScore
    """

    id = "blog-summarization-quality-scorer"
    name = "Summarization Quality"
    description = "Evaluates if the summary captures the main thesis and technical value of the post."
    instructions = SUMMARIZATION_JUDGE_INSTRUCTIONS
    prompt_template = SUMMARIZATION_PROMPT
    verdict_model = SummarizationVerdict

    def generate_score(self, verdict: SummarizationVerdict) -> float:
        thesis_weight = 0.4 if verdict.capturedCoreThesis else 0.0
        depth_weight = 0.3 if verdict.technicalDepthAdequate else 0.0
        return thesis_weight + depth_weight + verdict.alignmentScore * 0.3

    def generate_reason(self, verdict: SummarizationVerdict, score: float) -> str:
        return (
            f"Summarization scoring: Thesis={verdict.capturedCoreThesis}, "
            f"Depth={verdict.technicalDepthAdequate}. Score={score:g}. {verdict.explanation}"
        )


class ConcisenessScorer(JudgeScorer):
    """Brevity and information density of the summary.

    Scoring: efficiencyScore, −0.3 if repetitive, −0.2 if filler, floored at 0
    """

    id = "blog-conciseness-scorer"
    name = "Conciseness"
    description = "Evaluates the brevity and information density of the summary."
    instructions = CONCISENESS_JUDGE_INSTRUCTIONS
    prompt_template = CONCISENESS_PROMPT
    verdict_model = ConcisenessVerdict

    def preprocess(self, run: AgentRun) -> dict[str, str]:
        return {"assistant_text": get_assistant_message_from_run_output(run) or ""}

    def generate_score(self, verdict: ConcisenessVerdict) -> float:
        score = verdict.efficiencyScore
        if verdict.isRepetitive:
            score -= 0.3
        if verdict.containsFiller:
            score -= 0.2
        return max(0.0, score)

    def generate_reason(self, verdict: ConcisenessVerdict, score: float) -> str:
        return (
            f"Conciseness scoring: Filler={verdict.containsFiller}, "
            f"Repetitive={verdict.isRepetitive}. Score={score:g}. {verdict.explanation}"
        )


# ── Code scorers ───────────────────────────────────────────────────────

class ToolCallAccuracyScorer(Scorer):
    """1 if the expected tool was called, else 0.

    In strict mode the expected tool must be the only call, made exactly once.
    """

    id = "tool-call-accuracy-scorer"
    name = "Tool Call Appropriateness"
    description = "Checks that the agent fetched the post with the blog tool."

    def __init__(self, expected_tool: str = BLOG_TOOL_NAME, *, strict_mode: bool = False) -> None:
        self.expected_tool = expected_tool
        self.strict_mode = strict_mode

    def score_tools(self, tool_names: list[str]) -> ScoreRecord:
        called = self.expected_tool in tool_names
        if self.strict_mode:
            correct = tool_names == [self.expected_tool]
        else:
            correct = called

        if not tool_names:
            reason = f"No tools were called; expected '{self.expected_tool}'."
        elif correct:
            reason = f"Expected tool '{self.expected_tool}' was called."
        elif called:
            reason = f"Strict mode expects exactly one call to '{self.expected_tool}'; got {tool_names}."
        else:
            reason = f"Expected tool '{self.expected_tool}' was not called; got {tool_names}."
        return ScoreRecord(scorer_id=self.id, score=1.0 if correct else 0.0, explanation=reason)

    async def run(self, run: AgentRun) -> ScoreRecord:
        return self.score_tools(extract_tool_names(run))


_STOPWORDS: frozenset[str] = frozenset(
    """
    a about above after again all also am an and any are as at be because been before being below
    between both but by can could did do does doing down during each few for from further had has
    have having he her here hers him his how i if in into is it its itself just me more most my no
    nor not now of off on once only or other our ours out over own please same she should so some
    such than that the their theirs them then there these they this those through to too under
    until up very was we were what when where which while who whom why will with would you your
    yours give get tell want need make let explain describe compare summarize summary summarise post
    blog article read
    """.split()
)

_TERM_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9+#.-]*[A-Za-z0-9+#]|[A-Za-z0-9]")

_MIN_STEM = 4


def _tokens(text: str) -> list[str]:
    return [token.lower() for token in _TERM_RE.findall(text)]


def _key_terms(text: str) -> list[str]:
    """Content words of *text*, lowercased, in first-seen order.

    Words shorter than three letters are dropped unless written as an
    all-caps acronym ("AI", "ML").
    """
    seen: dict[str, None] = {}
    for raw in _TERM_RE.findall(text):
        term = raw.lower()
        if term in _STOPWORDS:
            continue
        if len(term) < 3 and not (len(raw) == 2 and raw.isupper()):
            continue
        seen.setdefault(term, None)
    return list(seen)


def _covered(term: str, reply_terms: set[str]) -> bool:
    if term in reply_terms:
        return True
    return len(term) >= _MIN_STEM and any(h.startswith(term) for h in reply_terms)


class CompletenessScorer(Scorer):
    """Share of the request's key terms that the final reply mentions.

    A term counts as covered when the reply contains it or an inflection of
    it (a reply word that starts with the term).  A request without key terms
    scores 1.
    """

    id = "completeness-scorer"
    name = "Completeness"
    description = "Checks that the response covers the elements of the user request."

    def score_texts(self, user_text: str, assistant_text: str) -> ScoreRecord:
        wanted = _key_terms(user_text)
        if not wanted:
            return ScoreRecord(scorer_id=self.id, score=1.0, explanation="The request has no key terms to cover.")

        have = set(_tokens(assistant_text))
        missing = [term for term in wanted if not _covered(term, have)]
        covered = len(wanted) - len(missing)
        score = covered / len(wanted)

        reason = f"Completeness: covered {covered} of {len(wanted)} key term(s)."
        if missing:
            reason += f" Missing: {', '.join(missing[:10])}."
        return ScoreRecord(scorer_id=self.id, score=score, explanation=reason)

    async def run(self, run: AgentRun) -> ScoreRecord:
        return self.score_texts(
            get_user_message_from_run_input(run),
            get_assistant_message_from_run_output(run),
        )


# ── Registry ───────────────────────────────────────────────────────────

def default_scorers() -> dict[str, Scorer]:
    scorers: list[Scorer] = [
        ToolCallAccuracyScorer(),
        CompletenessScorer(),
        AccuracyScorer(),
        SummarizationScorer(),
        ConcisenessScorer(),
    ]
    return {s.id: s for s in scorers}


# Scorers attached to the agent itself; every agent reply is graded by these.
AGENT_SCORER_IDS: tuple[str, ...] = (
    AccuracyScorer.id,
    SummarizationScorer.id,
    ConcisenessScorer.id,
)

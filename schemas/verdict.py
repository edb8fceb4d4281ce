"""Structured replies expected from the judge model, one schema per scorer.

Field names are the camelCase keys the judge prompts ask for.  Validation is
strict about shape so an unusable reply fails the scorer instead of scoring
as if every field were false.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat


class _Verdict(BaseModel):
    model_config = ConfigDict(extra="ignore")

    explanation: str


class AccuracyVerdict(_Verdict):
    hasHallucinations: StrictBool
    factuallyAccurate: StrictBool
    coveredKeyPoints: StrictBool


class SummarizationVerdict(_Verdict):
    capturedCoreThesis: StrictBool
    technicalDepthAdequate: StrictBool
    alignmentScore: StrictFloat = Field(ge=0.0, le=1.0)


class ConcisenessVerdict(_Verdict):
    containsFiller: StrictBool
    isRepetitive: StrictBool
    efficiencyScore: StrictFloat = Field(ge=0.0, le=1.0)

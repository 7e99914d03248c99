from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ghost_jobs.services.scoring.assembler import AnalysisResult, DetectedFacts, SignalFlag


class AnalyzeRequest(BaseModel):
    url: Optional[str] = None
    job_description: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("jobDescription", "description", "job_description"),
    )


class SignalFlagModel(BaseModel):
    result: bool
    delay: int
    info: Optional[str] = None

    @classmethod
    def from_flag(cls, flag: SignalFlag) -> "SignalFlagModel":
        return cls(result=flag.result, delay=flag.delay, info=flag.info)


class DetectedFactsModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    posting_age: Optional[str] = Field(None, alias="postingAge")
    employer_source: Optional[str] = Field(None, alias="employerSource")
    canonical_job_id: Optional[str] = Field(None, alias="canonicalJobId")

    @classmethod
    def from_facts(cls, facts: DetectedFacts) -> "DetectedFactsModel":
        return cls(
            posting_age=facts.posting_age,
            employer_source=facts.employer_source,
            canonical_job_id=facts.canonical_job_id,
        )


class SignalsModel(BaseModel):
    stale: SignalFlagModel
    weak: SignalFlagModel
    inactivity: SignalFlagModel


class AnalysisResponse(BaseModel):
    score: int = Field(..., ge=5, le=95)
    detected: DetectedFactsModel
    signals: SignalsModel

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalysisResponse":
        return cls(
            score=result.score,
            detected=DetectedFactsModel.from_facts(result.detected),
            signals=SignalsModel(
                stale=SignalFlagModel.from_flag(result.signals.stale),
                weak=SignalFlagModel.from_flag(result.signals.weak),
                inactivity=SignalFlagModel.from_flag(result.signals.inactivity),
            ),
        )


class ErrorResponse(BaseModel):
    error: str

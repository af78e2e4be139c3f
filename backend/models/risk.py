"""Pydantic model for the heuristic dispute-risk assessment."""

from typing import Literal

from pydantic import BaseModel, Field

RiskLevel = Literal["LOW", "MEDIUM", "HIGH"]


class RiskAssessment(BaseModel):
    score: int = 0
    level: RiskLevel = "LOW"
    reasons: list[str] = Field(default_factory=list)

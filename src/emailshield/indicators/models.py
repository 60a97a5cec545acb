"""Advisory indicator models.

These sit next to an ``AnalysisResult`` and never change its threat score.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# A link above this risk is listed as suspicious in reports.
SUSPICIOUS_LINK_ABOVE = 50


class LinkIndicator(BaseModel):
    url: str
    host: str = ""
    risk_score: int = Field(default=0, ge=0, le=100, alias="riskScore")
    indicators: list[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @property
    def suspicious(self) -> bool:
        return self.risk_score > SUSPICIOUS_LINK_ABOVE


class SenderIndicator(BaseModel):
    sender: str
    risk_score: int = Field(default=0, ge=0, le=100, alias="riskScore")
    indicators: list[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class AdvisoryIndicators(BaseModel):
    result_id: str = Field(alias="resultId")
    links: list[LinkIndicator] = Field(default_factory=list)
    sender: SenderIndicator

    model_config = ConfigDict(populate_by_name=True)

    @property
    def suspicious_links(self) -> list[LinkIndicator]:
        return [link for link in self.links if link.suspicious]

    def to_payload(self) -> dict[str, Any]:
        payload = self.model_dump(mode="json", by_alias=True)
        for item, link in zip(payload["links"], self.links):
            item["suspicious"] = link.suspicious
        return payload

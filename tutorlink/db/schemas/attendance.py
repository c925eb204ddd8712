from pydantic import BaseModel


class EvidenceRequest(BaseModel):
    evidence_url: str | None = None


class ComplaintRequest(BaseModel):
    evidence_url: str | None = None
    reason: str | None = None


class AttendanceResult(BaseModel):
    slot_id: int
    learner_join: bool
    tutor_join: bool

    class Config:
        from_attributes = True

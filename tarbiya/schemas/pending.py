from datetime import datetime
from typing import Any
from pydantic import BaseModel, ConfigDict
from .common import ORMModel
from .child import ChildUpdate

class ProposalIn(BaseModel):
    target_account_id: str
    child_id: str | None = None
    # validated against ProposalKind by the service so unknown kinds surface as InvalidInput
    action: str
    details: dict[str, Any] = {}

# Typed payloads, one per ProposalKind
class AddChildDetails(BaseModel):
    model_config = ConfigDict(extra="forbid")
    child_name: str | None = None
    message: str | None = None
class UpdateChildDetails(ChildUpdate):
    model_config = ConfigDict(extra="forbid")

class PendingOut(ORMModel):
    id: str
    proposer_id: str
    target_id: str
    child_id: str | None = None
    action: str
    details: dict[str, Any] = {}
    status: str
    created_at: datetime
    resolved_at: datetime | None = None

from pydantic import BaseModel
from .account import AccountPublicOut

class PairIn(BaseModel):
    invite_code: str
class UnpairIn(BaseModel):
    target_account_id: str
class PairOut(BaseModel):
    detail: str
    coparent: AccountPublicOut

from datetime import date
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field
from .common import ORMModel

# Neither model declares hashed_password: every account-shaped response goes through one of them.
class AccountPublicOut(ORMModel):
    id: str
    email: EmailStr
    name: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[str] = None
    photo_url: Optional[str] = None

class AccountOut(AccountPublicOut):
    invite_code: str
    is_profile_complete: bool
    is_premium: bool
    paired_account_ids: List[str] = []
    primary_paired_id: Optional[str] = None

class ProfileUpdate(BaseModel):
    name: str = Field(min_length=1)
    birth_date: date
    gender: str = Field(min_length=1)
    photo_url: Optional[str] = None

class PremiumUpdate(BaseModel):
    is_premium: bool

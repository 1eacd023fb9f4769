from datetime import datetime, timezone
def utcnow():
    return datetime.now(timezone.utc)
from .account import Account
from .pairing import AccountPairing
from .child import Child, ChildMember
from .note import Note, Comment
from .pending import PendingChange, PendingStatus, ProposalKind
from .activity import (
    PrayerLog, FastingLog, FastingStatus, QuranProgress, QuranStatus,
    QuranDailyLog, AqidahProgress, AkhlaqNote, ActivityLog, ActivityCategory,
)
from .task import ChildTask, TaskCompletion, TaskFrequency
from .auth import RefreshToken

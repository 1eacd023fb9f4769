from ..models.account import Account
from ..models.pairing import AccountPairing
from ..models.child import Child, ChildMember
from ..models.note import Note, Comment
from ..models.pending import PendingChange, PendingStatus, ProposalKind
from ..models.activity import PrayerLog, FastingLog, QuranProgress, QuranDailyLog, AqidahProgress, AkhlaqNote, ActivityLog
from ..models.task import ChildTask, TaskCompletion
from ..models.auth import RefreshToken
from ..db.base_class import Base

from fastapi import APIRouter
from . import auth, users, coparents, children, activity, tasks, notes, pending

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["Auth"])
router.include_router(users.router, prefix="/users", tags=["Users"])
router.include_router(coparents.router, prefix="/coparents", tags=["Co-parents"])
router.include_router(children.router, prefix="/children", tags=["Children"])
router.include_router(activity.router, prefix="/children", tags=["Activity"])
router.include_router(tasks.router, tags=["Tasks"])
router.include_router(notes.router, tags=["Notes"])
router.include_router(pending.router, prefix="/pending", tags=["Pending changes"])

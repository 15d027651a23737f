import hmac

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session

from hunt.core.db import get_db
from hunt.schemas.submission import ResetOut, SubmissionOut
from hunt.services.submission_store import SubmissionStore


def require_admin(request: Request, x_admin_secret: str | None = Header(default=None)) -> None:
    expected = request.app.state.settings.admin_secret
    if not x_admin_secret or not hmac.compare_digest(x_admin_secret.encode(), expected.encode()):
        raise HTTPException(401, "Unauthorized")


router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])

@router.get("/submissions", response_model=list[SubmissionOut])
def list_submissions(db: Session = Depends(get_db)):
    return SubmissionStore(db).list_all()

@router.post("/reset", response_model=ResetOut)
def reset_submissions(db: Session = Depends(get_db)):
    deleted = SubmissionStore(db).reset()
    return ResetOut(message="Database reset successful", deleted=deleted)

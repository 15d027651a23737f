from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from hunt.core.db import get_db
from hunt.schemas.submission import SubmissionIn, SubmissionResultOut
from hunt.services.qualification import QualificationEngine
from hunt.services.submission_store import SubmissionStore

router = APIRouter(tags=["submissions"])

@router.post("/submit", response_model=SubmissionResultOut)
def submit_answer(payload: SubmissionIn, request: Request, db: Session = Depends(get_db)):
    engine = QualificationEngine(request.app.state.settings, SubmissionStore(db))
    result = engine.submit(payload.team_id, payload.answer)
    body = SubmissionResultOut(outcome=result.outcome, message=result.message)
    return JSONResponse(body.model_dump(mode="json"), status_code=result.status_code)

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from ....application.collections import PortalRepository
from ....application.dto import NewResultInput
from ....application.use_cases.results import (
    IRemarksWriter, RecordResult, GenerateRemarks, progress_report, recent_results,
)
from ....domain.entities import STUDENT, User
from ..authz import get_current_user, require_staff, require_teacher
from ..deps import get_repository, get_remarks_writer
from ..schemas import ResultCreate, ResultOut, ProgressReportOut, RemarksReq, TextOut

router = APIRouter(prefix="/api/results", tags=["results"])
logger = structlog.get_logger()

@router.post("", response_model=ResultOut, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_teacher)])
def record_result(payload: ResultCreate, repo: PortalRepository = Depends(get_repository)):
    try:
        record = RecordResult(repo).execute(NewResultInput(**payload.model_dump()))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(404, str(e))
    logger.info("result_recorded", record_id=record.id, student_id=record.student_id)
    return record

@router.get("/recent", response_model=list[ResultOut], dependencies=[Depends(require_staff)])
def recent(repo: PortalRepository = Depends(get_repository)):
    return recent_results(repo)

@router.get("/students/{student_id}", response_model=ProgressReportOut)
def student_report(student_id: str,
                   user: User = Depends(get_current_user),
                   repo: PortalRepository = Depends(get_repository)):
    if user.role == STUDENT and user.id != student_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Report belongs to another student")
    return progress_report(repo, student_id)

@router.post("/remarks", response_model=TextOut, dependencies=[Depends(require_teacher)])
def draft_remarks(payload: RemarksReq,
                  repo: PortalRepository = Depends(get_repository),
                  writer: IRemarksWriter = Depends(get_remarks_writer)):
    try:
        text = GenerateRemarks(repo, writer).execute(
            payload.student_id, payload.subject, payload.score, payload.total, payload.term)
    except LookupError as e:
        raise HTTPException(404, str(e))
    return TextOut(text=text)

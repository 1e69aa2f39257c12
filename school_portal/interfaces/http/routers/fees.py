import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse

from ....application.collections import PortalRepository
from ....application.dto import NewFeeInput
from ....application.use_cases.fees import RecordFee, fees_for, receipt_context
from ....domain.entities import User
from ..authz import get_current_user, require_admin
from ..deps import get_repository
from ..receipts import render_receipt
from ..schemas import FeeCreate, FeeOut

router = APIRouter(prefix="/api/fees", tags=["fees"])
logger = structlog.get_logger()

@router.get("", response_model=list[FeeOut])
def list_fees(user: User = Depends(get_current_user),
              repo: PortalRepository = Depends(get_repository)):
    return fees_for(repo, user)

@router.post("", response_model=FeeOut, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
def record_fee(payload: FeeCreate, repo: PortalRepository = Depends(get_repository)):
    data = NewFeeInput(student_id=payload.student_id, amount=payload.amount,
                       status=payload.status, months=payload.months)
    try:
        fee = RecordFee(repo).execute(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(404, str(e))
    logger.info("fee_recorded", fee_id=fee.id, student_id=fee.student_id, receipt_id=fee.receipt_id)
    return fee

@router.get("/{fee_id}/receipt", response_class=HTMLResponse)
def fee_receipt(fee_id: str,
                user: User = Depends(get_current_user),
                repo: PortalRepository = Depends(get_repository)):
    try:
        fee, student = receipt_context(repo, user, fee_id)
    except LookupError as e:
        raise HTTPException(404, str(e))
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return HTMLResponse(render_receipt(fee, student, repo.config()))

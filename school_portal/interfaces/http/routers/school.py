from dataclasses import asdict

from fastapi import APIRouter, Depends

from ....application.collections import PortalRepository, CLASSES
from ....domain.entities import SchoolConfig
from ..authz import get_current_user, require_admin
from ..deps import get_repository
from ..schemas import ClassOut, SchoolConfigOut, SchoolConfigUpdate

router = APIRouter(prefix="/api/school", tags=["school"], dependencies=[Depends(get_current_user)])

@router.get("/classes", response_model=list[ClassOut])
def list_classes(repo: PortalRepository = Depends(get_repository)):
    return repo.read(CLASSES)

@router.get("/config", response_model=SchoolConfigOut)
def get_config(repo: PortalRepository = Depends(get_repository)):
    return repo.config()

@router.put("/config", response_model=SchoolConfigOut, dependencies=[Depends(require_admin)])
def update_config(payload: SchoolConfigUpdate, repo: PortalRepository = Depends(get_repository)):
    current = asdict(repo.config())
    current.update(payload.model_dump(exclude_none=True))
    config = SchoolConfig(**current)
    repo.save_config(config)
    return config

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dependencies.database import get_db
from dependencies.security import authorize
from models.modules import Module as ModuleModel
from schemas.modules import Module, ModuleCreate
from utils.exceptions import BadRequestError, ConflictError
from utils.rbac import ADMIN_ONLY, Authenticated

router = APIRouter(prefix="/modules", tags=["modules"])


# ✅ [READ] 모듈 목록 (로그인 사용자)
@router.get("")
def read_modules(user: dict = Depends(authorize(Authenticated())), db: Session = Depends(get_db)):
    modules = db.query(ModuleModel).order_by(ModuleModel.id).all()
    return {"success": True, "data": [Module.model_validate(m).to_json() for m in modules]}


# ✅ [CREATE] 모듈 등록 (admin 전용)
@router.post("", status_code=status.HTTP_201_CREATED)
def create_module(body: ModuleCreate, admin: dict = Depends(authorize(ADMIN_ONLY)), db: Session = Depends(get_db)):
    name = (body.name or "").strip()
    path = (body.path or "").strip()
    if not name or not path:
        raise BadRequestError("Missing fields")

    module = ModuleModel(name=name, path=path, icon=body.icon, description=body.description, is_active=body.is_active)
    db.add(module)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("A module with this name already exists.")
    db.refresh(module)
    return {"success": True, "data": Module.model_validate(module).to_json()}

from datetime import datetime
from typing import Optional

from schemas.common import CamelModel, ORMModel


class ModuleCreate(CamelModel):
    name: Optional[str] = None
    path: Optional[str] = None
    icon: Optional[str] = None
    description: Optional[str] = None
    is_active: bool = True


class Module(ORMModel):
    id: int
    name: str
    path: str
    icon: Optional[str] = None
    description: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

"""
기본 모듈 목록과 관리자 계정 생성 (이미 있으면 갱신)
사용법: python -m scripts.seed_auth
"""

import os

from database.db import create_database
from models.modules import Module as ModuleModel
from models.users import Permission as PermissionModel, User as UserModel
from utils.security import hash_password

MODULES = [
    {"name": "Dashboard", "path": "/", "icon": "LuLayoutDashboard", "description": "Overview dashboard"},
    {"name": "Students", "path": "/students", "icon": "LuUsers", "description": "Manage students"},
    {"name": "Teachers", "path": "/teachers", "icon": "LuUserCog", "description": "Manage teachers"},
    {"name": "Courses", "path": "/courses", "icon": "LuBookOpen", "description": "Manage courses"},
    {"name": "Attendance", "path": "/attendance", "icon": "LuCheck", "description": "Track attendance"},
    {"name": "Reports", "path": "/reports", "icon": "LuFileBarChart", "description": "Generate reports"},
    {"name": "Settings", "path": "/settings", "icon": "LuSettings", "description": "System settings"},
]

ADMIN_USERNAME = os.getenv("SEED_ADMIN_USERNAME", "admin")
ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@school.local")
ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "Admin@123")


def seed_auth():
    database = create_database()
    if database is None:
        raise SystemExit("[seed-auth] DATABASE_URL missing in .env")

    with database.session() as db:
        for entry in MODULES:
            module = db.query(ModuleModel).filter(ModuleModel.name == entry["name"]).one_or_none()
            if module is None:
                db.add(ModuleModel(**entry))
            else:
                for key, value in entry.items():
                    setattr(module, key, value)
        db.commit()
        print(f"✅ 모듈 {len(MODULES)}개 등록 완료")

        admin = (
            db.query(UserModel)
            .filter((UserModel.username == ADMIN_USERNAME) | (UserModel.email == ADMIN_EMAIL))
            .one_or_none()
        )
        if admin is None:
            admin = UserModel(
                username=ADMIN_USERNAME,
                email=ADMIN_EMAIL,
                password_hash=hash_password(ADMIN_PASSWORD),
                role="admin",
                is_active=True,
            )
            db.add(admin)
            print(f"✅ 관리자 계정 생성: {ADMIN_USERNAME} / {ADMIN_PASSWORD}")
        else:
            admin.role = "admin"
            admin.is_active = True
            print(f"✅ 기존 관리자 계정 확인: {admin.username}")

        admin.permissions.clear()
        db.flush()
        admin.permissions.extend(
            PermissionModel(module=entry["name"], can_view=True, can_edit=True, can_delete=True)
            for entry in MODULES
        )
        db.commit()

    database.dispose()


if __name__ == "__main__":
    seed_auth()

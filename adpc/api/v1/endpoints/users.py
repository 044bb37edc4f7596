# adpc/api/v1/endpoints/users.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from adpc.api.deps.api_key import require_api_key
from adpc.db.session import get_db
from adpc.schemas.users import UserIn, UserOut
from adpc.services.users import upsert_user

router = APIRouter(tags=["users"], dependencies=[Depends(require_api_key)])


@router.post("/users", response_model=UserOut)
def upsert(payload: UserIn, request: Request, db: Session = Depends(get_db)):
    request.state.audit_body = payload.model_dump(mode="json")
    user = upsert_user(db, email=payload.email, name=payload.name)
    return UserOut.model_validate(user)

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from booking.auth import jwt_handler
from booking.database import SessionLocal
from booking.models.user import User

security = HTTPBearer()


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> int:
    """Resolve the acting user's id from the bearer token."""
    token = credentials.credentials
    try:
        payload = jwt_handler.decode_access_token(token)
    except jwt.PyJWTError as exc:
        raise HTTPException(status_code=401, detail="Invalid token") from exc

    subject = payload.get("sub")
    if not subject or not str(subject).isdigit():
        raise HTTPException(status_code=401, detail="Invalid token subject")

    db = SessionLocal()
    try:
        user_id = db.query(User.id).filter(User.id == int(subject)).scalar()
    finally:
        db.close()
    if user_id is None:
        raise HTTPException(status_code=401, detail="User not found")
    return user_id

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from inventory_api.db import get_db
from inventory_api.schemas.auth_schema import AuthResponse, LoginRequest
from inventory_api.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=AuthResponse, summary="Log in and get a bearer token")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    return AuthService(db).login(payload.username, payload.password)


@router.post("/validate", response_model=bool, summary="Check a token's signature and expiry")
def validate(token: str = Body(...), db: Session = Depends(get_db)):
    """
    payload: the token as a JSON string, e.g. "eyJhbGciOi..."
    returns true or false; failures are never reported as errors
    """
    return AuthService(db).validate_token(token)

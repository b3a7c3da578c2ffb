import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.dependencies import SESSION_COOKIE, SESSION_MAX_AGE, app_password, create_session_token
from app.schemas import SUCCESS, LoginRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/login")
def login(body: LoginRequest):
    if body.password and body.password == app_password():
        resp = JSONResponse(SUCCESS)
        resp.set_cookie(
            SESSION_COOKIE,
            create_session_token(),
            httponly=True,
            samesite="lax",
            max_age=SESSION_MAX_AGE,
        )
        return resp
    logger.warning("Rejected login attempt")
    return JSONResponse({"detail": "Invalid password"}, status_code=401)


@router.post("/logout")
def logout():
    resp = JSONResponse(SUCCESS)
    resp.delete_cookie(SESSION_COOKIE)
    return resp

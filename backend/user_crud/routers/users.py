# user_crud/routers/users.py
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from user_crud.db.session import get_db
from user_crud.schemas.common import ErrorBody, error_response
from user_crud.schemas.user import UserCreate, UserOut, UserUpdate
from user_crud.services import users as users_service
from user_crud.services.errors import DatabaseUnavailable, EmailAlreadyExists, UserNotFound

router = APIRouter(prefix="/users", tags=["users"])

# users.id is a 4-byte INTEGER; any value in range is looked up, misses are 404
INT4_MIN = -2_147_483_648
INT4_MAX = 2_147_483_647

UserId = Annotated[int, Path(ge=INT4_MIN, le=INT4_MAX)]

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorBody},
    status.HTTP_404_NOT_FOUND: {"model": ErrorBody},
    status.HTTP_409_CONFLICT: {"model": ErrorBody},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorBody},
}


def _fail(request: Request, code: str, message: str, status_code: int) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    return error_response(code, message, status_code, request_id=request_id)


def _not_found(request: Request, user_id: int) -> JSONResponse:
    return _fail(request, "NOT_FOUND", f"User {user_id} not found", status.HTTP_404_NOT_FOUND)


def _email_taken(request: Request) -> JSONResponse:
    return _fail(request, "EMAIL_TAKEN", "A user with this email already exists", status.HTTP_409_CONFLICT)


def _unavailable(request: Request) -> JSONResponse:
    # detail stays in the server log
    return _fail(request, "INTERNAL_ERROR", "Internal Server Error", status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED, responses=_ERROR_RESPONSES)
def create_user(body: UserCreate, request: Request, db: Session = Depends(get_db)):
    try:
        user = users_service.create_user(db, body)
    except EmailAlreadyExists:
        return _email_taken(request)
    except DatabaseUnavailable:
        return _unavailable(request)
    return UserOut.model_validate(user)


@router.get("/{user_id}", response_model=UserOut, responses=_ERROR_RESPONSES)
def get_user(user_id: UserId, request: Request, db: Session = Depends(get_db)):
    try:
        user = users_service.get_user(db, user_id)
    except UserNotFound:
        return _not_found(request, user_id)
    except DatabaseUnavailable:
        return _unavailable(request)
    return UserOut.model_validate(user)


@router.put("/{user_id}", response_model=UserOut, responses=_ERROR_RESPONSES)
def update_user(user_id: UserId, body: UserUpdate, request: Request, db: Session = Depends(get_db)):
    try:
        user = users_service.update_user(db, user_id, body)
    except UserNotFound:
        return _not_found(request, user_id)
    except EmailAlreadyExists:
        return _email_taken(request)
    except DatabaseUnavailable:
        return _unavailable(request)
    return UserOut.model_validate(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERROR_RESPONSES,
)
def delete_user(user_id: UserId, request: Request, db: Session = Depends(get_db)):
    try:
        users_service.delete_user(db, user_id)
    except UserNotFound:
        return _not_found(request, user_id)
    except DatabaseUnavailable:
        return _unavailable(request)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

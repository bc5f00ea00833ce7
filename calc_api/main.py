# calc_api/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import Engine
from sqlalchemy.orm import Session

from . import repository
from .bootstrap import init_schema, reset_transactions
from .config import settings
from .database import build_engine, build_session_factory
from .errors import AppError, NotFoundError, ValidationError, GENERIC_FAILURE
from .logger import configure_logging
from .schemas import (
    Message,
    TransactionCreate,
    TransactionList,
    TransactionRead,
    UserCreate,
    UserCreated,
    UserEnvelope,
    UserRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/app")

# Dependency function for engine
def get_engine(request: Request):
    yield request.app.state.engine

# Dependency function for database session
def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def _require_user_id(db: Session, user_uuid: str) -> int:
    user_id = repository.resolve_user_id(db, user_uuid)
    if user_id is None:
        raise NotFoundError()
    return user_id


@router.post("/user", response_model=UserCreated)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    """
    Registers a new user and returns its public uuid.
    - **os**: either `ios` or `android`
    """
    user = repository.create_user(db, payload.os.value)
    return {"user": {"uuid": user.uuid}}

@router.get("/user/{userUUID}", response_model=UserEnvelope)
def get_user(userUUID: str, db: Session = Depends(get_db)):
    user = repository.get_user_by_uuid(db, userUUID)
    if user is None:
        raise NotFoundError()
    return UserEnvelope(user=UserRead.model_validate(user))

@router.post("/user/{uid}/transaction")
def append_transaction(uid: str, payload: TransactionCreate, db: Session = Depends(get_db)):
    """
    Appends one calculation to the user's transaction log.
    Identical submissions are stored as separate rows.
    """
    user_id = _require_user_id(db, uid)
    repository.add_transaction(db, user_id, payload.calculation)
    return {}

@router.get("/user/{uid}/transaction", response_model=TransactionList)
def list_transactions(uid: str, db: Session = Depends(get_db)):
    user_id = _require_user_id(db, uid)
    transactions = repository.list_transactions(db, user_id)
    return TransactionList(
        transactions=[TransactionRead.model_validate(t) for t in transactions]
    )

@router.delete(
    "/user/{uid}/transaction",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_transactions(uid: str, db: Session = Depends(get_db)):
    user_id = _require_user_id(db, uid)
    deleted = repository.delete_transactions(db, user_id)
    logger.debug("Deleted %s transactions for user %s", deleted, uid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/reset", response_model=Message)
def reset(engine: Engine = Depends(get_engine)):
    """
    Drops and recreates the transactions table. Every transaction is lost;
    users are kept. Meant for development and test environments.
    """
    reset_transactions(engine)
    return {"message": "Database reset successfully"}


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected body for %s %s: %s", request.method, request.url.path, exc.errors())
    return await app_error_handler(request, ValidationError())

async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": GENERIC_FAILURE},
    )


def create_app(engine: Optional[Engine] = None) -> FastAPI:
    """
    Builds the API around an engine.

    Args:
        engine: store to serve from; one is built from settings when omitted
                and disposed again on shutdown.
    """
    configure_logging()

    owns_engine = engine is None
    if owns_engine:
        engine = build_engine()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_schema(app.state.engine)
        try:
            yield
        finally:
            if owns_engine:
                app.state.engine.dispose()

    app = FastAPI(
        title="Calculation Transaction API",
        description="API for registering users and keeping their calculation log.",
        lifespan=lifespan,
    )
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # This is the route for the root URL "/"
    @app.get("/")
    def read_root():
        return {"message": "Welcome to the Calculation Transaction API"}

    app.include_router(router)
    return app


app = create_app()


def run():
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)

if __name__ == "__main__":
    run()

from contextlib import asynccontextmanager
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from db import connect
from errors import InvalidArgument, NotFound, StartupFailure, StoreFailure
from logging_config import setup_logging
from models import InsertAck, User
from repo_users import UserRepo
from service_users import UserService
from settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users")


def get_service(request: Request) -> UserService:
    return request.app.state.service


def error_response(status_code: int, message: str) -> Response:
    """Build the `{"ERROR": message}` reply used by every failure path.

    A 304 may not carry a body, so the message moves to a header there.
    """

    if status_code == 304:
        return Response(status_code=304, headers={"X-Error": message})
    return JSONResponse({"ERROR": message}, status_code=status_code)


def store_failure(e: StoreFailure) -> Response:
    logger.error("Store call failed: %s", e.message)
    return error_response(500, e.message)


@router.get("/{size}", response_model=List[User])
def list_users(size: str, svc: UserService = Depends(get_service)):
    try:
        return svc.list_users(size)
    except InvalidArgument as e:
        # Bad sizes are answered with the bare message, not an ERROR object.
        return JSONResponse(e.message, status_code=400)
    except StoreFailure as e:
        return store_failure(e)


@router.post("/add", response_model=InsertAck)
def insert_user(user: User, svc: UserService = Depends(get_service)):
    try:
        return svc.insert_user(user)
    except StoreFailure as e:
        return store_failure(e)


@router.delete("/{uid}/delete", response_model=User)
def delete_user(uid: str, svc: UserService = Depends(get_service)):
    try:
        return svc.delete_user(uid)
    except NotFound as e:
        return error_response(settings.not_found_status, e.message)
    except StoreFailure as e:
        return store_failure(e)


@router.put("/{uid}/update", response_model=User)
def update_user(uid: str, user: User, svc: UserService = Depends(get_service)):
    try:
        return svc.update_user(uid, user)
    except NotFound as e:
        return error_response(settings.not_found_status, e.message)
    except StoreFailure as e:
        return store_failure(e)


async def invalid_body(request: Request, exc: RequestValidationError) -> Response:
    """Report unparseable or mistyped bodies as 400 instead of FastAPI's 422."""

    message = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return error_response(400, message)


def create_app(service: Optional[UserService] = None) -> FastAPI:
    """Assemble the application.

    When `service` is given it is used as-is and nothing connects to
    MongoDB, which is how the tests run the HTTP surface. Otherwise the
    lifespan connects at startup; a failed connect or ping aborts startup.
    """

    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.service is None
        if owned:
            try:
                app.state.service = UserService(UserRepo(connect(settings)))
            except StartupFailure as e:
                logger.critical("Cannot start without MongoDB: %s", e.message)
                raise
        yield
        if owned:
            app.state.service.close()
            app.state.service = None
            logger.info("MongoDB connection closed")

    app = FastAPI(title="Users Service", lifespan=lifespan)
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "PUT", "POST", "DELETE"],
        allow_headers=["Origin", "Authorization", "Content-Type"],
        allow_credentials=False,
        max_age=50,
    )
    app.add_exception_handler(RequestValidationError, invalid_body)
    app.include_router(router)
    return app


app = create_app()

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .db import init_db
from .dependencies import get_user_service
from .envelope import failure, from_error, to_json
from .errors import ApplicationCode, ServiceError
from .routes import category, inventory
from .schemas import ErrorDetail, RestResponse, SignInRequest, SignInResponse, SignUpRequest
from .services.user_service import UserService
from .utils.event_logger import log_auth_event

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Create tables and seed roles on startup"""
    init_db()
    yield


def _validation_details(exc: RequestValidationError) -> list:
    details = []
    for error in exc.errors():
        # loc is ("body", "firstName"), ("query", "page") or just ("body",)
        loc = [str(part) for part in error.get("loc", ())[1:]]
        details.append(ErrorDetail(field=".".join(loc) or None, message=error.get("msg", "Invalid value")))
    return details


def create_app() -> FastAPI:
    app = FastAPI(title="KoopOS Service", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ServiceError)
    async def handle_service_error(_, exc: ServiceError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=to_json(from_error(exc)))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = _validation_details(exc)
        logger.info("Rejected %s %s: %s", request.method, request.url.path, [d.message for d in details])
        envelope = failure(ApplicationCode.VALIDATION_ERROR, details)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=to_json(envelope))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        envelope = failure(ApplicationCode.INTERNAL_ERROR)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=to_json(envelope))

    @app.post("/users/signup", response_model=RestResponse, response_model_exclude_none=True)
    def signup(payload: SignUpRequest, request: Request, service: UserService = Depends(get_user_service)):
        response = service.create_user(payload)
        log_auth_event("registration", payload.username, request)
        return response

    @app.post("/users/signin", response_model=RestResponse[SignInResponse], response_model_exclude_none=True)
    def signin(payload: SignInRequest, request: Request, service: UserService = Depends(get_user_service)):
        principal = payload.username or payload.email
        try:
            response = service.sign_in(payload)
        except ServiceError:
            log_auth_event("login_failure", principal, request)
            raise
        log_auth_event("login_success", principal, request)
        return response

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(category.router)
    app.include_router(inventory.router)

    return app


app = create_app()

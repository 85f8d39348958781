import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .config import settings
from .database import init_db
from .routers import budgets as budgets_router
from .routers import planner as planner_router


logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    missing = []
    problems = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        name = ".".join(loc) or "body"
        if error.get("type") == "missing":
            missing.append(name)
        else:
            problems.append(f"{name}: {error.get('msg')}")

    if missing:
        return "Missing required fields: " + ", ".join(missing)
    return "Invalid request: " + "; ".join(problems)


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Budget App – Backend", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        detail = _describe_validation_error(exc)
        logger.info("Rejected %s %s: %s", request.method, request.url.path, detail)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})

    @app.on_event("startup")
    def on_startup():
        init_db()
        logger.info("Budget API ready (environment=%s)", settings.environment)

    @app.get("/")
    def root():
        return {"message": "Welcome to the BudgetApp API. Access API endpoints starting with /api/"}

    @app.get("/api/status")
    def api_status():
        return {"status": "ok", "message": "BudgetApp API is running!"}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(budgets_router.router)
    app.include_router(planner_router.router)

    return app


app = create_app()

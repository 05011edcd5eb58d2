# api/main.py
"""
Employee Records API.

Run with:  uvicorn api.main:app --reload
       or:  python -m api.main
"""

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.auth import router as auth_router
from api.employees import router as employees_router
from migration.common.config import settings
from migration.common.exceptions import ConnectivityError

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

DESCRIPTION = """
Authenticated access to the employee records migrated from the legacy
SQL Server database.

- **Auth**: cookie login, logout and status check
- **Employees**: list (filter, search, sort, paginate), create, read, update, delete
"""


def create_app() -> FastAPI:
    application = FastAPI(
        title="Employee Records API",
        description=DESCRIPTION,
        version=API_VERSION,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )
    application.include_router(auth_router)
    application.include_router(employees_router)

    @application.exception_handler(ConnectivityError)
    async def database_unavailable(request: Request, exc: ConnectivityError):
        logger.error(f"{request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=503, content={"detail": "Database unavailable"})

    return application


app = create_app()


@app.get("/", tags=["Health"])
def root():
    """Liveness probe."""
    return {"status": "healthy", "message": "Employee Records API is running", "docs": "/docs"}


@app.get("/health", tags=["Health"])
def health_check():
    """Version and route overview."""
    return {
        "status": "healthy",
        "version": API_VERSION,
        "endpoints": {
            "auth": auth_router.prefix,
            "employees": employees_router.prefix,
            "docs": app.docs_url,
        },
    }


if __name__ == "__main__":
    uvicorn.run("api.main:app", host="0.0.0.0", port=8000, reload=settings.ENVIRONMENT == "development")

# repairshop/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from repairshop.core.config import get_settings
from repairshop.core.database import init_db
from repairshop.core.errors import RepairShopError
from repairshop.core.logging_config import configure_logging
from repairshop.dashboard.routes import router as dashboard_router
from repairshop.receipt.routes import router as receipt_router
from repairshop.ticket.routes import router as ticket_router

settings = get_settings()
configure_logging(settings.LOG_LEVEL)

init_db()

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESC,
    version=settings.APP_VERSION,
)

origins = settings.cors_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    # browsers reject credentials with a wildcard origin
    allow_credentials="*" not in origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RepairShopError)
async def repairshop_error_handler(request: Request, exc: RepairShopError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# Routers
app.include_router(ticket_router)
app.include_router(receipt_router)
app.include_router(dashboard_router)

@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}

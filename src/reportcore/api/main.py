import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from reportcore.api.dashboards import router as dashboards_router
from reportcore.api.metrics import router as metrics_router
from reportcore.api.reports import router as reports_router
from reportcore.api.schedules import router as schedules_router
from reportcore.container import Container

logger = logging.getLogger("reportcore.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = Container()
    app.state.container = container
    yield
    engine = container.engine()
    await engine.dispose()


app = FastAPI(title="reportcore", version="0.1.0", lifespan=lifespan)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    logger.error("Unhandled error on %s %s:\n%s", request.method, request.url.path, "".join(tb))
    return JSONResponse(status_code=500, content={"detail": str(exc)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(reports_router)
app.include_router(dashboards_router)
app.include_router(metrics_router)
app.include_router(schedules_router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}

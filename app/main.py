import os
import asyncio
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from account.adapter.input.web.account_router import account_router
from tracking.adapter.input.web.impact_router import impact_router
from tracking.adapter.input.web.snapshot_router import snapshot_router
from app.batch.snapshot_batch import start_snapshot_scheduler
from config.database.session import init_db_schema
from config.logging_config import setup_logging

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Creates the schema and runs the daily snapshot scheduler for the lifetime of the app.
    """
    setup_logging()
    init_db_schema()
    app.state.snapshot_task = asyncio.create_task(start_snapshot_scheduler())
    try:
        yield
    finally:
        task = getattr(app.state, "snapshot_task", None)
        if task:
            task.cancel()


app = FastAPI(title="Playlist Impact Tracker", version="0.1.0", lifespan=lifespan)

origins_env = os.getenv("CORS_ORIGINS")
origins = [origin for origin in origins_env.split(",") if origin] if origins_env else ["http://localhost:5173"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(account_router, prefix="/accounts")
app.include_router(snapshot_router, prefix="/snapshots")
app.include_router(impact_router, prefix="/impact")


@app.get("/health")
def health_check() -> dict[str, str]:
    """
    Liveness check.
    """
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    host = os.getenv("APP_HOST", "0.0.0.0")
    port = int(os.getenv("APP_PORT", "8000"))
    uvicorn.run(app, host=host, port=port)

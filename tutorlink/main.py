from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .api.routes import booking_slots, misc
from .config import get_settings
from .workers.scheduler import get_scheduler


app = FastAPI(title="TutorLink Booking API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(booking_slots.router, prefix="/api/v1")
app.include_router(misc.router, prefix="/api/v1")

scheduler = get_scheduler()


@app.on_event("startup")
async def startup_event() -> None:
    if get_settings().scheduler_enabled:
        scheduler.start()


@app.on_event("shutdown")
async def shutdown_event() -> None:
    if scheduler.running:
        scheduler.shutdown(wait=False)

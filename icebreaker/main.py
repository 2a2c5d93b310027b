from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes.icebreakers import router as icebreaker_router

app = FastAPI(title="Icebreaker engine")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(icebreaker_router)

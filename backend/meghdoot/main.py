from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import router as api_router
from .config import CORS_ORIGINS

app = FastAPI(title="Meghdoot - Flood Early Warning API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)
app.include_router(api_router)

@app.get("/")
def root():
    return {"status": "meghdoot backend running"}

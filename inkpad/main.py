import os
import logging
from fastapi import FastAPI
from .pad.api import router as pad_router

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Inkpad")
app.include_router(pad_router)


@app.get("/health")
def health():
    return {"status": "ok"}


def serve():
    import uvicorn
    uvicorn.run(
        "inkpad.main:app",
        host=os.environ.get("INKPAD_HOST", "127.0.0.1"),
        port=int(os.environ.get("INKPAD_PORT", "8000")),
    )

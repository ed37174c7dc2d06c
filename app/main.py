# Run from project root: uvicorn app.main:app --reload  (or: python -m app.main)

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import router
from app.core.config import ALLOWED_ORIGIN, PORT

logging.basicConfig(level=logging.INFO)


app = FastAPI(title="GitHub Technology Agent")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[ALLOWED_ORIGIN],
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)
app.include_router(router)


if __name__ == "__main__":
    print(f"Github Agent server running on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)

"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from loancalc.api.routes import calculator

app = FastAPI(
    title="Loan Calculator",
    description="Loan amortization solver and schedule generator",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(calculator.router)


@app.get("/health")
async def health():
    return {"status": "ok"}

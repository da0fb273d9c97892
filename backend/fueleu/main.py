"""
FuelEU Compliance Engine - FastAPI Application

Main entry point for the compliance backend.

Architecture:
- Route → RouteValidator → Route (immutable)
- Route + year → CB Formula → ComplianceBalance → ComplianceRecord
- ComplianceRecord → Banking Ledger → BankEntry
- [ (shipId, cbBefore) ] → Pool Allocator → [ PoolAllocation ] → Pool
"""
import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers import routes_router, compliance_router, banking_router, pools_router
from .database import init_db

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    init_db()
    yield

# Create FastAPI app
app = FastAPI(
    lifespan=lifespan,
    title="FuelEU Compliance Engine",
    description="""
    FuelEU Compliance Engine - Compliance Balance, Banking and Pooling

    Computes maritime GHG Compliance Balances (CB) from reported routes,
    banks surplus for later years, and redistributes surplus across
    pooled ships.

    ## Pipeline
    1. **Routes**: validated route records with a single baseline route
    2. **Compliance**: CB = (target − actual intensity) × energy / 10^6
    3. **Banking**: bank surplus CB, apply banked surplus to a deficit
    4. **Pooling**: greedy surplus-to-deficit allocation

    ## Key Principles
    - Routes and balances are immutable values
    - Computation is deterministic and never rounded
    - No partial banking, no partial pools
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(routes_router)
app.include_router(compliance_router)
app.include_router(banking_router)
app.include_router(pools_router)


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": "FuelEU Compliance Engine",
        "version": "1.0.0",
        "description": "Compliance Balance, Banking and Pooling",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "1.0.0"}


# For running with: python -m fueleu.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)

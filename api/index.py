"""
Storefront - Main FastAPI Application

Single entry point for the checkout backend.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.config import get_settings
from storefront.logging import configure_logging, get_logger
from storefront.routers import checkout_router

logger = get_logger(__name__)

settings = get_settings()
configure_logging(force=True)

app = FastAPI(
    title="Storefront Checkout API",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(checkout_router)


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "service": "storefront",
        "card_checkout": settings.is_card_checkout_configured(),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=4242)

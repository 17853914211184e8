from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from lms_checkout.config import settings
from lms_checkout.routes import checkout, health

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(checkout.router, prefix="/checkout", tags=["Checkout"])
app.include_router(health.router, prefix="/health", tags=["Health"])

@app.get("/")
def root():
    return {
        "checkout_endpoints": [
            "/checkout/summary", "/checkout/offer",
            "/checkout/payload/{kind}", "/checkout/plans/select"
        ],
        "health": ["/health/check"]
    }

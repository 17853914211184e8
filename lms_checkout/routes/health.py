from fastapi import APIRouter
from datetime import datetime

from lms_checkout.config import settings

router = APIRouter()

@router.get("/check")
def health_check():
    return {
        "status": "ok",
        "service": settings.app_name,
        "timestamp": datetime.utcnow().isoformat()
    }

from fastapi import APIRouter
from api.subscribe_routes import router as subscribe_router
from api.jobs_routes import router as jobs_router

router = APIRouter()

router.include_router(subscribe_router, tags=["Subscribers"])
router.include_router(jobs_router, tags=["Jobs"])

from fastapi import APIRouter

from leadintake.api.v1.endpoints import admin, auth, intake

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(admin.router)
api_router.include_router(intake.router)


@api_router.get("/health")
async def health_check():
    return {"ok": True}

from fastapi import APIRouter

from signup.presentation.routers.v1.accounts import router as accounts_router
from signup.presentation.routes.health import router as health_router
from signup.presentation.routes.verify import router as verify_router

api = APIRouter()

# Add all v1 routers here
routers = (accounts_router,)
for router in routers:
    api.include_router(router, prefix="/v1")

api.include_router(verify_router)
api.include_router(health_router)

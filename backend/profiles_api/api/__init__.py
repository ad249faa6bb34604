from fastapi import APIRouter
from profiles_api.api.routes import auth_router, users_router

api_router = APIRouter(prefix="/api")
api_router.include_router(auth_router)
api_router.include_router(users_router)

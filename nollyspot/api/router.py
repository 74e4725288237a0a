from fastapi import APIRouter

from nollyspot.api.routes.health import router as health_router
from nollyspot.api.routes.users import router as users_router
from nollyspot.api.routes.posts import router as posts_router
from nollyspot.api.routes.payments import router as payments_router
from nollyspot.api.routes.transactions import router as transactions_router


api_router = APIRouter()
api_router.include_router(health_router, tags=["health"])
api_router.include_router(users_router, tags=["users"])
api_router.include_router(posts_router, tags=["posts"])
api_router.include_router(payments_router, tags=["payments"])
api_router.include_router(transactions_router, tags=["transactions"])

# app/api/v1/router.py
from fastapi import APIRouter

from app.api.v1.auth import router as auth_router
from app.modules.orders.router import router as orders_router
from app.modules.receipts.router import router as receipts_router
from app.modules.brands.router import router as brands_router
from app.modules.suppliers.router import router as suppliers_router
from app.modules.variants.router import router as variants_router
from app.shared.schemas.common import ErrorResponse

# Respuestas de error de negocio documentadas en OpenAPI
LIFECYCLE_ERRORS = {
    400: {"model": ErrorResponse, "description": "Transición inválida o solicitud incorrecta"},
    404: {"model": ErrorResponse, "description": "Registro(s) no encontrado(s)"},
    409: {"model": ErrorResponse, "description": "Conflicto con el estado actual"},
}

# Crear router principal de la API v1
api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["authentication"])

api_router.include_router(
    orders_router,
    prefix="/orders",
    tags=["Orders"],
    responses=LIFECYCLE_ERRORS
)

api_router.include_router(
    receipts_router,
    prefix="/receipts",
    tags=["Receipts"],
    responses=LIFECYCLE_ERRORS
)

api_router.include_router(
    brands_router,
    prefix="/brands",
    tags=["Brands"],
    responses=LIFECYCLE_ERRORS
)

api_router.include_router(
    suppliers_router,
    prefix="/suppliers",
    tags=["Suppliers"],
    responses=LIFECYCLE_ERRORS
)

api_router.include_router(
    variants_router,
    prefix="/variants",
    tags=["Variants"],
    responses=LIFECYCLE_ERRORS
)

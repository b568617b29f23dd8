"""Admin catalog router: bulk product import."""

from fastapi import APIRouter, Depends
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.store_service.exceptions import PersistenceError
from services.store_service.schemas import ProductImport, ProductImportResult
from services.store_service.services.catalog import upsert_products
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(tags=["admin-store"])
logger = get_logger(__name__)


@router.post("/import-products", response_model=ProductImportResult)
async def import_products(
    products: list[ProductImport],
    admin: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Upsert catalog records by SKU in one transaction."""
    try:
        created, updated = await upsert_products(db, products)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Product import failed and was rolled back")
        raise PersistenceError("The product import could not be saved.") from exc

    logger.info(f"Product import by {admin.user_id}: {created} created, {updated} updated")
    return ProductImportResult(created=created, updated=updated)

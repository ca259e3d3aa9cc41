# storefront/main.py
from fastapi import FastAPI
import uvicorn

from storefront.data.database import Base, engine
from storefront.api.routers import addresses, carts, coupons, health, orders
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# import wszystkich modeli przed create_all
import storefront.data.models  # noqa: F401,E402

logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")

try:
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")
except Exception as e:
    logger.error(f"Failed to create tables: {e}")
    raise


def create_app() -> FastAPI:
    app = FastAPI(
        title="Garment Care Storefront - remote store",
        version="1.0.0",
    )

    app.include_router(health.router)
    app.include_router(carts.router)
    app.include_router(coupons.router)
    app.include_router(addresses.router)
    app.include_router(orders.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)

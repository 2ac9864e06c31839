import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from store_sync.api.v1.endpoints.catalog import router as catalog_router
from store_sync.core.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
_logger = logging.getLogger(__name__)

app = FastAPI(title="store-sync")

origins = [
    "http://localhost",
    "http://localhost:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(catalog_router)


@app.get("/")
def read_root():
    return {"service": "store-sync", "woocommerce": settings.wc_base_url or None}

"""FastAPI request handlers for ShopSense search and recommendations."""

import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel, Field

from shopsense.core import ShopSense
from shopsense.data.loader import CatalogLoader
from shopsense.data.schemas import Product, ScoredResult
from shopsense.search.engine import SORT_OPTIONS


# Global state for the loaded catalog and engines
class AppState:
    """Application state container."""

    def __init__(self):
        self.catalog_loader: Optional[CatalogLoader] = None
        self.shop: ShopSense = ShopSense()
        self.is_ready: bool = False

    @property
    def catalog(self) -> list[Product]:
        return self.catalog_loader.products if self.catalog_loader is not None else []


state = AppState()


def load_catalog(data_path: str) -> CatalogLoader:
    """Load a catalog file into the application state."""
    loader = CatalogLoader()
    loader.load_products(data_path)
    state.catalog_loader = loader
    state.is_ready = len(loader.products) > 0
    return loader


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting ShopSense API...")

    catalog_path = os.getenv("SHOPSENSE_CATALOG_PATH")
    if catalog_path and os.path.exists(catalog_path):
        try:
            load_catalog(catalog_path)
        except ValueError as e:
            logger.warning(f"Failed to load initial catalog: {e}")

    yield

    logger.info("Shutting down ShopSense API...")


app = FastAPI(
    title="ShopSense API",
    description="Product search and recommendation API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response models
class RecommendationItem(BaseModel):
    """Single recommended product."""

    product_id: int
    name: str
    score: float
    rank: int
    reason: Optional[str] = None


class RecommendationResponse(BaseModel):
    """Response containing recommendations."""

    user_id: str
    recommendations: list[RecommendationItem]
    strategy: str
    generated_at: datetime = Field(default_factory=datetime.utcnow)


class SearchResultItem(BaseModel):
    """Single search hit."""

    product: Product
    score: float
    match_reasons: list[str]


class SuggestionItem(BaseModel):
    type: str
    text: str
    reason: str


class SearchResponseModel(BaseModel):
    """Search results with the parsed query and suggestions."""

    query: str
    results: list[SearchResultItem]
    total_found: int
    parsed_query: dict[str, Any]
    suggestions: list[SuggestionItem]
    alternative_queries: list[str]


class BehaviorRequest(BaseModel):
    """A user action to record."""

    user_id: Optional[str] = Field(default=None, description="User id, omitted when anonymous")
    action: str = Field(..., description="view, search, wishlist, cart, purchase, review, share")
    product_id: str = Field(..., description="Product the action refers to")
    metadata: dict[str, Any] = Field(default_factory=dict)


class CrossSellRequest(BaseModel):
    """Cart contents for cross-sell recommendations."""

    product_ids: list[int] = Field(..., description="Ids of products in the cart")
    n: int = Field(default=6, ge=1, le=100)


class LoadCatalogRequest(BaseModel):
    data_path: str = Field(..., description="Path to catalog file (csv, json, parquet)")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    is_ready: bool
    n_products: int


class CatalogResponse(HealthResponse):
    """Catalog load result with any validation problems found."""

    validation_errors: list[str] = Field(default_factory=list)


# Helper functions
def get_catalog() -> list[Product]:
    """Return the loaded catalog or fail with 503."""
    if not state.is_ready:
        raise HTTPException(
            status_code=503,
            detail="Service not ready. Load a catalog first.",
        )
    return state.catalog


def to_items(results: list[ScoredResult]) -> list[RecommendationItem]:
    return [
        RecommendationItem(
            product_id=result.product.id,
            name=result.product.name,
            score=result.score,
            rank=rank + 1,
            reason=result.reason,
        )
        for rank, result in enumerate(results)
    ]


# API Endpoints
@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        is_ready=state.is_ready,
        n_products=len(state.catalog),
    )


@app.post("/catalog", response_model=CatalogResponse)
async def load_catalog_endpoint(request: LoadCatalogRequest):
    """Load (or replace) the product catalog."""
    try:
        loader = load_catalog(request.data_path)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Catalog load failed: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return CatalogResponse(
        status="loaded",
        is_ready=state.is_ready,
        n_products=len(state.catalog),
        validation_errors=loader.validation_errors,
    )


@app.get("/search", response_model=SearchResponseModel)
async def search(
    q: str = Query(..., description="Search query"),
    limit: int = Query(default=20, ge=1, le=100, description="Page size"),
    offset: int = Query(default=0, ge=0, description="Page start"),
    sort_by: str = Query(default="relevance", description=f"One of {SORT_OPTIONS}"),
    user_id: Optional[str] = Query(default=None, description="Record the search for this user"),
):
    """Search the catalog with natural-language query understanding."""
    catalog = get_catalog()
    response = state.shop.search(q, catalog, limit=limit, offset=offset, sort_by=sort_by, user_id=user_id)

    return SearchResponseModel(
        query=q,
        results=[
            SearchResultItem(product=r.product, score=r.score, match_reasons=r.match_reasons)
            for r in response.results
        ],
        total_found=response.total_found,
        parsed_query=response.parsed_query.to_dict(),
        suggestions=[
            SuggestionItem(type=s.type, text=s.text, reason=s.reason)
            for s in response.suggestions
        ],
        alternative_queries=response.alternative_queries,
    )


@app.get("/suggest", response_model=list[SuggestionItem])
async def suggest(q: str = Query(..., description="Partial query")):
    """Suggestions while the user types."""
    catalog = get_catalog()
    return [
        SuggestionItem(type=s.type, text=s.text, reason=s.reason)
        for s in state.shop.suggest(q, catalog)
    ]


@app.post("/behavior", status_code=202)
async def track_behavior(request: BehaviorRequest):
    """Record a user action as a recommendation signal."""
    state.shop.track_behavior(request.user_id, request.action, request.product_id, request.metadata)
    return {"status": "recorded"}


@app.get("/recommend/{user_id}", response_model=RecommendationResponse)
async def get_recommendations(
    user_id: str,
    n: int = Query(default=10, ge=1, le=100, description="Number of recommendations"),
):
    """Personalized (hybrid) recommendations for a user."""
    catalog = get_catalog()
    results = state.shop.get_personal_recommendations(user_id, catalog, n)
    return RecommendationResponse(user_id=user_id, recommendations=to_items(results), strategy="hybrid")


@app.get("/trending", response_model=RecommendationResponse)
async def get_trending(
    n: int = Query(default=10, ge=1, le=100, description="Number of items"),
):
    """Products trending across all users."""
    catalog = get_catalog()
    results = state.shop.get_trending_recommendations(catalog, n)
    return RecommendationResponse(user_id="__global__", recommendations=to_items(results), strategy="trending")


@app.get("/related/{product_id}", response_model=RecommendationResponse)
async def get_related(
    product_id: int,
    n: int = Query(default=4, ge=1, le=100, description="Number of related products"),
):
    """Products similar to a given product."""
    catalog = get_catalog()
    if state.catalog_loader.get_product(product_id) is None:
        raise HTTPException(status_code=404, detail=f"Product '{product_id}' not found")

    results = state.shop.get_related_products(product_id, catalog, n)
    return RecommendationResponse(user_id="__global__", recommendations=to_items(results), strategy="related")


@app.post("/cross-sell", response_model=RecommendationResponse)
async def get_cross_sell(request: CrossSellRequest):
    """Recommendations to complement the cart."""
    catalog = get_catalog()
    cart_items = [
        product
        for product in (state.catalog_loader.get_product(pid) for pid in request.product_ids)
        if product is not None
    ]
    results = state.shop.get_cross_sell_recommendations(cart_items, catalog, request.n)
    return RecommendationResponse(user_id="__cart__", recommendations=to_items(results), strategy="cross_sell")


@app.get("/analytics/searches")
async def search_analytics():
    """Top, recent and trending searches."""
    analytics = state.shop.get_search_analytics()
    analytics["trending_searches"] = state.shop.get_trending_searches()
    return analytics


def run():
    """Run the API server."""
    import uvicorn

    uvicorn.run(
        "shopsense.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    run()

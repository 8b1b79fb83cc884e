"""Catalog API routes: filtered listing, product detail, validation, structures, comments."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from backend.deps import comments_dep, products_dep, settings_dep, vocabulary_dep
from rtcatalog.catalog.filters import filter_products
from rtcatalog.catalog.stats import ProductStats, facet_options, product_stats
from rtcatalog.catalog.structures import count_structure_types, parse_and_group_structures
from rtcatalog.config import Settings
from rtcatalog.review.validator import validate_product
from rtcatalog.schemas.models import (
    FilterState,
    ParsedStructures,
    ProductRecord,
    StructureTypeCounts,
    ValidationIssue,
)
from rtcatalog.store import CommentStore, ProductRepository
from rtcatalog.store.models import ProductComment
from rtcatalog.vocabulary import Vocabulary

logger = logging.getLogger(__name__)
router = APIRouter()


class ProductListResponse(BaseModel):
    total: int
    products: list[ProductRecord]
    stats: ProductStats


class FacetOptionsResponse(BaseModel):
    tasks: list[str]
    locations: list[str]
    companies: list[str]
    certifications: list[str]
    modalities: list[str]


class StructuresResponse(BaseModel):
    product_id: str
    parsed: ParsedStructures
    types: StructureTypeCounts


class CommentRequest(BaseModel):
    text: str = Field(min_length=1, max_length=5000)
    author: str = "anonymous"


def _get_or_404(repo: ProductRepository, product_id: str) -> ProductRecord:
    product = repo.get(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product not found: {product_id}")
    return product


@router.get("/products", response_model=ProductListResponse)
async def list_products(
    search: str = "",
    tasks: list[str] = Query(default=[]),
    locations: list[str] = Query(default=[]),
    companies: list[str] = Query(default=[]),
    certifications: list[str] = Query(default=[]),
    modalities: list[str] = Query(default=[]),
    repo: ProductRepository = Depends(products_dep),
    settings: Settings = Depends(settings_dep),
):
    """Products passing every active facet and the free-text search."""
    filters = FilterState(
        tasks=tasks,
        locations=locations,
        companies=companies,
        certifications=certifications,
        modalities=modalities,
    )
    matches = filter_products(
        repo.all(), filters, search, first_value_only=settings.rtcat_filter_first_value_only
    )
    return ProductListResponse(total=len(matches), products=matches, stats=product_stats(matches))


@router.get("/products/facets", response_model=FacetOptionsResponse)
async def list_facets(repo: ProductRepository = Depends(products_dep)):
    """Selectable values for each filter facet."""
    products = repo.all()
    return FacetOptionsResponse(
        tasks=facet_options(products, "category"),
        locations=facet_options(products, "anatomical_location"),
        companies=facet_options(products, "company"),
        certifications=facet_options(products, "certification"),
        modalities=facet_options(products, "modality"),
    )


@router.get("/products/{product_id}", response_model=ProductRecord)
async def get_product(product_id: str, repo: ProductRepository = Depends(products_dep)):
    return _get_or_404(repo, product_id)


@router.get("/products/{product_id}/validation", response_model=list[ValidationIssue])
async def get_validation(
    product_id: str,
    repo: ProductRepository = Depends(products_dep),
    vocabulary: Vocabulary = Depends(vocabulary_dep),
):
    """Vocabulary issues for one product; an empty list means the known fields are clean."""
    return validate_product(_get_or_404(repo, product_id), vocabulary)


@router.get("/products/{product_id}/structures", response_model=StructuresResponse)
async def get_structures(product_id: str, repo: ProductRepository = Depends(products_dep)):
    product = _get_or_404(repo, product_id)
    entries = product.structure_entries
    return StructuresResponse(
        product_id=product_id,
        parsed=parse_and_group_structures(entries),
        types=count_structure_types(entries),
    )


@router.get("/products/{product_id}/comments", response_model=list[ProductComment])
async def list_comments(
    product_id: str,
    repo: ProductRepository = Depends(products_dep),
    comments: CommentStore = Depends(comments_dep),
):
    _get_or_404(repo, product_id)
    return comments.list_for(product_id)


@router.post(
    "/products/{product_id}/comments",
    response_model=ProductComment,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    product_id: str,
    request: CommentRequest,
    repo: ProductRepository = Depends(products_dep),
    comments: CommentStore = Depends(comments_dep),
):
    _get_or_404(repo, product_id)
    comment = comments.add(product_id, request.text.strip(), author=request.author)
    logger.info("Comment %s added to product %s", comment.comment_id, product_id)
    return comment

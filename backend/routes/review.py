"""Review dashboard API routes."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from backend.deps import assignments_dep, clock_dep, products_dep, settings_dep, vocabulary_dep
from rtcatalog.config import Settings
from rtcatalog.review.checks import run_review_checks, summarize_checks
from rtcatalog.review.revision import Clock, calculate_revision_stats
from rtcatalog.review.summary import filter_review_summaries, review_dashboard, review_products
from rtcatalog.schemas.models import (
    ReviewCheck,
    ReviewDashboardStats,
    ReviewNotes,
    ReviewSummary,
    RevisionAgeGroups,
)
from rtcatalog.store import AssignmentStore, ProductRepository
from rtcatalog.store.models import ReviewAssignment
from rtcatalog.vocabulary import Vocabulary

logger = logging.getLogger(__name__)
router = APIRouter()


class ReviewStatsResponse(BaseModel):
    total: int
    dashboard: ReviewDashboardStats
    revision_percentage: int
    average_days_since_revision: int
    revision_age_groups: RevisionAgeGroups
    needing_revision: list[str]


class ReviewDetailResponse(BaseModel):
    summary: ReviewSummary
    checks: list[ReviewCheck]
    notes: ReviewNotes
    assignment: Optional[ReviewAssignment] = None


class AssignRequest(BaseModel):
    reviewer: str = Field(min_length=1, max_length=200)


@router.get("/review", response_model=list[ReviewSummary])
async def list_review(
    category: Optional[str] = None,
    company: Optional[str] = None,
    status: Optional[str] = None,
    urgency: Optional[str] = None,
    repo: ProductRepository = Depends(products_dep),
    vocabulary: Vocabulary = Depends(vocabulary_dep),
    clock: Clock = Depends(clock_dep),
    settings: Settings = Depends(settings_dep),
):
    """One review row per product, narrowed by exact category/company/status/urgency."""
    summaries = review_products(repo.all(), clock, vocabulary, settings.rtcat_revision_sentinel)
    try:
        return filter_review_summaries(summaries, category, company, status, urgency)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/review/stats", response_model=ReviewStatsResponse)
async def review_stats(
    repo: ProductRepository = Depends(products_dep),
    vocabulary: Vocabulary = Depends(vocabulary_dep),
    clock: Clock = Depends(clock_dep),
    settings: Settings = Depends(settings_dep),
):
    products = repo.all()
    summaries = review_products(products, clock, vocabulary, settings.rtcat_revision_sentinel)
    revision = calculate_revision_stats(products, clock, settings.rtcat_revision_sentinel)
    return ReviewStatsResponse(
        total=len(summaries),
        dashboard=review_dashboard(summaries),
        revision_percentage=revision.revision_percentage,
        average_days_since_revision=revision.average_days_since_revision,
        revision_age_groups=revision.revision_age_groups,
        needing_revision=[p.id for p in revision.products_needing_revision],
    )


@router.get("/review/assignments", response_model=dict[str, ReviewAssignment])
async def list_assignments(assignments: AssignmentStore = Depends(assignments_dep)):
    return assignments.all()


@router.put("/review/assignments/{product_id}", response_model=ReviewAssignment)
async def assign_reviewer(
    product_id: str,
    request: AssignRequest,
    repo: ProductRepository = Depends(products_dep),
    assignments: AssignmentStore = Depends(assignments_dep),
):
    if repo.get(product_id) is None:
        raise HTTPException(status_code=404, detail=f"Product not found: {product_id}")
    assignment = assignments.assign(product_id, request.reviewer.strip())
    logger.info("Product %s assigned to %s", product_id, assignment.reviewer)
    return assignment


@router.get("/review/{product_id}", response_model=ReviewDetailResponse)
async def review_detail(
    product_id: str,
    repo: ProductRepository = Depends(products_dep),
    vocabulary: Vocabulary = Depends(vocabulary_dep),
    clock: Clock = Depends(clock_dep),
    settings: Settings = Depends(settings_dep),
    assignments: AssignmentStore = Depends(assignments_dep),
):
    """Full checklist, grouped notes and reviewer for one product."""
    product = repo.get(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product not found: {product_id}")
    checks = run_review_checks(product, vocabulary)
    (summary,) = review_products([product], clock, vocabulary, settings.rtcat_revision_sentinel)
    return ReviewDetailResponse(
        summary=summary,
        checks=checks,
        notes=summarize_checks(product, checks),
        assignment=assignments.get(product_id),
    )

"""Persisted editorial records: product comments and review assignments."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ProductComment(BaseModel):
    comment_id: str = ""
    product_id: str
    author: str = "anonymous"
    text: str
    created_at: datetime = Field(default_factory=datetime.utcnow)


class ReviewAssignment(BaseModel):
    product_id: str
    reviewer: str
    assigned_at: datetime = Field(default_factory=datetime.utcnow)

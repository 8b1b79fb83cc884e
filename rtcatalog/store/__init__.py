"""Product bundle loading and editorial stores (comments, review assignments)."""

from rtcatalog.store.assignments import (
    AssignmentStore,
    FileAssignmentStore,
    InMemoryAssignmentStore,
    get_assignment_store,
)
from rtcatalog.store.comments import (
    CommentStore,
    FileCommentStore,
    InMemoryCommentStore,
    get_comment_store,
)
from rtcatalog.store.products import (
    ProductLoadError,
    ProductRepository,
    get_product_repository,
    load_products,
)

__all__ = [
    "AssignmentStore",
    "CommentStore",
    "FileAssignmentStore",
    "FileCommentStore",
    "InMemoryAssignmentStore",
    "InMemoryCommentStore",
    "ProductLoadError",
    "ProductRepository",
    "get_assignment_store",
    "get_comment_store",
    "get_product_repository",
    "load_products",
]

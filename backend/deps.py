"""Request dependencies; overridden in tests via app.dependency_overrides."""

from rtcatalog.config import Settings, get_settings
from rtcatalog.review.revision import Clock, SystemClock
from rtcatalog.store import (
    AssignmentStore,
    CommentStore,
    ProductRepository,
    get_assignment_store,
    get_comment_store,
    get_product_repository,
)
from rtcatalog.vocabulary import Vocabulary, get_vocabulary


def products_dep() -> ProductRepository:
    return get_product_repository()


def comments_dep() -> CommentStore:
    return get_comment_store()


def assignments_dep() -> AssignmentStore:
    return get_assignment_store()


def vocabulary_dep() -> Vocabulary:
    return get_vocabulary()


def clock_dep() -> Clock:
    return SystemClock()


def settings_dep() -> Settings:
    return get_settings()

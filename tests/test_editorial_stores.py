"""Tests for the comment and review assignment stores."""

import pytest

from rtcatalog.store import (
    FileAssignmentStore,
    FileCommentStore,
    InMemoryAssignmentStore,
    InMemoryCommentStore,
)


@pytest.fixture(params=["memory", "file"])
def comment_store(request, tmp_path):
    if request.param == "memory":
        return InMemoryCommentStore()
    return FileCommentStore(tmp_path)


@pytest.fixture(params=["memory", "file"])
def assignment_store(request, tmp_path):
    if request.param == "memory":
        return InMemoryAssignmentStore()
    return FileAssignmentStore(tmp_path)


class TestCommentStore:

    def test_add_and_list(self, comment_store):
        first = comment_store.add("p1", "Check the CE class", author="dana")
        comment_store.add("p1", "Updated")
        comment_store.add("p2", "Other product")
        comments = comment_store.list_for("p1")
        assert [c.text for c in comments] == ["Check the CE class", "Updated"]
        assert comments[0].comment_id == first.comment_id
        assert comments[0].author == "dana"
        assert comments[1].author == "anonymous"

    def test_unknown_product_is_empty(self, comment_store):
        assert comment_store.list_for("nothing") == []

    def test_ids_are_unique(self, comment_store):
        a = comment_store.add("p1", "a")
        b = comment_store.add("p1", "b")
        assert a.comment_id != b.comment_id


class TestAssignmentStore:

    def test_assign_and_get(self, assignment_store):
        assignment_store.assign("p1", "alex")
        assert assignment_store.get("p1").reviewer == "alex"
        assert assignment_store.get("p2") is None

    def test_reassign_overwrites(self, assignment_store):
        assignment_store.assign("p1", "alex")
        assignment_store.assign("p1", "sam")
        assert assignment_store.get("p1").reviewer == "sam"
        assert list(assignment_store.all()) == ["p1"]


def test_file_stores_persist(tmp_path):
    FileCommentStore(tmp_path).add("p1", "kept")
    FileAssignmentStore(tmp_path).assign("p1", "alex")
    assert [c.text for c in FileCommentStore(tmp_path).list_for("p1")] == ["kept"]
    assert FileAssignmentStore(tmp_path).get("p1").reviewer == "alex"

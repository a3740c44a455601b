"""Unit tests for comment events and projections."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from threadline.domain.model import (
    Comment,
    CommentAuthor,
    CommentCreated,
    CommentDeleted,
    CommentPage,
    CommentView,
)
from threadline.domain.model.event import EVENT_TYPES, event_to_message, parse_event
from threadline.domain.value import CommentId, ReactionKind, UserId


def make_comment(**overrides) -> Comment:
    now = datetime.now(timezone.utc)
    values = dict(
        id=CommentId(uuid4()),
        author_id=UserId(uuid4()),
        content="Hello",
        created_at=now,
        updated_at=now,
    )
    values.update(overrides)
    return Comment(**values)


class TestComment:
    """Tests for the Comment entity."""

    def test_reactors(self):
        """reactors() selects the set for a kind."""
        # Arrange
        fan, critic = UserId(uuid4()), UserId(uuid4())
        comment = make_comment(likers={fan}, dislikers={critic})

        # Act & Assert
        assert comment.reactors(ReactionKind.LIKE) == {fan}
        assert comment.reactors(ReactionKind.DISLIKE) == {critic}

    def test_overlapping_reactions_rejected(self):
        """A user can't both like and dislike."""
        # Arrange
        user = UserId(uuid4())

        # Act & Assert
        with pytest.raises(ValidationError, match="both like and dislike"):
            make_comment(likers={user}, dislikers={user})

    def test_opposite_reaction(self):
        """Like and dislike are each other's opposite."""
        # Act & Assert
        assert ReactionKind.LIKE.opposite is ReactionKind.DISLIKE
        assert ReactionKind.DISLIKE.opposite is ReactionKind.LIKE


class TestCommentView:
    """Tests for the read projection."""

    def test_build_and_serialize(self):
        """Counts are derived and reactor lists are sorted."""
        # Arrange
        users = sorted((UserId(uuid4()) for _ in range(3)), key=str, reverse=True)
        comment = make_comment(likers=frozenset(users))
        author = CommentAuthor(id=comment.author_id, name="Ada", email="a@b.c")

        # Act
        view = CommentView.build(comment, author, reply_count=4)
        data = view.model_dump(mode="json")

        # Assert
        assert data["like_count"] == 3
        assert data["dislike_count"] == 0
        assert data["reply_count"] == 4
        assert data["likers"] == sorted(str(u) for u in users)
        assert data["author"]["name"] == "Ada"

    def test_page_survives_json(self):
        """Cached pages read back into equal objects."""
        # Arrange
        comment = make_comment(dislikers={UserId(uuid4())})
        author = CommentAuthor.unknown(comment.author_id)
        page = CommentPage(
            items=[CommentView.build(comment, author, 0)],
            total_count=1,
            page=1,
            total_pages=1,
        )

        # Act
        restored = CommentPage.model_validate_json(page.model_dump_json())

        # Assert
        assert restored == page


class TestEvents:
    """Tests for the event wire format."""

    def test_wire_tags(self):
        """All four event names are known."""
        # Assert
        assert EVENT_TYPES == {
            "comment:created",
            "comment:updated",
            "comment:deleted",
            "comment:reacted",
        }

    def test_parse_event_dispatches_on_type(self):
        """Messages parse back into the right event class."""
        # Arrange
        comment = make_comment(parent_id=CommentId(uuid4()))
        view = CommentView.build(comment, CommentAuthor.unknown(comment.author_id), 0)
        created = CommentCreated(comment=view)
        deleted = CommentDeleted(id=comment.id, parent_id=comment.parent_id)

        # Act
        parsed_created = parse_event(event_to_message(created))
        parsed_deleted = parse_event(event_to_message(deleted))

        # Assert
        assert parsed_created == created
        assert parsed_created.parent_id == comment.parent_id
        assert parsed_deleted == deleted
        assert parsed_deleted.comment_id == comment.id

    def test_parse_event_rejects_unknown_type(self):
        """Unknown tags fail validation."""
        # Act & Assert
        with pytest.raises(ValidationError):
            parse_event({"type": "comment:exploded", "id": str(uuid4())})

"""Unit tests for BroadcastService."""

import asyncio
from datetime import datetime, timezone
from uuid import uuid4

import pytest

from threadline.adapter.realtime.recording import RecordingBroadcaster
from threadline.config import RealtimeSettings
from threadline.domain.model import (
    CommentAuthor,
    CommentCreated,
    CommentDeleted,
    CommentView,
)
from threadline.domain.service import BroadcastService
from threadline.domain.value import CommentId, UserId


def make_view(parent_id: CommentId | None = None) -> CommentView:
    now = datetime.now(timezone.utc)
    user_id = UserId(uuid4())
    return CommentView(
        id=CommentId(uuid4()),
        author=CommentAuthor(id=user_id, name="Ada", email="ada@example.com"),
        content="Hello",
        parent_id=parent_id,
        created_at=now,
        updated_at=now,
    )


class HangingBroadcaster(RecordingBroadcaster):
    async def publish_global(self, message):
        await asyncio.sleep(10)


class ExplodingRoomBroadcaster(RecordingBroadcaster):
    async def publish_to_room(self, room, message):
        raise ConnectionError("room transport down")


class TestPublish:
    """Tests for publish."""

    @pytest.mark.asyncio
    async def test_top_level_event_goes_global_only(self):
        """Events without a parent have no room."""
        # Arrange
        recorder = RecordingBroadcaster()
        service = BroadcastService(recorder, RealtimeSettings())
        event = CommentCreated(comment=make_view())

        # Act
        await service.publish(event)

        # Assert
        assert recorder.published == [(None, event.model_dump(mode="json"))]

    @pytest.mark.asyncio
    async def test_reply_event_also_goes_to_thread_room(self):
        """Reply events reach everyone, then the parent's room."""
        # Arrange
        recorder = RecordingBroadcaster()
        service = BroadcastService(recorder, RealtimeSettings())
        parent_id = CommentId(uuid4())
        event = CommentDeleted(id=CommentId(uuid4()), parent_id=parent_id)

        # Act
        await service.publish(event)

        # Assert
        message = {
            "type": "comment:deleted",
            "id": str(event.id),
            "parent_id": str(parent_id),
        }
        assert recorder.published == [
            (None, message),
            (f"thread:{parent_id}", message),
        ]

    @pytest.mark.asyncio
    async def test_room_prefix_is_configurable(self):
        """Room names follow the configured prefix."""
        # Arrange
        recorder = RecordingBroadcaster()
        service = BroadcastService(
            recorder, RealtimeSettings(thread_room_prefix="replies/")
        )
        parent_id = CommentId(uuid4())

        # Act
        await service.publish(CommentCreated(comment=make_view(parent_id)))

        # Assert
        assert recorder.published[1][0] == f"replies/{parent_id}"

    @pytest.mark.asyncio
    async def test_transport_failure_is_swallowed(self):
        """A broken room send never reaches the caller."""
        # Arrange
        recorder = ExplodingRoomBroadcaster()
        service = BroadcastService(recorder, RealtimeSettings())

        # Act
        await service.publish(CommentCreated(comment=make_view(CommentId(uuid4()))))

        # Assert
        assert [room for room, _ in recorder.published] == [None]

    @pytest.mark.asyncio
    async def test_hanging_transport_times_out(self):
        """Publishing gives up after the configured timeout."""
        # Arrange
        service = BroadcastService(
            HangingBroadcaster(), RealtimeSettings(publish_timeout_seconds=0.01)
        )

        # Act & Assert (returns instead of hanging)
        await asyncio.wait_for(
            service.publish(CommentCreated(comment=make_view())), timeout=1
        )


class TestThreadRooms:
    """Tests for join_thread and leave_thread."""

    @pytest.mark.asyncio
    async def test_join_and_leave(self):
        """Connections enter and leave the thread's room."""
        # Arrange
        recorder = RecordingBroadcaster()
        service = BroadcastService(recorder, RealtimeSettings())
        thread_id = str(uuid4())

        # Act
        room = await service.join_thread("conn-1", thread_id)
        joined = set(recorder.rooms[room])
        await service.leave_thread("conn-1", thread_id)

        # Assert
        assert room == f"thread:{thread_id}"
        assert joined == {"conn-1"}
        assert recorder.rooms[room] == set()

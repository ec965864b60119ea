"""Unit tests for CounterService."""

from uuid import uuid4

import pytest

from reel.domain.error import NotFoundError
from reel.domain.repository import CommentRepository, VideoRepository
from reel.domain.service import CommentService, CounterService
from reel.domain.value import ModerationStatus, UserId, VideoId
from tests.conftest import make_comment, make_video, seed_comments
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def _create(comment_service, counter_service, video_id, author_id, parent_id=None):
    comment = await comment_service.create_comment(
        video_id, author_id, "comment", parent_id=parent_id
    )
    await counter_service.on_comment_created(comment)
    return comment


class TestOnCommentCreated:
    """Tests for counter increments on create."""

    @pytest.mark.asyncio
    async def test_reply_bumps_video_and_parent(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        counter_service = await unit_env.get(CounterService)
        comment_repo = await unit_env.get(CommentRepository)
        video_repo = await unit_env.get(VideoRepository)
        video = await video_repo.save(make_video())
        author_id = UserId(uuid4())

        # Act
        parent = await _create(comment_service, counter_service, video.id, author_id)
        await _create(comment_service, counter_service, video.id, author_id, parent.id)

        # Assert
        assert (await video_repo.find_by_id(video.id)).stats.comments_count == 2
        assert (await comment_repo.find_by_id(parent.id)).stats.replies_count == 1


class TestOnSubtreeDeleted:
    """Tests for counter updates after cascading deletes."""

    @pytest.mark.asyncio
    async def test_six_level_chain_delete_from_second_level(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        counter_service = await unit_env.get(CounterService)
        comment_repo = await unit_env.get(CommentRepository)
        video_repo = await unit_env.get(VideoRepository)
        video = await video_repo.save(make_video())
        author_id = UserId(uuid4())

        chain = []
        parent_id = None
        for _ in range(6):
            comment = await _create(
                comment_service, counter_service, video.id, author_id, parent_id
            )
            chain.append(comment)
            parent_id = comment.id
        c1, c2 = chain[0], chain[1]
        assert [c.thread.level for c in chain] == [0, 1, 2, 3, 4, 5]
        assert (await video_repo.find_by_id(video.id)).stats.comments_count == 6

        # Act
        deleted = await comment_service.delete_thread(c2)
        await counter_service.on_subtree_deleted(
            video.id, c2.parent_id, len(deleted)
        )

        # Assert
        assert set(deleted) == {c.id for c in chain[1:]}
        for removed in chain[1:]:
            assert await comment_repo.find_by_id(removed.id) is None
        assert (await video_repo.find_by_id(video.id)).stats.comments_count == 1
        assert (await comment_repo.find_by_id(c1.id)).stats.replies_count == 0

    @pytest.mark.asyncio
    async def test_parent_count_is_recounted_not_decremented(self, unit_env):
        # Arrange
        counter_service = await unit_env.get(CounterService)
        comment_repo = await unit_env.get(CommentRepository)
        video_id, author_id = VideoId(uuid4()), UserId(uuid4())
        parent = make_comment(video_id, author_id).with_replies_count(9)
        survivor = make_comment(video_id, author_id, parent=parent)
        await seed_comments(unit_env, parent, survivor)

        # Act
        await counter_service.on_subtree_deleted(video_id, parent.id, 1)

        # Assert
        assert (await comment_repo.find_by_id(parent.id)).stats.replies_count == 1

    @pytest.mark.asyncio
    async def test_video_counter_never_goes_negative(self, unit_env):
        counter_service = await unit_env.get(CounterService)
        video_repo = await unit_env.get(VideoRepository)
        video = await video_repo.save(make_video(comments_count=2))

        await counter_service.on_subtree_deleted(video.id, None, 5)

        assert (await video_repo.find_by_id(video.id)).stats.comments_count == 0


class TestReconcile:
    """Tests for the recount operations."""

    @pytest.mark.asyncio
    async def test_reconcile_video_repairs_drift(self, unit_env):
        # Arrange
        counter_service = await unit_env.get(CounterService)
        video_repo = await unit_env.get(VideoRepository)
        video = await video_repo.save(make_video(comments_count=42))
        author_id = UserId(uuid4())
        top = make_comment(video.id, author_id)
        await seed_comments(unit_env, top, make_comment(video.id, author_id, parent=top))

        # Act
        total = await counter_service.reconcile_video(video.id)

        # Assert
        assert total == 2
        assert (await video_repo.find_by_id(video.id)).stats.comments_count == 2

    @pytest.mark.asyncio
    async def test_reconcile_missing_video_raises(self, unit_env):
        counter_service = await unit_env.get(CounterService)

        with pytest.raises(NotFoundError):
            await counter_service.reconcile_video(VideoId(uuid4()))

    @pytest.mark.asyncio
    async def test_reconcile_comment_counts_hidden_replies_too(self, unit_env):
        counter_service = await unit_env.get(CounterService)
        video_id, author_id = VideoId(uuid4()), UserId(uuid4())
        parent = make_comment(video_id, author_id)
        hidden = make_comment(video_id, author_id, parent=parent)
        moderation = hidden.moderation.model_copy(
            update={"status": ModerationStatus.PENDING}
        )
        hidden = hidden.model_copy(update={"moderation": moderation})
        await seed_comments(unit_env, parent, hidden)

        assert await counter_service.reconcile_comment(parent.id) == 1

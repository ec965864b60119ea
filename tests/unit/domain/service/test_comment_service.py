"""Unit tests for CommentService."""

from uuid import uuid4

import pytest

from reel.domain.error import DepthLimitError, NotFoundError, ValidationError
from reel.domain.repository import CommentRepository
from reel.domain.service import CommentService
from reel.domain.value import CommentId, ModerationStatus, ReportReason, UserId, VideoId
from tests.conftest import make_comment, seed_comments
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_top_level_comment_is_trimmed_and_saved(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        video_id, author_id = VideoId(uuid4()), UserId(uuid4())

        # Act
        result = await comment_service.create_comment(
            video_id=video_id, author_id=author_id, content="  Great edit!  "
        )

        # Assert
        assert result.content == "Great edit!"
        assert result.thread.level == 0
        assert result.parent_id is None
        assert result.moderation.status == ModerationStatus.APPROVED

        saved = await comment_repo.find_by_id(result.id)
        assert saved == result

    @pytest.mark.asyncio
    async def test_reply_gets_nesting_from_parent(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        video_id, author_id = VideoId(uuid4()), UserId(uuid4())
        parent = await comment_service.create_comment(video_id, author_id, "parent")

        reply = await comment_service.create_comment(
            video_id, author_id, "reply", parent_id=parent.id
        )

        assert reply.parent_id == parent.id
        assert reply.thread.level == 1
        assert reply.thread.path == f"/{parent.id}"

    @pytest.mark.asyncio
    async def test_duplicate_mentions_are_collapsed(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        mentioned = UserId(uuid4())

        result = await comment_service.create_comment(
            VideoId(uuid4()), UserId(uuid4()), "hey", mentions=[mentioned, mentioned]
        )

        assert result.mentions == [mentioned]

    @pytest.mark.asyncio
    async def test_empty_content_is_rejected(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValidationError) as exc_info:
            await comment_service.create_comment(VideoId(uuid4()), UserId(uuid4()), " ")

        assert exc_info.value.errors[0].field == "content"

    @pytest.mark.asyncio
    async def test_overlong_content_is_rejected(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValidationError, match="cannot exceed 500"):
            await comment_service.create_comment(
                VideoId(uuid4()), UserId(uuid4()), "x" * 501
            )

    @pytest.mark.asyncio
    async def test_reply_past_depth_limit_is_rejected(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        video_id, author_id = VideoId(uuid4()), UserId(uuid4())
        parent_id = None
        for _ in range(6):
            created = await comment_service.create_comment(
                video_id, author_id, "deeper", parent_id=parent_id
            )
            parent_id = created.id
        assert created.thread.level == 5

        # Act & Assert
        with pytest.raises(DepthLimitError):
            await comment_service.create_comment(
                video_id, author_id, "too deep", parent_id=parent_id
            )


class TestRequireComment:
    """Tests for require_comment."""

    @pytest.mark.asyncio
    async def test_missing_comment_raises_not_found(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError, match="Comment not found"):
            await comment_service.require_comment(CommentId(uuid4()))


class TestEditComment:
    """Tests for edit_comment."""

    @pytest.mark.asyncio
    async def test_edit_persists_history(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = make_comment(VideoId(uuid4()), UserId(uuid4()), "first")
        await seed_comments(unit_env, comment)

        await comment_service.edit_comment(comment, "  second ")

        saved = await comment_repo.find_by_id(comment.id)
        assert saved.content == "second"
        assert saved.is_edited
        assert [r.content for r in saved.edit_history] == ["first", "second"]

    @pytest.mark.asyncio
    async def test_blank_edit_is_rejected(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment = make_comment(VideoId(uuid4()), UserId(uuid4()))

        with pytest.raises(ValidationError):
            await comment_service.edit_comment(comment, "")

    @pytest.mark.asyncio
    async def test_edit_of_stale_copy_keeps_stored_counters(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = make_comment(VideoId(uuid4()), UserId(uuid4()), "first")
        await seed_comments(unit_env, comment)
        await comment_repo.increment_replies_count(comment.id)
        await comment_repo.add_like(comment.id, UserId(uuid4()))

        # Act
        updated = await comment_service.edit_comment(comment, "second")

        # Assert
        saved = await comment_repo.find_by_id(comment.id)
        assert saved.content == "second"
        assert saved.stats.replies_count == 1
        assert saved.stats.likes_count == 1
        assert updated == saved


class TestToggleLike:
    """Tests for toggle_like."""

    @pytest.mark.asyncio
    async def test_toggle_likes_then_unlikes(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = make_comment(VideoId(uuid4()), UserId(uuid4()))
        await seed_comments(unit_env, comment)
        user_id = UserId(uuid4())

        # Act
        liked, now_liked = await comment_service.toggle_like(comment, user_id)
        unliked, still_liked = await comment_service.toggle_like(liked, user_id)

        # Assert
        assert now_liked
        assert liked.stats.likes_count == 1
        assert not still_liked
        assert unliked.stats.likes_count == 0
        assert (await comment_repo.find_by_id(comment.id)).stats.likes_count == 0

    @pytest.mark.asyncio
    async def test_likes_from_stale_copies_are_all_kept(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = make_comment(VideoId(uuid4()), UserId(uuid4()))
        await seed_comments(unit_env, comment)
        first, second = UserId(uuid4()), UserId(uuid4())

        # Act
        await comment_service.toggle_like(comment, first)
        result, now_liked = await comment_service.toggle_like(comment, second)

        # Assert
        assert now_liked
        saved = await comment_repo.find_by_id(comment.id)
        assert saved.stats.likes_count == 2
        assert {like.user_id for like in saved.likes} == {first, second}
        assert result == saved

    @pytest.mark.asyncio
    async def test_like_keeps_concurrent_reply_count(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = make_comment(VideoId(uuid4()), UserId(uuid4()))
        await seed_comments(unit_env, comment)
        await comment_repo.increment_replies_count(comment.id)

        liked = await comment_service.like_comment(comment, UserId(uuid4()))

        assert liked.stats.replies_count == 1
        assert liked.stats.likes_count == 1

    @pytest.mark.asyncio
    async def test_like_of_missing_comment_returns_it_unchanged(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment = make_comment(VideoId(uuid4()), UserId(uuid4()))

        result = await comment_service.like_comment(comment, UserId(uuid4()))

        assert result is comment


class TestReportComment:
    """Tests for report_comment."""

    @pytest.mark.asyncio
    async def test_duplicate_reason_is_not_recorded(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment = make_comment(VideoId(uuid4()), UserId(uuid4()))
        await seed_comments(unit_env, comment)

        flagged, first = await comment_service.report_comment(
            comment, ReportReason.SPAM
        )
        same, second = await comment_service.report_comment(flagged, ReportReason.SPAM)

        assert first
        assert not second
        assert same.stats.reports_count == 1

    @pytest.mark.asyncio
    async def test_five_distinct_reasons_hide_comment(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = make_comment(VideoId(uuid4()), UserId(uuid4()))
        await seed_comments(unit_env, comment)

        # Act
        for reason in ReportReason:
            comment, _ = await comment_service.report_comment(comment, reason)

        # Assert
        saved = await comment_repo.find_by_id(comment.id)
        assert saved.stats.reports_count == 5
        assert saved.moderation.status == ModerationStatus.PENDING


class TestDeleteThread:
    """Tests for delete_thread."""

    @pytest.mark.asyncio
    async def test_deletes_comment_and_descendants_only(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        video_id, author_id = VideoId(uuid4()), UserId(uuid4())
        root = make_comment(video_id, author_id, "root")
        child = make_comment(video_id, author_id, "child", root)
        grandchild = make_comment(video_id, author_id, "grandchild", child)
        sibling = make_comment(video_id, author_id, "sibling", root)
        await seed_comments(unit_env, root, child, grandchild, sibling)

        # Act
        deleted = await comment_service.delete_thread(child)

        # Assert
        assert set(deleted) == {child.id, grandchild.id}
        assert await comment_repo.find_by_id(child.id) is None
        assert await comment_repo.find_by_id(grandchild.id) is None
        assert await comment_repo.find_by_id(sibling.id) is not None
        assert await comment_repo.find_by_id(root.id) is not None

"""Unit tests for DeleteCommentUseCase."""

from uuid import uuid4

import pytest

from reel.application.usecase.comment.delete_comment import (
    DeleteCommentRequest,
    DeleteCommentUseCase,
)
from reel.application.usecase.comment.get_comment_thread import (
    GetCommentThreadRequest,
    GetCommentThreadUseCase,
)
from reel.domain.error import NotAuthorizedError, NotFoundError
from reel.domain.repository import CommentRepository, UserRepository, VideoRepository
from reel.domain.value import UserRole
from tests.conftest import (
    make_comment,
    make_user,
    seed_comments,
    seed_video_and_author,
)
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _seed_tree(env):
    """Video with counters in sync for root -> child -> grandchild plus sibling."""
    video_repo = await env.get(VideoRepository)
    comment_repo = await env.get(CommentRepository)
    video, author = await seed_video_and_author(env)
    root = make_comment(video.id, author.id, "root")
    child = make_comment(video.id, author.id, "child", root)
    grandchild = make_comment(video.id, author.id, "grandchild", child)
    sibling = make_comment(video.id, author.id, "sibling", root)
    await seed_comments(
        env,
        root.with_replies_count(2),
        child.with_replies_count(1),
        grandchild,
        sibling,
    )
    await video_repo.set_comments_count(video.id, 4)
    return video, author, (root, child, grandchild, sibling), comment_repo


class TestDeleteCommentUseCase:
    """Tests for DeleteCommentUseCase."""

    @pytest.mark.asyncio
    async def test_author_delete_cascades_and_updates_counters(self, unit_env):
        # Arrange
        use_case = await unit_env.get(DeleteCommentUseCase)
        video_repo = await unit_env.get(VideoRepository)
        video, author, tree, comment_repo = await _seed_tree(unit_env)
        root, child, grandchild, sibling = tree

        # Act
        result = await use_case.execute(
            DeleteCommentRequest(comment_id=str(child.id), user_id=str(author.id))
        )

        # Assert
        assert result.deleted_count == 2
        assert await comment_repo.find_by_id(grandchild.id) is None
        assert await comment_repo.find_by_id(sibling.id) is not None
        assert (await comment_repo.find_by_id(root.id)).stats.replies_count == 1
        assert (await video_repo.find_by_id(video.id)).stats.comments_count == 2

    @pytest.mark.asyncio
    async def test_cached_threads_inside_deleted_subtree_are_purged(self, unit_env):
        # Arrange
        use_case = await unit_env.get(DeleteCommentUseCase)
        thread_use_case = await unit_env.get(GetCommentThreadUseCase)
        video, author = await seed_video_and_author(unit_env)
        c1 = make_comment(video.id, author.id, "c1")
        c2 = make_comment(video.id, author.id, "c2", c1)
        c3 = make_comment(video.id, author.id, "c3", c2)
        await seed_comments(
            unit_env, c1.with_replies_count(1), c2.with_replies_count(1), c3
        )
        thread_request = GetCommentThreadRequest(comment_id=str(c3.id))
        await thread_use_case.execute(thread_request)
        assert (await thread_use_case.execute(thread_request)).cached is True

        # Act
        result = await use_case.execute(
            DeleteCommentRequest(comment_id=str(c2.id), user_id=str(author.id))
        )

        # Assert
        assert result.deleted_count == 2
        with pytest.raises(NotFoundError):
            await thread_use_case.execute(thread_request)

    @pytest.mark.asyncio
    async def test_admin_can_delete_any_comment(self, unit_env):
        # Arrange
        use_case = await unit_env.get(DeleteCommentUseCase)
        user_repo = await unit_env.get(UserRepository)
        admin = await user_repo.save(make_user("moderator", role=UserRole.ADMIN))
        _, _, tree, comment_repo = await _seed_tree(unit_env)
        root = tree[0]

        # Act
        result = await use_case.execute(
            DeleteCommentRequest(comment_id=str(root.id), user_id=str(admin.id))
        )

        # Assert
        assert result.deleted_count == 4
        for comment in tree:
            assert await comment_repo.find_by_id(comment.id) is None

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, unit_env):
        use_case = await unit_env.get(DeleteCommentUseCase)
        user_repo = await unit_env.get(UserRepository)
        stranger = await user_repo.save(make_user("stranger"))
        _, _, tree, comment_repo = await _seed_tree(unit_env)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                DeleteCommentRequest(
                    comment_id=str(tree[1].id), user_id=str(stranger.id)
                )
            )

        assert await comment_repo.find_by_id(tree[1].id) is not None

    @pytest.mark.asyncio
    async def test_missing_comment_raises_not_found(self, unit_env):
        use_case = await unit_env.get(DeleteCommentUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                DeleteCommentRequest(comment_id=str(uuid4()), user_id=str(uuid4()))
            )

"""Integration tests for PostgresCommentRepository.

These tests run the subtree, preview and counter SQL against a real
database.
"""

from uuid import uuid4

import pytest

from reel.domain.repository import CommentRepository
from reel.domain.value import CommentId, UserId
from tests.conftest import make_comment, minutes_ago, seed_comments, seed_video_and_author
from tests.harness import create_env_fixture

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


async def _seed_chain(env, length: int, parent=None):
    """Store a reply chain of ``length`` comments, oldest first."""
    video, author = await seed_video_and_author(env)
    chain = []
    for level in range(length):
        parent = make_comment(
            video.id,
            author.id,
            f"level {level}",
            parent,
            minutes_ago(length - level),
        )
        chain.append(parent)
    await seed_comments(env, *chain)
    return video, author, chain


class TestCommentRepositoryIntegration:
    """Integration tests for the comment tree queries."""

    @pytest.mark.asyncio
    async def test_find_thread_returns_exactly_the_subtree(self, integration_env):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        video, author, chain = await _seed_chain(integration_env, 4)
        c1, c2, c3, c4 = chain
        sibling = make_comment(video.id, author.id, "sibling", c1)
        nephew = make_comment(video.id, author.id, "nephew", sibling)
        await seed_comments(integration_env, sibling, nephew)

        # Act
        thread = await comment_repo.find_thread(c2.id, limit=50)

        # Assert
        assert [c.id for c in thread] == [c2.id, c3.id, c4.id]
        assert [c.thread.level for c in thread] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_find_thread_respects_limit(self, integration_env):
        comment_repo = await integration_env.get(CommentRepository)
        _, _, chain = await _seed_chain(integration_env, 5)

        thread = await comment_repo.find_thread(chain[0].id, limit=2)

        assert [c.id for c in thread] == [chain[0].id, chain[1].id]

    @pytest.mark.asyncio
    async def test_reply_previews_are_limited_per_parent(self, integration_env):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        video, author = await seed_video_and_author(integration_env)
        busy = make_comment(video.id, author.id, "busy", created_at=minutes_ago(60))
        quiet = make_comment(video.id, author.id, "quiet", created_at=minutes_ago(50))
        replies = [
            make_comment(video.id, author.id, f"reply {i}", busy, minutes_ago(40 - i))
            for i in range(4)
        ]
        lone = make_comment(video.id, author.id, "lone", quiet, minutes_ago(5))
        await seed_comments(integration_env, busy, quiet, *replies, lone)

        # Act
        oldest = await comment_repo.find_reply_previews([busy.id, quiet.id], 2)
        newest = await comment_repo.find_reply_previews(
            [busy.id, quiet.id], 2, newest_first=True
        )

        # Assert
        assert [c.content for c in oldest[busy.id]] == ["reply 0", "reply 1"]
        assert [c.content for c in oldest[quiet.id]] == ["lone"]
        assert [c.content for c in newest[busy.id]] == ["reply 3", "reply 2"]

    @pytest.mark.asyncio
    async def test_delete_subtree_returns_removed_ids(self, integration_env):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        video, author, chain = await _seed_chain(integration_env, 4)
        sibling = make_comment(video.id, author.id, "sibling", chain[0])
        await seed_comments(integration_env, sibling)

        # Act
        deleted = await comment_repo.delete_subtree(chain[1].id)

        # Assert
        assert set(deleted) == {c.id for c in chain[1:]}
        assert await comment_repo.count_by_video(video.id) == 2
        assert await comment_repo.count_children(chain[0].id) == 1
        assert await comment_repo.find_by_id(sibling.id) is not None

    @pytest.mark.asyncio
    async def test_replies_counter_is_floored_at_zero(self, integration_env):
        comment_repo = await integration_env.get(CommentRepository)
        _, _, (comment,) = await _seed_chain(integration_env, 1)

        await comment_repo.increment_replies_count(comment.id, 2)
        await comment_repo.increment_replies_count(comment.id, -5)

        saved = await comment_repo.find_by_id(comment.id)
        assert saved.stats.replies_count == 0


class TestCommentLikesIntegration:
    """Integration tests for the atomic like statements."""

    @pytest.mark.asyncio
    async def test_add_like_is_idempotent_and_counts_likers(self, integration_env):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        _, _, (comment,) = await _seed_chain(integration_env, 1)
        first, second = UserId(uuid4()), UserId(uuid4())

        # Act
        await comment_repo.add_like(comment.id, first)
        await comment_repo.add_like(comment.id, first)
        result = await comment_repo.add_like(comment.id, second)

        # Assert
        assert result.stats.likes_count == 2
        assert {like.user_id for like in result.likes} == {first, second}
        saved = await comment_repo.find_by_id(comment.id)
        assert saved.stats.likes_count == 2

    @pytest.mark.asyncio
    async def test_remove_like_drops_only_that_user(self, integration_env):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        _, _, (comment,) = await _seed_chain(integration_env, 1)
        stays, leaves = UserId(uuid4()), UserId(uuid4())
        await comment_repo.add_like(comment.id, stays)
        await comment_repo.add_like(comment.id, leaves)

        # Act
        result = await comment_repo.remove_like(comment.id, leaves)
        again = await comment_repo.remove_like(comment.id, leaves)

        # Assert
        assert [like.user_id for like in result.likes] == [stays]
        assert result.stats.likes_count == 1
        assert again.stats.likes_count == 1

    @pytest.mark.asyncio
    async def test_save_keeps_likes_and_replies_written_since_read(
        self, integration_env
    ):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        _, _, (comment,) = await _seed_chain(integration_env, 1)
        await comment_repo.add_like(comment.id, UserId(uuid4()))
        await comment_repo.increment_replies_count(comment.id)

        # Act
        saved = await comment_repo.save(comment.edit("edited"))

        # Assert
        assert saved.content == "edited"
        assert saved.stats.likes_count == 1
        assert saved.stats.replies_count == 1

    @pytest.mark.asyncio
    async def test_like_on_missing_comment_returns_none(self, integration_env):
        comment_repo = await integration_env.get(CommentRepository)

        assert await comment_repo.add_like(CommentId(uuid4()), UserId(uuid4())) is None

"""Test configuration and helpers."""

from datetime import datetime, timedelta
from uuid import uuid4

from reel.domain.model import Comment, User, Video
from reel.domain.repository import CommentRepository, UserRepository, VideoRepository
from reel.domain.value import CommentId, ThreadInfo, UserId, UserRole, VideoId


def make_user(username: str = "viewer", role: UserRole = UserRole.USER) -> User:
    """Build a user with a fresh ID."""
    return User(id=UserId(uuid4()), username=username, role=role)


def make_video(creator_id: UserId | None = None, comments_count: int = 0) -> Video:
    """Build a video with a fresh ID."""
    video = Video(
        id=VideoId(uuid4()),
        creator_id=creator_id or UserId(uuid4()),
        title="Sunset timelapse",
    )
    stats = video.stats.model_copy(update={"comments_count": comments_count})
    return video.model_copy(update={"stats": stats})


def make_comment(
    video_id: VideoId,
    author_id: UserId,
    content: str = "Nice shot",
    parent: Comment | None = None,
    created_at: datetime | None = None,
) -> Comment:
    """Build a comment, nested under ``parent`` when given.

    Bypasses the services so tests can set up arbitrary trees.
    """
    thread = ThreadInfo()
    if parent is not None:
        path = f"{parent.thread.path}/{parent.id}"
        thread = ThreadInfo(level=parent.thread.level + 1, path=path)
    created_at = created_at or datetime.now()
    return Comment(
        id=CommentId(uuid4()),
        video_id=video_id,
        author_id=author_id,
        content=content,
        parent_id=parent.id if parent else None,
        thread=thread,
        created_at=created_at,
        updated_at=created_at,
    )


async def seed_video_and_author(env) -> tuple[Video, User]:
    """Store a video and a commenting user in the environment's repositories."""
    user_repo = await env.get(UserRepository)
    video_repo = await env.get(VideoRepository)
    author = await user_repo.save(make_user("commenter"))
    video = await video_repo.save(make_video(creator_id=author.id))
    return video, author


async def seed_comments(env, *comments: Comment) -> None:
    """Store comments directly, without touching counters."""
    repo = await env.get(CommentRepository)
    for comment in comments:
        await repo.save(comment)


def minutes_ago(minutes: int) -> datetime:
    return datetime.now() - timedelta(minutes=minutes)

"""Response shapes and helpers shared by the comment use cases."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from reel.domain.model import Comment, CommentNode, User
from reel.domain.service import JWTService, UserService
from reel.domain.value import ModerationStatus, UserId


class AuthorItem(BaseModel):
    """Public author fields embedded in comment responses."""

    user_id: str
    username: str
    display_name: str | None
    avatar_url: str | None


class CommentItem(BaseModel):
    """Comment item in response."""

    comment_id: str
    video_id: str
    author_id: str
    author: Optional[AuthorItem]
    content: str
    parent_id: str | None
    mentions: list[str]
    level: int
    path: str
    moderation_status: ModerationStatus
    likes_count: int
    replies_count: int
    is_edited: bool
    is_liked: bool
    created_at: datetime
    updated_at: datetime
    replies: list["CommentItem"] = []


def to_author_item(user: User | None) -> AuthorItem | None:
    if user is None:
        return None
    return AuthorItem(
        user_id=str(user.id),
        username=user.username,
        display_name=user.display_name,
        avatar_url=user.avatar_url,
    )


def to_comment_item(
    comment: Comment,
    author: User | None,
    viewer_id: UserId | None,
    replies: list[CommentItem] | None = None,
) -> CommentItem:
    """Build a response item.

    ``is_liked`` is computed here, per viewer, so that the cached read models
    it is built from can be shared between viewers.
    """
    return CommentItem(
        comment_id=str(comment.id),
        video_id=str(comment.video_id),
        author_id=str(comment.author_id),
        author=to_author_item(author),
        content=comment.content,
        parent_id=str(comment.parent_id) if comment.parent_id else None,
        mentions=[str(m) for m in comment.mentions],
        level=comment.thread.level,
        path=comment.thread.path,
        moderation_status=comment.moderation.status,
        likes_count=comment.stats.likes_count,
        replies_count=comment.stats.replies_count,
        is_edited=comment.is_edited,
        is_liked=viewer_id is not None and comment.is_liked_by(viewer_id),
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        replies=replies or [],
    )


def node_to_item(node: CommentNode, viewer_id: UserId | None) -> CommentItem:
    return to_comment_item(
        node.comment,
        node.author,
        viewer_id,
        replies=[node_to_item(reply, viewer_id) for reply in node.replies],
    )


async def populate_authors(
    nodes: list[CommentNode], user_service: UserService
) -> list[CommentNode]:
    """Attach authors to every node and reply preview in one batch lookup."""
    author_ids: list[UserId] = []
    for node in nodes:
        author_ids.append(node.comment.author_id)
        author_ids.extend(reply.comment.author_id for reply in node.replies)

    users = await user_service.get_users_by_ids(author_ids)

    def _attach(node: CommentNode) -> CommentNode:
        return node.model_copy(
            update={
                "author": users.get(node.comment.author_id),
                "replies": [_attach(reply) for reply in node.replies],
            }
        )

    return [_attach(node) for node in nodes]


def resolve_viewer(jwt_service: JWTService, auth_token: str | None) -> UserId | None:
    """Viewer ID from an optional token; anonymous when missing or invalid."""
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        return None
    try:
        return UserId(UUID(user_id))
    except ValueError:
        return None

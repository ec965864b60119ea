"""Typed identifiers.

All ids are UUIDs; the NewTypes keep a video id from being passed where a
comment id is expected.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
VideoId = NewType("VideoId", UUID)
CommentId = NewType("CommentId", UUID)

import logging

from sqlalchemy import func

from vtube.models import db, Video, Subscription, Like
from vtube.models_auth import User
from vtube.services.validation import require_id, store_operation

logger = logging.getLogger(__name__)


@store_operation
def get_channel_videos(channel_id: str) -> list[dict]:
    """List a channel's videos with their owner; videos without a resolvable owner are dropped."""
    channel_id = require_id(channel_id, "channel")

    rows = db.session.query(Video, User).join(
        User, User.id == Video.owner_id
    ).filter(
        Video.owner_id == channel_id
    ).order_by(Video.created_at, Video.id).all()

    return [
        {
            "id": video.id,
            "thumbnail": video.thumbnail,
            "title": video.title,
            "description": video.description,
            "duration": video.duration,
            "views": video.views,
            "owner": {
                "id": owner.id,
                "username": owner.username,
                "email": owner.email,
                "avatar": owner.avatar,
            },
        }
        for video, owner in rows
    ]


@store_operation
def get_channel_stats(channel_id: str) -> dict:
    """Aggregate video, view, subscriber and like totals for a channel."""
    channel_id = require_id(channel_id, "channel")

    total_videos, total_views = db.session.query(
        func.count(Video.id), func.coalesce(func.sum(Video.views), 0)
    ).filter(Video.owner_id == channel_id).one()

    total_subscribers = db.session.query(func.count(Subscription.id)).filter(
        Subscription.channel_id == channel_id
    ).scalar()

    total_likes = db.session.query(func.count(Like.id)).join(
        Video, Video.id == Like.video_id
    ).filter(Video.owner_id == channel_id).scalar()

    return {
        "totalVideos": total_videos,
        "totalViews": int(total_views),
        "totalSubscribers": total_subscribers,
        "totalLikes": total_likes,
    }

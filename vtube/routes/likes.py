from flask import Blueprint
from flask_login import login_required, current_user

from vtube.errors import NotFound
from vtube.models import db, Video, Tweet, Like
from vtube.responses import api_response
from vtube.services.validation import require_id

likes_bp = Blueprint('likes', __name__, url_prefix='/api/v1/likes')


def toggle_like(**target) -> bool:
    """Like the target if the current user has not yet, otherwise unlike it."""
    existing = Like.query.filter_by(liked_by_id=current_user.id, **target).first()
    if existing:
        db.session.delete(existing)
        db.session.commit()
        return False

    db.session.add(Like(liked_by_id=current_user.id, **target))
    db.session.commit()
    return True


@likes_bp.route('/toggle/v/<video_id>', methods=['POST'])
@login_required
def toggle_video_like(video_id):
    video = db.session.get(Video, require_id(video_id, "video"))
    if not video:
        raise NotFound("No video found with the provided id")
    is_liked = toggle_like(video_id=video.id)
    return api_response(200, {"isLiked": is_liked}, "Successfully toggled video like")


@likes_bp.route('/toggle/t/<tweet_id>', methods=['POST'])
@login_required
def toggle_tweet_like(tweet_id):
    tweet = db.session.get(Tweet, require_id(tweet_id, "tweet"))
    if not tweet:
        raise NotFound("No tweet found with the provided id")
    is_liked = toggle_like(tweet_id=tweet.id)
    return api_response(200, {"isLiked": is_liked}, "Successfully toggled tweet like")


@likes_bp.route('/videos')
@login_required
def liked_videos():
    videos = db.session.query(Video).join(
        Like, Like.video_id == Video.id
    ).filter(
        Like.liked_by_id == current_user.id
    ).order_by(Like.created_at.desc()).all()
    return api_response(200, [video.to_dict() for video in videos], "Successfully fetched liked videos")

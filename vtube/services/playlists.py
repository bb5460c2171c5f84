"""
Playlist materialization and membership mutations.

Reads join playlists, their member videos and the videos' owners into
JSON-ready summaries. Writes validate every argument before the store is
touched, and the membership append relies on the unique
(playlist_id, video_id) constraint so that the duplicate check and the
insert are a single statement.
"""
import logging
from collections import defaultdict
from datetime import datetime

from sqlalchemy.exc import IntegrityError

from vtube.errors import Conflict, Forbidden, NotFound
from vtube.models import db, Video, Playlist, PlaylistVideo
from vtube.models_auth import User
from vtube.services.validation import require_id, require_text, store_operation

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 5000


def _get_playlist(playlist_id: str, actor_id: str | None = None) -> Playlist:
    playlist = db.session.get(Playlist, playlist_id)
    if not playlist:
        raise NotFound("No playlist found with the provided id")
    if actor_id is not None and playlist.owner_id != actor_id:
        raise Forbidden("You don't have permission to modify this playlist")
    return playlist


def _owner_summary(user: User) -> dict:
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "avatar": user.avatar,
    }


@store_operation
def get_user_playlists(user_id: str) -> list[dict]:
    """List a user's playlists with their size and cover thumbnail."""
    user_id = require_id(user_id, "user")

    playlists = Playlist.query.filter_by(owner_id=user_id).order_by(
        Playlist.created_at, Playlist.id
    ).all()
    if not playlists:
        return []

    # Member ids that no longer resolve to a video are skipped
    thumbnails = defaultdict(list)
    rows = db.session.query(PlaylistVideo.playlist_id, Video.thumbnail).join(
        Video, Video.id == PlaylistVideo.video_id
    ).filter(
        PlaylistVideo.playlist_id.in_([p.id for p in playlists])
    ).order_by(PlaylistVideo.position, PlaylistVideo.id).all()
    for playlist_id, thumbnail in rows:
        thumbnails[playlist_id].append(thumbnail)

    return [
        {
            "id": playlist.id,
            "name": playlist.name,
            "description": playlist.description,
            "numberOfVideos": len(thumbnails[playlist.id]),
            "owner": playlist.owner_id,
            "playlistThumbnail": thumbnails[playlist.id][0] if thumbnails[playlist.id] else None,
        }
        for playlist in playlists
    ]


@store_operation
def get_playlist_by_id(playlist_id: str) -> dict:
    """Materialize a playlist with its videos and each video's owner.

    Videos whose owner no longer exists are kept without an ``owner`` key.
    """
    playlist_id = require_id(playlist_id, "playlist")
    playlist = _get_playlist(playlist_id)

    rows = db.session.query(Video, User).join(
        PlaylistVideo, PlaylistVideo.video_id == Video.id
    ).outerjoin(
        User, User.id == Video.owner_id
    ).filter(
        PlaylistVideo.playlist_id == playlist.id
    ).order_by(PlaylistVideo.position, PlaylistVideo.id).all()

    videos = []
    for video, owner in rows:
        item = {
            "id": video.id,
            "thumbnail": video.thumbnail,
            "duration": video.duration,
            "title": video.title,
            "views": video.views,
        }
        if owner is not None:
            item["owner"] = _owner_summary(owner)
        videos.append(item)

    return {
        "id": playlist.id,
        "name": playlist.name,
        "description": playlist.description,
        "owner": playlist.owner_id,
        "videos": videos,
        "numberOfVideos": len(videos),
        "playlistThumbnail": videos[0]["thumbnail"] if videos else None,
        "createdAt": playlist.created_at.isoformat(),
        "updatedAt": playlist.updated_at.isoformat(),
    }


@store_operation
def create_playlist(name: str, description: str, owner_id: str) -> dict:
    name = require_text(name, "Name", NAME_MAX_LENGTH)
    description = require_text(description, "Description", DESCRIPTION_MAX_LENGTH)
    owner_id = require_id(owner_id, "owner")

    playlist = Playlist(name=name, description=description, owner_id=owner_id)
    db.session.add(playlist)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict(f"A playlist named '{name}' already exists")

    logger.info(f"Playlist '{name}' created for user {owner_id}")
    return playlist.to_dict()


@store_operation
def add_video_to_playlist(playlist_id: str, video_id: str, actor_id: str | None = None) -> dict:
    playlist_id = require_id(playlist_id, "playlist")
    video_id = require_id(video_id, "video")

    playlist = _get_playlist(playlist_id, actor_id)
    if not db.session.get(Video, video_id):
        raise NotFound("No video found with the provided id")

    max_position = db.session.query(db.func.max(PlaylistVideo.position)).filter_by(
        playlist_id=playlist.id
    ).scalar()
    next_position = 0 if max_position is None else max_position + 1

    db.session.add(PlaylistVideo(playlist_id=playlist.id, video_id=video_id, position=next_position))
    playlist.updated_at = datetime.utcnow()
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict("Video already exists in playlist")

    db.session.refresh(playlist)
    logger.info(f"Video {video_id} added to playlist {playlist.id}")
    return playlist.to_dict()


@store_operation
def remove_video_from_playlist(playlist_id: str, video_id: str, actor_id: str | None = None) -> dict:
    """Remove every occurrence of a video; removing an absent video is a no-op."""
    playlist_id = require_id(playlist_id, "playlist")
    video_id = require_id(video_id, "video")

    playlist = _get_playlist(playlist_id, actor_id)
    removed = PlaylistVideo.query.filter_by(
        playlist_id=playlist.id, video_id=video_id
    ).delete(synchronize_session=False)
    if removed:
        playlist.updated_at = datetime.utcnow()
    db.session.commit()

    db.session.refresh(playlist)
    if removed:
        logger.info(f"Video {video_id} removed from playlist {playlist.id}")
    return playlist.to_dict()


@store_operation
def delete_playlist(playlist_id: str, actor_id: str | None = None) -> None:
    playlist_id = require_id(playlist_id, "playlist")

    playlist = _get_playlist(playlist_id, actor_id)
    db.session.delete(playlist)
    db.session.commit()
    logger.info(f"Playlist {playlist_id} deleted")


@store_operation
def update_playlist(playlist_id: str, name: str, description: str, actor_id: str | None = None) -> dict:
    playlist_id = require_id(playlist_id, "playlist")
    name = require_text(name, "Name", NAME_MAX_LENGTH)
    description = require_text(description, "Description", DESCRIPTION_MAX_LENGTH)

    playlist = _get_playlist(playlist_id, actor_id)
    playlist.name = name
    playlist.description = description
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict(f"A playlist named '{name}' already exists")

    return playlist.to_dict()

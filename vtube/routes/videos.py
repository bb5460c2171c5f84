import logging
import uuid
from pathlib import Path
from flask import Blueprint, current_app, request
from flask_login import current_user, login_required
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from vtube.errors import Forbidden, InternalError, InvalidArgument, NotFound
from vtube.models import db, Video, PlaylistVideo, Like
from vtube.responses import api_response, request_data
from vtube.services.validation import require_id, require_text

logger = logging.getLogger(__name__)

videos_bp = Blueprint('videos', __name__, url_prefix='/api/v1/videos')

ALLOWED_VIDEO_EXTENSIONS = {'mp4', 'mkv', 'mov', 'webm'}
ALLOWED_IMAGE_EXTENSIONS = {'jpg', 'jpeg', 'png', 'webp'}


def allowed_file(filename: str, extensions: set[str]) -> bool:
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in extensions


def get_media_storage():
    return current_app.extensions["media_storage"]


def require_upload(field: str, extensions: set[str]) -> FileStorage:
    file = request.files.get(field)
    if file is None or file.filename == '':
        raise InvalidArgument(f"{field} is required")
    if not allowed_file(file.filename, extensions):
        raise InvalidArgument(f"Unsupported file type for {field}")
    return file


def save_upload(file: FileStorage) -> Path:
    """Store an uploaded file in the upload folder and return its path."""
    upload_folder = Path(current_app.config["UPLOAD_FOLDER"])
    upload_folder.mkdir(parents=True, exist_ok=True)
    local_path = upload_folder / f"{uuid.uuid4().hex}_{secure_filename(file.filename)}"
    file.save(local_path)
    return local_path


def get_video_or_404(video_id: str) -> Video:
    video = db.session.get(Video, require_id(video_id, "video"))
    if not video:
        raise NotFound("No video found with the provided id")
    return video


def get_owned_video(video_id: str) -> Video:
    video = get_video_or_404(video_id)
    if video.owner_id != current_user.id:
        raise Forbidden("You don't have permission to modify this video")
    return video


@videos_bp.route('/')
def index():
    """List published videos, newest first, optionally filtered by owner or title."""
    query = Video.query.filter_by(is_published=True)

    user_id = request.args.get('userId', '').strip()
    if user_id:
        query = query.filter_by(owner_id=require_id(user_id, "user"))

    search = request.args.get('q', '').strip().lower()
    if search:
        query = query.filter(db.func.lower(Video.title).contains(search))

    videos = query.order_by(Video.created_at.desc(), Video.id).all()
    return api_response(200, [video.to_dict() for video in videos], "Successfully fetched videos")


@videos_bp.route('/', methods=['POST'])
@login_required
def publish_video():
    data = request_data()
    title = require_text(data.get('title'), "Title", 255)
    description = require_text(data.get('description'), "Description", 5000)

    video_file = require_upload('videoFile', ALLOWED_VIDEO_EXTENSIONS)
    thumbnail_file = require_upload('thumbnail', ALLOWED_IMAGE_EXTENSIONS)

    video_path = save_upload(video_file)
    thumbnail_path = save_upload(thumbnail_file)

    storage = get_media_storage()
    uploaded_video = storage.upload(video_path)
    if not uploaded_video:
        thumbnail_path.unlink(missing_ok=True)
        raise InternalError("There was a problem while uploading the video")

    uploaded_thumbnail = storage.upload(thumbnail_path)
    if not uploaded_thumbnail:
        storage.delete(uploaded_video["public_id"], resource_type="video")
        raise InternalError("There was a problem while uploading the thumbnail")

    video = Video(
        video_file=uploaded_video["secure_url"],
        video_file_public_id=uploaded_video["public_id"],
        thumbnail=uploaded_thumbnail["secure_url"],
        thumbnail_public_id=uploaded_thumbnail["public_id"],
        title=title,
        description=description,
        duration=uploaded_video.get("duration") or 0,
        owner_id=current_user.id,
    )
    db.session.add(video)
    db.session.commit()

    logger.info(f"User '{current_user.username}' published video '{title}' ({video.id})")
    return api_response(201, video.to_dict(), "Successfully published video")


@videos_bp.route('/<video_id>')
def watch_video(video_id):
    video = get_video_or_404(video_id)

    # Unpublished videos are only visible to their owner
    is_owner = current_user.is_authenticated and video.owner_id == current_user.id
    if not video.is_published and not is_owner:
        raise NotFound("No video found with the provided id")

    video.increment_views()
    db.session.commit()
    return api_response(200, video.to_dict(), "Successfully fetched video")


@videos_bp.route('/<video_id>', methods=['PATCH'])
@login_required
def update_video(video_id):
    video = get_owned_video(video_id)
    data = request_data()
    title = require_text(data.get('title'), "Title", 255)
    description = require_text(data.get('description'), "Description", 5000)

    old_thumbnail_public_id = None
    if 'thumbnail' in request.files:
        thumbnail_path = save_upload(require_upload('thumbnail', ALLOWED_IMAGE_EXTENSIONS))
        uploaded_thumbnail = get_media_storage().upload(thumbnail_path)
        if not uploaded_thumbnail:
            raise InternalError("There was a problem while uploading the thumbnail")
        old_thumbnail_public_id = video.thumbnail_public_id
        video.thumbnail = uploaded_thumbnail["secure_url"]
        video.thumbnail_public_id = uploaded_thumbnail["public_id"]

    video.title = title
    video.description = description
    db.session.commit()

    if old_thumbnail_public_id:
        get_media_storage().delete(old_thumbnail_public_id)

    return api_response(200, video.to_dict(), "Successfully updated video")


@videos_bp.route('/<video_id>', methods=['DELETE'])
@login_required
def delete_video(video_id):
    """Delete a video, its playlist entries, its likes and its remote assets."""
    video = get_owned_video(video_id)
    video_file_public_id = video.video_file_public_id
    thumbnail_public_id = video.thumbnail_public_id

    PlaylistVideo.query.filter_by(video_id=video.id).delete()
    Like.query.filter_by(video_id=video.id).delete()
    db.session.delete(video)
    db.session.commit()

    storage = get_media_storage()
    if video_file_public_id:
        storage.delete(video_file_public_id, resource_type="video")
    if thumbnail_public_id:
        storage.delete(thumbnail_public_id)

    logger.info(f"User '{current_user.username}' deleted video {video_id}")
    return api_response(200, None, "Successfully deleted video")


@videos_bp.route('/toggle/publish/<video_id>', methods=['PATCH'])
@login_required
def toggle_publish(video_id):
    video = get_owned_video(video_id)
    video.toggle_publish()
    db.session.commit()
    return api_response(200, {"isPublished": video.is_published}, "Successfully toggled publish status")

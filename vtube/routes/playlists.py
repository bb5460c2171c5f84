from flask import Blueprint
from flask_login import login_required, current_user

from vtube.responses import api_response, request_data
from vtube.services import playlists

playlists_bp = Blueprint('playlists', __name__, url_prefix='/api/v1/playlist')


@playlists_bp.route('/', methods=['POST'])
@login_required
def create():
    """Create a new, empty playlist owned by the current user."""
    data = request_data()
    playlist = playlists.create_playlist(data.get('name'), data.get('description'), current_user.id)
    return api_response(201, playlist, "Successfully created playlist")


@playlists_bp.route('/user/<user_id>')
@login_required
def user_playlists(user_id):
    """List all playlists of a user."""
    result = playlists.get_user_playlists(user_id)
    if not result:
        return api_response(200, result, "No playlist created yet")
    return api_response(200, result, "Successfully found playlist")


@playlists_bp.route('/<playlist_id>')
@login_required
def view(playlist_id):
    playlist = playlists.get_playlist_by_id(playlist_id)
    return api_response(200, playlist, "Successfully sent playlist")


@playlists_bp.route('/<playlist_id>', methods=['PATCH'])
@login_required
def edit(playlist_id):
    data = request_data()
    playlist = playlists.update_playlist(
        playlist_id, data.get('name'), data.get('description'), actor_id=current_user.id
    )
    return api_response(200, playlist, "Successfully updated playlist")


@playlists_bp.route('/<playlist_id>', methods=['DELETE'])
@login_required
def delete(playlist_id):
    playlists.delete_playlist(playlist_id, actor_id=current_user.id)
    return api_response(200, None, "Successfully deleted playlist")


@playlists_bp.route('/add/<video_id>/<playlist_id>', methods=['PATCH'])
@login_required
def add_video(video_id, playlist_id):
    playlist = playlists.add_video_to_playlist(playlist_id, video_id, actor_id=current_user.id)
    return api_response(200, playlist, "Successfully added video to playlist")


@playlists_bp.route('/remove/<video_id>/<playlist_id>', methods=['PATCH'])
@login_required
def remove_video(video_id, playlist_id):
    playlist = playlists.remove_video_from_playlist(playlist_id, video_id, actor_id=current_user.id)
    return api_response(200, playlist, "Successfully deleted video(s) from playlist")

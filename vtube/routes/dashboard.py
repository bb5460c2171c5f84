from flask import Blueprint
from flask_login import login_required, current_user

from vtube.responses import api_response
from vtube.services import channels

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/api/v1/dashboard')


@dashboard_bp.route('/stats')
@login_required
def stats():
    """Statistics of the logged-in user's channel."""
    channel_stats = channels.get_channel_stats(current_user.id)
    return api_response(200, channel_stats, "Successfully sent channel statistics")


@dashboard_bp.route('/videos/<channel_id>')
@login_required
def videos(channel_id):
    channel_videos = channels.get_channel_videos(channel_id)
    if not channel_videos:
        return api_response(200, channel_videos, "No videos uploaded yet")
    return api_response(200, channel_videos, "Successfully sent videos")

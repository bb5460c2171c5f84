from flask import Blueprint
from flask_login import login_required, current_user

from vtube.errors import InvalidArgument, NotFound
from vtube.models import db, Subscription
from vtube.models_auth import User
from vtube.responses import api_response
from vtube.services.validation import require_id

subscriptions_bp = Blueprint('subscriptions', __name__, url_prefix='/api/v1/subscriptions')


@subscriptions_bp.route('/c/<channel_id>', methods=['POST'])
@login_required
def toggle_subscription(channel_id):
    channel_id = require_id(channel_id, "channel")
    if channel_id == current_user.id:
        raise InvalidArgument("You cannot subscribe to your own channel")
    if not db.session.get(User, channel_id):
        raise NotFound("No channel found with the provided id")

    existing = Subscription.query.filter_by(subscriber_id=current_user.id, channel_id=channel_id).first()
    if existing:
        db.session.delete(existing)
        db.session.commit()
        return api_response(200, {"isSubscribed": False}, "Successfully unsubscribed")

    db.session.add(Subscription(subscriber_id=current_user.id, channel_id=channel_id))
    db.session.commit()
    return api_response(200, {"isSubscribed": True}, "Successfully subscribed")


@subscriptions_bp.route('/c/<channel_id>')
@login_required
def channel_subscribers(channel_id):
    """List the users subscribed to a channel."""
    subscribers = db.session.query(User).join(
        Subscription, Subscription.subscriber_id == User.id
    ).filter(
        Subscription.channel_id == require_id(channel_id, "channel")
    ).order_by(Subscription.created_at.desc()).all()

    data = [
        {"id": user.id, "username": user.username, "avatar": user.avatar}
        for user in subscribers
    ]
    return api_response(200, data, "Successfully fetched subscribers")

#!/usr/bin/env python
"""
Tool to populate the database with fake users, videos, playlists and
subscriptions for testing purposes. Media URLs point at placeholder images,
nothing is uploaded to Cloudinary.

Usage:
    python tools/populate_data.py populate [OPTIONS]
    python tools/populate_data.py clear
    python tools/populate_data.py --help
"""
import random
import secrets
import string
import sys
from pathlib import Path
from typing import Annotated

import typer

# Add parent directory to path to import vtube
sys.path.insert(0, str(Path(__file__).parent.parent))

from vtube.app import create_app
from vtube.models import db, Video, Playlist, PlaylistVideo, Subscription, Like
from vtube.models_auth import User

app = typer.Typer(help="Populate database with fake data for testing.")

FAKE_PREFIX = "fake_"
PLACEHOLDER_VIDEO = "https://res.cloudinary.com/demo/video/upload/dog.mp4"
PLACEHOLDER_THUMBNAIL = "https://picsum.photos/seed/{seed}/640/360"

TITLES = [
    "Introduction to {topic}",
    "Advanced {topic} Tutorial",
    "{topic} for Beginners",
    "Mastering {topic}",
    "Learn {topic} in 10 Minutes",
    "{topic} Deep Dive",
    "{topic} Tips and Tricks",
    "{topic} Explained",
]

TOPICS = [
    "Python", "Flask", "SQLAlchemy", "Docker", "Kubernetes", "PostgreSQL",
    "Machine Learning", "Web Development", "API Design", "Git", "Linux",
    "Redis", "Testing", "CI/CD", "TypeScript", "Rust",
]

PLAYLIST_NAMES = ["Watch later", "Favorites", "Tutorials", "Music", "To review", "Inspiration"]


def generate_password() -> str:
    """Generate a password that passes User.validate_password."""
    password = [
        secrets.choice(string.ascii_uppercase),
        secrets.choice(string.ascii_lowercase),
        secrets.choice(string.digits),
        secrets.choice("!@#$%^&*()-_=+"),
    ]
    all_chars = string.ascii_letters + string.digits + "!@#$%^&*()-_=+"
    password.extend(secrets.choice(all_chars) for _ in range(12))
    random.shuffle(password)
    return "".join(password)


def create_fake_users(count: int) -> list[User]:
    users = []
    for i in range(count):
        username = f"{FAKE_PREFIX}user_{i}"
        existing = User.query.filter_by(username=username).first()
        if existing:
            users.append(existing)
            continue

        user = User(
            username=username,
            email=f"{username}@example.com",
            full_name=f"Fake User {i}",
            avatar=PLACEHOLDER_THUMBNAIL.format(seed=username),
        )
        user.set_password(generate_password())
        db.session.add(user)
        users.append(user)

    db.session.commit()
    return users


def create_fake_videos(count: int, owners: list[User]) -> list[Video]:
    videos = []
    for i in range(count):
        topic = random.choice(TOPICS)
        video = Video(
            video_file=PLACEHOLDER_VIDEO,
            thumbnail=PLACEHOLDER_THUMBNAIL.format(seed=f"{FAKE_PREFIX}{i}"),
            title=f"{FAKE_PREFIX}{random.choice(TITLES).format(topic=topic)}",
            description=f"Everything you need to know about {topic}.",
            duration=round(random.uniform(30, 3600), 2),
            views=random.randint(0, 10000),
            is_published=random.random() > 0.2,
            owner_id=random.choice(owners).id,
        )
        db.session.add(video)
        videos.append(video)

        if (i + 1) % 10 == 0:
            typer.echo(f"Created {i + 1}/{count} videos...")

    db.session.commit()
    return videos


def create_fake_playlists(count: int, owners: list[User], videos: list[Video]) -> list[Playlist]:
    playlists = []
    for i in range(count):
        owner = random.choice(owners)
        playlist = Playlist(
            name=f"{FAKE_PREFIX}{random.choice(PLAYLIST_NAMES)} {i}",
            description=f"Playlist number {i} of {owner.username}",
            owner_id=owner.id,
        )
        db.session.add(playlist)
        db.session.flush()

        members = random.sample(videos, k=min(len(videos), random.randint(0, 8)))
        for position, video in enumerate(members):
            db.session.add(PlaylistVideo(playlist_id=playlist.id, video_id=video.id, position=position))
        playlists.append(playlist)

    db.session.commit()
    return playlists


def create_fake_subscriptions(users: list[User]) -> int:
    created = 0
    for subscriber in users:
        for channel in users:
            if subscriber.id == channel.id or random.random() > 0.5:
                continue
            if Subscription.query.filter_by(subscriber_id=subscriber.id, channel_id=channel.id).first():
                continue
            db.session.add(Subscription(subscriber_id=subscriber.id, channel_id=channel.id))
            created += 1
    db.session.commit()
    return created


def clear_fake_data() -> dict[str, int]:
    """Remove every record created by this tool."""
    results = {"playlists": 0, "videos": 0, "users": 0, "subscriptions": 0, "likes": 0}

    fake_user_ids = [u.id for u in User.query.filter(User.username.like(f"{FAKE_PREFIX}%")).all()]

    fake_playlists = Playlist.query.filter(Playlist.name.like(f"{FAKE_PREFIX}%")).all()
    for playlist in fake_playlists:
        db.session.delete(playlist)
    results["playlists"] = len(fake_playlists)

    fake_video_ids = [v.id for v in Video.query.filter(Video.title.like(f"{FAKE_PREFIX}%")).all()]
    if fake_video_ids:
        results["likes"] += Like.query.filter(Like.video_id.in_(fake_video_ids)).delete(synchronize_session=False)
        PlaylistVideo.query.filter(PlaylistVideo.video_id.in_(fake_video_ids)).delete(synchronize_session=False)
        results["videos"] = Video.query.filter(Video.id.in_(fake_video_ids)).delete(synchronize_session=False)

    if fake_user_ids:
        results["likes"] += Like.query.filter(Like.liked_by_id.in_(fake_user_ids)).delete(synchronize_session=False)
        results["subscriptions"] = Subscription.query.filter(
            db.or_(Subscription.subscriber_id.in_(fake_user_ids), Subscription.channel_id.in_(fake_user_ids))
        ).delete(synchronize_session=False)
        results["users"] = User.query.filter(User.id.in_(fake_user_ids)).delete(synchronize_session=False)

    db.session.commit()
    return results


@app.command()
def populate(
    users: Annotated[int, typer.Option("--users", "-u", help="Number of fake users to create")] = 5,
    videos: Annotated[int, typer.Option("--videos", "-n", help="Number of fake videos to create")] = 50,
    playlists: Annotated[int, typer.Option("--playlists", "-p", help="Number of fake playlists to create")] = 10,
) -> None:
    """Populate the database with fake users, videos, playlists and subscriptions."""
    if users < 1:
        typer.echo("At least one user is required to own the videos.", err=True)
        raise typer.Exit(code=1)

    flask_app = create_app()

    with flask_app.app_context():
        typer.echo(f"Creating {users} fake users...")
        fake_users = create_fake_users(users)

        typer.echo(f"Creating {videos} fake videos...")
        fake_videos = create_fake_videos(videos, fake_users)

        typer.echo(f"Creating {playlists} fake playlists...")
        create_fake_playlists(playlists, fake_users, fake_videos)

        subscriptions = create_fake_subscriptions(fake_users)

        typer.echo(
            f"\nDone: {len(fake_users)} users, {len(fake_videos)} videos, "
            f"{playlists} playlists, {subscriptions} subscriptions."
        )


@app.command()
def clear() -> None:
    """Remove all fake data created by this tool."""
    flask_app = create_app()

    with flask_app.app_context():
        results = clear_fake_data()

    typer.echo("Removed:")
    for name, count in results.items():
        typer.echo(f"  - {count} {name}")


if __name__ == "__main__":
    app()

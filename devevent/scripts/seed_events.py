"""CLI command for loading the sample event catalog.

Usage:
    flask seed-events              # Insert sample events that are not present yet
    flask seed-events --dry-run    # Only report what would be inserted
"""

from __future__ import annotations

import json

import click
from flask.cli import with_appcontext

SAMPLE_EVENTS = [
    {
        "title": "React Summit 2025",
        "image": "/images/event1.png",
        "location": "Amsterdam, Netherlands",
        "venue": "Kromhouthal",
        "date": "2025-06-03",
        "time": "09:00",
        "mode": "hybrid",
        "audience": "React developers",
        "organizer": "GitNation",
        "tags": ["react", "frontend", "javascript"],
    },
    {
        "title": "Next.js Conf 2025",
        "image": "/images/event2.png",
        "location": "San Francisco, CA",
        "venue": "SVN West",
        "date": "2025-09-23",
        "time": "08:30",
        "mode": "hybrid",
        "audience": "Next.js and React developers",
        "organizer": "Vercel",
        "tags": ["nextjs", "react", "web"],
    },
    {
        "title": "Web3 Developer Summit",
        "image": "/images/event3.png",
        "location": "Singapore",
        "venue": "Marina Bay Sands Expo",
        "date": "2025-07-15",
        "time": "10:00",
        "mode": "offline",
        "audience": "Blockchain engineers",
        "organizer": "Web3 Foundation",
        "tags": ["web3", "blockchain"],
    },
    {
        "title": "JavaScript Annual Hackathon",
        "image": "/images/event4.png",
        "location": "Berlin, Germany",
        "venue": "Factory Berlin",
        "date": "2025-08-10",
        "time": "09:00",
        "mode": "offline",
        "audience": "JavaScript developers of all levels",
        "organizer": "JS Berlin",
        "tags": ["javascript", "hackathon"],
    },
    {
        "title": "TypeScript Advanced Workshop",
        "image": "/images/event5.png",
        "location": "London, UK",
        "venue": "CodeNode",
        "date": "2025-05-20",
        "time": "14:00",
        "mode": "online",
        "audience": "Intermediate TypeScript developers",
        "organizer": "TS London",
        "tags": ["typescript", "workshop"],
    },
    {
        "title": "Full Stack Development Summit",
        "image": "/images/event6.png",
        "location": "Austin, TX",
        "venue": "Austin Convention Center",
        "date": "2025-10-08",
        "time": "09:00",
        "mode": "hybrid",
        "audience": "Full stack engineers",
        "organizer": "Full Stack Austin",
        "tags": ["fullstack", "backend", "frontend"],
    },
]


def _draft_payload(sample: dict) -> dict:
    return {
        **{key: value for key, value in sample.items() if key not in ("image", "tags")},
        "description": f"{sample['title']} brings together {sample['audience'].lower()} for talks and workshops.",
        "overview": f"A day of sessions, demos and networking in {sample['location']}.",
        "agenda": json.dumps(["Registration", "Keynote", "Talks", "Networking"]),
        "tags": json.dumps(sample["tags"]),
    }


def seed_sample_events(dry_run: bool = False) -> list[str]:
    """Insert sample events whose slug is not taken yet; return the new slugs."""
    from devevent.domains.events.normalization import slugify
    from devevent.domains.events.repository import EventRepository
    from devevent.domains.events.schemas import EventDraft
    from devevent.domains.events.services import import_event

    repository = EventRepository()
    created = []
    for sample in SAMPLE_EVENTS:
        slug = slugify(sample["title"])
        if repository.find_one(slug=slug) is not None:
            continue
        if not dry_run:
            draft = EventDraft.model_validate(_draft_payload(sample))
            import_event(draft, sample["image"])
        created.append(slug)
    return created


@click.command("seed-events")
@click.option("--dry-run", is_flag=True, help="Report what would be inserted without writing")
@with_appcontext
def seed_events_command(dry_run: bool):
    """Load the sample event catalog."""
    created = seed_sample_events(dry_run=dry_run)
    verb = "Would create" if dry_run else "Created"
    click.echo(f"{verb} {len(created)} events")
    for slug in created:
        click.echo(f"  - {slug}")


def register_commands(app):
    """Register CLI commands with the app."""
    app.cli.add_command(seed_events_command)

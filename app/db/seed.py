"""Sample talents loaded into a fresh in-memory store at startup."""

from __future__ import annotations

import logging
from typing import Any

from app.core.errors import ConflictError
from app.models.talent import TalentCreate
from app.repositories.base import TalentRepository

logger = logging.getLogger(__name__)

SAMPLE_TALENTS: list[dict[str, Any]] = [
    {
        "talent_id": "talent-001",
        "talent_url": "https://example.com/john-doe",
        "full_name": "John Doe",
        "nationality": "American",
        "location": "New York, NY",
        "external_links": [
            {"name": "LinkedIn", "url": "https://linkedin.com/in/johndoe"},
            {"name": "GitHub", "url": "https://github.com/johndoe"},
        ],
    },
    {
        "talent_id": "talent-002",
        "talent_url": "https://example.com/jane-smith",
        "full_name": "Jane Smith",
        "nationality": "Canadian",
        "location": "Toronto, ON",
        "external_links": [
            {"name": "LinkedIn", "url": "https://linkedin.com/in/janesmith"},
            {"name": "Portfolio", "url": "https://janesmith.dev"},
        ],
    },
    {
        "talent_id": "talent-003",
        "talent_url": "https://example.com/alex-chen",
        "full_name": "Alex Chen",
        "nationality": "Chinese",
        "location": "Shanghai, China",
        "external_links": [
            {"name": "LinkedIn", "url": "https://linkedin.com/in/alexchen"},
            {"name": "Twitter", "url": "https://twitter.com/alexchen"},
        ],
    },
    {
        "talent_id": "talent-004",
        "talent_url": "https://example.com/maria-garcia",
        "full_name": "Maria Garcia",
        "nationality": "Spanish",
        "location": "Madrid, Spain",
        "external_links": [
            {"name": "LinkedIn", "url": "https://linkedin.com/in/mariagarcia"},
            {"name": "Behance", "url": "https://behance.net/mariagarcia"},
        ],
    },
    {
        "talent_id": "talent-005",
        "talent_url": "https://example.com/david-kim",
        "full_name": "David Kim",
        "nationality": "South Korean",
        "location": "Seoul, South Korea",
        "external_links": [
            {"name": "LinkedIn", "url": "https://linkedin.com/in/davidkim"},
            {"name": "GitHub", "url": "https://github.com/davidkim"},
        ],
    },
]


def seed_sample_talents(repository: TalentRepository) -> int:
    """Insert every sample talent not already present.  Returns the number added."""
    added = 0
    for data in SAMPLE_TALENTS:
        try:
            repository.create(TalentCreate(**data))
        except ConflictError:
            continue
        added += 1

    logger.info("sample_talents_seeded", extra={"added": added})
    return added

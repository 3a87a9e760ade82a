#!/usr/bin/env python3
"""
Seed the portfolio tables with starter content.

Each table is only seeded when it is empty, so the script can be re-run
safely after a partial setup.

This creates:
- An active introduction and a contact record
- Two projects and two work experiences
- Suggested prompt examples, one per response type
- Skill categories with their skills

Usage:
    python scripts/seed_portfolio_data.py
    python scripts/seed_portfolio_data.py --tables projects skills
    python scripts/seed_portfolio_data.py --dry-run
"""

import sys
import os
import argparse

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services import database as tables
from services.database import DatabaseService
import logging

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


INTRODUCTION = {
    "content": (
        "Hi, I'm a full-stack engineer who enjoys turning fuzzy product ideas "
        "into reliable software. Ask me about my projects, my experience, or "
        "the tools I like to work with."
    ),
    "name": "Your Name",
    "title": "Full-Stack Engineer",
    "location": "Remote",
    "experience": "5+ years",
    "technologies": "Python, TypeScript, PostgreSQL",
    "is_active": True,
}

CONTACT = {
    "email": "hello@example.com",
    "linkedin": "https://www.linkedin.com/in/your-profile",
    "github": "https://github.com/your-handle",
    "website": "https://example.com",
}

PROJECTS = [
    {
        "title": "Portfolio Chat",
        "period": "2024",
        "subtitle": "Conversational portfolio site",
        "summary": "A portfolio where visitors ask questions and get answers grounded in my own content.",
        "contents": ["Admin area for editing every content type", "Answers translated on the fly"],
        "tech": "Python, FastAPI, Supabase",
        "detailed_content": "Built the API, the prompt assembly and the admin tooling end to end.",
    },
    {
        "title": "Metrics Pipeline",
        "period": "2022 - 2023",
        "subtitle": "Batch analytics for product teams",
        "summary": "Nightly jobs that turn raw event logs into dashboards product teams rely on.",
        "contents": ["Cut report latency from hours to minutes"],
        "tech": "Python, PostgreSQL, Airflow",
    },
]

EXPERIENCES = [
    {
        "company": "Example Corp",
        "position": "Senior Software Engineer",
        "period": "2021 - Present",
        "location": "Remote",
        "description": "Own the customer-facing API platform.",
        "responsibilities": ["Lead API design reviews", "Mentor two engineers"],
        "skills": "Python, FastAPI, PostgreSQL",
        "website": "https://example.com",
    },
    {
        "company": "Startup Inc",
        "position": "Software Engineer",
        "period": "2018 - 2021",
        "location": "Berlin",
        "description": "Early engineer building the first versions of the product.",
        "responsibilities": ["Shipped the billing system", "Ran on-call rotation"],
        "skills": "TypeScript, React, Node.js",
    },
]

PROMPT_EXAMPLES = [
    {"question": "Tell me about yourself", "response_type": "introduction", "display_order": 1},
    {"question": "What projects have you worked on?", "response_type": "projects", "display_order": 2},
    {"question": "Where have you worked?", "response_type": "experiences", "display_order": 3},
    {"question": "What are your technical skills?", "response_type": "skills", "display_order": 4},
    {"question": "How can I contact you?", "response_type": "contacts", "display_order": 5},
    {"question": "What do you enjoy most about engineering?", "response_type": "ai", "display_order": 6},
]

# Category -> skills, in display order
SKILLS = {
    "Languages": ("code", "#3b82f6", ["Python", "TypeScript", "SQL"]),
    "Frameworks": ("layers", "#10b981", ["FastAPI", "React"]),
    "Infrastructure": ("server", "#f59e0b", ["PostgreSQL", "Docker", "AWS"]),
}


def table_is_empty(db: DatabaseService, table: str) -> bool:
    return not db.list_rows(table)


def seed_rows(db: DatabaseService, table: str, rows: list, dry_run: bool) -> int:
    """Insert rows into an empty table. Returns how many rows were inserted."""
    if not table_is_empty(db, table):
        logger.info(f"Skipping {table}: already has data")
        return 0

    if dry_run:
        logger.info(f"[dry-run] Would insert {len(rows)} row(s) into {table}")
        return 0

    for row in rows:
        db.insert_row(table, row)
    logger.info(f"Inserted {len(rows)} row(s) into {table}")
    return len(rows)


def seed_introduction(db: DatabaseService, dry_run: bool) -> int:
    return seed_rows(db, tables.INTRODUCTION, [INTRODUCTION], dry_run)


def seed_contact(db: DatabaseService, dry_run: bool) -> int:
    return seed_rows(db, tables.CONTACTS, [CONTACT], dry_run)


def seed_projects(db: DatabaseService, dry_run: bool) -> int:
    return seed_rows(db, tables.PROJECTS, PROJECTS, dry_run)


def seed_experiences(db: DatabaseService, dry_run: bool) -> int:
    return seed_rows(db, tables.EXPERIENCES, EXPERIENCES, dry_run)


def seed_prompt_examples(db: DatabaseService, dry_run: bool) -> int:
    return seed_rows(db, tables.PROMPT_EXAMPLES, PROMPT_EXAMPLES, dry_run)


def seed_skills(db: DatabaseService, dry_run: bool) -> int:
    """Seed categories first, then skills linked to them by name"""
    categories = [
        {"name": name, "icon": icon, "color": color, "display_order": order}
        for order, (name, (icon, color, _)) in enumerate(SKILLS.items(), start=1)
    ]
    inserted = seed_rows(db, tables.SKILL_CATEGORIES, categories, dry_run)

    if not table_is_empty(db, tables.SKILLS):
        logger.info(f"Skipping {tables.SKILLS}: already has data")
        return inserted

    category_ids = {row["name"]: row["id"] for row in db.list_rows(tables.SKILL_CATEGORIES)}
    skills = []
    for name, (_, _, skill_names) in SKILLS.items():
        if name not in category_ids:
            logger.warning(f"No category named {name}, skipping its skills")
            continue
        skills.extend(
            {"name": skill, "category_id": category_ids[name], "display_order": order}
            for order, skill in enumerate(skill_names, start=1)
        )

    return inserted + seed_rows(db, tables.SKILLS, skills, dry_run)


SEEDERS = {
    "introduction": seed_introduction,
    "contact": seed_contact,
    "projects": seed_projects,
    "experiences": seed_experiences,
    "prompt-examples": seed_prompt_examples,
    "skills": seed_skills,
}


def main():
    parser = argparse.ArgumentParser(description="Seed portfolio tables with starter content")
    parser.add_argument(
        "--tables",
        nargs="+",
        choices=list(SEEDERS),
        default=list(SEEDERS),
        help="Which content to seed (default: all)",
    )
    parser.add_argument("--dry-run", action="store_true", help="Report what would be inserted")
    args = parser.parse_args()

    db = DatabaseService()

    total = 0
    for name in args.tables:
        total += SEEDERS[name](db, args.dry_run)

    print(f"\n{'='*60}")
    print(f"Seeding complete: {total} row(s) inserted")
    print(f"{'='*60}\n")


if __name__ == "__main__":
    main()

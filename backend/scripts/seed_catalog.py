#!/usr/bin/env python3
"""
Catalog Seed Script

Loads the reference catalogs (skills, career paths, courses) that every
user shares. Existing rows are left alone, so the script can be re-run.

Usage:
    # Seed all catalogs
    python scripts/seed_catalog.py

    # Show what is in the database
    python scripts/seed_catalog.py --verify
"""

import asyncio
import argparse
import logging
import sys
from datetime import timedelta
from pathlib import Path
from typing import Dict

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.database import async_session, init_db, utcnow
from careerpath.models import Skill, CareerPath, Course

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


# ==============================================================================
# Seed Data
# ==============================================================================

SEED_SKILLS = [
    {"name": "Python", "category": "technical", "description": "General-purpose programming with Python"},
    {"name": "JavaScript", "category": "technical", "description": "Programming for the web platform"},
    {"name": "SQL", "category": "technical", "description": "Querying and modelling relational data"},
    {"name": "Machine Learning", "category": "technical", "description": "Building predictive models from data"},
    {"name": "Statistics", "category": "domain-specific", "description": "Descriptive and inferential statistics"},
    {"name": "Data Visualization", "category": "technical", "description": "Presenting data as charts and dashboards"},
    {"name": "Cloud Computing", "category": "technical", "description": "Deploying and operating services on cloud platforms"},
    {"name": "UX Design", "category": "domain-specific", "description": "Research-driven design of user experiences"},
    {"name": "Project Management", "category": "soft", "description": "Planning and delivering work to schedule"},
    {"name": "Communication", "category": "soft", "description": "Clear written and verbal communication"},
    {"name": "Leadership", "category": "soft", "description": "Guiding and motivating a team"},
    {"name": "Problem Solving", "category": "soft", "description": "Breaking down and resolving complex problems"},
    {"name": "Cybersecurity", "category": "technical", "description": "Protecting systems and data from attack"},
    {"name": "Financial Analysis", "category": "domain-specific", "description": "Evaluating budgets, forecasts and investments"},
]

SEED_CAREER_PATHS = [
    {
        "title": "Data Scientist",
        "description": "Turns data into predictions and business insight.",
        "salary_min": 95000,
        "salary_max": 165000,
        "demand_level": "high",
        "growth_outlook": "growing",
        "required_skills": ["Python", "Statistics", "Machine Learning", "SQL", "Data Visualization"],
    },
    {
        "title": "Software Engineer",
        "description": "Designs, builds and maintains software systems.",
        "salary_min": 90000,
        "salary_max": 170000,
        "demand_level": "high",
        "growth_outlook": "growing",
        "required_skills": ["Python", "JavaScript", "SQL", "Problem Solving"],
    },
    {
        "title": "UX Designer",
        "description": "Researches users and designs product experiences.",
        "salary_min": 75000,
        "salary_max": 130000,
        "demand_level": "medium",
        "growth_outlook": "growing",
        "required_skills": ["UX Design", "Communication", "Problem Solving"],
    },
    {
        "title": "Product Manager",
        "description": "Owns product direction from discovery to delivery.",
        "salary_min": 100000,
        "salary_max": 175000,
        "demand_level": "high",
        "growth_outlook": "stable",
        "required_skills": ["Project Management", "Communication", "Leadership", "Data Visualization"],
    },
    {
        "title": "Cloud Engineer",
        "description": "Builds and runs infrastructure on cloud platforms.",
        "salary_min": 95000,
        "salary_max": 160000,
        "demand_level": "high",
        "growth_outlook": "growing",
        "required_skills": ["Cloud Computing", "Python", "Cybersecurity"],
    },
    {
        "title": "Security Analyst",
        "description": "Monitors and defends an organisation's systems.",
        "salary_min": 80000,
        "salary_max": 140000,
        "demand_level": "high",
        "growth_outlook": "growing",
        "required_skills": ["Cybersecurity", "Problem Solving", "Communication"],
    },
    {
        "title": "Financial Analyst",
        "description": "Analyses financial performance to guide decisions.",
        "salary_min": 65000,
        "salary_max": 115000,
        "demand_level": "medium",
        "growth_outlook": "stable",
        "required_skills": ["Financial Analysis", "Statistics", "SQL", "Communication"],
    },
]

# skills_covered lists skill names here; they are resolved to ids on import
SEED_COURSES = [
    {
        "title": "Python for Everybody",
        "provider": "Coursera",
        "url": "https://www.coursera.org/specializations/python",
        "duration": "8 months",
        "difficulty_level": "beginner",
        "cost": "Free to audit",
        "rating": 4.8,
        "skills_covered": ["Python"],
    },
    {
        "title": "Machine Learning Specialization",
        "provider": "Coursera",
        "url": "https://www.coursera.org/specializations/machine-learning-introduction",
        "duration": "3 months",
        "difficulty_level": "intermediate",
        "cost": "$49/month",
        "rating": 4.9,
        "skills_covered": ["Machine Learning", "Python", "Statistics"],
    },
    {
        "title": "Databases and SQL for Data Science",
        "provider": "Coursera",
        "duration": "6 weeks",
        "difficulty_level": "beginner",
        "cost": "Free to audit",
        "rating": 4.7,
        "skills_covered": ["SQL"],
    },
    {
        "title": "Data Visualization with Tableau",
        "provider": "edX",
        "duration": "5 weeks",
        "difficulty_level": "beginner",
        "cost": "$99",
        "rating": 4.5,
        "skills_covered": ["Data Visualization"],
    },
    {
        "title": "Google UX Design Certificate",
        "provider": "Coursera",
        "duration": "6 months",
        "difficulty_level": "beginner",
        "cost": "$49/month",
        "rating": 4.8,
        "skills_covered": ["UX Design"],
    },
    {
        "title": "AWS Cloud Practitioner Essentials",
        "provider": "AWS Skill Builder",
        "duration": "6 hours",
        "difficulty_level": "beginner",
        "cost": "Free",
        "rating": 4.6,
        "skills_covered": ["Cloud Computing"],
    },
    {
        "title": "Introduction to Cybersecurity",
        "provider": "edX",
        "duration": "6 weeks",
        "difficulty_level": "beginner",
        "cost": "Free to audit",
        "rating": 4.4,
        "skills_covered": ["Cybersecurity"],
    },
    {
        "title": "Project Management Foundations",
        "provider": "LinkedIn Learning",
        "duration": "3 hours",
        "difficulty_level": "beginner",
        "cost": "Subscription",
        "rating": 4.5,
        "skills_covered": ["Project Management", "Leadership"],
    },
    {
        "title": "Modern JavaScript",
        "provider": "Udemy",
        "duration": "20 hours",
        "difficulty_level": "intermediate",
        "cost": "$19.99",
        "rating": 4.6,
        "skills_covered": ["JavaScript"],
    },
    {
        "title": "Financial Analysis Fundamentals",
        "provider": "LinkedIn Learning",
        "duration": "2 hours",
        "difficulty_level": "beginner",
        "cost": "Subscription",
        "rating": 4.3,
        "skills_covered": ["Financial Analysis"],
    },
    {
        "title": "Effective Communication",
        "provider": "edX",
        "duration": "4 weeks",
        "difficulty_level": "beginner",
        "cost": "Free to audit",
        "rating": 4.2,
        "skills_covered": ["Communication"],
    },
]


# ==============================================================================
# Import
# ==============================================================================

async def seed_skills(session: AsyncSession) -> Dict[str, str]:
    """Insert missing skills; returns name -> id for every seed skill."""
    result = await session.execute(select(Skill))
    by_name = {s.name: s.id for s in result.scalars().all()}

    count = 0
    for skill_data in SEED_SKILLS:
        if skill_data["name"] in by_name:
            continue
        skill = Skill(**skill_data)
        session.add(skill)
        await session.flush()
        by_name[skill.name] = skill.id
        count += 1

    await session.commit()
    logger.info(f"Imported {count} skills")
    return by_name


async def seed_career_paths(session: AsyncSession) -> int:
    result = await session.execute(select(CareerPath.title))
    existing = set(result.scalars().all())

    # created_at follows list order; recommendations take the oldest paths first
    base = utcnow()
    count = 0
    for i, path_data in enumerate(SEED_CAREER_PATHS):
        if path_data["title"] in existing:
            continue
        session.add(CareerPath(**path_data, created_at=base + timedelta(milliseconds=i)))
        count += 1

    await session.commit()
    logger.info(f"Imported {count} career paths")
    return count


async def seed_courses(session: AsyncSession, skill_ids: Dict[str, str]) -> int:
    result = await session.execute(select(Course.title))
    existing = set(result.scalars().all())

    count = 0
    for course_data in SEED_COURSES:
        if course_data["title"] in existing:
            continue
        covered = [skill_ids[name] for name in course_data["skills_covered"] if name in skill_ids]
        session.add(Course(**{**course_data, "skills_covered": covered}))
        count += 1

    await session.commit()
    logger.info(f"Imported {count} courses")
    return count


async def seed_all(session: AsyncSession) -> None:
    skill_ids = await seed_skills(session)
    await seed_career_paths(session)
    await seed_courses(session, skill_ids)


async def verify_import(session: AsyncSession) -> None:
    """Log row counts per catalog."""
    for model in (Skill, CareerPath, Course):
        result = await session.execute(select(func.count()).select_from(model))
        logger.info(f"{model.__tablename__}: {result.scalar()} rows")


# ==============================================================================
# Main
# ==============================================================================

async def main() -> None:
    parser = argparse.ArgumentParser(description="Seed skill, career path and course catalogs")
    parser.add_argument("--verify", action="store_true", help="Only report catalog sizes")

    args = parser.parse_args()

    await init_db()

    async with async_session() as session:
        if args.verify:
            await verify_import(session)
        else:
            await seed_all(session)
            await verify_import(session)


if __name__ == "__main__":
    asyncio.run(main())

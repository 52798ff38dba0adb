#!/usr/bin/env python3
"""
Database seeding script for development and testing.
Creates the tables and imports sample projects with their units.
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path to import our modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from estate_pulse.database import async_engine, Base, AsyncSessionLocal
from estate_pulse.models import Project, Unit, Meeting  # noqa: F401  (registers tables)
from estate_pulse.services.data_migration import check_migration_status, migrate_static_data

SAMPLE_PROJECTS = [
    {
        "id": "6f1c2a44-5b0e-4d3c-9a51-2f7d1e8c9b01",
        "name": "Palm Grove",
        "status": "in-progress",
        "progress": 65,
        "totalUnits": 3,
        "completedUnits": 1,
        "targetCompletion": "December 15th, 2025",
        "currentPhase": "Interior works",
        "manager": "Amina Odhiambo",
        "location": "Kilifi",
        "startDate": "Jan 10, 2024",
        "budget": "KES 450M",
        "targetMilestone": "Hand over phase one villas before the rainy season.",
        "activitiesInProgress": ["Plastering", "Electrical first fix"],
        "completedActivities": ["Foundation", "Superstructure"],
        "challenges": ["Delayed tile delivery", "Water supply interruptions"],
        "progressImages": [],
        "weeklyNotes": "Roofing crew finished block B; tiling starts Monday.",
        "monthlyNotes": "Overall progress on track, procurement risks remain.",
        "units": [
            {
                "unitNumber": "A-01",
                "type": "Villa",
                "subType": "Corner",
                "bedrooms": 4,
                "status": "completed",
                "progress": 100,
                "currentPhase": "Handover",
                "targetCompletion": "August 30th, 2025",
                "lastUpdated": "8/30/2025",
                "activities": {
                    "foundation": "completed",
                    "structure": "completed",
                    "roofing": "completed",
                    "mep": "completed",
                    "interior": "completed",
                    "finishing": "completed",
                },
                "challenges": [],
                "photos": [],
            },
            {
                "unitNumber": "A-02",
                "type": "Villa",
                "bedrooms": 3,
                "status": "in-progress",
                "progress": 70,
                "currentPhase": "Interior",
                "targetCompletion": "October 1st, 2025",
                "lastUpdated": "Sep 12, 2025",
                "activities": {
                    "foundation": "completed",
                    "structure": "completed",
                    "roofing": "completed",
                    "mep": "in-progress",
                    "interior": "in-progress",
                    "finishing": "in-progress",
                },
                "challenges": ["Awaiting kitchen fittings"],
                "photos": [],
            },
            {
                "unitNumber": "B-01",
                "type": "Apartment",
                "subType": "Penthouse",
                "bedrooms": 2,
                "status": "behind-schedule",
                "progress": 40,
                "currentPhase": "Roofing",
                "targetCompletion": "November 20th, 2025",
                "lastUpdated": "Sep 3, 2025",
                "activities": {
                    "foundation": "completed",
                    "structure": "completed",
                    "roofing": "behind-schedule",
                },
                "challenges": ["Roof truss rework"],
                "photos": [],
            },
        ],
    },
    {
        "id": "0b8e7d36-91a4-4f62-8c1d-6a3e5f2b4c02",
        "name": "Coral Heights",
        "status": "planning",
        "progress": 5,
        "totalUnits": 0,
        "completedUnits": 0,
        "targetCompletion": "June 30th, 2027",
        "currentPhase": "Design approvals",
        "manager": "Peter Mwangi",
        "location": "Mombasa",
        "startDate": "March 1st, 2026",
        "budget": "KES 1.2B",
        "targetMilestone": "County approval of architectural drawings.",
        "units": [],
    },
]


async def create_tables():
    """Create all database tables"""
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("✓ Database tables created")


async def seed_data():
    """Seed the database with sample data"""
    async with AsyncSessionLocal() as session:
        result = await migrate_static_data(session, SAMPLE_PROJECTS)
        print(("✓ " if result.success else "❌ ") + result.message)

        status = await check_migration_status(session)
        print("\nSummary:")
        print(f"  - Projects: {status.project_count}")
        print(f"  - Units: {status.unit_count}")

    return result.success


async def main():
    """Main function"""
    print("🌱 Starting database seeding...\n")
    await create_tables()
    succeeded = await seed_data()
    await async_engine.dispose()
    if not succeeded:
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())

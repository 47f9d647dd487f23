import asyncio
from datetime import datetime, timezone

from sqlmodel import select
from loguru import logger
from app.models.enums import EventStatus
from app.models.event import Event
from app.models.event_registration import EventRegistration
from app.models.user import UserRole
from app.services.auth_service import get_user_by_email, create_user
from app.core.database import AsyncSessionLocal, init_db
from app.core.config import settings

# ----------------------------------------------------------------
# 1. DEMO DATA
# ----------------------------------------------------------------

DEMO_ADMIN = {
    "name": "Admin User",
    "email": "admin@college.com",
    "password": "admin123",
    "department": "Administration",
}

HODS_DATA = [
    {"name": "Dr. Priya Sharma", "email": "hod.cs@college.com", "department": "Computer Science"},
    {"name": "Dr. Rajesh Kumar", "email": "hod.mech@college.com", "department": "Mechanical Engineering"},
]
HOD_PASSWORD = "hod123"

STUDENTS_DATA = [
    {"name": "Aarav Patel", "email": "aarav@student.com", "interests": ["Coding", "Hackathon", "AI/ML"], "department": "Computer Science"},
    {"name": "Diya Singh", "email": "diya@student.com", "interests": ["Dance", "Cultural", "Music"], "department": "Computer Science"},
    {"name": "Vivaan Gupta", "email": "vivaan@student.com", "interests": ["Sports", "Robotics", "Workshop"], "department": "Mechanical Engineering"},
    {"name": "Ananya Reddy", "email": "ananya@student.com", "interests": ["Photography", "Art", "Cultural"], "department": "Information Technology"},
    {"name": "Arjun Nair", "email": "arjun@student.com", "interests": ["Coding", "Web Development", "Hackathon"], "department": "Computer Science"},
    {"name": "Ishita Joshi", "email": "ishita@student.com", "interests": ["Debate", "Quiz", "Literature"], "department": "Electrical Engineering"},
    {"name": "Kabir Mehta", "email": "kabir@student.com", "interests": ["Music", "Fest", "Networking"], "department": "Civil Engineering"},
    {"name": "Myra Kapoor", "email": "myra@student.com", "interests": ["Dance", "Sports", "Cultural"], "department": "Electronics & Communication"},
    {"name": "Reyansh Verma", "email": "reyansh@student.com", "interests": ["Coding", "AI/ML", "Robotics"], "department": "Computer Science"},
    {"name": "Saanvi Iyer", "email": "saanvi@student.com", "interests": ["Seminar", "Workshop", "Networking"], "department": "Biotechnology"},
]
STUDENT_PASSWORD = "student123"

# "organizer" indexes HODS_DATA, "registered" indexes STUDENTS_DATA
EVENTS_DATA = [
    {
        "title": "Code Sprint 2026",
        "description": "An intensive 24-hour coding competition where teams build innovative solutions. Prizes worth ₹50,000!",
        "organizer": 0,
        "date": datetime(2026, 3, 15, tzinfo=timezone.utc),
        "venue": "CS Lab Complex, Block A",
        "category": "Coding",
        "status": EventStatus.Approved,
        "banner_url": "https://images.unsplash.com/photo-1504384308090-c894fdcc538d?w=800",
        "registered": [0, 4, 8],
        "capacity": 100,
    },
    {
        "title": "AI & Machine Learning Workshop",
        "description": "A hands-on workshop covering neural networks, deep learning, and practical AI applications with Python.",
        "organizer": 0,
        "date": datetime(2026, 3, 22, tzinfo=timezone.utc),
        "venue": "Seminar Hall 1",
        "category": "AI/ML",
        "status": EventStatus.Approved,
        "banner_url": "https://images.unsplash.com/photo-1677442136019-21780ecad995?w=800",
        "registered": [0, 8],
        "capacity": 60,
    },
    {
        "title": "Annual Cultural Fest - Rhythm 2026",
        "description": "The biggest cultural extravaganza of the year featuring dance, music, drama, and art competitions.",
        "organizer": 1,
        "date": datetime(2026, 4, 5, tzinfo=timezone.utc),
        "venue": "Main Auditorium",
        "category": "Cultural",
        "status": EventStatus.Approved,
        "banner_url": "https://images.unsplash.com/photo-1492684223066-81342ee5ff30?w=800",
        "registered": [1, 3, 6, 7],
        "capacity": 500,
    },
    {
        "title": "Robotics Expo 2026",
        "description": "Showcase your robotics projects and compete in the bot-wars championship. Open to all departments.",
        "organizer": 1,
        "date": datetime(2026, 4, 20, tzinfo=timezone.utc),
        "venue": "Innovation Center, Block D",
        "category": "Robotics",
        "status": EventStatus.Pending,
        "banner_url": "https://images.unsplash.com/photo-1485827404703-89b55fcc595e?w=800",
        "registered": [],
        "capacity": 80,
    },
    {
        "title": "Industry Connect Seminar",
        "description": "Top industry leaders share insights on career paths, emerging tech trends, and hiring expectations.",
        "organizer": 0,
        "date": datetime(2026, 5, 10, tzinfo=timezone.utc),
        "venue": "Conference Hall, Admin Block",
        "category": "Seminar",
        "status": EventStatus.Pending,
        "banner_url": "https://images.unsplash.com/photo-1540575467063-178a50c2df87?w=800",
        "registered": [],
        "capacity": 200,
    },
]


# ----------------------------------------------------------------
# 2. SEEDING FUNCTIONS
# ----------------------------------------------------------------

async def seed_all():
    """Create tables, the super admin and the demo data set."""
    await init_db()
    async with AsyncSessionLocal() as session:
        await seed_admin_user(session)
        await seed_demo_data(session)
    logger.success("Seeding complete.")


async def seed_admin_user(session):
    """Super admin from settings; skipped when missing or already present."""
    if not settings.SUPER_ADMIN_EMAIL or not settings.SUPER_ADMIN_PASSWORD:
        logger.warning("Missing Super Admin credentials in settings.")
        return None

    existing = await get_user_by_email(session, settings.SUPER_ADMIN_EMAIL)
    if existing:
        logger.info("Super Admin already exists. Skipping.")
        return existing

    logger.info(f"Seeding Super Admin: {settings.SUPER_ADMIN_EMAIL}")
    return await create_user(
        session=session,
        name=settings.SUPER_ADMIN_NAME or "Super Admin",
        email=settings.SUPER_ADMIN_EMAIL,
        password=settings.SUPER_ADMIN_PASSWORD,
        role=UserRole.Admin,
    )


async def seed_demo_data(session):
    # the demo admin doubles as the "already seeded" marker
    if await get_user_by_email(session, DEMO_ADMIN["email"]):
        logger.info("Demo data already present. Skipping.")
        return

    await create_user(session=session, role=UserRole.Admin, **DEMO_ADMIN)

    hods = []
    for h in HODS_DATA:
        hods.append(await create_user(session=session, password=HOD_PASSWORD, role=UserRole.HOD, **h))
    logger.info(f"Created {len(hods)} HODs (password: {HOD_PASSWORD})")

    students = []
    for s in STUDENTS_DATA:
        students.append(await create_user(session=session, password=STUDENT_PASSWORD, role=UserRole.Student, **s))
    logger.info(f"Created {len(students)} students (password: {STUDENT_PASSWORD})")

    for e in EVENTS_DATA:
        data = dict(e)
        organizer = hods[data.pop("organizer")]
        registered = [students[i] for i in data.pop("registered")]

        event = Event(organizer_id=organizer.id, registered_count=len(registered), **data)
        session.add(event)
        await session.flush()

        for student in registered:
            session.add(EventRegistration(event_id=event.id, user_id=student.id))
        await session.flush()

    await session.commit()

    result = await session.execute(select(Event))
    logger.success(f"Created {len(result.scalars().all())} events")


if __name__ == "__main__":
    asyncio.run(seed_all())

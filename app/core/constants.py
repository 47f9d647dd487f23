# app/core/constants.py

from app.models.user import UserRole

# ==========================================================
# INTEREST TAGS (event categories + student preferences)
# ==========================================================
INTEREST_TAGS = [
    "Coding",
    "Hackathon",
    "Workshop",
    "Seminar",
    "Sports",
    "Dance",
    "Music",
    "Art",
    "Photography",
    "Literature",
    "Debate",
    "Quiz",
    "Robotics",
    "AI/ML",
    "Web Development",
    "Cultural",
    "Fest",
    "Networking",
]

# ==========================================================
# DEPARTMENTS
# ==========================================================
DEPARTMENTS = [
    "Computer Science",
    "Information Technology",
    "Mechanical Engineering",
    "Electrical Engineering",
    "Civil Engineering",
    "Electronics & Communication",
    "Chemical Engineering",
    "Biotechnology",
    "Mathematics",
    "Physics",
]

# ==========================================================
# DASHBOARD PER ROLE (sent back on login)
# ==========================================================
DASHBOARD_BY_ROLE = {
    UserRole.Admin: "/admin/dashboard",
    UserRole.HOD: "/hod/dashboard",
    UserRole.Student: "/student/dashboard",
}

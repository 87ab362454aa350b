# mentor_match/config.py
import os

from dotenv import load_dotenv

load_dotenv()

# Session rules
MIN_SESSION_MINUTES = 30
MAX_MATCHES_DEFAULT = 5

USER_TYPES = ("mentor", "mentee")

# Ability catalog shown to mentees next to each mentor
ABILITIES = [
    "User Experience (UX)",
    "User Interface (UI)",
    "Information Architecture",
    "Prototyping (Interactive)",
    "Accessibility",
    "Visual Design",
    "Graphic Design & Typography",
    "Data Visualization",
    "Motion Design",
    "Interaction Design",
    "Content Design",
    "Game Design",
    "Storytelling/Presentation",
    "Branding/Logos",
    "Illustration",
    "3D Modeling & Rendering",
    "AI-Based Design Tools (LLMs, Generative AI, Plugins)",
    "Figma Proficiency",
    "Creativity/Concept Development",
]

DAY_NAMES = [
    "Sunday", "Monday", "Tuesday", "Wednesday",
    "Thursday", "Friday", "Saturday",
]

# Weeks offered in the availability picker (this week + 8 ahead)
NUM_BOOKABLE_WEEKS = 9

# Week keys and calendar links are computed in this timezone
TIMEZONE = os.getenv("MENTOR_MATCH_TZ", "America/Sao_Paulo")

# SQLite file used by the store when no path is given
DB_PATH = os.getenv("MENTOR_MATCH_DB", "mentor_match.db")

# Calendar invitation text
CALENDAR_EVENT_TITLE = "Mentor Match - Mentoring Session"
CALENDAR_LOCATION = "Google Meet"

# Batch planner cap
MAX_SESSIONS_PER_MENTOR = 3

# Random seed for reproducible toy sets
DEFAULT_SEED = 42
NUM_MENTORS_DEFAULT = 6
NUM_MENTEES_DEFAULT = 8

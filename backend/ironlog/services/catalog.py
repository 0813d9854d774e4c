from typing import NamedTuple

from ironlog.services.metrics import normalize_exercise_name


class CatalogEntry(NamedTuple):
    name: str
    muscle: str
    steps: tuple[str, ...] = ()
    tips: str = ""


# shown for entries without their own technique notes
GENERAL_STEPS = (
    "Set up stable with the core braced.",
    "Move through the full range of motion.",
    "Control the lowering phase.",
    "Drive hard through the lifting phase.",
)
GENERAL_TIPS = "Technique before load. Steady progression keeps you injury free."


EXERCISE_CATALOG = (
    CatalogEntry(
        "Bench Press", "Chest",
        steps=(
            "Grip the bar slightly wider than shoulder width.",
            "Lower it under control to the lower chest (2-3s).",
            "Press explosively to full extension without locking the elbows.",
            "Keep the feet planted and the lower back on the bench.",
        ),
        tips="Retract the shoulder blades before unracking. Touch or nearly touch the chest every rep.",
    ),
    CatalogEntry("Incline Bench Press", "Chest"),
    CatalogEntry("Dips", "Chest"),
    CatalogEntry("Shoulder Press", "Shoulders"),
    CatalogEntry("Lateral Raise", "Shoulders"),
    CatalogEntry("Military Press", "Shoulders"),
    CatalogEntry(
        "Squat", "Legs",
        steps=(
            "Bar on the upper or lower traps, feet shoulder width apart.",
            "Start the descent by sending the hips back.",
            "Sit to parallel or below with the knees tracking the toes.",
            "Drive the floor away and keep the torso upright.",
        ),
        tips="Brace hard before you descend. Breathe deep and hold it.",
    ),
    CatalogEntry("Deadlift", "Back"),
    CatalogEntry("Romanian Deadlift", "Legs"),
    CatalogEntry("Leg Press", "Legs"),
    CatalogEntry("Leg Curl", "Legs"),
    CatalogEntry("Pull-up", "Back"),
    CatalogEntry("Barbell Row", "Back"),
    CatalogEntry("Dumbbell Row", "Back"),
    CatalogEntry("Lat Pulldown", "Back"),
    CatalogEntry("Biceps Curl", "Biceps"),
    CatalogEntry("Hammer Curl", "Biceps"),
    CatalogEntry("Triceps Extension", "Triceps"),
    CatalogEntry("Skull Crusher", "Triceps"),
    CatalogEntry("Triceps Dips", "Triceps"),
    CatalogEntry("Hip Thrust", "Glutes"),
    CatalogEntry("Plank", "Core"),
    CatalogEntry("Crunch", "Core"),
    CatalogEntry("Face Pull", "Shoulders"),
    CatalogEntry("Pullover", "Chest"),
)

WORKOUT_TYPES = (
    "Push Day", "Pull Day", "Leg Day", "Upper Body",
    "Full Body", "Back & Bi", "Chest & Tri", "Shoulders & Arms",
)


def search_exercises(query: str = "", limit: int = 12) -> list[CatalogEntry]:
    q = (query or "").strip().lower()
    if not q:
        return list(EXERCISE_CATALOG[:limit])
    hits = [e for e in EXERCISE_CATALOG if q in e.name.lower() or q in e.muscle.lower()]
    return hits[:limit]


def find_exercise(name: str) -> CatalogEntry | None:
    key = normalize_exercise_name(name)
    for entry in EXERCISE_CATALOG:
        if normalize_exercise_name(entry.name) == key:
            return entry
    return None


def exercise_guide(entry: CatalogEntry) -> tuple[tuple[str, ...], str]:
    """Execution steps and a coaching tip, falling back to the general advice."""
    return entry.steps or GENERAL_STEPS, entry.tips or GENERAL_TIPS

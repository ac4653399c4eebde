"""Application constants."""

from gym_assistant.core.enums import Equipment, MuscleGroup

# Library / planner limits
MAX_FAVORITE_EXERCISES = 4
MAX_TEMPLATES = 10

# Live session defaults
DEFAULT_SET_REPS = 8
DEFAULT_SET_WEIGHT = 20.0
DEFAULT_PLANNED_SETS = 3
DEFAULT_PLANNED_REPS = "8-12"
PLACEHOLDER_EXERCISE_ID = "placeholder"
FREESTYLE_SESSION_NAME = "Freestyle Session"

# Persistent store keys, one per top-level collection
SETTINGS_KEY = "settings"
EXERCISES_KEY = "exercises"
TEMPLATES_KEY = "workout_templates"
HISTORY_KEY = "workout_history"

DEFAULT_USER_NAME = "Athlete"
DEFAULT_FAVORITE_EXERCISE_IDS = ("ex1", "ex2", "ex3", "ex4")

# Built-in catalog: (id, name, muscle group, equipment)
INITIAL_EXERCISES = (
    ("ex1", "Bench Press", MuscleGroup.CHEST, Equipment.BARBELL),
    ("ex2", "Squat", MuscleGroup.LEGS, Equipment.BARBELL),
    ("ex3", "Deadlift", MuscleGroup.BACK, Equipment.BARBELL),
    ("ex4", "Overhead Press", MuscleGroup.SHOULDERS, Equipment.BARBELL),
    ("ex5", "Biceps Curl", MuscleGroup.ARMS, Equipment.DUMBBELL),
    ("ex6", "Plank", MuscleGroup.CORE, Equipment.MACHINE),
    ("ex7", "Pull-up", MuscleGroup.BACK, Equipment.MACHINE),
    ("ex8", "Leg Press", MuscleGroup.LEGS, Equipment.MACHINE),
    ("ex9", "Dumbbell Fly", MuscleGroup.CHEST, Equipment.DUMBBELL),
    ("ex10", "Triceps Extension", MuscleGroup.ARMS, Equipment.MACHINE),
)

"""Application constants."""

# Achievements
POINTS_PER_ACHIEVEMENT = 10
EARLY_BIRD_HOUR = 7  # workouts finished before 07:00
NIGHT_OWL_HOUR = 22  # workouts finished at or after 22:00

# Rest timer
REST_ADJUST_STEP_SECONDS = 15
MAX_REST_SECONDS = 600
REST_PRESETS_SECONDS = (30, 60, 90, 120, 180)

# Sessions and history
FREE_SESSION_NAME = "Workout"
RECENT_WORKOUTS_LIMIT = 10

"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "Asia/Jakarta"

EARTH_RADIUS_METERS = 6_371_000
DEFAULT_GPS_RADIUS_METERS = 3000
MIN_GPS_RADIUS_METERS = 10
MAX_GPS_RADIUS_METERS = 10_000

DEFAULT_FACE_THRESHOLD = 80
MIN_FACE_THRESHOLD = 50
MAX_FACE_THRESHOLD = 100

# Check-in opens this many minutes before the schedule start time.
EARLY_CHECKIN_WINDOW_MINUTES = 60

DEFAULT_CACHE_TTL_SECONDS = 30
DEFAULT_HISTORY_DAYS = 7

SETTING_GPS_RADIUS = "gps_accuracy_radius"
SETTING_FACE_THRESHOLD = "face_recognition_threshold"

"""Application-wide constants."""

# Token claims
TOKEN_ISSUER = "pictureTeam"
TOKEN_SUBJECT = "appUser"
TOKEN_ALGORITHM = "HS256"

# Validation patterns
EMAIL_REGEX = r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$"
CATEGORY_NAME_PATTERN = "[A-Za-z]+"

# Password hashing
PASSWORD_SALT_BYTES = 64

# Image storage
DEFAULT_IMAGE_EXTENSION = "png"
UPLOAD_CHUNK_SIZE = 64 * 1024

# Rating bounds (inclusive)
MIN_RATING = 1
MAX_RATING = 5

GENERIC_ERROR_MESSAGE = "an unexpected error happened"

"""
Input validation helpers used by the routes and the stores.

Each check returns the normalized value or raises InputValidationError.
"""
import os
import re
from typing import List, Optional
from jukeboxd.core.config import settings
from jukeboxd.core.errors import AssetUnavailableError, InputValidationError

EMAIL_REGEX = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
SPECIAL_CHAR_REGEX = re.compile(r"[^A-Za-z0-9]")


def check_username(name: Optional[str]) -> str:
    if name is None:
        raise InputValidationError("Must provide input for username")
    name = name.strip()
    if name == "":
        raise InputValidationError("Username must not be an empty string.")
    if re.search(r"\d", name):
        raise InputValidationError("Username must not contain numbers.")
    if len(name) < 2 or len(name) > 25:
        raise InputValidationError("Username must be between 2 and 25 characters.")
    return name


def check_email(email: Optional[str]) -> str:
    if email is None:
        raise InputValidationError("Must provide input for email")
    email = email.strip()
    if not EMAIL_REGEX.match(email):
        raise InputValidationError("Not a valid email address.")
    return email


def check_pass(password: Optional[str]) -> str:
    """Length >= 8, a digit, an uppercase letter, a special character, no spaces."""
    if password is None:
        raise InputValidationError("Must provide input for password")
    password = password.strip()
    if password == "":
        raise InputValidationError("Password must not be an empty string.")
    if len(password) < 8:
        raise InputValidationError("Password must be at least 8 characters long.")
    if not re.search(r"\d", password):
        raise InputValidationError("Password must contain at least one number.")
    if re.search(r"\s", password):
        raise InputValidationError("Password must not contain any spaces.")
    if not re.search(r"[A-Z]", password):
        raise InputValidationError("Password must contain at least one uppercase character.")
    if not SPECIAL_CHAR_REGEX.search(password):
        raise InputValidationError("Password must contain at least one special character.")
    return password


def confirm_pass(original: str, confirmed: Optional[str]) -> str:
    if confirmed is None or confirmed.strip() != original:
        raise InputValidationError("Passwords must match.")
    return confirmed.strip()


def check_bio(bio: Optional[str]) -> str:
    bio = (bio or "").strip()
    if len(bio) < 1 or len(bio) > 150:
        raise InputValidationError("Bio must be between 1 and 150 characters!")
    return bio


def list_profile_pictures(directory: Optional[str] = None) -> List[str]:
    """Return the file names users may choose as a profile picture."""
    directory = directory or settings.PROFILE_PICTURE_DIR
    try:
        entries = os.listdir(directory)
    except OSError:
        raise AssetUnavailableError(
            "Could not read from available profile pictures... Try again soon!"
        )
    return sorted(
        entry for entry in entries
        if not entry.startswith(".") and os.path.isfile(os.path.join(directory, entry))
    )


def check_profile_pic(pfp: Optional[str], directory: Optional[str] = None) -> str:
    if pfp is None:
        raise InputValidationError("Must provide input for profile picture")
    pfp = pfp.strip()
    if pfp not in list_profile_pictures(directory):
        raise InputValidationError("Please select an available option!")
    return pfp


def check_text(value: Optional[str], field: str, max_length: int) -> str:
    """Free text such as song titles and post bodies."""
    value = (value or "").strip()
    if not value:
        raise InputValidationError(f"{field} must not be empty.")
    if len(value) > max_length:
        raise InputValidationError(f"{field} must be at most {max_length} characters.")
    return value

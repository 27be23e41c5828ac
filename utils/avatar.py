import hashlib
from urllib.parse import urlencode

GRAVATAR_URL = "https://www.gravatar.com/avatar/"


def gravatar_url(email: str, size: int = 200, rating: str = "pg", default: str = "mm") -> str:
    """
    Build the gravatar URL used as a user's avatar
    :return: the https avatar URL
    """
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"{GRAVATAR_URL}{digest}?{urlencode({'s': size, 'r': rating, 'd': default})}"

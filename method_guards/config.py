import os

from method_guards.utils.env_utils import env_flag, env_int

# Turns `Guard.argument` into a no-op when false
GUARD_ENABLED = env_flag("GUARD_ENABLED", True)

# Memoised annotation lookups (per function / property getter)
GUARD_ANNOTATION_CACHE_SIZE = env_int("GUARD_ANNOTATION_CACHE_SIZE", 1024)

# Rule message translation
GUARD_LOCALE_DEFAULT = os.getenv("GUARD_LOCALE_DEFAULT", "en")
GUARD_LOCALE_FALLBACK = os.getenv("GUARD_LOCALE_FALLBACK", "en")
GUARD_LOCALE_PATH = os.getenv("GUARD_LOCALE_PATH", os.path.join(os.getcwd(), "lang"))


def reload() -> None:
    """Re-read every setting from the environment."""
    global GUARD_ENABLED, GUARD_ANNOTATION_CACHE_SIZE
    global GUARD_LOCALE_DEFAULT, GUARD_LOCALE_FALLBACK, GUARD_LOCALE_PATH

    GUARD_ENABLED = env_flag("GUARD_ENABLED", True)
    GUARD_ANNOTATION_CACHE_SIZE = env_int("GUARD_ANNOTATION_CACHE_SIZE", 1024)
    GUARD_LOCALE_DEFAULT = os.getenv("GUARD_LOCALE_DEFAULT", "en")
    GUARD_LOCALE_FALLBACK = os.getenv("GUARD_LOCALE_FALLBACK", "en")
    GUARD_LOCALE_PATH = os.getenv("GUARD_LOCALE_PATH", os.path.join(os.getcwd(), "lang"))

    from method_guards.core import localization, reflection
    localization.reset()
    reflection.clear_annotation_cache()

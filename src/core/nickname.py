"""Deterministic human-memorable nicknames for versions.

A nickname is an adjective-noun pair chosen from fixed word lists
by slicing bits of the content fingerprint.
"""

from __future__ import annotations

_ADJECTIVES = (
    "amber", "ancient", "autumn", "bitter", "black", "blue", "bold", "brave",
    "bright", "broken", "calm", "clever", "cold", "cool", "crimson", "curly",
    "damp", "dark", "dawn", "delicate", "divine", "dry", "dusty", "eager",
    "empty", "falling", "fancy", "fierce", "floral", "fragrant", "frosty", "gentle",
    "gilded", "green", "hidden", "holy", "icy", "jolly", "late", "lingering",
    "little", "lively", "long", "lucky", "misty", "morning", "muddy", "nameless",
    "noisy", "odd", "old", "orange", "patient", "plain", "polished", "proud",
    "purple", "quiet", "rapid", "red", "restless", "rough", "round", "royal",
    "shiny", "shy", "silent", "silver", "small", "snowy", "soft", "solitary",
    "sparkling", "spring", "square", "steep", "still", "summer", "sunny", "swift",
    "tall", "tiny", "twilight", "wandering", "weathered", "white", "wild", "winter",
    "wispy", "withered", "yellow", "young",
)

_NOUNS = (
    "badger", "bird", "breeze", "brook", "bush", "butterfly", "cat", "cherry",
    "cloud", "crane", "darkness", "dawn", "dew", "dream", "dust", "falcon",
    "feather", "field", "fire", "firefly", "flower", "fog", "forest", "fox",
    "frog", "frost", "glade", "glitter", "grass", "hare", "haze", "heron",
    "hill", "lake", "leaf", "meadow", "moon", "morning", "moss", "mountain",
    "night", "otter", "owl", "paper", "pine", "pond", "rain", "resonance",
    "river", "sea", "shadow", "shape", "silence", "sky", "smoke", "snow",
    "snowflake", "sound", "star", "sun", "sunset", "surf", "thunder", "tree",
    "violet", "voice", "water", "waterfall", "wave", "wildflower", "wind", "wolf",
    "wood", "wren",
)


def nickname_for(content_fingerprint: int) -> str:
    """Derive a stable nickname from a content fingerprint.

    Args:
        content_fingerprint: 128-bit fingerprint value.

    Returns:
        Lowercase adjective-noun label.
    """
    adjective = _ADJECTIVES[(content_fingerprint >> 64) % len(_ADJECTIVES)]
    noun = _NOUNS[(content_fingerprint & 0xFFFFFFFFFFFFFFFF) % len(_NOUNS)]
    return f"{adjective}-{noun}"

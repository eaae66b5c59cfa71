"""Build numbers and memorable build names.

Build numbers count days since the build epoch on December 5, 2020. Each
number maps to a deterministic "<adjective> <noun>" name such as
"sparkling piglet"; names repeat every 64 * 64 days.

Example:
    >>> from datetime import date
    >>> build_number(date(2020, 12, 5))
    0
    >>> build_name(0)
    'blue monkey'
"""

from datetime import date, datetime

from .errors import DomainError

# December 5, 2020 (blue monkey)
EPOCH = date(2020, 12, 5)
EPOCH_DAY = 18_601

NOUNS: tuple[str, ...] = (
    "monkey", "gorilla", "tornado", "rhino", "rabbit", "dog", "turtle", "goat",
    "dinosaur", "shark", "snake", "bunny", "marmot", "star", "alpaca", "panda",
    "hamster", "hedgehog", "kangaroo", "crocodile", "duckling", "hippo", "dolphin", "owl",
    "seal", "piglet", "penguin", "truck", "sneakers", "dracula", "trebuchet", "chameleon",
    "lizard", "donkey", "koala", "otter", "cat", "wombat", "beachball", "capybara",
    "buffalo", "frog", "mouse", "telephone", "laptop", "toaster", "waffle", "bobblehead",
    "crayon", "sunglasses", "light-bulb", "water-wings", "shoes", "bongos", "goldfish", "legos",
    "tulips", "dune-buggy", "torpedo", "rocket", "diorama", "beanbag", "radio", "banana",
)  # fmt: skip

ADJECTIVES: tuple[str, ...] = (
    "blue", "sparkling", "orange", "puffy", "beryllium", "plutonium", "mango", "cobalt",
    "purple", "tungsten", "yellow", "happy", "transparent", "pink", "aqua", "lavender",
    "alabaster", "laughing", "lemon", "tangerine", "golden", "silver", "bronze", "amber",
    "ruby", "goldenrod", "khaki", "violet", "lime", "steel", "red", "ceramic",
    "platinum", "carbon", "navy", "stretchy", "nickel", "copper", "funky", "aluminum",
    "zinc", "chrome", "lead", "radium", "zinc", "iron", "charcoal", "titanium",
    "angry", "chocolate", "turquoise", "cerulean", "apricot", "green", "maroon", "blasé",
    "grumpy", "cornflower", "chartreuse", "neon", "mustard", "rubber", "paper", "plastic",
)  # fmt: skip


def build_number(day: date) -> int:
    """Return the number of days between the build epoch and the given date.

    Dates before the epoch give negative numbers. A datetime contributes
    its own calendar date.
    """
    if isinstance(day, datetime):
        day = day.date()
    return day.toordinal() - EPOCH.toordinal()


def build_name(when: int | date) -> str:
    """Return the memorable name for a build number or a date.

    Args:
        when: Build number, or a date/datetime to convert with build_number()

    Returns:
        Name like "sparkling piglet"

    Raises:
        DomainError: If the word lists are empty
    """
    number = when if isinstance(when, int) else build_number(when)
    if not NOUNS or not ADJECTIVES:
        raise DomainError("Build name word lists are empty")
    # Floor division and modulo keep negative build numbers in range
    noun = NOUNS[number % len(NOUNS)]
    adjective = ADJECTIVES[(number // len(NOUNS)) % len(ADJECTIVES)]
    return f"{adjective} {noun}"

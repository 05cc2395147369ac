WORDS = [
    "lorem", "ipsum", "dolor", "sit", "amet", "consectetur", "adipiscing", "elit",
    "sed", "do", "eiusmod", "tempor", "incididunt", "ut", "labore", "et", "dolore",
    "magna", "aliqua", "enim", "ad", "minim", "veniam", "quis", "nostrud",
    "exercitation", "ullamco", "laboris", "nisi", "aliquip", "ex", "ea", "commodo",
    "consequat", "duis", "aute", "irure", "in", "reprehenderit", "voluptate",
    "velit", "esse", "cillum", "fugiat", "nulla", "pariatur", "excepteur", "sint",
    "occaecat", "cupidatat", "non", "proident", "sunt", "culpa", "qui", "officia",
    "deserunt", "mollit", "anim", "id", "est", "laborum", "vitae", "auctor",
    "integer", "pretium", "arcu", "feugiat", "mauris", "rhoncus", "tellus", "viverra",
]

FIRST_NAMES = [
    "Alex", "Bailey", "Casey", "Dana", "Eden", "Finley", "Gray", "Harper",
    "Indigo", "Jordan", "Kai", "Logan", "Morgan", "Noel", "Oakley", "Parker",
    "Quinn", "Riley", "Sage", "Taylor", "Uri", "Val", "Wren", "Yael", "Zion",
]

LAST_NAMES = [
    "Abbott", "Barnes", "Castillo", "Dawson", "Ellison", "Fischer", "Garner",
    "Holloway", "Ingram", "Jensen", "Kowalski", "Lindqvist", "Moreau", "Nakamura",
    "Okafor", "Petrov", "Quintero", "Rahman", "Sorensen", "Takahashi", "Underwood",
    "Varga", "Whitfield", "Yamada", "Zielinski",
]

TOP_LEVEL_DOMAINS = ["com", "net", "org", "io", "dev"]

CONSONANTS = "bcdfghjklmnpqrstvwxyz"
VOWELS = "aeiou"

"""Shared test data."""

EXAMPLES = [
    {"text": "Heita bra, o kae?", "label": "sepitori"},
    {"text": "Sharp sharp bra", "label": "sepitori"},
    {"text": "Ke a go bona bra", "label": "sepitori"},
    {"text": "O kae mfana", "label": "sepitori"},
    {"text": "How are you today?", "label": "non-sepitori"},
    {"text": "See you tomorrow", "label": "non-sepitori"},
    {"text": "Thank you for your help", "label": "non-sepitori"},
    {"text": "How is the weather today", "label": "non-sepitori"},
]

# File: vocabreview_app/utils/text_utils.py
# Text comparison helpers shared by grading and distractor selection.


def normalize_text(text) -> str:
    """Trim and casefold so that 'Happy ' and 'happy' compare equal. None becomes ''."""
    return (text or '').strip().casefold()

# File: vocabreview_app/modules/questions/config.py


class QuestionDefaultConfig:
    """
    Default settings for question generation.
    Overridden at runtime by QUIZ_OPTION_COUNT / QUIZ_DISTRACTOR_POOL_SIZE.
    """
    OPTION_COUNT = 4
    # Random candidates fetched per question before dedup/filtering
    DISTRACTOR_POOL_SIZE = 10

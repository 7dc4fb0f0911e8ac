# File: vocabreview_app/modules/srs/config.py


class SrsConstants:
    """Constants for the mastery-ladder scheduler."""

    # Days until the next review, indexed by mastery level
    INTERVAL_LADDER = {
        0: (1, 3),
        1: (5, 10),
        2: (14, 21),
        3: (30,),
        4: (60,),
        5: (90,),
    }
    MIN_MASTERY_LEVEL = 0
    MAX_MASTERY_LEVEL = 5

    # Progress assigned when a learner saves a word
    INITIAL_REVIEW_INTERVAL = 1

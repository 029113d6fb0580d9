"""Time base, generation caps and MIDI constants.

All durations are expressed in **units** of 1/48 of a whole note, which is
also the ABC default note length (``L:1/48``) written by
:mod:`sightread.abc_notation`.  One timing table slot is one unit.

- `BASE_DURATION = 48` - one whole note, and one 4/4 measure
- `DURATIONS` - named note values accepted in configuration
- `WRITABLE_DURATIONS` - lengths one ABC note or rest token can carry
- `INDEX_*_CAP` - hard staff index caps that generation never exceeds
"""

import typing


BASE_DURATION = 48

WHOLE = BASE_DURATION
HALF = BASE_DURATION // 2
QUARTER = BASE_DURATION // 4
EIGHTH = BASE_DURATION // 8

DURATIONS: typing.Dict[str, int] = {
	"whole": WHOLE,
	"half": HALF,
	"quarter": QUARTER,
	"eighth": EIGHTH,
}

# Lengths a single note or rest can show: plain and dotted values, longest first.
WRITABLE_DURATIONS: typing.List[int] = [48, 36, 24, 18, 12, 9, 6, 3]

METER = "4/4"
MEASURES_PER_LINE = 4

# Staff index caps (inclusive).  Index 0 is the tonic nearest middle C.
INDEX_TOP_MIN_CAP = -5
INDEX_TOP_MAX_CAP = 20
INDEX_BOTTOM_MIN_CAP = -20
INDEX_BOTTOM_MAX_CAP = 5

INDEX_ABSOLUTE_MIN = min(INDEX_TOP_MIN_CAP, INDEX_BOTTOM_MIN_CAP)
INDEX_ABSOLUTE_MAX = max(INDEX_TOP_MAX_CAP, INDEX_BOTTOM_MAX_CAP)

MIDDLE_C = 60

# Highlight colours for rendered notes.
COLOR_SELECT = "#00AA00"
COLOR_DEFAULT = "#000000"
COLOR_WRONG = "#CC0000"

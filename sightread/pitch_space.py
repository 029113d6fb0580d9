"""Staff index to pitch mapping.

A staff index counts diatonic steps in the active key.  Index 0 is the key's
tonic in the octave nearest middle C, index 1 the next scale degree up, -1 the
degree below, and every 7 steps is one octave.

Module-level constants:
- `NOTE_NAME_TO_PC`: Maps tonic names (e.g. `"C"`, `"F#"`, `"Bb"`) to pitch classes (0-11)
- `SCALE_INTERVALS`: Semitone intervals for the supported modes
"""

import dataclasses
import typing

import sightread.constants
import sightread.errors


NOTE_NAME_TO_PC: typing.Dict[str, int] = {
	"Cb": 11,
	"C": 0,
	"C#": 1,
	"Db": 1,
	"D": 2,
	"D#": 3,
	"Eb": 3,
	"E": 4,
	"F": 5,
	"F#": 6,
	"Gb": 6,
	"G": 7,
	"G#": 8,
	"Ab": 8,
	"A": 9,
	"A#": 10,
	"Bb": 10,
	"B": 11,
}

LETTERS = "CDEFGAB"

LETTER_PC: typing.Dict[str, int] = {
	"C": 0,
	"D": 2,
	"E": 4,
	"F": 5,
	"G": 7,
	"A": 9,
	"B": 11,
}

SCALE_INTERVALS: typing.Dict[str, typing.List[int]] = {
	"major": [0, 2, 4, 5, 7, 9, 11],
	"minor": [0, 2, 3, 5, 7, 8, 10],
}


@dataclasses.dataclass(frozen=True)
class Pitch:

	"""
	A single notated pitch.

	``name`` is the ABC token for the pitch without accidentals (the key
	signature supplies them), e.g. ``"C"`` for middle C or ``"e'"`` for E6.
	"""

	name: str
	midi: int


@dataclasses.dataclass(frozen=True)
class Key:

	"""
	A parsed key signature.

	Use :func:`parse_key` rather than constructing this directly.
	"""

	name: str
	tonic: str
	mode: str
	tonic_pc: int
	tonic_midi: int


	@property
	def letter_index (self) -> int:

		"""Position of the tonic letter in ``CDEFGAB``."""

		return LETTERS.index(self.tonic[0])


def parse_key (key_name: str) -> Key:

	"""Validate an ABC key name and resolve its tonic.

	Parameters:
		key_name: Tonic with optional accidental and an optional ``m`` suffix
			for natural minor (e.g. ``"C"``, ``"F#"``, ``"Bb"``, ``"C#m"``).

	Returns:
		A :class:`Key` whose ``tonic_midi`` is the tonic nearest middle C.

	Raises:
		ConfigurationError: If the key name is not recognised.

	Example:
		```python
		parse_key("G").tonic_midi   # → 55 (G3, five semitones below C4)
		parse_key("F").tonic_midi   # → 65
		parse_key("Am").mode        # → "minor"
		```
	"""

	tonic = key_name
	mode = "major"

	if len(key_name) > 1 and key_name.endswith("m"):
		tonic = key_name[:-1]
		mode = "minor"

	if tonic not in NOTE_NAME_TO_PC:
		raise sightread.errors.ConfigurationError(
			f"Unknown key name: {key_name!r}. Expected e.g. 'C', 'F#', 'Bb', 'Am'."
		)

	tonic_pc = NOTE_NAME_TO_PC[tonic]

	# Nearest octave to middle C; a tritone away resolves upward.
	offset = (tonic_pc - sightread.constants.MIDDLE_C) % 12
	if offset > 6:
		offset -= 12

	return Key(
		name = key_name,
		tonic = tonic,
		mode = mode,
		tonic_pc = tonic_pc,
		tonic_midi = sightread.constants.MIDDLE_C + offset
	)


def _abc_name (letter: str, octave: int) -> str:

	"""Spell a natural letter in ABC octave notation (octave 4 = ``C``..``B``)."""

	if octave >= 5:
		return letter.lower() + "'" * (octave - 5)

	return letter + "," * (4 - octave)


def pitch_at (index: int, key: typing.Union[str, Key]) -> Pitch:

	"""Return the diatonic pitch at a staff index in a key.

	Parameters:
		index: Signed diatonic offset from the tonic nearest middle C.
		key: Key name or a parsed :class:`Key`.

	Raises:
		ValueError: If ``index`` lies outside the absolute staff caps.

	Example:
		```python
		pitch_at(0, "C")    # → Pitch(name="C", midi=60)
		pitch_at(7, "C")    # → Pitch(name="c", midi=72)
		pitch_at(-1, "C")   # → Pitch(name="B,", midi=59)
		pitch_at(6, "F#")   # → Pitch(name="e", midi=77), sounding E#
		```
	"""

	if not sightread.constants.INDEX_ABSOLUTE_MIN <= index <= sightread.constants.INDEX_ABSOLUTE_MAX:
		raise ValueError(
			f"Staff index {index} outside "
			f"[{sightread.constants.INDEX_ABSOLUTE_MIN}, {sightread.constants.INDEX_ABSOLUTE_MAX}]"
		)

	if isinstance(key, str):
		key = parse_key(key)

	degree = index % 7
	octave_shift = index // 7
	midi = key.tonic_midi + SCALE_INTERVALS[key.mode][degree] + 12 * octave_shift

	# Octave numbers follow the letter, so Cb4 is 59 and B#3 is 60.
	tonic_letter = key.tonic[0]
	accidental = (key.tonic_pc - LETTER_PC[tonic_letter] + 6) % 12 - 6
	tonic_octave = (key.tonic_midi - accidental) // 12 - 1

	letter_steps = key.letter_index + index
	letter = LETTERS[letter_steps % 7]
	octave = tonic_octave + letter_steps // 7

	return Pitch(name=_abc_name(letter, octave), midi=midi)

"""Live input matching.

:func:`classify` turns raw MIDI bytes (or a ``mido.Message`` from an input
port) into note presses and releases, dropping everything else.
:class:`HeldNotes` tracks which keys are down, and :func:`evaluate` compares
that set with the pitches expected at the cursor.

Matching is order independent: holding E then C satisfies ``{60, 64}``
exactly as C then E does.
"""

import dataclasses
import enum
import logging
import typing

import mido

import sightread.timing


logger = logging.getLogger(__name__)


class MatchResult (enum.Enum):

	"""Outcome of comparing the held keys with the expected chord."""

	NO_MATCH = "no_match"
	CORRECT = "correct"
	INCOMPLETE = "incomplete"


@dataclasses.dataclass(frozen=True)
class NoteEvent:

	"""
	A key press (``on=True``) or release on the practice channel.
	"""

	pitch: int
	on: bool


MidiData = typing.Union[mido.Message, typing.Sequence[int], bytes]


def classify (data: MidiData, channel: int = 0) -> typing.Optional[NoteEvent]:

	"""Return the note event in a MIDI message, or None if it is not one.

	Note-on with velocity 0 counts as a release.  Clock, active sensing,
	control change, other channels and malformed bytes all return None.

	Parameters:
		data: Raw ``[status, pitch, velocity]`` bytes or a ``mido.Message``.
		channel: Zero-based channel to accept (0 = MIDI channel 1).

	Example:
		```python
		classify([144, 60, 100])    # → NoteEvent(pitch=60, on=True)
		classify([144, 60, 0])      # → NoteEvent(pitch=60, on=False)
		classify([248])             # → None (timing clock)
		```
	"""

	if isinstance(data, mido.Message):
		message = data

	else:
		try:
			message = mido.Message.from_bytes(list(data))

		except (ValueError, TypeError) as e:
			logger.debug(f"Ignoring malformed MIDI data {list(data)!r}: {e}")
			return None

	if message.type not in ("note_on", "note_off"):
		return None

	if message.channel != channel:
		return None

	on = message.type == "note_on" and message.velocity > 0

	return NoteEvent(pitch=message.note, on=on)


class HeldNotes:

	"""The set of keys currently held down, across all input devices."""

	def __init__ (self) -> None:

		self._pressed: typing.Set[int] = set()


	def press (self, pitch: int) -> None:

		self._pressed.add(pitch)


	def release (self, pitch: int) -> None:

		self._pressed.discard(pitch)


	def apply (self, event: NoteEvent) -> None:

		"""Press or release according to ``event``."""

		if event.on:
			self.press(event.pitch)

		else:
			self.release(event.pitch)


	def clear (self) -> None:

		self._pressed.clear()


	def snapshot (self) -> typing.FrozenSet[int]:

		"""Return the held pitches."""

		return frozenset(self._pressed)


	def __len__ (self) -> int:

		return len(self._pressed)


def evaluate (
	played: typing.Iterable[int],
	table: sightread.timing.TimingTable,
	cursor: int,
	report_incomplete: bool = False
) -> MatchResult:

	"""Compare held pitches with the chord expected at ``cursor``.

	Parameters:
		played: Held MIDI pitches in any order; duplicates are ignored.
		table: The active timing table.
		cursor: A non-empty slot index, as kept by
			:class:`~sightread.cursor.CursorController`.
		report_incomplete: When True, a non-empty strict subset of the
			expected chord is reported as ``INCOMPLETE`` instead of
			``NO_MATCH``.

	Returns:
		``CORRECT`` when the sets are equal, otherwise ``NO_MATCH`` (or
		``INCOMPLETE`` as described above).
	"""

	played_set = frozenset(played)
	expected = table.expected_at(cursor)

	if played_set == expected:
		return MatchResult.CORRECT

	if report_incomplete and played_set and played_set < expected:
		return MatchResult.INCOMPLETE

	return MatchResult.NO_MATCH

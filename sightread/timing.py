"""Time-indexed table of expected pitches.

The table has one slot per timing unit across the whole phrase.  A slot is
either :data:`EMPTY` (no chord starts there) or :class:`Expected`, the set of
MIDI pitches that must be held together at that instant, merged across both
staves.
"""

import dataclasses
import typing

import sightread.errors
import sightread.generator


class Empty:

	"""
	Slot inside a previous chord's duration.  Use the :data:`EMPTY` singleton.
	"""

	__slots__ = ()

	def __repr__ (self) -> str:

		return "EMPTY"


EMPTY = Empty()


@dataclasses.dataclass(frozen=True)
class Expected:

	"""
	Pitches that start together at one slot.  Never empty.
	"""

	pitches: typing.FrozenSet[int]


	def __post_init__ (self) -> None:

		if not self.pitches:
			raise ValueError("Expected slot requires at least one pitch")


	def merged (self, pitches: typing.Iterable[int]) -> "Expected":

		"""Return a slot holding the union of this slot and ``pitches``."""

		return Expected(self.pitches | frozenset(pitches))


TimingSlot = typing.Union[Empty, Expected]


class TimingTable:

	"""An immutable-by-convention sequence of :data:`TimingSlot`."""

	def __init__ (self, slots: typing.Sequence[TimingSlot]) -> None:

		self._slots: typing.Tuple[TimingSlot, ...] = tuple(slots)


	def __len__ (self) -> int:

		return len(self._slots)


	def __getitem__ (self, index: int) -> TimingSlot:

		return self._slots[index]


	def __iter__ (self) -> typing.Iterator[TimingSlot]:

		return iter(self._slots)


	def is_expected (self, index: int) -> bool:

		"""Return True if a chord starts at ``index``."""

		return isinstance(self._slots[index], Expected)


	def expected_at (self, index: int) -> typing.FrozenSet[int]:

		"""Return the pitch set at ``index``.

		Raises:
			ValueError: If the slot is empty.
		"""

		slot = self._slots[index]

		if not isinstance(slot, Expected):
			raise ValueError(f"Slot {index} is empty")

		return slot.pitches


	def expected_indices (self) -> typing.List[int]:

		"""Return the indices of every non-empty slot, in order."""

		return [i for i, slot in enumerate(self._slots) if isinstance(slot, Expected)]


def build (
	top: sightread.generator.StaffSequence,
	bottom: sightread.generator.StaffSequence
) -> TimingTable:

	"""Build the timing table for a phrase and stamp each chord's ``timing_index``.

	The top staff lays out the slots; the bottom staff is then merged into
	them from time 0.

	Raises:
		IntegrityViolation: If the staves differ in total duration.

	Example:
		```python
		# Top: three quarter notes, bottom: one dotted half
		table = build(top, bottom)
		len(table)                  # → 36
		table.expected_indices()    # → [0, 12, 24]
		```
	"""

	top_total = sightread.generator.total_duration(top)
	bottom_total = sightread.generator.total_duration(bottom)

	if top_total != bottom_total:
		raise sightread.errors.IntegrityViolation(
			f"Staff durations differ: top {top_total}, bottom {bottom_total}"
		)

	slots: typing.List[TimingSlot] = []
	t = 0

	for chord in top:
		slots.extend([EMPTY] * chord.duration)
		slots[t] = Expected(chord.midi_set())
		chord.timing_index = t
		t += chord.duration

	t = 0

	for chord in bottom:

		slot = slots[t]

		if isinstance(slot, Expected):
			slots[t] = slot.merged(chord.midi_set())

		else:
			slots[t] = Expected(chord.midi_set())

		chord.timing_index = t
		t += chord.duration

	return TimingTable(slots)

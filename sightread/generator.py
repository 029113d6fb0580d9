"""Constrained chord generation for the two staves.

:class:`ChordGenerator` draws one phrase: a top (treble) and bottom (bass)
sequence of :class:`Chord` objects.  Roots on a staff are distinct indices
drawn from the staff's range; with harmony enabled each root is stacked into
a chord by :class:`~sightread.harmony.HarmonyState`.

Both staves always end up with the same total duration.  When the configured
counts and note values disagree, the last chord of the shorter staff is
lengthened to make up the difference.
"""

import dataclasses
import logging
import random
import typing

import sightread.config
import sightread.harmony
import sightread.pitch_space


logger = logging.getLogger(__name__)


@dataclasses.dataclass
class Chord:

	"""
	One or more pitches starting together on one staff.

	``timing_index`` is filled in by :func:`sightread.timing.build` and stays
	fixed until the phrase is regenerated.
	"""

	pitches: typing.List[sightread.pitch_space.Pitch]
	duration: int
	timing_index: typing.Optional[int] = None


	def midi_set (self) -> typing.FrozenSet[int]:

		"""Return the chord's MIDI numbers with duplicates collapsed."""

		return frozenset(p.midi for p in self.pitches)


StaffSequence = typing.List[Chord]


def total_duration (sequence: StaffSequence) -> int:

	"""Sum the durations of a staff sequence."""

	return sum(chord.duration for chord in sequence)


class ChordGenerator:

	"""Draws staff sequences from a :class:`~sightread.config.GenerationConfig`."""

	def __init__ (self, rng: typing.Optional[random.Random] = None) -> None:

		"""
		Parameters:
			rng: Optional seeded ``random.Random`` for repeatable phrases.
		"""

		self.rng = rng or random.Random()

		self.harmony: typing.Dict[str, sightread.harmony.HarmonyState] = {
			"top": sightread.harmony.HarmonyState(),
			"bottom": sightread.harmony.HarmonyState(),
		}


	def generate (self, config: sightread.config.GenerationConfig) -> typing.Tuple[StaffSequence, StaffSequence]:

		"""Validate ``config`` and draw a top and bottom sequence of equal total duration.

		Raises:
			ConfigurationError: If the config fails validation.  Nothing is
				drawn in that case.
		"""

		return self.draw(config.validated())


	def draw (self, config: sightread.config.GenerationConfig) -> typing.Tuple[StaffSequence, StaffSequence]:

		"""Draw from a config already returned by :meth:`GenerationConfig.validated`."""

		key = sightread.pitch_space.parse_key(config.key)

		if config.reset_harmony:
			for state in self.harmony.values():
				state.reset()

		top = self._draw_staff("top", config.top, key, config.harmony)
		bottom = self._draw_staff("bottom", config.bottom, key, config.harmony)

		difference = total_duration(top) - total_duration(bottom)

		if difference > 0:
			bottom[-1].duration += difference

		elif difference < 0:
			top[-1].duration -= difference

		if difference:
			logger.debug(f"Lengthened final {'bottom' if difference > 0 else 'top'} chord by {abs(difference)} units")

		logger.info(
			f"Generated phrase in {config.key}: {len(top)} top / {len(bottom)} bottom chords, "
			f"{total_duration(top)} units"
		)

		return top, bottom


	def _draw_staff (
		self,
		staff_name: str,
		staff: sightread.config.StaffConfig,
		key: sightread.pitch_space.Key,
		use_harmony: bool
	) -> StaffSequence:

		"""Draw ``note_count`` chords on distinct root indices."""

		roots = self.rng.sample(range(staff.min_index, staff.max_index + 1), staff.note_count)

		sequence: StaffSequence = []

		for root in roots:

			if use_harmony:
				indices = self.harmony[staff_name].choose(root, staff.max_index, self.rng)

			else:
				indices = [root]

			pitches = [sightread.pitch_space.pitch_at(i, key) for i in indices]
			sequence.append(Chord(pitches=pitches, duration=staff.duration))

		return sequence

"""Harmony shapes for generated chords.

A harmony shape is a stack of diatonic staff-index offsets above a chord
root.  :class:`HarmonyState` picks one shape per chord with weighted
randomness and remembers its last few picks so the same shape is not used
over and over.  The memory persists across phrases until :meth:`reset`.
"""

import random
import typing


DEFAULT_SHAPE_DIVERSITY: float = 0.4

HISTORY_LENGTH = 4

HARMONY_SHAPES: typing.Dict[str, typing.List[int]] = {
	"single": [0],
	"third": [0, 2],
	"fourth": [0, 3],
	"fifth": [0, 4],
	"sixth": [0, 5],
	"octave": [0, 7],
	"triad": [0, 2, 4],
	"sixth_chord": [0, 2, 5],
	"six_four": [0, 3, 5],
}

SHAPE_WEIGHTS: typing.Dict[str, float] = {
	"single": 3.0,
	"third": 3.0,
	"fourth": 1.0,
	"fifth": 2.0,
	"sixth": 2.0,
	"octave": 1.0,
	"triad": 2.0,
	"sixth_chord": 1.0,
	"six_four": 1.0,
}


class HarmonyState:

	"""Weighted harmony shape selection with anti-repetition memory."""

	def __init__ (self, shape_diversity: float = DEFAULT_SHAPE_DIVERSITY) -> None:

		"""
		Parameters:
			shape_diversity: 0.0-1.0.  Each recent use of a shape multiplies
				its weight by this factor.  1.0 disables the penalty.
		"""

		if shape_diversity < 0 or shape_diversity > 1:
			raise ValueError("Shape diversity must be between 0 and 1")

		self.shape_diversity = shape_diversity
		self.history: typing.List[str] = []


	def reset (self) -> None:

		"""Forget recent picks."""

		self.history = []


	def choose (self, root: int, max_index: int, rng: random.Random) -> typing.List[int]:

		"""Pick a shape for a chord rooted at ``root`` and return its staff indices.

		Only shapes whose highest index stays at or below ``max_index`` are
		candidates, so ``"single"`` is always available.
		"""

		candidates = [
			name for name, offsets in HARMONY_SHAPES.items()
			if root + offsets[-1] <= max_index
		]

		scores = [
			SHAPE_WEIGHTS[name] * self.shape_diversity ** self.history.count(name)
			for name in candidates
		]

		total = sum(scores)

		if total <= 0.0:
			chosen = rng.choice(candidates)

		else:
			r = rng.uniform(0.0, total)
			cumulative = 0.0
			chosen = candidates[-1]

			for name, score in zip(candidates, scores):
				cumulative += score
				if score > 0.0 and r <= cumulative:
					chosen = name
					break

		self.history.append(chosen)
		if len(self.history) > HISTORY_LENGTH:
			self.history.pop(0)

		return [root + offset for offset in HARMONY_SHAPES[chosen]]

import typing

import sightread.errors
import sightread.timing


class CursorController:

	"""
	Practice position within a timing table.

	The cursor always rests on a non-empty slot.  :meth:`advance` wraps back
	to the first chord after the last one; :meth:`retreat` stops at the first.
	Highlighting is left to the caller, which reads :attr:`cursor`.
	"""

	def __init__ (self, table: sightread.timing.TimingTable) -> None:

		"""
		Raises:
			IntegrityViolation: If the table has no non-empty slot.
		"""

		self.table = table
		self._expected = table.expected_indices()

		if not self._expected:
			raise sightread.errors.IntegrityViolation("Timing table has no expected slots")

		self.cursor = self._expected[0]


	def reset (self) -> None:

		"""Move to the first chord."""

		self.cursor = self._expected[0]


	def advance (self) -> bool:

		"""Move to the next chord.

		Returns:
			True if the cursor moved forward, False if it wrapped to the start.
		"""

		for index in range(self.cursor + 1, len(self.table)):
			if self.table.is_expected(index):
				self.cursor = index
				return True

		self.reset()
		return False


	def retreat (self) -> None:

		"""Move to the previous chord, stopping at the first."""

		for index in range(self.cursor - 1, -1, -1):
			if self.table.is_expected(index):
				self.cursor = index
				return

		self.reset()


	def at_final (self) -> bool:

		"""Return True if no chord starts after the cursor."""

		return self.cursor >= self._expected[-1]


	@property
	def expected (self) -> typing.FrozenSet[int]:

		"""The pitches to play at the cursor."""

		return self.table.expected_at(self.cursor)

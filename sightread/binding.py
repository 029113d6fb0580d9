"""Links rendered note elements back to generated chords.

The notation renderer produces one element per chord for each staff, in the
same order :func:`sightread.abc_notation.encode` wrote them.  A
:class:`RenderBinding` zips the two lists together and lets the integration
layer find the elements to colour for a cursor position.  Elements are opaque
here (SVG nodes, widget ids, anything hashable or not).
"""

import typing

import sightread.constants
import sightread.errors
import sightread.generator


Handle = typing.Any


class RenderBinding:

	"""Map of (staff, chord position) to a rendered element."""

	def __init__ (self) -> None:

		self._handles: typing.Dict[typing.Tuple[str, int], Handle] = {}
		self._timing: typing.Dict[typing.Tuple[str, int], int] = {}


	def bind (
		self,
		top: sightread.generator.StaffSequence,
		bottom: sightread.generator.StaffSequence,
		top_elements: typing.Sequence[Handle],
		bottom_elements: typing.Sequence[Handle]
	) -> None:

		"""Replace the map with a fresh index-for-index zip.

		Chords must already carry a ``timing_index`` (see
		:func:`sightread.timing.build`).

		Raises:
			IntegrityViolation: If either staff's element count differs from
				its chord count.  The previous map is kept.
		"""

		handles: typing.Dict[typing.Tuple[str, int], Handle] = {}
		timing: typing.Dict[typing.Tuple[str, int], int] = {}

		for staff_name, chords, elements in (("top", top, top_elements), ("bottom", bottom, bottom_elements)):

			if len(chords) != len(elements):
				raise sightread.errors.IntegrityViolation(
					f"{staff_name} staff has {len(chords)} chords but {len(elements)} rendered elements"
				)

			for i, (chord, element) in enumerate(zip(chords, elements)):

				if chord.timing_index is None:
					raise sightread.errors.IntegrityViolation(f"{staff_name} chord {i} has no timing index")

				handles[(staff_name, i)] = element
				timing[(staff_name, i)] = chord.timing_index

		self._handles = handles
		self._timing = timing


	def handle_for (self, staff_name: str, position: int) -> typing.Optional[Handle]:

		"""Return the element bound to a chord, or None before binding."""

		return self._handles.get((staff_name, position))


	def handles_at (self, timing_index: int) -> typing.List[Handle]:

		"""Return every element whose chord starts at ``timing_index``."""

		return [
			self._handles[ref] for ref, index in self._timing.items()
			if index == timing_index
		]


	def colours (self, cursor: int, wrong: bool = False) -> typing.List[typing.Tuple[Handle, str]]:

		"""Return ``(element, colour)`` pairs for highlighting the cursor.

		Elements at the cursor get the select colour (or the wrong colour when
		``wrong`` is True); every other element gets the default colour.
		"""

		active = sightread.constants.COLOR_WRONG if wrong else sightread.constants.COLOR_SELECT

		return [
			(self._handles[ref], active if index == cursor else sightread.constants.COLOR_DEFAULT)
			for ref, index in self._timing.items()
		]


	def __len__ (self) -> int:

		return len(self._handles)

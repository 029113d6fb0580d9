"""Practice session: one phrase, one cursor, live input.

A :class:`PracticeSession` owns everything that changes while someone
practises: the generator (and its harmony memory), the current phrase, the
cursor, the held keys and the rendered-element binding.  There is no
module-level state, so any number of sessions can run side by side.

Regeneration builds a complete new phrase, cursor and binding before
swapping them in with a single assignment.  If any step fails, the exception
propagates and the previous phrase stays active.

Signals (see :mod:`sightread.event_emitter`):

- ``advance(cursor)`` - a correct chord moved the cursor on
- ``retreat(cursor)`` - the cursor moved back
- ``wrong(played, expected)`` - a held key is not part of the expected chord
- ``complete(phrase)`` - the final chord was played; a new phrase follows
- ``regenerate(phrase)`` - a new phrase is active
"""

import dataclasses
import logging
import random
import typing

import sightread.abc_notation
import sightread.binding
import sightread.config
import sightread.cursor
import sightread.event_emitter
import sightread.generator
import sightread.matcher
import sightread.timing


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Phrase:

	"""
	One generated phrase with its markup and timing table.
	"""

	config: sightread.config.GenerationConfig
	top: sightread.generator.StaffSequence
	bottom: sightread.generator.StaffSequence
	markup: str
	table: sightread.timing.TimingTable


	def chords_at (self, timing_index: int) -> typing.List[sightread.generator.Chord]:

		"""Return the chords from both staves that start at ``timing_index``."""

		return [c for c in self.top + self.bottom if c.timing_index == timing_index]


@dataclasses.dataclass(frozen=True)
class _Active:

	phrase: Phrase
	controller: sightread.cursor.CursorController
	binding: sightread.binding.RenderBinding


class PracticeSession:

	"""Drives practice over generated phrases from live MIDI input."""

	def __init__ (
		self,
		config: typing.Optional[sightread.config.GenerationConfig] = None,
		rng: typing.Optional[random.Random] = None,
		report_incomplete: bool = False
	) -> None:

		"""
		Parameters:
			config: Generation settings.  Defaults to
				:class:`~sightread.config.GenerationConfig` defaults.
			rng: Optional seeded ``random.Random`` for repeatable phrases.
			report_incomplete: Report a growing partial chord as
				``INCOMPLETE`` rather than ``NO_MATCH``.

		Raises:
			ConfigurationError: If the first phrase cannot be generated.
		"""

		self.config = config or sightread.config.GenerationConfig()
		self.report_incomplete = report_incomplete
		self.generator = sightread.generator.ChordGenerator(rng)
		self.held = sightread.matcher.HeldNotes()
		self.events = sightread.event_emitter.EventEmitter()

		self._active: typing.Optional[_Active] = None
		self.regenerate()


	def _require_active (self) -> _Active:

		if self._active is None:
			raise RuntimeError("Session has no active phrase")

		return self._active


	@property
	def phrase (self) -> Phrase:

		return self._require_active().phrase


	@property
	def markup (self) -> str:

		return self.phrase.markup


	@property
	def table (self) -> sightread.timing.TimingTable:

		return self.phrase.table


	@property
	def binding (self) -> sightread.binding.RenderBinding:

		return self._require_active().binding


	@property
	def cursor (self) -> int:

		"""Current timing table index."""

		return self._require_active().controller.cursor


	@property
	def expected (self) -> typing.FrozenSet[int]:

		"""Pitches to play at the cursor."""

		return self._require_active().controller.expected


	def at_final (self) -> bool:

		return self._require_active().controller.at_final()


	def regenerate (self, config: typing.Optional[sightread.config.GenerationConfig] = None) -> Phrase:

		"""Generate, encode and index a new phrase, then make it active.

		Parameters:
			config: New settings to adopt.  Defaults to the current ones.

		Raises:
			ConfigurationError: For invalid settings.
			IntegrityViolation: If the phrase cannot be indexed.
		"""

		config = config or self.config

		validated = config.validated()
		top, bottom = self.generator.draw(validated)
		markup = sightread.abc_notation.encode(top, bottom, meter=validated.meter, key=validated.key)
		table = sightread.timing.build(top, bottom)
		controller = sightread.cursor.CursorController(table)

		phrase = Phrase(config=validated, top=top, bottom=bottom, markup=markup, table=table)

		self._active = _Active(phrase=phrase, controller=controller, binding=sightread.binding.RenderBinding())
		self.config = config

		logger.debug(f"Phrase markup:\n{markup}")
		self.events.emit(sightread.event_emitter.REGENERATE, phrase)

		return phrase


	def bind_rendered (
		self,
		top_elements: typing.Sequence[sightread.binding.Handle],
		bottom_elements: typing.Sequence[sightread.binding.Handle]
	) -> None:

		"""Attach the renderer's note elements to the active phrase's chords.

		Raises:
			IntegrityViolation: On an element count mismatch.
		"""

		active = self._require_active()
		active.binding.bind(active.phrase.top, active.phrase.bottom, top_elements, bottom_elements)


	def advance (self) -> bool:

		"""Move the cursor to the next chord, wrapping at the end."""

		moved = self._require_active().controller.advance()
		self.events.emit(sightread.event_emitter.ADVANCE, self.cursor)

		return moved


	def retreat (self) -> None:

		"""Move the cursor to the previous chord."""

		self._require_active().controller.retreat()
		self.events.emit(sightread.event_emitter.RETREAT, self.cursor)


	def handle_midi (self, data: sightread.matcher.MidiData) -> typing.Optional[sightread.matcher.MatchResult]:

		"""Apply one raw MIDI message from any input device.

		Returns:
			The match result, or None if the message was not a note on the
			practice channel.
		"""

		event = sightread.matcher.classify(data, channel=self.config.midi_channel)

		if event is None:
			return None

		return self.handle_note(event)


	def handle_note (self, event: sightread.matcher.NoteEvent) -> sightread.matcher.MatchResult:

		"""Update the held keys and match them against the cursor.

		On a correct chord the held keys are forgotten (so keys still down do
		not count toward the next chord) and the cursor advances.  On the final
		chord a new phrase is generated instead.
		"""

		active = self._require_active()

		self.held.apply(event)
		played = self.held.snapshot()

		result = sightread.matcher.evaluate(
			played,
			active.phrase.table,
			active.controller.cursor,
			report_incomplete = self.report_incomplete
		)

		logger.debug(f"played: {sorted(played)} target: {sorted(active.controller.expected)} -> {result.value}")

		if result is sightread.matcher.MatchResult.CORRECT:

			self.held.clear()

			if active.controller.at_final():
				logger.info("Phrase complete")
				self.events.emit(sightread.event_emitter.COMPLETE, active.phrase)
				self.regenerate()

			else:
				self.advance()

		elif event.on and not played <= active.controller.expected:
			self.events.emit(sightread.event_emitter.WRONG, played, active.controller.expected)

		return result

"""ABC notation output for a generated phrase.

The markup declares two simultaneous staves (``%%staves {1 2}``) and then
writes the phrase in line blocks: the top staff's line under ``V:1``, then the
bottom staff's line under ``V:2``.  The renderer needs the clef and key
re-declared for every line, so each block repeats ``[K:<key> clef=...]``.

The default note length is ``L:1/48``, so a chord's duration in units is
written directly after its pitch (``C12`` is a quarter note).  A chord that
would cross a barline, or whose length no single note can show, is written
at the longest length that fits and padded with rests (``F,48 |z12 |]``), so
both staves keep the same measures.

Example output for one measure per staff:

	T:
	M:4/4
	L:1/48
	K:C
	%%staves {1 2}
	V:1
	[K:C clef=treble]
	C12 E12 G12 c12 |]
	V:2
	[K:C clef=bass]
	C,48 |]
"""

import typing

import sightread.constants
import sightread.generator
import sightread.meter


def chord_token (chord: sightread.generator.Chord, duration: typing.Optional[int] = None) -> str:

	"""Return the ABC token for one chord, e.g. ``C12`` or ``[CEG]12``.

	``duration`` overrides the written length when only part of the chord's
	duration is shown as a note.
	"""

	names = "".join(p.name for p in chord.pitches)

	if len(chord.pitches) > 1:
		names = f"[{names}]"

	return f"{names}{chord.duration if duration is None else duration}"


def _split_length (length: int) -> typing.List[int]:

	"""Break a length into writable note values, longest first."""

	parts: typing.List[int] = []

	while length > 0:
		part = next((d for d in sightread.constants.WRITABLE_DURATIONS if d <= length), length)
		parts.append(part)
		length -= part

	return parts


def _staff_tokens (sequence: sightread.generator.StaffSequence, meter: sightread.meter.Meter) -> typing.List[typing.Tuple[str, int]]:

	"""Lay one staff out as ``(token, length)`` pairs that never cross a barline.

	Each chord is written once, at the longest writable length that fits both
	its duration and the rest of the measure.  The remainder of its duration
	is filled with rests.
	"""

	tokens: typing.List[typing.Tuple[str, int]] = []
	position = 0

	for chord in sequence:

		parts: typing.List[int] = []
		remaining = chord.duration

		while remaining > 0:
			step = min(remaining, meter.measure_units - position % meter.measure_units)
			parts.extend(_split_length(step))
			position += step
			remaining -= step

		tokens.append((chord_token(chord, parts[0]), parts[0]))
		tokens.extend((f"z{length}", length) for length in parts[1:])

	return tokens


def _staff_lines (sequence: sightread.generator.StaffSequence, meter: sightread.meter.Meter) -> typing.List[str]:

	"""Split one staff into lines of measures, ending in a final barline."""

	lines: typing.List[str] = []
	line = ""
	measures = 0
	measure_time = 0
	beat_time = 0

	for token, length in _staff_tokens(sequence, meter):

		line += token
		measure_time += length
		beat_time += length

		# Space at each beat boundary breaks the beams.
		if beat_time >= meter.beat_units:
			beat_time %= meter.beat_units
			line += " "

		if measure_time >= meter.measure_units:
			line += "|"
			measure_time = 0
			beat_time = 0
			measures += 1

			if measures == sightread.constants.MEASURES_PER_LINE:
				lines.append(line)
				line = ""
				measures = 0

	if measure_time:
		line += "|"

	if line:
		lines.append(line)

	if lines:
		lines[-1] += "]"

	return lines


def encode (
	top: sightread.generator.StaffSequence,
	bottom: sightread.generator.StaffSequence,
	meter: typing.Union[str, sightread.meter.Meter] = sightread.constants.METER,
	key: str = "C",
	title: str = ""
) -> str:

	"""Serialise two staff sequences as a grand-staff ABC tune.

	Chords are written in sequence order, one rendered note element each
	(padding rests are not note elements), which
	:class:`sightread.binding.RenderBinding` relies on.
	"""

	if isinstance(meter, str):
		meter = sightread.meter.Meter.parse(meter)

	result = f"T:{title}\n"
	result += f"M:{meter}\n"
	result += f"L:1/{sightread.constants.BASE_DURATION}\n"
	result += f"K:{key}\n"
	result += "%%staves {1 2}\n"

	header_top = f"V:1\n[K:{key} clef=treble]\n"
	header_bottom = f"V:2\n[K:{key} clef=bass]\n"

	lines_top = _staff_lines(top, meter)
	lines_bottom = _staff_lines(bottom, meter)

	for n in range(max(len(lines_top), len(lines_bottom))):

		if n < len(lines_top):
			result += header_top + lines_top[n] + "\n"

		if n < len(lines_bottom):
			result += header_bottom + lines_bottom[n] + "\n"

	return result

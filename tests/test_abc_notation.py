import random
import re
import typing

import pytest

import sightread.abc_notation
import sightread.config
import sightread.generator
import sightread.meter
import sightread.pitch_space


def _chord (names_midis: str, duration: int) -> sightread.generator.Chord:

	"""Build a chord from space-separated ``name:midi`` pairs."""

	pitches = []

	for pair in names_midis.split():
		name, midi = pair.split(":")
		pitches.append(sightread.pitch_space.Pitch(name=name, midi=int(midi)))

	return sightread.generator.Chord(pitches=pitches, duration=duration)


def _run (count: int, duration: int) -> sightread.generator.StaffSequence:

	"""A staff of repeated middle Cs."""

	return [_chord("C:60", duration) for _ in range(count)]


def test_single_measure_tune () -> None:

	"""One measure on each staff, closed with a final barline."""

	top = [_chord("C:60", 12), _chord("E:64", 12), _chord("G:67", 12), _chord("c:72", 12)]
	bottom = [_chord("C,:48", 48)]

	assert sightread.abc_notation.encode(top, bottom) == (
		"T:\n"
		"M:4/4\n"
		"L:1/48\n"
		"K:C\n"
		"%%staves {1 2}\n"
		"V:1\n"
		"[K:C clef=treble]\n"
		"C12 E12 G12 c12 |]\n"
		"V:2\n"
		"[K:C clef=bass]\n"
		"C,48 |]\n"
	)


def test_chord_token () -> None:

	assert sightread.abc_notation.chord_token(_chord("C:60 E:64 G:67", 12)) == "[CEG]12"
	assert sightread.abc_notation.chord_token(_chord("B,:59", 24)) == "B,24"


def test_eighths_are_beamed_in_beats () -> None:

	"""Spaces fall only on beat boundaries."""

	markup = sightread.abc_notation.encode(_run(8, 6), _run(1, 48))

	assert "C6C6 C6C6 C6C6 C6C6 |]" in markup


def test_measures_wrap_into_lines () -> None:

	"""Five measures become a line of four and a line of one, per staff."""

	markup = sightread.abc_notation.encode(_run(20, 12), _run(5, 48))
	lines = markup.splitlines()

	assert markup.count("V:1\n[K:C clef=treble]\n") == 2
	assert markup.count("V:2\n[K:C clef=bass]\n") == 2
	assert markup.count("|]") == 2

	first_top = lines[lines.index("[K:C clef=treble]") + 1]
	assert first_top.count("|") == 4
	assert not first_top.endswith("]")

	assert lines[-1] == "C48 |]"


def test_staff_lines_interleave () -> None:

	"""Each block writes the top line before the bottom line."""

	markup = sightread.abc_notation.encode(_run(20, 12), _run(5, 48))
	voices = [line for line in markup.splitlines() if line.startswith("V:")]

	assert voices == ["V:1", "V:2", "V:1", "V:2"]


def test_exhausted_staff_is_left_out () -> None:

	"""A staff with fewer lines stops appearing once it has finished."""

	markup = sightread.abc_notation.encode(_run(20, 12), [_chord("C,:48", 48)])
	voices = [line for line in markup.splitlines() if line.startswith("V:")]

	assert voices == ["V:1", "V:2", "V:1"]
	assert "C,48 |]" in markup


def test_key_and_title_in_header () -> None:

	markup = sightread.abc_notation.encode(_run(1, 48), _run(1, 48), key="Bb", title="Drill")

	assert markup.startswith("T:Drill\nM:4/4\nL:1/48\nK:Bb\n")
	assert "[K:Bb clef=treble]" in markup
	assert "[K:Bb clef=bass]" in markup


def test_three_four_meter () -> None:

	"""Measures close after three quarter notes in 3/4."""

	markup = sightread.abc_notation.encode(_run(6, 12), _run(2, 36), meter="3/4")

	assert "M:3/4\n" in markup
	assert "C12 C12 C12 |C12 C12 C12 |]" in markup


def test_meter_parsing () -> None:

	meter = sightread.meter.Meter.parse("6/8")

	assert meter.beat_units == 6
	assert meter.measure_units == 36
	assert str(meter) == "6/8"

	with pytest.raises(ValueError):
		sightread.meter.Meter.parse("4")


def _music_lines (markup: str, clef: str) -> typing.List[str]:

	"""The lines written under one staff's clef declarations, in order."""

	lines = markup.splitlines()

	return [lines[i + 1] for i, line in enumerate(lines) if line.endswith(f"clef={clef}]")]


def test_long_final_chord_is_padded_with_rests () -> None:

	"""A chord running past its measure is cut at the barline and padded with rests."""

	markup = sightread.abc_notation.encode(_run(5, 12), [_chord("F,:53", 60)])

	assert _music_lines(markup, "treble") == ["C12 C12 C12 C12 |C12 |]"]
	assert _music_lines(markup, "bass") == ["F,48 |z12 |]"]


def test_dotted_final_chord_is_one_note () -> None:

	"""Three quarters over a lengthened half: the bass is one dotted half."""

	markup = sightread.abc_notation.encode(_run(3, 12), [_chord("C,:48", 36)])

	assert _music_lines(markup, "bass") == ["C,36 |]"]


def test_unwritable_length_is_split () -> None:

	"""Thirty units is a half note followed by an eighth rest."""

	markup = sightread.abc_notation.encode(_run(5, 6), [_chord("C,:48", 30)])

	assert _music_lines(markup, "treble") == ["C6C6 C6C6 C6|]"]
	assert _music_lines(markup, "bass") == ["C,24 z6|]"]


def test_generated_staves_share_barlines () -> None:

	"""Generated phrases keep both staves' measures aligned line by line."""

	rng = random.Random(2024)
	generator = sightread.generator.ChordGenerator(random.Random(7))
	note_pattern = re.compile(r"(?:\[[^\]]+\]|[\^_=]*[A-Ga-g][,']*)\d+")

	for _ in range(100):

		meter = rng.choice(["4/4", "3/4", "2/4", "6/8"])
		measure = sightread.meter.Meter.parse(meter).measure_units
		durations = [d for d in (6, 12, 24, 48) if measure % d == 0]

		config = sightread.config.GenerationConfig(
			meter = meter,
			harmony = rng.random() < 0.5,
			top = sightread.config.StaffConfig(0, 11, rng.randint(1, 12), rng.choice(durations)),
			bottom = sightread.config.StaffConfig(-11, 0, rng.randint(1, 12), rng.choice(durations))
		)

		top, bottom = generator.generate(config)
		markup = sightread.abc_notation.encode(top, bottom, meter=meter)

		top_lines = _music_lines(markup, "treble")
		bottom_lines = _music_lines(markup, "bass")

		assert len(top_lines) == len(bottom_lines)
		assert [line.count("|") for line in top_lines] == [line.count("|") for line in bottom_lines]

		# One note token per chord; padding is rests only.
		assert len(note_pattern.findall(" ".join(top_lines))) == len(top)
		assert len(note_pattern.findall(" ".join(bottom_lines))) == len(bottom)

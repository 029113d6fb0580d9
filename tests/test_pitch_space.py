import pytest

import sightread.constants
import sightread.errors
import sightread.pitch_space


Pitch = sightread.pitch_space.Pitch


def test_c_major_reference_is_middle_c () -> None:

	"""Index 0 in C is middle C, spelled without octave marks."""

	assert sightread.pitch_space.pitch_at(0, "C") == Pitch(name="C", midi=60)


@pytest.mark.parametrize("index, name, midi", [
	(1, "D", 62),
	(6, "B", 71),
	(7, "c", 72),
	(14, "c'", 84),
	(-1, "B,", 59),
	(-7, "C,", 48),
	(-8, "B,,", 47),
])
def test_c_major_octaves (index: int, name: str, midi: int) -> None:

	"""ABC octave marks follow the letter's octave."""

	assert sightread.pitch_space.pitch_at(index, "C") == Pitch(name=name, midi=midi)


def test_tonic_nearest_middle_c () -> None:

	"""Tonics resolve to the octave nearest C4; a tritone away goes up."""

	assert sightread.pitch_space.parse_key("G").tonic_midi == 55
	assert sightread.pitch_space.parse_key("F").tonic_midi == 65
	assert sightread.pitch_space.parse_key("F#").tonic_midi == 66
	assert sightread.pitch_space.parse_key("Bb").tonic_midi == 58


def test_sharp_key_uses_key_signature () -> None:

	"""G major's seventh degree sounds F# but is spelled F."""

	assert sightread.pitch_space.pitch_at(0, "G") == Pitch(name="G,", midi=55)
	assert sightread.pitch_space.pitch_at(6, "G") == Pitch(name="F", midi=66)


def test_letter_follows_tonic_letter () -> None:

	"""F# major's seventh degree is E#, spelled E."""

	assert sightread.pitch_space.pitch_at(6, "F#") == Pitch(name="e", midi=77)


def test_flat_tonic_octave () -> None:

	"""Cb4 is MIDI 59 but sits in octave 4."""

	assert sightread.pitch_space.pitch_at(0, "Cb") == Pitch(name="C", midi=59)
	assert sightread.pitch_space.pitch_at(0, "Bb") == Pitch(name="B,", midi=58)


def test_minor_key () -> None:

	"""Minor keys use the natural minor scale from their own tonic."""

	key = sightread.pitch_space.parse_key("Am")

	assert key.mode == "minor"
	assert key.tonic == "A"
	assert sightread.pitch_space.pitch_at(0, key) == Pitch(name="A,", midi=57)
	assert sightread.pitch_space.pitch_at(2, key) == Pitch(name="C", midi=60)
	assert sightread.pitch_space.pitch_at(5, key) == Pitch(name="F", midi=65)


@pytest.mark.parametrize("key_name", ["H", "", "m", "C##", "Cmaj"])
def test_unknown_key_raises (key_name: str) -> None:

	"""Unrecognised key names are configuration errors."""

	with pytest.raises(sightread.errors.ConfigurationError):
		sightread.pitch_space.parse_key(key_name)


def test_index_outside_caps_raises () -> None:

	"""Indices beyond the absolute caps fail loudly instead of clamping."""

	with pytest.raises(ValueError):
		sightread.pitch_space.pitch_at(sightread.constants.INDEX_ABSOLUTE_MAX + 1, "C")

	with pytest.raises(ValueError):
		sightread.pitch_space.pitch_at(sightread.constants.INDEX_ABSOLUTE_MIN - 1, "C")


@pytest.mark.parametrize("key_name", sorted(sightread.pitch_space.NOTE_NAME_TO_PC) + ["Am", "C#m", "Ebm"])
def test_pitches_rise_with_index (key_name: str) -> None:

	"""Every key is total over the cap range and strictly ascending."""

	indices = range(sightread.constants.INDEX_ABSOLUTE_MIN, sightread.constants.INDEX_ABSOLUTE_MAX + 1)
	midis = [sightread.pitch_space.pitch_at(i, key_name).midi for i in indices]

	assert all(a < b for a, b in zip(midis, midis[1:]))
	assert all(0 <= m <= 127 for m in midis)

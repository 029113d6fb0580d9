import random
import typing

import mido
import pytest

import sightread.config
import sightread.constants


class FakeMidiIn:

	"""Minimal MIDI input stub for tests."""

	def __init__ (self, name: str, callback: typing.Optional[typing.Callable] = None) -> None:

		"""Store the callback for injecting test messages."""

		self.name = name
		self.callback = callback
		self.closed = False

	def close (self) -> None:

		"""Mark the fake port closed."""

		self.closed = True

	def inject (self, message: mido.Message) -> None:

		"""Simulate receiving a MIDI message by calling the stored callback."""

		if self.callback is not None:
			self.callback(message)


FAKE_INPUT_NAMES = ["Dummy MIDI", "Second Keyboard"]


def _fake_get_input_names () -> typing.List[str]:

	"""Return a fixed list of MIDI input names for tests."""

	return list(FAKE_INPUT_NAMES)


def _fake_open_input (name: str, callback: typing.Optional[typing.Callable] = None) -> FakeMidiIn:

	"""Return a fake MIDI input regardless of the name."""

	return FakeMidiIn(name, callback=callback)


@pytest.fixture
def patch_midi (monkeypatch: pytest.MonkeyPatch) -> None:

	"""Patch mido to use fake MIDI inputs for all tests that need it."""

	monkeypatch.setattr(mido, "get_input_names", _fake_get_input_names)
	monkeypatch.setattr(mido, "open_input", _fake_open_input)


@pytest.fixture
def rng () -> random.Random:

	"""Seeded random source for repeatable phrases."""

	return random.Random(42)


@pytest.fixture
def scenario_config () -> sightread.config.GenerationConfig:

	"""Three quarter notes over one half note in C."""

	return sightread.config.GenerationConfig(
		key = "C",
		top = sightread.config.StaffConfig(min_index=0, max_index=11, note_count=3, duration=sightread.constants.QUARTER),
		bottom = sightread.config.StaffConfig(min_index=-11, max_index=0, note_count=1, duration=sightread.constants.HALF)
	)

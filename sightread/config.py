"""Generation configuration and YAML loading.

A :class:`GenerationConfig` is everything the generator needs to draw one
phrase.  :meth:`GenerationConfig.validated` checks it against the hard caps
and returns a copy whose note counts have been clamped to what each staff's
index range can hold.
"""

import dataclasses
import logging
import os
import typing

import yaml

import sightread.constants
import sightread.errors
import sightread.meter
import sightread.pitch_space


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class StaffConfig:

	"""
	Index range, chord count and note value for one staff.

	``min_index`` and ``max_index`` are inclusive staff indices (see
	:func:`sightread.pitch_space.pitch_at`).  ``duration`` is in units of
	1/48 of a whole note.
	"""

	min_index: int
	max_index: int
	note_count: int
	duration: int


DEFAULT_TOP = StaffConfig(min_index=0, max_index=11, note_count=3, duration=sightread.constants.QUARTER)
DEFAULT_BOTTOM = StaffConfig(min_index=-11, max_index=0, note_count=1, duration=sightread.constants.HALF)

STAFF_CAPS: typing.Dict[str, typing.Tuple[int, int]] = {
	"top": (sightread.constants.INDEX_TOP_MIN_CAP, sightread.constants.INDEX_TOP_MAX_CAP),
	"bottom": (sightread.constants.INDEX_BOTTOM_MIN_CAP, sightread.constants.INDEX_BOTTOM_MAX_CAP),
}


def _validate_staff (staff_name: str, staff: StaffConfig, meter: sightread.meter.Meter) -> StaffConfig:

	"""Check one staff against its caps and meter, and clamp its note count."""

	min_cap, max_cap = STAFF_CAPS[staff_name]

	if staff.min_index < min_cap or staff.max_index > max_cap:
		raise sightread.errors.ConfigurationError(
			f"{staff_name} staff range [{staff.min_index}, {staff.max_index}] "
			f"exceeds caps [{min_cap}, {max_cap}]"
		)

	if staff.min_index > staff.max_index:
		raise sightread.errors.ConfigurationError(
			f"{staff_name} staff min_index {staff.min_index} is above max_index {staff.max_index}"
		)

	if staff.note_count < 1:
		raise sightread.errors.ConfigurationError(
			f"{staff_name} staff note_count must be at least 1, got {staff.note_count}"
		)

	if staff.duration not in sightread.constants.DURATIONS.values():
		raise sightread.errors.ConfigurationError(
			f"{staff_name} staff duration {staff.duration} is not one of "
			f"{sorted(sightread.constants.DURATIONS.values())}"
		)

	# Chords must not straddle a barline.
	if meter.measure_units % staff.duration:
		raise sightread.errors.ConfigurationError(
			f"{staff_name} staff duration {staff.duration} does not divide a {meter} measure"
		)

	# Each chord needs its own root index.
	available = staff.max_index - staff.min_index + 1

	if staff.note_count > available:
		logger.debug(f"Clamping {staff_name} note_count {staff.note_count} to {available}")
		return dataclasses.replace(staff, note_count=available)

	return staff


@dataclasses.dataclass(frozen=True)
class GenerationConfig:

	"""
	Key, harmony flags and per-staff settings for one phrase.

	``reset_harmony`` clears the generator's harmony memory before drawing.
	"""

	key: str = "C"
	harmony: bool = False
	reset_harmony: bool = True
	top: StaffConfig = DEFAULT_TOP
	bottom: StaffConfig = DEFAULT_BOTTOM
	meter: str = sightread.constants.METER
	midi_channel: int = 0


	def validated (self) -> "GenerationConfig":

		"""Return a checked copy with clamped note counts.

		Raises:
			ConfigurationError: For an unknown key or meter, a range
				above its caps, ``min_index > max_index``, a note count
				below 1, or a duration that is unsupported or does not
				divide the measure.
		"""

		sightread.pitch_space.parse_key(self.key)

		try:
			meter = sightread.meter.Meter.parse(self.meter)

		except ValueError as e:
			raise sightread.errors.ConfigurationError(str(e)) from e

		if not 0 <= self.midi_channel <= 15:
			raise sightread.errors.ConfigurationError(f"MIDI channel must be 0-15, got {self.midi_channel}")

		return dataclasses.replace(
			self,
			top = _validate_staff("top", self.top, meter),
			bottom = _validate_staff("bottom", self.bottom, meter)
		)


def _as_int (value: typing.Any, field: str) -> int:

	if isinstance(value, bool):
		raise sightread.errors.ConfigurationError(f"{field} must be an integer, got {value!r}")

	try:
		return int(value)

	except (TypeError, ValueError) as e:
		raise sightread.errors.ConfigurationError(f"{field} must be an integer, got {value!r}") from e


def _as_bool (value: typing.Any, field: str) -> bool:

	if not isinstance(value, bool):
		raise sightread.errors.ConfigurationError(f"{field} must be true or false, got {value!r}")

	return value


def _section (data: typing.Dict[str, typing.Any], field: str) -> typing.Dict[str, typing.Any]:

	"""Return a nested mapping, treating a missing or empty one as ``{}``."""

	section = data.get(field)

	if section is None:
		return {}

	if not isinstance(section, dict):
		raise sightread.errors.ConfigurationError(f"{field} must be a mapping, got {section!r}")

	return section


def parse_duration (value: typing.Union[str, int]) -> int:

	"""Accept a note value name (``"quarter"``) or a unit count (``12``)."""

	if isinstance(value, str):

		name = value.strip().lower()

		if name not in sightread.constants.DURATIONS:
			raise sightread.errors.ConfigurationError(
				f"Unknown duration {value!r}. Available: {sorted(sightread.constants.DURATIONS)}"
			)

		return sightread.constants.DURATIONS[name]

	return _as_int(value, "duration")


def _staff_from_dict (data: typing.Dict[str, typing.Any], default: StaffConfig, staff_name: str) -> StaffConfig:

	return StaffConfig(
		min_index = _as_int(data.get("min_index", default.min_index), f"staves.{staff_name}.min_index"),
		max_index = _as_int(data.get("max_index", default.max_index), f"staves.{staff_name}.max_index"),
		note_count = _as_int(data.get("note_count", default.note_count), f"staves.{staff_name}.note_count"),
		duration = parse_duration(data.get("duration", default.duration))
	)


def config_from_dict (data: typing.Dict[str, typing.Any]) -> GenerationConfig:

	"""
	Build a config from the mapping layout used by the YAML file.

	Raises:
		ConfigurationError: If a value has the wrong type.
	"""

	staves = _section(data, "staves")
	midi = _section(data, "midi")

	return GenerationConfig(
		key = str(data.get("key", "C")),
		harmony = _as_bool(data.get("harmony", False), "harmony"),
		reset_harmony = _as_bool(data.get("reset_harmony", True), "reset_harmony"),
		top = _staff_from_dict(_section(staves, "top"), DEFAULT_TOP, "top"),
		bottom = _staff_from_dict(_section(staves, "bottom"), DEFAULT_BOTTOM, "bottom"),
		meter = str(data.get("meter", sightread.constants.METER)),
		midi_channel = _as_int(midi.get("channel", 0), "midi.channel")
	)


def load_config (config_path: str = "sightread.yaml") -> GenerationConfig:

	"""
	Load a generation config from a YAML file, falling back to defaults.

	Raises:
		ConfigurationError: If the file is not valid YAML or its values do not
			fit the config layout.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return GenerationConfig()

	try:
		with open(config_path, "r") as f:
			data = yaml.safe_load(f) or {}

	except yaml.YAMLError as e:
		raise sightread.errors.ConfigurationError(f"Config file {config_path} is not valid YAML: {e}") from e

	if not isinstance(data, dict):
		raise sightread.errors.ConfigurationError(f"Config file {config_path} must contain a mapping")

	return config_from_dict(data)

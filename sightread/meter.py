import dataclasses

import sightread.constants


@dataclasses.dataclass(frozen=True)
class Meter:

	"""
	A time signature expressed in timing units.
	"""

	beats: int
	beat_value: int


	@classmethod
	def parse (cls, text: str) -> "Meter":

		"""Parse ``"4/4"`` style text.

		Raises:
			ValueError: If the text is not ``<beats>/<beat_value>`` or the beat
				value does not divide the time base.
		"""

		try:
			beats_text, value_text = text.split("/")
			beats, beat_value = int(beats_text), int(value_text)

		except ValueError as e:
			raise ValueError(f"Invalid meter {text!r}, expected e.g. '4/4'") from e

		if beats < 1 or beat_value < 1 or sightread.constants.BASE_DURATION % beat_value:
			raise ValueError(f"Unsupported meter {text!r}")

		return cls(beats=beats, beat_value=beat_value)


	@property
	def beat_units (self) -> int:

		"""Units in one beat."""

		return sightread.constants.BASE_DURATION // self.beat_value


	@property
	def measure_units (self) -> int:

		"""Units in one full measure."""

		return self.beat_units * self.beats


	def __str__ (self) -> str:

		return f"{self.beats}/{self.beat_value}"

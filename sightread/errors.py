class ConfigurationError (ValueError):

	"""
	Raised when a generation config cannot produce a valid phrase.
	"""

	pass


class IntegrityViolation (RuntimeError):

	"""
	Raised when generated, encoded or rendered data disagree with each other.

	This always points at a bug upstream of the matcher, so it is never
	swallowed.
	"""

	pass

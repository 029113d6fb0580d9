import typing


CallbackType = typing.Callable[..., typing.Any]

# Signals emitted by PracticeSession.
ADVANCE = "advance"
RETREAT = "retreat"
WRONG = "wrong"
COMPLETE = "complete"
REGENERATE = "regenerate"

SIGNALS = (ADVANCE, RETREAT, WRONG, COMPLETE, REGENERATE)


class EventEmitter:

	"""
	Synchronous signal delivery from a session to the UI layer.
	"""

	def __init__ (self) -> None:

		self._listeners: typing.Dict[str, typing.List[CallbackType]] = {}


	def on (self, event_name: str, callback: CallbackType) -> None:

		"""
		Register a callback for an event name.

		Raises ``ValueError`` for a name that is not one of :data:`SIGNALS`.
		"""

		if event_name not in SIGNALS:
			raise ValueError(f"Unknown signal {event_name!r}. Available: {list(SIGNALS)}")

		self._listeners.setdefault(event_name, []).append(callback)


	def off (self, event_name: str, callback: CallbackType) -> None:

		"""
		Unregister a previously registered callback.

		Raises ``ValueError`` if the callback is not registered for the event.
		"""

		if event_name not in self._listeners or callback not in self._listeners[event_name]:
			raise ValueError(f"Callback not registered for event {event_name!r}")

		self._listeners[event_name].remove(callback)


	def emit (self, event_name: str, *args: typing.Any, **kwargs: typing.Any) -> None:

		"""
		Call every listener for an event in registration order.
		"""

		for callback in list(self._listeners.get(event_name, [])):
			callback(*args, **kwargs)

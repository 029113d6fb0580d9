import argparse
import logging
import queue
import random
import sys
import typing

import mido

import sightread.config
import sightread.errors
import sightread.event_emitter
import sightread.midi_input
import sightread.session


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _print_phrase (phrase: sightread.session.Phrase) -> None:

	"""Show a new phrase's ABC markup on stdout."""

	print()
	print(phrase.markup)


def run (session: sightread.session.PracticeSession, inbox: "queue.Queue[mido.Message]") -> None:

	"""
	Apply queued MIDI messages to the session until interrupted.
	"""

	while True:

		try:
			message = inbox.get(timeout=0.5)
		except queue.Empty:
			continue

		session.handle_midi(message)


def main (argv: typing.Optional[typing.List[str]] = None) -> None:

	"""
	Main entry point for the sight-reading trainer.
	"""

	parser = argparse.ArgumentParser(description="Sight-reading trainer for a MIDI keyboard")
	parser.add_argument("--config", default="sightread.yaml", help="YAML config file (default: sightread.yaml)")
	parser.add_argument("--seed", type=int, default=None, help="Seed for repeatable phrases")
	parser.add_argument("--input", action="append", dest="inputs", help="MIDI input name (repeatable, default: all)")
	parser.add_argument("--list-inputs", action="store_true", help="List MIDI inputs and exit")
	args = parser.parse_args(argv)

	if args.list_inputs:
		for name in sightread.midi_input.list_input_names():
			print(name)
		return

	try:
		config = sightread.config.load_config(args.config)
		rng = random.Random(args.seed) if args.seed is not None else None
		session = sightread.session.PracticeSession(config, rng=rng)
	except sightread.errors.ConfigurationError as e:
		logger.error(f"Invalid configuration: {e}")
		sys.exit(1)

	session.events.on(sightread.event_emitter.REGENERATE, _print_phrase)
	session.events.on(sightread.event_emitter.ADVANCE, lambda cursor: logger.info(f"Next chord at {cursor}: {sorted(session.expected)}"))
	session.events.on(sightread.event_emitter.WRONG, lambda played, expected: logger.info(f"Wrong: played {sorted(played)}, expected {sorted(expected)}"))

	_print_phrase(session.phrase)
	logger.info(f"First chord: {sorted(session.expected)}")

	# Input callbacks arrive on mido's thread; the session is only touched here.
	inbox: "queue.Queue[mido.Message]" = queue.Queue()
	ports = sightread.midi_input.open_all_inputs(inbox.put, args.inputs)

	if not ports:
		sys.exit(1)

	logger.info("Play the highlighted chords. Press Ctrl+C to stop.")

	try:
		run(session, inbox)
	except KeyboardInterrupt:
		logger.info("Stopping...")
	finally:
		sightread.midi_input.close_all(ports)


if __name__ == "__main__":
	main()

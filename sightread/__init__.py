"""
sightread - a sight-reading trainer engine for MIDI keyboards.

It generates short two-staff phrases with constrained randomness, writes
them as ABC notation for a renderer such as abcjs, and follows a player's
live MIDI input through the phrase one chord at a time.

Pieces, leaf first:

- **Pitch space.** ``pitch_space.pitch_at(index, key)`` maps a diatonic
  staff index to an ABC pitch name and MIDI number in any major or
  natural-minor key.
- **Generation.** ``generator.ChordGenerator`` draws distinct chord roots
  per staff, stacks harmony shapes when enabled, and keeps both staves the
  same total length.
- **Notation.** ``abc_notation.encode()`` writes a grand-staff ABC tune,
  four measures per line, with beat spacing and a final barline.
- **Timing.** ``timing.build()`` lays both staves onto one table of
  expected pitch sets, one slot per 1/48 note.
- **Cursor and matching.** ``cursor.CursorController`` walks the non-empty
  slots; ``matcher.evaluate()`` compares held keys with the slot at the
  cursor, in any order.
- **Session.** ``session.PracticeSession`` ties it together, handles raw
  MIDI bytes from every connected keyboard, and regenerates a fresh phrase
  when the last chord is played.

Minimal example:

```python
import sightread

session = sightread.PracticeSession(sightread.GenerationConfig(key="G", harmony=True))
print(session.markup)

session.events.on("advance", lambda cursor: print("next:", sorted(session.expected)))

for pitch in sorted(session.expected):
	session.handle_midi([0x90, pitch, 100])
```

Run ``python -m sightread`` to practise from the terminal with every
available MIDI input.

Package-level exports: ``PracticeSession``, ``Phrase``, ``GenerationConfig``,
``StaffConfig``, ``load_config``, ``MatchResult``, ``ConfigurationError``,
``IntegrityViolation``.
"""

import sightread.config
import sightread.errors
import sightread.matcher
import sightread.session


GenerationConfig = sightread.config.GenerationConfig
StaffConfig = sightread.config.StaffConfig
load_config = sightread.config.load_config
ConfigurationError = sightread.errors.ConfigurationError
IntegrityViolation = sightread.errors.IntegrityViolation
MatchResult = sightread.matcher.MatchResult
PracticeSession = sightread.session.PracticeSession
Phrase = sightread.session.Phrase

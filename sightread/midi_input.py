import logging
import typing

import mido

logger = logging.getLogger(__name__)


def list_input_names() -> typing.List[str]:
    """Return the names of the available MIDI input ports."""
    try:
        return list(mido.get_input_names())
    except Exception as e:
        logger.error(f"Failed to list MIDI inputs: {e}")
        return []


def open_all_inputs(callback: typing.Callable[[mido.Message], None], device_names: typing.Optional[typing.Sequence[str]] = None) -> typing.List[typing.Any]:
    """
    Open MIDI input ports that all deliver to the same callback.

    Every port feeds one merged event stream; the trainer does not care which
    keyboard a note came from.  If `device_names` is None, every available
    input is opened.  Names that are not found are logged and skipped.

    The callback runs on mido's input thread, so callers that share state with
    the main thread should hand messages over through a queue.

    Returns:
        The opened port objects (possibly empty). Close them with `close_all`.
    """
    available = list_input_names()
    logger.info(f"Available MIDI inputs: {available}")

    if device_names is None:
        targets = available
    else:
        targets = []
        for name in device_names:
            if name in available:
                targets.append(name)
            else:
                logger.warning(f"MIDI input device '{name}' not found.")

    if not targets:
        logger.error("No MIDI input devices found.")
        return []

    ports = []
    for name in targets:
        try:
            ports.append(mido.open_input(name, callback=callback))
            logger.info(f"Opened MIDI input: {name}")
        except Exception as e:
            logger.error(f"Failed to open MIDI input '{name}': {e}")

    return ports


def close_all(ports: typing.Iterable[typing.Any]) -> None:
    """Close every port returned by `open_all_inputs`."""
    for port in ports:
        port.close()

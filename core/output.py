# =============================================================================
# core/output.py  —  Where the itinerary ends up
# =============================================================================
#
# Two destinations: the terminal and a single text file.
#
#   - While streaming, each fragment is printed the moment it arrives
#     (echo_fragment), so the user watches the plan being written.
#   - Once generation has finished successfully, the full text overwrites the
#     output file (no header, no footer) and a confirmation line is printed.
#
# The file is never opened before generation succeeds: a failed or
# unconfigured run leaves any previous output.txt exactly as it was.
# =============================================================================

import logging
from pathlib import Path
from typing import Union

from core.models import GeneratedItinerary

logger = logging.getLogger(__name__)


def echo_fragment(fragment: str) -> None:
    print(fragment, end="", flush=True)


def write_itinerary(itinerary: GeneratedItinerary, path: Union[str, Path]) -> Path:
    """Overwrite `path` with exactly the itinerary text."""
    path = Path(path)
    if path.parent != Path("."):
        path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(itinerary.text, encoding="utf-8")
    logger.info(f"Wrote {len(itinerary.text)} characters to {path}")
    return path


def deliver(itinerary: GeneratedItinerary, path: Union[str, Path], echoed: bool = False) -> Path:
    """Write the file, show the text (unless it was already streamed), confirm.

    Args:
        itinerary: The finished generation.
        path: Output file, overwritten.
        echoed: True when the fragments were already printed while streaming.
    """
    written = write_itinerary(itinerary, path)
    if echoed:
        print()
    else:
        print(itinerary.text)
    print(f"\nItinerary also written to {written}")
    return written

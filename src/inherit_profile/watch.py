"""Re-run inheritance when the editor switches profiles.

The editor records the active profile in its global storage file. Watching
is plain polling of that file through the profile registry, so it works the
same on every platform.
"""

import logging
import time
from collections.abc import Callable

from .protocols import ProfileRegistryProtocol

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 2.0


def watch_profile_changes(
    registry: ProfileRegistryProtocol,
    on_change: Callable[[str], None],
    interval: float = DEFAULT_INTERVAL,
    max_polls: int | None = None,
    sleep_fn: Callable[[float], None] = time.sleep,
) -> int:
    """
    Call ``on_change`` whenever the current profile changes.

    The profile current at start-up is the baseline and does not trigger a
    call. Errors raised by ``on_change`` propagate.

    Args:
        registry: Profile registry to poll
        on_change: Callback receiving the new current profile name
        interval: Seconds between polls
        max_polls: Stop after this many polls; poll forever when None
        sleep_fn: Sleep function

    Returns:
        Number of profile changes handled
    """
    current = registry.current_profile_name()
    logger.info("Watching for profile changes (current profile '%s')", current)

    changes = 0
    polls = 0
    while max_polls is None or polls < max_polls:
        sleep_fn(interval)
        polls += 1

        name = registry.current_profile_name()
        if name == current:
            continue

        logger.info("Current profile has changed from '%s' to '%s'; updating inherited settings", current, name)
        current = name
        on_change(name)
        changes += 1

    return changes
